from .category import CategoryResponse
from .expense import (
    ExpenseCreate,
    ExpenseUpdate,
    ExpenseResponse,
    ExpenseWithCategory,
)
from .analytics import CategoryTotalResponse, SummaryResponse, DeleteResponse

__all__ = [
    "CategoryResponse",
    "ExpenseCreate",
    "ExpenseUpdate",
    "ExpenseResponse",
    "ExpenseWithCategory",
    "CategoryTotalResponse",
    "SummaryResponse",
    "DeleteResponse",
]
