from .base import Base
from .category import Category
from .expense import Expense

__all__ = [
    "Base",
    "Category",
    "Expense",
]
