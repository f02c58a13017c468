from decimal import Decimal
from typing import Protocol

from ..schemas import (
    CategoryResponse,
    ExpenseCreate,
    ExpenseUpdate,
    ExpenseResponse,
    ExpenseWithCategory,
)
from ..services.periods import Window


class CategoryNotFoundError(LookupError):
    """Raised when an expense references a category that does not exist."""

    def __init__(self, category_id: int):
        super().__init__(f"Category not found: {category_id}")
        self.category_id = category_id


def format_amount(amount: Decimal) -> str:
    """Render an amount the way it is persisted: two fractional digits."""
    return format(amount.quantize(Decimal("0.01")), "f")


class ExpenseStore(Protocol):
    """
    Storage capability used by the aggregation service and the API.

    Implementations must return ``list_expenses`` results ordered by date,
    most recent first, with ties broken by id (highest first). A missing
    expense is reported as ``None``/``False``, never as an exception.
    """

    def list_categories(self) -> list[CategoryResponse]:
        ...

    def get_category(self, category_id: int) -> CategoryResponse | None:
        ...

    def list_expenses(
        self, user_id: int, window: Window | None = None
    ) -> list[ExpenseWithCategory]:
        """Expenses of a user, optionally restricted to a window."""
        ...

    def get_expense(self, expense_id: int) -> ExpenseWithCategory | None:
        ...

    def create_expense(self, user_id: int, data: ExpenseCreate) -> ExpenseResponse:
        ...

    def update_expense(
        self, expense_id: int, data: ExpenseUpdate
    ) -> ExpenseResponse | None:
        """Apply the fields set on ``data``. Returns None if the id is unknown."""
        ...

    def delete_expense(self, expense_id: int) -> bool:
        """Hard delete. Returns False if the id is unknown."""
        ...


# Columns that cannot be cleared by an update
_REQUIRED_FIELDS = {"amount", "category_id", "date", "source"}


def changed_fields(data: ExpenseUpdate) -> dict:
    """Fields explicitly set on an update, with the amount normalized."""
    changes = {
        field: value
        for field, value in data.model_dump(exclude_unset=True).items()
        if value is not None or field not in _REQUIRED_FIELDS
    }
    if "amount" in changes:
        changes["amount"] = Decimal(format_amount(changes["amount"]))
    return changes
