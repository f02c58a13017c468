from datetime import datetime
from decimal import Decimal
from typing import Annotated
from pydantic import Field, field_validator

from ..localtime import to_local
from .base import ApiModel
from .category import CategoryResponse

# numeric(10, 2)
Amount = Annotated[Decimal, Field(max_digits=10, decimal_places=2)]


class ExpenseBase(ApiModel):
    """Base expense fields."""
    amount: Amount
    category_id: int
    merchant: str | None = None
    description: str | None = None
    date: datetime
    receipt_url: str | None = None
    notes: str | None = None
    source: str = "manual"

    @field_validator("date")
    @classmethod
    def _date_to_local(cls, value: datetime) -> datetime:
        return to_local(value)


class ExpenseCreate(ExpenseBase):
    """Fields for creating an expense. The owner comes from the server."""
    pass


class ExpenseUpdate(ApiModel):
    """Fields for updating an expense (all optional)."""
    amount: Amount | None = None
    category_id: int | None = None
    merchant: str | None = None
    description: str | None = None
    date: datetime | None = None
    receipt_url: str | None = None
    notes: str | None = None
    source: str | None = None

    @field_validator("date")
    @classmethod
    def _date_to_local(cls, value: datetime | None) -> datetime | None:
        return to_local(value) if value is not None else None


class ExpenseResponse(ExpenseBase):
    """Stored expense with all fields."""
    id: int
    user_id: int
    created_at: datetime


class ExpenseWithCategory(ExpenseResponse):
    """Expense joined with its category."""
    category: CategoryResponse
