from datetime import datetime

from .base import ApiModel


class CategoryTotalResponse(ApiModel):
    category_id: int
    category_name: str
    total: float
    color: str
    icon: str


class SummaryResponse(ApiModel):
    """
    Spending summary for one window compared with the window before it.

    Period mode fills ``period`` and ``date``; month mode fills ``month`` and
    ``year``. Unused identifiers are left out of the response.
    """
    total: float
    expense_count: int
    change_percent: float
    previous_total: float
    budget: float
    period: str | None = None
    date: datetime | None = None
    month: int | None = None
    year: int | None = None


class DeleteResponse(ApiModel):
    success: bool
