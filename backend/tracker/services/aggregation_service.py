from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import TYPE_CHECKING

from ..localtime import to_local, local_now
from ..schemas import ExpenseWithCategory
from .periods import (
    Period,
    Window,
    month_window,
    parse_period,
    previous_month,
    previous_window,
    resolve_window,
)

if TYPE_CHECKING:
    from ..storage import ExpenseStore

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
_CENTS = Decimal("0.01")


@dataclass
class CategoryTotal:
    """Sum of one category's expenses within a window."""
    category_id: int
    category_name: str
    total: Decimal
    color: str
    icon: str


@dataclass
class PeriodSummary:
    """Totals for a window compared with the window before it."""
    total: Decimal
    expense_count: int
    previous_total: Decimal
    change_percent: Decimal
    budget: Decimal
    window: Window
    period: Period | None = None
    date: datetime | None = None
    month: int | None = None
    year: int | None = None


def sum_amounts(expenses: list[ExpenseWithCategory]) -> Decimal:
    return sum((e.amount for e in expenses), ZERO)


def change_percent(current: Decimal, previous: Decimal) -> Decimal:
    """
    Percent change from ``previous`` to ``current``, rounded half-up to 2 places.

    Returns 0 when there is nothing to compare against.
    """
    if previous <= 0:
        return ZERO
    change = (current - previous) / previous * 100
    return change.quantize(_CENTS, rounding=ROUND_HALF_UP)


class AggregationService:
    """
    Read-only aggregations over an expense store.

    Every call queries the store afresh; nothing is cached between calls.
    """

    def __init__(self, store: ExpenseStore, budget: Decimal | int = 0):
        self.store = store
        self.budget = Decimal(budget)

    def expenses_for_window(
        self, user_id: int, window: Window
    ) -> list[ExpenseWithCategory]:
        """Expenses dated inside the window, most recent first."""
        return self.store.list_expenses(user_id, window)

    def list_expenses(
        self, user_id: int, year: int | None = None, month: int | None = None
    ) -> list[ExpenseWithCategory]:
        """All of a user's expenses, or one month of them when year and month are given."""
        if year is not None and month is not None:
            return self.expenses_for_window(user_id, month_window(year, month))
        return self.store.list_expenses(user_id)

    def category_totals(self, user_id: int, window: Window) -> list[CategoryTotal]:
        """
        Per-category sums for a window, largest first.

        Categories without expenses in the window are left out. Equal totals
        are ordered by category id.
        """
        totals: dict[int, CategoryTotal] = {}

        for expense in self.expenses_for_window(user_id, window):
            entry = totals.get(expense.category_id)
            if entry is None:
                entry = CategoryTotal(
                    category_id=expense.category_id,
                    category_name=expense.category.name,
                    total=ZERO,
                    color=expense.category.color,
                    icon=expense.category.icon,
                )
                totals[expense.category_id] = entry
            entry.total += expense.amount

        return sorted(totals.values(), key=lambda t: (-t.total, t.category_id))

    def category_totals_for_month(
        self, user_id: int, year: int, month: int
    ) -> list[CategoryTotal]:
        return self.category_totals(user_id, month_window(year, month))

    def category_totals_for_period(
        self, user_id: int, period: Period | str, reference: datetime | None = None
    ) -> list[CategoryTotal]:
        return self.category_totals(user_id, resolve_window(period, reference))

    def _compare(
        self, user_id: int, current: Window, previous: Window
    ) -> tuple[list[ExpenseWithCategory], Decimal, Decimal]:
        expenses = self.expenses_for_window(user_id, current)
        total = sum_amounts(expenses)
        previous_total = sum_amounts(self.expenses_for_window(user_id, previous))
        logger.debug(
            "Window %s..%s total=%s previous=%s",
            current.start, current.end, total, previous_total,
        )
        return expenses, total, previous_total

    def period_summary(
        self, user_id: int, period: Period | str, reference: datetime | None = None
    ) -> PeriodSummary:
        """Summary of the period containing ``reference`` against the one before it."""
        period = parse_period(period)
        reference = to_local(reference) if reference is not None else local_now()

        window = resolve_window(period, reference)
        expenses, total, previous_total = self._compare(
            user_id, window, previous_window(period, reference)
        )

        return PeriodSummary(
            total=total,
            expense_count=len(expenses),
            previous_total=previous_total,
            change_percent=change_percent(total, previous_total),
            budget=self.budget,
            window=window,
            period=period,
            date=reference,
        )

    def month_summary(self, user_id: int, year: int, month: int) -> PeriodSummary:
        """Summary of a calendar month against the month before it."""
        window = month_window(year, month)
        expenses, total, previous_total = self._compare(
            user_id, window, month_window(*previous_month(year, month))
        )

        return PeriodSummary(
            total=total,
            expense_count=len(expenses),
            previous_total=previous_total,
            change_percent=change_percent(total, previous_total),
            budget=self.budget,
            window=window,
            month=month,
            year=year,
        )

    def summary(
        self,
        user_id: int,
        period: Period | str | None = None,
        reference: datetime | None = None,
        year: int | None = None,
        month: int | None = None,
    ) -> PeriodSummary:
        """
        Period mode when ``period`` is given, otherwise month mode.

        In month mode a missing year or month defaults to the current one.
        """
        if period:
            return self.period_summary(user_id, period, reference)

        today = local_now()
        return self.month_summary(
            user_id,
            today.year if year is None else year,
            today.month if month is None else month,
        )
