import logging
import threading
from decimal import Decimal

from ..localtime import local_now
from ..schemas import (
    CategoryResponse,
    ExpenseCreate,
    ExpenseUpdate,
    ExpenseResponse,
    ExpenseWithCategory,
)
from ..services.periods import Window
from .defaults import DEFAULT_CATEGORIES
from .interface import CategoryNotFoundError, changed_fields, format_amount

logger = logging.getLogger(__name__)


class IdSequence:
    """Auto-increment counter owned by one store."""

    def __init__(self, start: int = 1):
        self._next = start
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            value = self._next
            self._next += 1
            return value


class MemoryExpenseStore:
    """
    Dict-backed store used by tests and the demo mode.

    Records are never mutated in place: a write builds a new record and swaps
    it in under the lock, so a reader sees either the old or the new version.
    """

    def __init__(self, categories: list[dict] | None = None):
        self._lock = threading.Lock()
        self._category_ids = IdSequence()
        self._expense_ids = IdSequence()
        self._categories: dict[int, CategoryResponse] = {}
        self._expenses: dict[int, ExpenseResponse] = {}

        for category in DEFAULT_CATEGORIES if categories is None else categories:
            self.add_category(**category)

    def add_category(self, name: str, icon: str, color: str) -> CategoryResponse:
        category = CategoryResponse(
            id=self._category_ids.next(), name=name, icon=icon, color=color
        )
        with self._lock:
            self._categories[category.id] = category
        return category

    def list_categories(self) -> list[CategoryResponse]:
        with self._lock:
            return sorted(self._categories.values(), key=lambda c: c.id)

    def get_category(self, category_id: int) -> CategoryResponse | None:
        with self._lock:
            return self._categories.get(category_id)

    def list_expenses(
        self, user_id: int, window: Window | None = None
    ) -> list[ExpenseWithCategory]:
        with self._lock:
            expenses = list(self._expenses.values())
            categories = dict(self._categories)

        matches = [
            e for e in expenses
            if e.user_id == user_id and (window is None or window.contains(e.date))
        ]
        matches.sort(key=lambda e: (e.date, e.id), reverse=True)
        return [
            ExpenseWithCategory(**e.model_dump(), category=categories[e.category_id])
            for e in matches
        ]

    def get_expense(self, expense_id: int) -> ExpenseWithCategory | None:
        with self._lock:
            expense = self._expenses.get(expense_id)
            if expense is None:
                return None
            category = self._categories[expense.category_id]
        return ExpenseWithCategory(**expense.model_dump(), category=category)

    def create_expense(self, user_id: int, data: ExpenseCreate) -> ExpenseResponse:
        values = data.model_dump()
        values["amount"] = Decimal(format_amount(data.amount))

        with self._lock:
            if data.category_id not in self._categories:
                raise CategoryNotFoundError(data.category_id)
            expense = ExpenseResponse(
                id=self._expense_ids.next(),
                user_id=user_id,
                created_at=local_now(),
                **values,
            )
            self._expenses[expense.id] = expense

        logger.info("Created expense %s for user %s", expense.id, user_id)
        return expense

    def update_expense(
        self, expense_id: int, data: ExpenseUpdate
    ) -> ExpenseResponse | None:
        changes = changed_fields(data)

        with self._lock:
            current = self._expenses.get(expense_id)
            if current is None:
                return None
            category_id = changes.get("category_id")
            if category_id is not None and category_id not in self._categories:
                raise CategoryNotFoundError(category_id)
            updated = current.model_copy(update=changes)
            self._expenses[expense_id] = updated

        logger.info("Updated expense %s", expense_id)
        return updated

    def delete_expense(self, expense_id: int) -> bool:
        with self._lock:
            deleted = self._expenses.pop(expense_id, None) is not None
        if deleted:
            logger.info("Deleted expense %s", expense_id)
        return deleted
