import logging
from sqlalchemy.orm import Session, joinedload

from ..models import Category, Expense
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


def seed_default_categories(db: Session) -> None:
    """Insert the default categories into an empty database."""
    if db.query(Category).count() > 0:
        return
    for category in DEFAULT_CATEGORIES:
        db.add(Category(**category))
    db.flush()
    logger.info("Seeded %d default categories", len(DEFAULT_CATEGORIES))


class SqlExpenseStore:
    """Expense store over a SQLAlchemy session. The caller owns the transaction."""

    def __init__(self, db: Session):
        self.db = db

    def list_categories(self) -> list[CategoryResponse]:
        rows = self.db.query(Category).order_by(Category.id).all()
        return [CategoryResponse.model_validate(row) for row in rows]

    def get_category(self, category_id: int) -> CategoryResponse | None:
        category = self.db.get(Category, category_id)
        return CategoryResponse.model_validate(category) if category else None

    def list_expenses(
        self, user_id: int, window: Window | None = None
    ) -> list[ExpenseWithCategory]:
        query = (
            self.db.query(Expense)
            .options(joinedload(Expense.category))
            .filter(Expense.user_id == user_id)
        )

        if window is not None:
            query = query.filter(
                Expense.date >= window.start,
                Expense.date <= window.end,
            )

        rows = query.order_by(Expense.date.desc(), Expense.id.desc()).all()
        return [ExpenseWithCategory.model_validate(row) for row in rows]

    def get_expense(self, expense_id: int) -> ExpenseWithCategory | None:
        expense = (
            self.db.query(Expense)
            .options(joinedload(Expense.category))
            .filter(Expense.id == expense_id)
            .first()
        )
        return ExpenseWithCategory.model_validate(expense) if expense else None

    def create_expense(self, user_id: int, data: ExpenseCreate) -> ExpenseResponse:
        if self.db.get(Category, data.category_id) is None:
            raise CategoryNotFoundError(data.category_id)

        values = data.model_dump()
        values["amount"] = format_amount(data.amount)

        expense = Expense(user_id=user_id, **values)
        self.db.add(expense)
        self.db.flush()
        self.db.refresh(expense)

        logger.info("Created expense %s for user %s", expense.id, user_id)
        return ExpenseResponse.model_validate(expense)

    def update_expense(
        self, expense_id: int, data: ExpenseUpdate
    ) -> ExpenseResponse | None:
        expense = self.db.get(Expense, expense_id)
        if expense is None:
            return None

        changes = changed_fields(data)
        category_id = changes.get("category_id")
        if category_id is not None and self.db.get(Category, category_id) is None:
            raise CategoryNotFoundError(category_id)
        if "amount" in changes:
            changes["amount"] = format_amount(changes["amount"])

        for field, value in changes.items():
            setattr(expense, field, value)

        self.db.flush()
        self.db.refresh(expense)

        logger.info("Updated expense %s", expense_id)
        return ExpenseResponse.model_validate(expense)

    def delete_expense(self, expense_id: int) -> bool:
        expense = self.db.get(Expense, expense_id)
        if expense is None:
            return False

        self.db.delete(expense)
        self.db.flush()

        logger.info("Deleted expense %s", expense_id)
        return True
