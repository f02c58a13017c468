from .interface import ExpenseStore, CategoryNotFoundError, format_amount
from .memory import MemoryExpenseStore, IdSequence
from .sql import SqlExpenseStore, seed_default_categories
from .defaults import DEFAULT_CATEGORIES, sample_expenses, seed_sample_expenses

__all__ = [
    "ExpenseStore",
    "CategoryNotFoundError",
    "format_amount",
    "MemoryExpenseStore",
    "IdSequence",
    "SqlExpenseStore",
    "seed_default_categories",
    "DEFAULT_CATEGORIES",
    "sample_expenses",
    "seed_sample_expenses",
]
