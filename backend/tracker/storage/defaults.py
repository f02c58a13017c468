from datetime import datetime, timedelta
from decimal import Decimal

from ..localtime import local_now
from ..schemas import ExpenseCreate

DEFAULT_CATEGORIES = [
    {"name": "Food", "icon": "fas fa-utensils", "color": "blue"},
    {"name": "Transport", "icon": "fas fa-car", "color": "green"},
    {"name": "Shopping", "icon": "fas fa-shopping-bag", "color": "purple"},
    {"name": "Business", "icon": "fas fa-briefcase", "color": "amber"},
    {"name": "Entertainment", "icon": "fas fa-film", "color": "red"},
    {"name": "Health", "icon": "fas fa-heart", "color": "pink"},
    {"name": "Education", "icon": "fas fa-graduation-cap", "color": "indigo"},
    {"name": "Utilities", "icon": "fas fa-bolt", "color": "yellow"},
]

# (days ago, amount, category id, merchant, description, source, notes)
SAMPLE_EXPENSES = [
    (0, "15.50", 1, "Starbucks", "Morning coffee", "manual", "Latte with extra shot"),
    (0, "45.80", 1, "Thai Restaurant", "Lunch meeting", "manual", "Business lunch"),
    (1, "25.00", 2, "Uber", "Ride to airport", "ai_scan", None),
    (3, "120.00", 3, "Amazon", "Office supplies", "bank_sync", "Desk organizers and notebooks"),
    (10, "85.90", 8, "Electric Company", "Monthly electricity bill", "bank_sync", None),
    (15, "200.00", 4, "Co-working Space", "Monthly membership", "manual", "Premium plan with meeting rooms"),
]


def sample_expenses(now: datetime) -> list[ExpenseCreate]:
    """Demo expenses spread over the last two weeks."""
    return [
        ExpenseCreate(
            amount=Decimal(amount),
            category_id=category_id,
            merchant=merchant,
            description=description,
            date=now - timedelta(days=days_ago),
            source=source,
            notes=notes,
        )
        for days_ago, amount, category_id, merchant, description, source, notes
        in SAMPLE_EXPENSES
    ]


def seed_sample_expenses(store, user_id: int, now: datetime | None = None) -> int:
    """Insert the demo expenses for a user. Returns how many were added."""
    expenses = sample_expenses(now or local_now())
    for expense in expenses:
        store.create_expense(user_id, expense)
    return len(expenses)

