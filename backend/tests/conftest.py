import os
from datetime import datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from tracker.config import get_settings
from tracker.database import create_db_engine, init_schema, get_store
from tracker.main import app
from tracker.schemas import ExpenseCreate
from tracker.storage import MemoryExpenseStore, SqlExpenseStore

from tests.helpers import USER_ID


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Run every test against default settings."""
    for key in list(os.environ):
        if key.startswith("TRACKER_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def memory_store():
    return MemoryExpenseStore()


@pytest.fixture
def sql_session():
    engine = create_db_engine("sqlite://")
    init_schema(engine)
    session = Session(engine)
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def sql_store(sql_session):
    return SqlExpenseStore(sql_session)


@pytest.fixture(params=["memory", "sql"])
def store(request):
    """Each store-level test runs against both backends."""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def add_expense(store):
    """Create an expense in ``store`` from a few fields."""

    def _add(amount: str, category_id: int, date: datetime, user_id: int = USER_ID, **fields):
        data = ExpenseCreate(
            amount=Decimal(amount), category_id=category_id, date=date, **fields
        )
        return store.create_expense(user_id, data)

    return _add


@pytest.fixture
def client(memory_store):
    app.dependency_overrides[get_store] = lambda: memory_store
    yield TestClient(app)
    app.dependency_overrides.clear()
