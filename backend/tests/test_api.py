from datetime import datetime, timezone
from decimal import Decimal

import pytest

from tracker.schemas import ExpenseCreate

from tests.helpers import USER_ID


@pytest.fixture
def february(memory_store):
    for amount, category_id, date in [
        ("10.00", 1, datetime(2024, 2, 5, 12)),
        ("5.50", 1, datetime(2024, 2, 20, 9)),
        ("7.25", 2, datetime(2024, 2, 10, 18)),
    ]:
        memory_store.create_expense(
            USER_ID,
            ExpenseCreate(amount=Decimal(amount), category_id=category_id, date=date),
        )


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


class TestCategoriesAPI:

    def test_list_categories(self, client):
        response = client.get("/api/categories/")
        assert response.status_code == 200
        body = response.json()
        assert len(body) == 8
        assert body[0] == {"id": 1, "name": "Food", "icon": "fas fa-utensils", "color": "blue"}


class TestExpensesAPI:

    def test_create_expense(self, client):
        response = client.post("/api/expenses/", json={
            "amount": "12.5",
            "categoryId": 3,
            "merchant": "Amazon",
            "date": "2024-02-05T10:00:00",
        })
        assert response.status_code == 201
        body = response.json()
        assert body["amount"] == "12.50"
        assert body["categoryId"] == 3
        assert body["userId"] == USER_ID
        assert body["source"] == "manual"
        assert body["receiptUrl"] is None

    def test_create_with_unknown_category(self, client):
        response = client.post("/api/expenses/", json={
            "amount": "1.00", "categoryId": 99, "date": "2024-02-05T10:00:00",
        })
        assert response.status_code == 404
        assert response.json()["detail"] == "Category not found"

    def test_create_with_invalid_amount(self, client):
        response = client.post("/api/expenses/", json={
            "amount": "1.005", "categoryId": 1, "date": "2024-02-05T10:00:00",
        })
        assert response.status_code == 422

    def test_create_without_date(self, client):
        response = client.post("/api/expenses/", json={"amount": "1.00", "categoryId": 1})
        assert response.status_code == 422

    def test_list_for_month(self, client, february, memory_store):
        memory_store.create_expense(
            USER_ID,
            ExpenseCreate(amount=Decimal("1.00"), category_id=1, date=datetime(2024, 3, 1)),
        )
        response = client.get("/api/expenses/", params={"year": 2024, "month": 2})
        assert response.status_code == 200
        body = response.json()
        assert [e["amount"] for e in body] == ["5.50", "7.25", "10.00"]
        assert body[0]["category"]["name"] == "Food"

    def test_list_all(self, client, february):
        assert len(client.get("/api/expenses/").json()) == 3

    def test_get_expense(self, client, february):
        assert client.get("/api/expenses/1").json()["amount"] == "10.00"
        assert client.get("/api/expenses/99").status_code == 404

    def test_update_expense(self, client, february):
        response = client.put("/api/expenses/1", json={"amount": "11.00", "notes": "fixed"})
        assert response.status_code == 200
        body = response.json()
        assert body["amount"] == "11.00"
        assert body["notes"] == "fixed"
        assert body["date"] == "2024-02-05T12:00:00"

    def test_update_missing_expense(self, client):
        response = client.put("/api/expenses/42", json={"notes": "x"})
        assert response.status_code == 404
        assert response.json()["detail"] == "Expense not found"

    def test_delete_expense(self, client, february):
        assert client.delete("/api/expenses/2").json() == {"success": True}
        assert client.delete("/api/expenses/2").status_code == 404


class TestAnalyticsAPI:

    def test_category_totals_for_month(self, client, february):
        response = client.get(
            "/api/analytics/category-totals", params={"year": 2024, "month": 2}
        )
        assert response.status_code == 200
        assert response.json() == [
            {"categoryId": 1, "categoryName": "Food", "total": 15.5,
             "color": "blue", "icon": "fas fa-utensils"},
            {"categoryId": 2, "categoryName": "Transport", "total": 7.25,
             "color": "green", "icon": "fas fa-car"},
        ]

    def test_category_totals_for_period(self, client, february):
        response = client.get(
            "/api/analytics/category-totals",
            params={"period": "week", "date": "2024-02-21T12:00:00"},
        )
        assert [t["categoryId"] for t in response.json()] == [1]

    def test_month_summary(self, client, february):
        response = client.get(
            "/api/analytics/monthly-summary", params={"year": 2024, "month": 2}
        )
        assert response.status_code == 200
        assert response.json() == {
            "total": 22.75,
            "expenseCount": 3,
            "changePercent": 0.0,
            "previousTotal": 0.0,
            "budget": 3000.0,
            "month": 2,
            "year": 2024,
        }

    def test_period_summary(self, client, february):
        response = client.get(
            "/api/analytics/monthly-summary",
            params={"period": "month", "date": "2024-03-10T08:00:00"},
        )
        body = response.json()
        assert body["total"] == 0
        assert body["previousTotal"] == 22.75
        assert body["changePercent"] == -100.0
        assert body["period"] == "month"
        echoed = datetime.fromisoformat(body["date"].replace("Z", "+00:00"))
        assert echoed.utcoffset() == timezone.utc.utcoffset(None)
        assert echoed == datetime(2024, 3, 10, 8).astimezone(timezone.utc)
        assert "month" not in body

    def test_budget_comes_from_settings(self, client, monkeypatch):
        monkeypatch.setenv("TRACKER_BUDGET", "1250")
        from tracker.config import get_settings
        get_settings.cache_clear()

        body = client.get("/api/analytics/monthly-summary").json()
        assert body["budget"] == 1250

    @pytest.mark.parametrize("params", [
        {"period": "fortnight"},
        {"month": 13, "year": 2024},
        {"period": "day", "date": "not-a-date"},
    ])
    def test_invalid_arguments_are_rejected(self, client, params):
        response = client.get("/api/analytics/monthly-summary", params=params)
        assert response.status_code == 422


YEAR_BOUNDARY_ROUTES = [
    "/api/expenses/",
    "/api/analytics/category-totals",
    "/api/analytics/monthly-summary",
]


@pytest.mark.parametrize("path", YEAR_BOUNDARY_ROUTES)
@pytest.mark.parametrize("year", [0, -1, 9999, 10000])
def test_out_of_range_year_is_rejected(client, february, path, year):
    response = client.get(path, params={"year": year, "month": 2})
    assert response.status_code == 422


@pytest.mark.parametrize("path", YEAR_BOUNDARY_ROUTES)
def test_last_supported_december_is_accepted(client, path):
    response = client.get(path, params={"year": 9998, "month": 12})
    assert response.status_code == 200


@pytest.mark.parametrize("path", [
    "/api/analytics/category-totals",
    "/api/analytics/monthly-summary",
])
def test_first_year_is_accepted_for_totals(client, path):
    response = client.get(path, params={"year": 1, "month": 2})
    assert response.status_code == 200


def test_month_before_first_supported_year_is_a_client_error(client):
    # January of year 1 has no previous month to compare with
    response = client.get(
        "/api/analytics/monthly-summary", params={"year": 1, "month": 1}
    )
    assert response.status_code == 400
    assert "year" in response.json()["detail"].lower()


def test_expense_list_with_first_month(client):
    response = client.get("/api/expenses/", params={"year": 1, "month": 1})
    assert response.status_code == 200
    assert response.json() == []
