from fastapi import APIRouter, Depends, HTTPException, Query

from ..database import get_store
from ..schemas import (
    ExpenseCreate,
    ExpenseUpdate,
    ExpenseResponse,
    ExpenseWithCategory,
    DeleteResponse,
)
from ..services import AggregationService
from ..services.periods import MIN_YEAR, MAX_YEAR
from ..storage import ExpenseStore, CategoryNotFoundError
from .deps import get_user_id, get_aggregation_service

router = APIRouter()


@router.get("/", response_model=list[ExpenseWithCategory])
def list_expenses(
    year: int | None = Query(None, ge=MIN_YEAR, le=MAX_YEAR),
    month: int | None = Query(None, ge=1, le=12),
    user_id: int = Depends(get_user_id),
    service: AggregationService = Depends(get_aggregation_service),
):
    """
    Get the user's expenses, most recent first.

    If year/month provided, returns expenses for that month only.
    """
    try:
        return service.list_expenses(user_id, year=year, month=month)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{expense_id}", response_model=ExpenseWithCategory)
def get_expense(expense_id: int, store: ExpenseStore = Depends(get_store)):
    """Get a single expense by ID."""
    expense = store.get_expense(expense_id)
    if not expense:
        raise HTTPException(status_code=404, detail="Expense not found")
    return expense


@router.post("/", response_model=ExpenseResponse, status_code=201)
def create_expense(
    expense: ExpenseCreate,
    user_id: int = Depends(get_user_id),
    store: ExpenseStore = Depends(get_store),
):
    """Create a new expense for the current user."""
    try:
        return store.create_expense(user_id, expense)
    except CategoryNotFoundError:
        raise HTTPException(status_code=404, detail="Category not found")


@router.put("/{expense_id}", response_model=ExpenseResponse)
def update_expense(
    expense_id: int,
    expense: ExpenseUpdate,
    store: ExpenseStore = Depends(get_store),
):
    """Update an expense. Only the fields sent are changed."""
    try:
        updated = store.update_expense(expense_id, expense)
    except CategoryNotFoundError:
        raise HTTPException(status_code=404, detail="Category not found")

    if updated is None:
        raise HTTPException(status_code=404, detail="Expense not found")
    return updated


@router.delete("/{expense_id}", response_model=DeleteResponse)
def delete_expense(expense_id: int, store: ExpenseStore = Depends(get_store)):
    """Delete an expense."""
    if not store.delete_expense(expense_id):
        raise HTTPException(status_code=404, detail="Expense not found")
    return DeleteResponse(success=True)
