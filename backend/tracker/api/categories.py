from fastapi import APIRouter, Depends

from ..database import get_store
from ..schemas import CategoryResponse
from ..storage import ExpenseStore

router = APIRouter()


@router.get("/", response_model=list[CategoryResponse])
def list_categories(store: ExpenseStore = Depends(get_store)):
    """Get all categories."""
    return store.list_categories()
