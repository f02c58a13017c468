from fastapi import Depends

from ..config import Settings, get_settings
from ..database import get_store
from ..services import AggregationService
from ..storage import ExpenseStore


def get_user_id(settings: Settings = Depends(get_settings)) -> int:
    """The fixed single-user identity."""
    return settings.user_id


def get_aggregation_service(
    store: ExpenseStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> AggregationService:
    return AggregationService(store, budget=settings.budget)
