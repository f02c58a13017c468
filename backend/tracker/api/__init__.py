from fastapi import APIRouter

from .categories import router as categories_router
from .expenses import router as expenses_router
from .analytics import router as analytics_router

api_router = APIRouter()

api_router.include_router(categories_router, prefix="/categories", tags=["categories"])
api_router.include_router(expenses_router, prefix="/expenses", tags=["expenses"])
api_router.include_router(analytics_router, prefix="/analytics", tags=["analytics"])
