from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException, Query

from ..localtime import local_now
from ..schemas import CategoryTotalResponse, SummaryResponse
from ..services import AggregationService, Period
from ..services.periods import MIN_YEAR, MAX_YEAR
from .deps import get_user_id, get_aggregation_service

router = APIRouter()


@router.get("/category-totals", response_model=list[CategoryTotalResponse])
def category_totals(
    year: int | None = Query(None, ge=MIN_YEAR, le=MAX_YEAR),
    month: int | None = Query(None, ge=1, le=12),
    period: Period | None = Query(None),
    date: datetime | None = Query(None),
    user_id: int = Depends(get_user_id),
    service: AggregationService = Depends(get_aggregation_service),
):
    """
    Spending per category, largest first.

    With ``period`` the window is the day/week/month/year containing ``date``
    (default now); otherwise it is the given year/month (default this month).
    """
    try:
        if period:
            rows = service.category_totals_for_period(user_id, period, date)
        else:
            today = local_now()
            rows = service.category_totals_for_month(
                user_id,
                today.year if year is None else year,
                today.month if month is None else month,
            )
    except (ValueError, OverflowError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    return [
        CategoryTotalResponse(
            category_id=row.category_id,
            category_name=row.category_name,
            total=float(row.total),
            color=row.color,
            icon=row.icon,
        )
        for row in rows
    ]


@router.get(
    "/monthly-summary",
    response_model=SummaryResponse,
    response_model_exclude_none=True,
)
def monthly_summary(
    year: int | None = Query(None, ge=MIN_YEAR, le=MAX_YEAR),
    month: int | None = Query(None, ge=1, le=12),
    period: Period | None = Query(None),
    date: datetime | None = Query(None),
    user_id: int = Depends(get_user_id),
    service: AggregationService = Depends(get_aggregation_service),
):
    """
    Total, count and change against the previous window.

    In period mode the reference date is echoed back in UTC.
    """
    try:
        summary = service.summary(
            user_id, period=period, reference=date, year=year, month=month
        )
    except (ValueError, OverflowError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    return SummaryResponse(
        total=float(summary.total),
        expense_count=summary.expense_count,
        change_percent=float(summary.change_percent),
        previous_total=float(summary.previous_total),
        budget=float(summary.budget),
        period=summary.period.value if summary.period else None,
        date=summary.date.astimezone(timezone.utc) if summary.date else None,
        month=summary.month,
        year=summary.year,
    )
