from .periods import (
    Period,
    Window,
    InvalidPeriodError,
    parse_period,
    resolve_window,
    step_back,
    previous_window,
    month_window,
    previous_month,
)
from .aggregation_service import (
    AggregationService,
    CategoryTotal,
    PeriodSummary,
    change_percent,
    sum_amounts,
)

__all__ = [
    "Period",
    "Window",
    "InvalidPeriodError",
    "parse_period",
    "resolve_window",
    "step_back",
    "previous_window",
    "month_window",
    "previous_month",
    "AggregationService",
    "CategoryTotal",
    "PeriodSummary",
    "change_percent",
    "sum_amounts",
]
