from __future__ import annotations

from datetime import datetime
from typing import Iterable, List

from ..models import ForecastPeriod
from ..util.time import end_of_local_day


def filter_same_day(periods: Iterable[ForecastPeriod], now: datetime) -> List[ForecastPeriod]:
    """Periods starting before 23:59:59 of today, judged in each period's own offset."""
    kept: List[ForecastPeriod] = []
    for period in periods:
        cutoff = end_of_local_day(now, period.start_time.tzinfo)
        if period.start_time < cutoff:
            kept.append(period)
    return kept


def max_precip_for_today(periods: Iterable[ForecastPeriod], now: datetime) -> int:
    return max((p.precip_pct for p in filter_same_day(periods, now)), default=0)
