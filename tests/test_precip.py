from datetime import UTC, datetime, timedelta, timezone

from rainreminder.models import ForecastPeriod
from rainreminder.processing.precip import filter_same_day, max_precip_for_today

PDT = timezone(timedelta(hours=-7))
PST = timezone(timedelta(hours=-8))


def period(start: datetime, pct: int, name: str = "") -> ForecastPeriod:
    return ForecastPeriod(name=name, start_time=start, precip_pct=pct)


def test_empty_sequence_is_zero():
    assert max_precip_for_today([], datetime(2024, 5, 1, 12, tzinfo=UTC)) == 0


def test_max_over_retained_periods():
    now = datetime(2024, 5, 1, 15, tzinfo=UTC)  # 08:00 PDT
    periods = [
        period(datetime(2024, 5, 1, 9, tzinfo=PDT), 10),
        period(datetime(2024, 5, 1, 10, tzinfo=PDT), 45),
        period(datetime(2024, 5, 1, 11, tzinfo=PDT), 20),
    ]
    assert max_precip_for_today(periods, now) == 45


def test_tomorrow_midnight_is_excluded():
    now = datetime(2024, 5, 1, 15, tzinfo=UTC)
    periods = [
        period(datetime(2024, 5, 1, 22, tzinfo=PDT), 30),
        period(datetime(2024, 5, 2, 0, tzinfo=PDT), 90),
    ]
    assert max_precip_for_today(periods, now) == 30
    assert [p.precip_pct for p in filter_same_day(periods, now)] == [30]


def test_boundary_second_is_excluded():
    now = datetime(2024, 5, 1, 15, tzinfo=UTC)
    periods = [
        period(datetime(2024, 5, 1, 23, 59, 58, tzinfo=PDT), 40),
        period(datetime(2024, 5, 1, 23, 59, 59, tzinfo=PDT), 80),
    ]
    assert max_precip_for_today(periods, now) == 40


def test_each_period_uses_its_own_offset():
    # 2024-05-02 03:00 UTC is still May 1 in UTC-8 but already May 2 in UTC.
    now = datetime(2024, 5, 2, 3, tzinfo=UTC)
    utc_period = period(datetime(2024, 5, 2, 12, tzinfo=UTC), 60)
    pacific_period = period(datetime(2024, 5, 1, 21, tzinfo=PST), 50)
    pacific_tomorrow = period(datetime(2024, 5, 2, 1, tzinfo=PST), 99)

    kept = filter_same_day([utc_period, pacific_period, pacific_tomorrow], now)
    assert kept == [utc_period, pacific_period]
    assert max_precip_for_today([pacific_period, pacific_tomorrow], now) == 50


def test_past_periods_are_retained():
    now = datetime(2024, 5, 1, 15, tzinfo=UTC)
    periods = [period(datetime(2024, 4, 30, 12, tzinfo=PDT), 70)]
    assert max_precip_for_today(periods, now) == 70


def test_naive_now_is_treated_as_utc():
    now = datetime(2024, 5, 2, 3)
    periods = [period(datetime(2024, 5, 2, 12, tzinfo=UTC), 25)]
    assert max_precip_for_today(periods, now) == 25
