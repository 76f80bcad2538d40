from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Callable, List, Optional

import requests
from dateutil import parser as dtparser

from ..config import POINTS_URL
from ..errors import NetworkError
from ..models import Coordinate, ForecastPeriod
from ..processing.precip import max_precip_for_today
from ..util.time import ZERO_TIME, now_utc

LOGGER = logging.getLogger(__name__)


def _loads(body: bytes) -> dict:
    # Malformed documents are treated as empty rather than raised.
    try:
        payload = json.loads(body)
    except ValueError:
        LOGGER.warning("Ignoring malformed JSON body (%d bytes)", len(body))
        return {}
    return payload if isinstance(payload, dict) else {}


def _section(payload: Any, key: str) -> dict:
    value = payload.get(key) if isinstance(payload, dict) else None
    return value if isinstance(value, dict) else {}


def _parse_start(raw: Any) -> datetime:
    if not isinstance(raw, str) or not raw:
        return ZERO_TIME
    try:
        start = dtparser.isoparse(raw)
    except (ValueError, OverflowError):
        LOGGER.debug("Unable to parse startTime %s", raw)
        return ZERO_TIME
    if start.tzinfo is None:
        return ZERO_TIME
    return start


def _parse_pct(raw: Any) -> int:
    # Only JSON integers count; fractions, exponents, NaN and Infinity read as 0.
    if isinstance(raw, bool) or not isinstance(raw, int):
        return 0
    return raw


def parse_forecast_url(payload: dict) -> str:
    url = _section(payload, "properties").get("forecastHourly")
    return url if isinstance(url, str) else ""


def parse_periods(payload: dict) -> List[ForecastPeriod]:
    raw_periods = _section(payload, "properties").get("periods")
    if not isinstance(raw_periods, list):
        return []
    periods: List[ForecastPeriod] = []
    for item in raw_periods:
        if not isinstance(item, dict):
            item = {}
        name = item.get("name")
        periods.append(
            ForecastPeriod(
                name=name if isinstance(name, str) else "",
                start_time=_parse_start(item.get("startTime")),
                precip_pct=_parse_pct(_section(item, "probabilityOfPrecipitation").get("value")),
            )
        )
    return periods


class ForecastResolver:
    """Looks up the hourly forecast for a point via api.weather.gov."""

    def __init__(
        self,
        session: requests.Session,
        points_url: str = POINTS_URL,
        clock: Callable[[], datetime] = now_utc,
    ) -> None:
        self.session = session
        self.points_url = points_url
        self.clock = clock

    def _download(self, url: str, label: str) -> dict:
        try:
            resp = self.session.get(url)
            body = resp.content
        except requests.RequestException as exc:
            raise NetworkError(f"failed to fetch from {label} endpoint: {exc}") from exc
        if not resp.ok:
            LOGGER.warning("%s endpoint returned HTTP %s for %s", label, resp.status_code, url)
        return _loads(body)

    def fetch_periods(self, coordinate: Coordinate) -> List[ForecastPeriod]:
        meta = self._download(f"{self.points_url}/{coordinate.query}", "point")
        forecast_url = parse_forecast_url(meta)
        if not forecast_url:
            LOGGER.warning("Point metadata for %s has no forecastHourly URL", coordinate.query)
        forecast = self._download(forecast_url, "forecast")
        return parse_periods(forecast)

    def resolve_max_precipitation(self, coordinate: Coordinate, now: Optional[datetime] = None) -> int:
        periods = self.fetch_periods(coordinate)
        return max_precip_for_today(list(periods), now or self.clock())
