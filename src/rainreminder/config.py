from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigurationError
from .models import Coordinate

DEFAULT_USER_AGENT = "RainReminder/1.0 (contact: you@example.com)"
POINTS_URL = "https://api.weather.gov/points"
DEFAULT_SENDER = "rain-reminder@example.com"
SUBJECT_FMT = "Rain Reminder - {date}"
BODY_FMT = "It's likely going to rain today. Maximum precipitation chance is {pct}%."

LOCATIONS: dict[str, Coordinate] = {
    "san_francisco": Coordinate(37.75, -122.43),
    "chicago": Coordinate(41.8781, -87.6298),
}
DEFAULT_LOCATION = "san_francisco"


class EmailSettings(BaseModel):
    sender: str = Field(default=DEFAULT_SENDER, alias="MAIL_FROM")
    recipient: str = Field(default=DEFAULT_SENDER, alias="MAIL_TO")
    region: str = Field(default="us-east-1", alias="SES_REGION")
    subject_fmt: str = Field(default=SUBJECT_FMT, alias="MAIL_SUBJECT_FMT")
    body_fmt: str = Field(default=BODY_FMT, alias="MAIL_BODY_FMT")
    charset: str = Field(default="UTF-8", alias="MAIL_CHARSET")
    tz: str = Field(default="America/Los_Angeles", alias="NOTIFY_TZ")

    model_config = {
        "populate_by_name": True,
        "frozen": True,
    }


class SiteSettings(BaseModel):
    name: str
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

    model_config = {"frozen": True}

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)


class AppSettings(BaseModel):
    site: SiteSettings
    threshold: int = Field(default=35, ge=0, le=100)
    points_url: str = Field(default=POINTS_URL)
    user_agent: str = Field(default=DEFAULT_USER_AGENT)
    http_timeout: float = Field(default=30, gt=0)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    logs_dir: Optional[Path] = None
    dry_run: bool = Field(default=False)
    email: EmailSettings = Field(default_factory=EmailSettings)

    model_config = {"frozen": True}


def _env_bool(key: str, default: bool = False) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "on"}


def _env_float(key: str) -> Optional[float]:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return None
    return float(value)


def _first(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def _resolve_site(cli_args: dict[str, Any]) -> SiteSettings:
    name = (cli_args.get("location") or os.getenv("RAIN_LOCATION", DEFAULT_LOCATION)).lower()
    if name not in LOCATIONS:
        raise ConfigurationError(f"Unknown location {name!r}; expected one of {sorted(LOCATIONS)}")
    preset = LOCATIONS[name]
    lat = _first(cli_args.get("lat"), _env_float("RAIN_LAT"))
    lon = _first(cli_args.get("lon"), _env_float("RAIN_LON"))
    return SiteSettings(
        name=name if lat is None and lon is None else "custom",
        latitude=_first(lat, preset.latitude),
        longitude=_first(lon, preset.longitude),
    )


def load_settings(cli_args: dict[str, Any] | None = None) -> AppSettings:
    load_dotenv()
    cli_args = cli_args or {}

    logs_dir = cli_args.get("logs_dir") or os.getenv("LOGS_DIR")
    email_env = {
        key: os.environ[key]
        for key in ("MAIL_FROM", "MAIL_TO", "SES_REGION", "MAIL_SUBJECT_FMT", "MAIL_BODY_FMT", "MAIL_CHARSET", "NOTIFY_TZ")
        if os.getenv(key)
    }

    try:
        data: dict[str, Any] = {
            "site": _resolve_site(cli_args),
            "threshold": int(_first(cli_args.get("threshold"), os.getenv("RAIN_THRESHOLD"), 35)),
            "points_url": os.getenv("NWS_POINTS_URL", POINTS_URL).rstrip("/"),
            "user_agent": cli_args.get("user_agent") or os.getenv("USER_AGENT", DEFAULT_USER_AGENT),
            "http_timeout": float(os.getenv("HTTP_TIMEOUT", 30)),
            "log_level": os.getenv("LOG_LEVEL", "INFO").upper(),
            "logs_dir": Path(logs_dir).expanduser() if logs_dir else None,
            "dry_run": bool(cli_args.get("dry_run")) or _env_bool("DRY_RUN"),
            "email": EmailSettings(**email_env),
        }
        return AppSettings(**data)
    except (ValidationError, ValueError) as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc
