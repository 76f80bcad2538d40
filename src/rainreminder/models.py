from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True, slots=True)
class Coordinate:
    latitude: float
    longitude: float

    @property
    def query(self) -> str:
        return f"{self.latitude:f},{self.longitude:f}"


@dataclass(slots=True)
class ForecastPeriod:
    name: str
    start_time: datetime
    precip_pct: int = 0


@dataclass(slots=True)
class EmailMessage:
    sender: str
    recipient: str
    subject: str
    body: str
    charset: str = "UTF-8"

    def to_ses_kwargs(self) -> dict[str, Any]:
        return {
            "Source": self.sender,
            "Destination": {"ToAddresses": [self.recipient]},
            "Message": {
                "Subject": {"Charset": self.charset, "Data": self.subject},
                "Body": {"Text": {"Charset": self.charset, "Data": self.body}},
            },
        }


@dataclass(slots=True)
class RunSummary:
    coordinate: Coordinate
    max_precip_pct: int
    threshold: int
    email_sent: bool
    message_id: Optional[str] = None

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)
