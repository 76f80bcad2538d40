from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..config import EmailSettings
from ..errors import EmailProviderError, EmailTransportError
from ..models import EmailMessage
from .time import format_notify_date, local_today

LOGGER = logging.getLogger(__name__)

# SES error codes that get a descriptive label instead of passing through raw.
KNOWN_ERROR_CODES = frozenset(
    {
        "MessageRejected",
        "MailFromDomainNotVerifiedException",
        "ConfigurationSetDoesNotExist",
    }
)


def _default_client_factory(region: str) -> Any:
    return boto3.session.Session().client("ses", region_name=region)


class SesNotifier:
    """Sends the rain reminder through Amazon SES.

    A new client is created for every send; nothing is pooled between
    invocations.
    """

    def __init__(
        self,
        settings: EmailSettings,
        client_factory: Callable[[str], Any] = _default_client_factory,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.settings = settings
        self.client_factory = client_factory
        self.clock = clock

    def build_message(self, percentage: int) -> EmailMessage:
        now = self.clock() if self.clock else None
        today = format_notify_date(local_today(self.settings.tz, now))
        return EmailMessage(
            sender=self.settings.sender,
            recipient=self.settings.recipient,
            subject=self.settings.subject_fmt.format(date=today),
            body=self.settings.body_fmt.format(pct=percentage),
            charset=self.settings.charset,
        )

    def send_rain_email(self, percentage: int) -> str:
        message = self.build_message(percentage)
        client = self.client_factory(self.settings.region)
        try:
            response = client.send_email(**message.to_ses_kwargs())
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code", "")
            if code in KNOWN_ERROR_CODES:
                raise EmailProviderError(code, exc) from exc
            raise EmailTransportError(str(exc)) from exc
        except BotoCoreError as exc:
            raise EmailTransportError(str(exc)) from exc
        LOGGER.info("Email delivered to %s", message.recipient)
        return response.get("MessageId", "")
