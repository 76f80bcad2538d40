from __future__ import annotations

import logging
from typing import Optional

from .config import AppSettings
from .ingest.forecast import ForecastResolver
from .models import RunSummary
from .util.emailer import SesNotifier
from .util.http import create_session

LOGGER = logging.getLogger(__name__)


def run_pipeline(
    settings: AppSettings,
    resolver: Optional[ForecastResolver] = None,
    notifier: Optional[SesNotifier] = None,
) -> RunSummary:
    """Check today's rain chance for the configured site and email if it clears the threshold."""
    if resolver is None:
        session = create_session(settings.user_agent, timeout=settings.http_timeout)
        resolver = ForecastResolver(session, settings.points_url)
    if notifier is None:
        notifier = SesNotifier(settings.email)

    coordinate = settings.site.coordinate
    max_pct = resolver.resolve_max_precipitation(coordinate)
    LOGGER.info("Max precipitation chance today for %s (%s): %s%%", settings.site.name, coordinate.query, max_pct)

    email_sent = False
    message_id = None
    if max_pct > settings.threshold:
        if settings.dry_run:
            LOGGER.info("Dry run; not sending email for %s%% > %s%%", max_pct, settings.threshold)
        else:
            message_id = notifier.send_rain_email(max_pct)
            email_sent = True
    else:
        LOGGER.info("Below threshold of %s%%; no email", settings.threshold)

    return RunSummary(
        coordinate=coordinate,
        max_precip_pct=max_pct,
        threshold=settings.threshold,
        email_sent=email_sent,
        message_id=message_id,
    )
