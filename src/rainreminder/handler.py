"""AWS Lambda entry point, invoked by a scheduled rule with an empty event."""
from __future__ import annotations

import logging
from typing import Any

from .config import load_settings
from .pipeline import run_pipeline
from .util.logging import setup_logging

LOGGER = logging.getLogger(__name__)


def handler(event: Any, context: Any) -> str:
    settings = load_settings()
    setup_logging(settings.logs_dir, settings.log_level)
    LOGGER.debug("Event received: %s", event)
    run_pipeline(settings)
    return "success"
