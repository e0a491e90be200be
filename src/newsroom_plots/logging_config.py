"""Root-logger setup for scripts that render charts.

JSON lines are the default, for build logs that get collected. Plain text
is for working at a terminal.
"""

from __future__ import annotations

import logging
import os

from pythonjsonlogger import jsonlogger

LOG_FORMAT_ENV = "NEWSROOM_PLOTS_LOG_FORMAT"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: int = logging.INFO, force_format: str | None = None) -> None:
    """Send root-logger records to stderr as JSON or plain text.

    ``force_format`` ("json" or "plain") wins over the NEWSROOM_PLOTS_LOG_FORMAT
    environment variable, which wins over the JSON default.
    """
    if force_format is not None:
        format_mode = force_format.lower()
    else:
        format_mode = os.getenv(LOG_FORMAT_ENV, "json").lower()

    logger = logging.getLogger()
    logger.setLevel(level)

    handler = logging.StreamHandler()
    if format_mode == "plain":
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    else:
        handler.setFormatter(jsonlogger.JsonFormatter(LOG_FORMAT))

    # replaces existing handlers, so calling twice doesn't duplicate lines
    logger.handlers.clear()
    logger.addHandler(handler)
