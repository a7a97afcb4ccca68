"""Logging setup for applications using the endpoint client.

The library itself only emits records through module loggers under the
``endpoint_client`` namespace and never configures logging on import.
Applications that want the package's output on stdout call
:func:`setup_logging` once at startup.
"""

import logging
import sys
from typing import Optional

from .config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_LOGGING_CONFIGURED = False


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging for the application.

    Uses a singleton pattern to prevent duplicate handlers.

    :param level: Logging level name; defaults to ``settings.log_level``
    :type level: Optional[str]
    :return: None
    :rtype: None
    """
    global _LOGGING_CONFIGURED

    if _LOGGING_CONFIGURED:
        logging.getLogger(__name__).debug(
            "Logging already configured, skipping duplicate setup"
        )
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper()),
        handlers=[handler],
        force=True,
    )

    # httpx logs every request at INFO
    for logger_name in ["httpx", "httpcore"]:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    _LOGGING_CONFIGURED = True
