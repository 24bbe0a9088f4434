"""Logging configuration for the application."""

import logging
import sys

from app.core.config import get_settings

# Client libraries that log every outbound request at INFO.
_NOISY_LOGGERS = ("httpx", "httpcore", "google.auth.transport")


def setup_logging() -> None:
    """Configure application-wide logging to stdout.

    Level is DEBUG when settings.debug is True, otherwise INFO. Outbound
    HTTP client loggers (Firestore, Identity Toolkit, FCM, LLM calls) are
    held at WARNING unless debugging.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(log_level if settings.debug else logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name (usually __name__)."""
    return logging.getLogger(name)
