from __future__ import annotations

import logging
from typing import Iterable

from shared.logging.json import configure_logging as _shared_configure_logging

from .config import Settings, settings

# Per-request access lines repeat what the instrumentator already counts
QUIET_LOGGERS = ("uvicorn.access",)


class RedactingFilter(logging.Filter):
    """Blank out whole log messages that mention a sensitive pattern."""

    def __init__(self, patterns: Iterable[str]):
        super().__init__()
        self.patterns = [p.lower() for p in patterns]

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        msg = record.getMessage().lower()
        if any(p in msg for p in self.patterns):
            record.msg = "[REDACTED SENSITIVE LOG CONTENT]"
            record.args = ()
        return True


_configured = False


def configure_logging(config: Settings = settings) -> logging.Logger:
    """Install the shared root handler for the stats service, once."""
    global _configured
    root = logging.getLogger()
    if _configured:
        return root
    _shared_configure_logging(
        service=config.otel_service_name,
        level=config.app_log_level,
        environment=config.app_environment,
        redaction_patterns=config.app_log_redaction_patterns,
    )
    redactor = RedactingFilter(config.app_log_redaction_patterns)
    for handler in root.handlers:
        handler.addFilter(redactor)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    _configured = True
    return root


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(name)
