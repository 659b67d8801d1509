"""Shared logger utility.

get_logger hands out stdlib loggers and installs a minimal fallback
configuration the first time it is used before configure_logging ran
(scripts, tests).
"""

from __future__ import annotations

import logging

_configured = False


def get_logger(name: str, auto_configure: bool = True) -> logging.Logger:
    """Get a logger, configuring a minimal root handler on first use.

    Args:
        name: Logger name (usually module name)
        auto_configure: Whether to install the fallback config if nothing
            configured logging yet

    Returns:
        Logger instance
    """
    global _configured

    if auto_configure and not _configured:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
        _configured = True

    logger = logging.getLogger(name)
    logger.propagate = True
    return logger


def is_configured() -> bool:
    return _configured


def mark_configured():
    """Mark logging as configured (called by shared.logging.json.configure_logging)."""
    global _configured
    _configured = True
