"""Logging setup for the API process and the CLI.

Library modules only call ``logging.getLogger(__name__)``; handlers are
attached here, once, on the ``pure_market`` package logger.
"""

import logging
import sys

from pure_market.config import settings

_PKG_LOGGER_NAME = "pure_market"
_configured = False


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
    return logging.INFO


def setup_logging(level: int | str | None = None) -> None:
    """Attach a single stream handler to the package logger.

    Falls back to ``settings.log_level`` when no level is given. Repeated
    calls are no-ops.
    """
    global _configured
    if _configured:
        return

    resolved = _parse_level(level if level is not None else settings.log_level)
    logger = logging.getLogger(_PKG_LOGGER_NAME)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s")
    )
    logger.setLevel(resolved)
    logger.addHandler(handler)
    logger.propagate = False

    _configured = True
