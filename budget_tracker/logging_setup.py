"""Logging for ``budget_tracker``.

Library modules only ever call ``get_logger("budget_tracker.<module>")`` and
log ``event key=value`` messages. The CLI calls ``configure_logging()`` once
at startup; until then the package logger is silent.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "budget_tracker"
_LEVEL_ENV = "BUDGET_TRACKER_LOG_LEVEL"
_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_CONFIGURED = False


def resolve_level(level: int | str | None = None) -> int:
    """Map ``level`` (or ``BUDGET_TRACKER_LOG_LEVEL``) to a numeric level.

    Accepts ints, numeric strings and level names in any case. Anything
    unrecognised means ``INFO``.
    """

    if level is None:
        level = os.getenv(_LEVEL_ENV) or logging.INFO
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    return logging.getLevelNamesMapping().get(name, logging.INFO)


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Attach one stream handler to the ``budget_tracker`` logger.

    Only the first call has an effect. ``stream`` defaults to the
    ``sys.stderr`` current at call time.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    logger.handlers[:] = [h for h in logger.handlers if not isinstance(h, logging.NullHandler)]

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(resolve_level(level))
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "resolve_level"]
