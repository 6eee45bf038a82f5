# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for mirrorprobe.

Diagnostics are attached to the ``mirrorprobe`` logger and written to stderr by
default, so they never interleave with the report lines on stdout.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TextIO

LOGGER_NAME = "mirrorprobe"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class _DiagnosticsHandler(logging.StreamHandler):
    """Marker type so repeated setup replaces instead of stacking handlers.

    Without an explicit stream it writes to whatever ``sys.stderr`` is at emit time.
    """

    def __init__(self, stream: TextIO | None = None):
        super().__init__(stream)
        self._follow_stderr = stream is None

    def emit(self, record: logging.LogRecord) -> None:
        if self._follow_stderr:
            self.stream = sys.stderr
        super().emit(record)


def _level_from(name: str | None) -> int:
    effective = (name or os.getenv("MIRRORPROBE_LOG_LEVEL") or "WARNING").upper()
    return getattr(logging, effective, logging.WARNING)


def setup_logging(level: str | None = None, *, stream: TextIO | None = None) -> logging.Logger:
    """Route mirrorprobe diagnostics to ``stream`` (stderr unless given) at ``level``."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in [h for h in logger.handlers if isinstance(h, _DiagnosticsHandler)]:
        logger.removeHandler(handler)

    handler = _DiagnosticsHandler(stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(_level_from(level))
    return logger


__all__ = ["LOGGER_NAME", "setup_logging"]
