# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Line-oriented error reporting."""

from __future__ import annotations

import sys
from typing import TextIO

from .classifier import ClassifiedOutcome


def format_report_line(url: str, outcome: ClassifiedOutcome) -> str:
    return f"Url {url} got error: {outcome.description}"


class Reporter:
    """Writes one line per reportable outcome; suppressed outcomes are silent."""

    def __init__(self, stream: TextIO | None = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved per write so a redirected sys.stdout is honored.
        return self._stream or sys.stdout

    def report(self, url: str, outcome: ClassifiedOutcome) -> bool:
        if not outcome.reportable:
            return False
        self.stream.write(format_report_line(url, outcome) + "\n")
        self.stream.flush()
        return True
