# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Conditional HEAD request construction."""

from __future__ import annotations

import datetime as dt
from email.utils import format_datetime

from ..http.models import HttpRequest
from .sampler import Target


def http_date(day: dt.date) -> str:
    """Midnight of ``day`` as an RFC 7231 IMF-fixdate, e.g. ``Sun, 06 Nov 1994 00:00:00 GMT``."""
    midnight = dt.datetime.combine(day, dt.time.min, tzinfo=dt.timezone.utc)
    return format_datetime(midnight, usegmt=True)


def build_url(target: Target, *, port: int, prefix: str) -> str:
    segments = [segment.strip("/") for segment in (prefix, target.path)]
    path = "/".join(segment for segment in segments if segment)
    return f"http://{target.host}:{port}/{path}"


def build_request(
    target: Target,
    *,
    port: int,
    prefix: str,
    today: dt.date,
    timeout: float | None = None,
) -> HttpRequest:
    """HEAD request asking the mirror for a 304 unless the file changed since ``today``."""
    return HttpRequest(
        url=build_url(target, port=port, prefix=prefix),
        method="HEAD",
        headers={"If-Modified-Since": http_date(today)},
        timeout=timeout,
        allow_redirects=False,
    )
