# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import logging

import httpx

from ..config import ProbeSettings, load_probe_settings
from ..errors import is_timeout, transport_message
from .client import HttpClient
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class HttpxClient(HttpClient):
    """Synchronous httpx client wrapper shared by all dispatcher workers."""

    def __init__(
        self,
        settings: ProbeSettings | None = None,
        client: httpx.Client | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ):
        self.settings = settings or load_probe_settings()
        self._client = client or httpx.Client(
            follow_redirects=False,
            timeout=self.settings.timeout,
            limits=httpx.Limits(max_connections=max(1, self.settings.concurrency)),
            transport=transport,
        )

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        headers.setdefault("User-Agent", self.settings.user_agent)
        timeout = request.timeout if request.timeout is not None else self.settings.timeout

        try:
            resp = self._client.request(
                request.method,
                request.url,
                headers=headers,
                timeout=timeout,
                follow_redirects=request.allow_redirects,
            )
        except Exception as exc:  # noqa: BLE001
            timed_out = is_timeout(exc)
            logger.debug("%s %s failed (%s, timed_out=%s): %s", request.method, request.url, type(exc).__name__, timed_out, exc)
            return HttpResponse(
                ok=False,
                url=request.url,
                timed_out=timed_out,
                error_message=transport_message(exc),
                error_type=type(exc).__name__,
            )

        return HttpResponse(
            ok=True,
            status_code=resp.status_code,
            headers=dict(resp.headers),
            url=request.url,
        )

    def close(self) -> None:
        self._client.close()
