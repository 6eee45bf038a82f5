# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client abstraction and factory."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from ..config import ProbeSettings, load_probe_settings
from .models import HttpRequest, HttpResponse

if TYPE_CHECKING:
    import httpx


class HttpClient(Protocol):
    """Executes one request and reports the raw outcome instead of raising.

    The dispatcher shares a single instance across its worker threads.
    """

    def request(self, request: HttpRequest) -> HttpResponse: ...

    def close(self) -> None:  # pragma: no cover - optional for adapters
        ...


def create_default_http_client(
    settings: ProbeSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> HttpClient:
    """Build the httpx-backed client; ``transport`` swaps the network layer (e.g. ``httpx.MockTransport``)."""
    from .httpx_client import HttpxClient

    return HttpxClient(settings or load_probe_settings(), transport=transport)
