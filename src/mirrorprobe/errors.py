# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import httpx


class ConfigurationError(ValueError):
    """Raised when probe settings cannot describe a valid run."""


def is_timeout(exc: BaseException) -> bool:
    """True when ``exc`` means the transport deadline expired before a response arrived."""
    return isinstance(exc, (httpx.TimeoutException, TimeoutError))


def transport_message(exc: BaseException) -> str:
    """The exception text as-is; the class name only when the text is empty."""
    return str(exc) or type(exc).__name__


__all__ = [
    "ConfigurationError",
    "is_timeout",
    "transport_message",
]
