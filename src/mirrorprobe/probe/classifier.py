# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Response classification."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..http.models import HttpResponse

SUPPRESSED_STATUS_CODES = frozenset({304, 307})
TIMEOUT_DESCRIPTION = "time out"


class OutcomeKind(str, Enum):
    SUPPRESSED = "suppressed"
    TIMEOUT = "timeout"
    TRANSPORT_FAILURE = "transport_failure"
    HTTP_ERROR = "http_error"


@dataclass(frozen=True)
class ClassifiedOutcome:
    kind: OutcomeKind
    status_code: int | None = None
    message: str | None = None

    @property
    def reportable(self) -> bool:
        return self.kind is not OutcomeKind.SUPPRESSED

    @property
    def description(self) -> str:
        if self.kind is OutcomeKind.TIMEOUT:
            return TIMEOUT_DESCRIPTION
        if self.kind is OutcomeKind.TRANSPORT_FAILURE:
            return self.message or ""
        if self.kind is OutcomeKind.HTTP_ERROR:
            return str(self.status_code)
        return ""

    @classmethod
    def suppressed(cls, status_code: int) -> ClassifiedOutcome:
        return cls(OutcomeKind.SUPPRESSED, status_code=status_code)

    @classmethod
    def timeout(cls) -> ClassifiedOutcome:
        return cls(OutcomeKind.TIMEOUT)

    @classmethod
    def transport_failure(cls, message: str | None) -> ClassifiedOutcome:
        return cls(OutcomeKind.TRANSPORT_FAILURE, message=message)

    @classmethod
    def http_error(cls, status_code: int) -> ClassifiedOutcome:
        return cls(OutcomeKind.HTTP_ERROR, status_code=status_code)


def classify(response: HttpResponse) -> ClassifiedOutcome:
    """
    Map a raw outcome to its taxonomy value.

    Not-modified and temporary redirects short-circuit first, then timeouts,
    then responses without any HTTP status. Every other status, 2xx included,
    is an error: a fresh mirror should have answered 304.
    """
    if response.status_code in SUPPRESSED_STATUS_CODES:
        return ClassifiedOutcome.suppressed(response.status_code)
    if response.timed_out:
        return ClassifiedOutcome.timeout()
    if not response.has_status:
        return ClassifiedOutcome.transport_failure(response.error_message)
    return ClassifiedOutcome.http_error(response.status_code)
