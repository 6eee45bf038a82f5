# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Run one probing session: sample, build, dispatch, classify, report."""

from __future__ import annotations

import datetime as dt
import logging
import random
from collections.abc import Callable
from dataclasses import asdict, dataclass

from ..config import ProbeSettings
from ..http.client import HttpClient
from ..http.models import HttpRequest, HttpResponse
from .builder import build_request
from .classifier import ClassifiedOutcome, OutcomeKind, classify
from .dispatcher import BoundedDispatcher
from .reporter import Reporter
from .sampler import sample_target

logger = logging.getLogger(__name__)


@dataclass
class RunSummary:
    """Outcome counts for one run."""

    submitted: int = 0
    suppressed: int = 0
    timeouts: int = 0
    transport_failures: int = 0
    http_errors: int = 0

    @property
    def classified(self) -> int:
        return self.suppressed + self.reported

    @property
    def reported(self) -> int:
        return self.timeouts + self.transport_failures + self.http_errors

    @property
    def has_errors(self) -> bool:
        return self.reported > 0

    def record(self, outcome: ClassifiedOutcome) -> None:
        if outcome.kind is OutcomeKind.SUPPRESSED:
            self.suppressed += 1
        elif outcome.kind is OutcomeKind.TIMEOUT:
            self.timeouts += 1
        elif outcome.kind is OutcomeKind.TRANSPORT_FAILURE:
            self.transport_failures += 1
        else:
            self.http_errors += 1

    def to_dict(self) -> dict[str, int]:
        data = asdict(self)
        data["reported"] = self.reported
        return data


class ProbeRunner:
    """Coordinates a full run against the hosts and files named in ``settings``."""

    def __init__(
        self,
        settings: ProbeSettings,
        client: HttpClient,
        *,
        rng: random.Random | None = None,
        reporter: Reporter | None = None,
        today: Callable[[], dt.date] = dt.date.today,
    ):
        self.settings = settings
        self.client = client
        self.rng = rng or random.Random(settings.seed)
        self.reporter = reporter or Reporter()
        self.today = today

    def _next_request(self) -> HttpRequest:
        target = sample_target(self.settings.hosts, self.settings.files, self.rng)
        return build_request(
            target,
            port=self.settings.port,
            prefix=self.settings.prefix,
            today=self.today(),
            timeout=self.settings.timeout,
        )

    def run(self) -> RunSummary:
        settings = self.settings.validate()
        summary = RunSummary()

        def handle(request: HttpRequest, response: HttpResponse) -> None:
            outcome = classify(response)
            summary.record(outcome)
            self.reporter.report(request.url, outcome)

        logger.info(
            "Probing %d host(s) with %d requests, concurrency %d",
            len(settings.hosts),
            settings.total_requests,
            settings.concurrency,
        )
        with BoundedDispatcher(self.client, handle, settings.concurrency) as dispatcher:
            for _ in range(settings.total_requests):
                dispatcher.submit(self._next_request())
                summary.submitted += 1
            dispatcher.run_to_completion()

        logger.info(
            "Run finished: %d submitted, %d suppressed, %d reported (%d timeouts, %d transport failures, %d http errors)",
            summary.submitted,
            summary.suppressed,
            summary.reported,
            summary.timeouts,
            summary.transport_failures,
            summary.http_errors,
        )
        return summary
