# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level mirrorprobe facade."""

from __future__ import annotations

import random
from contextlib import suppress

from .config import ProbeSettings, load_probe_settings
from .http.client import HttpClient, create_default_http_client
from .probe.reporter import Reporter
from .probe.runner import ProbeRunner, RunSummary


class MirrorProbe:
    """
    Convenience wrapper that owns the settings and HTTP client for probing runs.

    The client is shared by every dispatcher worker and closed with the facade.
    """

    def __init__(
        self,
        settings: ProbeSettings | None = None,
        http_client: HttpClient | None = None,
        *,
        reporter: Reporter | None = None,
    ):
        self.settings = (settings or load_probe_settings()).validate()
        self.http_client = http_client or create_default_http_client(self.settings)
        self.reporter = reporter or Reporter()

    def run(self, *, rng: random.Random | None = None) -> RunSummary:
        runner = ProbeRunner(self.settings, self.http_client, rng=rng, reporter=self.reporter)
        return runner.run()

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> MirrorProbe:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
