# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
mirrorprobe package entrypoint.

A load generator for package-mirror caching proxies: it fires randomized
conditional HEAD requests at a set of hosts through a bounded worker pool and
reports every response that is not a 304/307 as a single stdout line. HTTP
behavior is abstracted behind an injectable client interface, and domain
objects are modeled with typed dataclasses.
"""

from .config import ProbeSettings, load_probe_settings
from .errors import ConfigurationError
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    StubHttpClient,
    create_default_http_client,
)
from .log import setup_logging
from .probe import (
    BoundedDispatcher,
    ClassifiedOutcome,
    OutcomeKind,
    ProbeRunner,
    Reporter,
    RunSummary,
    Target,
    build_request,
    classify,
    sample_target,
)
from .runtime import MirrorProbe
from .version import __version__

__all__ = [
    "BoundedDispatcher",
    "ClassifiedOutcome",
    "ConfigurationError",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "MirrorProbe",
    "OutcomeKind",
    "ProbeRunner",
    "ProbeSettings",
    "Reporter",
    "RunSummary",
    "StubHttpClient",
    "Target",
    "build_request",
    "classify",
    "create_default_http_client",
    "load_probe_settings",
    "sample_target",
    "setup_logging",
    "__version__",
]
