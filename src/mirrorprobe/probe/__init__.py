# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe pipeline: sampler, request builder, dispatcher, classifier and reporter."""

from .builder import build_request, build_url, http_date
from .classifier import ClassifiedOutcome, OutcomeKind, classify
from .dispatcher import BoundedDispatcher
from .reporter import Reporter, format_report_line
from .runner import ProbeRunner, RunSummary
from .sampler import Target, sample_target

__all__ = [
    "BoundedDispatcher",
    "ClassifiedOutcome",
    "OutcomeKind",
    "ProbeRunner",
    "Reporter",
    "RunSummary",
    "Target",
    "build_request",
    "build_url",
    "classify",
    "format_report_line",
    "http_date",
    "sample_target",
]
