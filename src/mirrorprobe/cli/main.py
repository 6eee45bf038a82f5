# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""mirrorprobe CLI."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace

from ..config import ProbeSettings, load_probe_settings
from ..errors import ConfigurationError
from ..http import create_default_http_client
from ..log import setup_logging
from ..runtime import MirrorProbe

EXIT_OK = 0
EXIT_ERRORS_REPORTED = 1
EXIT_BAD_CONFIG = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Stress a package mirror cache with randomized conditional HEAD requests",
    )
    parser.add_argument(
        "--host",
        dest="hosts",
        action="append",
        metavar="HOST",
        help="Mirror host to probe (repeatable; default: localhost)",
    )
    parser.add_argument(
        "--file",
        dest="files",
        action="append",
        metavar="PATH",
        help="Repository file path to request (repeatable; default: a fixed set of db and package files)",
    )
    parser.add_argument("--port", type=int, help="Mirror port (default: 9129)")
    parser.add_argument("--prefix", help="URL path prefix in front of every file (default: repo)")
    parser.add_argument("-n", "--requests", dest="total_requests", type=int, help="Total number of requests")
    parser.add_argument("-c", "--concurrency", type=int, help="Maximum requests in flight at once")
    parser.add_argument("--timeout", type=float, help="Per-request transport timeout in seconds")
    parser.add_argument("--seed", type=int, help="Seed for target sampling, for reproducible runs")
    parser.add_argument(
        "--fail-on-error",
        action="store_true",
        default=None,
        help="Exit with status 1 when any request was reported as an error",
    )
    parser.add_argument("--log-level", help="Logging level for diagnostics on stderr (default: WARNING)")
    return parser


def settings_from_args(args: argparse.Namespace, base: ProbeSettings | None = None) -> ProbeSettings:
    """Overlay explicitly given CLI options on top of environment-backed settings."""
    settings = base or load_probe_settings()
    overrides = {}
    for name in ("port", "prefix", "total_requests", "concurrency", "timeout", "seed", "fail_on_error"):
        value = getattr(args, name)
        if value is not None:
            overrides[name] = value
    if args.hosts:
        overrides["hosts"] = tuple(args.hosts)
    if args.files:
        overrides["files"] = tuple(args.files)
    return replace(settings, **overrides)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        settings = settings_from_args(args).validate()
    except ConfigurationError as exc:
        print(f"mirrorprobe: {exc}", file=sys.stderr)
        return EXIT_BAD_CONFIG

    http_client = create_default_http_client(settings)

    with MirrorProbe(settings, http_client=http_client) as probe:
        summary = probe.run()

    if settings.fail_on_error and summary.has_errors:
        return EXIT_ERRORS_REPORTED
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
