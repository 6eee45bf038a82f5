# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import io
import logging

import pytest

from mirrorprobe.log import LOGGER_NAME, setup_logging
from mirrorprobe.probe.classifier import ClassifiedOutcome
from mirrorprobe.probe.reporter import Reporter


@pytest.fixture
def package_logger():
    logger = logging.getLogger(LOGGER_NAME)
    saved_handlers, saved_level = list(logger.handlers), logger.level
    yield logger
    logger.handlers[:] = saved_handlers
    logger.setLevel(saved_level)


def test_diagnostics_and_reports_use_separate_streams(package_logger):
    diagnostics = io.StringIO()
    reports = io.StringIO()
    setup_logging("info", stream=diagnostics)

    logging.getLogger("mirrorprobe.probe.runner").info("run started")
    Reporter(reports).report("http://localhost:9129/repo/core.db", ClassifiedOutcome.http_error(500))

    assert diagnostics.getvalue() == "INFO mirrorprobe.probe.runner: run started\n"
    assert reports.getvalue() == "Url http://localhost:9129/repo/core.db got error: 500\n"


def test_repeated_setup_replaces_handler(package_logger):
    first = io.StringIO()
    second = io.StringIO()
    setup_logging("debug", stream=first)
    setup_logging("warning", stream=second)

    package_logger.warning("once")
    package_logger.info("hidden")

    assert first.getvalue() == ""
    assert second.getvalue() == "WARNING mirrorprobe: once\n"


def test_level_falls_back_to_environment(monkeypatch, package_logger):
    monkeypatch.setenv("MIRRORPROBE_LOG_LEVEL", "error")
    assert setup_logging(stream=io.StringIO()).level == logging.ERROR
    monkeypatch.setenv("MIRRORPROBE_LOG_LEVEL", "bogus")
    assert setup_logging(stream=io.StringIO()).level == logging.WARNING


def test_default_stream_follows_current_stderr(capsys, package_logger):
    setup_logging("warning")
    logging.getLogger("mirrorprobe.cli").warning("bad flag")
    captured = capsys.readouterr()
    assert captured.err == "WARNING mirrorprobe.cli: bad flag\n"
    assert captured.out == ""
