# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import datetime as dt
import io
import random
from collections import Counter

import pytest

from mirrorprobe.config import DEFAULT_FILES
from mirrorprobe.errors import ConfigurationError
from mirrorprobe.http.models import HttpResponse
from mirrorprobe.probe.builder import build_request, build_url, http_date
from mirrorprobe.probe.classifier import ClassifiedOutcome, OutcomeKind, classify
from mirrorprobe.probe.reporter import Reporter, format_report_line
from mirrorprobe.probe.sampler import Target, sample_target

CORE_DB_URL = "http://localhost:9129/repo/core/os/x86_64/core.db"


def _chi_square(counts: Counter, categories, draws: int) -> float:
    expected = draws / len(categories)
    return sum((counts[item] - expected) ** 2 / expected for item in categories)


def test_sample_target_returns_members_of_both_sets():
    rng = random.Random(7)
    hosts = ["a.example", "b.example"]
    for _ in range(50):
        target = sample_target(hosts, DEFAULT_FILES, rng)
        assert target.host in hosts
        assert target.path in DEFAULT_FILES


def test_sample_target_is_reproducible_with_seed():
    hosts = ["h1", "h2", "h3"]
    first = [sample_target(hosts, DEFAULT_FILES, random.Random(42)) for _ in range(3)]
    second = [sample_target(hosts, DEFAULT_FILES, random.Random(42)) for _ in range(3)]
    assert first == second


@pytest.mark.parametrize("hosts,paths", [([], ["core.db"]), (["localhost"], []), ((), ())])
def test_sample_target_rejects_empty_sets(hosts, paths):
    with pytest.raises(ConfigurationError):
        sample_target(hosts, paths, random.Random(0))


def test_sample_target_distribution_is_uniform():
    rng = random.Random(1234)
    hosts = ["h1", "h2", "h3"]
    draws = 60_000
    host_counts: Counter = Counter()
    path_counts: Counter = Counter()
    for _ in range(draws):
        target = sample_target(hosts, DEFAULT_FILES, rng)
        host_counts[target.host] += 1
        path_counts[target.path] += 1

    # Critical chi-square values at p=0.001 for 2 and 5 degrees of freedom.
    assert _chi_square(host_counts, hosts, draws) < 13.816
    assert _chi_square(path_counts, DEFAULT_FILES, draws) < 20.515


def test_http_date_is_imf_fixdate_at_midnight():
    assert http_date(dt.date(1994, 11, 6)) == "Sun, 06 Nov 1994 00:00:00 GMT"
    assert http_date(dt.date(2026, 10, 18)) == "Sun, 18 Oct 2026 00:00:00 GMT"


def test_build_request_shape():
    target = Target(host="localhost", path="core/os/x86_64/core.db")
    request = build_request(target, port=9129, prefix="repo", today=dt.date(2026, 10, 18), timeout=2.5)

    assert request.url == CORE_DB_URL
    assert request.method == "HEAD"
    assert request.headers == {"If-Modified-Since": "Sun, 18 Oct 2026 00:00:00 GMT"}
    assert request.allow_redirects is False
    assert request.timeout == 2.5


def test_build_url_normalizes_slashes_and_empty_prefix():
    target = Target(host="mirror", path="/extra/os/x86_64/extra.db")
    assert build_url(target, port=8080, prefix="/repo/") == "http://mirror:8080/repo/extra/os/x86_64/extra.db"
    assert build_url(target, port=8080, prefix="") == "http://mirror:8080/extra/os/x86_64/extra.db"


@pytest.mark.parametrize("status", [304, 307])
def test_not_modified_and_temporary_redirect_are_suppressed(status):
    outcome = classify(HttpResponse(ok=True, status_code=status))
    assert outcome.kind is OutcomeKind.SUPPRESSED
    assert outcome.reportable is False


def test_suppression_wins_over_timeout_flag():
    outcome = classify(HttpResponse(ok=True, status_code=304, timed_out=True))
    assert outcome.kind is OutcomeKind.SUPPRESSED


def test_timeout_wins_over_transport_failure():
    outcome = classify(HttpResponse(ok=False, timed_out=True, error_message="Operation timed out"))
    assert outcome == ClassifiedOutcome.timeout()
    assert outcome.description == "time out"


@pytest.mark.parametrize("status", [0, None])
def test_missing_status_is_transport_failure(status):
    outcome = classify(HttpResponse(ok=False, status_code=status, error_message="Could not resolve host"))
    assert outcome == ClassifiedOutcome.transport_failure("Could not resolve host")
    assert outcome.description == "Could not resolve host"


@pytest.mark.parametrize("status", [200, 301, 404, 500, 503])
def test_other_statuses_are_http_errors(status):
    outcome = classify(HttpResponse(ok=True, status_code=status))
    assert outcome == ClassifiedOutcome.http_error(status)
    assert outcome.description == str(status)


def test_classify_is_pure():
    responses = [
        HttpResponse(ok=True, status_code=200),
        HttpResponse(ok=False, timed_out=True),
        HttpResponse(ok=True, status_code=307),
        HttpResponse(ok=False, status_code=0, error_message="Connection refused"),
    ]
    forward = [classify(resp) for resp in responses]
    backward = [classify(resp) for resp in reversed(responses)]
    assert forward == list(reversed(backward))
    assert forward == [classify(resp) for resp in responses]


def test_reporter_scenario_suppressed_writes_nothing():
    stream = io.StringIO()
    written = Reporter(stream).report(CORE_DB_URL, classify(HttpResponse(ok=True, status_code=304)))
    assert written is False
    assert stream.getvalue() == ""


def test_reporter_scenario_http_200():
    stream = io.StringIO()
    Reporter(stream).report(CORE_DB_URL, classify(HttpResponse(ok=True, status_code=200)))
    assert stream.getvalue() == f"Url {CORE_DB_URL} got error: 200\n"


def test_reporter_scenario_timeout_and_transport_failure():
    stream = io.StringIO()
    reporter = Reporter(stream)
    reporter.report("http://h:1/a", classify(HttpResponse(ok=False, timed_out=True)))
    reporter.report("http://h:1/b", classify(HttpResponse(ok=False, status_code=0, error_message="Could not resolve host")))
    assert stream.getvalue().splitlines() == [
        "Url http://h:1/a got error: time out",
        "Url http://h:1/b got error: Could not resolve host",
    ]


def test_reporter_defaults_to_stdout(capsys):
    Reporter().report("http://x:1/y", ClassifiedOutcome.http_error(502))
    assert capsys.readouterr().out == "Url http://x:1/y got error: 502\n"


def test_format_report_line():
    assert format_report_line("u", ClassifiedOutcome.http_error(404)) == "Url u got error: 404"
