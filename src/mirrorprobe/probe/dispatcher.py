# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Concurrency-bounded request dispatch.

Workers from a fixed-size thread pool only perform network I/O. Each finished
request is pushed onto a completion queue as a ``(request, response)`` pair and
handled by the single thread that calls :meth:`BoundedDispatcher.run_to_completion`,
so a completion handler never occupies a transport slot and every request is
handled exactly once.
"""

from __future__ import annotations

import logging
import queue
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor

from ..errors import ConfigurationError, is_timeout, transport_message
from ..http.client import HttpClient
from ..http.models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)

Completion = tuple[HttpRequest, HttpResponse]
CompletionHandler = Callable[[HttpRequest, HttpResponse], None]


class BoundedDispatcher:
    """Runs submitted requests with at most ``concurrency`` of them in flight.

    ``submit`` and ``run_to_completion`` are meant to be called from the same
    producer thread; the pool and the completion queue do their own locking.
    """

    def __init__(self, client: HttpClient, handler: CompletionHandler, concurrency: int):
        if concurrency < 1:
            raise ConfigurationError(f"concurrency must be at least 1: {concurrency}")
        self.client = client
        self.handler = handler
        self.concurrency = concurrency
        self._executor = ThreadPoolExecutor(max_workers=concurrency, thread_name_prefix="probe")
        self._completions: queue.Queue[Completion] = queue.Queue()
        self._submitted = 0
        self._handled = 0
        self._closed = False

    @property
    def submitted(self) -> int:
        return self._submitted

    @property
    def handled(self) -> int:
        return self._handled

    def submit(self, request: HttpRequest) -> None:
        """Queue a request; never blocks, execution is what the pool bounds."""
        if self._closed:
            raise RuntimeError("dispatcher has already run to completion")
        self._executor.submit(self._execute, request)
        self._submitted += 1

    def _execute(self, request: HttpRequest) -> None:
        response: HttpResponse | None = None
        try:
            response = self.client.request(request)
        except Exception as exc:  # noqa: BLE001
            response = HttpResponse(
                ok=False,
                url=request.url,
                timed_out=is_timeout(exc),
                error_message=transport_message(exc),
                error_type=type(exc).__name__,
            )
        finally:
            # A BaseException still propagates into the future, but the
            # consumer must see exactly one completion per submitted request.
            if response is None:
                response = HttpResponse(
                    ok=False,
                    url=request.url,
                    error_message="request aborted",
                    error_type="Aborted",
                )
            self._completions.put((request, response))

    def _handle(self, request: HttpRequest, response: HttpResponse) -> None:
        try:
            self.handler(request, response)
        except Exception:  # noqa: BLE001
            logger.exception("Completion handler failed for %s", request.url)

    def run_to_completion(self) -> int:
        """Block until every submitted request has completed and been handled.

        Returns the number of handled completions, always equal to the number
        of submitted requests on a normal return.
        """
        self._closed = True
        try:
            while self._handled < self._submitted:
                request, response = self._completions.get()
                self._handle(request, response)
                self._handled += 1
        finally:
            self.shutdown(cancel_pending=self._handled < self._submitted)
        logger.debug("Dispatcher finished: %d requests handled", self._handled)
        return self._handled

    def shutdown(self, *, cancel_pending: bool = False) -> None:
        self._closed = True
        self._executor.shutdown(wait=True, cancel_futures=cancel_pending)

    def __enter__(self) -> BoundedDispatcher:
        return self

    def __exit__(self, exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.shutdown(cancel_pending=exc_type is not None)
