"""
HTTP helpers shared by the page fetcher and the LLM client.

Provides a cancellation token for bounding waits and requests, a bounded
retry-on-throttle loop, and status-code to exception mapping.

Blocking network calls run on a worker thread so that the caller can stop
waiting the moment its token is cancelled or its deadline passes, even while
a response body is still arriving.
"""

import functools
import threading
import time
from typing import Callable, Optional, TypeVar

import requests
from loguru import logger

from jobtailor.utils.exceptions import (
    AuthError,
    OperationCancelled,
    RateLimited,
    TransportError,
)

# Retry configuration (milliseconds)
INITIAL_BACKOFF_MS = 500
BACKOFF_MULTIPLIER = 5
MAX_BACKOFF_MS = 10_000

HTTP_TOO_MANY_REQUESTS = 429
AUTH_REJECTION_STATUSES = (401, 403)

T = TypeVar("T")


class CancelToken:
    """
    Caller-owned cancellation signal with an optional deadline.

    The token can be cancelled explicitly from another thread via cancel(),
    or expire when its deadline (seconds from creation) passes. Backoff waits
    go through wait() and in-flight calls through run_cancellable(), so either
    event aborts them promptly.
    """

    def __init__(self, timeout: Optional[float] = None):
        self._event = threading.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None
        self._lock = threading.Lock()
        self._callbacks: list[Callable[[], None]] = []

    def cancel(self) -> None:
        self._event.set()
        with self._lock:
            callbacks = list(self._callbacks)
        for callback in callbacks:
            callback()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None when there is no deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise OperationCancelled("operation cancelled by caller")
        if self.cancelled:
            raise OperationCancelled("deadline exceeded")

    def register(self, callback: Callable[[], None]) -> None:
        """
        Call `callback` from cancel() until unregistered.

        Runs immediately if the token was already cancelled explicitly.
        """
        with self._lock:
            self._callbacks.append(callback)
        if self._event.is_set():
            callback()

    def unregister(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    def wait(self, seconds: float) -> None:
        """
        Sleep for `seconds` unless cancelled first.

        Raises:
            OperationCancelled: If cancel() is called or the deadline passes
                before the wait completes
        """
        self.raise_if_cancelled()

        remaining = self.remaining()
        if remaining is not None and remaining < seconds:
            if self._event.wait(remaining):
                raise OperationCancelled("operation cancelled during backoff")
            raise OperationCancelled("deadline exceeded during backoff")

        if self._event.wait(seconds):
            raise OperationCancelled("operation cancelled during backoff")

    def clip_timeout(self, timeout: float) -> float:
        """
        Shorten a request timeout so it never outlives the deadline.

        Raises:
            OperationCancelled: If no time is left
        """
        remaining = self.remaining()
        if remaining is None:
            return timeout
        if remaining <= 0:
            raise OperationCancelled("deadline exceeded")
        return min(timeout, remaining)


def run_cancellable(
    operation: Callable[[], T],
    cancel: CancelToken,
    description: str,
    discard: Optional[Callable[[T], None]] = None,
) -> T:
    """
    Run a blocking call on a worker thread and wait for it or the token.

    If the token fires first the call is abandoned: the worker keeps running
    until its own socket timeout, and `discard` is applied to whatever it
    eventually returns (e.g., to close a late response).

    Args:
        operation: Zero-argument blocking call
        cancel: Token bounding the wait
        description: Short label for log messages and the worker thread name
        discard: Cleanup for a result nobody will use

    Returns:
        The operation's result

    Raises:
        OperationCancelled: If the token fires before the result is used
        Exception: Whatever the operation raised
    """
    cancel.raise_if_cancelled()

    finished = threading.Event()
    lock = threading.Lock()
    state = {"abandoned": False}

    def worker() -> None:
        try:
            result, error = operation(), None
        except Exception as e:
            result, error = None, e

        with lock:
            state["result"], state["error"] = result, error
            abandoned = state["abandoned"]
        finished.set()

        if not abandoned:
            return
        if error is not None:
            logger.debug(f"[http] abandoned {description} call failed late: {error}")
        elif discard is not None:
            discard(result)

    thread = threading.Thread(target=worker, name=f"{description} call", daemon=True)
    thread.start()

    cancel.register(finished.set)
    try:
        while not finished.is_set() and not cancel.cancelled:
            finished.wait(cancel.remaining())
    finally:
        cancel.unregister(finished.set)

    with lock:
        completed = "error" in state
        if cancel.cancelled:
            state["abandoned"] = True

    if cancel.cancelled:
        if completed and state["error"] is None and discard is not None:
            discard(state["result"])
        logger.warning(f"[http] {description} abandoned: token fired mid-request")
        cancel.raise_if_cancelled()

    if state["error"] is not None:
        raise state["error"]
    return state["result"]


def _close_response(response: requests.Response) -> None:
    response.close()


def request_with_backoff(
    send: Callable[[float], requests.Response],
    cancel: CancelToken,
    timeout: float,
    description: str,
) -> requests.Response:
    """
    Issue a request, retrying only on HTTP 429 with escalating backoff.

    Delays start at INITIAL_BACKOFF_MS and grow by BACKOFF_MULTIPLIER after each
    throttled attempt. When the next delay would exceed MAX_BACKOFF_MS the call
    fails instead of waiting again, so three consecutive 429s produce waits of
    500ms and 2500ms and then RateLimited.

    Args:
        send: Callable performing one request, given the timeout to use
        cancel: Token bounding the requests, their bodies and the waits
        timeout: Per-request timeout in seconds (clipped to the deadline)
        description: Short label for log messages (e.g., "deepseek")

    Returns:
        The first non-429 response

    Raises:
        RateLimited: If throttling outlasts the backoff limit
        TransportError: On network failure
        OperationCancelled: If the token fires before, during or between attempts
    """
    backoff_ms = INITIAL_BACKOFF_MS
    attempts = 0

    while True:
        cancel.raise_if_cancelled()
        attempts += 1
        attempt = functools.partial(send, cancel.clip_timeout(timeout))

        try:
            response = run_cancellable(attempt, cancel, description, discard=_close_response)
        except requests.RequestException as e:
            if cancel.cancelled:
                raise OperationCancelled(f"{description} request aborted: {e}") from e
            raise TransportError(f"{description} request failed: {e}") from e

        if response.status_code != HTTP_TOO_MANY_REQUESTS:
            return response

        response.close()

        if backoff_ms > MAX_BACKOFF_MS:
            logger.warning(f"[http] {description} throttled {attempts} times, giving up")
            raise RateLimited(attempts=attempts, next_backoff_ms=backoff_ms)

        logger.warning(
            f"[http] {description} rate limited, retrying in {backoff_ms}ms (attempt {attempts})"
        )
        cancel.wait(backoff_ms / 1000)
        backoff_ms *= BACKOFF_MULTIPLIER


def raise_for_status(response: requests.Response, description: str) -> None:
    """
    Map a non-success response to the exception taxonomy.

    Raises:
        AuthError: On 401/403
        TransportError: On any other non-2xx status
    """
    status = response.status_code
    if 200 <= status < 300:
        return

    if status in AUTH_REJECTION_STATUSES:
        raise AuthError(f"{description} rejected the API key", status_code=status)

    raise TransportError(
        f"{description} returned status: {status}",
        status_code=status,
        body=response.text or "",
    )
