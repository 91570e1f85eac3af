"""
Job posting retrieval through the r.jina.ai content-extraction proxy.

The proxy renders the target page and returns markdown prefixed with
"Title:", "URL Source:" and "Markdown Content:" header lines, which the
classifier tags as source metadata.
"""

import functools
import os
from typing import Optional

import requests
from dotenv import load_dotenv

from jobtailor.contexts.intake.logger import log_fetch_result, log_fetch_start
from jobtailor.utils.exceptions import OperationCancelled, TransportError
from jobtailor.utils.http import (
    CancelToken,
    raise_for_status,
    request_with_backoff,
    run_cancellable,
)

load_dotenv()

JINA_READER_URL = os.getenv("JINA_READER_URL", "https://r.jina.ai/")

# Postings beyond this many bytes are truncated
MAX_FETCH_BYTES = 100_000

DEFAULT_FETCH_TIMEOUT = 60.0


def build_reader_url(target: str) -> str:
    """Prefix the target URL with the reader proxy."""
    return f"{JINA_READER_URL}{target.strip()}"


def fetch_job_markdown(
    url: str,
    *,
    session: Optional[requests.Session] = None,
    cancel: Optional[CancelToken] = None,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
) -> str:
    """
    Fetch a job posting as markdown.

    Args:
        url: Posting URL (e.g., a Greenhouse, Lever or Ashby job page)
        session: Optional requests session for connection reuse; without one a
            private session is opened and closed around the fetch
        cancel: Optional token bounding the fetch
        timeout: Per-attempt timeout in seconds

    Returns:
        Markdown text, truncated to MAX_FETCH_BYTES

    Raises:
        ValueError: If url is blank
        RateLimited: Throttling outlasted the backoff limit
        TransportError: Any other non-2xx status or network failure
        OperationCancelled: The token fired before completion
    """
    if not url or not url.strip():
        raise ValueError("url must not be empty")

    if session is None:
        with requests.Session() as owned:
            return fetch_job_markdown(url, session=owned, cancel=cancel, timeout=timeout)

    cancel = cancel or CancelToken()
    reader_url = build_reader_url(url)

    def send(attempt_timeout: float) -> requests.Response:
        return session.get(reader_url, timeout=attempt_timeout, stream=True)

    log_fetch_start(url)
    response = request_with_backoff(send, cancel, timeout, description="jina reader")
    try:
        raise_for_status(response, "jina reader")
        read_body = functools.partial(_read_limited, response, MAX_FETCH_BYTES, cancel)
        body, truncated = run_cancellable(read_body, cancel, "jina reader body")
    except requests.RequestException as e:
        if cancel.cancelled:
            raise OperationCancelled(f"jina reader body aborted: {e}") from e
        raise TransportError(f"jina reader body read failed: {e}") from e
    finally:
        response.close()

    text = body.decode("utf-8", errors="replace")
    log_fetch_result(url, len(text), truncated)
    return text


def _read_limited(
    response: requests.Response, limit: int, cancel: CancelToken
) -> tuple[bytes, bool]:
    """Read at most `limit` bytes of the body; report whether more was available."""
    buffer = bytearray()
    for chunk in response.iter_content(chunk_size=8192):
        cancel.raise_if_cancelled()
        buffer.extend(chunk)
        if len(buffer) > limit:
            return bytes(buffer[:limit]), True
    return bytes(buffer), False
