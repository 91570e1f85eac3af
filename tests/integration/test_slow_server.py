"""
Integration tests for cancelling requests against a real, slow HTTP server.

The server accepts the request, sends headers, then trickles the body one
byte every TRICKLE_INTERVAL seconds. A token fired partway through must
return control to the caller long before the body completes.
"""

import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from jobtailor.contexts.intake import fetch
from jobtailor.contexts.intake.fetch import fetch_job_markdown
from jobtailor.utils.exceptions import OperationCancelled
from jobtailor.utils.http import CancelToken
from jobtailor.utils.llm import invoke_chat_completion

TRICKLE_BODY = b"0123456789"
TRICKLE_INTERVAL = 0.3
FULL_BODY_SECONDS = len(TRICKLE_BODY) * TRICKLE_INTERVAL


class TrickleHandler(BaseHTTPRequestHandler):
    def _trickle(self):
        self.send_response(200)
        self.send_header("Content-Type", "text/plain")
        self.send_header("Content-Length", str(len(TRICKLE_BODY)))
        self.end_headers()
        try:
            for byte in TRICKLE_BODY:
                self.wfile.write(bytes([byte]))
                self.wfile.flush()
                time.sleep(TRICKLE_INTERVAL)
        except (BrokenPipeError, ConnectionResetError):
            pass

    def do_GET(self):
        self._trickle()

    def do_POST(self):
        self.rfile.read(int(self.headers.get("Content-Length", 0)))
        self._trickle()

    def log_message(self, format, *args):
        pass


@pytest.fixture
def slow_server(monkeypatch):
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")
    monkeypatch.setenv("no_proxy", "127.0.0.1,localhost")
    server = ThreadingHTTPServer(("127.0.0.1", 0), TrickleHandler)
    server.daemon_threads = True
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_address[1]}/"
    server.shutdown()
    server.server_close()


def cancel_after(token, seconds):
    timer = threading.Timer(seconds, token.cancel)
    timer.daemon = True
    timer.start()
    return timer


@pytest.mark.integration
def test_cancel_stops_slow_chat_completion(slow_server):
    """Test cancel() aborts a chat completion whose reply is still streaming in."""
    token = CancelToken()
    timer = cancel_after(token, 0.3)

    started = time.monotonic()
    try:
        with pytest.raises(OperationCancelled):
            invoke_chat_completion(
                f"{slow_server}chat/completions", "sk-test", b"{}", cancel=token, timeout=30.0
            )
    finally:
        timer.cancel()

    assert time.monotonic() - started < FULL_BODY_SECONDS / 2


@pytest.mark.integration
def test_deadline_stops_slow_chat_completion(slow_server):
    """Test a deadline aborts a chat completion whose reply is still streaming in."""
    token = CancelToken(timeout=0.5)

    started = time.monotonic()
    with pytest.raises(OperationCancelled):
        invoke_chat_completion(
            f"{slow_server}chat/completions", "sk-test", b"{}", cancel=token, timeout=30.0
        )

    assert time.monotonic() - started < FULL_BODY_SECONDS / 2


@pytest.mark.integration
def test_cancel_stops_slow_fetch(slow_server, monkeypatch):
    """Test cancel() aborts a posting fetch while the body is still arriving."""
    monkeypatch.setattr(fetch, "JINA_READER_URL", slow_server)
    token = CancelToken()
    timer = cancel_after(token, 0.3)

    started = time.monotonic()
    try:
        with pytest.raises(OperationCancelled):
            fetch_job_markdown("https://jobs.example.com/1", cancel=token, timeout=30.0)
    finally:
        timer.cancel()

    assert time.monotonic() - started < FULL_BODY_SECONDS / 2


@pytest.mark.integration
def test_deadline_stops_slow_fetch(slow_server, monkeypatch):
    """Test a deadline aborts a posting fetch while the body is still arriving."""
    monkeypatch.setattr(fetch, "JINA_READER_URL", slow_server)
    token = CancelToken(timeout=0.5)

    started = time.monotonic()
    with pytest.raises(OperationCancelled):
        fetch_job_markdown("https://jobs.example.com/1", cancel=token, timeout=30.0)

    assert time.monotonic() - started < FULL_BODY_SECONDS / 2


@pytest.mark.integration
def test_slow_fetch_completes_without_token(slow_server, monkeypatch):
    """Test the same server's body is read in full when nothing cancels."""
    monkeypatch.setattr(fetch, "JINA_READER_URL", slow_server)

    assert fetch_job_markdown("https://jobs.example.com/1", timeout=30.0) == "0123456789"
