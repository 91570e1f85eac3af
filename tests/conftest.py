"""Shared fixtures: sample postings and in-memory HTTP doubles."""

import json

import pytest
import requests

from jobtailor.utils.http import CancelToken

# Reader-proxy markdown for a VML Copywriter posting (ATX headings, setext title)
VML_POSTING = """Title: Copywriter | Careers | VML

URL Source: https://www.vml.com/careers/job/8234798002-ca-copywriter?gh_jid=8234798002

Markdown Content:
Copywriter
----------

#### **Brand:** VML

#### **Capability:** Creative

#### **Location:**Toronto, Canada

#### **Last Updated:**2/25/2026

#### **Requisition ID:**12108

### **About VML**

VML is a leading creative company that combines brand experience, customer experience,
and commerce, creating connected brands to drive growth.

**Key Responsibilities**

*   Translate briefs into messaging strategies, narratives, and copy across digital,
    social, email, web, print, OOH, and video/radio.

*   Edit and proof for grammar, style, and consistency; manage file/version control.

**Qualifications**

*   3-4 years of professional copywriting experience (agency or in-house).

*   Portfolio showcasing concept-driven campaigns, digital-first copy, performance
    creative, and cohesive brand storytelling.

$65,000—$115,000 CAD
"""

# Reader-proxy markdown for a Felix Senior Copywriter posting (bold-paragraph headings)
FELIX_POSTING = """Title: Senior Copywriter

URL Source: https://jobs.ashbyhq.com/Felix/0d65c993-c9e7-4957-a454-b6c6186e3f1b

Markdown Content:
[Overview](https://jobs.ashbyhq.com/Felix/0d65c993)[Application](https://jobs.ashbyhq.com/Felix/0d65c993/application)

**About Felix**

Felix is Canada's first end-to-end platform providing on-demand treatment for everyday health.

**The Role**

We are seeking an experienced senior copywriter to join the Felix brand team.

**In this role, you will:**

*   Establish tone of voice, consistent terminology, and tonal considerations for the brand

*   Write scripts for both brand & functional level TVCs for mass-reach campaigns

**We're looking for someone who:**

*   Has 7+ years of writing experience, including 3+ years of in-house experience

*   Is comfortable co-writing and receiving creative briefs

**Benefits**

*   Remote first, work from anywhere in Canada

**Location:**Toronto, Remote (Canada). We have an office in Toronto.
"""

BASE_RESUME = "JANE DOE\nCopywriter\n\nEXPERIENCE\n- Wrote campaigns for national brands"
BASE_COVER = "Dear Hiring Manager,\n\nI write words that sell.\n\nJane"


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code=200, content=b""):
        self.status_code = status_code
        self.content = content.encode("utf-8") if isinstance(content, str) else content
        self.closed = False

    @property
    def text(self):
        return self.content.decode("utf-8", errors="replace")

    def iter_content(self, chunk_size=1):
        for start in range(0, len(self.content), chunk_size):
            yield self.content[start : start + chunk_size]

    def close(self):
        self.closed = True


class FakeSession:
    """
    Replays queued responses and records every call.

    Queue entries may be FakeResponse instances or exceptions to raise.
    """

    def __init__(self, responses=()):
        self.responses = list(responses)
        self.calls = []

    def queue(self, *responses):
        self.responses.extend(responses)

    def _next(self, method, url, kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if not self.responses:
            raise AssertionError(f"unexpected {method} {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def post(self, url, **kwargs):
        return self._next("POST", url, kwargs)

    def get(self, url, **kwargs):
        return self._next("GET", url, kwargs)

    @property
    def posted_bodies(self):
        return [json.loads(call["data"]) for call in self.calls if call["method"] == "POST"]


class ClosingSession(FakeSession):
    """FakeSession usable as a context manager that records close()."""

    def __init__(self, responses=()):
        super().__init__(responses)
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        self.closed = True


class RecordingCancelToken(CancelToken):
    """CancelToken whose backoff waits return immediately and are recorded."""

    def __init__(self, timeout=None):
        super().__init__(timeout=timeout)
        self.waits = []

    def wait(self, seconds):
        self.raise_if_cancelled()
        self.waits.append(seconds)


def chat_envelope(content, total_tokens=1234):
    """Serialized chat-completions reply with a single choice."""
    return json.dumps(
        {
            "id": "chatcmpl-1",
            "choices": [{"index": 0, "message": {"role": "assistant", "content": content}}],
            "usage": {"prompt_tokens": 1000, "completion_tokens": 234, "total_tokens": total_tokens},
        }
    )


def tagged_reply(company="VML", role="Copywriter", score="8", resume="TAILORED RESUME", cover=None):
    parts = [
        f"<company>{company}</company>",
        f"<role>{role}</role>",
        f"<score>{score}</score>",
        f"<resume>\n{resume}\n</resume>",
    ]
    if cover is not None:
        parts.append(f"<cover>\n{cover}\n</cover>")
    return "\n".join(parts)


@pytest.fixture
def vml_posting():
    return VML_POSTING


@pytest.fixture
def felix_posting():
    return FELIX_POSTING


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def cancel_token():
    return RecordingCancelToken()


@pytest.fixture
def connection_error():
    return requests.ConnectionError("connection refused")


@pytest.fixture
def owned_session(monkeypatch):
    """Make requests.Session() hand out one ClosingSession, returned for inspection."""
    session = ClosingSession()
    monkeypatch.setattr(requests, "Session", lambda: session)
    return session
