"""
Exception taxonomy shared by the intake and tailoring contexts.

Each class carries enough context for the caller to tell apart
"fix your input", "fix your credentials", "try again later" and
"the upstream model misbehaved".
"""

from typing import Optional


class JobTailorError(Exception):
    """Base class for all jobtailor failures."""


class EncodingError(JobTailorError):
    """
    Exception raised when the model payload or request cannot be serialized.

    This indicates a data-shape bug (e.g., a node whose content is not a string)
    and is never retried.

    Attributes:
        message: Error description
        original_error: The underlying serialization error
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.message = message
        self.original_error = original_error

        parts = [message]
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))


class AuthError(JobTailorError):
    """
    Exception raised when the API key is missing or rejected by the service.

    Attributes:
        message: Error description
        status_code: HTTP status returned by the service (None when the key
            was rejected locally before any request was made)
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code

        if status_code is not None:
            message = f"{message} (HTTP {status_code})"
        super().__init__(message)


class RateLimited(JobTailorError):
    """
    Exception raised when throttling outlasts the bounded backoff limit.

    Attributes:
        attempts: Number of requests made before giving up
        next_backoff_ms: The delay that would have exceeded the cap
    """

    def __init__(self, attempts: int, next_backoff_ms: int):
        self.attempts = attempts
        self.next_backoff_ms = next_backoff_ms
        super().__init__(
            f"rate limited: max retries exceeded after {attempts} attempts "
            f"(next backoff {next_backoff_ms}ms over cap)"
        )


class TransportError(JobTailorError):
    """
    Exception raised for any non-success HTTP status (other than throttling and
    auth rejections) or for network failures.

    Attributes:
        message: Error description
        status_code: HTTP status, or None for network-level failures
        body: Leading part of the response body, if any
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        self.message = message
        self.status_code = status_code
        self.body = body

        parts = [message]
        if status_code is not None:
            parts.append(f"Status: {status_code}")
        if body:
            snippet = body[:200] + "..." if len(body) > 200 else body
            parts.append(f"Body: {snippet}")

        super().__init__("\n".join(parts))


class MalformedReply(JobTailorError):
    """
    Exception raised when the model reply cannot be used.

    Covers undecodable envelopes, replies without choices, and replies missing
    any of the mandatory fields (company, role, resume).

    Attributes:
        message: Error description
        field_lengths: Length of each extracted field (0 when absent)
    """

    def __init__(self, message: str, field_lengths: Optional[dict[str, int]] = None):
        self.message = message
        self.field_lengths = field_lengths or {}

        parts = [message]
        if self.field_lengths:
            summary = ", ".join(
                f"{name}={'missing' if length == 0 else f'{length} chars'}"
                for name, length in self.field_lengths.items()
            )
            parts.append(f"Fields: {summary}")

        super().__init__("\n".join(parts))

    @property
    def missing_fields(self) -> list[str]:
        """Names of fields that were empty or absent."""
        return [name for name, length in self.field_lengths.items() if length == 0]


class OperationCancelled(JobTailorError):
    """Exception raised when the caller's cancel token fires or its deadline passes."""
