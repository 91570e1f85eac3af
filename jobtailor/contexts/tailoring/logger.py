"""
Tailoring context logger.

Provides logging interface for tailoring context with automatic [tailor] prefix.
All tailoring modules should import from this module, not from loguru directly.
"""

from pathlib import Path

from loguru import logger

from jobtailor.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[tailor]"


def setup_tailoring_logger(
    log_dir: Path, model: str, reply_format: str, verbose: bool = False
) -> Path:
    """
    Setup logger for a tailoring session.

    Args:
        log_dir: Directory for this session's log file
        model: Model name recorded in the provenance header
        reply_format: Reply format recorded in the provenance header
        verbose: Echo DEBUG messages to the console as well as the file

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="tailor",
        log_dir=log_dir,
        extra_provenance={"Model": model, "Reply format": reply_format},
        console_level="DEBUG" if verbose else "INFO",
    )


# Wrapper functions with automatic [tailor] prefix


def _log_info(message: str) -> None:
    """Log info message with [tailor] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [tailor] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [tailor] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [tailor] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [tailor] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level tailoring-specific logging helpers


def log_request_start(model: str, num_nodes: int, payload_chars: int, with_cover: bool) -> None:
    """Log the shape of an outgoing tailoring request."""
    _log_info(f"Requesting tailored resume from {model}")
    _log_debug(f"  Job nodes: {num_nodes}")
    _log_debug(f"  Payload: {payload_chars} chars")
    _log_debug(f"  Cover letter requested: {'yes' if with_cover else 'no'}")


def log_score_ignored(raw_score: object) -> None:
    _log_warning(f"Ignoring unusable fit score: {raw_score!r}")


def log_cover_ignored() -> None:
    _log_debug("Reply contained a cover letter but none was requested; dropping it")


def log_reply_rejected(error: Exception) -> None:
    _log_error(f"Reply rejected: {error}")


def log_tailoring_result(company: str, role: str, score: int, tokens: int, elapsed: float) -> None:
    """Log a successful tailoring round trip."""
    _log_success(f"{role} at {company}: score {score}/10, {tokens} tokens ({elapsed:.2f}s)")
