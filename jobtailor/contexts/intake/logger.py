"""
Intake context logger.

Provides logging interface for intake context with automatic [intake] prefix.
All intake modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[intake]"


def _log_info(message: str) -> None:
    """Log info message with [intake] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [intake] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [intake] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


# High-level intake-specific logging helpers


def log_fetch_start(url: str) -> None:
    _log_info(f"Fetching job posting: {url}")


def log_fetch_result(url: str, num_chars: int, truncated: bool) -> None:
    _log_info(f"Fetched {num_chars} chars from {url}")
    if truncated:
        _log_warning("Posting exceeded the fetch limit and was truncated")


def log_parse_summary(num_lines: int, num_built: int, num_kept: int, counts: dict) -> None:
    """
    Log how many lines survived classification and filtering.

    Args:
        num_lines: Non-blank input lines
        num_built: Nodes produced by build_nodes()
        num_kept: Nodes surviving filter_nodes()
        counts: NodeType -> count over the kept nodes
    """
    _log_debug(
        f"Parsed {num_lines} lines: {num_built} classified, "
        f"{num_lines - num_built} discarded as long prose, {num_built - num_kept} dropped as noise"
    )
    for node_type, count in counts.items():
        _log_debug(f"  {node_type.value}: {count}")
