"""
Shared utilities for jobtailor.

Common functionality used across contexts:
- HTTP retry and cancellation
- LLM request/reply handling
- Settings and workspace paths
- Logging setup
"""

from jobtailor.utils.timestamp import session_stamp, today

__all__ = ["session_stamp", "today"]
