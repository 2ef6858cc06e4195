r"""Default configuration values for retry executions.

This module provides the configuration constants shared by the retry
executors, the entry points and ``RetryPolicy``.
"""

from __future__ import annotations

__all__ = ["DEFAULT_BACKOFF_BASE", "DEFAULT_MAX_RETRIES", "ExhaustionPolicy"]

from enum import Enum

# Default maximum number of retry attempts when the caller gives no
# retry count and the backoff schedule is unbounded.
# Total attempts = max_retries + 1 (initial attempt)
DEFAULT_MAX_RETRIES = 3

# Base of the default exponential backoff
# Wait time = DEFAULT_BACKOFF_BASE ** attempt (attempt is 1-indexed)
# With 3.0: 1st retry waits 3s, 2nd waits 9s, 3rd waits 27s
DEFAULT_BACKOFF_BASE = 3.0


class ExhaustionPolicy(Enum):
    """What a bounded execution does once its retries are exhausted.

    Attributes:
        SWALLOW: The terminal-failure hook is invoked and the execution
            returns an ``EXHAUSTED`` outcome without raising.
        RAISE: The terminal-failure hook is invoked and
            ``RetryExhaustedError`` is raised.
    """

    SWALLOW = "swallow"
    RAISE = "raise"
