r"""aretry - Retry arbitrary operations with configurable backoff.

This package executes a caller-supplied operation and automatically
retries it on failure according to a backoff schedule. An exception
filter separates retryable failures, which drive the retry loop, from
fatal ones, which propagate to the caller immediately. Hooks are
notified after each retryable failure and when retries are exhausted.

Key Features:
    - Bounded and forever executions, for blocking and async operations
    - Exception filters built from classifier functions or exception types
    - Backoff schedules from finite sequences or functions of the attempt
      (optionally of the failure and the execution context)
    - Default exponential backoff of ``3 ** attempt`` seconds
    - Default hooks logging at ERROR severity with structured fields
    - Selectable behavior on exhaustion: swallow and log, or raise
    - Reusable ``RetryPolicy`` objects

Example:
    ```pycon
    >>> from aretry import ExceptionFilter, execute_bounded
    >>> outcome = execute_bounded(
    ...     lambda: "ok",
    ...     ExceptionFilter.handle(ConnectionError, TimeoutError),
    ...     backoff=[1.0, 2.0, 5.0],
    ... )
    >>> outcome.succeeded, outcome.result
    (True, 'ok')

    ```
"""

from __future__ import annotations

__all__ = [
    "Context",
    "ExceptionFilter",
    "ExhaustionPolicy",
    "FailureInfo",
    "HookError",
    "OutcomeStatus",
    "RetryError",
    "RetryExhaustedError",
    "RetryInfo",
    "RetryOutcome",
    "RetryPolicy",
    "__version__",
    "execute_bounded",
    "execute_bounded_async",
    "execute_forever",
    "execute_forever_async",
    "log_failure",
    "log_retry",
]

from importlib.metadata import PackageNotFoundError, version

from aretry.callbacks import FailureInfo, RetryInfo, log_failure, log_retry
from aretry.context import Context
from aretry.core.config import ExhaustionPolicy
from aretry.exceptions import HookError, RetryError, RetryExhaustedError
from aretry.execute import execute_bounded, execute_forever
from aretry.execute_async import execute_bounded_async, execute_forever_async
from aretry.filters import ExceptionFilter
from aretry.policy import RetryPolicy
from aretry.retry import OutcomeStatus, RetryOutcome

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
