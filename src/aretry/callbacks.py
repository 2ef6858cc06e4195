r"""Callback types and default hooks for observability.

This module provides the data structures passed to the retry hooks and
the default hooks used when the caller does not supply one.

The callback system provides two lifecycle hooks:
- on_retry: Called after a retryable failure, before waiting for the
  backoff delay
- on_failure: Called when a bounded execution has exhausted its retries

The default hooks, ``log_retry`` and ``log_failure``, record the failure
at ERROR severity on the ``aretry.callbacks`` logger, with the delay, the
attempt number and a JSON snapshot of the execution context as
structured fields.

Example:
    ```pycon
    >>> from aretry import execute_bounded
    >>> from aretry.callbacks import RetryInfo
    >>> def print_retry(info: RetryInfo) -> None:
    ...     print(f"attempt {info.attempt} failed, waiting {info.delay}s")
    ...
    >>> outcome = execute_bounded(
    ...     sync_orders, ConnectionError, on_retry=print_retry
    ... )  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = ["FailureInfo", "RetryInfo", "log_failure", "log_retry"]

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from aretry.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from aretry.context import Context

logger: logging.Logger = logging.getLogger(__name__)


@dataclass
class RetryInfo:
    """Information passed to on_retry callback.

    Attributes:
        error: The failure that triggered the retry.
        delay: The delay in seconds before the next attempt.
        attempt: The number of the attempt that failed (1-indexed).
            The first retry is announced with attempt=1.
        context: The execution context.
        max_retries: Maximum number of retries, or ``None`` when the
            execution retries forever.
    """

    error: BaseException
    delay: float
    attempt: int
    context: Context
    max_retries: int | None = None


@dataclass
class FailureInfo:
    """Information passed to on_failure callback.

    Attributes:
        error: The failure raised by the final attempt.
        attempt: The final attempt number (1-indexed), i.e. the total
            number of attempts.
        delay: The delay in seconds waited before the final attempt
            (0.0 if there was no retry).
        total_time: Total time spent on all attempts including backoff
            (seconds).
        context: The execution context.
        max_retries: Maximum number of retries configured.
    """

    error: BaseException
    attempt: int
    delay: float
    total_time: float
    context: Context
    max_retries: int | None = None


def log_retry(info: RetryInfo) -> None:
    """Default on_retry hook: log the failure at ERROR severity.

    Args:
        info: The retry information.
    """
    log_structured(
        logger,
        logging.ERROR,
        f"Attempt {info.attempt} failed with {type(info.error).__name__}: {info.error} "
        f"(retrying in {info.delay:.2f}s)",
        exc_info=info.error,
        error_type=type(info.error).__name__,
        delay=info.delay,
        attempt=info.attempt,
        context=info.context.to_json(),
    )


def log_failure(info: FailureInfo) -> None:
    """Default on_failure hook: log the final failure at ERROR severity.

    The failure is not re-raised.

    Args:
        info: The failure information.
    """
    log_structured(
        logger,
        logging.ERROR,
        f"Operation failed after {info.attempt} attempts with "
        f"{type(info.error).__name__}: {info.error}",
        exc_info=info.error,
        error_type=type(info.error).__name__,
        delay=info.delay,
        attempt=info.attempt,
        total_time=info.total_time,
        context=info.context.to_json(),
    )
