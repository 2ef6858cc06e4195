r"""Retry decision logic for failed attempts.

This module provides the RetryDecider class that decides, for each
failure, whether the execution retries, gives up, or lets the failure
escape to the caller.
"""

from __future__ import annotations

__all__ = ["RetryDecider", "RetryDecision"]

import logging
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aretry.filters import ExceptionFilter

logger: logging.Logger = logging.getLogger(__name__)


class RetryDecision(Enum):
    """Decision taken after a failed attempt.

    Attributes:
        RETRY: The failure is retryable and retries remain.
        EXHAUSTED: The failure is retryable but no retry remains.
        FATAL: The failure is rejected by the filter and must propagate.
    """

    RETRY = "retry"
    EXHAUSTED = "exhausted"
    FATAL = "fatal"


class RetryDecider:
    """Decides whether a failed attempt should be retried.

    Args:
        exception_filter: Filter classifying failures as retryable or fatal.

    Attributes:
        exception_filter: Filter classifying failures as retryable or fatal.
    """

    def __init__(self, exception_filter: ExceptionFilter) -> None:
        self.exception_filter = exception_filter

    def decide(
        self,
        error: BaseException,
        attempt: int,
        max_retries: int | None,
    ) -> tuple[RetryDecision, str]:
        """Determine what to do after a failed attempt.

        The filter is always consulted first: a fatal failure is never
        reported as exhausted.

        Args:
            error: The failure raised by the attempt.
            attempt: The number of the attempt that failed (1-indexed).
            max_retries: Maximum number of retries, or ``None`` to
                retry forever.

        Returns:
            Tuple of (decision, reason).

        Example:
            ```pycon
            >>> from aretry.filters import ExceptionFilter
            >>> from aretry.retry import RetryDecider
            >>> decider = RetryDecider(ExceptionFilter.handle(TimeoutError))
            >>> decider.decide(TimeoutError(), attempt=1, max_retries=2)
            (<RetryDecision.RETRY: 'retry'>, 'TimeoutError')
            >>> decider.decide(TimeoutError(), attempt=3, max_retries=2)
            (<RetryDecision.EXHAUSTED: 'exhausted'>, 'max retries exhausted')
            >>> decider.decide(KeyError(), attempt=1, max_retries=2)
            (<RetryDecision.FATAL: 'fatal'>, 'KeyError rejected by filter')

            ```
        """
        if not self.exception_filter.is_retryable(error):
            return (RetryDecision.FATAL, f"{type(error).__name__} rejected by filter")
        if max_retries is not None and attempt > max_retries:
            return (RetryDecision.EXHAUSTED, "max retries exhausted")
        return (RetryDecision.RETRY, f"{type(error).__name__}")
