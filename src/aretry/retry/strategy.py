r"""Retry strategy for calculating backoff delays.

This module provides the RetryStrategy class for calculating retry
delays and resolving the retry bound of an execution.
"""

from __future__ import annotations

__all__ = ["RetryStrategy", "resolve_max_retries"]

import logging
from typing import TYPE_CHECKING

from aretry.backoff import ExponentialBackoff
from aretry.core.config import DEFAULT_MAX_RETRIES
from aretry.core.validation import validate_delay

if TYPE_CHECKING:
    from aretry.backoff import BaseBackoff
    from aretry.context import Context

logger: logging.Logger = logging.getLogger(__name__)


def resolve_max_retries(retry_count: int | None, backoff: BaseBackoff) -> int:
    """Resolve the retry bound of a bounded execution.

    A finite backoff schedule caps the requested retry count. When no
    retry count is requested, the length of a finite schedule is used,
    and ``DEFAULT_MAX_RETRIES`` otherwise.

    Args:
        retry_count: The requested number of retries, or ``None``.
        backoff: The backoff schedule.

    Returns:
        The maximum number of retries.

    Example:
        ```pycon
        >>> from aretry.backoff import ExponentialBackoff, SequenceBackoff
        >>> from aretry.retry.strategy import resolve_max_retries
        >>> resolve_max_retries(5, SequenceBackoff([1, 2]))
        2
        >>> resolve_max_retries(None, SequenceBackoff([1, 2, 3]))
        3
        >>> resolve_max_retries(None, ExponentialBackoff())
        3
        >>> resolve_max_retries(7, ExponentialBackoff())
        7

        ```
    """
    limit = backoff.max_retries
    if retry_count is None:
        return DEFAULT_MAX_RETRIES if limit is None else limit
    if limit is None:
        return retry_count
    return min(retry_count, limit)


class RetryStrategy:
    """Strategy for calculating retry delays with a backoff schedule.

    Args:
        backoff: Backoff schedule. Defaults to ExponentialBackoff().

    Attributes:
        backoff: Backoff schedule.
    """

    def __init__(self, backoff: BaseBackoff | None = None) -> None:
        self.backoff: BaseBackoff = backoff if backoff is not None else ExponentialBackoff()

    def max_retries(self, requested: int | None) -> int | None:
        """Cap a retry bound with the number of retries the schedule can
        supply.

        Args:
            requested: The requested bound, or ``None`` to retry forever.

        Returns:
            The effective bound, or ``None`` to retry forever.
        """
        if requested is None:
            return None
        return resolve_max_retries(requested, self.backoff)

    def calculate_delay(
        self,
        attempt: int,
        error: BaseException | None = None,
        context: Context | None = None,
    ) -> float:
        """Calculate delay before next retry.

        Args:
            attempt: The number of the attempt that failed (1-indexed).
            error: The failure raised by the attempt.
            context: The execution context.

        Returns:
            Sleep time in seconds.

        Raises:
            ValueError: If the schedule returns a negative delay.
        """
        delay = self.backoff.calculate(attempt, error, context)
        validate_delay(delay, attempt=attempt)
        logger.debug(f"Waiting {delay:.2f}s before retry (attempt {attempt})")
        return delay
