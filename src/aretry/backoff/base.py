r"""Abstract base class for backoff schedules."""

from __future__ import annotations

__all__ = ["BaseBackoff", "to_seconds"]

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aretry.context import Context


def to_seconds(duration: float | timedelta) -> float:
    """Convert a duration to seconds.

    Args:
        duration: The duration, in seconds or as a ``timedelta``.

    Returns:
        The duration in seconds.

    Example:
        ```pycon
        >>> from datetime import timedelta
        >>> from aretry.backoff.base import to_seconds
        >>> to_seconds(timedelta(milliseconds=1500))
        1.5
        >>> to_seconds(2)
        2.0

        ```
    """
    if isinstance(duration, timedelta):
        return duration.total_seconds()
    return float(duration)


class BaseBackoff(ABC):
    """Abstract base class for backoff schedules.

    A backoff schedule determines how long to wait before retrying a
    failed operation based on the attempt number and, optionally, the
    failure and the execution context.
    """

    @property
    def max_retries(self) -> int | None:
        """The number of retries the schedule can supply, or ``None``
        if the schedule is unbounded."""
        return None

    @abstractmethod
    def calculate(
        self,
        attempt: int,
        error: BaseException | None = None,
        context: Context | None = None,
    ) -> float:
        """Calculate the backoff delay after a failed attempt.

        Args:
            attempt: The number of the attempt that just failed
                (1-indexed). For example, attempt=1 is the delay before
                the first retry, attempt=2 the delay before the second
                retry, etc.
            error: The failure raised by the attempt.
            context: The execution context.

        Returns:
            The delay in seconds before the next attempt.
        """
