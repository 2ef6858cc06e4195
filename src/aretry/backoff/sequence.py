r"""Backoff schedule backed by a finite sequence of durations."""

from __future__ import annotations

__all__ = ["SequenceBackoff"]

from typing import TYPE_CHECKING

from aretry.backoff.base import BaseBackoff, to_seconds

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import timedelta

    from aretry.context import Context


class SequenceBackoff(BaseBackoff):
    """Backoff schedule consuming an ordered sequence of durations.

    The delay after attempt ``i`` is ``durations[i - 1]``. The schedule
    supplies exactly ``len(durations)`` retries: a bounded execution
    stops retrying once the sequence is consumed, even if a larger
    retry count was requested. An unbounded execution keeps using the
    last duration once the sequence is consumed.

    Args:
        durations: The delays, in seconds or as ``timedelta`` objects.

    Example:
        ```pycon
        >>> from datetime import timedelta
        >>> from aretry.backoff import SequenceBackoff
        >>> backoff = SequenceBackoff([1, timedelta(seconds=2), 5.5])
        >>> backoff.max_retries
        3
        >>> [backoff.calculate(attempt) for attempt in (1, 2, 3)]
        [1.0, 2.0, 5.5]

        ```
    """

    def __init__(self, durations: Iterable[float | timedelta]) -> None:
        self.durations: tuple[float, ...] = tuple(to_seconds(d) for d in durations)
        for delay in self.durations:
            if delay < 0:
                msg = f"durations must be non-negative, got {delay}"
                raise ValueError(msg)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(durations={list(self.durations)})"

    @property
    def max_retries(self) -> int:
        return len(self.durations)

    def calculate(
        self,
        attempt: int,
        error: BaseException | None = None,  # noqa: ARG002
        context: Context | None = None,  # noqa: ARG002
    ) -> float:
        """Return the duration at position ``attempt - 1``.

        Args:
            attempt: The number of the attempt that failed (1-indexed).
            error: The failure (unused).
            context: The execution context (unused).

        Returns:
            The delay in seconds. Attempts past the end of the sequence
            reuse the last duration.

        Raises:
            ValueError: If the sequence is empty.
        """
        if not self.durations:
            msg = "cannot calculate a delay from an empty sequence"
            raise ValueError(msg)
        return self.durations[min(attempt, len(self.durations)) - 1]
