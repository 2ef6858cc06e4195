r"""Constant backoff strategy."""

from __future__ import annotations

__all__ = ["ConstantBackoff"]

from typing import TYPE_CHECKING

from aretry.backoff.base import BaseBackoff, to_seconds

if TYPE_CHECKING:
    from datetime import timedelta

    from aretry.context import Context


class ConstantBackoff(BaseBackoff):
    """Constant/fixed backoff strategy.

    Returns the same delay for every retry attempt, regardless of the attempt number.

    Args:
        delay: The fixed delay to use for all retry attempts, in seconds
            or as a ``timedelta`` (default: 1.0).

    Example:
        ```pycon
        >>> from aretry.backoff import ConstantBackoff
        >>> backoff = ConstantBackoff(delay=2.5)
        >>> backoff.calculate(1)
        2.5
        >>> backoff.calculate(10)
        2.5

        ```
    """

    def __init__(self, delay: float | timedelta = 1.0) -> None:
        delay = to_seconds(delay)
        if delay < 0:
            msg = f"delay must be non-negative, got {delay}"
            raise ValueError(msg)

        self.delay = delay

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(delay={self.delay})"

    def calculate(
        self,
        attempt: int,  # noqa: ARG002
        error: BaseException | None = None,  # noqa: ARG002
        context: Context | None = None,  # noqa: ARG002
    ) -> float:
        """Calculate constant backoff delay.

        Args:
            attempt: The number of the attempt that failed (unused).
            error: The failure (unused).
            context: The execution context (unused).

        Returns:
            The fixed delay value.
        """
        return self.delay
