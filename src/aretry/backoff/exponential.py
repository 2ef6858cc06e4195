r"""Exponential backoff strategy."""

from __future__ import annotations

__all__ = ["ExponentialBackoff"]

import math
from typing import TYPE_CHECKING

from aretry.backoff.base import BaseBackoff
from aretry.core.config import DEFAULT_BACKOFF_BASE

if TYPE_CHECKING:
    from aretry.context import Context


class ExponentialBackoff(BaseBackoff):
    """Exponential backoff strategy.

    Calculates delay as: factor * (base ** attempt), with optional
    max_delay cap.

    This is the default backoff strategy. With the default values the
    delay is ``3 ** attempt`` seconds (3s, 9s, 27s, 81s, ...), which is
    aggressive. Use a smaller base or factor, or a max_delay, for a
    gentler schedule.

    Args:
        base: The base of the exponent (default: 3.0). Must be >= 1.
        factor: Multiplier applied to the power (default: 1.0).
        max_delay: Optional maximum delay cap in seconds. If specified,
            delays will not exceed this value.

    Example:
        ```pycon
        >>> from aretry.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff()
        >>> backoff.calculate(1)  # First retry
        3.0
        >>> backoff.calculate(2)  # Second retry
        9.0
        >>> backoff = ExponentialBackoff(base=2.0, factor=0.5, max_delay=3.0)
        >>> backoff.calculate(1)
        1.0
        >>> backoff.calculate(10)  # Would be 512.0, but capped
        3.0

        ```
    """

    def __init__(
        self,
        base: float = DEFAULT_BACKOFF_BASE,
        factor: float = 1.0,
        max_delay: float | None = None,
    ) -> None:
        if base < 1:
            msg = f"base must be >= 1, got {base}"
            raise ValueError(msg)
        if factor < 0:
            msg = f"factor must be non-negative, got {factor}"
            raise ValueError(msg)
        if max_delay is not None and max_delay <= 0:
            msg = f"max_delay must be positive if specified, got {max_delay}"
            raise ValueError(msg)

        self.base = base
        self.factor = factor
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(base={self.base}, factor={self.factor}, "
            f"max_delay={self.max_delay})"
        )

    def calculate(
        self,
        attempt: int,
        error: BaseException | None = None,  # noqa: ARG002
        context: Context | None = None,  # noqa: ARG002
    ) -> float:
        """Calculate exponential backoff delay.

        Args:
            attempt: The number of the attempt that failed (1-indexed).
            error: The failure (unused).
            context: The execution context (unused).

        Returns:
            The calculated delay: factor * (base ** attempt),
            capped at max_delay if set. Without a cap, a power too large
            for a float gives ``math.inf``.
        """
        if self.factor == 0:
            return 0.0
        try:
            delay = self.factor * float(self.base) ** attempt
        except OverflowError:
            delay = math.inf
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return delay
