r"""Fibonacci backoff strategy."""

from __future__ import annotations

__all__ = ["FibonacciBackoff"]

import math
from typing import TYPE_CHECKING

from aretry.backoff.base import BaseBackoff

if TYPE_CHECKING:
    from aretry.context import Context


class FibonacciBackoff(BaseBackoff):
    """Fibonacci backoff strategy.

    Calculates delay as: base_delay * fibonacci(attempt), with optional
    max_delay cap. With a cap, the sequence is not computed past it.
    The Fibonacci sequence (1, 1, 2, 3, 5, 8, 13, ...)
    grows more gradually than the exponential backoff.

    Args:
        base_delay: The base delay in seconds (default: 1.0).
        max_delay: Optional maximum delay cap in seconds.

    Example:
        ```pycon
        >>> from aretry.backoff import FibonacciBackoff
        >>> backoff = FibonacciBackoff(base_delay=1.0)
        >>> [backoff.calculate(attempt) for attempt in range(1, 7)]
        [1.0, 1.0, 2.0, 3.0, 5.0, 8.0]
        >>> backoff = FibonacciBackoff(base_delay=1.0, max_delay=10.0)
        >>> backoff.calculate(11)  # fib(11) = 89, but capped
        10.0

        ```
    """

    def __init__(self, base_delay: float = 1.0, max_delay: float | None = None) -> None:
        if base_delay < 0:
            msg = f"base_delay must be non-negative, got {base_delay}"
            raise ValueError(msg)
        if max_delay is not None and max_delay <= 0:
            msg = f"max_delay must be positive if specified, got {max_delay}"
            raise ValueError(msg)

        self.base_delay = base_delay
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(base_delay={self.base_delay}, max_delay={self.max_delay})"

    @staticmethod
    def _fibonacci(n: int, limit: float | None = None) -> int:
        """Calculate the nth Fibonacci number (1-indexed).

        Args:
            n: The position in the Fibonacci sequence (1-indexed).
            limit: Optional bound. The first Fibonacci number greater
                than ``limit`` is returned as soon as it is reached.

        Returns:
            The nth Fibonacci number, or the first one above ``limit``.
        """
        if n <= 0:
            return 0
        if n <= 2:
            return 1

        a, b = 1, 1
        for _ in range(n - 2):
            if limit is not None and b > limit:
                break
            a, b = b, a + b
        return b

    def calculate(
        self,
        attempt: int,
        error: BaseException | None = None,  # noqa: ARG002
        context: Context | None = None,  # noqa: ARG002
    ) -> float:
        if self.base_delay == 0:
            return 0.0
        if self.max_delay is not None:
            fib = self._fibonacci(attempt, limit=self.max_delay / self.base_delay)
            return min(self.base_delay * float(fib), self.max_delay)
        try:
            return self.base_delay * float(self._fibonacci(attempt))
        except OverflowError:
            return math.inf
