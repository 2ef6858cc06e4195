r"""Linear backoff strategy."""

from __future__ import annotations

__all__ = ["LinearBackoff"]

from typing import TYPE_CHECKING

from aretry.backoff.base import BaseBackoff

if TYPE_CHECKING:
    from aretry.context import Context


class LinearBackoff(BaseBackoff):
    """Linear backoff strategy.

    Calculates delay as: base_delay * attempt, with optional max_delay cap.

    Args:
        base_delay: The base delay in seconds (default: 1.0).
        max_delay: Optional maximum delay cap in seconds.

    Example:
        ```pycon
        >>> from aretry.backoff import LinearBackoff
        >>> backoff = LinearBackoff(base_delay=1.0)
        >>> backoff.calculate(1)
        1.0
        >>> backoff.calculate(3)
        3.0
        >>> backoff = LinearBackoff(base_delay=2.0, max_delay=5.0)
        >>> backoff.calculate(6)  # Would be 12.0, but capped
        5.0

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

    def calculate(
        self,
        attempt: int,
        error: BaseException | None = None,  # noqa: ARG002
        context: Context | None = None,  # noqa: ARG002
    ) -> float:
        delay = self.base_delay * attempt
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return delay
