r"""Backoff schedules computed by caller-supplied functions."""

from __future__ import annotations

__all__ = ["ContextualBackoff", "FunctionBackoff"]

from typing import TYPE_CHECKING

from aretry.backoff.base import BaseBackoff, to_seconds

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import timedelta

    from aretry.context import Context


class FunctionBackoff(BaseBackoff):
    """Backoff schedule computed from the attempt number.

    The schedule is unbounded: the maximum number of retries, if any,
    comes from the executor.

    Args:
        func: Function taking the attempt number (1-indexed) and
            returning the delay, in seconds or as a ``timedelta``.

    Example:
        ```pycon
        >>> from aretry.backoff import FunctionBackoff
        >>> backoff = FunctionBackoff(lambda attempt: 0.5 * attempt)
        >>> backoff.calculate(4)
        2.0

        ```
    """

    def __init__(self, func: Callable[[int], float | timedelta]) -> None:
        self.func = func

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(func={self.func!r})"

    def calculate(
        self,
        attempt: int,
        error: BaseException | None = None,  # noqa: ARG002
        context: Context | None = None,  # noqa: ARG002
    ) -> float:
        return to_seconds(self.func(attempt))


class ContextualBackoff(BaseBackoff):
    """Backoff schedule computed from the attempt number, the failure
    and the execution context.

    Args:
        func: Function taking the attempt number (1-indexed), the
            failure and the context, and returning the delay, in seconds
            or as a ``timedelta``.

    Example:
        ```pycon
        >>> from aretry.backoff import ContextualBackoff
        >>> def delay(attempt, error, context):
        ...     return 10.0 if isinstance(error, TimeoutError) else 1.0
        ...
        >>> backoff = ContextualBackoff(delay)
        >>> backoff.calculate(1, TimeoutError(), None)
        10.0

        ```
    """

    def __init__(
        self,
        func: Callable[[int, BaseException | None, Context | None], float | timedelta],
    ) -> None:
        self.func = func

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(func={self.func!r})"

    def calculate(
        self,
        attempt: int,
        error: BaseException | None = None,
        context: Context | None = None,
    ) -> float:
        return to_seconds(self.func(attempt, error, context))
