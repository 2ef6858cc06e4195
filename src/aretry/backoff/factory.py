r"""Normalization of user-supplied backoff schedules."""

from __future__ import annotations

__all__ = ["as_backoff"]

import inspect
from collections.abc import Iterable
from typing import Any

from aretry.backoff.base import BaseBackoff
from aretry.backoff.exponential import ExponentialBackoff
from aretry.backoff.function import ContextualBackoff, FunctionBackoff
from aretry.backoff.sequence import SequenceBackoff


def _count_positional_params(func: Any) -> int | None:
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return None
    count = 0
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return None
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            count += 1
    return count


def as_backoff(obj: Any) -> BaseBackoff:
    """Normalize an object into a backoff schedule.

    Args:
        obj: ``None`` for the default ``ExponentialBackoff`` (``3 **
            attempt`` seconds), a ``BaseBackoff``, a sequence of
            durations, or a callable. A callable accepting three
            positional arguments is called with ``(attempt, error,
            context)``; any other callable is called with ``attempt``.

    Returns:
        The backoff schedule.

    Raises:
        TypeError: If the object cannot be converted to a schedule.

    Example:
        ```pycon
        >>> from aretry.backoff import as_backoff
        >>> as_backoff(None)
        ExponentialBackoff(base=3.0, factor=1.0, max_delay=None)
        >>> as_backoff([1, 2])
        SequenceBackoff(durations=[1.0, 2.0])
        >>> as_backoff(lambda attempt: attempt * 2).calculate(3)
        6.0

        ```
    """
    if obj is None:
        return ExponentialBackoff()
    if isinstance(obj, BaseBackoff):
        return obj
    if callable(obj):
        if _count_positional_params(obj) == 3:
            return ContextualBackoff(obj)
        return FunctionBackoff(obj)
    if isinstance(obj, Iterable) and not isinstance(obj, (str, bytes)):
        return SequenceBackoff(obj)
    msg = f"cannot build a backoff schedule from {obj!r}"
    raise TypeError(msg)
