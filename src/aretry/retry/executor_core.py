r"""Shared core logic for retry executors.

This module provides shared helper functions used by both synchronous and
asynchronous retry executors. These functions encapsulate context
creation and the handling of exhausted executions.
"""

from __future__ import annotations

__all__ = ["finish_exhausted", "make_context"]

import logging
from typing import TYPE_CHECKING, Any

from aretry.context import Context
from aretry.core.config import ExhaustionPolicy
from aretry.exceptions import RetryExhaustedError
from aretry.retry.outcome import RetryOutcome

if TYPE_CHECKING:
    from collections.abc import Mapping

logger: logging.Logger = logging.getLogger(__name__)


def make_context(
    context: Mapping[str, Any] | None = None,
    operation_key: str | None = None,
) -> Context:
    """Create the fresh context of an execution.

    Args:
        context: Optional initial data. When a ``Context`` is given, its
            data, operation key and correlation id are copied.
        operation_key: Optional name of the operation. It takes
            precedence over the operation key of a given ``Context``.

    Returns:
        A new context owned by the execution.

    Example:
        ```pycon
        >>> from aretry.context import Context
        >>> from aretry.retry.executor_core import make_context
        >>> seed = Context({"a": 1}, correlation_id="abc")
        >>> context = make_context(seed)
        >>> context is seed
        False
        >>> context["a"], context.correlation_id
        (1, 'abc')

        ```
    """
    if isinstance(context, Context):
        return Context(
            context,
            operation_key=operation_key or context.operation_key,
            correlation_id=context.correlation_id,
        )
    return Context(context, operation_key=operation_key)


def finish_exhausted(
    exhaustion: ExhaustionPolicy,
    error: BaseException,
    attempts: int,
) -> RetryOutcome:
    """Apply the exhaustion policy once the terminal hook has run.

    Args:
        exhaustion: The exhaustion policy.
        error: The failure raised by the final attempt.
        attempts: The total number of attempts.

    Returns:
        The ``EXHAUSTED`` outcome if the policy swallows the failure.

    Raises:
        RetryExhaustedError: If the policy is ``ExhaustionPolicy.RAISE``.
    """
    logger.debug(f"Retries exhausted after {attempts} attempts ({exhaustion.value})")
    if exhaustion is ExhaustionPolicy.RAISE:
        raise RetryExhaustedError(attempts=attempts, error=error) from error
    return RetryOutcome.exhausted(error=error, attempts=attempts)
