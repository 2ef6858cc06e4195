r"""Blocking entry points: bounded and forever retry executions.

Example:
    ```pycon
    >>> from aretry import execute_bounded, execute_forever
    >>> attempts = []
    >>> def flaky():
    ...     attempts.append(1)
    ...     if len(attempts) < 3:
    ...         raise ConnectionError("connection reset")
    ...     return "ok"
    ...
    >>> outcome = execute_bounded(
    ...     flaky, ConnectionError, backoff=[0.0, 0.0], on_retry=lambda info: None
    ... )
    >>> outcome.result, outcome.attempts
    ('ok', 3)

    ```
"""

from __future__ import annotations

__all__ = ["execute_bounded", "execute_forever"]

from typing import TYPE_CHECKING, Any, TypeVar

from aretry.backoff import as_backoff
from aretry.core.config import ExhaustionPolicy
from aretry.core.validation import validate_retry_params
from aretry.filters import as_filter
from aretry.retry import CallbackConfig, RetryConfig, RetryExecutor
from aretry.retry.strategy import resolve_max_retries

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from aretry.callbacks import FailureInfo, RetryInfo
    from aretry.retry import RetryOutcome

T = TypeVar("T")


def execute_bounded(
    operation: Callable[[], T],
    exception_filter: Any,
    backoff: Any = None,
    retry_count: int | None = None,
    on_retry: Callable[[RetryInfo], object] | None = None,
    on_failure: Callable[[FailureInfo], object] | None = None,
    *,
    exhaustion: ExhaustionPolicy = ExhaustionPolicy.SWALLOW,
    context: Mapping[str, Any] | None = None,
    operation_key: str | None = None,
) -> RetryOutcome:
    """Execute a blocking operation with a bounded number of retries.

    The operation is attempted at most ``retry_count + 1`` times. A
    finite backoff sequence caps the number of retries at its length.

    Args:
        operation: The zero-argument operation to execute.
        exception_filter: An ``ExceptionFilter``, a classifier function,
            an exception type or a tuple of exception types.
        backoff: The backoff schedule: ``None`` for ``3 ** attempt``
            seconds, a ``BaseBackoff``, a sequence of durations, or a
            function of the attempt (or of attempt, error and context).
        retry_count: Maximum number of retries. Defaults to the length
            of a finite sequence, or ``DEFAULT_MAX_RETRIES``.
        on_retry: Hook invoked after each retryable failure. Defaults to
            ``log_retry``.
        on_failure: Hook invoked when retries are exhausted. Defaults to
            ``log_failure``.
        exhaustion: ``ExhaustionPolicy.SWALLOW`` (default) returns an
            ``EXHAUSTED`` outcome, ``ExhaustionPolicy.RAISE`` raises
            ``RetryExhaustedError``.
        context: Optional initial data of the execution context.
        operation_key: Optional name of the operation, for diagnostics.

    Returns:
        The outcome of the execution. With the default exhaustion policy,
        an exhausted execution returns without raising: check
        ``outcome.succeeded``.

    Raises:
        Exception: Any failure rejected by the exception filter.
        HookError: If a hook raises.
        RetryExhaustedError: If the retries are exhausted under
            ``ExhaustionPolicy.RAISE``.
        ValueError: If retry_count is negative.
    """
    validate_retry_params(max_retries=retry_count)
    schedule = as_backoff(backoff)
    executor = RetryExecutor(
        RetryConfig(
            exception_filter=as_filter(exception_filter),
            backoff=schedule,
            max_retries=resolve_max_retries(retry_count, schedule),
            exhaustion=exhaustion,
        ),
        CallbackConfig(on_retry=on_retry, on_failure=on_failure),
    )
    return executor.execute(operation, context=context, operation_key=operation_key)


def execute_forever(
    operation: Callable[[], T],
    exception_filter: Any,
    backoff: Any = None,
    on_retry: Callable[[RetryInfo], object] | None = None,
    *,
    context: Mapping[str, Any] | None = None,
    operation_key: str | None = None,
) -> RetryOutcome:
    """Execute a blocking operation until it succeeds.

    The execution ends only when the operation succeeds or raises a
    failure rejected by the exception filter. There is no terminal
    failure hook.

    Args:
        operation: The zero-argument operation to execute.
        exception_filter: An ``ExceptionFilter``, a classifier function,
            an exception type or a tuple of exception types.
        backoff: The backoff schedule (see ``execute_bounded``). A finite
            sequence keeps using its last duration once consumed.
        on_retry: Hook invoked after each retryable failure. Defaults to
            ``log_retry``.
        context: Optional initial data of the execution context.
        operation_key: Optional name of the operation, for diagnostics.

    Returns:
        The ``SUCCESS`` outcome.

    Raises:
        Exception: Any failure rejected by the exception filter.
        HookError: If the hook raises.
    """
    executor = RetryExecutor(
        RetryConfig(
            exception_filter=as_filter(exception_filter),
            backoff=as_backoff(backoff),
            max_retries=None,
        ),
        CallbackConfig(on_retry=on_retry),
    )
    return executor.execute(operation, context=context, operation_key=operation_key)
