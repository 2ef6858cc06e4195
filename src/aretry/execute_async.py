r"""Suspending entry points: bounded and forever retry executions.

Every entry point is a coroutine function: calling it returns an
awaitable that completes with the outcome of the execution. Wrap it in
``asyncio.create_task`` to run several executions concurrently.

Example:
    ```pycon
    >>> import asyncio
    >>> from aretry import execute_bounded_async
    >>> async def fetch():
    ...     return 42
    ...
    >>> asyncio.run(execute_bounded_async(fetch, TimeoutError)).result
    42

    ```
"""

from __future__ import annotations

__all__ = ["execute_bounded_async", "execute_forever_async"]

from typing import TYPE_CHECKING, Any, TypeVar

from aretry.backoff import as_backoff
from aretry.core.config import ExhaustionPolicy
from aretry.core.validation import validate_retry_params
from aretry.filters import as_filter
from aretry.retry import AsyncRetryExecutor, CallbackConfig, RetryConfig
from aretry.retry.strategy import resolve_max_retries

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping

    from aretry.callbacks import FailureInfo, RetryInfo
    from aretry.retry import RetryOutcome

T = TypeVar("T")


async def execute_bounded_async(
    operation: Callable[[], Awaitable[T]],
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
    """Execute an async operation with a bounded number of retries.

    Same arguments and behavior as ``execute_bounded``; the operation
    returns an awaitable and the hooks may be coroutine functions.

    Args:
        operation: The zero-argument function returning the awaitable
            to execute.
        exception_filter: An ``ExceptionFilter``, a classifier function,
            an exception type or a tuple of exception types.
        backoff: The backoff schedule.
        retry_count: Maximum number of retries.
        on_retry: Hook invoked after each retryable failure.
        on_failure: Hook invoked when retries are exhausted.
        exhaustion: The exhaustion policy.
        context: Optional initial data of the execution context.
        operation_key: Optional name of the operation, for diagnostics.

    Returns:
        The outcome of the execution.

    Raises:
        Exception: Any failure rejected by the exception filter.
        HookError: If a hook raises.
        RetryExhaustedError: If the retries are exhausted under
            ``ExhaustionPolicy.RAISE``.
        ValueError: If retry_count is negative.
    """
    validate_retry_params(max_retries=retry_count)
    schedule = as_backoff(backoff)
    executor = AsyncRetryExecutor(
        RetryConfig(
            exception_filter=as_filter(exception_filter),
            backoff=schedule,
            max_retries=resolve_max_retries(retry_count, schedule),
            exhaustion=exhaustion,
        ),
        CallbackConfig(on_retry=on_retry, on_failure=on_failure),
    )
    return await executor.execute(operation, context=context, operation_key=operation_key)


async def execute_forever_async(
    operation: Callable[[], Awaitable[T]],
    exception_filter: Any,
    backoff: Any = None,
    on_retry: Callable[[RetryInfo], object] | None = None,
    *,
    context: Mapping[str, Any] | None = None,
    operation_key: str | None = None,
) -> RetryOutcome:
    """Execute an async operation until it succeeds.

    Args:
        operation: The zero-argument function returning the awaitable
            to execute.
        exception_filter: An ``ExceptionFilter``, a classifier function,
            an exception type or a tuple of exception types.
        backoff: The backoff schedule.
        on_retry: Hook invoked after each retryable failure.
        context: Optional initial data of the execution context.
        operation_key: Optional name of the operation, for diagnostics.

    Returns:
        The ``SUCCESS`` outcome.

    Raises:
        Exception: Any failure rejected by the exception filter.
        HookError: If the hook raises.
    """
    executor = AsyncRetryExecutor(
        RetryConfig(
            exception_filter=as_filter(exception_filter),
            backoff=as_backoff(backoff),
            max_retries=None,
        ),
        CallbackConfig(on_retry=on_retry),
    )
    return await executor.execute(operation, context=context, operation_key=operation_key)
