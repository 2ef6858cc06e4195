r"""Asynchronous retry executor.

This module provides the AsyncRetryExecutor class that executes an
async operation with automatic retry logic.
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor"]

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Any, TypeVar

from aretry.retry.config import CallbackConfig
from aretry.retry.decider import RetryDecider, RetryDecision
from aretry.retry.executor_core import finish_exhausted, make_context
from aretry.retry.manager import CallbackManager
from aretry.retry.outcome import RetryOutcome
from aretry.retry.strategy import RetryStrategy
from aretry.utils.structured_logging import bind_correlation_id

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping

    from aretry.retry.config import RetryConfig

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


class AsyncRetryExecutor:
    """Executes an async operation with automatic retry logic.

    Same state machine as ``RetryExecutor``, but the executor awaits the
    operation and ``asyncio.sleep`` for the backoff delays, so the event
    loop keeps running other tasks while an execution waits. Hooks can
    be plain callables or coroutine functions.

    There is no built-in cancellation: cancel the task running
    ``execute`` to stop an execution. ``asyncio.CancelledError`` is
    never caught.

    Args:
        retry_config: Configuration for retry behavior. ``max_retries=None``
            retries forever.
        callback_config: Configuration for the hooks. Missing hooks are
            replaced by ``log_retry`` and ``log_failure``.

    Attributes:
        config: Retry configuration.
        strategy: Strategy for calculating retry delays.
        decider: Logic for deciding whether to retry.
        callbacks: Manager for invoking callbacks.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry.backoff import ConstantBackoff
        >>> from aretry.filters import ExceptionFilter
        >>> from aretry.retry import AsyncRetryExecutor, RetryConfig
        >>> async def fetch():
        ...     return "done"
        ...
        >>> executor = AsyncRetryExecutor(
        ...     RetryConfig(
        ...         exception_filter=ExceptionFilter.handle(ConnectionError),
        ...         backoff=ConstantBackoff(0.0),
        ...     )
        ... )
        >>> asyncio.run(executor.execute(fetch)).result
        'done'

        ```
    """

    def __init__(
        self,
        retry_config: RetryConfig,
        callback_config: CallbackConfig | None = None,
    ) -> None:
        self.config = retry_config
        self.strategy: RetryStrategy = RetryStrategy(retry_config.backoff)
        self.decider: RetryDecider = RetryDecider(retry_config.exception_filter)
        self.callbacks: CallbackManager = CallbackManager(
            (callback_config or CallbackConfig()).with_defaults()
        )

    @property
    def max_retries(self) -> int | None:
        """The effective retry bound, or ``None`` to retry forever."""
        return self.strategy.max_retries(self.config.max_retries)

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        context: Mapping[str, Any] | None = None,
        operation_key: str | None = None,
    ) -> RetryOutcome:
        """Execute an async operation with automatic retry logic.

        Args:
            operation: The zero-argument function returning the awaitable
                to execute. It is called once per attempt.
            context: Optional initial data of the execution context.
            operation_key: Optional name of the operation, for diagnostics.

        Returns:
            The outcome of the execution.

        Raises:
            Exception: Any failure rejected by the exception filter,
                unchanged.
            HookError: If a hook raises.
            RetryExhaustedError: If the retries are exhausted and the
                exhaustion policy is ``ExhaustionPolicy.RAISE``.
            ValueError: If the backoff schedule returns a negative delay.
        """
        ctx = make_context(context, operation_key)
        max_retries = self.max_retries
        start_time = time.time()
        delay = 0.0
        attempt = 1

        with bind_correlation_id(ctx.correlation_id):
            while True:
                try:
                    result = await operation()
                except Exception as exc:
                    decision, reason = self.decider.decide(exc, attempt, max_retries)
                    if decision is RetryDecision.FATAL:
                        logger.debug(f"Attempt {attempt} failed: {reason}")
                        raise
                    if decision is RetryDecision.EXHAUSTED:
                        await self.callbacks.on_failure_async(
                            error=exc,
                            attempt=attempt,
                            delay=delay,
                            context=ctx,
                            max_retries=max_retries,
                            start_time=start_time,
                        )
                        return finish_exhausted(self.config.exhaustion, exc, attempt)

                    logger.debug(f"Attempt {attempt} failed: will retry ({reason})")
                    delay = self.strategy.calculate_delay(attempt, exc, ctx)
                    await self.callbacks.on_retry_async(
                        error=exc,
                        delay=delay,
                        attempt=attempt,
                        context=ctx,
                        max_retries=max_retries,
                    )
                else:
                    logger.debug(f"Operation succeeded on attempt {attempt}")
                    return RetryOutcome.success(result, attempts=attempt)

                await asyncio.sleep(delay)
                attempt += 1
