r"""Synchronous retry executor.

This module provides the RetryExecutor class that executes a blocking
operation with automatic retry logic.
"""

from __future__ import annotations

__all__ = ["RetryExecutor"]

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
    from collections.abc import Callable, Mapping

    from aretry.retry.config import RetryConfig

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


class RetryExecutor:
    """Executes a blocking operation with automatic retry logic.

    The executor holds only configuration: every call to ``execute``
    has its own attempt counter and context, so one executor can be
    used by several threads at once.

    The executor orchestrates the following components:
    - RetryDecider: Classifies each failure as retry, exhausted or fatal
    - RetryStrategy: Calculates backoff delays between retries
    - CallbackManager: Invokes the retry hooks

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
        >>> from aretry.filters import ExceptionFilter
        >>> from aretry.backoff import ConstantBackoff
        >>> from aretry.retry import CallbackConfig, RetryConfig, RetryExecutor
        >>> executor = RetryExecutor(
        ...     RetryConfig(
        ...         exception_filter=ExceptionFilter.handle(ConnectionError),
        ...         backoff=ConstantBackoff(0.0),
        ...         max_retries=2,
        ...     ),
        ...     CallbackConfig(on_retry=lambda info: None),
        ... )
        >>> outcome = executor.execute(lambda: "done")
        >>> outcome.result, outcome.attempts
        ('done', 1)

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

    def execute(
        self,
        operation: Callable[[], T],
        context: Mapping[str, Any] | None = None,
        operation_key: str | None = None,
    ) -> RetryOutcome:
        """Execute an operation with automatic retry logic.

        Loop, for attempt = 1, 2, ...:
        - Run the operation. On success, return immediately.
        - Fatal failure (rejected by the filter): re-raise it, no hook
          is invoked.
        - Retryable failure with retries remaining: calculate the delay,
          invoke on_retry, sleep, try again.
        - Retryable failure with no retry remaining: invoke on_failure,
          then apply the exhaustion policy.

        Note:
            This method blocks the calling thread with ``time.sleep``
            during the backoff delays.

        Args:
            operation: The zero-argument operation to execute.
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
                    result = operation()
                except Exception as exc:
                    decision, reason = self.decider.decide(exc, attempt, max_retries)
                    if decision is RetryDecision.FATAL:
                        logger.debug(f"Attempt {attempt} failed: {reason}")
                        raise
                    if decision is RetryDecision.EXHAUSTED:
                        self.callbacks.on_failure(
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
                    self.callbacks.on_retry(
                        error=exc,
                        delay=delay,
                        attempt=attempt,
                        context=ctx,
                        max_retries=max_retries,
                    )
                else:
                    logger.debug(f"Operation succeeded on attempt {attempt}")
                    return RetryOutcome.success(result, attempts=attempt)

                time.sleep(delay)
                attempt += 1
