r"""Reusable retry policy.

A ``RetryPolicy`` bundles an exception filter, a backoff schedule, a
retry bound and the hooks, so the same policy can execute many
operations, from blocking or async code.
"""

from __future__ import annotations

__all__ = ["RetryPolicy"]

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, TypeVar

from aretry.backoff import as_backoff
from aretry.core.config import ExhaustionPolicy
from aretry.core.validation import validate_retry_params
from aretry.filters import ExceptionFilter, as_filter
from aretry.retry import AsyncRetryExecutor, CallbackConfig, RetryConfig, RetryExecutor
from aretry.retry.strategy import resolve_max_retries

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping

    from aretry.callbacks import FailureInfo, RetryInfo
    from aretry.retry import RetryOutcome

T = TypeVar("T")


@dataclass
class RetryPolicy:
    """Reusable configuration of retry executions.

    Args:
        exception_filter: An ``ExceptionFilter``, a classifier function,
            an exception type or a tuple of exception types. Normalized
            to an ``ExceptionFilter``.
        backoff: The backoff schedule, or anything accepted by
            ``as_backoff``. Normalized to a ``BaseBackoff``.
        max_retries: Maximum number of retries. ``None`` uses the length
            of a finite sequence, or ``DEFAULT_MAX_RETRIES``. Ignored
            when ``forever`` is set.
        forever: Retry until the operation succeeds or raises a fatal
            failure.
        on_retry: Hook invoked after each retryable failure. Defaults to
            ``log_retry``.
        on_failure: Hook invoked when retries are exhausted. Defaults to
            ``log_failure``.
        exhaustion: What to do once the retries are exhausted.

    Example:
        ```pycon
        >>> from aretry import RetryPolicy
        >>> policy = RetryPolicy(ConnectionError, backoff=[0.1, 0.5], max_retries=5)
        >>> policy.retry_config().max_retries  # capped by the sequence
        2
        >>> policy.merge(max_retries=1).retry_config().max_retries
        1
        >>> outcome = policy.execute(lambda: "done")  # doctest: +SKIP

        ```
    """

    exception_filter: Any = Exception
    backoff: Any = None
    max_retries: int | None = None
    forever: bool = False
    on_retry: Callable[[RetryInfo], object] | None = None
    on_failure: Callable[[FailureInfo], object] | None = None
    exhaustion: ExhaustionPolicy = ExhaustionPolicy.SWALLOW

    def __post_init__(self) -> None:
        """Validate and normalize configuration parameters after
        initialization.

        Raises:
            ValueError: If max_retries is negative.
            TypeError: If the filter or the backoff cannot be normalized.
        """
        validate_retry_params(max_retries=self.max_retries)
        self.exception_filter: ExceptionFilter = as_filter(self.exception_filter)
        self.backoff = as_backoff(self.backoff)

    def merge(self, **overrides: Any) -> RetryPolicy:
        """Create a new policy with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new RetryPolicy instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert the policy to dictionary format.

        Returns:
            Dictionary with the policy parameters.
        """
        return {
            "exception_filter": self.exception_filter,
            "backoff": self.backoff,
            "max_retries": self.max_retries,
            "forever": self.forever,
            "on_retry": self.on_retry,
            "on_failure": self.on_failure,
            "exhaustion": self.exhaustion,
        }

    def retry_config(self) -> RetryConfig:
        """Build the retry configuration of the executors.

        Returns:
            The retry configuration.
        """
        return RetryConfig(
            exception_filter=self.exception_filter,
            backoff=self.backoff,
            max_retries=None if self.forever else resolve_max_retries(self.max_retries, self.backoff),
            exhaustion=self.exhaustion,
        )

    def callback_config(self) -> CallbackConfig:
        """Build the callback configuration of the executors.

        Returns:
            The callback configuration, with the default hooks in place
            of missing ones.
        """
        return CallbackConfig(on_retry=self.on_retry, on_failure=self.on_failure).with_defaults()

    def execute(
        self,
        operation: Callable[[], T],
        context: Mapping[str, Any] | None = None,
        operation_key: str | None = None,
    ) -> RetryOutcome:
        """Execute a blocking operation with this policy.

        Args:
            operation: The zero-argument operation to execute.
            context: Optional initial data of the execution context.
            operation_key: Optional name of the operation, for diagnostics.

        Returns:
            The outcome of the execution.
        """
        executor = RetryExecutor(self.retry_config(), self.callback_config())
        return executor.execute(operation, context=context, operation_key=operation_key)

    async def execute_async(
        self,
        operation: Callable[[], Awaitable[T]],
        context: Mapping[str, Any] | None = None,
        operation_key: str | None = None,
    ) -> RetryOutcome:
        """Execute an async operation with this policy.

        Args:
            operation: The zero-argument function returning the awaitable
                to execute.
            context: Optional initial data of the execution context.
            operation_key: Optional name of the operation, for diagnostics.

        Returns:
            The outcome of the execution.
        """
        executor = AsyncRetryExecutor(self.retry_config(), self.callback_config())
        return await executor.execute(operation, context=context, operation_key=operation_key)
