r"""Configuration dataclasses for retry behavior.

This module provides configuration objects for retry logic and
callbacks.
"""

from __future__ import annotations

__all__ = ["CallbackConfig", "RetryConfig"]

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from aretry.backoff import ExponentialBackoff
from aretry.callbacks import log_failure, log_retry
from aretry.core.config import DEFAULT_MAX_RETRIES, ExhaustionPolicy
from aretry.core.validation import validate_retry_params

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.backoff import BaseBackoff
    from aretry.callbacks import FailureInfo, RetryInfo
    from aretry.filters import ExceptionFilter


@dataclass
class RetryConfig:
    """Configuration for retry behavior.

    Attributes:
        exception_filter: Filter classifying failures as retryable or fatal.
        backoff: Backoff schedule. Defaults to ``ExponentialBackoff()``.
        max_retries: Maximum number of retries, or ``None`` to retry
            forever. A finite backoff schedule caps this value.
        exhaustion: What to do once a bounded execution has exhausted
            its retries.
    """

    exception_filter: ExceptionFilter
    backoff: BaseBackoff = field(default_factory=ExponentialBackoff)
    max_retries: int | None = DEFAULT_MAX_RETRIES
    exhaustion: ExhaustionPolicy = ExhaustionPolicy.SWALLOW

    def __post_init__(self) -> None:
        validate_retry_params(max_retries=self.max_retries)


@dataclass
class CallbackConfig:
    """Configuration for callbacks.

    Attributes:
        on_retry: Optional callback invoked after each retryable failure,
            before the backoff delay.
        on_failure: Optional callback invoked when all retries are exhausted.
    """

    on_retry: Callable[[RetryInfo], object] | None = None
    on_failure: Callable[[FailureInfo], object] | None = None

    def with_defaults(self) -> CallbackConfig:
        """Return a copy where the missing callbacks are replaced by the
        default logging hooks.

        Returns:
            The configuration with ``log_retry`` and ``log_failure``
            in place of missing callbacks.

        Example:
            ```pycon
            >>> from aretry.callbacks import log_failure, log_retry
            >>> from aretry.retry import CallbackConfig
            >>> config = CallbackConfig().with_defaults()
            >>> config.on_retry is log_retry
            True
            >>> config.on_failure is log_failure
            True

            ```
        """
        return replace(
            self,
            on_retry=self.on_retry if self.on_retry is not None else log_retry,
            on_failure=self.on_failure if self.on_failure is not None else log_failure,
        )
