r"""Callback manager for orchestrating retry lifecycle events.

This module provides the CallbackManager class that handles invocation
of the retry hooks. A hook that raises aborts the execution with a
``HookError`` chained from the hook's exception.
"""

from __future__ import annotations

__all__ = ["CallbackManager"]

import inspect
import logging
import time
from typing import TYPE_CHECKING, Any

from aretry.callbacks import FailureInfo, RetryInfo
from aretry.exceptions import HookError

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.context import Context
    from aretry.retry.config import CallbackConfig

logger: logging.Logger = logging.getLogger(__name__)


class CallbackManager:
    """Manages callback invocations during the retry lifecycle.

    The synchronous methods are used by ``RetryExecutor``. The ``_async``
    methods are used by ``AsyncRetryExecutor`` and also accept hooks
    returning an awaitable (e.g. coroutine functions), which are awaited.
    A hook returning an awaitable to a synchronous method fails with
    ``HookError``.

    Attributes:
        callbacks: Configuration containing callback functions for lifecycle events.
    """

    def __init__(self, callbacks: CallbackConfig) -> None:
        """Initialize callback manager.

        Args:
            callbacks: Callback configuration.
        """
        self.callbacks = callbacks

    def on_retry(
        self,
        error: BaseException,
        delay: float,
        attempt: int,
        context: Context,
        max_retries: int | None,
    ) -> None:
        """Invoke on_retry callback.

        Args:
            error: The failure that triggered the retry.
            delay: Sleep time before the next attempt.
            attempt: The number of the attempt that failed (1-indexed).
            context: The execution context.
            max_retries: Maximum number of retries, or ``None``.

        Raises:
            HookError: If the callback raises.
        """
        if self.callbacks.on_retry is None:
            return
        info = RetryInfo(
            error=error, delay=delay, attempt=attempt, context=context, max_retries=max_retries
        )
        _call_hook("on_retry", self.callbacks.on_retry, info, attempt)

    def on_failure(
        self,
        error: BaseException,
        attempt: int,
        delay: float,
        context: Context,
        max_retries: int | None,
        start_time: float,
    ) -> None:
        """Invoke on_failure callback.

        Args:
            error: The failure raised by the final attempt.
            attempt: Final attempt number (1-indexed).
            delay: The delay waited before the final attempt.
            context: The execution context.
            max_retries: Maximum number of retries.
            start_time: Timestamp when the execution started.

        Raises:
            HookError: If the callback raises.
        """
        if self.callbacks.on_failure is None:
            return
        info = FailureInfo(
            error=error,
            attempt=attempt,
            delay=delay,
            total_time=time.time() - start_time,
            context=context,
            max_retries=max_retries,
        )
        _call_hook("on_failure", self.callbacks.on_failure, info, attempt)

    async def on_retry_async(
        self,
        error: BaseException,
        delay: float,
        attempt: int,
        context: Context,
        max_retries: int | None,
    ) -> None:
        """Invoke on_retry callback, awaiting its result if needed.

        Args:
            error: The failure that triggered the retry.
            delay: Sleep time before the next attempt.
            attempt: The number of the attempt that failed (1-indexed).
            context: The execution context.
            max_retries: Maximum number of retries, or ``None``.

        Raises:
            HookError: If the callback raises.
        """
        if self.callbacks.on_retry is None:
            return
        info = RetryInfo(
            error=error, delay=delay, attempt=attempt, context=context, max_retries=max_retries
        )
        await _call_hook_async("on_retry", self.callbacks.on_retry, info, attempt)

    async def on_failure_async(
        self,
        error: BaseException,
        attempt: int,
        delay: float,
        context: Context,
        max_retries: int | None,
        start_time: float,
    ) -> None:
        """Invoke on_failure callback, awaiting its result if needed.

        Args:
            error: The failure raised by the final attempt.
            attempt: Final attempt number (1-indexed).
            delay: The delay waited before the final attempt.
            context: The execution context.
            max_retries: Maximum number of retries.
            start_time: Timestamp when the execution started.

        Raises:
            HookError: If the callback raises.
        """
        if self.callbacks.on_failure is None:
            return
        info = FailureInfo(
            error=error,
            attempt=attempt,
            delay=delay,
            total_time=time.time() - start_time,
            context=context,
            max_retries=max_retries,
        )
        await _call_hook_async("on_failure", self.callbacks.on_failure, info, attempt)


def _call_hook(name: str, hook: Callable[[Any], Any], info: Any, attempt: int) -> None:
    try:
        result = hook(info)
        if inspect.isawaitable(result):
            if inspect.iscoroutine(result):
                result.close()
            msg = f"{name} hook returned an awaitable, which a blocking execution cannot await"
            raise TypeError(msg)
    except Exception as exc:
        logger.debug(f"{name} hook raised {type(exc).__name__} on attempt {attempt}")
        raise HookError(name, attempt) from exc


async def _call_hook_async(name: str, hook: Callable[[Any], Any], info: Any, attempt: int) -> None:
    try:
        result = hook(info)
        if inspect.isawaitable(result):
            await result
    except Exception as exc:
        logger.debug(f"{name} hook raised {type(exc).__name__} on attempt {attempt}")
        raise HookError(name, attempt) from exc
