r"""Exceptions raised by the retry engine.

Failures raised by the wrapped operation are never wrapped: a failure
rejected by the exception filter propagates to the caller unchanged.
The classes below only describe conditions detected by the engine
itself.
"""

from __future__ import annotations

__all__ = ["HookError", "RetryError", "RetryExhaustedError"]


class RetryError(Exception):
    """Base class for errors raised by the retry engine."""


class RetryExhaustedError(RetryError):
    """Exception raised when a bounded execution runs out of attempts.

    This error is only raised when the exhaustion policy is
    ``ExhaustionPolicy.RAISE``. The last failure of the operation is
    available as ``error`` and as ``__cause__``.

    Args:
        attempts: The total number of attempts that were made.
        error: The failure raised by the final attempt.

    Attributes:
        attempts: The total number of attempts that were made.
        error: The failure raised by the final attempt.

    Example:
        ```pycon
        >>> from aretry.exceptions import RetryExhaustedError
        >>> exc = RetryExhaustedError(attempts=3, error=ValueError("boom"))
        >>> exc.attempts
        3
        >>> str(exc)
        'operation failed after 3 attempts: boom'

        ```
    """

    def __init__(self, attempts: int, error: BaseException) -> None:
        super().__init__(f"operation failed after {attempts} attempts: {error}")
        self.attempts = attempts
        self.error = error


class HookError(RetryError):
    """Exception raised when a hook fails during an execution.

    A failing hook aborts the execution: no further attempt is made.
    The exception raised by the hook is available as ``__cause__``.

    Args:
        hook: The name of the hook that failed (e.g. ``"on_retry"``).
        attempt: The attempt number (1-indexed) being processed when
            the hook failed.

    Attributes:
        hook: The name of the hook that failed.
        attempt: The attempt number being processed when the hook failed.
    """

    def __init__(self, hook: str, attempt: int) -> None:
        super().__init__(f"{hook} hook failed on attempt {attempt}")
        self.hook = hook
        self.attempt = attempt
