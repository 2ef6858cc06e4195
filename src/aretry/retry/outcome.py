r"""Outcome of a retry execution."""

from __future__ import annotations

__all__ = ["OutcomeStatus", "RetryOutcome"]

from dataclasses import dataclass
from enum import Enum
from typing import Any


class OutcomeStatus(Enum):
    """Status of a completed execution.

    A failure rejected by the exception filter has no status: it is
    raised to the caller.

    Attributes:
        SUCCESS: The operation completed.
        EXHAUSTED: A bounded execution ran out of retries and the
            exhaustion policy swallowed the final failure.
    """

    SUCCESS = "success"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class RetryOutcome:
    """Outcome of a retry execution.

    A bounded execution can return without raising after exhausting its
    retries: check ``succeeded`` rather than assuming that every failure
    is signaled by an exception.

    Attributes:
        status: The status of the execution.
        result: The value returned by the operation, or ``None``.
        error: The final failure if the retries were exhausted,
            otherwise ``None``.
        attempts: The number of attempts that were made.

    Example:
        ```pycon
        >>> from aretry.retry import RetryOutcome
        >>> outcome = RetryOutcome.success(42, attempts=2)
        >>> outcome.succeeded
        True
        >>> outcome.unwrap()
        42

        ```
    """

    status: OutcomeStatus
    result: Any = None
    error: BaseException | None = None
    attempts: int = 1

    @property
    def succeeded(self) -> bool:
        """``True`` if the operation completed."""
        return self.status is OutcomeStatus.SUCCESS

    @classmethod
    def success(cls, result: Any, attempts: int) -> RetryOutcome:
        return cls(status=OutcomeStatus.SUCCESS, result=result, attempts=attempts)

    @classmethod
    def exhausted(cls, error: BaseException, attempts: int) -> RetryOutcome:
        return cls(status=OutcomeStatus.EXHAUSTED, error=error, attempts=attempts)

    def unwrap(self) -> Any:
        """Return the result of a successful execution.

        Returns:
            The value returned by the operation.

        Raises:
            BaseException: The final failure if the retries were exhausted.
        """
        if self.error is not None:
            raise self.error
        return self.result
