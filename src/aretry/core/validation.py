r"""Parameter validation utilities for retry executions.

This module provides validation functions for retry parameters to
ensure they meet the required constraints before an execution starts.
"""

from __future__ import annotations

__all__ = ["validate_delay", "validate_retry_params"]

import math


def validate_retry_params(max_retries: int | None) -> None:
    """Validate retry parameters.

    Args:
        max_retries: Maximum number of retry attempts. Must be >= 0.
            A value of 0 means no retries (only the initial attempt).
            ``None`` means the number of retries is not bounded.

    Raises:
        ValueError: If max_retries is negative.

    Example:
        ```pycon
        >>> from aretry.core import validate_retry_params
        >>> validate_retry_params(max_retries=3)
        >>> validate_retry_params(max_retries=None)
        >>> validate_retry_params(max_retries=-1)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: max_retries must be >= 0, got -1

        ```
    """
    if max_retries is not None and max_retries < 0:
        msg = f"max_retries must be >= 0, got {max_retries}"
        raise ValueError(msg)


def validate_delay(delay: float, attempt: int | None = None) -> None:
    """Validate a backoff delay.

    Args:
        delay: The delay in seconds. Must be a finite number >= 0.
        attempt: Optional attempt number, used in the error message.

    Raises:
        ValueError: If delay is negative, NaN or infinite.

    Example:
        ```pycon
        >>> from aretry.core import validate_delay
        >>> validate_delay(1.5)
        >>> validate_delay(-1.0, attempt=2)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: delay must be >= 0, got -1.0 (attempt 2)

        ```
    """
    if not math.isfinite(delay):
        msg = f"delay must be finite, got {delay}"
    elif delay < 0:
        msg = f"delay must be >= 0, got {delay}"
    else:
        return
    if attempt is not None:
        msg += f" (attempt {attempt})"
    raise ValueError(msg)
