r"""Core configuration and validation shared by the retry executors."""

from __future__ import annotations

__all__ = [
    "DEFAULT_BACKOFF_BASE",
    "DEFAULT_MAX_RETRIES",
    "ExhaustionPolicy",
    "validate_delay",
    "validate_retry_params",
]

from aretry.core.config import DEFAULT_BACKOFF_BASE, DEFAULT_MAX_RETRIES, ExhaustionPolicy
from aretry.core.validation import validate_delay, validate_retry_params
