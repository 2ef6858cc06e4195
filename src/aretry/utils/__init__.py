r"""Utility helpers shared by the retry executors."""

from __future__ import annotations

__all__ = [
    "RETRY_FIELDS",
    "StructuredFormatter",
    "bind_correlation_id",
    "get_correlation_id",
    "log_structured",
]

from aretry.utils.structured_logging import (
    RETRY_FIELDS,
    StructuredFormatter,
    bind_correlation_id,
    get_correlation_id,
    log_structured,
)
