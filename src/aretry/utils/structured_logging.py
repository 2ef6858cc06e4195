r"""Structured logging for retry executions.

The default hooks log through ``log_structured``: the retry fields
(``error_type``, ``attempt``, ``delay``, ``total_time`` and the JSON
``context`` snapshot) travel as record attributes. ``StructuredFormatter``
renders such records as one JSON object per line, with the context
decoded back to a nested object and the correlation id of the running
execution attached.

Example:
    ```python
    import logging
    from aretry.utils.structured_logging import StructuredFormatter

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    logging.getLogger("aretry").addHandler(handler)
    ```
"""

from __future__ import annotations

__all__ = [
    "RETRY_FIELDS",
    "StructuredFormatter",
    "bind_correlation_id",
    "get_correlation_id",
    "log_structured",
]

import contextlib
import contextvars
import json
import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "aretry_correlation_id", default=None
)

RETRY_FIELDS = ("error_type", "attempt", "delay", "total_time")

# Attributes of every LogRecord, never reported as extra fields.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message",
    "asctime",
}


def get_correlation_id() -> str | None:
    """Return the correlation id of the running execution, if any."""
    return _correlation_id.get()


@contextlib.contextmanager
def bind_correlation_id(correlation_id: str) -> Iterator[None]:
    """Bind a correlation id for the duration of a ``with`` block.

    The executors bind the id of their context while an execution runs.
    The previous value is restored on exit, also when the block raises.

    Args:
        correlation_id: The correlation id to bind.

    Example:
        ```pycon
        >>> from aretry.utils.structured_logging import (
        ...     bind_correlation_id,
        ...     get_correlation_id,
        ... )
        >>> with bind_correlation_id("exec-1"):
        ...     get_correlation_id()
        ...
        'exec-1'

        ```
    """
    token = _correlation_id.set(correlation_id)
    try:
        yield
    finally:
        _correlation_id.reset(token)


class StructuredFormatter(logging.Formatter):
    """Render log records as JSON lines.

    Every line has ``timestamp`` (UTC, ISO 8601 with milliseconds),
    ``level``, ``logger`` and ``message``. The retry fields listed in
    ``RETRY_FIELDS`` are copied when present. A ``context`` attribute
    holding JSON text is decoded into a nested object. Other extra
    attributes are grouped under ``extra``. Values JSON cannot encode
    are rendered with ``str``.

    Example:
        ```pycon
        >>> import json, logging
        >>> from aretry.utils.structured_logging import StructuredFormatter
        >>> record = logging.LogRecord("aretry", logging.ERROR, "", 0, "failed", None, None)
        >>> record.attempt = 2
        >>> record.context = '{"operation_key": "sync", "data": {}}'
        >>> data = json.loads(StructuredFormatter().format(record))
        >>> data["attempt"], data["context"]["operation_key"]
        (2, 'sync')

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        correlation_id = get_correlation_id()
        if correlation_id is not None:
            payload["correlation_id"] = correlation_id

        extra = {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}
        for field in RETRY_FIELDS:
            if field in extra:
                payload[field] = extra.pop(field)
        if "context" in extra:
            payload["context"] = _decode_context(extra.pop("context"))
        if extra:
            payload["extra"] = extra

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: ARG002
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return created.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _decode_context(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value


def log_structured(
    logger: logging.Logger,
    level: int,
    message: str,
    *,
    exc_info: BaseException | None = None,
    **extra: Any,
) -> None:
    """Log a message with the given fields attached to the record.

    Args:
        logger: Logger to use.
        level: Log level (e.g., logging.ERROR).
        message: Log message.
        exc_info: Optional exception whose traceback is attached to
            the record.
        **extra: Structured fields, e.g. ``attempt`` and ``delay``.
    """
    logger.log(level, message, exc_info=exc_info, extra=extra)
