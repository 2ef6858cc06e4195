r"""Execution context threaded through the attempts of one execution.

A ``Context`` is a mutable key/value bag created fresh for every
execution. The same instance is passed to the backoff schedule and to
every hook of that execution, so hooks can record data for the
following attempts. It is only used for diagnostics and is never
shared between executions.

Example:
    ```pycon
    >>> from aretry.context import Context
    >>> context = Context({"order_id": 42}, operation_key="sync-orders")
    >>> context["order_id"]
    42
    >>> context["last_status"] = "timeout"
    >>> sorted(context)
    ['last_status', 'order_id']
    >>> context.operation_key
    'sync-orders'

    ```
"""

from __future__ import annotations

__all__ = ["Context"]

import json
import uuid
from collections.abc import MutableMapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping


class Context(MutableMapping):
    """Correlation bag for the attempts of a single execution.

    Args:
        data: Optional initial key/value pairs. The mapping is copied.
        operation_key: Optional name of the operation, for diagnostics.
        correlation_id: Optional correlation id. A random one is
            generated when it is not given.

    Attributes:
        operation_key: The name of the operation, or ``None``.
        correlation_id: The correlation id of the execution.
    """

    def __init__(
        self,
        data: Mapping[str, Any] | None = None,
        operation_key: str | None = None,
        correlation_id: str | None = None,
    ) -> None:
        self._data: dict[str, Any] = dict(data or {})
        self.operation_key = operation_key
        self.correlation_id = correlation_id or uuid.uuid4().hex

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}({self._data!r}, "
            f"operation_key={self.operation_key!r}, correlation_id={self.correlation_id!r})"
        )

    def snapshot(self) -> dict[str, Any]:
        """Return a shallow copy of the context data, including the
        operation key and the correlation id.

        Returns:
            The snapshot as a dictionary.
        """
        return {
            "operation_key": self.operation_key,
            "correlation_id": self.correlation_id,
            "data": dict(self._data),
        }

    def to_json(self) -> str:
        """Render the context as a JSON text snapshot.

        Values that are not JSON serializable are rendered with ``str``.

        Returns:
            The JSON text.

        Example:
            ```pycon
            >>> from aretry.context import Context
            >>> Context({"user": "alice"}, correlation_id="abc").to_json()
            '{"operation_key": null, "correlation_id": "abc", "data": {"user": "alice"}}'

            ```
        """
        return json.dumps(self.snapshot(), default=str)
