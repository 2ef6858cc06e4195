r"""Exception filters separating retryable failures from fatal ones.

An exception filter is the single dispatch point of the retry engine:
a failure accepted by the filter drives the retry loop, a failure
rejected by the filter propagates to the caller immediately, without
reaching the backoff schedule or any hook.

Example:
    ```pycon
    >>> from aretry.filters import ExceptionFilter
    >>> retry_on_io = ExceptionFilter.handle(ConnectionError, TimeoutError)
    >>> retry_on_io.is_retryable(ConnectionResetError())
    True
    >>> retry_on_io.is_retryable(KeyError("missing"))
    False
    >>> transient = ExceptionFilter(lambda exc: "transient" in str(exc))
    >>> transient.is_retryable(RuntimeError("transient glitch"))
    True

    ```
"""

from __future__ import annotations

__all__ = ["ExceptionFilter", "as_filter"]

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable


class ExceptionFilter:
    """Classify failures as retryable or fatal.

    The filter wraps an explicit classifier function that receives the
    failure and returns ``True`` when the failure is retryable. The
    classifier must be stateless and must not raise.

    Args:
        classifier: Function returning ``True`` if the failure is
            retryable and ``False`` if it is fatal.
        name: Optional human readable name, used in ``repr`` and logs.

    Attributes:
        classifier: The classifier function.
        name: The name of the filter.
    """

    def __init__(self, classifier: Callable[[BaseException], bool], name: str | None = None) -> None:
        if not callable(classifier):
            msg = f"classifier must be callable, got {classifier!r}"
            raise TypeError(msg)
        self.classifier = classifier
        self.name = name or getattr(classifier, "__name__", type(classifier).__name__)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(name={self.name!r})"

    def is_retryable(self, error: BaseException) -> bool:
        """Indicate if a failure is retryable.

        Args:
            error: The failure raised by the operation.

        Returns:
            ``True`` if the failure is retryable, otherwise ``False``.
        """
        return bool(self.classifier(error))

    def or_(self, other: ExceptionFilter | Any) -> ExceptionFilter:
        """Combine this filter with another one.

        The combined filter accepts a failure if either filter accepts it.

        Args:
            other: The other filter, or anything accepted by ``as_filter``.

        Returns:
            The combined filter.

        Example:
            ```pycon
            >>> from aretry.filters import ExceptionFilter
            >>> combined = ExceptionFilter.handle(KeyError).or_(ValueError)
            >>> combined.is_retryable(ValueError())
            True
            >>> combined.is_retryable(TypeError())
            False

            ```
        """
        other = as_filter(other)

        def _either(error: BaseException) -> bool:
            return self.is_retryable(error) or other.is_retryable(error)

        return ExceptionFilter(_either, name=f"{self.name}|{other.name}")

    @classmethod
    def handle(cls, *exception_types: type[BaseException]) -> ExceptionFilter:
        """Create a filter accepting instances of the given exception
        types, including their subclasses.

        Args:
            *exception_types: The retryable exception types.

        Returns:
            The filter.

        Raises:
            ValueError: If no exception type is given.
            TypeError: If an argument is not an exception type.
        """
        if not exception_types:
            msg = "at least one exception type is required"
            raise ValueError(msg)
        for exc_type in exception_types:
            if not (isinstance(exc_type, type) and issubclass(exc_type, BaseException)):
                msg = f"expected an exception type, got {exc_type!r}"
                raise TypeError(msg)

        def _is_instance(error: BaseException) -> bool:
            return isinstance(error, exception_types)

        return cls(_is_instance, name="|".join(t.__name__ for t in exception_types))

    @classmethod
    def all(cls) -> ExceptionFilter:
        """Create a filter accepting every ``Exception``.

        Returns:
            The filter.
        """
        return cls.handle(Exception)


def as_filter(obj: ExceptionFilter | Callable[[BaseException], bool] | Any) -> ExceptionFilter:
    """Normalize an object into an exception filter.

    Args:
        obj: An ``ExceptionFilter``, an exception type, a tuple of
            exception types, or a classifier function.

    Returns:
        The exception filter.

    Raises:
        TypeError: If the object cannot be converted to a filter.

    Example:
        ```pycon
        >>> from aretry.filters import as_filter
        >>> as_filter(ValueError)
        ExceptionFilter(name='ValueError')
        >>> as_filter((KeyError, IndexError)).is_retryable(IndexError())
        True

        ```
    """
    if isinstance(obj, ExceptionFilter):
        return obj
    if isinstance(obj, type) and issubclass(obj, BaseException):
        return ExceptionFilter.handle(obj)
    if isinstance(obj, tuple):
        return ExceptionFilter.handle(*obj)
    if callable(obj):
        return ExceptionFilter(obj)
    msg = f"cannot build an exception filter from {obj!r}"
    raise TypeError(msg)
