"""Exceptions for map collection.

This module defines the exceptions raised while folding a sequence into a
mapping. A failing key or value mapping function aborts the whole build;
the original exception is kept as ``__cause__`` so callers can still
handle it by its own type.
"""

from typing import Any


class MapCollectionError(Exception):
    """Base exception for map collection failures.

    Attributes:
        element: The input element that was being processed.
        cause: The exception raised by the mapping function.
        message: Human-readable description of the failure.
    """

    def __init__(
        self,
        message: str,
        *,
        element: Any = None,
        cause: BaseException | None = None,
    ) -> None:
        self.element = element
        self.cause = cause
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class KeyMappingError(MapCollectionError):
    """Raised when the key mapping function fails for an element."""

    def __init__(
        self,
        element: Any,
        cause: BaseException,
        message: str | None = None,
    ) -> None:
        if message is None:
            message = (
                f"Key mapping failed for element {element!r}: "
                f"{type(cause).__name__}: {cause}"
            )
        super().__init__(message, element=element, cause=cause)


class ValueMappingError(MapCollectionError):
    """Raised when the value mapping function fails for an element."""

    def __init__(
        self,
        element: Any,
        cause: BaseException,
        message: str | None = None,
    ) -> None:
        if message is None:
            message = (
                f"Value mapping failed for element {element!r}: "
                f"{type(cause).__name__}: {cause}"
            )
        super().__init__(message, element=element, cause=cause)
