from collections.abc import Callable
from typing import Any

import pytest
from pydantic import BaseModel


class Record(BaseModel):
    id: int
    name: str
    revision: int


class CallCounter:
    """Wraps a function and counts how many times it is called."""

    def __init__(self, fn: Callable[[Any], Any]) -> None:
        self._fn = fn
        self.calls: list[Any] = []

    def __call__(self, element: Any) -> Any:
        self.calls.append(element)
        return self._fn(element)


@pytest.fixture
def call_counter() -> type[CallCounter]:
    """Factory for mapping functions that record the elements they receive."""
    return CallCounter


@pytest.fixture
def pairs() -> list[tuple[str, int]]:
    return [("a", 1), ("b", 2), ("a", 3)]


@pytest.fixture
def records() -> list[Record]:
    return [
        Record(id=1, name="alpha", revision=1),
        Record(id=2, name="beta", revision=1),
        Record(id=1, name="alpha", revision=2),
        Record(id=3, name="gamma", revision=1),
        Record(id=2, name="beta", revision=2),
        Record(id=1, name="alpha", revision=3),
    ]
