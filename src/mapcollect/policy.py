"""Duplicate-key merge policies.

A merge policy decides which value survives when two elements of the input
map to the same key. Each policy provides the two halves of a fold:

    - accumulator: folds a single element into a partial mapping
    - combiner: merges two partial mappings built from consecutive chunks

The combiner direction differs between policies. Under KEEP_FIRST the
earlier partial wins on collision, under KEEP_LAST the later one does, so
that combining partials gives the same result as a single sequential pass
however the input was split.

Example:
    >>> from functools import reduce
    >>> step = MergePolicy.KEEP_FIRST.accumulator(lambda p: p[0], lambda p: p[1])
    >>> reduce(step, [("a", 1), ("b", 2), ("a", 3)], {})
    {'a': 1, 'b': 2}
"""

from collections.abc import Callable, MutableMapping
from enum import Enum
from typing import Any, Self, TypeVar

from mapcollect.exceptions import KeyMappingError, ValueMappingError

_M = TypeVar("_M", bound=MutableMapping[Any, Any])

#: Folds one element into a mapping and returns that mapping.
Accumulator = Callable[[_M, Any], _M]

#: Merges a later partial mapping into an earlier one and returns the result.
Combiner = Callable[[_M, _M], _M]


def _map_element(
    element: Any,
    key_fn: Callable[[Any], Any],
    value_fn: Callable[[Any], Any],
) -> tuple[Any, Any]:
    """Apply both mapping functions to an element.

    Raises:
        KeyMappingError: If ``key_fn`` raises.
        ValueMappingError: If ``value_fn`` raises.
    """
    try:
        key = key_fn(element)
    except Exception as exc:
        raise KeyMappingError(element, exc) from exc
    try:
        value = value_fn(element)
    except Exception as exc:
        raise ValueMappingError(element, exc) from exc
    return key, value


class MergePolicy(Enum):
    """Tie-break rule applied when several elements map to the same key."""

    KEEP_FIRST = "first"
    KEEP_LAST = "last"

    def accumulator(
        self,
        key_fn: Callable[[Any], Any],
        value_fn: Callable[[Any], Any],
    ) -> Accumulator:
        """Return a fold step for this policy.

        Both mapping functions are applied to every element, including
        elements whose key is already present under KEEP_FIRST.

        Args:
            key_fn: Maps an element to its key.
            value_fn: Maps an element to its value.

        Returns:
            A function ``(mapping, element) -> mapping`` suitable for
            ``functools.reduce``.
        """
        insert = _INSERTERS[self]

        def accumulate(mapping: _M, element: Any) -> _M:
            key, value = _map_element(element, key_fn, value_fn)
            insert(mapping, key, value)
            return mapping

        return accumulate

    def combiner(self) -> Combiner:
        """Return the function that merges two partial mappings.

        The returned function takes the partial built from the earlier part
        of the input first. It updates that partial in place and returns it;
        the later partial is not modified.
        """
        return _COMBINERS[self]

    def merge(self, earlier: _M, later: _M) -> _M:
        """Merge ``later`` into ``earlier`` with this policy's combiner, returning ``earlier``."""
        return self.combiner()(earlier, later)

    @classmethod
    def parse(cls, value: "MergePolicy | str") -> Self:
        """Resolve a policy from a member, a member name or a member value.

        Names are matched case-insensitively and may use ``-`` in place of
        ``_``, so ``"keep-last"``, ``"KEEP_LAST"`` and ``"last"`` all resolve
        to KEEP_LAST.

        Raises:
            ValueError: If ``value`` does not name a policy.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            name = value.strip().replace("-", "_").upper()
            if name in cls.__members__:
                return cls[name]
            lowered = value.strip().lower()
            policy = next((it for it in cls if it.value == lowered), None)
            if policy is not None:
                return policy
        raise ValueError(
            f"Unknown merge policy {value!r}; expected one of "
            f"{', '.join(cls.__members__)}"
        )


def _insert_if_absent(mapping: MutableMapping[Any, Any], key: Any, value: Any) -> None:
    mapping.setdefault(key, value)


def _insert_or_replace(mapping: MutableMapping[Any, Any], key: Any, value: Any) -> None:
    mapping[key] = value


def _combine_keep_first(earlier: _M, later: _M) -> _M:
    # Keys new to `earlier` are appended in `later`'s order, matching a sequential pass.
    for key, value in later.items():
        earlier.setdefault(key, value)
    return earlier


def _combine_keep_last(earlier: _M, later: _M) -> _M:
    earlier.update(later)
    return earlier


_INSERTERS: dict[MergePolicy, Callable[[MutableMapping[Any, Any], Any, Any], None]] = {
    MergePolicy.KEEP_FIRST: _insert_if_absent,
    MergePolicy.KEEP_LAST: _insert_or_replace,
}

_COMBINERS: dict[MergePolicy, Combiner] = {
    MergePolicy.KEEP_FIRST: _combine_keep_first,
    MergePolicy.KEEP_LAST: _combine_keep_last,
}

KEEP_FIRST = MergePolicy.KEEP_FIRST
KEEP_LAST = MergePolicy.KEEP_LAST
