"""Fold-based map collection.

This module provides the sequential build operation and the collector
record it is built from. A collector bundles the three functions of a fold:

    - supplier: creates an empty mapping
    - accumulator: folds one element into a mapping
    - combiner: merges two partial mappings in encounter order

``build_map`` is the everyday entry point; ``to_map`` exposes the collector
so callers driving their own chunked or parallel evaluation can reuse the
policy's accumulator and combiner.

Example:
    >>> pairs = [("a", 1), ("b", 2), ("a", 3)]
    >>> build_map(pairs, lambda p: p[0], lambda p: p[1], policy=MergePolicy.KEEP_LAST)
    {'a': 3, 'b': 2}
"""

from collections.abc import Callable, Hashable, Iterable, MutableMapping
from dataclasses import dataclass
from functools import reduce
from typing import Any, Generic

from typing_extensions import TypeVar

from mapcollect.policy import Accumulator, Combiner, MergePolicy

_T = TypeVar("_T")
_K = TypeVar("_K", bound=Hashable)
_U = TypeVar("_U", default=_T)

MapFactory = Callable[[], MutableMapping[Any, Any]]


def identity(element: _T) -> _T:
    """Default value mapping function: the element itself."""
    return element


@dataclass(slots=True, frozen=True)
class MapCollector(Generic[_T, _K, _U]):
    """The supplier, accumulator and combiner of a map-building fold.

    Attributes:
        supplier: Creates the empty mapping each fold starts from.
        accumulator: Folds one element into a mapping, returning the mapping.
        combiner: Merges the partial mapping of a later chunk into that of an
            earlier chunk, returning the merged mapping.
    """

    supplier: MapFactory
    accumulator: Accumulator
    combiner: Combiner

    def collect(self, elements: Iterable[_T]) -> MutableMapping[_K, _U]:
        """Fold ``elements`` into a fresh mapping in a single pass."""
        return reduce(self.accumulator, elements, self.supplier())

    def combine(self, *partials: MutableMapping[_K, _U]) -> MutableMapping[_K, _U]:
        """Merge partial mappings given in encounter order.

        The partials themselves are left unmodified. With no partials, an
        empty mapping is returned.
        """
        return reduce(self.combiner, partials, self.supplier())


def to_map(
    policy: MergePolicy | str,
    key_fn: Callable[[_T], _K],
    value_fn: Callable[[_T], _U] = identity,
    *,
    map_factory: MapFactory = dict,
) -> MapCollector[_T, _K, _U]:
    """Create a collector that builds a mapping under ``policy``.

    Args:
        policy: Which occurrence of a duplicate key is retained, as a
            MergePolicy or a name accepted by MergePolicy.parse.
        key_fn: Maps an element to its key.
        value_fn: Maps an element to its value. Defaults to the element.
        map_factory: Creates the mapping to fill. Defaults to ``dict``.

    Returns:
        A MapCollector for the given policy and mapping functions.
    """
    policy = MergePolicy.parse(policy)
    return MapCollector(
        supplier=map_factory,
        accumulator=policy.accumulator(key_fn, value_fn),
        combiner=policy.combiner(),
    )


def build_map(
    elements: Iterable[_T],
    key_fn: Callable[[_T], _K],
    value_fn: Callable[[_T], _U] = identity,
    *,
    policy: MergePolicy | str,
    map_factory: MapFactory = dict,
) -> MutableMapping[_K, _U]:
    """Build a key to value mapping, resolving duplicate keys by ``policy``.

    Args:
        elements: The input, in encounter order. It is consumed once and not
            modified.
        key_fn: Maps an element to its key.
        value_fn: Maps an element to its value. Defaults to the element.
        policy: KEEP_FIRST retains the first element seen for a key,
            KEEP_LAST the last one. Policy names are also accepted.
        map_factory: Creates the mapping to fill. Defaults to ``dict``.

    Returns:
        A new mapping with one entry per distinct key.

    Raises:
        KeyMappingError: If ``key_fn`` raises for an element.
        ValueMappingError: If ``value_fn`` raises for an element.
    """
    return to_map(policy, key_fn, value_fn, map_factory=map_factory).collect(elements)
