"""Chunked map collection.

Splits the input into consecutive chunks, builds a partial mapping per
chunk and merges the partials with the policy's combiner. Chunks can be
built by a ``concurrent.futures`` executor; results are combined in
encounter order, not in completion order, so the outcome is the same as a
single sequential pass for any chunk size and any degree of parallelism.

Example::

    with ThreadPoolExecutor() as pool:
        latest = build_map_chunked(
            events, attrgetter("id"), policy=KEEP_LAST, chunk_size=500, executor=pool
        )
"""

from collections.abc import Callable, Hashable, Iterable, Iterator, MutableMapping
from concurrent.futures import Executor
from functools import partial
from itertools import islice
from logging import getLogger

from typing_extensions import TypeVar

from mapcollect.collector import MapFactory, build_map, identity, to_map
from mapcollect.policy import MergePolicy

logger = getLogger(__name__)

_T = TypeVar("_T")
_K = TypeVar("_K", bound=Hashable)
_U = TypeVar("_U")

DEFAULT_CHUNK_SIZE = 1024


def chunked(elements: Iterable[_T], size: int) -> Iterator[list[_T]]:
    """Split ``elements`` into consecutive lists of at most ``size`` items.

    Raises:
        ValueError: If ``size`` is less than 1.
    """
    if size < 1:
        raise ValueError(f"Chunk size must be at least 1, got {size}")

    def _chunks() -> Iterator[list[_T]]:
        iterator = iter(elements)
        while chunk := list(islice(iterator, size)):
            yield chunk

    return _chunks()


def _build_chunk(
    key_fn: Callable[[_T], _K],
    value_fn: Callable[[_T], _U],
    policy: MergePolicy,
    map_factory: MapFactory,
    chunk: list[_T],
) -> MutableMapping[_K, _U]:
    return build_map(chunk, key_fn, value_fn, policy=policy, map_factory=map_factory)


def build_map_chunked(
    elements: Iterable[_T],
    key_fn: Callable[[_T], _K],
    value_fn: Callable[[_T], _U] = identity,
    *,
    policy: MergePolicy | str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    executor: Executor | None = None,
    map_factory: MapFactory = dict,
) -> MutableMapping[_K, _U]:
    """Build a mapping chunk by chunk, optionally on an executor.

    Args:
        elements: The input, in encounter order.
        key_fn: Maps an element to its key.
        value_fn: Maps an element to its value. Defaults to the element.
        policy: Which occurrence of a duplicate key is retained.
        chunk_size: Maximum number of elements per partial mapping.
        executor: Builds the partial mappings when given. The caller owns
            its lifetime. With a process pool, ``key_fn``, ``value_fn`` and
            ``map_factory`` must be picklable.
        map_factory: Creates each partial mapping and the result.

    Returns:
        A mapping equal to ``build_map(elements, key_fn, value_fn, policy=policy)``.

    Raises:
        ValueError: If ``chunk_size`` is less than 1 or ``policy`` is unknown.
        KeyMappingError: If ``key_fn`` raises for an element.
        ValueMappingError: If ``value_fn`` raises for an element.
    """
    policy = MergePolicy.parse(policy)
    chunks = chunked(elements, chunk_size)
    build = partial(_build_chunk, key_fn, value_fn, policy, map_factory)

    partials = list(executor.map(build, chunks) if executor is not None else map(build, chunks))
    logger.debug(
        "Built %d partial mappings (chunk_size=%d, executor=%s)",
        len(partials),
        chunk_size,
        type(executor).__name__ if executor is not None else None,
    )

    return to_map(policy, key_fn, value_fn, map_factory=map_factory).combine(*partials)
