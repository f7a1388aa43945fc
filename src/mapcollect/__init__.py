from mapcollect.chunking import build_map_chunked, chunked
from mapcollect.collector import MapCollector, build_map, identity, to_map
from mapcollect.exceptions import KeyMappingError, MapCollectionError, ValueMappingError
from mapcollect.policy import KEEP_FIRST, KEEP_LAST, MergePolicy
from mapcollect._version import __version__

__all__ = [
    "MergePolicy",
    "KEEP_FIRST",
    "KEEP_LAST",
    "MapCollector",
    "to_map",
    "build_map",
    "build_map_chunked",
    "chunked",
    "identity",
    "MapCollectionError",
    "KeyMappingError",
    "ValueMappingError",
    "__version__",
]
