from .dispatcher import ConcurrentDispatcher
from .publisher import Publisher, GZIP_SUFFIX
from .registry import ExportRegistry, Callback, WILDCARD

__all__ = [
    "ConcurrentDispatcher",
    "Publisher",
    "GZIP_SUFFIX",
    "ExportRegistry",
    "Callback",
    "WILDCARD",
]
