import logging
import threading

from cachetools import LRUCache, cachedmethod

from .protocols import Artifact, Resolver

logger = logging.getLogger(__name__)


class CachedResolver:
    """
    Resolver wrapper memoizing artifacts for the duration of one compile.

    A snapshot is taken per compile so that an artifact linked from many
    places is compiled once while later compiles still observe changes.
    """

    def __init__(self, resolver: Resolver, maxsize: int = 1024) -> None:
        self._resolver = resolver
        self._cache: LRUCache = LRUCache(maxsize=maxsize)
        self._lock = threading.Lock()

    @property
    def wrapped(self) -> Resolver:
        return self._resolver

    @cachedmethod(lambda self: self._cache, lock=lambda self: self._lock)
    def resolve(self, logical_path: str) -> Artifact:
        logger.debug("Resolving asset: %s", logical_path)
        return self._resolver.resolve(logical_path)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()
