import logging
import shutil
import threading
from datetime import datetime, timezone
from pathlib import Path, PurePosixPath
from typing import Callable, Iterable, Optional, Union

from .locator import locate_manifest
from .models import ManifestData, ManifestEntry
from .retention import stale_versions
from ..config.models import ManifestSettings
from ..errors import ConfigurationError
from ..export.dispatcher import ConcurrentDispatcher
from ..export.publisher import Publisher
from ..export.registry import ExportRegistry
from ..resolver.cached import CachedResolver
from ..resolver.links import LinkExpander
from ..resolver.protocols import Artifact, Resolver
from ..utils import atomic_write

logger = logging.getLogger(__name__)

PathsArg = Union[str, Iterable[str]]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _flatten(paths: Iterable[PathsArg]) -> list[str]:
    out: list[str] = []
    for path in paths:
        if isinstance(path, (str, Path)):
            out.append(str(path))
        else:
            out.extend(_flatten(path))
    return out


def index_alias_target(logical_path: str) -> Optional[str]:
    """Index-qualified name an alias stands for: ``dir.js`` -> ``dir/index.js``."""
    path = PurePosixPath(logical_path)
    if not path.suffix or path.stem == "index":
        return None
    return str(path.with_suffix("") / f"index{path.suffix}")


class ManifestStore:
    """
    Published artifacts of an output directory and their persisted manifest.

    The in-memory manifest is shared with exporter and postprocessor tasks;
    every mutation and every save happens under ``lock``.
    """

    def __init__(
            self,
            resolver: Optional[Resolver] = None,
            path: Union[str, Path, None] = None,
            filename: Union[str, Path, None] = None,
            *,
            settings: Optional[ManifestSettings] = None,
            registry: Optional[ExportRegistry] = None,
            clock: Callable[[], datetime] = _utcnow
    ) -> None:
        self.resolver = resolver
        self.settings = settings if settings is not None else ManifestSettings()
        self.registry = registry if registry is not None else ExportRegistry()
        self._clock = clock
        self._lock = threading.RLock()

        self.directory, self.filename = locate_manifest(path, filename)
        self._data = ManifestData.load(self.filename)

    @property
    def path(self) -> Path:
        return self.filename

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    @property
    def files(self) -> dict[str, ManifestEntry]:
        with self._lock:
            return dict(self._data.files)

    @property
    def assets(self) -> dict[str, str]:
        with self._lock:
            return dict(self._data.assets)

    @property
    def data(self) -> ManifestData:
        """Deep snapshot of the manifest document."""
        with self._lock:
            return self._data.model_copy(deep=True)

    @property
    def publisher(self) -> Publisher:
        return Publisher(
            self.directory,
            gzip_enabled=self.settings.gzip,
            gzip_level=self.settings.gzip_level
        )

    @property
    def dispatcher(self) -> ConcurrentDispatcher:
        return ConcurrentDispatcher(
            concurrent=self.settings.export_concurrent,
            max_workers=self.settings.max_workers
        )

    def find(self, *paths: PathsArg) -> list[Artifact]:
        """
        Resolve logical paths and everything they link, without publishing.

        :raises ConfigurationError: If no resolver is configured.
        """
        if self.resolver is None:
            raise ConfigurationError("manifest requires a resolver for compilation")

        resolver = CachedResolver(self.resolver, maxsize=self.settings.resolve_cache_size)
        return LinkExpander(resolver).expand(_flatten(paths))

    def compile(self, *paths: PathsArg) -> list[Artifact]:
        """
        Publish logical paths and their links, then record them in the manifest.

        Artifacts are written to disk, every registered exporter and
        postprocessor runs, and the manifest is saved.

        :param paths: Logical paths (strings or iterables of strings).
        :return: The published artifacts, in expansion order.
        :raises ConfigurationError: If no resolver is configured.
        :raises DoubleLinkError: If linked artifacts collide on an output path.
        :raises NotFoundError: If a path cannot be resolved.
        """
        artifacts = self.find(*paths)

        publisher = self.publisher
        for artifact in artifacts:
            publisher.publish(artifact)

        self.dispatcher.dispatch(artifacts, self.registry)

        with self._lock:
            for artifact in artifacts:
                self._record(artifact)
            for artifact in artifacts:
                if self._is_index_alias(artifact):
                    target = index_alias_target(artifact.logical_path)
                    logger.debug("Collapsing index asset %s into %s", target, artifact.logical_path)
                    del self._data.assets[target]
            self.save()

        return artifacts

    def _is_index_alias(self, artifact: Artifact) -> bool:
        # Only an alias carrying the index file's own content replaces it
        target = index_alias_target(artifact.logical_path)
        if target is None or target not in self._data.assets:
            return False
        index_entry = self._data.files.get(self._data.assets[target])
        return index_entry is not None and index_entry.digest == artifact.digest

    def _record(self, artifact: Artifact) -> None:
        if artifact.digest_path not in self._data.files:
            self._data.files[artifact.digest_path] = ManifestEntry(
                logical_path=artifact.logical_path,
                mtime=self._clock(),
                size=artifact.size,
                digest=artifact.digest,
                integrity=artifact.integrity,
            )
        self._data.assets[artifact.logical_path] = artifact.digest_path

    def remove(self, digest_path: str) -> None:
        """
        Delete a published file, its sidecar and its manifest entries.

        Unknown digest paths are ignored.
        """
        with self._lock:
            if self._remove_entry(digest_path):
                self.save()

    def _remove_entry(self, digest_path: str) -> bool:
        entry = self._data.files.pop(digest_path, None)
        if entry is None:
            logger.debug("Not in manifest, nothing to remove: %s", digest_path)
            return False

        if self._data.assets.get(entry.logical_path) == digest_path:
            del self._data.assets[entry.logical_path]

        self.publisher.unpublish(digest_path)
        logger.info("Removed %s", digest_path)
        return True

    def clean(
            self,
            keep: Optional[int] = None,
            age: Optional[float] = None,
            now: Optional[datetime] = None
    ) -> list[str]:
        """
        Remove superseded versions per the retention policy.

        :param keep: Superseded versions kept per logical path (settings default).
        :param age: Seconds under which superseded versions are kept (settings default).
        :param now: Reference time, defaults to the store clock.
        :return: Removed digest paths.
        """
        keep = self.settings.clean_keep if keep is None else keep
        age = self.settings.clean_age if age is None else age

        with self._lock:
            stale = stale_versions(self._data, keep, age, now or self._clock())
            for digest_path in stale:
                self._remove_entry(digest_path)
            if stale:
                self.save()
        return stale

    def find_sources(self, *paths: PathsArg) -> list[bytes]:
        """
        Read published content of logical paths straight from the output directory.

        Paths missing from the manifest are skipped. The resolver is never used.
        """
        with self._lock:
            digest_paths = [
                self._data.assets[logical_path]
                for logical_path in _flatten(paths)
                if logical_path in self._data.assets
            ]

        sources: list[bytes] = []
        for digest_path in digest_paths:
            target = self.directory / digest_path
            if not target.is_file():
                logger.warning("Manifest entry has no published file: %s", target)
                continue
            sources.append(target.read_bytes())
        return sources

    def clobber(self) -> None:
        """Delete the whole output directory and forget the in-memory manifest."""
        with self._lock:
            if self.directory.exists():
                shutil.rmtree(self.directory)
                logger.info("Removed %s", self.directory)
            self._data = ManifestData()

    def save(self) -> None:
        """Write the whole manifest document, creating directories as needed."""
        with self._lock:
            atomic_write(self.filename, self._data.to_json().encode("utf-8"))
            logger.debug("Saved manifest %s (%d files, %d assets)",
                         self.filename, len(self._data.files), len(self._data.assets))

    def reload(self) -> ManifestData:
        """Replace the in-memory manifest with the persisted one."""
        with self._lock:
            self._data = ManifestData.load(self.filename)
            return self.data
