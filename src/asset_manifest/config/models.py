import logging
from pathlib import Path
from typing import Optional

import pydantic

from .base import Settings
from .loaders import load_file
from ..utils import expanded_path

logger = logging.getLogger(__name__)


class ManifestSettings(Settings):
    """Environment-level switches for publication, dispatch and retention."""

    gzip: bool = pydantic.Field(
        default=True,
        description="Write a .gz sidecar next to every compressible artifact"
    )
    gzip_level: int = pydantic.Field(
        default=9,
        ge=1,
        le=9,
        description="Compression level used for .gz sidecars"
    )
    export_concurrent: bool = pydantic.Field(
        default=True,
        description="Run exporters and postprocessors as parallel tasks"
    )
    max_workers: Optional[int] = pydantic.Field(
        default=None,
        ge=1,
        description="Upper bound of the dispatch worker pool (None uses the executor default)"
    )
    clean_keep: int = pydantic.Field(
        default=2,
        ge=0,
        description="Superseded versions kept per logical path by clean()"
    )
    clean_age: float = pydantic.Field(
        default=3600,
        ge=0,
        description="Superseded versions younger than this many seconds survive clean()"
    )
    resolve_cache_size: int = pydantic.Field(
        default=1024,
        ge=1,
        description="Resolved artifacts cached during a single compile"
    )


def load_settings(path: Optional[Path] = None, **overrides) -> ManifestSettings:
    """
    Build settings from an optional YAML/JSON file layered over the environment.

    Explicit keyword overrides win over file values.

    :param path: Optional settings file.
    :return: Validated settings.
    """
    values: dict = {}
    if path is not None:
        values = load_file(expanded_path(path))
        if not isinstance(values, dict):
            raise ValueError(f"Settings file must contain a mapping: {path}")
        logger.debug("Loaded %d setting(s) from %s", len(values), path)
    values.update(overrides)
    return ManifestSettings(**values)
