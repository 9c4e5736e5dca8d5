import logging
from pathlib import Path
from typing import Optional, Union

from dependency_injector import providers

from .config.models import ManifestSettings, load_settings
from .container import ManifestContainer
from .export.registry import ExportRegistry
from .manifest.store import ManifestStore
from .resolver.protocols import Resolver

logger = logging.getLogger(__name__)


def create_container(
        resolver: Optional[Resolver] = None,
        path: Union[str, Path, None] = None,
        filename: Union[str, Path, None] = None,
        settings: Optional[ManifestSettings] = None,
        settings_path: Optional[Path] = None,
        registry: Optional[ExportRegistry] = None
) -> ManifestContainer:
    """
    Create a container wired with the given collaborators.

    :param resolver: Asset resolver; None gives a read-only store.
    :param path: Output directory or manifest file.
    :param filename: Optional separately located manifest file.
    :param settings: Explicit settings; takes precedence over ``settings_path``.
    :param settings_path: YAML/JSON settings file layered over the environment.
    :param registry: Exporter/postprocessor registry to share.
    :return: The configured container.
    """
    container = ManifestContainer()

    if settings is None and settings_path is not None:
        settings = load_settings(settings_path)
    if settings is not None:
        container.config.override(providers.Object(settings))
    if registry is not None:
        container.registry.override(providers.Object(registry))

    container.resolver.override(providers.Object(resolver))
    container.path.override(providers.Object(path))
    container.filename.override(providers.Object(filename))

    logger.debug("Created manifest container (path=%s, filename=%s, resolver=%s)",
                 path, filename, type(resolver).__name__ if resolver is not None else None)
    return container


def create_manifest_store(
        resolver: Optional[Resolver] = None,
        path: Union[str, Path, None] = None,
        filename: Union[str, Path, None] = None,
        **kwargs
) -> ManifestStore:
    """Build a ManifestStore through :func:`create_container`."""
    return create_container(resolver, path, filename, **kwargs).store()
