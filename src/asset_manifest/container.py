import logging

from dependency_injector import containers, providers

from .config.models import ManifestSettings
from .export.registry import ExportRegistry
from .manifest.store import ManifestStore

logger = logging.getLogger(__name__)


class ManifestContainer(containers.DeclarativeContainer):
    config = providers.Singleton(ManifestSettings)
    resolver = providers.Object(None)
    registry = providers.Singleton(ExportRegistry)

    path = providers.Object(None)
    filename = providers.Object(None)

    store = providers.Singleton(
        ManifestStore,
        resolver=resolver,
        path=path,
        filename=filename,
        settings=config,
        registry=registry,
    )
