from .bootstrap import create_container, create_manifest_store
from .config import (
    Settings,
    ManifestSettings,
    load_file,
    load_settings,
    setup_logging,
)
from .container import ManifestContainer
from .errors import (
    AssetManifestError,
    ConfigurationError,
    DoubleLinkError,
    NotFoundError,
)
from .export import (
    ConcurrentDispatcher,
    ExportRegistry,
    Publisher,
)
from .manifest import (
    ManifestData,
    ManifestEntry,
    ManifestStore,
    find_directory_manifest,
    generate_manifest_name,
    locate_manifest,
    stale_versions,
)
from .resolver import (
    Artifact,
    CachedResolver,
    ExportCallback,
    LinkExpander,
    Resolver,
)
