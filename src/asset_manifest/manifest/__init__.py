from .locator import (
    LEGACY_MANIFEST_RE,
    MANIFEST_RE,
    find_directory_manifest,
    generate_manifest_name,
    locate_manifest,
)
from .models import ManifestData, ManifestEntry
from .retention import stale_versions
from .store import ManifestStore, index_alias_target

__all__ = [
    "LEGACY_MANIFEST_RE",
    "MANIFEST_RE",
    "find_directory_manifest",
    "generate_manifest_name",
    "locate_manifest",
    "ManifestData",
    "ManifestEntry",
    "stale_versions",
    "ManifestStore",
    "index_alias_target",
]
