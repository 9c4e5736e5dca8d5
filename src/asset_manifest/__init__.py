"""
Asset manifest compiler and cache.

Publishes resolved, content-addressed build outputs to an output directory,
tracks them in a persisted JSON manifest and reclaims stale versions.
Consumers should import from here for stable API access.
"""

from .api import (
    # Bootstrap
    create_container,
    create_manifest_store,
    ManifestContainer,
    # Config
    Settings,
    ManifestSettings,
    load_file,
    load_settings,
    setup_logging,
    # Errors
    AssetManifestError,
    ConfigurationError,
    DoubleLinkError,
    NotFoundError,
    # Export
    ConcurrentDispatcher,
    ExportRegistry,
    Publisher,
    # Manifest
    ManifestData,
    ManifestEntry,
    ManifestStore,
    find_directory_manifest,
    generate_manifest_name,
    locate_manifest,
    stale_versions,
    # Resolver
    Artifact,
    CachedResolver,
    ExportCallback,
    LinkExpander,
    Resolver,
)

__all__ = [
    # Bootstrap
    "create_container",
    "create_manifest_store",
    "ManifestContainer",
    # Config
    "Settings",
    "ManifestSettings",
    "load_file",
    "load_settings",
    "setup_logging",
    # Errors
    "AssetManifestError",
    "ConfigurationError",
    "DoubleLinkError",
    "NotFoundError",
    # Export
    "ConcurrentDispatcher",
    "ExportRegistry",
    "Publisher",
    # Manifest
    "ManifestData",
    "ManifestEntry",
    "ManifestStore",
    "find_directory_manifest",
    "generate_manifest_name",
    "locate_manifest",
    "stale_versions",
    # Resolver
    "Artifact",
    "CachedResolver",
    "ExportCallback",
    "LinkExpander",
    "Resolver",
]
