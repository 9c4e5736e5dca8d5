"""Exception taxonomy for manifest compilation.

Recoverable conditions (corrupt manifest documents, dangling references)
are absorbed while loading and never surface here.
"""


class AssetManifestError(Exception):
    """Base class for all manifest errors."""


class ConfigurationError(AssetManifestError):
    """Raised for unusable settings or when an operation needs a collaborator that was not configured."""


class NotFoundError(AssetManifestError, LookupError):
    """Raised by resolvers when a logical path cannot be resolved."""

    def __init__(self, logical_path: str):
        self.logical_path = logical_path
        super().__init__(f"Asset not found: {logical_path!r}")


class DoubleLinkError(AssetManifestError):
    """Raised when two different artifacts are linked under the same output path."""

    def __init__(self, parent: str, logical_path: str, first: str, second: str):
        self.parent = parent
        self.logical_path = logical_path
        self.first = first
        self.second = second
        super().__init__(
            f"Multiple files with the same output path cannot be linked ({logical_path!r})\n"
            f"In {parent!r} these files were linked:\n"
            f"  - {first}\n"
            f"  - {second}"
        )
