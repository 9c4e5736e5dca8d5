import base64
import binascii
from dataclasses import dataclass
from typing import Protocol, runtime_checkable, Optional, Any


@dataclass(frozen=True)
class Artifact:
    """
    A compiled asset as produced by a resolver.

    Attributes:
        logical_path (str): Name the artifact is published under. May differ
            from the requested path (index aliases, absolute source paths).
        digest_path (str): Content-addressed output path, relative to the
            output directory.
        source (bytes): Compiled content.
        digest (str): Content hash, opaque to the manifest.
        mime_type (str): Content type used to select callbacks.
        compressible (bool): Whether a gzip sidecar may be written.
        links (tuple[str, ...]): Logical paths that must be published too.
        filename (Optional[str]): Source file the artifact was built from.
    """
    logical_path: str
    digest_path: str
    source: bytes
    digest: str
    mime_type: str = "application/octet-stream"
    compressible: bool = False
    links: tuple[str, ...] = ()
    filename: Optional[str] = None
    integrity_uri: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.source)

    @property
    def integrity(self) -> Optional[str]:
        if self.integrity_uri is not None:
            return self.integrity_uri
        return hexdigest_integrity_uri(self.digest)


def hexdigest_integrity_uri(hexdigest: str) -> Optional[str]:
    """Subresource integrity string for a sha256 hex digest, None for anything else."""
    if len(hexdigest) != 64:
        return None
    try:
        raw = binascii.unhexlify(hexdigest)
    except (binascii.Error, ValueError):
        return None
    return "sha256-" + base64.b64encode(raw).decode("ascii")


@runtime_checkable
class Resolver(Protocol):
    """
    Protocol for the asset environment that compiles logical paths.

    Implementations raise NotFoundError for unknown paths.
    """

    def resolve(self, logical_path: str) -> Artifact:
        ...


@runtime_checkable
class ExportCallback(Protocol):
    """
    Protocol for exporters and postprocessors.

    ``process`` may be a plain or an async method. An optional
    ``skip(artifact) -> bool`` method lets a callback opt out per artifact.
    """

    def process(self, artifact: Artifact) -> Any:
        ...
