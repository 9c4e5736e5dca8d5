import gzip
import io
import logging
from pathlib import Path
from typing import Optional, Union

from ..resolver.protocols import Artifact
from ..utils import atomic_write

logger = logging.getLogger(__name__)

GZIP_SUFFIX = ".gz"


class Publisher:
    """
    Writes artifact bytes under an output directory, once per digest path.

    Publication is a check-then-write against a content-addressed target,
    so concurrent callers can at worst write identical bytes twice.
    """

    def __init__(
            self,
            directory: Union[str, Path],
            gzip_enabled: bool = True,
            gzip_level: int = 9
    ) -> None:
        self.directory = Path(directory)
        self.gzip_enabled = gzip_enabled
        self.gzip_level = gzip_level

    def target(self, digest_path: str) -> Path:
        return self.directory / digest_path

    def publish(self, artifact: Artifact) -> list[Path]:
        """
        Publish an artifact and, when allowed, its gzip sidecar.

        :param artifact: The artifact to publish.
        :return: Paths written by this call (empty when everything existed).
        """
        return self.publish_bytes(
            artifact.digest_path,
            artifact.source,
            compressible=artifact.compressible,
        )

    def publish_bytes(
            self,
            digest_path: str,
            data: bytes,
            compressible: bool = False,
            mtime: Optional[float] = None
    ) -> list[Path]:
        """
        Write ``data`` to ``directory/digest_path`` unless it already exists.

        The ``.gz`` sidecar is handled independently of the main file, so an
        artifact published while gzip was disabled still receives one later.
        Errors raised while compressing propagate unchanged.

        :param digest_path: Content-addressed relative path.
        :param data: Bytes to write.
        :param compressible: Whether the content type allows compression.
        :param mtime: Timestamp recorded in the gzip header.
        :return: Paths written by this call.
        """
        written: list[Path] = []
        target = self.target(digest_path)

        if target.exists():
            logger.info("Skipping %s, already exists", target)
        else:
            logger.info("Writing %s", target)
            atomic_write(target, data)
            written.append(target)

        if compressible and self.gzip_enabled:
            sidecar = target.with_name(target.name + GZIP_SUFFIX)
            if sidecar.exists():
                logger.info("Skipping %s, already exists", sidecar)
            else:
                logger.info("Writing %s", sidecar)
                atomic_write(sidecar, self._compress(target.name, data, mtime))
                written.append(sidecar)

        return written

    def unpublish(self, digest_path: str) -> list[Path]:
        """Delete a published file and its sidecar; missing files are ignored."""
        target = self.target(digest_path)
        removed: list[Path] = []
        for path in (target, target.with_name(target.name + GZIP_SUFFIX)):
            if path.exists():
                path.unlink()
                removed.append(path)
        return removed

    def _compress(self, name: str, data: bytes, mtime: Optional[float]) -> bytes:
        buffer = io.BytesIO()
        with gzip.GzipFile(
                filename=name,
                mode="wb",
                compresslevel=self.gzip_level,
                fileobj=buffer,
                mtime=mtime
        ) as fp:
            fp.write(data)
        return buffer.getvalue()
