"""Resolution of the manifest file location.

A manifest is either named explicitly or discovered inside its output
directory. Discovery prefers legacy ``manifest*.json`` names, then hashed
``.sprockets-manifest-<hex>.json`` names, and otherwise synthesizes a new
hashed name that only reaches the disk on the first save.
"""

import logging
import re
import secrets
from pathlib import Path
from typing import Optional, Union

from ..errors import ConfigurationError
from ..utils import expanded_path

logger = logging.getLogger(__name__)

LEGACY_MANIFEST_RE = re.compile(r"^manifest(-.*)?\.json$")
MANIFEST_RE = re.compile(r"^\.sprockets-manifest-[0-9a-f]{32}\.json$")


def generate_manifest_name() -> str:
    """Random hashed manifest filename."""
    return f".sprockets-manifest-{secrets.token_hex(16)}.json"


def find_directory_manifest(directory: Path) -> Path:
    """
    Find the manifest file inside an output directory.

    Args:
        directory: Output directory; it does not need to exist.

    Returns:
        The first legacy manifest, else the first hashed manifest, else a
        newly generated hashed name inside ``directory``.
    """
    entries = sorted(p.name for p in directory.iterdir() if p.is_file()) if directory.is_dir() else []

    for pattern in (LEGACY_MANIFEST_RE, MANIFEST_RE):
        matches = [name for name in entries if pattern.match(name)]
        if len(matches) > 1:
            logger.warning("Found multiple manifests: %s. Choosing the first alphabetically: %s",
                           matches, matches[0])
        if matches:
            logger.debug("Using existing manifest %s", matches[0])
            return directory / matches[0]

    name = generate_manifest_name()
    logger.debug("No manifest found in %s; generated %s", directory, name)
    return directory / name


def locate_manifest(
        path: Union[str, Path, None],
        filename: Union[str, Path, None] = None
) -> tuple[Path, Path]:
    """
    Resolve the output directory and manifest file.

    Accepted forms:
        - ``path`` is a ``*.json`` file: directory is its parent.
        - ``path`` is a directory: the manifest is discovered inside it.
        - ``path`` is a directory and ``filename`` a separately located file.
        - ``path`` is None and ``filename`` a file: directory is its parent.

    Args:
        path: Output directory or manifest file.
        filename: Optional explicit manifest file.

    Returns:
        Absolute ``(directory, filename)`` paths.

    Raises:
        ConfigurationError: If neither argument is given.
    """
    if path is None and filename is None:
        raise ConfigurationError("manifest requires an output directory or filename")

    directory: Optional[Path] = expanded_path(path) if path is not None else None
    manifest: Optional[Path] = expanded_path(filename) if filename is not None else None

    if manifest is None and directory.suffix == ".json":
        directory, manifest = directory.parent, directory
    elif directory is None:
        directory = manifest.parent

    directory = directory.absolute()
    if manifest is None:
        manifest = find_directory_manifest(directory)

    return directory, manifest.absolute()
