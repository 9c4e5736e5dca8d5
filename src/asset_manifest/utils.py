import os
import tempfile
from pathlib import Path
from typing import Union


def expanded_path(path: Union[str, Path]) -> Path:
    """
    Expands environment variables, user tilde, and normalizes path separators
    in a given path.

    :param path: The path to expand.
    :return: The expanded and normalized path as a Path object.
    """
    if isinstance(path, Path):
        path = str(path)

    # Expand environment variables and user (~)
    return Path(os.path.expandvars(os.path.expanduser(path)))


def atomic_write(path: Path, data: bytes) -> None:
    """
    Write bytes to a path by renaming a fully written sibling temp file over it.

    Readers never observe a partially written file. Parent directories are
    created as needed.

    :param path: Destination file.
    :param data: Content to write.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as fp:
            fp.write(data)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
