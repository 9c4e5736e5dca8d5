import json
import logging
from pathlib import Path
from typing import Any, Callable, Union

import yaml

from ..errors import ConfigurationError

logger = logging.getLogger(__name__)

_PARSERS: dict[str, Callable[[str], Any]] = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": json.loads,
}


def load_file(path: Union[str, Path]) -> Any:
    """
    Parse a YAML or JSON settings file, chosen by suffix.

    Blank files and empty YAML documents read as ``{}``.

    :raises FileNotFoundError: If the file does not exist.
    :raises IsADirectoryError: If the path is a directory.
    :raises ConfigurationError: If the suffix is not a supported format.
    """
    path = Path(path)
    parser = _PARSERS.get(path.suffix.lower())

    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path.absolute()}")
    if path.is_dir():
        raise IsADirectoryError(f"Settings path is a directory: {path.absolute()}")
    if parser is None:
        raise ConfigurationError(f"Unsupported settings file type: {path.name}")

    text = path.read_text(encoding="utf-8")
    if not text.strip():
        logger.debug("Settings file is empty: %s", path)
        return {}

    logger.debug("Parsing %s settings file: %s", path.suffix.lstrip(".").upper(), path)
    data = parser(text)
    return {} if data is None else data
