"""Schema of the persisted manifest document.

Loading is tolerant: missing, blank or invalid documents become an empty
manifest, invalid file entries are skipped and asset pointers to unknown
files are dropped.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import pydantic

logger = logging.getLogger(__name__)


class ManifestEntry(pydantic.BaseModel):
    """Metadata of one published, digest-qualified artifact."""

    logical_path: str
    mtime: datetime
    size: int = pydantic.Field(ge=0)
    digest: str
    integrity: Optional[str] = None

    model_config = pydantic.ConfigDict(extra="allow")

    @pydantic.field_validator("mtime", mode="after")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Naive timestamps are read as UTC so entries stay comparable."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class ManifestData(pydantic.BaseModel):
    """
    The manifest document.

    ``files`` maps digest paths to entries and may hold several versions of
    one logical path; ``assets`` maps each logical path to its current
    digest path.
    """

    files: dict[str, ManifestEntry] = pydantic.Field(default_factory=dict)
    assets: dict[str, str] = pydantic.Field(default_factory=dict)

    @pydantic.model_validator(mode="after")
    def drop_dangling_assets(self) -> "ManifestData":
        dangling = [
            logical_path
            for logical_path, digest_path in self.assets.items()
            if digest_path not in self.files
        ]
        for logical_path in dangling:
            logger.warning("Dropping dangling manifest asset %s -> %s",
                           logical_path, self.assets[logical_path])
            del self.assets[logical_path]
        return self

    def versions(self, logical_path: str) -> dict[str, ManifestEntry]:
        """All tracked files entries published for a logical path."""
        return {
            digest_path: entry
            for digest_path, entry in self.files.items()
            if entry.logical_path == logical_path
        }

    def to_json(self) -> str:
        return json.dumps(self.model_dump(mode="json"))

    @classmethod
    def from_raw(cls, raw: Any) -> "ManifestData":
        """Build a manifest from decoded JSON, skipping anything malformed."""
        if not isinstance(raw, dict):
            if raw not in (None, {}):
                logger.warning("Ignoring manifest document of type %s", type(raw).__name__)
            return cls()

        files: dict[str, ManifestEntry] = {}
        raw_files = raw.get("files")
        if isinstance(raw_files, dict):
            for digest_path, value in raw_files.items():
                try:
                    files[digest_path] = ManifestEntry.model_validate(value)
                except pydantic.ValidationError as e:
                    logger.warning("Skipping invalid manifest entry %s: %s", digest_path, e)

        assets: dict[str, str] = {}
        raw_assets = raw.get("assets")
        if isinstance(raw_assets, dict):
            assets = {
                logical_path: digest_path
                for logical_path, digest_path in raw_assets.items()
                if isinstance(logical_path, str) and isinstance(digest_path, str)
            }

        return cls(files=files, assets=assets)

    @classmethod
    def from_json(cls, text: str) -> "ManifestData":
        if not text.strip():
            return cls()
        try:
            raw = json.loads(text)
        except ValueError as e:
            logger.warning("Ignoring invalid manifest document: %s", e)
            return cls()
        return cls.from_raw(raw)

    @classmethod
    def load(cls, path: Path) -> "ManifestData":
        """
        Load a manifest file, treating missing or unreadable files as empty.

        :param path: Manifest file path.
        :return: The loaded manifest.
        """
        if not path.is_file():
            logger.debug("No manifest at %s; starting empty", path)
            return cls()
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Unable to read manifest %s: %s", path, e)
            return cls()

        data = cls.from_json(text)
        logger.debug("Loaded manifest %s with %d file(s) and %d asset(s)",
                     path, len(data.files), len(data.assets))
        return data
