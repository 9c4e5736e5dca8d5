import logging
from collections import defaultdict
from datetime import datetime, timezone

from .models import ManifestData, ManifestEntry

logger = logging.getLogger(__name__)


def stale_versions(
        data: ManifestData,
        keep: int,
        age: float,
        now: datetime
) -> list[str]:
    """
    Select superseded files entries that a clean should delete.

    Entries are grouped by logical path. The entry ``assets`` points at is
    always kept. The other versions are ranked newest first and one survives
    when its rank is below ``keep`` or it is younger than ``age`` seconds.

    :param data: The manifest to inspect.
    :param keep: Number of superseded versions kept per logical path.
    :param age: Age in seconds under which superseded versions are kept.
    :param now: Reference time for ages; naive values are read as UTC.
    :return: Digest paths to remove.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    grouped: dict[str, list[tuple[str, ManifestEntry]]] = defaultdict(list)
    for digest_path, entry in data.files.items():
        grouped[entry.logical_path].append((digest_path, entry))

    stale: list[str] = []
    for logical_path, versions in grouped.items():
        current = data.assets.get(logical_path)
        backups = sorted(
            (version for version in versions if version[0] != current),
            key=lambda version: version[1].mtime,
            reverse=True,
        )
        for index, (digest_path, entry) in enumerate(backups):
            entry_age = max(0.0, (now - entry.mtime).total_seconds())
            if entry_age < age or index < keep:
                continue
            logger.debug("Stale version of %s: %s (rank %d, %.0fs old)",
                         logical_path, digest_path, index, entry_age)
            stale.append(digest_path)

    return stale
