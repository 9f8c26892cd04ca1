"""JSON file registry of ingested documents."""

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from eulens.models.document import DocumentRegistryEntry

logger = logging.getLogger(__name__)


class DocumentRegistry:
    """
    Keeps one entry per document url in a JSON array on disk.

    The file is read fully and rewritten fully on every update. There is no
    locking: two ingestion processes writing at once race, last write wins.
    """

    def __init__(self, path: str) -> None:
        """
        Initialize the registry.

        Args:
            path: Location of the registry JSON file.
        """
        self.path = Path(path)

    def load(self) -> List[DocumentRegistryEntry]:
        """
        Read all registry entries.

        A file that cannot be decoded is moved aside to ``<path>.bak`` and
        treated as empty.

        Returns:
            Entries in insertion order.
        """
        if not self.path.exists():
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            backup = self.path.with_name(self.path.name + ".bak")
            logger.error(
                f"Document registry at {self.path} is corrupt ({e}); moved to {backup}")
            os.replace(self.path, backup)
            return []

        return [DocumentRegistryEntry.model_validate(item) for item in data]

    def save(self, entries: List[DocumentRegistryEntry]) -> None:
        """
        Rewrite the registry file.

        Args:
            entries: Complete list of entries to persist.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = [entry.model_dump(mode="json", by_alias=True) for entry in entries]
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def get(self, url: str) -> Optional[DocumentRegistryEntry]:
        """Return the entry for url, if any."""
        for entry in self.load():
            if entry.url == url:
                return entry
        return None

    def upsert(self, url: str, name: str, now: Optional[datetime] = None) -> DocumentRegistryEntry:
        """
        Record an ingestion of the document at url.

        A new url is appended. A known url keeps its position and addedAt,
        while name and lastUpdated are replaced.

        Args:
            url: Document URL, the registry key.
            name: Document name.
            now: Timestamp of the ingestion. Defaults to the current UTC time.

        Returns:
            The stored entry.
        """
        now = now or datetime.now(timezone.utc)
        entries = self.load()

        for idx, entry in enumerate(entries):
            if entry.url == url:
                updated = entry.model_copy(update={"name": name, "last_updated": now})
                entries[idx] = updated
                break
        else:
            updated = DocumentRegistryEntry(
                url=url, name=name, added_at=now, last_updated=now)
            entries.append(updated)

        self.save(entries)
        logger.debug(f"Registry entry for {url} saved")
        return updated
