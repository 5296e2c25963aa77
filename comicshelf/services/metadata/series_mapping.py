"""
Title-code to series-name resolution.

Persisted mappings (curated, or discovered through Comic Vine) take
precedence over the static code table.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from comicshelf.data.series_codes import lookup_series_title
from comicshelf.services.store import DocumentStore, DocumentStoreError


logger = logging.getLogger(__name__)

SOURCE_STATIC = "STATIC"
SOURCE_API_DISCOVERY = "API_DISCOVERY"


@dataclass
class SeriesMapping:
    title_code: str
    series_title: str
    source: str
    volume_id: Optional[str] = None
    persisted: bool = False


class SeriesMappingStore:

    def __init__(self, store: DocumentStore, collection: str):
        self.store = store
        self.collection = collection.strip("/")

    def _path(self, title_code: str) -> str:
        return f"{self.collection}/{title_code}"

    def get_persisted(self, title_code: str) -> Optional[SeriesMapping]:
        """Read a stored mapping. A failing store reads as absent."""
        try:
            doc = self.store.get(self._path(title_code))
        except DocumentStoreError as e:
            logger.warning("Mapping read failed for %s: %s", title_code, e)
            return None

        if not doc or not doc.get("series_title"):
            return None

        return SeriesMapping(
            title_code=title_code,
            series_title=doc["series_title"],
            source=doc.get("source", SOURCE_API_DISCOVERY),
            volume_id=doc.get("volume_id"),
            persisted=True,
        )

    def lookup(self, title_code: str) -> Optional[SeriesMapping]:
        """Persisted mapping first, then the static table."""
        mapping = self.get_persisted(title_code)
        if mapping:
            return mapping

        series_title = lookup_series_title(title_code)
        if series_title:
            return SeriesMapping(title_code=title_code, series_title=series_title, source=SOURCE_STATIC)

        return None

    def record_discovery(self, title_code: str, series_title: str, volume_id: Optional[str]) -> bool:
        """
        Persist a mapping learned from Comic Vine if none exists yet.

        Existence is re-read right before writing, so a mapping curated
        while the external call was in flight is never overwritten.

        Returns:
            True if a new mapping was written
        """
        if self.get_persisted(title_code):
            return False

        record = {
            "series_title": series_title,
            "volume_id": volume_id,
            "date_cached": datetime.now(timezone.utc).isoformat(),
            "source": SOURCE_API_DISCOVERY,
        }
        try:
            self.store.set(self._path(title_code), record, merge=True)
        except DocumentStoreError as e:
            logger.error("Mapping write failed for %s: %s", title_code, e)
            return False

        logger.info("Stored discovered mapping %s -> %s", title_code, series_title)
        return True
