"""
Time-limited cache of resolved comic metadata.

Entries live in the document store as ``{metadata, cachedAt, ttl}``.
Expired entries are left in place and simply overwritten by the next
successful lookup.
"""
import logging
import time
from typing import Callable, Optional

from pydantic import ValidationError

from comicshelf.schemas.comic import ComicMetadata, ImageSource
from comicshelf.services.store import DocumentStore, DocumentStoreError


logger = logging.getLogger(__name__)

CACHE_TTL_DAYS = 7
MS_PER_DAY = 24 * 60 * 60 * 1000


def now_ms() -> int:
    return int(time.time() * 1000)


def build_cache_key(title_code: str, issue_number: int, cover_variant: str) -> str:
    return f"{title_code}-{issue_number}-{cover_variant.upper()}"


def is_fresh(cached_at: int, now: int, ttl_days: int = CACHE_TTL_DAYS) -> bool:
    return now < cached_at + ttl_days * MS_PER_DAY


class MetadataCache:
    """Read-through cache consulted before any Comic Vine request."""

    def __init__(
        self,
        store: DocumentStore,
        collection: str,
        clock: Callable[[], int] = now_ms,
        ttl_days: int = CACHE_TTL_DAYS,
    ):
        self.store = store
        self.collection = collection.strip("/")
        self.clock = clock
        self.ttl_days = ttl_days

    def _path(self, key: str) -> str:
        return f"{self.collection}/{key}"

    def get(self, key: str) -> Optional[ComicMetadata]:
        """
        Return cached metadata tagged as cache-sourced, or None.

        Store failures, malformed entries and expired entries all count
        as a miss.
        """
        try:
            entry = self.store.get(self._path(key))
        except DocumentStoreError as e:
            logger.warning("Cache read failed for %s, treating as miss: %s", key, e)
            return None

        if not entry:
            logger.info("Cache MISS for %s", key)
            return None

        cached_at = entry.get("cachedAt")
        if not isinstance(cached_at, (int, float)) or not is_fresh(int(cached_at), self.clock(), self.ttl_days):
            logger.info("Cache EXPIRED for %s", key)
            return None

        try:
            metadata = ComicMetadata.model_validate(entry.get("metadata") or {})
        except ValidationError as e:
            logger.warning("Discarding malformed cache entry %s: %s", key, e)
            return None

        logger.info("Cache HIT for %s", key)
        metadata.details.imageSource = ImageSource.CACHE.value
        return metadata

    def put(self, key: str, metadata: ComicMetadata) -> bool:
        """Overwrite the entry for ``key``. Returns False if the write failed."""
        entry = {
            "metadata": metadata.model_dump(mode="json"),
            "cachedAt": self.clock(),
            "ttl": self.ttl_days,
        }
        try:
            self.store.set(self._path(key), entry, merge=False)
        except DocumentStoreError as e:
            logger.error("Cache write failed for %s: %s", key, e)
            return False
        return True
