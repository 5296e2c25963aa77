"""
Comic metadata resolution.

Turns decoded barcode identifiers into full issue metadata:
1. Cached result (no external call)
2. Series name from the persisted mapping store or the static code table
3. Comic Vine search for that series and issue
4. Newsstand/SKU/publisher rules
5. Cache write
"""
import logging
import re
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from comicshelf.core.errors import InvalidArgumentError
from comicshelf.data.grades import DIRECT_EDITION_VARIANT
from comicshelf.data.publisher_codes import lookup_publisher_name
from comicshelf.schemas.comic import ComicDetails, ComicMetadata, Creators, ImageSource
from comicshelf.services.metadata.cache import MetadataCache, build_cache_key, now_ms
from comicshelf.services.metadata.comicvine import ComicVineIssue, MetadataProvider
from comicshelf.services.metadata.series_mapping import SeriesMappingStore
from comicshelf.services.store import DocumentStore


logger = logging.getLogger(__name__)

TITLE_NOT_FOUND = "Title code not found"
METADATA_NOT_FOUND = "Metadata not found"

UNKNOWN_PUBLISHER = "Unknown Publisher"
NEWSTAND_SUFFIX = " - Newstand"

# Barcodes appear on newsstand copies from 1982 on
NEWSTAND_FIRST_YEAR = 1982

# Comic Vine spells it "penciler"
CREATOR_ROLES = {
    "writer": "writer",
    "penciller": "penciller",
    "penciler": "penciller",
    "inker": "inker",
    "colorist": "colorist",
}

_YEAR = re.compile(r"^\s*(\d{4})")


@dataclass
class ResolutionResult:
    """Outcome of a metadata lookup. Not-found is an error status, not an exception."""
    status: str
    metadata: Optional[ComicMetadata] = None
    message: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status == "success"

    @classmethod
    def ok(cls, metadata: ComicMetadata) -> "ResolutionResult":
        return cls(status="success", metadata=metadata)

    @classmethod
    def error(cls, message: str) -> "ResolutionResult":
        return cls(status="error", message=message)


def parse_year(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    match = _YEAR.match(value)
    return int(match.group(1)) if match else None


def release_year_for(issue: ComicVineIssue) -> Optional[int]:
    """Year of the cover date, falling back to the date Comic Vine added the issue."""
    return parse_year(issue.cover_date) or parse_year(issue.date_added)


def build_base_sku(title_code: str, release_year: Optional[int], issue_number, cover_variant: str) -> Optional[str]:
    if release_year is None:
        return None
    variant = (cover_variant or "A").upper()
    return f"{title_code}-{release_year}-{issue_number}-{variant}"


def is_newstand(release_year: Optional[int], cover_variant: str) -> bool:
    """Newsstand copies carry barcodes (1982+) and are not Direct Edition."""
    if release_year is None:
        return False
    return release_year >= NEWSTAND_FIRST_YEAR and (cover_variant or "").upper() != DIRECT_EDITION_VARIANT


def resolve_publisher_name(issue: ComicVineIssue) -> str:
    publisher = issue.volume.publisher if issue.volume else None
    if publisher is None:
        return UNKNOWN_PUBLISHER
    return lookup_publisher_name(publisher.id) or publisher.name or UNKNOWN_PUBLISHER


def group_creators(issue: ComicVineIssue) -> Creators:
    """Bucket person credits by role. Roles we don't track are dropped."""
    grouped: Dict[str, List[str]] = {"writer": [], "penciller": [], "inker": [], "colorist": []}
    for credit in issue.person_credits:
        # Comic Vine joins multiple roles: "penciler, inker"
        for role in credit.role.split(","):
            key = CREATOR_ROLES.get(role.strip().lower())
            if key and credit.name not in grouped[key]:
                grouped[key].append(credit.name)
    return Creators(**grouped)


def build_metadata(
    issue: ComicVineIssue,
    series_title: str,
    title_code: str,
    issue_number: int,
    cover_variant: str,
) -> ComicMetadata:
    """Apply SKU, publisher and newsstand rules to a Comic Vine issue."""
    release_year = release_year_for(issue)
    provider_issue_number = issue.issue_number if issue.issue_number is not None else issue_number

    title = series_title
    if is_newstand(release_year, cover_variant):
        title = f"{series_title}{NEWSTAND_SUFFIX}"

    volume_id = issue.volume.id if issue.volume else None

    details = ComicDetails(
        series_title=title,
        publisher_name=resolve_publisher_name(issue),
        release_date=issue.cover_date or issue.date_added,
        release_year=release_year,
        base_sku=build_base_sku(title_code, release_year, provider_issue_number, cover_variant),
        volume_id=str(volume_id) if volume_id is not None else None,
        issue_id=str(issue.id) if issue.id is not None else None,
        issue_number=str(provider_issue_number),
        issue_title=issue.name,
        image_url=issue.image.original_url if issue.image else None,
        imageSource=ImageSource.COMIC_VINE,
    )
    return ComicMetadata(details=details, creators=group_creators(issue))


class MetadataResolver:
    """
    Resolves (title code, issue, variant) to comic metadata.

    All collaborators are injected; nothing here reaches for global state.
    """

    def __init__(
        self,
        store: DocumentStore,
        provider: MetadataProvider,
        cache_collection: str,
        mapping_collection: str,
        clock: Callable[[], int] = now_ms,
        sleep: Callable[[float], None] = time.sleep,
        rate_limit_seconds: float = 0.3,
    ):
        self.provider = provider
        self.cache = MetadataCache(store, cache_collection, clock=clock)
        self.mappings = SeriesMappingStore(store, mapping_collection)
        self.sleep = sleep
        self.rate_limit_seconds = rate_limit_seconds

    def resolve(self, title_code: str, issue_number: int, cover_variant: str) -> ResolutionResult:
        """
        Look up metadata for one issue.

        Raises:
            InvalidArgumentError: Missing or malformed identifiers
            UpstreamUnavailableError: Comic Vine failed (the caller decides on retries)
            ConfigurationError: No Comic Vine API key
        """
        self._validate(title_code, issue_number, cover_variant)
        cover_variant = cover_variant.upper()
        cache_key = build_cache_key(title_code, issue_number, cover_variant)

        cached = self.cache.get(cache_key)
        if cached:
            return ResolutionResult.ok(cached)

        mapping = self.mappings.lookup(title_code)
        if mapping is None:
            logger.info("No series mapping for title code %s", title_code)
            return ResolutionResult.error(TITLE_NOT_FOUND)

        if self.rate_limit_seconds:
            self.sleep(self.rate_limit_seconds)

        response = self.provider.search(mapping.series_title, issue_number, limit=1)
        if not response.found:
            logger.info("Comic Vine has no match for '%s' #%s", mapping.series_title, issue_number)
            return ResolutionResult.error(METADATA_NOT_FOUND)

        issue = response.results[0]

        if not mapping.persisted:
            volume_id = issue.volume.id if issue.volume else None
            self.mappings.record_discovery(
                title_code,
                mapping.series_title,
                str(volume_id) if volume_id is not None else None,
            )

        metadata = build_metadata(issue, mapping.series_title, title_code, issue_number, cover_variant)

        self.cache.put(cache_key, metadata)
        return ResolutionResult.ok(metadata)

    def resolve_payload(self, payload: dict) -> ResolutionResult:
        """Single-argument form for use with with_backoff."""
        return self.resolve(payload.get("titleCode"), payload.get("issueNumber"), payload.get("coverVariant"))

    def _validate(self, title_code, issue_number, cover_variant) -> None:
        if not title_code or not isinstance(title_code, str):
            raise InvalidArgumentError("Missing title code.")
        if isinstance(issue_number, bool) or not isinstance(issue_number, int) or issue_number < 1:
            raise InvalidArgumentError("Issue number must be a positive integer.")
        if not cover_variant or not isinstance(cover_variant, str):
            raise InvalidArgumentError("Missing cover variant.")
