"""
Barcode ingestion orchestration.

Combines barcode decoding, metadata resolution and the inventory writer
to turn a scanned code into a saved comic.
"""
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from comicshelf.core.errors import UpstreamUnavailableError
from comicshelf.core.retry import with_backoff
from comicshelf.schemas.comic import BarcodeFields, ComicMetadata, ComicSubmission, UserInputs
from comicshelf.services.ingestion.barcode_parser import decode
from comicshelf.services.ingestion.barcode_scanner import BarcodeScanner, barcode_scanner
from comicshelf.services.inventory.inventory_writer import InventoryWriter
from comicshelf.services.metadata.resolver import MetadataResolver, ResolutionResult


@dataclass
class IngestionResult:
    """Result of an ingestion attempt"""
    success: bool
    error_message: Optional[str] = None

    id: Optional[str] = None
    destination: Optional[str] = None
    barcode: Optional[BarcodeFields] = None
    metadata: Optional[ComicMetadata] = None
    # Set when lookup found nothing and the record was saved with placeholders
    lookup_message: Optional[str] = None


def resolve_with_retries(
    resolver: MetadataResolver,
    title_code: str,
    issue_number: int,
    cover_variant: str,
    max_attempts: int,
    initial_delay_ms: int,
) -> ResolutionResult:
    """Resolve through the backoff wrapper, retrying only provider outages."""
    payload = {"titleCode": title_code, "issueNumber": issue_number, "coverVariant": cover_variant}
    return with_backoff(
        resolver.resolve_payload,
        payload,
        max_attempts=max_attempts,
        initial_delay_ms=initial_delay_ms,
        retry_on=(UpstreamUnavailableError,),
    )


class BarcodeIngestionService:
    """
    Orchestrates the full barcode ingestion flow:
    1. Scan barcode from image (optional)
    2. Decode UPC + EAN-5 into title code, issue and variant
    3. Resolve metadata (cache, code tables, Comic Vine)
    4. Save to the user's inventory
    """

    def __init__(
        self,
        resolver: MetadataResolver,
        writer: InventoryWriter,
        scanner: BarcodeScanner = barcode_scanner,
        retry_max_attempts: int = 3,
        retry_initial_delay_ms: int = 1000,
    ):
        self.resolver = resolver
        self.writer = writer
        self.scanner = scanner
        self.retry_max_attempts = retry_max_attempts
        self.retry_initial_delay_ms = retry_initial_delay_ms

    def ingest_code(
        self,
        user_id: UUID,
        raw_code: str,
        direct_edition: bool = False,
        user_inputs: Optional[UserInputs] = None,
    ) -> IngestionResult:
        """
        Decode, resolve and save a barcode.

        A code that decodes but has no metadata is still saved with
        placeholder details so the user can fill them in by hand.

        Raises:
            UpstreamUnavailableError: Comic Vine still failing after retries
            ConfigurationError: No Comic Vine API key
        """
        barcode = decode(raw_code, direct_edition)
        if barcode is None:
            return IngestionResult(
                success=False,
                error_message=f"'{raw_code}' is not a valid comic barcode. Expected UPC plus 5-digit extension."
            )

        result = resolve_with_retries(
            self.resolver,
            barcode.title_code,
            barcode.issue_number,
            barcode.cover_variant,
            self.retry_max_attempts,
            self.retry_initial_delay_ms,
        )

        submission = ComicSubmission(
            barcode_data=barcode,
            metadata=result.metadata if result.success else None,
            user_inputs=user_inputs or UserInputs(),
        )
        saved = self.writer.save(user_id, submission)

        if not saved.success:
            return IngestionResult(
                success=False,
                barcode=barcode,
                metadata=submission.metadata,
                error_message=f"Failed to save comic: {saved.error}"
            )

        return IngestionResult(
            success=True,
            id=saved.id,
            destination=saved.destination,
            barcode=barcode,
            metadata=submission.metadata,
            lookup_message=None if result.success else result.message,
        )

    def ingest_image(
        self,
        user_id: UUID,
        image_bytes: bytes,
        direct_edition: bool = False,
        user_inputs: Optional[UserInputs] = None,
    ) -> IngestionResult:
        """Scan a barcode photo, then ingest the digits found."""
        try:
            raw_code = self.scanner.scan_image(image_bytes)
        except ValueError as e:
            return IngestionResult(
                success=False,
                error_message=f"Failed to scan image: {str(e)}"
            )

        if not raw_code:
            return IngestionResult(
                success=False,
                error_message="No barcode detected in image. Please ensure the barcode and its extension are clearly visible."
            )

        return self.ingest_code(user_id, raw_code, direct_edition, user_inputs)
