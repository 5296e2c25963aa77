"""
Cover photo recognition.

Placeholder for image-based identification of barcode-less (Direct
Edition) comics. It always "recognizes" the same issue; the rest of the
pipeline (resolution, provenance tagging, staging) is real.
"""
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from comicshelf.data.grades import DIRECT_EDITION_VARIANT
from comicshelf.schemas.comic import ComicSubmission, ImageSource, UserInputs
from comicshelf.services.ingestion.barcode_ingestion import IngestionResult, resolve_with_retries
from comicshelf.services.inventory.inventory_writer import InventoryWriter
from comicshelf.services.metadata.resolver import MetadataResolver, ResolutionResult


@dataclass
class RecognizedCover:
    title_code: str
    issue_number: int
    cover_variant: str


# Simulated result for a known Direct Edition comic
SIMULATED_RECOGNITION = RecognizedCover(title_code="00102", issue_number=1, cover_variant=DIRECT_EDITION_VARIANT)


class CoverRecognitionService:

    def __init__(
        self,
        resolver: MetadataResolver,
        writer: InventoryWriter,
        retry_max_attempts: int = 3,
        retry_initial_delay_ms: int = 1000,
    ):
        self.resolver = resolver
        self.writer = writer
        self.retry_max_attempts = retry_max_attempts
        self.retry_initial_delay_ms = retry_initial_delay_ms

    def identify(self, image_bytes: bytes) -> RecognizedCover:
        """Identify the comic on a cover photo. Always the simulated result for now."""
        return SIMULATED_RECOGNITION

    def recognize(self, image_bytes: bytes) -> ResolutionResult:
        """Identify the cover and resolve metadata, tagged as AI-sourced."""
        cover = self.identify(image_bytes)
        result = resolve_with_retries(
            self.resolver,
            cover.title_code,
            cover.issue_number,
            cover.cover_variant,
            self.retry_max_attempts,
            self.retry_initial_delay_ms,
        )
        if result.success:
            result.metadata.details.imageSource = ImageSource.AI_RECOGNITION.value
        return result

    def ingest_image(
        self,
        user_id: UUID,
        image_bytes: bytes,
        user_inputs: Optional[UserInputs] = None,
    ) -> IngestionResult:
        """Recognize a cover and save it to staging for review."""
        result = self.recognize(image_bytes)
        if not result.success:
            return IngestionResult(
                success=False,
                error_message=f"Could not identify cover: {result.message}"
            )

        submission = ComicSubmission(metadata=result.metadata, user_inputs=user_inputs or UserInputs())
        saved = self.writer.save(user_id, submission)
        if not saved.success:
            return IngestionResult(
                success=False,
                metadata=result.metadata,
                error_message=f"Failed to save comic: {saved.error}"
            )

        return IngestionResult(
            success=True,
            id=saved.id,
            destination=saved.destination,
            metadata=result.metadata,
        )
