"""
Persisting scanned comics into a user's collections.

Barcode lookups are trusted and go straight to ``inventory``; AI cover
guesses land in ``staging`` for a human to review.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import UUID

from comicshelf.data.grades import DEFAULT_STORAGE_BOX, NOT_GRADED
from comicshelf.schemas.comic import ComicSubmission, Creators, ImageSource
from comicshelf.services.store import DocumentStore, DocumentStoreError


logger = logging.getLogger(__name__)

INVENTORY = "inventory"
STAGING = "staging"
DESTINATIONS = (INVENTORY, STAGING)

TITLE_PENDING = "TITLE PENDING LOOKUP"
UNKNOWN_PUBLISHER = "Unknown Publisher"


@dataclass
class SaveResult:
    success: bool
    id: Optional[str] = None
    destination: Optional[str] = None
    error: Optional[str] = None


def user_collection(user_id, destination: str) -> str:
    return f"users/{user_id}/{destination}"


def destination_for(submission: ComicSubmission) -> str:
    """AI-recognized metadata needs review; everything else is trusted."""
    metadata = submission.metadata
    if metadata and metadata.details.imageSource == ImageSource.AI_RECOGNITION:
        return STAGING
    return INVENTORY


class InventoryWriter:

    def __init__(self, store: DocumentStore):
        self.store = store

    def build_record(self, user_id, submission: ComicSubmission) -> Dict[str, Any]:
        """
        Build the stored document: placeholders and user inputs first,
        resolved metadata laid over the top.
        """
        barcode = submission.barcode_data
        inputs = submission.user_inputs

        details: Dict[str, Any] = {
            "series_title": TITLE_PENDING,
            "publisher_name": barcode.publisher_code if barcode else UNKNOWN_PUBLISHER,
            "release_date": None,
            "condition_grade": inputs.condition_grade or NOT_GRADED,
            "my_value": inputs.my_value or None,
            "storage_box": inputs.storage_box or DEFAULT_STORAGE_BOX,
        }
        creators = Creators()

        if submission.metadata:
            details.update(submission.metadata.details.model_dump(mode="json"))
            creators = submission.metadata.creators

        return {
            "uid": str(user_id),
            "addedAt": datetime.now(timezone.utc).isoformat(),
            "barcodeData": barcode.model_dump(mode="json") if barcode else None,
            "details": details,
            "creators": creators.model_dump(mode="json"),
        }

    def save(self, user_id: UUID, submission: ComicSubmission, destination: Optional[str] = None) -> SaveResult:
        """
        Save a comic to the user's inventory or staging collection.

        Args:
            user_id: Owner of the record
            submission: Barcode fields, resolved metadata and user inputs
            destination: Force "inventory" or "staging"; routed by
                metadata provenance when omitted

        Returns:
            SaveResult with the new document id, or the error on failure
        """
        destination = destination or destination_for(submission)
        if destination not in DESTINATIONS:
            raise ValueError(f"Unknown destination '{destination}'")

        record = self.build_record(user_id, submission)
        collection = user_collection(user_id, destination)

        try:
            doc_id = self.store.add(collection, record)
        except DocumentStoreError as e:
            logger.error("Error adding document to %s: %s", collection, e)
            return SaveResult(success=False, destination=destination, error=str(e))

        logger.info("Saved comic %s to %s", doc_id, collection)
        return SaveResult(success=True, id=doc_id, destination=destination)
