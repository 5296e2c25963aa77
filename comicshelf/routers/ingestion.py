from typing import Callable, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from pydantic import ValidationError

from comicshelf.core.dependencies import get_barcode_ingestion_service, get_cover_recognition_service
from comicshelf.core.errors import ConfigurationError, UpstreamUnavailableError
from comicshelf.core.security import get_current_user
from comicshelf.schemas.comic import BarcodeIngestRequest, IngestResponse, UserInputs
from comicshelf.services.ingestion.barcode_ingestion import BarcodeIngestionService, IngestionResult
from comicshelf.services.ingestion.cover_recognition import CoverRecognitionService


router = APIRouter(prefix="/ingest", tags=["ingestion"])


def _run_ingestion(ingest: Callable[[], IngestionResult]) -> IngestResponse:
    """Run an ingestion call and translate its failures into HTTP errors."""
    try:
        result = ingest()
    except UpstreamUnavailableError:
        raise HTTPException(
            status_code=503,
            detail="Metadata provider is unavailable. Please try again later."
        )
    except ConfigurationError:
        raise HTTPException(status_code=500, detail="Metadata lookup is not configured.")

    if not result.success:
        raise HTTPException(
            status_code=400,
            detail=result.error_message or "Failed to process comic"
        )

    return IngestResponse(
        id=result.id,
        destination=result.destination,
        barcode=result.barcode,
        metadata=result.metadata,
        lookup_message=result.lookup_message,
    )


async def _read_image(image: UploadFile) -> bytes:
    if not image.content_type or not image.content_type.startswith("image/"):
        raise HTTPException(
            status_code=400,
            detail="Invalid file type. Please upload an image (JPEG, PNG, etc.)"
        )
    try:
        return await image.read()
    except Exception as e:
        raise HTTPException(
            status_code=400,
            detail=f"Failed to read image file: {str(e)}"
        )


def _form_inputs(condition_grade: str, my_value: Optional[str], storage_box: str) -> UserInputs:
    try:
        return UserInputs(condition_grade=condition_grade, my_value=my_value, storage_box=storage_box)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))


@router.post("/barcode", response_model=IngestResponse, status_code=201)
def ingest_barcode(
    request: BarcodeIngestRequest,
    service: BarcodeIngestionService = Depends(get_barcode_ingestion_service),
    user_id: UUID = Depends(get_current_user)
):
    """
    Save a comic from typed or scanned barcode digits.

    Workflow:
    1. Decode UPC + EAN-5 (title code, issue, cover variant)
    2. Resolve metadata from cache, code tables or Comic Vine
    3. Save to inventory with the user's grade, value and storage box

    If no metadata is found the comic is still saved, titled
    "TITLE PENDING LOOKUP", and ``lookup_message`` says why.
    """
    return _run_ingestion(lambda: service.ingest_code(
        user_id,
        request.raw_code,
        direct_edition=request.direct_edition,
        user_inputs=request.user_inputs,
    ))


@router.post("/barcode-image", response_model=IngestResponse, status_code=201)
async def ingest_barcode_image(
    image: UploadFile = File(..., description="Photo of the barcode box"),
    direct_edition: bool = Form(False, description="'DIRECT EDITION' is printed in the barcode box"),
    condition_grade: str = Form("Not Graded"),
    my_value: Optional[str] = Form(None),
    storage_box: str = Form("Unsorted"),
    service: BarcodeIngestionService = Depends(get_barcode_ingestion_service),
    user_id: UUID = Depends(get_current_user)
):
    """Scan the barcode in a photo, then ingest it like typed digits."""
    image_bytes = await _read_image(image)
    user_inputs = _form_inputs(condition_grade, my_value, storage_box)

    return _run_ingestion(lambda: service.ingest_image(
        user_id,
        image_bytes,
        direct_edition=direct_edition,
        user_inputs=user_inputs,
    ))


@router.post("/cover", response_model=IngestResponse, status_code=201)
async def ingest_cover(
    image: UploadFile = File(..., description="Photo of the comic cover"),
    condition_grade: str = Form("Not Graded"),
    my_value: Optional[str] = Form(None),
    storage_box: str = Form("Unsorted"),
    service: CoverRecognitionService = Depends(get_cover_recognition_service),
    user_id: UUID = Depends(get_current_user)
):
    """
    Identify a comic from its cover photo.

    Recognized comics always go to staging for review, never straight
    to inventory.
    """
    image_bytes = await _read_image(image)
    user_inputs = _form_inputs(condition_grade, my_value, storage_box)

    return _run_ingestion(lambda: service.ingest_image(user_id, image_bytes, user_inputs=user_inputs))
