from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from comicshelf.data.grades import DEFAULT_STORAGE_BOX, NOT_GRADED, VALID_GRADES


class ImageSource(str, Enum):
    """Where a record's metadata came from. Drives inventory vs staging routing."""
    COMIC_VINE = "Comic Vine API"
    CACHE = "Firestore Cache"
    AI_RECOGNITION = "AI_RECOGNITION"


class BarcodeFields(BaseModel):
    """Fields decoded from a UPC + EAN-5 comic barcode"""
    raw_code: str
    publisher_code: str = Field(..., min_length=5, max_length=6)
    title_code: str = Field(..., min_length=5, max_length=5)
    issue_number: int = Field(..., ge=1)
    cover_variant: str
    printing: Optional[int] = None
    is_direct_edition: bool = False


class ComicDetails(BaseModel):
    """Bibliographic details resolved for one issue"""
    series_title: str
    publisher_name: str
    release_date: Optional[str] = None
    release_year: Optional[int] = None
    base_sku: Optional[str] = None
    volume_id: Optional[str] = None
    issue_id: Optional[str] = None
    issue_number: str
    issue_title: Optional[str] = None
    image_url: Optional[str] = None
    imageSource: ImageSource = ImageSource.COMIC_VINE

    model_config = ConfigDict(use_enum_values=True)


class Creators(BaseModel):
    writer: List[str] = Field(default_factory=list)
    penciller: List[str] = Field(default_factory=list)
    inker: List[str] = Field(default_factory=list)
    colorist: List[str] = Field(default_factory=list)


class ComicMetadata(BaseModel):
    details: ComicDetails
    creators: Creators = Field(default_factory=Creators)


class ResolveRequest(BaseModel):
    """Caller-facing metadata lookup payload"""
    titleCode: str = Field(..., min_length=1)
    issueNumber: int = Field(..., ge=1)
    coverVariant: str = Field("A", min_length=1)


class ResolveResponse(BaseModel):
    status: str
    metadata: Optional[ComicMetadata] = None
    message: Optional[str] = None


class UserInputs(BaseModel):
    """Fields the user fills in while scanning"""
    condition_grade: str = NOT_GRADED
    my_value: Optional[str] = None
    storage_box: str = DEFAULT_STORAGE_BOX

    @field_validator("condition_grade")
    @classmethod
    def grade_on_scale(cls, value: str) -> str:
        if value not in VALID_GRADES:
            raise ValueError(f"Unknown grade '{value}'")
        return value


class ComicSubmission(BaseModel):
    """Everything needed to persist one scanned comic"""
    barcode_data: Optional[BarcodeFields] = None
    metadata: Optional[ComicMetadata] = None
    user_inputs: UserInputs = Field(default_factory=UserInputs)


class BarcodeIngestRequest(BaseModel):
    raw_code: str = Field(..., min_length=1)
    direct_edition: bool = False
    user_inputs: UserInputs = Field(default_factory=UserInputs)


class IngestResponse(BaseModel):
    """Outcome of a scan: where the record landed and what lookup found"""
    id: str
    destination: str
    barcode: Optional[BarcodeFields] = None
    metadata: Optional[ComicMetadata] = None
    lookup_message: Optional[str] = None


class ComicRecordResponse(BaseModel):
    """A persisted inventory or staging record"""
    id: str
    uid: str
    addedAt: str
    barcodeData: Optional[Dict] = None
    details: Dict
    creators: Creators


class ComicRecordUpdate(BaseModel):
    """Only grade, value and storage box are editable after saving"""
    condition_grade: Optional[str] = None
    my_value: Optional[str] = None
    storage_box: Optional[str] = None

    @field_validator("condition_grade")
    @classmethod
    def grade_on_scale(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in VALID_GRADES:
            raise ValueError(f"Unknown grade '{value}'")
        return value
