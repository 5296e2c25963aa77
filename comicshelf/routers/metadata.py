from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from comicshelf.core.config import Settings, get_settings
from comicshelf.core.dependencies import get_metadata_resolver
from comicshelf.core.errors import ConfigurationError, InvalidArgumentError, UpstreamUnavailableError
from comicshelf.core.security import get_current_user
from comicshelf.schemas.comic import ResolveRequest, ResolveResponse
from comicshelf.services.ingestion.barcode_ingestion import resolve_with_retries
from comicshelf.services.metadata.resolver import MetadataResolver


router = APIRouter(prefix="/metadata", tags=["metadata"])


@router.post("/resolve", response_model=ResolveResponse)
def resolve_metadata(
    request: ResolveRequest,
    resolver: MetadataResolver = Depends(get_metadata_resolver),
    settings: Settings = Depends(get_settings),
    user_id: UUID = Depends(get_current_user)
):
    """
    Look up comic metadata for a decoded barcode.

    Unknown title codes and issues come back as ``status: "error"`` with
    HTTP 200 so the client can offer manual entry. A Comic Vine outage is
    a 503: try again later.
    """
    try:
        result = resolve_with_retries(
            resolver,
            request.titleCode,
            request.issueNumber,
            request.coverVariant,
            settings.retry_max_attempts,
            settings.retry_initial_delay_ms,
        )
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UpstreamUnavailableError:
        raise HTTPException(
            status_code=503,
            detail="Metadata provider is unavailable. Please try again later."
        )
    except ConfigurationError:
        raise HTTPException(status_code=500, detail="Metadata lookup is not configured.")

    return ResolveResponse(status=result.status, metadata=result.metadata, message=result.message)
