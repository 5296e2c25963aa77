from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends

from comicshelf.core.dependencies import get_document_store
from comicshelf.core.security import get_current_user
from comicshelf.routers.inventory_items import delete_record, list_records, load_record, to_response
from comicshelf.schemas.comic import ComicRecordResponse
from comicshelf.services.inventory.inventory_writer import STAGING
from comicshelf.services.store import DocumentStore


router = APIRouter(prefix="/staging", tags=["staging"])


@router.get("", response_model=List[ComicRecordResponse])
def list_staging_items(
    store: DocumentStore = Depends(get_document_store),
    user_id: UUID = Depends(get_current_user)
):
    """List comics awaiting review (AI-recognized covers)"""
    return list_records(store, user_id, STAGING)


@router.get("/{item_id}", response_model=ComicRecordResponse)
def get_staging_item(
    item_id: str,
    store: DocumentStore = Depends(get_document_store),
    user_id: UUID = Depends(get_current_user)
):
    """Get a specific staged comic"""
    return to_response(item_id, load_record(store, user_id, STAGING, item_id))


@router.delete("/{item_id}", status_code=204)
def delete_staging_item(
    item_id: str,
    store: DocumentStore = Depends(get_document_store),
    user_id: UUID = Depends(get_current_user)
):
    """Discard a staged comic"""
    delete_record(store, user_id, STAGING, item_id)
    return None
