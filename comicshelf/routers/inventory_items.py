from typing import Any, Dict, List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from comicshelf.core.dependencies import get_document_store
from comicshelf.core.security import get_current_user
from comicshelf.schemas.comic import ComicRecordResponse, ComicRecordUpdate
from comicshelf.services.inventory.inventory_writer import INVENTORY, user_collection
from comicshelf.services.store import DocumentStore, DocumentStoreError


router = APIRouter(prefix="/inventory", tags=["inventory"])


def to_response(doc_id: str, record: Dict[str, Any]) -> ComicRecordResponse:
    return ComicRecordResponse(id=doc_id, **record)


def list_records(store: DocumentStore, user_id: UUID, destination: str) -> List[ComicRecordResponse]:
    try:
        docs = store.list(user_collection(user_id, destination))
    except DocumentStoreError:
        raise HTTPException(status_code=503, detail="Storage is unavailable. Please try again later.")
    return [to_response(doc_id, record) for doc_id, record in docs]


def load_record(store: DocumentStore, user_id: UUID, destination: str, item_id: str) -> Dict[str, Any]:
    try:
        record = store.get(f"{user_collection(user_id, destination)}/{item_id}")
    except DocumentStoreError:
        raise HTTPException(status_code=503, detail="Storage is unavailable. Please try again later.")
    if not record:
        raise HTTPException(status_code=404, detail="Comic not found")
    return record


def delete_record(store: DocumentStore, user_id: UUID, destination: str, item_id: str) -> None:
    try:
        deleted = store.delete(f"{user_collection(user_id, destination)}/{item_id}")
    except DocumentStoreError:
        raise HTTPException(status_code=503, detail="Storage is unavailable. Please try again later.")
    if not deleted:
        raise HTTPException(status_code=404, detail="Comic not found")


@router.get("", response_model=List[ComicRecordResponse])
def list_inventory_items(
    store: DocumentStore = Depends(get_document_store),
    user_id: UUID = Depends(get_current_user)
):
    """List all comics in the current user's inventory"""
    return list_records(store, user_id, INVENTORY)


@router.get("/{item_id}", response_model=ComicRecordResponse)
def get_inventory_item(
    item_id: str,
    store: DocumentStore = Depends(get_document_store),
    user_id: UUID = Depends(get_current_user)
):
    """Get a specific inventory comic"""
    return to_response(item_id, load_record(store, user_id, INVENTORY, item_id))


@router.patch("/{item_id}", response_model=ComicRecordResponse)
def update_inventory_item(
    item_id: str,
    update: ComicRecordUpdate,
    store: DocumentStore = Depends(get_document_store),
    user_id: UUID = Depends(get_current_user)
):
    """
    Update grade, value or storage box of an inventory comic.
    Note: Resolved metadata is immutable once saved.
    """
    record = load_record(store, user_id, INVENTORY, item_id)

    changes = update.model_dump(exclude_unset=True, exclude_none=True)
    record["details"] = {**record.get("details", {}), **changes}

    try:
        store.set(f"{user_collection(user_id, INVENTORY)}/{item_id}", {"details": record["details"]}, merge=True)
    except DocumentStoreError:
        raise HTTPException(status_code=503, detail="Storage is unavailable. Please try again later.")

    return to_response(item_id, record)


@router.delete("/{item_id}", status_code=204)
def delete_inventory_item(
    item_id: str,
    store: DocumentStore = Depends(get_document_store),
    user_id: UUID = Depends(get_current_user)
):
    """Delete an inventory comic (e.g., sold or traded away)"""
    delete_record(store, user_id, INVENTORY, item_id)
    return None
