"""
Service wiring for FastAPI.

Each service is built once per process and handed to routers through
``Depends``. Tests replace them with ``app.dependency_overrides``.
"""
from functools import lru_cache

from comicshelf.core.config import get_settings
from comicshelf.core.database import SessionLocal
from comicshelf.services.ingestion.barcode_ingestion import BarcodeIngestionService
from comicshelf.services.ingestion.cover_recognition import CoverRecognitionService
from comicshelf.services.inventory.inventory_writer import InventoryWriter
from comicshelf.services.metadata.comicvine import ComicVineClient
from comicshelf.services.metadata.resolver import MetadataResolver
from comicshelf.services.store import SqlDocumentStore


@lru_cache
def get_document_store() -> SqlDocumentStore:
    return SqlDocumentStore(SessionLocal)


@lru_cache
def get_metadata_resolver() -> MetadataResolver:
    settings = get_settings()
    return MetadataResolver(
        store=get_document_store(),
        provider=ComicVineClient(),
        cache_collection=settings.cache_collection,
        mapping_collection=settings.mapping_collection,
        rate_limit_seconds=settings.rate_limit_seconds,
    )


@lru_cache
def get_inventory_writer() -> InventoryWriter:
    return InventoryWriter(get_document_store())


@lru_cache
def get_barcode_ingestion_service() -> BarcodeIngestionService:
    settings = get_settings()
    return BarcodeIngestionService(
        resolver=get_metadata_resolver(),
        writer=get_inventory_writer(),
        retry_max_attempts=settings.retry_max_attempts,
        retry_initial_delay_ms=settings.retry_initial_delay_ms,
    )


@lru_cache
def get_cover_recognition_service() -> CoverRecognitionService:
    settings = get_settings()
    return CoverRecognitionService(
        resolver=get_metadata_resolver(),
        writer=get_inventory_writer(),
        retry_max_attempts=settings.retry_max_attempts,
        retry_initial_delay_ms=settings.retry_initial_delay_ms,
    )
