"""
Keyed document store.

Cache entries, series mappings and user records are all JSON documents
addressed by string paths. Services depend on the ``DocumentStore``
protocol so tests can swap in an in-memory fake.
"""
import uuid
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from comicshelf.core.errors import ComicShelfError
from comicshelf.models.document import Document


class DocumentStoreError(ComicShelfError):
    """The backing store could not complete a read or write."""


def split_path(path: str) -> Tuple[str, str]:
    """Split ``a/b/c`` into collection ``a/b`` and id ``c``."""
    path = path.strip("/")
    collection, _, doc_id = path.rpartition("/")
    if not collection or not doc_id:
        raise ValueError(f"Document path needs a collection and an id: '{path}'")
    return collection, doc_id


class DocumentStore(Protocol):
    def get(self, path: str) -> Optional[Dict[str, Any]]: ...

    def set(self, path: str, value: Dict[str, Any], merge: bool = False) -> None: ...

    def add(self, collection: str, value: Dict[str, Any]) -> str: ...

    def list(self, collection: str) -> List[Tuple[str, Dict[str, Any]]]: ...

    def delete(self, path: str) -> bool: ...


class SqlDocumentStore:
    """
    DocumentStore backed by the ``documents`` table.

    Each call opens and commits its own session, so one instance can be
    shared across requests.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def get(self, path: str) -> Optional[Dict[str, Any]]:
        path = path.strip("/")
        try:
            with self._session_factory() as db:
                doc = db.get(Document, path)
                return dict(doc.data) if doc else None
        except SQLAlchemyError as e:
            raise DocumentStoreError(f"Failed to read {path}: {e}") from e

    def set(self, path: str, value: Dict[str, Any], merge: bool = False) -> None:
        """
        Write a document.

        With ``merge=True`` top-level keys of ``value`` are merged into the
        existing document instead of replacing it.
        """
        collection, doc_id = split_path(path)
        path = f"{collection}/{doc_id}"
        try:
            try:
                self._write(path, collection, doc_id, value, merge)
            except IntegrityError:
                # Another writer inserted the row after our read; the second
                # pass finds it and updates, so the last write wins
                self._write(path, collection, doc_id, value, merge)
        except SQLAlchemyError as e:
            raise DocumentStoreError(f"Failed to write {path}: {e}") from e

    def _write(self, path: str, collection: str, doc_id: str, value: Dict[str, Any], merge: bool) -> None:
        with self._session_factory() as db:
            doc = db.get(Document, path)
            if doc is None:
                db.add(Document(path=path, collection=collection, doc_id=doc_id, data=dict(value)))
            elif merge:
                doc.data = {**doc.data, **value}
            else:
                doc.data = dict(value)
            db.commit()

    def add(self, collection: str, value: Dict[str, Any]) -> str:
        """Create a document with a generated id and return the id."""
        doc_id = uuid.uuid4().hex
        self.set(f"{collection.strip('/')}/{doc_id}", value)
        return doc_id

    def list(self, collection: str) -> List[Tuple[str, Dict[str, Any]]]:
        collection = collection.strip("/")
        try:
            with self._session_factory() as db:
                docs = (
                    db.query(Document)
                    .filter(Document.collection == collection)
                    .order_by(Document.created_at, Document.doc_id)
                    .all()
                )
                return [(doc.doc_id, dict(doc.data)) for doc in docs]
        except SQLAlchemyError as e:
            raise DocumentStoreError(f"Failed to list {collection}: {e}") from e

    def delete(self, path: str) -> bool:
        """Delete a document. Returns False if it did not exist."""
        path = path.strip("/")
        try:
            with self._session_factory() as db:
                doc = db.get(Document, path)
                if doc is None:
                    return False
                db.delete(doc)
                db.commit()
                return True
        except SQLAlchemyError as e:
            raise DocumentStoreError(f"Failed to delete {path}: {e}") from e
