import uuid
from typing import Any, Dict, List, Optional, Tuple

import pytest

from comicshelf.services.metadata.comicvine import ComicVineSearchResponse
from comicshelf.services.metadata.resolver import MetadataResolver
from comicshelf.services.store import DocumentStoreError


CACHE_COLLECTION = "artifacts/test/public/data/comic_metadata_cache"
MAPPING_COLLECTION = "artifacts/test/public/data/series_code_mappings"

# 2024-01-01T00:00:00Z
FIXED_NOW_MS = 1_704_067_200_000


class InMemoryDocumentStore:
    """Dict-backed DocumentStore with switches to simulate outages."""

    def __init__(self):
        self.docs: Dict[str, Dict[str, Any]] = {}
        self.fail_reads = False
        self.fail_writes = False
        self.writes: List[Tuple[str, Dict[str, Any], bool]] = []

    def get(self, path: str) -> Optional[Dict[str, Any]]:
        if self.fail_reads:
            raise DocumentStoreError("store offline")
        doc = self.docs.get(path.strip("/"))
        return dict(doc) if doc is not None else None

    def set(self, path: str, value: Dict[str, Any], merge: bool = False) -> None:
        if self.fail_writes:
            raise DocumentStoreError("store offline")
        path = path.strip("/")
        self.writes.append((path, value, merge))
        if merge and path in self.docs:
            self.docs[path] = {**self.docs[path], **value}
        else:
            self.docs[path] = dict(value)

    def add(self, collection: str, value: Dict[str, Any]) -> str:
        doc_id = uuid.uuid4().hex
        self.set(f"{collection.strip('/')}/{doc_id}", value)
        return doc_id

    def list(self, collection: str) -> List[Tuple[str, Dict[str, Any]]]:
        if self.fail_reads:
            raise DocumentStoreError("store offline")
        prefix = collection.strip("/") + "/"
        return [
            (path[len(prefix):], dict(doc))
            for path, doc in self.docs.items()
            if path.startswith(prefix) and "/" not in path[len(prefix):]
        ]

    def delete(self, path: str) -> bool:
        if self.fail_writes:
            raise DocumentStoreError("store offline")
        return self.docs.pop(path.strip("/"), None) is not None


class FakeProvider:
    """Stands in for ComicVineClient, recording every search."""

    def __init__(self, response: Optional[Dict[str, Any]] = None, error: Optional[Exception] = None):
        self.response = response if response is not None else make_response()
        self.error = error
        self.calls: List[Tuple[str, int, int]] = []

    def search(self, query: str, issue_number: int, limit: int = 1) -> ComicVineSearchResponse:
        self.calls.append((query, issue_number, limit))
        if self.error:
            raise self.error
        return ComicVineSearchResponse.model_validate(self.response)


def make_issue(**overrides) -> Dict[str, Any]:
    issue = {
        "id": 6789,
        "name": "The Big Time",
        "cover_date": "2018-07-11",
        "date_added": "2018-06-01 10:00:00",
        "issue_number": "1",
        "person_credits": [
            {"role": "writer", "name": "Nick Spencer"},
            {"role": "penciler", "name": "Ryan Ottley"},
            {"role": "inker", "name": "Cliff Rathburn"},
            {"role": "colorist", "name": "Laura Martin"},
            {"role": "letterer", "name": "Joe Caramagna"},
        ],
        "image": {"original_url": "https://comicvine.example/asm1.jpg"},
        "volume": {"id": 110196, "name": "The Amazing Spider-Man", "publisher": {"id": 40, "name": "Marvel"}},
    }
    issue.update(overrides)
    return issue


def make_response(*issues, status_code: int = 1) -> Dict[str, Any]:
    if not issues:
        issues = (make_issue(),)
    return {"status_code": status_code, "error": "OK", "results": list(issues)}


class Clock:
    def __init__(self, now: int = FIXED_NOW_MS):
        self.now = now

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def resolver(store, provider, clock, sleeps):
    return MetadataResolver(
        store=store,
        provider=provider,
        cache_collection=CACHE_COLLECTION,
        mapping_collection=MAPPING_COLLECTION,
        clock=clock,
        sleep=sleeps.append,
        rate_limit_seconds=0.3,
    )
