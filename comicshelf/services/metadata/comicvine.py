"""
Comic metadata lookup via the Comic Vine API.

Comic Vine searches by name, not by barcode, so callers must resolve a
series title before asking for an issue.

API Docs: https://comicvine.gamespot.com/api/documentation
"""
import logging
from typing import List, Optional, Protocol, Union

import requests
from pydantic import BaseModel, Field, ValidationError

from comicshelf.core.config import get_comicvine_api_key, get_settings
from comicshelf.core.errors import UpstreamUnavailableError


logger = logging.getLogger(__name__)

STATUS_OK = 1

FIELD_LIST = "id,name,cover_date,date_added,issue_number,person_credits,image,volume"


class ComicVinePublisher(BaseModel):
    id: Optional[Union[int, str]] = None
    name: Optional[str] = None


class ComicVineVolume(BaseModel):
    id: Optional[Union[int, str]] = None
    name: Optional[str] = None
    publisher: Optional[ComicVinePublisher] = None


class ComicVineImage(BaseModel):
    original_url: Optional[str] = None


class ComicVineCredit(BaseModel):
    role: str = ""
    name: str


class ComicVineIssue(BaseModel):
    """One issue as returned by Comic Vine. Only the fields we read."""
    id: Optional[Union[int, str]] = None
    name: Optional[str] = None
    cover_date: Optional[str] = None
    date_added: Optional[str] = None
    issue_number: Optional[Union[str, int]] = None
    person_credits: List[ComicVineCredit] = Field(default_factory=list)
    image: Optional[ComicVineImage] = None
    volume: Optional[ComicVineVolume] = None


class ComicVineSearchResponse(BaseModel):
    status_code: int
    error: Optional[str] = None
    results: List[ComicVineIssue] = Field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.status_code == STATUS_OK and len(self.results) > 0


class MetadataProvider(Protocol):
    def search(self, query: str, issue_number: int, limit: int = 1) -> ComicVineSearchResponse: ...


class ComicVineClient:
    """
    Client for the Comic Vine search API.

    Requires an API key (COMICVINE_API_KEY). The key is read on first use,
    so a missing key fails the first lookup rather than import.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        user_agent: str = "ComicShelf/0.1",
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.comicvine_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.comicvine_timeout_seconds
        self._api_key = api_key

        # Comic Vine rejects requests without a User-Agent
        self.session = requests.Session()
        self.session.headers.update({
            "User-Agent": user_agent,
            "Accept": "application/json",
        })

    @property
    def api_key(self) -> str:
        if not self._api_key:
            self._api_key = get_comicvine_api_key()
        return self._api_key

    def search(self, query: str, issue_number: int, limit: int = 1) -> ComicVineSearchResponse:
        """
        Search for issues of a series.

        Args:
            query: Series name
            issue_number: Issue number to filter on
            limit: Maximum results to return

        Returns:
            Validated search response (may carry zero results)

        Raises:
            ConfigurationError: If no API key is configured
            UpstreamUnavailableError: On network failure, HTTP error or a
                response that does not match the expected shape
        """
        params = {
            "api_key": self.api_key,
            "format": "json",
            "resources": "issue",
            "query": query,
            "filter": f"issue_number:{issue_number}",
            "limit": limit,
            "field_list": FIELD_LIST,
        }

        try:
            response = self.session.get(f"{self.base_url}/search/", params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            logger.warning("Comic Vine request failed for '%s' #%s: %s", query, issue_number, e)
            raise UpstreamUnavailableError(f"Comic Vine API error: {e}") from e
        except ValueError as e:
            raise UpstreamUnavailableError(f"Comic Vine returned invalid JSON: {e}") from e

        try:
            return ComicVineSearchResponse.model_validate(data)
        except ValidationError as e:
            raise UpstreamUnavailableError(f"Unexpected Comic Vine response shape: {e}") from e
