from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from comicshelf.core.errors import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "ComicShelf Backend"
    app_id: str = "comicshelf"
    log_level: str = "INFO"

    database_url: str = "sqlite:///./comicshelf.db"

    comicvine_api_key: str = ""
    comicvine_base_url: str = "https://comicvine.gamespot.com/api"
    comicvine_timeout_seconds: float = 10.0

    # Self-imposed delay before every Comic Vine request
    rate_limit_seconds: float = 0.3

    retry_max_attempts: int = 3
    retry_initial_delay_ms: int = 1000

    @property
    def cache_collection(self) -> str:
        return f"artifacts/{self.app_id}/public/data/comic_metadata_cache"

    @property
    def mapping_collection(self) -> str:
        return f"artifacts/{self.app_id}/public/data/series_code_mappings"


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_comicvine_api_key() -> str:
    """Return the Comic Vine API key or fail loudly if it is not configured."""
    api_key = get_settings().comicvine_api_key
    if not api_key:
        raise ConfigurationError(
            "COMICVINE_API_KEY is not set. Get a key at https://comicvine.gamespot.com/api/"
        )
    return api_key
