from functools import lru_cache
from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict

TMDB_BASE_URL = 'https://api.themoviedb.org/3'
TMDB_IMAGE_BASE_URL = 'https://image.tmdb.org/t/p'


class ClientConfig(BaseModel):
    """Connection values handed to MovieClient at construction."""
    api_key: str
    base_url: str = TMDB_BASE_URL
    image_base_url: str = TMDB_IMAGE_BASE_URL
    timeout: float = 10.0

    model_config = ConfigDict(frozen=True)


class Settings(BaseSettings):
    TMDB_API_KEY: str
    TMDB_BASE_URL: str = TMDB_BASE_URL
    TMDB_IMAGE_BASE_URL: str = TMDB_IMAGE_BASE_URL
    TMDB_TIMEOUT: float = 10.0
    DEBOUNCE_SECONDS: float = 0.5
    LOG_LEVEL: str = 'INFO'

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"
    )

    def client_config(self) -> ClientConfig:
        return ClientConfig(
            api_key=self.TMDB_API_KEY,
            base_url=self.TMDB_BASE_URL.rstrip('/'),
            image_base_url=self.TMDB_IMAGE_BASE_URL.rstrip('/'),
            timeout=self.TMDB_TIMEOUT,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
