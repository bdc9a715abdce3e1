"""Application configuration."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    jwt_secret: str = ""
    jwt_expires_minutes: int = 60 * 24
    database_url: str = "sqlite:///./darulabror.db"
    public_bucket: str | None = None
    gcs_project: str | None = None
    storage_upload_timeout_seconds: float = 50.0
    media_url_ttl_minutes: int = 10
    cors_origins: str = ""
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8080

    model_config = SettingsConfigDict(env_prefix="DARULABROR_", extra="ignore")

    @property
    def allowed_origins(self) -> list[str]:
        return parse_cors_origins(self.cors_origins)


def parse_cors_origins(raw: str) -> list[str]:
    """Split a comma-separated origin list, dropping blanks and duplicates."""
    origins: list[str] = []
    for item in raw.split(","):
        origin = item.strip()
        if origin and origin not in origins:
            origins.append(origin)
    return origins


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
