"""Application settings with environment variable support."""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional
from pathlib import Path


# Project root, two levels above the package
_BASE_DIR = Path(__file__).parent.parent.parent.parent.resolve()


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="FEED_AGG_",  # FEED_AGG_PORT, FEED_AGG_REGISTRY_PATH, etc.
        extra="ignore",
    )

    # Server
    environment: str = "development"  # "development" or "production"
    host: Optional[str] = None
    port: int = 3000
    public_url: Optional[str] = None
    cors_origins: List[str] = ["*"]

    # Registry document
    registry_path: Path = _BASE_DIR / "data" / "feeds.json"

    # Fetching
    fetch_timeout_seconds: int = 30
    user_agent: str = "FeedAggregator/1.0"

    # Logging
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def bind_host(self) -> str:
        """Host to listen on; production binds all interfaces by default."""
        if self.host:
            return self.host
        return "0.0.0.0" if self.is_production else "127.0.0.1"


settings = Settings()
