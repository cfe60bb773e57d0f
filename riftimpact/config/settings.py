"""
Configuration settings using Pydantic Settings.

All sensitive configuration must be loaded from environment variables.
Never hardcode API keys or credentials in the code.
"""

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Riot API Configuration
    riot_api_key: str | None = Field(None, validation_alias=AliasChoices("RIOT_API_KEY"))
    riot_api_base_url: str = Field(
        "https://americas.api.riotgames.com", alias="RIOT_API_BASE_URL"
    )
    riot_api_timeout_seconds: float = Field(15.0, gt=0, alias="RIOT_API_TIMEOUT_SECONDS")
    riot_match_queue_type: str | None = Field(
        "ranked",
        alias="RIOT_MATCH_QUEUE_TYPE",
        description="Match-V5 `type` filter for match id listings; empty for all queues",
    )

    # Cache Configuration
    cache_dir: Path = Field(Path("caches"), alias="CACHE_DIR")
    match_cache_ttl_seconds: int = Field(
        600,
        gt=0,
        alias="MATCH_CACHE_TTL_SECONDS",
        description="Freshness window for match id lists, match details and timelines",
    )
    default_match_count: int = Field(5, ge=1, le=100, alias="DEFAULT_MATCH_COUNT")

    # Application Configuration
    app_log_level: str = Field("INFO", alias="APP_LOG_LEVEL")
    log_json: bool | None = Field(
        None,
        alias="LOG_JSON",
        description="JSON log lines when true, console when false; unset picks JSON off a TTY",
    )

    @property
    def match_cache_path(self) -> Path:
        return self.cache_dir / "match_cache.json"

    @property
    def identity_cache_path(self) -> Path:
        return self.cache_dir / "user_cache.json"

    @property
    def impact_cache_path(self) -> Path:
        return self.cache_dir / "impact_cache.json"


# Singleton instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create settings singleton.

    This function provides dependency injection support for settings.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
