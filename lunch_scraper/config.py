from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScraperSettings(BaseSettings):
    """Scraper configuration using pydantic-settings (``SCRAPER_*`` env vars)."""

    model_config = SettingsConfigDict(
        env_prefix="SCRAPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Storage
    data_dir: str = Field(
        default="public/data/menus",
        description="Directory holding one JSON file per scraped date",
    )

    # Browser
    headless: bool = Field(default=True, description="Run Chromium headless")
    locale: str = Field(default="cs-CZ", description="Browser locale")
    accept_language: str = Field(
        default="cs-CZ,cs;q=0.9", description="Accept-Language request header"
    )
    timezone_id: str = Field(
        default="Europe/Prague", description="Browser and calendar timezone"
    )
    navigation_timeout_ms: int = Field(
        default=45_000, ge=1_000, description="Max time for a page navigation"
    )
    action_timeout_ms: int = Field(
        default=15_000,
        ge=1_000,
        description="Max time for waits, clicks and evaluations",
    )

    # Retries
    navigation_attempts: int = Field(default=3, ge=1, le=10)
    retry_base_delay: float = Field(
        default=1.0,
        ge=0.0,
        description="Seconds; attempt N waits N * retry_base_delay before retrying",
    )
    settle_delay_ms: int = Field(
        default=1_000, ge=0, description="Pause after navigation for late renders"
    )

    @model_validator(mode="after")
    def _action_shorter_than_navigation(self) -> "ScraperSettings":
        if self.action_timeout_ms >= self.navigation_timeout_ms:
            msg = "action_timeout_ms must be shorter than navigation_timeout_ms"
            raise ValueError(msg)
        return self
