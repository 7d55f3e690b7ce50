from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration using pydantic-settings."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Storage
    data_dir: str = Field(
        default="public/data/menus",
        description="Directory the scraper writes its dated JSON files to",
    )

    # Scrape trigger (GitHub Actions workflow_dispatch)
    github_token: str = Field(
        default="", description="Token with permission to dispatch workflows"
    )
    github_owner: str = Field(default="", description="Repository owner")
    github_repo: str = Field(default="", description="Repository name")
    github_workflow: str = Field(
        default="manual-scrape.yml", description="Workflow file to dispatch"
    )
    github_ref: str = Field(default="master", description="Git ref to run the workflow on")
    scrape_cooldown_minutes: int = Field(
        default=10, ge=1, description="Minimum minutes between accepted scrape triggers"
    )

    # Application
    app_env: str = Field(
        default="development", description="Environment (development, production)"
    )
    debug: bool = Field(default=False, description="Debug mode")
    allowed_origins: str = Field(
        default="http://localhost:3000,http://127.0.0.1:3000",
        description="Comma-separated CORS allowed origins",
    )

    @property
    def cors_origins(self) -> list[str]:
        """Parse allowed origins into a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"


# Global settings instance
settings = Settings()
