"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "PromptJSON"
    debug: bool = False

    # Gemini
    # Any of the usual Google variable names is accepted; an empty key still
    # builds a client whose calls fail with an invalid-credentials error.
    gemini_api_key: str = Field(
        default="",
        validation_alias=AliasChoices(
            "GOOGLE_GENAI_API_KEY",
            "GEMINI_API_KEY",
            "GOOGLE_API_KEY",
        ),
    )
    model: str = "gemini-2.0-flash"
    temperature: float = Field(default=0.5, ge=0.0, le=1.0)
    request_timeout_seconds: int = 120

    # Local persistence
    storage_dir: str = ".promptjson"
    max_history: int = Field(default=50, ge=1)
    max_favorites: int | None = None  # None keeps favorites unbounded

    # Typewriter reveal of structured output
    reveal_chars_per_tick: int = Field(default=1, ge=1)
    reveal_tick_seconds: float = Field(default=1 / 60, ge=0.0)

    # API
    api_prefix: str = "/api"
    rate_limit: str = "30/minute"
    # CORS_ORIGINS_STR env var should be comma-separated list of allowed origins
    cors_origins_str: str = "http://localhost:3000,http://localhost:9002"

    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
