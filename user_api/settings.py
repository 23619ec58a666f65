from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PUBLIC_PATHS = ["/docs", "/redoc", "/openapi.json"]


class Settings(BaseSettings):
    # Local dev: load from .env automatically.
    # In production: you typically inject real env vars instead.
    model_config = SettingsConfigDict(
        env_prefix="", extra="ignore", populate_by_name=True, env_file=".env", env_file_encoding="utf-8"
    )

    # Env vars:
    # - API_TOKENS: JSON list of accepted bearer tokens
    # - PUBLIC_PATHS: JSON list of path prefixes that skip authentication
    # - ENFORCE_UNIQUE_EMAIL (optional, default true)
    # - CORS_ALLOW_ORIGINS (optional, JSON list)
    # - LOG_LEVEL (optional)
    #
    # For real deployments, set API_TOKENS. The default keeps local dev/tests
    # working out-of-the-box.
    api_tokens: list[str] = Field(
        default_factory=lambda: ["dev-insecure-token-change-me"], validation_alias="API_TOKENS"
    )
    public_paths: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PUBLIC_PATHS), validation_alias="PUBLIC_PATHS"
    )

    enforce_unique_email: bool = Field(default=True, validation_alias="ENFORCE_UNIQUE_EMAIL")
    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"], validation_alias="CORS_ALLOW_ORIGINS")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    def model_post_init(self, __context):  # type: ignore[override]
        # Blank entries (e.g. a trailing comma in a hand-edited .env) must never
        # authenticate anyone or open up every path.
        self.api_tokens = [t.strip() for t in self.api_tokens if (t or "").strip()]
        self.public_paths = [p.strip() for p in self.public_paths if (p or "").strip()]


def get_settings() -> Settings:
    """Load settings from environment.

    Keep this as the single canonical constructor for Settings(). FastAPI
    dependencies and tests can override/monkeypatch this function.
    """
    return Settings()
