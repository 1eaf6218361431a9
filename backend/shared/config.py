"""
Centralized configuration for the Chatter API.

All settings are loaded from environment variables with sensible defaults.
Store settings use the SUPABASE_* namespace, token settings JWT_*.
"""

from functools import lru_cache
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
    app_name: str = "Chatter API"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["POST", "GET", "OPTIONS"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase (document store)
    supabase_url: str = ""
    supabase_service_role_key: str = ""

    # Tokens
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    token_ttl_seconds: int = 60 * 60 * 24

    # Localization
    default_locale: str = "en"
    supported_locales: list[str] = ["en", "fr"]

    # Response policy
    cache_max_age: int = 300
    compression_level: int = 6
    compression_min_size: int = 0

    # Login without a stored password hash (email only)
    allow_passwordless_login: bool = True


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


def reset_settings_cache() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()
