"""Tests for shared/config.py."""

from unittest.mock import patch
import os

from shared.config import Settings, get_settings, reset_settings_cache


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)
        assert settings.app_name == "Chatter API"
        assert settings.debug is False
        assert settings.port == 5000
        assert settings.host == "0.0.0.0"
        assert settings.jwt_algorithm == "HS256"
        assert settings.token_ttl_seconds == 86400
        assert settings.default_locale == "en"
        assert settings.supported_locales == ["en", "fr"]
        assert settings.cache_max_age == 300
        assert settings.compression_level == 6
        assert settings.allow_passwordless_login is True

    def test_loads_from_env(self):
        """Settings should load from environment variables."""
        with patch.dict(os.environ, {"DEBUG": "true", "PORT": "9000"}):
            settings = Settings(_env_file=None)
            assert settings.debug is True
            assert settings.port == 9000

    def test_loads_token_config_from_env(self):
        with patch.dict(os.environ, {"JWT_SECRET": "s3cret", "TOKEN_TTL_SECONDS": "60"}):
            settings = Settings(_env_file=None)
            assert settings.jwt_secret == "s3cret"
            assert settings.token_ttl_seconds == 60

    def test_loads_supabase_config_from_env(self):
        """Settings should load Supabase configuration from environment variables."""
        with patch.dict(os.environ, {
            "SUPABASE_URL": "https://test.supabase.co",
            "SUPABASE_SERVICE_ROLE_KEY": "test-service-key",
        }):
            settings = Settings(_env_file=None)
            assert settings.supabase_url == "https://test.supabase.co"
            assert settings.supabase_service_role_key == "test-service-key"

    def test_loads_locales_from_env(self):
        with patch.dict(os.environ, {"SUPPORTED_LOCALES": '["en", "fr", "de"]'}):
            settings = Settings(_env_file=None)
            assert settings.supported_locales == ["en", "fr", "de"]


class TestGetSettings:
    def test_get_settings_returns_settings_instance(self):
        """get_settings should return a Settings instance."""
        reset_settings_cache()
        settings = get_settings()
        assert isinstance(settings, Settings)

    def test_get_settings_caches(self):
        """get_settings should return cached instance."""
        reset_settings_cache()
        settings1 = get_settings()
        settings2 = get_settings()
        assert settings1 is settings2

    def test_reset_settings_cache(self):
        settings1 = get_settings()
        reset_settings_cache()
        assert get_settings() is not settings1
