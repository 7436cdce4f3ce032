"""
Unit tests for backend/settings.py
"""

import pytest
from pydantic import ValidationError

from backend.settings import Settings, get_settings


# Environment variables a developer shell or CI might set
ENV_VARS = [
    "ENVIRONMENT",
    "LOG_LEVEL",
    "DATA_DIR",
    "SYNC_ENABLED",
    "SYNC_USER_ID",
    "SUPABASE_URL",
    "SUPABASE_SERVICE_ROLE_KEY",
    "SUPABASE_ANON_KEY",
    "SENTRY_DSN",
    "SESSION_AUTO_END_MINUTES",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Clear environment variables to test true defaults."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.mark.unit
class TestSettingsDefaults:
    """Test that Settings applies correct defaults."""

    def test_environment_default(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.environment == "development"
        assert settings.is_development is True

    def test_storage_defaults_to_memory(self, clean_env):
        assert Settings(_env_file=None).data_dir is None

    def test_session_defaults(self, clean_env):
        """Auto-end after 2h idle, prompt after 20m, demote over 4 sessions."""
        settings = Settings(_env_file=None)
        assert settings.session_auto_end_minutes == 120
        assert settings.session_inactivity_minutes == 20
        assert settings.downgrade_lookback_workouts == 4

    def test_sync_disabled_by_default(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.sync_enabled is False
        assert settings.cloud_sync_configured is False
        assert settings.supabase_key is None

    def test_sentry_dsn_default_to_none(self, clean_env):
        assert Settings(_env_file=None).sentry_dsn is None


@pytest.mark.unit
class TestSettingsFromEnvironment:
    """Test loading from environment variables."""

    def test_reads_env(self, clean_env, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "PRODUCTION")
        monkeypatch.setenv("DATA_DIR", "/var/lib/strength")
        monkeypatch.setenv("SESSION_AUTO_END_MINUTES", "90")

        settings = Settings(_env_file=None)
        assert settings.environment == "production"
        assert settings.is_production is True
        assert settings.data_dir == "/var/lib/strength"
        assert settings.session_auto_end_minutes == 90

    def test_log_level_uppercased(self, clean_env):
        assert Settings(log_level="debug", _env_file=None).log_level == "DEBUG"


@pytest.mark.unit
class TestSettingsValidation:
    def test_invalid_environment(self, clean_env):
        with pytest.raises(ValidationError):
            Settings(environment="moon", _env_file=None)

    def test_invalid_log_level(self, clean_env):
        with pytest.raises(ValidationError):
            Settings(log_level="LOUD", _env_file=None)

    def test_auto_end_must_be_positive(self, clean_env):
        with pytest.raises(ValidationError):
            Settings(session_auto_end_minutes=0, _env_file=None)


@pytest.mark.unit
class TestCloudSyncConfigured:
    """cloud_sync_configured needs the flag, URL, a key and a user."""

    FULL = {
        "sync_enabled": True,
        "supabase_url": "https://x.supabase.co",
        "supabase_anon_key": "anon",
        "sync_user_id": "user-1",
    }

    def test_fully_configured(self, clean_env):
        assert Settings(_env_file=None, **self.FULL).cloud_sync_configured is True

    @pytest.mark.parametrize("missing", ["sync_enabled", "supabase_url", "supabase_anon_key", "sync_user_id"])
    def test_any_missing_disables(self, clean_env, missing):
        values = {**self.FULL}
        values.pop(missing)
        assert Settings(_env_file=None, **values).cloud_sync_configured is False

    def test_service_role_key_preferred(self, clean_env):
        settings = Settings(
            _env_file=None,
            supabase_anon_key="anon",
            supabase_service_role_key="service",
        )
        assert settings.supabase_key == "service"


@pytest.mark.unit
class TestGetSettings:
    def test_cached(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()
        get_settings.cache_clear()
