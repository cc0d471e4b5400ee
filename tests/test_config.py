"""Tests for Settings validation and derived values."""

import pytest
from pydantic import ValidationError

from personal_logger.config import Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    config = Settings(_env_file=None)

    assert config.database_url == "sqlite+aiosqlite:///./data/PersonalLogger.db"
    assert config.recent_limit_default == 10
    assert config.environment == "development"
    assert config.static_root is None


def test_environment_normalized_to_lowercase():
    assert Settings(_env_file=None, environment="Production").is_production


def test_unknown_environment_rejected():
    with pytest.raises(ValidationError, match="Invalid environment"):
        Settings(_env_file=None, environment="staging")


def test_log_level_normalized_and_validated():
    assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"
    with pytest.raises(ValidationError, match="Invalid log_level"):
        Settings(_env_file=None, log_level="chatty")


@pytest.mark.parametrize("value", [0, -1, 1001])
def test_recent_limit_default_bounds(value):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, recent_limit_default=value)


def test_cors_origins_split():
    config = Settings(_env_file=None, cors_origins="http://a.test, http://b.test ,")

    assert config.cors_origins_list == ["http://a.test", "http://b.test"]


def test_static_max_age_by_environment():
    assert Settings(_env_file=None, environment="production").static_max_age == 86400
    assert Settings(_env_file=None, environment="development").static_max_age == 0
