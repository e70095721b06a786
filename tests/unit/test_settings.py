import pytest

from recordstore.utils.settings import (
    DEFAULT_DATABASE_URL,
    get_settings,
    refresh_settings_cache,
)

_ENV_VARS = (
    "RECORDSTORE_DATABASE_URL",
    "DATABASE_URL",
    "RECORDSTORE_SQL_ECHO",
    "RECORDSTORE_EXPIRE_ON_COMMIT",
)


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch):
    """Clear env + cached values for each test to avoid cross-contamination."""
    for env_name in _ENV_VARS:
        monkeypatch.delenv(env_name, raising=False)
    refresh_settings_cache()
    yield
    refresh_settings_cache()


def test_defaults():
    settings = get_settings()
    assert settings.database_url == DEFAULT_DATABASE_URL
    assert settings.sql_echo is False
    assert settings.expire_on_commit is False


def test_database_url_fallback_order(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///fallback.db")
    refresh_settings_cache()
    assert get_settings().database_url == "sqlite:///fallback.db"

    monkeypatch.setenv("RECORDSTORE_DATABASE_URL", "sqlite:///explicit.db")
    refresh_settings_cache()
    assert get_settings().database_url == "sqlite:///explicit.db"


def test_blank_database_url_uses_default(monkeypatch):
    monkeypatch.setenv("RECORDSTORE_DATABASE_URL", "   ")
    refresh_settings_cache()
    assert get_settings().database_url == DEFAULT_DATABASE_URL


@pytest.mark.parametrize("raw_value,expected", [
    ("1", True),
    ("TRUE", True),
    ("on", True),
    ("no", False),
    ("0", False),
    ("maybe", False),
])
def test_sql_echo_parsing(monkeypatch, raw_value, expected):
    monkeypatch.setenv("RECORDSTORE_SQL_ECHO", raw_value)
    refresh_settings_cache()
    assert get_settings().sql_echo is expected


def test_cache_holds_until_refreshed(monkeypatch):
    monkeypatch.setenv("RECORDSTORE_EXPIRE_ON_COMMIT", "true")
    refresh_settings_cache()
    assert get_settings().expire_on_commit is True

    # Update env without clearing cache – still should read stale value
    monkeypatch.setenv("RECORDSTORE_EXPIRE_ON_COMMIT", "false")
    assert get_settings().expire_on_commit is True

    refresh_settings_cache()
    assert get_settings().expire_on_commit is False
