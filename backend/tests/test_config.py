"""Employee API — Settings validation tests."""

import pytest
from pydantic import ValidationError

from employee_api.config import Settings


def test_log_level_is_normalised():
    assert Settings(log_level="debug").log_level == "DEBUG"


def test_invalid_log_level_rejected():
    with pytest.raises(ValidationError, match="Invalid log_level"):
        Settings(log_level="LOUD")


def test_invalid_database_url_rejected():
    with pytest.raises(ValidationError, match="Invalid database_url"):
        Settings(database_url="not a url")


def test_sqlite_detection():
    assert Settings(database_url="sqlite+aiosqlite:///./x.db").is_sqlite
    assert not Settings(
        database_url="postgresql+asyncpg://u:p@localhost:5432/employees"
    ).is_sqlite


def test_pool_size_bounds():
    with pytest.raises(ValidationError):
        Settings(db_pool_size=1)


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DOCS_ENABLED", "true")
    monkeypatch.setenv("BACKEND_PORT", "9001")
    settings = Settings()
    assert settings.docs_enabled is True
    assert settings.backend_port == 9001
