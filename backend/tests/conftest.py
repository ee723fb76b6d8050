"""
Employee API — Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the whole suite.
How:   Endpoint tests talk to the ASGI app through httpx's ASGITransport.
       Storage-backed tests use a real SQLite database (aiosqlite) in a
       per-test temporary file; fault-path tests inject an AsyncMock gateway.

Fixture Hierarchy (all function-scoped):
    test_settings ─┬─ engine ── gateway ── test_client
                   └─ mock_gateway ─────── mock_client
"""

import os

# Must be set before employee_api is imported: the module-level app in
# employee_api.main builds its engine from these settings.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from employee_api.config import Settings
from employee_api.database import create_engine_from_settings, create_tables
from employee_api.gateway import EmployeeGateway
from employee_api.main import create_app


@pytest.fixture
def test_settings(tmp_path):
    """Settings pointing at a fresh SQLite file for each test."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'employees.db'}",
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def engine(test_settings):
    """Async engine with the employees table created; disposed after the test."""
    engine = create_engine_from_settings(test_settings)
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def gateway(engine):
    """A real EmployeeGateway over the temporary SQLite database."""
    return EmployeeGateway(engine)


@pytest.fixture
def mock_gateway():
    """
    An EmployeeGateway stand-in whose methods are AsyncMocks.

    Usage:
        mock_gateway.list.side_effect = StorageError("connection lost")
    """
    return AsyncMock(spec=EmployeeGateway)


@pytest_asyncio.fixture
async def test_client(test_settings, gateway):
    """HTTPX AsyncClient talking to an app backed by the SQLite gateway."""
    app = create_app(settings=test_settings, gateway=gateway)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def mock_client(test_settings, mock_gateway):
    """
    HTTPX AsyncClient talking to an app backed by mock_gateway.

    raise_app_exceptions=False lets tests observe the 500 response the
    catch-all handler produces instead of the re-raised exception.
    """
    app = create_app(settings=test_settings, gateway=mock_gateway)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_employee_data():
    """A complete create payload."""
    return {"fname": "Jo", "lname": "Doe", "age": 40, "title": "Mgr"}
