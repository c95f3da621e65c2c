"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncIterator, Callable, Generator
from datetime import UTC, datetime

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from tasktrack.core.config import Settings
from tasktrack.core.db_client import Database
from tasktrack.interface.auth import TokenVerifier
from tasktrack.main import create_app


ALICE_ID = "user-alice"
BOB_ID = "user-bob"

# Fixed reference time for overdue computations
NOW = datetime(2025, 1, 10, 12, 0, tzinfo=UTC)


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway database file."""
    return Settings(
        sqlite_db_path=str(tmp_path / "tasktrack.db"),
        secret_key="test-secret-key",
        token_max_age_seconds=3600,
        timezone="UTC",
        logfire_token=None,
        environment="test",
    )


@pytest.fixture
async def db(test_settings: Settings) -> AsyncIterator[Database]:
    """Real SQLite database, fresh for each test."""
    database = await Database.open(test_settings.sqlite_db_path)
    yield database
    await database.close()


@pytest.fixture
def verifier(test_settings: Settings) -> TokenVerifier:
    return TokenVerifier(test_settings.secret_key, max_age_seconds=test_settings.token_max_age_seconds)


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    return create_app(test_settings)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient]:
    """FastAPI test client with the lifespan (and database) running."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(verifier: TokenVerifier) -> Callable[[str], dict[str, str]]:
    """Factory for Authorization headers.

    Usage:
        client.get("/tasks", headers=auth_headers("user-alice"))
    """

    def _headers(user_id: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {verifier.issue(user_id)}"}

    return _headers


@pytest.fixture
def alice_headers(auth_headers) -> dict[str, str]:
    return auth_headers(ALICE_ID)


@pytest.fixture
def bob_headers(auth_headers) -> dict[str, str]:
    return auth_headers(BOB_ID)
