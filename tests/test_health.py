"""Tests for health check endpoints."""

from collections.abc import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from product_service.infrastructure.database import get_session
from product_service.main import app


@pytest.fixture
def db_session() -> MagicMock:
    """Session double for the readiness check."""
    session = MagicMock()
    session.execute = AsyncMock()
    return session


@pytest.fixture
def client(db_session: MagicMock) -> Generator[TestClient, None, None]:
    """Create test client."""
    app.dependency_overrides[get_session] = lambda: db_session
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health_check(client: TestClient) -> None:
    """Test health endpoint returns healthy status."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "product-service"
    assert "version" in data


def test_readiness_check(client: TestClient) -> None:
    """Test readiness endpoint returns ready status."""
    response = client.get("/ready")
    assert response.status_code == 200
    assert response.json()["status"] == "ready"


def test_readiness_check_database_down(client: TestClient, db_session: MagicMock) -> None:
    """Readiness reports 503 when the database is unreachable."""
    db_session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("down"))

    response = client.get("/ready")
    assert response.status_code == 503
    assert response.json()["status"] == "unavailable"

