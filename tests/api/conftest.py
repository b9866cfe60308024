"""Fixtures for API tests."""

import pytest
from fastapi.testclient import TestClient

from catalog_api.main import app


@pytest.fixture
def client(override_service) -> TestClient:
    """Create test client backed by the in-memory catalog."""
    return TestClient(app)
