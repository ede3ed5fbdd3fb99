"""Fixtures for API integration tests."""

import pytest
from fastapi.testclient import TestClient

from src.api.dependencies import get_engine
from src.api.main import app


@pytest.fixture
def client(engine):
    """TestClient wired to the keyword-fallback engine."""
    app.dependency_overrides[get_engine] = lambda: engine
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
