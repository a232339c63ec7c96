"""
Pytest configuration and fixtures for Qdrant SDK tests.

Provides common test fixtures and configuration for all test modules.
"""

import os

import pytest
import responses as responses_lib

from qdrant_sdk import QdrantClient


@pytest.fixture
def api_key():
    """Test API key fixture."""
    return "qdrant_test_1234567890abcdef"


@pytest.fixture
def base_url():
    """Base URL the REST client fixture talks to."""
    return "http://localhost:6333"


@pytest.fixture
def client(base_url):
    """QdrantClient fixture without the background version check."""
    client = QdrantClient(url=base_url, timeout=10.0, check_compatibility=False)
    yield client
    client.close()


@pytest.fixture
def mocked_responses():
    """Intercept every HTTP call made through requests."""
    with responses_lib.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def sample_scored_points():
    """Sample search results fixture."""
    return [
        {
            "id": 1,
            "version": 3,
            "score": 0.95,
            "payload": {"city": "Berlin"},
            "vector": None,
        },
        {
            "id": "b6f1d3b0-7c1e-4a8e-9b1f-0c4b1e0a9c11",
            "version": 3,
            "score": 0.87,
            "payload": {"city": "London"},
            "vector": None,
        },
    ]


@pytest.fixture
def ok():
    """Build a Qdrant response envelope around a result."""

    def _envelope(result):
        return {"result": result, "status": "ok", "time": 0.001}

    return _envelope


@pytest.fixture(autouse=True)
def reset_environment():
    """Reset environment variables before each test."""
    original_env = os.environ.copy()

    os.environ.pop("QDRANT_API_KEY", None)

    yield

    os.environ.clear()
    os.environ.update(original_env)
