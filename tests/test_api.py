"""
Tests for declarative endpoint bindings and the REST sub-clients.
"""

from unittest.mock import Mock

import pytest

from qdrant_sdk.api import SUB_CLIENTS, CollectionsApi, PointsApi, ServiceApi
from qdrant_sdk.api.base import ApiBase, Endpoint
from qdrant_sdk.exceptions import QdrantException


@pytest.fixture
def transport():
    transport = Mock()
    transport.base_url = "http://localhost:6333"
    transport.request.return_value = {"result": True, "status": "ok"}
    return transport


class TestEndpoint:
    """Test splitting of keyword arguments into path, query and body."""

    def test_path_query_and_body(self, transport):
        """Test a POST with all three kinds of arguments."""
        PointsApi(transport).search_points(
            collection_name="cities",
            consistency="majority",
            timeout=None,
            vector=[0.1, 0.2],
            limit=10,
            filter=None,
        )

        transport.request.assert_called_once_with(
            "POST",
            "/collections/cities/points/search",
            params={"consistency": "majority", "timeout": None},
            json={"vector": [0.1, 0.2], "limit": 10},
        )

    def test_get_has_no_body(self, transport):
        CollectionsApi(transport).get_collection(collection_name="cities")
        transport.request.assert_called_once_with(
            "GET", "/collections/cities", params={}, json=None
        )

    def test_post_without_arguments_sends_empty_body(self, transport):
        ServiceApi(transport).post_locks()
        transport.request.assert_called_once_with("POST", "/locks", params={}, json={})

    def test_missing_path_parameter(self, transport):
        with pytest.raises(QdrantException, match="collection_name"):
            CollectionsApi(transport).get_collection()
        transport.request.assert_not_called()

    def test_unexpected_argument_for_get(self, transport):
        """Test that body arguments are rejected for bodyless methods."""
        with pytest.raises(QdrantException, match="unexpected arguments"):
            CollectionsApi(transport).get_collection(collection_name="c", limit=5)

    def test_returns_transport_result(self, transport):
        assert ServiceApi(transport).root() == {"result": True, "status": "ok"}

    def test_descriptor_metadata(self):
        endpoint = CollectionsApi.delete_field_index
        assert isinstance(endpoint, Endpoint)
        assert endpoint.name == "delete_field_index"
        assert endpoint.path_params == ("collection_name", "field_name")
        assert endpoint.query == frozenset({"wait", "ordering"})

    def test_bound_method_doc(self, transport):
        bound = ServiceApi(transport).root
        assert bound.__name__ == "root"
        assert "Version information" in bound.__doc__


class TestSubClients:
    """Test the sub-client registry."""

    def test_registry(self):
        assert set(SUB_CLIENTS) == {
            "collections",
            "points",
            "snapshots",
            "cluster",
            "service",
            "shards",
        }
        assert all(issubclass(cls, ApiBase) for cls in SUB_CLIENTS.values())

    def test_repr(self, transport):
        assert repr(PointsApi(transport)) == "PointsApi(base_url='http://localhost:6333')"
