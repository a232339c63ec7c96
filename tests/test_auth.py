"""
Tests for API key resolution and authentication headers.
"""

import os
from unittest.mock import patch

import pytest

from qdrant_sdk.auth import APIKeyManager
from qdrant_sdk.exceptions import ConfigError


class TestAPIKeyManager:
    """Test API key resolution."""

    def test_explicit_api_key(self, api_key):
        """Test initialization with an explicit key."""
        manager = APIKeyManager(api_key)

        assert manager.api_key == api_key
        assert manager.has_key

    def test_api_key_from_environment(self, api_key):
        """Test API key resolution from QDRANT_API_KEY."""
        with patch.dict(os.environ, {"QDRANT_API_KEY": api_key}):
            manager = APIKeyManager()
            assert manager.api_key == api_key

    def test_explicit_api_key_overrides_environment(self, api_key):
        """Test that an explicit API key overrides the environment."""
        with patch.dict(os.environ, {"QDRANT_API_KEY": "from-env"}):
            manager = APIKeyManager(api_key)
            assert manager.api_key == api_key

    def test_no_api_key_is_allowed(self):
        """Test that a missing key is valid and means no authentication."""
        manager = APIKeyManager()

        assert manager.api_key is None
        assert not manager.has_key

    def test_empty_environment_value_is_ignored(self):
        with patch.dict(os.environ, {"QDRANT_API_KEY": ""}):
            assert APIKeyManager().api_key is None

    @pytest.mark.parametrize("invalid_key", ["", "   ", 12345])
    def test_invalid_api_key_raises_error(self, invalid_key):
        """Test that empty, blank and non-string keys are rejected."""
        with pytest.raises(ConfigError):
            APIKeyManager(invalid_key)


class TestAuthenticationHeaders:
    """Test authentication header generation."""

    def test_get_auth_headers(self, api_key):
        headers = APIKeyManager(api_key).get_auth_headers()
        assert headers == {"api-key": api_key}

    def test_no_headers_without_key(self):
        assert APIKeyManager().get_auth_headers() == {}

    def test_get_auth_metadata(self, api_key):
        """Test the gRPC metadata form of the headers."""
        assert APIKeyManager(api_key).get_auth_metadata() == (("api-key", api_key),)


class TestAPIKeyUtilities:
    """Test API key utility methods."""

    def test_mask_api_key(self, api_key):
        """Test API key masking for logging."""
        assert APIKeyManager(api_key).mask_api_key() == "***"

    def test_mask_without_key(self):
        assert APIKeyManager().mask_api_key() is None
