"""
API key management for the Qdrant SDK.

Resolves the optional API key from the constructor argument or the
environment and produces the authentication header sent with each request.
"""

import os
from typing import Dict, Optional

from .exceptions import ConfigError

API_KEY_HEADER = "api-key"
API_KEY_ENV_VARS = ("QDRANT_API_KEY",)


class APIKeyManager:
    """Holds the API key for a client, if one is configured."""

    def __init__(self, api_key: Optional[str] = None):
        """Initialize API key manager.

        Args:
            api_key: The API key. If None, the environment is consulted.

        Raises:
            ConfigError: If the supplied API key is not a non-empty string.
        """
        self.api_key = self._resolve_api_key(api_key)
        if self.api_key is not None:
            self._validate_api_key(self.api_key)

    def _resolve_api_key(self, api_key: Optional[str]) -> Optional[str]:
        """Resolve API key from parameter or environment.

        Args:
            api_key: Explicit API key or None.

        Returns:
            The resolved API key, or None when no key is configured.
        """
        if api_key is not None:
            return api_key

        for name in API_KEY_ENV_VARS:
            env_key = os.getenv(name)
            if env_key:
                return env_key

        return None

    def _validate_api_key(self, api_key: str) -> None:
        if not isinstance(api_key, str):
            raise ConfigError("API key must be a string")

        if not api_key.strip():
            raise ConfigError("API key cannot be empty")

    @property
    def has_key(self) -> bool:
        return self.api_key is not None

    def get_auth_headers(self) -> Dict[str, str]:
        """Get authentication headers for API requests.

        Returns:
            Dictionary containing the ``api-key`` header, empty without a key.
        """
        if self.api_key is None:
            return {}
        return {API_KEY_HEADER: self.api_key}

    def get_auth_metadata(self):
        """Authentication headers as gRPC metadata pairs."""
        return tuple(self.get_auth_headers().items())

    def mask_api_key(self) -> Optional[str]:
        """Get a masked version of the API key for logging.

        Returns:
            ``"***"`` when a key is set, otherwise None.
        """
        return "***" if self.api_key is not None else None
