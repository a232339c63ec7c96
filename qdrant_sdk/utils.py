"""
Helper functions and utilities for the Qdrant SDK.

Provides URL building, query-parameter encoding and light argument
validation shared by the transport and the endpoint facade.
"""

from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote, urljoin

from .exceptions import QdrantException


def validate_collection_name(collection_name: str) -> None:
    """Validate collection name format.

    Args:
        collection_name: The collection name to validate.

    Raises:
        QdrantException: If collection name is invalid.
    """
    if not isinstance(collection_name, str):
        raise QdrantException("Collection name must be a string")

    if not collection_name.strip():
        raise QdrantException("Collection name cannot be empty")


def build_api_url(base_url: str, endpoint: str) -> str:
    """Build a complete API URL from base URL and endpoint.

    Args:
        base_url: The base API URL, possibly carrying a path prefix.
        endpoint: The API endpoint path.

    Returns:
        Complete URL.
    """
    # Ensure base_url ends with / so urljoin keeps the prefix
    if not base_url.endswith("/"):
        base_url += "/"

    if endpoint.startswith("/"):
        endpoint = endpoint[1:]

    return urljoin(base_url, endpoint)


def format_path(template: str, values: Mapping[str, Any]) -> str:
    """Fill ``{name}`` placeholders of a path template with quoted values.

    Raises:
        QdrantException: If a placeholder has no value.
    """
    try:
        return template.format(
            **{name: quote(str(value), safe="") for name, value in values.items()}
        )
    except KeyError as e:
        raise QdrantException(f"Missing path parameter {e} for {template}")


def encode_query_params(params: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    """Drop unset query parameters and render booleans the way the server expects."""
    if not params:
        return None
    encoded: Dict[str, Any] = {}
    for name, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        encoded[name] = value
    return encoded or None


def drop_none(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


def sanitize_for_logging(data: Any) -> Any:
    """Sanitize data for safe logging (remove sensitive information).

    Args:
        data: Data to sanitize.

    Returns:
        Sanitized data.
    """
    if isinstance(data, dict):
        sanitized = {}
        for key, value in data.items():
            if any(
                sensitive in str(key).lower()
                for sensitive in ["key", "token", "password", "secret"]
            ):
                sanitized[key] = "***"
            else:
                sanitized[key] = sanitize_for_logging(value)
        return sanitized
    elif isinstance(data, list):
        return [sanitize_for_logging(item) for item in data]
    elif isinstance(data, str) and len(data) > 100:
        # Truncate very long strings
        return data[:100] + "..."
    else:
        return data

