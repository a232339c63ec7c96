"""
Custom exceptions for the Qdrant SDK.

Every failure surfaced by the client is one of these classes, so callers
can handle configuration problems, local timeouts, rate limiting and
unexpected server responses uniformly.
"""

import json
import math
from typing import Optional, Dict, Any, Union

MAX_CONTENT = 200


class QdrantException(Exception):
    """Base exception for all Qdrant SDK errors."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class ConfigError(QdrantException):
    """Invalid or ambiguous client construction arguments."""


class RequestTimeoutError(QdrantException):
    """Request was cancelled by the client-side timeout."""

    def __init__(self, message: str = "Request timed out", **kwargs):
        super().__init__(message, **kwargs)


class NetworkError(QdrantException):
    """Network connection error."""

    def __init__(self, message: str = "Network connection error", **kwargs):
        super().__init__(message, **kwargs)


class UnexpectedResponseError(QdrantException):
    """Server answered with a status other than 200 or 201."""

    def __init__(
        self,
        status_code: int,
        reason_phrase: Optional[str] = None,
        content: str = "",
        **kwargs,
    ):
        self.reason_phrase = reason_phrase
        self.content = content
        reason = f"({reason_phrase})" if reason_phrase else "(Unrecognized Status Code)"
        message = (
            f"Unexpected Response: {status_code} {reason}\n"
            f"Raw response content:\n{content}"
        )
        super().__init__(message, status_code=status_code, **kwargs)

    @classmethod
    def for_response(cls, response: Any) -> "UnexpectedResponseError":
        """Build an error from a ``requests.Response``.

        The body is rendered as indented JSON when it parses, otherwise as
        text, and cut down to ``MAX_CONTENT`` characters.

        Args:
            response: The response that failed validation.

        Returns:
            UnexpectedResponseError describing the response.
        """
        details: Dict[str, Any] = {}
        rendered = ""
        if response.content:
            try:
                data = response.json()
                if isinstance(data, dict):
                    details = data
                rendered = json.dumps(data, indent=2)
            except ValueError:
                rendered = response.text
        return cls(
            response.status_code,
            response.reason,
            truncate_content(rendered),
            details=details,
        )


class ResourceExhaustedError(QdrantException):
    """Server is rate limiting this client."""

    def __init__(self, message: str, retry_after: Union[str, int, float], **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = _parse_retry_after(retry_after)

    def __str__(self) -> str:
        return f"{self.message} (Retry after {self.retry_after} seconds)"


class ClientNotImplementedError(QdrantException, NotImplementedError):
    """Operation is intentionally not provided by this client."""


class InvariantViolationError(QdrantException):
    """A successful call returned nothing where a result is guaranteed."""


def truncate_content(content: str, limit: int = MAX_CONTENT) -> str:
    """Shorten response content for error messages.

    Args:
        content: Text to shorten.
        limit: Maximum length of the returned text.

    Returns:
        ``content`` unchanged if it fits, otherwise a prefix ending in `` ...``
        whose total length is ``limit``.
    """
    if len(content) <= limit:
        return content
    return content[: limit - 4] + " ..."


def _parse_retry_after(value: Union[str, int, float]) -> Union[int, float]:
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        raise QdrantException(f"Invalid retry_after value: {value}")
    if math.isnan(parsed):
        raise QdrantException(f"Invalid retry_after value: {value}")
    return int(parsed) if parsed.is_integer() else parsed
