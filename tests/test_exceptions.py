"""
Tests for the exception hierarchy.
"""

import pytest

from qdrant_sdk.exceptions import (
    ClientNotImplementedError,
    ConfigError,
    InvariantViolationError,
    NetworkError,
    QdrantException,
    RequestTimeoutError,
    ResourceExhaustedError,
    UnexpectedResponseError,
    truncate_content,
)


class TestHierarchy:
    """Test that every error derives from QdrantException."""

    @pytest.mark.parametrize(
        "error_class",
        [ConfigError, RequestTimeoutError, NetworkError, InvariantViolationError],
    )
    def test_subclass(self, error_class):
        assert issubclass(error_class, QdrantException)

    def test_not_implemented_is_builtin_not_implemented(self):
        """Test that ClientNotImplementedError can be caught as NotImplementedError."""
        with pytest.raises(NotImplementedError):
            raise ClientNotImplementedError("nope")

    def test_attributes(self):
        error = QdrantException("boom", status_code=500, details={"a": 1})
        assert str(error) == "boom"
        assert error.status_code == 500
        assert error.details == {"a": 1}

    def test_timeout_default_message(self):
        assert str(RequestTimeoutError()) == "Request timed out"


class TestResourceExhaustedError:
    """Test retry_after parsing."""

    @pytest.mark.parametrize(
        "value, expected",
        [("5", 5), (5, 5), ("1.5", 1.5), (2.0, 2)],
    )
    def test_retry_after(self, value, expected):
        error = ResourceExhaustedError("slow down", value)
        assert error.retry_after == expected
        assert f"Retry after {expected} seconds" in str(error)

    @pytest.mark.parametrize("value", ["soon", "", None, "nan"])
    def test_invalid_retry_after(self, value):
        """Test that a non-numeric retry_after is rejected."""
        with pytest.raises(QdrantException, match="Invalid retry_after value"):
            ResourceExhaustedError("slow down", value)


class TestUnexpectedResponseError:
    """Test the unexpected response message format."""

    def test_message(self):
        error = UnexpectedResponseError(404, "Not Found", '{"status": "missing"}')
        assert str(error) == (
            'Unexpected Response: 404 (Not Found)\nRaw response content:\n{"status": "missing"}'
        )

    def test_truncate_content(self):
        assert truncate_content("short") == "short"
        truncated = truncate_content("x" * 300)
        assert len(truncated) == 200
        assert truncated.endswith(" ...")
