"""
Qdrant Python SDK

A thin client for the Qdrant vector database: connection resolution,
authentication, timeouts, version checking and typed access to the REST API.
The gRPC client lives in ``qdrant_sdk.grpc_client`` and needs the ``grpc``
extra.
"""

import logging

__version__ = "1.12.0"
__author__ = "Qdrant SDK Contributors"

from .client import QdrantClient
from .config import ConnectionConfig, resolve_connection
from .exceptions import (
    QdrantException,
    ConfigError,
    RequestTimeoutError,
    NetworkError,
    UnexpectedResponseError,
    ResourceExhaustedError,
    ClientNotImplementedError,
    InvariantViolationError,
)
from .models import (
    Distance,
    Filter,
    PointStruct,
    VectorParams,
    ScoredPoint,
    Record,
    ScrollResult,
    UpdateResult,
    UpdateStatus,
    CollectionDescription,
    CountResult,
    SnapshotDescription,
    VersionInfo,
)
from .version import is_compatible, parse_version

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "QdrantClient",
    "ConnectionConfig",
    "resolve_connection",
    "QdrantException",
    "ConfigError",
    "RequestTimeoutError",
    "NetworkError",
    "UnexpectedResponseError",
    "ResourceExhaustedError",
    "ClientNotImplementedError",
    "InvariantViolationError",
    "Distance",
    "Filter",
    "PointStruct",
    "VectorParams",
    "ScoredPoint",
    "Record",
    "ScrollResult",
    "UpdateResult",
    "UpdateStatus",
    "CollectionDescription",
    "CountResult",
    "SnapshotDescription",
    "VersionInfo",
    "is_compatible",
    "parse_version",
]
