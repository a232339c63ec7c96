"""REST sub-clients, one per server subsystem."""

from .base import ApiBase, Endpoint
from .cluster import ClusterApi
from .collections import CollectionsApi
from .points import PointsApi
from .service import ServiceApi
from .shards import ShardsApi
from .snapshots import SnapshotsApi

SUB_CLIENTS = {
    "collections": CollectionsApi,
    "points": PointsApi,
    "snapshots": SnapshotsApi,
    "cluster": ClusterApi,
    "service": ServiceApi,
    "shards": ShardsApi,
}

__all__ = [
    "ApiBase",
    "Endpoint",
    "ClusterApi",
    "CollectionsApi",
    "PointsApi",
    "ServiceApi",
    "ShardsApi",
    "SnapshotsApi",
    "SUB_CLIENTS",
]
