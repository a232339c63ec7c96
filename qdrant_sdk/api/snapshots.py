"""Collection and full-storage snapshot endpoints."""

from .base import ApiBase, Endpoint


class SnapshotsApi(ApiBase):
    list_snapshots = Endpoint("GET", "/collections/{collection_name}/snapshots")
    create_snapshot = Endpoint(
        "POST", "/collections/{collection_name}/snapshots", query=("wait",)
    )
    get_snapshot = Endpoint(
        "GET", "/collections/{collection_name}/snapshots/{snapshot_name}"
    )
    delete_snapshot = Endpoint(
        "DELETE",
        "/collections/{collection_name}/snapshots/{snapshot_name}",
        query=("wait",),
    )
    recover_from_snapshot = Endpoint(
        "PUT", "/collections/{collection_name}/snapshots/recover", query=("wait",)
    )

    list_full_snapshots = Endpoint("GET", "/snapshots")
    create_full_snapshot = Endpoint("POST", "/snapshots", query=("wait",))
    get_full_snapshot = Endpoint("GET", "/snapshots/{snapshot_name}")
    delete_full_snapshot = Endpoint(
        "DELETE", "/snapshots/{snapshot_name}", query=("wait",)
    )
