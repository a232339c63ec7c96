"""Shard key and shard snapshot endpoints."""

from .base import ApiBase, Endpoint

_SHARD_SNAPSHOTS = "/collections/{collection_name}/shards/{shard_id}/snapshots"


class ShardsApi(ApiBase):
    create_shard_key = Endpoint(
        "PUT", "/collections/{collection_name}/shards", query=("timeout",)
    )
    delete_shard_key = Endpoint(
        "POST", "/collections/{collection_name}/shards/delete", query=("timeout",)
    )

    list_shard_snapshots = Endpoint("GET", _SHARD_SNAPSHOTS)
    create_shard_snapshot = Endpoint("POST", _SHARD_SNAPSHOTS, query=("wait",))
    get_shard_snapshot = Endpoint("GET", _SHARD_SNAPSHOTS + "/{snapshot_name}")
    delete_shard_snapshot = Endpoint(
        "DELETE", _SHARD_SNAPSHOTS + "/{snapshot_name}", query=("wait",)
    )
    recover_shard_from_snapshot = Endpoint(
        "PUT", _SHARD_SNAPSHOTS + "/recover", query=("wait",)
    )
