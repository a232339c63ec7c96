"""Distributed cluster endpoints."""

from .base import ApiBase, Endpoint


class ClusterApi(ApiBase):
    cluster_status = Endpoint("GET", "/cluster")
    recover_current_peer = Endpoint("POST", "/cluster/recover")
    remove_peer = Endpoint("DELETE", "/cluster/peer/{peer_id}", query=("force",))
    collection_cluster_info = Endpoint("GET", "/collections/{collection_name}/cluster")
    update_collection_cluster = Endpoint(
        "POST", "/collections/{collection_name}/cluster", query=("timeout",)
    )
