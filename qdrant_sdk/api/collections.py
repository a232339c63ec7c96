"""Collection, alias and payload index endpoints."""

from .base import ApiBase, Endpoint


class CollectionsApi(ApiBase):
    get_collections = Endpoint("GET", "/collections", doc="List all collections")
    get_collection = Endpoint("GET", "/collections/{collection_name}")
    collection_exists = Endpoint("GET", "/collections/{collection_name}/exists")
    create_collection = Endpoint(
        "PUT", "/collections/{collection_name}", query=("timeout",)
    )
    update_collection = Endpoint(
        "PATCH", "/collections/{collection_name}", query=("timeout",)
    )
    delete_collection = Endpoint(
        "DELETE", "/collections/{collection_name}", query=("timeout",)
    )

    update_aliases = Endpoint("POST", "/collections/aliases", query=("timeout",))
    get_collection_aliases = Endpoint("GET", "/collections/{collection_name}/aliases")
    get_collections_aliases = Endpoint("GET", "/aliases")

    create_field_index = Endpoint(
        "PUT", "/collections/{collection_name}/index", query=("wait", "ordering")
    )
    delete_field_index = Endpoint(
        "DELETE",
        "/collections/{collection_name}/index/{field_name}",
        query=("wait", "ordering"),
    )

    collection_cluster_info = Endpoint("GET", "/collections/{collection_name}/cluster")
    update_collection_cluster = Endpoint(
        "POST", "/collections/{collection_name}/cluster", query=("timeout",)
    )
