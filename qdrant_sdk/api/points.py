"""Point, payload, vector and search endpoints."""

from .base import ApiBase, Endpoint

_WRITE = ("wait", "ordering")
_READ = ("consistency", "timeout")


class PointsApi(ApiBase):
    get_point = Endpoint("GET", "/collections/{collection_name}/points/{id}")
    get_points = Endpoint("POST", "/collections/{collection_name}/points", query=_READ)
    upsert_points = Endpoint("PUT", "/collections/{collection_name}/points", query=_WRITE)
    delete_points = Endpoint(
        "POST", "/collections/{collection_name}/points/delete", query=_WRITE
    )
    update_vectors = Endpoint(
        "PUT", "/collections/{collection_name}/points/vectors", query=_WRITE
    )
    delete_vectors = Endpoint(
        "POST", "/collections/{collection_name}/points/vectors/delete", query=_WRITE
    )
    overwrite_payload = Endpoint(
        "PUT", "/collections/{collection_name}/points/payload", query=_WRITE
    )
    set_payload = Endpoint(
        "POST", "/collections/{collection_name}/points/payload", query=_WRITE
    )
    delete_payload = Endpoint(
        "POST", "/collections/{collection_name}/points/payload/delete", query=_WRITE
    )
    clear_payload = Endpoint(
        "POST", "/collections/{collection_name}/points/payload/clear", query=_WRITE
    )
    batch_update = Endpoint(
        "POST", "/collections/{collection_name}/points/batch", query=_WRITE
    )

    scroll_points = Endpoint(
        "POST", "/collections/{collection_name}/points/scroll", query=_READ
    )
    count_points = Endpoint(
        "POST", "/collections/{collection_name}/points/count", query=("timeout",)
    )
    facet = Endpoint("POST", "/collections/{collection_name}/facet", query=_READ)

    search_points = Endpoint(
        "POST", "/collections/{collection_name}/points/search", query=_READ
    )
    search_batch_points = Endpoint(
        "POST", "/collections/{collection_name}/points/search/batch", query=_READ
    )
    search_point_groups = Endpoint(
        "POST", "/collections/{collection_name}/points/search/groups", query=_READ
    )
    search_matrix_pairs = Endpoint(
        "POST", "/collections/{collection_name}/points/search/matrix/pairs", query=_READ
    )
    search_matrix_offsets = Endpoint(
        "POST", "/collections/{collection_name}/points/search/matrix/offsets", query=_READ
    )

    recommend_points = Endpoint(
        "POST", "/collections/{collection_name}/points/recommend", query=_READ
    )
    recommend_batch_points = Endpoint(
        "POST", "/collections/{collection_name}/points/recommend/batch", query=_READ
    )
    recommend_point_groups = Endpoint(
        "POST", "/collections/{collection_name}/points/recommend/groups", query=_READ
    )

    discover_points = Endpoint(
        "POST", "/collections/{collection_name}/points/discover", query=_READ
    )
    discover_batch_points = Endpoint(
        "POST", "/collections/{collection_name}/points/discover/batch", query=_READ
    )

    query_points = Endpoint(
        "POST", "/collections/{collection_name}/points/query", query=_READ
    )
    query_batch_points = Endpoint(
        "POST", "/collections/{collection_name}/points/query/batch", query=_READ
    )
    query_points_groups = Endpoint(
        "POST", "/collections/{collection_name}/points/query/groups", query=_READ
    )
