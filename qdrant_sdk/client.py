"""
REST client implementation for the Qdrant SDK.

QdrantClient resolves the connection settings, builds the middleware-wrapped
transport, starts the background version check, and exposes the server's
API both as namespaced sub-clients (``client.api("points")``) and as
convenience methods that apply sensible defaults and unwrap results.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from . import __version__
from .api import SUB_CLIENTS, ApiBase
from .auth import APIKeyManager
from .config import REST_DEFAULT_HOST, REST_DEFAULT_PORT, ConnectionConfig, resolve_connection
from .exceptions import ClientNotImplementedError, InvariantViolationError
from .middleware import build_middlewares
from .models import (
    CollectionDescription,
    CountResult,
    Filter,
    PointId,
    PointStruct,
    Record,
    ScoredPoint,
    ScrollResult,
    SnapshotDescription,
    UpdateResult,
    VectorParams,
    VersionInfo,
)
from .transport import DEFAULT_MAX_CONNECTIONS, Transport
from .utils import validate_collection_name
from .version import start_compatibility_check

logger = logging.getLogger(__name__)

USER_AGENT = f"qdrant-sdk-python/{__version__}"

FilterLike = Union[Filter, Dict[str, Any]]


class QdrantClient:
    """
    Client for the Qdrant REST API.

    Sub-clients are created on first use and cached for the lifetime of the
    client. Every remote call goes through the same pooled session.
    """

    DEFAULT_TIMEOUT = 300.0

    def __init__(
        self,
        url: Optional[str] = None,
        host: Optional[str] = None,
        port: Optional[int] = REST_DEFAULT_PORT,
        api_key: Optional[str] = None,
        https: Optional[bool] = None,
        prefix: Optional[str] = None,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        headers: Optional[Dict[str, Any]] = None,
        max_connections: int = DEFAULT_MAX_CONNECTIONS,
        check_compatibility: bool = True,
    ):
        """Initialize the client.

        Args:
            url: Full base URL, e.g. ``https://xyz.cloud.qdrant.io:6333``.
                Mutually exclusive with ``host``.
            host: Host name without scheme or port (default: localhost).
            port: REST port (default: 6333). ``None`` leaves the port out of
                the base URI.
            api_key: API key. If None, ``QDRANT_API_KEY`` is consulted.
            https: Use https. Defaults to True when an API key is set,
                including a key picked up from ``QDRANT_API_KEY``; such a key
                is also sent as the ``api-key`` header.
            prefix: Path prefix for every request, e.g. ``service/v1``.
            timeout: Local request timeout in seconds (default: 300).
                ``None`` or ``math.inf`` disables it.
            headers: Extra headers sent with every request.
            max_connections: Size of the keep-alive connection pool.
            check_compatibility: Compare client and server versions in the
                background after construction (default: True).

        Raises:
            ConfigError: If the connection arguments are invalid.
        """
        self.auth_manager = APIKeyManager(api_key)
        self.config: ConnectionConfig = resolve_connection(
            url=url,
            host=host,
            port=port,
            https=https,
            prefix=prefix,
            api_key=self.auth_manager.api_key,
            default_host=REST_DEFAULT_HOST,
        )
        self.timeout = timeout

        self.transport = Transport(
            self.config.uri,
            build_middlewares(USER_AGENT, self.auth_manager.api_key, timeout, headers),
            max_connections=max_connections,
        )

        # {name: sub-client}, filled lazily by api()
        self._sub_clients: Dict[str, ApiBase] = {}

        self._compatibility_check = None
        if check_compatibility:
            self._compatibility_check = start_compatibility_check(
                self._fetch_server_version, __version__
            )

    @property
    def rest_uri(self) -> str:
        return self.config.uri

    def api(self, name: str) -> ApiBase:
        """Get the sub-client for one server subsystem.

        Sub-clients are created on first access and reused afterwards.
        Creation is cheap and has no side effects, so two threads racing on
        first access at worst build one throwaway instance; setdefault keeps
        whichever was stored first.

        Args:
            name: One of collections, points, snapshots, cluster, service,
                shards.

        Returns:
            The sub-client.

        Raises:
            ValueError: If ``name`` is not a known sub-client.
        """
        sub_client = self._sub_clients.get(name)
        if sub_client is None:
            factory = SUB_CLIENTS.get(name)
            if factory is None:
                raise ValueError(
                    f"Unknown API '{name}'. Available: {', '.join(sorted(SUB_CLIENTS))}"
                )
            sub_client = self._sub_clients.setdefault(name, factory(self.transport))
            logger.debug("Created %s sub-client", name)
        return sub_client

    def _fetch_server_version(self) -> Optional[str]:
        response = self.api("service").root()
        return response.get("version") if isinstance(response, dict) else None

    @staticmethod
    def _unwrap(response: Any, message: str) -> Any:
        result = response.get("result") if isinstance(response, dict) else None
        if result is None:
            raise InvariantViolationError(message)
        return result

    @staticmethod
    def _filter(value: Optional[FilterLike]) -> Optional[Dict[str, Any]]:
        if isinstance(value, Filter):
            return value.to_dict()
        return value

    # Search Methods

    def search(
        self,
        collection_name: str,
        query_vector: Union[List[float], Dict[str, Any]],
        limit: int = 10,
        offset: int = 0,
        query_filter: Optional[FilterLike] = None,
        search_params: Optional[Dict[str, Any]] = None,
        with_payload: Any = True,
        with_vector: Any = False,
        score_threshold: Optional[float] = None,
        shard_key: Any = None,
        consistency: Any = None,
        timeout: Optional[int] = None,
    ) -> List[ScoredPoint]:
        """Search for the closest vectors in a collection.

        Args:
            collection_name: Collection to search in.
            query_vector: A vector, or ``{"name": ..., "vector": [...]}`` for
                named vectors.
            limit: How many results to return (default: 10).
            offset: Offset of the first result, for pagination (default: 0).
            query_filter: Only consider points matching this filter.
            search_params: Additional search params such as ``hnsw_ef``.
            with_payload: True, False, a list of fields, or a selector
                (default: True).
            with_vector: Attach stored vectors to results (default: False).
            score_threshold: Minimal score of returned results.
            shard_key: Only search in these shards.
            consistency: Read consistency: a replica count, ``majority``,
                ``quorum`` or ``all``.
            timeout: Server-side timeout in seconds for this request.

        Returns:
            List of ScoredPoint, best first.
        """
        validate_collection_name(collection_name)
        response = self.api("points").search_points(
            collection_name=collection_name,
            consistency=consistency,
            timeout=timeout,
            vector=query_vector,
            limit=limit,
            offset=offset,
            filter=self._filter(query_filter),
            params=search_params,
            with_payload=with_payload,
            with_vector=with_vector,
            score_threshold=score_threshold,
            shard_key=shard_key,
        )
        result = self._unwrap(response, "Search returned empty")
        return [ScoredPoint.from_dict(point) for point in result]

    def search_batch(
        self,
        collection_name: str,
        searches: Sequence[Dict[str, Any]],
        consistency: Any = None,
        timeout: Optional[int] = None,
    ) -> List[List[ScoredPoint]]:
        """Run several search requests in one call."""
        response = self.api("points").search_batch_points(
            collection_name=collection_name,
            consistency=consistency,
            timeout=timeout,
            searches=list(searches),
        )
        result = self._unwrap(response, "Search batch returned empty")
        return [[ScoredPoint.from_dict(point) for point in batch] for batch in result]

    def search_groups(
        self,
        collection_name: str,
        query_vector: Union[List[float], Dict[str, Any]],
        group_by: str,
        limit: int = 10,
        group_size: Optional[int] = None,
        query_filter: Optional[FilterLike] = None,
        search_params: Optional[Dict[str, Any]] = None,
        with_payload: Any = True,
        with_vector: Any = False,
        score_threshold: Optional[float] = None,
        with_lookup: Any = None,
        shard_key: Any = None,
        consistency: Any = None,
        timeout: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Search for closest vectors grouped by a payload field."""
        response = self.api("points").search_point_groups(
            collection_name=collection_name,
            consistency=consistency,
            timeout=timeout,
            vector=query_vector,
            group_by=group_by,
            limit=limit,
            group_size=group_size,
            filter=self._filter(query_filter),
            params=search_params,
            with_payload=with_payload,
            with_vector=with_vector,
            score_threshold=score_threshold,
            with_lookup=with_lookup,
            shard_key=shard_key,
        )
        return self._unwrap(response, "Search point groups returned empty")

    def recommend(
        self,
        collection_name: str,
        positive: Optional[Sequence[Any]] = None,
        negative: Optional[Sequence[Any]] = None,
        strategy: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
        query_filter: Optional[FilterLike] = None,
        search_params: Optional[Dict[str, Any]] = None,
        with_payload: Any = True,
        with_vector: Any = False,
        score_threshold: Optional[float] = None,
        using: Optional[str] = None,
        lookup_from: Optional[Dict[str, Any]] = None,
        shard_key: Any = None,
        consistency: Any = None,
        timeout: Optional[int] = None,
    ) -> List[ScoredPoint]:
        """Find points similar to the positive examples and unlike the negative ones.

        Examples are point ids or raw vectors. Defaults match search():
        ``limit=10``, ``offset=0``, ``with_payload=True``, ``with_vector=False``.

        Returns:
            List of ScoredPoint, best first.
        """
        validate_collection_name(collection_name)
        response = self.api("points").recommend_points(
            collection_name=collection_name,
            consistency=consistency,
            timeout=timeout,
            positive=list(positive) if positive is not None else None,
            negative=list(negative) if negative is not None else None,
            strategy=strategy,
            limit=limit,
            offset=offset,
            filter=self._filter(query_filter),
            params=search_params,
            with_payload=with_payload,
            with_vector=with_vector,
            score_threshold=score_threshold,
            using=using,
            lookup_from=lookup_from,
            shard_key=shard_key,
        )
        result = self._unwrap(response, "Recommend points API returned empty")
        return [ScoredPoint.from_dict(point) for point in result]

    def recommend_batch(
        self,
        collection_name: str,
        searches: Sequence[Dict[str, Any]],
        consistency: Any = None,
        timeout: Optional[int] = None,
    ) -> List[List[ScoredPoint]]:
        """Run several recommend requests in one call."""
        response = self.api("points").recommend_batch_points(
            collection_name=collection_name,
            consistency=consistency,
            timeout=timeout,
            searches=list(searches),
        )
        result = self._unwrap(response, "Recommend batch API returned empty")
        return [[ScoredPoint.from_dict(point) for point in batch] for batch in result]

    def recommend_groups(
        self,
        collection_name: str,
        group_by: str,
        positive: Optional[Sequence[Any]] = None,
        negative: Optional[Sequence[Any]] = None,
        strategy: Optional[str] = None,
        limit: int = 10,
        group_size: Optional[int] = None,
        query_filter: Optional[FilterLike] = None,
        search_params: Optional[Dict[str, Any]] = None,
        with_payload: Any = True,
        with_vector: Any = False,
        score_threshold: Optional[float] = None,
        using: Optional[str] = None,
        lookup_from: Optional[Dict[str, Any]] = None,
        with_lookup: Any = None,
        shard_key: Any = None,
        consistency: Any = None,
        timeout: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Recommend points grouped by a payload field."""
        response = self.api("points").recommend_point_groups(
            collection_name=collection_name,
            consistency=consistency,
            timeout=timeout,
            group_by=group_by,
            positive=list(positive) if positive is not None else None,
            negative=list(negative) if negative is not None else None,
            strategy=strategy,
            limit=limit,
            group_size=group_size,
            filter=self._filter(query_filter),
            params=search_params,
            with_payload=with_payload,
            with_vector=with_vector,
            score_threshold=score_threshold,
            using=using,
            lookup_from=lookup_from,
            with_lookup=with_lookup,
            shard_key=shard_key,
        )
        return self._unwrap(response, "Recommend point groups API returned empty")

    def discover(
        self,
        collection_name: str,
        target: Any = None,
        context: Optional[Sequence[Dict[str, Any]]] = None,
        limit: int = 10,
        offset: Optional[int] = None,
        query_filter: Optional[FilterLike] = None,
        search_params: Optional[Dict[str, Any]] = None,
        with_payload: Any = None,
        with_vector: Any = None,
        using: Optional[str] = None,
        lookup_from: Optional[Dict[str, Any]] = None,
        shard_key: Any = None,
        consistency: Any = None,
        timeout: Optional[int] = None,
    ) -> List[ScoredPoint]:
        """Find points closest to a target, constrained by context pairs."""
        response = self.api("points").discover_points(
            collection_name=collection_name,
            consistency=consistency,
            timeout=timeout,
            target=target,
            context=list(context) if context is not None else None,
            limit=limit,
            offset=offset,
            filter=self._filter(query_filter),
            params=search_params,
            with_payload=with_payload,
            with_vector=with_vector,
            using=using,
            lookup_from=lookup_from,
            shard_key=shard_key,
        )
        result = self._unwrap(response, "Discover points returned empty")
        return [ScoredPoint.from_dict(point) for point in result]

    def discover_batch(
        self,
        collection_name: str,
        searches: Sequence[Dict[str, Any]],
        consistency: Any = None,
        timeout: Optional[int] = None,
    ) -> List[List[ScoredPoint]]:
        response = self.api("points").discover_batch_points(
            collection_name=collection_name,
            consistency=consistency,
            timeout=timeout,
            searches=list(searches),
        )
        result = self._unwrap(response, "Discover batch points returned empty")
        return [[ScoredPoint.from_dict(point) for point in batch] for batch in result]

    def query(
        self,
        collection_name: str,
        query: Any = None,
        prefetch: Any = None,
        using: Optional[str] = None,
        query_filter: Optional[FilterLike] = None,
        search_params: Optional[Dict[str, Any]] = None,
        score_threshold: Optional[float] = None,
        limit: int = 10,
        offset: Optional[int] = None,
        with_payload: Any = None,
        with_vector: Any = None,
        lookup_from: Optional[Dict[str, Any]] = None,
        shard_key: Any = None,
        consistency: Any = None,
        timeout: Optional[int] = None,
    ) -> List[ScoredPoint]:
        """Universal query: nearest neighbours, recommendations, fusion and more.

        Args:
            collection_name: Collection to query.
            query: Vector, point id, or query object. Without a query and
                without prefetches, points are returned ordered by id.
            prefetch: Sub-requests whose results feed the main query.
            using: Name of the vector to query with.
            query_filter: Only consider points matching this filter.
            search_params: Additional search params.
            score_threshold: Minimal score of returned results.
            limit: Max number of points to return (default: 10).
            offset: Skip this many points.
            with_payload: Payload selector; the server omits payload by
                default.
            with_vector: Vector selector; the server omits vectors by default.
            lookup_from: Collection used to resolve point ids in ``query``.
            shard_key: Only query these shards.
            consistency: Read consistency.
            timeout: Server-side timeout in seconds.

        Returns:
            List of ScoredPoint.
        """
        validate_collection_name(collection_name)
        response = self.api("points").query_points(
            collection_name=collection_name,
            consistency=consistency,
            timeout=timeout,
            query=query,
            prefetch=prefetch,
            using=using,
            filter=self._filter(query_filter),
            params=search_params,
            score_threshold=score_threshold,
            limit=limit,
            offset=offset,
            with_payload=with_payload,
            with_vector=with_vector,
            lookup_from=lookup_from,
            shard_key=shard_key,
        )
        result = self._unwrap(response, "Query points returned empty")
        return [ScoredPoint.from_dict(point) for point in result.get("points", [])]

    def query_batch(
        self,
        collection_name: str,
        searches: Sequence[Dict[str, Any]],
        consistency: Any = None,
        timeout: Optional[int] = None,
    ) -> List[List[ScoredPoint]]:
        response = self.api("points").query_batch_points(
            collection_name=collection_name,
            consistency=consistency,
            timeout=timeout,
            searches=list(searches),
        )
        result = self._unwrap(response, "Query points returned empty")
        return [
            [ScoredPoint.from_dict(point) for point in batch.get("points", [])]
            for batch in result
        ]

    def query_groups(
        self,
        collection_name: str,
        group_by: str,
        query: Any = None,
        prefetch: Any = None,
        using: Optional[str] = None,
        query_filter: Optional[FilterLike] = None,
        search_params: Optional[Dict[str, Any]] = None,
        score_threshold: Optional[float] = None,
        limit: int = 10,
        group_size: Optional[int] = None,
        with_payload: Any = None,
        with_vector: Any = None,
        lookup_from: Optional[Dict[str, Any]] = None,
        with_lookup: Any = None,
        shard_key: Any = None,
        consistency: Any = None,
        timeout: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Universal query with results grouped by a payload field."""
        response = self.api("points").query_points_groups(
            collection_name=collection_name,
            consistency=consistency,
            timeout=timeout,
            group_by=group_by,
            query=query,
            prefetch=prefetch,
            using=using,
            filter=self._filter(query_filter),
            params=search_params,
            score_threshold=score_threshold,
            limit=limit,
            group_size=group_size,
            with_payload=with_payload,
            with_vector=with_vector,
            lookup_from=lookup_from,
            with_lookup=with_lookup,
            shard_key=shard_key,
        )
        return self._unwrap(response, "Query groups returned empty")

    def facet(
        self,
        collection_name: str,
        key: str,
        facet_filter: Optional[FilterLike] = None,
        limit: Optional[int] = None,
        exact: Optional[bool] = None,
        shard_key: Any = None,
        consistency: Any = None,
        timeout: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Count points per distinct value of a payload key."""
        response = self.api("points").facet(
            collection_name=collection_name,
            consistency=consistency,
            timeout=timeout,
            key=key,
            filter=self._filter(facet_filter),
            limit=limit,
            exact=exact,
            shard_key=shard_key,
        )
        return self._unwrap(response, "Facet returned empty")

    def search_matrix_pairs(
        self,
        collection_name: str,
        sample: Optional[int] = None,
        limit: Optional[int] = None,
        query_filter: Optional[FilterLike] = None,
        using: Optional[str] = None,
        shard_key: Any = None,
        consistency: Any = None,
        timeout: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Compute the distance matrix of sampled points as a list of pairs.

        Args:
            collection_name: Collection to sample from.
            sample: Number of points to sample.
            limit: Number of nearest neighbours kept per sampled point.
            query_filter: Only sample points matching this filter.
            using: Named vector to compare.
            shard_key: Only sample from these shards.
            consistency: Read consistency.
            timeout: Server-side timeout in seconds.

        Returns:
            Dictionary with a ``pairs`` list of ``{a, b, score}`` entries.
        """
        response = self.api("points").search_matrix_pairs(
            collection_name=collection_name,
            consistency=consistency,
            timeout=timeout,
            sample=sample,
            limit=limit,
            filter=self._filter(query_filter),
            using=using,
            shard_key=shard_key,
        )
        return self._unwrap(response, "Search points matrix pairs returned empty")

    def search_matrix_offsets(
        self,
        collection_name: str,
        sample: Optional[int] = None,
        limit: Optional[int] = None,
        query_filter: Optional[FilterLike] = None,
        using: Optional[str] = None,
        shard_key: Any = None,
        consistency: Any = None,
        timeout: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Same as search_matrix_pairs(), in compact offsets form.

        The result holds ``ids`` plus parallel ``offsets_row``,
        ``offsets_col`` and ``scores`` lists indexing into ``ids``.
        """
        response = self.api("points").search_matrix_offsets(
            collection_name=collection_name,
            consistency=consistency,
            timeout=timeout,
            sample=sample,
            limit=limit,
            filter=self._filter(query_filter),
            using=using,
            shard_key=shard_key,
        )
        return self._unwrap(response, "Search points matrix offsets returned empty")

    # Point Methods

    def scroll(
        self,
        collection_name: str,
        scroll_filter: Optional[FilterLike] = None,
        limit: int = 10,
        offset: Optional[PointId] = None,
        with_payload: Any = True,
        with_vector: Any = False,
        order_by: Any = None,
        shard_key: Any = None,
        consistency: Any = None,
        timeout: Optional[int] = None,
    ) -> ScrollResult:
        """Iterate over all points matching a filter, one page at a time.

        Args:
            collection_name: Collection to scroll.
            scroll_filter: Only return points matching this filter.
            limit: Page size (default: 10).
            offset: Id of the first point to return; pass
                ``next_page_offset`` of the previous page to continue.
            with_payload: Payload selector (default: True).
            with_vector: Vector selector (default: False).
            order_by: Order points by a payload key instead of by id.
            shard_key: Only scroll these shards.
            consistency: Read consistency.
            timeout: Server-side timeout in seconds.

        Returns:
            ScrollResult with the page and the next offset, None at the end.
        """
        validate_collection_name(collection_name)
        response = self.api("points").scroll_points(
            collection_name=collection_name,
            consistency=consistency,
            timeout=timeout,
            filter=self._filter(scroll_filter),
            limit=limit,
            offset=offset,
            with_payload=with_payload,
            with_vector=with_vector,
            order_by=order_by,
            shard_key=shard_key,
        )
        return ScrollResult.from_dict(
            self._unwrap(response, "Scroll points API returned empty")
        )

    def count(
        self,
        collection_name: str,
        count_filter: Optional[FilterLike] = None,
        exact: bool = True,
        shard_key: Any = None,
        timeout: Optional[int] = None,
    ) -> int:
        """Count points in collection.

        Args:
            collection_name: Name of the collection.
            count_filter: Filter conditions for counting.
            exact: Whether to return exact count (default: True).
            shard_key: Only count in these shards.
            timeout: Server-side timeout in seconds.

        Returns:
            Number of points matching the filter.
        """
        validate_collection_name(collection_name)
        response = self.api("points").count_points(
            collection_name=collection_name,
            timeout=timeout,
            filter=self._filter(count_filter),
            exact=exact,
            shard_key=shard_key,
        )
        return CountResult.from_dict(self._unwrap(response, "Count points returned empty")).count

    def retrieve(
        self,
        collection_name: str,
        ids: Sequence[PointId],
        with_payload: Any = True,
        with_vector: Any = False,
        shard_key: Any = None,
        consistency: Any = None,
        timeout: Optional[int] = None,
    ) -> List[Record]:
        """Retrieve points by IDs.

        Args:
            collection_name: Name of the collection.
            ids: List of point IDs to retrieve.
            with_payload: Include payload in results (default: True).
            with_vector: Include vectors in results (default: False).
            shard_key: Only look in these shards.
            consistency: Read consistency.
            timeout: Server-side timeout in seconds.

        Returns:
            List of retrieved points. Missing ids are skipped.
        """
        validate_collection_name(collection_name)
        response = self.api("points").get_points(
            collection_name=collection_name,
            consistency=consistency,
            timeout=timeout,
            ids=list(ids),
            with_payload=with_payload,
            with_vector=with_vector,
            shard_key=shard_key,
        )
        result = self._unwrap(response, "Retrieve API returned empty")
        return [Record.from_dict(point) for point in result]

    def upsert(
        self,
        collection_name: str,
        points: Union[Sequence[Union[PointStruct, Dict[str, Any]]], Dict[str, Any]],
        wait: bool = True,
        ordering: Optional[str] = None,
        shard_key: Any = None,
    ) -> UpdateResult:
        """Insert or update points in a collection.

        Args:
            collection_name: Name of the target collection.
            points: PointStruct objects or point dictionaries, or a batch in
                columnar form ``{"ids": [...], "vectors": [...], ...}``.
            wait: Wait until the change is applied (default: True).
            ordering: Write ordering: ``weak``, ``medium`` or ``strong``.
            shard_key: Shard to write to.

        Returns:
            UpdateResult of the operation.
        """
        validate_collection_name(collection_name)
        body: Dict[str, Any] = {}
        if isinstance(points, dict):
            body["batch"] = points
        else:
            body["points"] = [
                point.to_dict() if isinstance(point, PointStruct) else point
                for point in points
            ]

        response = self.api("points").upsert_points(
            collection_name=collection_name,
            wait=wait,
            ordering=ordering,
            shard_key=shard_key,
            **body,
        )
        return UpdateResult.from_dict(self._unwrap(response, "Upsert returned empty"))

    def delete(
        self,
        collection_name: str,
        points_selector: Union[Sequence[PointId], FilterLike],
        wait: bool = True,
        ordering: Optional[str] = None,
        shard_key: Any = None,
    ) -> UpdateResult:
        """Delete points from a collection.

        Args:
            collection_name: Name of the collection.
            points_selector: List of point IDs, a Filter, or a selector dict
                with a ``points`` or ``filter`` key.
            wait: Wait until the change is applied (default: True).
            ordering: Write ordering.
            shard_key: Shard to delete from.

        Returns:
            UpdateResult of the operation.
        """
        validate_collection_name(collection_name)
        response = self.api("points").delete_points(
            collection_name=collection_name,
            wait=wait,
            ordering=ordering,
            shard_key=shard_key,
            **self._points_selector(points_selector),
        )
        return UpdateResult.from_dict(self._unwrap(response, "Delete points returned empty"))

    def _points_selector(
        self, selector: Union[Sequence[PointId], FilterLike]
    ) -> Dict[str, Any]:
        if isinstance(selector, Filter):
            return {"filter": selector.to_dict()}
        if isinstance(selector, dict):
            if "points" in selector or "filter" in selector:
                return dict(selector)
            return {"filter": selector}
        return {"points": list(selector)}

    def update_vectors(
        self,
        collection_name: str,
        points: Sequence[Dict[str, Any]],
        wait: bool = True,
        ordering: Optional[str] = None,
        shard_key: Any = None,
    ) -> UpdateResult:
        """Update vectors of existing points, keeping other vectors and payload."""
        response = self.api("points").update_vectors(
            collection_name=collection_name,
            wait=wait,
            ordering=ordering,
            points=list(points),
            shard_key=shard_key,
        )
        return UpdateResult.from_dict(self._unwrap(response, "Update vectors returned empty"))

    def delete_vectors(
        self,
        collection_name: str,
        vectors: Sequence[str],
        points: Optional[Sequence[PointId]] = None,
        query_filter: Optional[FilterLike] = None,
        wait: bool = True,
        ordering: Optional[str] = None,
        shard_key: Any = None,
    ) -> UpdateResult:
        """Delete named vectors from the selected points."""
        response = self.api("points").delete_vectors(
            collection_name=collection_name,
            wait=wait,
            ordering=ordering,
            vector=list(vectors),
            points=list(points) if points is not None else None,
            filter=self._filter(query_filter),
            shard_key=shard_key,
        )
        return UpdateResult.from_dict(self._unwrap(response, "Delete vectors returned empty"))

    def set_payload(
        self,
        collection_name: str,
        payload: Dict[str, Any],
        points: Optional[Sequence[PointId]] = None,
        query_filter: Optional[FilterLike] = None,
        key: Optional[str] = None,
        wait: bool = True,
        ordering: Optional[str] = None,
        shard_key: Any = None,
    ) -> UpdateResult:
        """Set payload values on the selected points, keeping other keys.

        Points are selected by id with ``points`` or by ``query_filter``.
        ``key`` assigns the payload under a nested path instead of the root.
        """
        response = self.api("points").set_payload(
            collection_name=collection_name,
            wait=wait,
            ordering=ordering,
            payload=payload,
            points=list(points) if points is not None else None,
            filter=self._filter(query_filter),
            key=key,
            shard_key=shard_key,
        )
        return UpdateResult.from_dict(self._unwrap(response, "Set payload returned empty"))

    def overwrite_payload(
        self,
        collection_name: str,
        payload: Dict[str, Any],
        points: Optional[Sequence[PointId]] = None,
        query_filter: Optional[FilterLike] = None,
        wait: bool = True,
        ordering: Optional[str] = None,
        shard_key: Any = None,
    ) -> UpdateResult:
        """Replace the whole payload of the selected points."""
        response = self.api("points").overwrite_payload(
            collection_name=collection_name,
            wait=wait,
            ordering=ordering,
            payload=payload,
            points=list(points) if points is not None else None,
            filter=self._filter(query_filter),
            shard_key=shard_key,
        )
        return UpdateResult.from_dict(
            self._unwrap(response, "Overwrite payload returned empty")
        )

    def delete_payload(
        self,
        collection_name: str,
        keys: Sequence[str],
        points: Optional[Sequence[PointId]] = None,
        query_filter: Optional[FilterLike] = None,
        wait: bool = True,
        ordering: Optional[str] = None,
        shard_key: Any = None,
    ) -> UpdateResult:
        """Remove payload keys from the selected points."""
        response = self.api("points").delete_payload(
            collection_name=collection_name,
            wait=wait,
            ordering=ordering,
            keys=list(keys),
            points=list(points) if points is not None else None,
            filter=self._filter(query_filter),
            shard_key=shard_key,
        )
        return UpdateResult.from_dict(self._unwrap(response, "Delete payload returned empty"))

    def clear_payload(
        self,
        collection_name: str,
        points_selector: Union[Sequence[PointId], FilterLike],
        wait: bool = True,
        ordering: Optional[str] = None,
    ) -> UpdateResult:
        """Remove the entire payload of the selected points."""
        response = self.api("points").clear_payload(
            collection_name=collection_name,
            wait=wait,
            ordering=ordering,
            **self._points_selector(points_selector),
        )
        return UpdateResult.from_dict(self._unwrap(response, "Clear payload returned empty"))

    def batch_update(
        self,
        collection_name: str,
        operations: Sequence[Dict[str, Any]],
        wait: bool = True,
        ordering: Optional[str] = None,
    ) -> List[UpdateResult]:
        """Apply a sequence of point, vector and payload operations in one call."""
        response = self.api("points").batch_update(
            collection_name=collection_name,
            wait=wait,
            ordering=ordering,
            operations=list(operations),
        )
        result = self._unwrap(response, "Batch update returned empty")
        return [UpdateResult.from_dict(item) for item in result]

    def upload_points(self, collection_name: str, points: Any, **kwargs) -> None:
        """Not provided: split the points into batches and call upsert()."""
        raise ClientNotImplementedError(
            "upload_points is not implemented, use upsert() with batches instead"
        )

    def upload_collection(self, collection_name: str, vectors: Any, **kwargs) -> None:
        """Not provided: split the vectors into batches and call upsert()."""
        raise ClientNotImplementedError(
            "upload_collection is not implemented, use upsert() with batches instead"
        )

    # Collection Management Methods

    def get_collections(self) -> List[CollectionDescription]:
        """List all collections."""
        response = self.api("collections").get_collections()
        result = self._unwrap(response, "Get collections returned empty")
        return [CollectionDescription.from_dict(item) for item in result.get("collections", [])]

    def get_collection(self, collection_name: str) -> Dict[str, Any]:
        """Get detailed information about a collection."""
        validate_collection_name(collection_name)
        response = self.api("collections").get_collection(collection_name=collection_name)
        return self._unwrap(response, "Get collection returned empty")

    def collection_exists(self, collection_name: str) -> bool:
        """Check if a collection exists."""
        validate_collection_name(collection_name)
        response = self.api("collections").collection_exists(collection_name=collection_name)
        return bool(self._unwrap(response, "Collection exists returned empty")["exists"])

    def create_collection(
        self,
        collection_name: str,
        vectors_config: Union[VectorParams, Dict[str, Any], None] = None,
        sparse_vectors_config: Optional[Dict[str, Any]] = None,
        shard_number: Optional[int] = None,
        sharding_method: Optional[str] = None,
        replication_factor: Optional[int] = None,
        write_consistency_factor: Optional[int] = None,
        on_disk_payload: Optional[bool] = None,
        hnsw_config: Optional[Dict[str, Any]] = None,
        optimizers_config: Optional[Dict[str, Any]] = None,
        wal_config: Optional[Dict[str, Any]] = None,
        quantization_config: Optional[Dict[str, Any]] = None,
        init_from: Optional[Dict[str, Any]] = None,
        strict_mode_config: Optional[Dict[str, Any]] = None,
        timeout: Optional[int] = None,
    ) -> bool:
        """Create a new collection.

        Args:
            collection_name: Name of the collection to create.
            vectors_config: VectorParams for a single unnamed vector, or a
                dict mapping vector names to VectorParams (or raw dicts).
            sparse_vectors_config: Sparse vector configuration.
            shard_number: Number of shards.
            sharding_method: ``auto`` or ``custom``.
            replication_factor: Replicas per shard.
            write_consistency_factor: Replicas that must confirm a write.
            on_disk_payload: Store payload on disk.
            hnsw_config: HNSW index parameters.
            optimizers_config: Optimizer parameters.
            wal_config: Write-ahead log parameters.
            quantization_config: Quantization parameters.
            init_from: Copy data from another collection.
            strict_mode_config: Strict mode parameters.
            timeout: Server-side timeout in seconds.

        Returns:
            True if the collection was created.
        """
        validate_collection_name(collection_name)
        response = self.api("collections").create_collection(
            collection_name=collection_name,
            timeout=timeout,
            vectors=self._vectors_config(vectors_config),
            sparse_vectors=sparse_vectors_config,
            shard_number=shard_number,
            sharding_method=sharding_method,
            replication_factor=replication_factor,
            write_consistency_factor=write_consistency_factor,
            on_disk_payload=on_disk_payload,
            hnsw_config=hnsw_config,
            optimizers_config=optimizers_config,
            wal_config=wal_config,
            quantization_config=quantization_config,
            init_from=init_from,
            strict_mode_config=strict_mode_config,
        )
        return self._unwrap(response, "Create collection returned empty")

    @staticmethod
    def _vectors_config(
        vectors_config: Union[VectorParams, Dict[str, Any], None]
    ) -> Optional[Dict[str, Any]]:
        if isinstance(vectors_config, VectorParams):
            return vectors_config.to_dict()
        if isinstance(vectors_config, dict):
            return {
                name: params.to_dict() if isinstance(params, VectorParams) else params
                for name, params in vectors_config.items()
            }
        return vectors_config

    def recreate_collection(
        self, collection_name: str, vectors_config: Any = None, timeout: Optional[int] = None, **kwargs
    ) -> bool:
        """Delete a collection if it exists, then create it again.

        The boolean returned by the delete is ignored, so a False result
        (nothing to delete) does not stop the create. Errors raised by the
        delete call still propagate. Accepts the same arguments as
        create_collection().

        Returns:
            The result of create_collection().
        """
        self.delete_collection(collection_name, timeout=timeout)
        return self.create_collection(
            collection_name, vectors_config=vectors_config, timeout=timeout, **kwargs
        )

    def update_collection(
        self,
        collection_name: str,
        optimizers_config: Optional[Dict[str, Any]] = None,
        collection_params: Optional[Dict[str, Any]] = None,
        vectors_config: Optional[Dict[str, Any]] = None,
        hnsw_config: Optional[Dict[str, Any]] = None,
        quantization_config: Any = None,
        sparse_vectors_config: Optional[Dict[str, Any]] = None,
        strict_mode_config: Optional[Dict[str, Any]] = None,
        timeout: Optional[int] = None,
    ) -> bool:
        """Update parameters of an existing collection."""
        response = self.api("collections").update_collection(
            collection_name=collection_name,
            timeout=timeout,
            optimizers_config=optimizers_config,
            params=collection_params,
            vectors=vectors_config,
            hnsw_config=hnsw_config,
            quantization_config=quantization_config,
            sparse_vectors=sparse_vectors_config,
            strict_mode_config=strict_mode_config,
        )
        return self._unwrap(response, "Update collection returned empty")

    def delete_collection(self, collection_name: str, timeout: Optional[int] = None) -> bool:
        """Delete a collection and all its data."""
        validate_collection_name(collection_name)
        response = self.api("collections").delete_collection(
            collection_name=collection_name, timeout=timeout
        )
        return self._unwrap(response, "Delete collection returned empty")

    def update_collection_aliases(
        self, change_aliases_operations: Sequence[Dict[str, Any]], timeout: Optional[int] = None
    ) -> bool:
        """Create, delete and rename aliases in one atomic operation."""
        response = self.api("collections").update_aliases(
            timeout=timeout, actions=list(change_aliases_operations)
        )
        return self._unwrap(response, "Update aliases returned empty")

    def get_collection_aliases(self, collection_name: str) -> List[Dict[str, Any]]:
        response = self.api("collections").get_collection_aliases(
            collection_name=collection_name
        )
        return self._unwrap(response, "Get collection aliases returned empty")["aliases"]

    def get_aliases(self) -> List[Dict[str, Any]]:
        response = self.api("collections").get_collections_aliases()
        return self._unwrap(response, "Get aliases returned empty")["aliases"]

    def create_payload_index(
        self,
        collection_name: str,
        field_name: str,
        field_schema: Any = None,
        wait: Optional[bool] = None,
        ordering: Optional[str] = None,
    ) -> UpdateResult:
        """Index a payload field so filtered searches on it run faster."""
        response = self.api("collections").create_field_index(
            collection_name=collection_name,
            wait=wait,
            ordering=ordering,
            field_name=field_name,
            field_schema=field_schema,
        )
        return UpdateResult.from_dict(
            self._unwrap(response, "Create field index returned empty")
        )

    def delete_payload_index(
        self,
        collection_name: str,
        field_name: str,
        wait: bool = True,
        ordering: Optional[str] = None,
    ) -> UpdateResult:
        response = self.api("collections").delete_field_index(
            collection_name=collection_name,
            field_name=field_name,
            wait=wait,
            ordering=ordering,
        )
        return UpdateResult.from_dict(
            self._unwrap(response, "Delete field index returned empty")
        )

    # Cluster Methods

    def collection_cluster_info(self, collection_name: str) -> Dict[str, Any]:
        response = self.api("cluster").collection_cluster_info(collection_name=collection_name)
        return self._unwrap(response, "Collection cluster info returned empty")

    def update_collection_cluster(
        self,
        collection_name: str,
        operation: Dict[str, Any],
        timeout: Optional[int] = None,
    ) -> bool:
        """Move, replicate or drop shard replicas.

        ``operation`` is a single cluster operation such as
        ``{"move_shard": {"shard_id": 0, "from_peer_id": 1, "to_peer_id": 2}}``.
        """
        response = self.api("cluster").update_collection_cluster(
            collection_name=collection_name, timeout=timeout, **operation
        )
        return self._unwrap(response, "Update collection cluster returned empty")

    # Snapshot Methods

    def list_snapshots(self, collection_name: str) -> List[SnapshotDescription]:
        response = self.api("snapshots").list_snapshots(collection_name=collection_name)
        result = self._unwrap(response, "List snapshots API returned empty")
        return [SnapshotDescription.from_dict(item) for item in result]

    def create_snapshot(
        self, collection_name: str, wait: Optional[bool] = None
    ) -> Optional[SnapshotDescription]:
        """Create a snapshot of a collection.

        Returns:
            The snapshot, or None when ``wait=False`` and the server has not
            produced it yet.
        """
        response = self.api("snapshots").create_snapshot(
            collection_name=collection_name, wait=wait
        )
        result = response.get("result") if isinstance(response, dict) else None
        if not isinstance(result, dict):
            return None
        return SnapshotDescription.from_dict(result)

    def delete_snapshot(
        self, collection_name: str, snapshot_name: str, wait: Optional[bool] = None
    ) -> bool:
        response = self.api("snapshots").delete_snapshot(
            collection_name=collection_name, snapshot_name=snapshot_name, wait=wait
        )
        return self._unwrap(response, "Delete snapshot API returned empty")

    def list_full_snapshots(self) -> List[SnapshotDescription]:
        response = self.api("snapshots").list_full_snapshots()
        result = self._unwrap(response, "List full snapshots API returned empty")
        return [SnapshotDescription.from_dict(item) for item in result]

    def create_full_snapshot(self, wait: Optional[bool] = None) -> SnapshotDescription:
        """Snapshot the whole storage, all collections included."""
        response = self.api("snapshots").create_full_snapshot(wait=wait)
        return SnapshotDescription.from_dict(
            self._unwrap(response, "Create full snapshot API returned empty")
        )

    def delete_full_snapshot(self, snapshot_name: str, wait: Optional[bool] = None) -> bool:
        response = self.api("snapshots").delete_full_snapshot(
            snapshot_name=snapshot_name, wait=wait
        )
        return self._unwrap(response, "Delete full snapshot API returned empty")

    def recover_snapshot(
        self,
        collection_name: str,
        location: str,
        priority: Optional[str] = None,
        checksum: Optional[str] = None,
        wait: Optional[bool] = None,
    ) -> bool:
        """Recover a collection from a snapshot URL or file path.

        Args:
            collection_name: Collection to recover into.
            location: ``http(s)://`` or ``file://`` location of the snapshot.
            priority: ``snapshot``, ``replica`` or ``no_sync``.
            checksum: Expected SHA256 checksum of the snapshot file.
            wait: Wait for recovery to finish.

        Returns:
            True if recovery succeeded.
        """
        response = self.api("snapshots").recover_from_snapshot(
            collection_name=collection_name,
            wait=wait,
            location=location,
            priority=priority,
            checksum=checksum,
        )
        return self._unwrap(response, "Recover from snapshot API returned empty")

    def list_shard_snapshots(
        self, collection_name: str, shard_id: int
    ) -> List[SnapshotDescription]:
        response = self.api("shards").list_shard_snapshots(
            collection_name=collection_name, shard_id=shard_id
        )
        result = self._unwrap(response, "List shard snapshots returned empty")
        return [SnapshotDescription.from_dict(item) for item in result]

    def create_shard_snapshot(
        self, collection_name: str, shard_id: int, wait: bool = True
    ) -> SnapshotDescription:
        response = self.api("shards").create_shard_snapshot(
            collection_name=collection_name, shard_id=shard_id, wait=wait
        )
        return SnapshotDescription.from_dict(
            self._unwrap(response, "Create shard snapshot returned empty")
        )

    def delete_shard_snapshot(
        self, collection_name: str, shard_id: int, snapshot_name: str, wait: bool = True
    ) -> bool:
        response = self.api("shards").delete_shard_snapshot(
            collection_name=collection_name,
            shard_id=shard_id,
            snapshot_name=snapshot_name,
            wait=wait,
        )
        return self._unwrap(response, "Delete shard snapshot returned empty")

    def recover_shard_snapshot(
        self,
        collection_name: str,
        shard_id: int,
        location: str,
        priority: Optional[str] = None,
        checksum: Optional[str] = None,
        wait: bool = True,
    ) -> bool:
        response = self.api("shards").recover_shard_from_snapshot(
            collection_name=collection_name,
            shard_id=shard_id,
            wait=wait,
            location=location,
            priority=priority,
            checksum=checksum,
        )
        return self._unwrap(response, "Recover shard from snapshot returned empty")

    # Shard Key Methods

    def create_shard_key(
        self,
        collection_name: str,
        shard_key: Union[str, int],
        shards_number: Optional[int] = None,
        replication_factor: Optional[int] = None,
        placement: Optional[Sequence[int]] = None,
        timeout: Optional[int] = None,
    ) -> bool:
        """Create a shard key for a collection with custom sharding."""
        response = self.api("shards").create_shard_key(
            collection_name=collection_name,
            timeout=timeout,
            shard_key=shard_key,
            shards_number=shards_number,
            replication_factor=replication_factor,
            placement=list(placement) if placement is not None else None,
        )
        return self._unwrap(response, "Create shard key returned empty")

    def delete_shard_key(
        self,
        collection_name: str,
        shard_key: Union[str, int],
        timeout: Optional[int] = None,
    ) -> bool:
        response = self.api("shards").delete_shard_key(
            collection_name=collection_name, timeout=timeout, shard_key=shard_key
        )
        return self._unwrap(response, "Delete shard key returned empty")

    # Service Methods

    def lock_storage(self, reason: str) -> Dict[str, Any]:
        """Forbid writes on the server; ``reason`` is returned to writers."""
        response = self.api("service").post_locks(write=True, error_message=reason)
        return self._unwrap(response, "Lock storage returned empty")

    def unlock_storage(self) -> Dict[str, Any]:
        response = self.api("service").post_locks(write=False)
        return self._unwrap(response, "Post locks returned empty")

    def get_locks(self) -> Dict[str, Any]:
        response = self.api("service").get_locks()
        return self._unwrap(response, "Get locks returned empty")

    def version_info(self) -> VersionInfo:
        """Get title, version and commit of the running server."""
        response = self.api("service").root()
        if not response:
            raise InvariantViolationError("Version Info returned empty")
        return VersionInfo.from_dict(response)

    # Utility Methods

    def close(self) -> None:
        """Close the client connection and cleanup resources."""
        if hasattr(self, "transport"):
            self.transport.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

    def __repr__(self) -> str:
        """String representation of the client."""
        masked_key = self.auth_manager.mask_api_key()
        return f"QdrantClient(url='{self.config.uri}', api_key='{masked_key}')"
