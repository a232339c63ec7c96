"""
Basic usage examples for the Qdrant SDK.

This example creates a collection, inserts a few points, searches them
and cleans up. It expects a Qdrant server on localhost:6333.
"""

import logging

from qdrant_sdk import QdrantClient, QdrantException
from qdrant_sdk.models import Distance, Filter, PointStruct, VectorParams


def main():
    """Demonstrate basic SDK usage."""
    logging.basicConfig(level=logging.INFO)

    # Set QDRANT_API_KEY or pass api_key=... for secured servers
    client = QdrantClient(url="http://localhost:6333", timeout=30.0)

    collection_name = "basic_example"

    try:
        print(f"Server version: {client.version_info().version}")

        # 1. Create a collection
        client.recreate_collection(
            collection_name,
            VectorParams(size=4, distance=Distance.COSINE),
        )
        print(f"✓ Collection '{collection_name}' created")

        # 2. Insert points
        points = [
            PointStruct(id=1, vector=[0.1, 0.2, 0.3, 0.4], payload={"city": "Berlin"}),
            PointStruct(id=2, vector=[0.5, 0.6, 0.7, 0.8], payload={"city": "London"}),
            PointStruct(id=3, vector=[0.9, 0.1, 0.5, 0.3], payload={"city": "Moscow"}),
        ]
        result = client.upsert(collection_name, points)
        print(f"✓ Upsert {result.status.value}")

        # 3. Search
        for hit in client.search(collection_name, [0.2, 0.1, 0.9, 0.7], limit=3):
            print(f"  {hit.id}: {hit.score:.4f} {hit.payload}")

        # 4. Search with a filter
        berlin = Filter(must=[{"key": "city", "match": {"value": "Berlin"}}])
        hits = client.search(collection_name, [0.2, 0.1, 0.9, 0.7], query_filter=berlin)
        print(f"✓ Filtered search returned {len(hits)} point(s)")

        # 5. Count and scroll
        print(f"✓ {client.count(collection_name)} points stored")
        page = client.scroll(collection_name, limit=2)
        print(f"✓ First page: {[record.id for record in page.points]}, next: {page.next_page_offset}")

    except QdrantException as e:
        print(f"✗ Error: {e}")

    finally:
        client.delete_collection(collection_name)
        client.close()


if __name__ == "__main__":
    main()
