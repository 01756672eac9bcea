import os
import uuid

import httpx
import pytest

requires_elasticsearch = pytest.mark.skipif(
    not os.environ.get("ELASTICSEARCH_URL"),
    reason="ELASTICSEARCH_URL not set",
)

DOCUMENTS = [
    {"id": 1, "title": "Intro to Python", "status": "open", "is_featured": True, "views": 10},
    {"id": 2, "title": "Advanced Python", "status": "closed", "is_featured": False, "views": 250},
    {"id": 3, "title": "Rust for beginners", "status": "open", "is_featured": False, "views": 40},
]

MAPPING = {
    "mappings": {
        "properties": {
            "id": {"type": "integer"},
            "title": {"type": "text"},
            "status": {"type": "keyword"},
            "is_featured": {"type": "boolean"},
            "views": {"type": "integer"},
        }
    }
}


@pytest.fixture
def es_index():
    """Create a throwaway index with DOCUMENTS and delete it afterwards."""
    url = os.environ["ELASTICSEARCH_URL"].rstrip("/")
    index = f"elastic-ransack-test-{uuid.uuid4().hex[:8]}"
    with httpx.Client(base_url=url, timeout=30.0) as client:
        client.put(f"/{index}", json=MAPPING).raise_for_status()
        for doc in DOCUMENTS:
            client.put(f"/{index}/_doc/{doc['id']}", json=doc).raise_for_status()
        client.post(f"/{index}/_refresh").raise_for_status()
        yield index
        client.delete(f"/{index}")
