# elastic_ransack/backends/elasticsearch.py
import json
import logging
import os
from typing import Any

import httpx

from elastic_ransack.backends.base import Backend
from elastic_ransack.models import Page
from elastic_ransack.query.values import to_json_value

logger = logging.getLogger(__name__)


class Elasticsearch(Backend):
    """Elasticsearch ``_search`` API backend."""

    name = "elasticsearch"
    DEFAULT_URL = "http://localhost:9200"

    def __init__(
        self,
        url: str | None = None,
        api_key: str | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(api_key, timeout)
        self.url = (url or os.getenv("ELASTICSEARCH_URL") or self.DEFAULT_URL).rstrip("/")
        self._transport = transport

    def _load_from_env(self) -> str | None:
        return os.getenv("ELASTICSEARCH_API_KEY")

    def _make_client(self) -> httpx.Client:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"ApiKey {self._api_key}"
        return httpx.Client(
            base_url=self.url,
            headers=headers,
            timeout=self._timeout,
            transport=self._transport,
        )

    def _require_client(self) -> httpx.Client:
        if self._client is None:
            raise RuntimeError("Backend not initialized. Use 'with backend:'")
        return self._client

    def search(self, index: str, body: dict[str, Any], page: int = 1, per_page: int = 50) -> Page:
        """Run body against index and return the requested page."""
        client = self._require_client()
        page = max(int(page), 1)
        per_page = int(per_page)

        payload = {**body, "from": per_page * (page - 1), "size": per_page}
        content = json.dumps(payload, ensure_ascii=False, default=to_json_value)
        logger.debug("Requesting: POST /%s/_search %s", index, content)

        response = client.post(f"/{index}/_search", content=content)
        response.raise_for_status()
        logger.debug("Response status: %s", response.status_code)

        data = response.json()
        hits = data.get("hits", {})
        total = hits.get("total", 0)
        if isinstance(total, dict):
            total = total.get("value", 0)
        logger.debug("Results count: %s of %s", len(hits.get("hits", [])), total)

        return Page(
            hits=hits.get("hits", []),
            total_entries=int(total),
            per_page=per_page,
            current_page=page,
            raw=data,
        )

    def get_mapping(self, index: str) -> dict[str, Any]:
        """Fetch the mapping of index (``GET /index/_mapping``)."""
        client = self._require_client()
        response = client.get(f"/{index}/_mapping")
        response.raise_for_status()
        data = response.json()
        # Response is keyed by the concrete index name, which may differ from an alias
        if index in data:
            return data[index]
        return next(iter(data.values()), {})
