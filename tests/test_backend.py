import json
from datetime import date

import httpx
import pytest

from elastic_ransack.backends import Elasticsearch


def make_backend(handler, **kwargs) -> Elasticsearch:
    return Elasticsearch("http://es.test", transport=httpx.MockTransport(handler), **kwargs)


def search_response(hits, total):
    return {"took": 1, "hits": {"total": total, "hits": hits}}


class TestElasticsearchSearch:
    def test_posts_body_with_pagination(self, hits):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=search_response(hits, {"value": 42, "relation": "eq"}))

        body = {"query": {"range": {"created_at": {"gte": date(2024, 2, 1)}}}, "sort": []}
        with make_backend(handler) as backend:
            page = backend.search("articles", body, page=3, per_page=10)

        request = requests[0]
        assert request.method == "POST"
        assert request.url.path == "/articles/_search"
        sent = json.loads(request.content)
        assert sent["from"] == 20
        assert sent["size"] == 10
        assert sent["query"] == {"range": {"created_at": {"gte": "2024-02-01"}}}

        assert page.total_entries == 42
        assert page.current_page == 3
        assert page.per_page == 10
        assert [r["title"] for r in page] == ["First", "Second"]
        assert page.raw["took"] == 1

    def test_legacy_integer_total(self, hits):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=search_response(hits, 7))

        with make_backend(handler) as backend:
            assert backend.search("articles", {}).total_entries == 7

    def test_page_below_one_is_clamped(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=search_response([], 0))

        with make_backend(handler) as backend:
            page = backend.search("articles", {}, page=0, per_page=5)

        assert json.loads(requests[0].content)["from"] == 0
        assert page.current_page == 1
        assert page.empty

    def test_http_errors_propagate(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"error": "boom"})

        with make_backend(handler) as backend:
            with pytest.raises(httpx.HTTPStatusError):
                backend.search("articles", {})

    def test_requires_context_manager(self):
        backend = make_backend(lambda request: httpx.Response(200))
        with pytest.raises(RuntimeError):
            backend.search("articles", {})


class TestElasticsearchConfig:
    def test_api_key_header(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=search_response([], 0))

        with make_backend(handler, api_key="secret") as backend:
            backend.search("articles", {})

        assert requests[0].headers["Authorization"] == "ApiKey secret"

    def test_settings_from_environment(self, monkeypatch):
        monkeypatch.setenv("ELASTICSEARCH_URL", "http://from-env:9200/")
        monkeypatch.setenv("ELASTICSEARCH_API_KEY", "env-key")
        backend = Elasticsearch()
        assert backend.url == "http://from-env:9200"
        assert backend._api_key == "env-key"

    def test_default_url(self, monkeypatch):
        monkeypatch.delenv("ELASTICSEARCH_URL", raising=False)
        assert Elasticsearch().url == "http://localhost:9200"


def test_get_mapping():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/articles/_mapping"
        return httpx.Response(
            200,
            json={"articles-v2": {"mappings": {"properties": {"views": {"type": "long"}}}}},
        )

    with make_backend(handler) as backend:
        mapping = backend.get_mapping("articles")

    assert mapping == {"mappings": {"properties": {"views": {"type": "long"}}}}
