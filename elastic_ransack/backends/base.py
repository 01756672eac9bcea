# elastic_ransack/backends/base.py
"""Base class for search backends."""

from abc import ABC, abstractmethod
from typing import Any

import httpx

from elastic_ransack.models import Page


class Backend(ABC):
    """Executes compiled request bodies against a search engine."""

    name: str

    def __init__(self, api_key: str | None = None, timeout: float = 30.0) -> None:
        self._api_key = api_key or self._load_from_env()
        self._timeout = timeout
        self._client: httpx.Client | None = None

    @abstractmethod
    def _load_from_env(self) -> str | None:
        """Load API key from environment variable."""
        ...

    @abstractmethod
    def search(self, index: str, body: dict[str, Any], page: int = 1, per_page: int = 50) -> Page:
        """Execute a request body and return the requested page."""
        ...

    def _make_client(self) -> httpx.Client:
        return httpx.Client(timeout=self._timeout)

    def __enter__(self) -> "Backend":
        self._client = self._make_client()
        return self

    def __exit__(self, *_: object) -> None:
        if self._client:
            self._client.close()
            self._client = None
