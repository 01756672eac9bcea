from datetime import datetime

import pytest

from elastic_ransack.backends.base import Backend
from elastic_ransack.config import Settings
from elastic_ransack.models import IndexModel, Page


class RecordingBackend(Backend):
    """Backend double that records every search call."""

    name = "recording"

    def __init__(self, hits: list[dict] | None = None, total: int | None = None) -> None:
        super().__init__()
        self.hits = hits or []
        self.total = len(self.hits) if total is None else total
        self.calls: list[tuple[str, dict, int, int]] = []

    def _load_from_env(self) -> str | None:
        return None

    def search(self, index: str, body: dict, page: int = 1, per_page: int = 50) -> Page:
        self.calls.append((index, body, page, per_page))
        return Page(hits=self.hits, total_entries=self.total, per_page=per_page, current_page=page)


@pytest.fixture
def settings() -> Settings:
    return Settings(locale=lambda: "de")


@pytest.fixture
def articles() -> IndexModel:
    return IndexModel(
        "articles",
        {
            "published": "boolean",
            "created_at": "date",
            "updated_at": "date",
            "views": "integer",
            "title": "text",
        },
        attribute_names={"created_at": "Created on"},
    )


@pytest.fixture
def hits() -> list[dict]:
    return [
        {"_id": "1", "_score": 2.0, "_source": {"title": "First", "created_at": "2024-01-01"}},
        {"_id": "2", "_score": 1.0, "_source": {"title": "Second", "created_at": "2024-01-02"}},
    ]


@pytest.fixture
def backend(hits) -> RecordingBackend:
    return RecordingBackend(hits, total=120)


@pytest.fixture
def fixed_parser():
    return lambda text: datetime(2001, 2, 3, 4, 5)
