# elastic_ransack/models.py
import math
from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from elastic_ransack.query.types import flatten_mapping


def humanize(name: str) -> str:
    """Turn a field name into a label, e.g. created_at -> Created at."""
    text = name.removesuffix("_id").replace("_", " ").strip()
    return text[:1].upper() + text[1:]


class Model(ABC):
    """What a search needs to know about the indexed model."""

    index: str

    @abstractmethod
    def field_types(self) -> Mapping[str, Any] | None:
        """Declared type of each field, or None when the model has no schema."""
        ...

    def human_attribute_name(self, name: str) -> str:
        return humanize(name)


class IndexModel(Model):
    """Model adapter backed by plain dicts."""

    def __init__(
        self,
        index: str,
        field_types: Mapping[str, Any] | None = None,
        attribute_names: Mapping[str, str] | None = None,
    ) -> None:
        self.index = index
        self._field_types = dict(field_types) if field_types is not None else None
        self._attribute_names = dict(attribute_names or {})

    @classmethod
    def from_mapping(
        cls,
        index: str,
        mapping: Mapping[str, Any],
        attribute_names: Mapping[str, str] | None = None,
    ) -> "IndexModel":
        """Build from an Elasticsearch index mapping."""
        return cls(index, flatten_mapping(mapping), attribute_names)

    def field_types(self) -> dict[str, Any] | None:
        return self._field_types

    def human_attribute_name(self, name: str) -> str:
        return self._attribute_names.get(name) or super().human_attribute_name(name)


@dataclass
class Page:
    """One page of search results plus pagination metadata."""

    hits: list[dict[str, Any]]
    total_entries: int
    per_page: int
    current_page: int = 1
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def records(self) -> list[dict[str, Any]]:
        """Hit sources, each with its ``_id``."""
        return [{"_id": hit.get("_id"), **hit.get("_source", {})} for hit in self.hits]

    @property
    def total_pages(self) -> int:
        """Number of pages; an empty result still has one (empty) page."""
        if self.per_page <= 0:
            return 0
        return max(1, math.ceil(self.total_entries / self.per_page))

    @property
    def offset(self) -> int:
        return (self.current_page - 1) * self.per_page

    @property
    def previous_page(self) -> int | None:
        return self.current_page - 1 if self.current_page > 1 else None

    @property
    def next_page(self) -> int | None:
        return self.current_page + 1 if self.current_page < self.total_pages else None

    @property
    def out_of_bounds(self) -> bool:
        return self.current_page > self.total_pages

    @property
    def empty(self) -> bool:
        return not self.hits

    def with_hits(self) -> Iterator[tuple[dict[str, Any], dict[str, Any]]]:
        """Yield (record, raw hit) pairs."""
        return zip(self.records, self.hits, strict=True)

    def __iter__(self) -> Iterator[dict[str, Any]]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.hits)

    def __getitem__(self, index: int) -> dict[str, Any]:
        return self.records[index]
