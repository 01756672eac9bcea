# elastic_ransack/query/sort.py
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

RELEVANCE = "_score"


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortField:
    """One ordering criterion of a search."""

    field: str
    direction: SortDirection = SortDirection.ASC

    def to_dict(self) -> dict[str, str]:
        return {self.field: self.direction.value}


DEFAULT_SORT: tuple[SortField, ...] = (
    SortField(RELEVANCE, SortDirection.DESC),
    SortField("id", SortDirection.DESC),
)


def _direction(token: str) -> SortDirection | None:
    try:
        return SortDirection(token.lower())
    except ValueError:
        return None


def build_sort(directive: Any) -> tuple[SortField, ...]:
    """Parse a sort directive such as ``"name desc"`` or ``"name desc id"``.

    Each field may be followed by ``asc`` or ``desc``; a field without a
    direction sorts ascending. A blank directive sorts by relevance, then id,
    both descending.
    """
    if isinstance(directive, list | tuple):
        directive = " ".join(str(d) for d in directive)
    tokens = str(directive or "").replace(",", " ").split()
    if not tokens:
        return DEFAULT_SORT

    sorts: list[SortField] = []
    i = 0
    while i < len(tokens):
        field = tokens[i]
        direction = _direction(tokens[i + 1]) if i + 1 < len(tokens) else None
        if direction is None:
            sorts.append(SortField(field))
            i += 1
        else:
            sorts.append(SortField(field, direction))
            i += 2
    return tuple(sorts)
