# elastic_ransack/query/predicates.py
"""Predicate registry: key suffixes and the clauses they compile to."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from elastic_ransack.query import clauses
from elastic_ransack.query.clauses import Clause

TRUE_VALUES = frozenset({"1", "t", "true", "y", "yes", "on"})


def is_truthy(value: Any) -> bool:
    """Interpret a flag-like parameter value (``"1"``, ``"true"``, ``True``...)."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    return str(value).strip().lower() in TRUE_VALUES


@dataclass(frozen=True)
class Predicate:
    """A named comparison recognised by its ``_<name>`` key suffix."""

    name: str
    build: Callable[[str, Any], Clause]

    @property
    def suffix(self) -> str:
        return f"_{self.name}"

    def match(self, key: str) -> str | None:
        """Return the field part of key if it ends with this predicate's suffix."""
        if not key.endswith(self.suffix):
            return None
        field = key[: -len(self.suffix)]
        return field or None


def _present(field: str, value: Any) -> Clause:
    clause = clauses.exists(field)
    return clause if is_truthy(value) else clauses.none_of([clause])


def _null(field: str, value: Any) -> Clause:
    clause = clauses.exists(field)
    return clauses.none_of([clause]) if is_truthy(value) else clause


# Order matters: a key is matched by the first predicate whose suffix it ends
# with, so "x_not_eq" must reach not_eq before eq and "x_gteq" gteq before gt.
PREDICATES: tuple[Predicate, ...] = (
    Predicate("not_eq", lambda f, v: clauses.none_of([clauses.term(f, v)])),
    Predicate("eq", clauses.term),
    Predicate("not_in", lambda f, v: clauses.none_of([clauses.terms(f, v)])),
    Predicate("in", clauses.terms),
    Predicate("gteq", lambda f, v: clauses.range_(f, gte=v)),
    Predicate("gt", lambda f, v: clauses.range_(f, gt=v)),
    Predicate("lteq", lambda f, v: clauses.range_(f, lte=v)),
    Predicate("lt", lambda f, v: clauses.range_(f, lt=v)),
    Predicate("not_cont", lambda f, v: clauses.none_of([clauses.contains(f, v)])),
    Predicate("cont", clauses.contains),
    Predicate("start", lambda f, v: clauses.prefix(f, str(v))),
    Predicate("end", lambda f, v: clauses.wildcard(f, f"*{clauses.wildcard_escape(str(v))}")),
    Predicate("not_null", _present),
    Predicate("null", _null),
    Predicate("present", _present),
    Predicate("blank", _null),
)


def match(key: str, predicates: Sequence[Predicate] = PREDICATES) -> tuple[str, Predicate] | None:
    """Find the first predicate matching key.

    Returns (field_part, predicate) or None when the key carries no known suffix.
    """
    for predicate in predicates:
        field = predicate.match(key)
        if field is not None:
            return field, predicate
    return None


def get(name: str, predicates: Sequence[Predicate] = PREDICATES) -> Predicate:
    """Look up a predicate by name."""
    for predicate in predicates:
        if predicate.name == name:
            return predicate
    raise KeyError(f"Unknown predicate: {name}")
