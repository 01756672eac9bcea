# elastic_ransack/query/clauses.py
"""Elasticsearch query DSL fragments.

Every function returns a plain dict ready to be embedded in a request body.
"""

import re
from typing import Any

Clause = dict[str, Any]

WILDCARD_SPECIAL = re.compile(r"([\\*?])")


def wildcard_escape(text: str) -> str:
    """Escape the ``\\``, ``*`` and ``?`` operators of a wildcard pattern."""
    return WILDCARD_SPECIAL.sub(r"\\\1", text)


def match_all() -> Clause:
    return {"match_all": {}}


def term(field: str, value: Any) -> Clause:
    return {"term": {field: value}}


def terms(field: str, values: Any) -> Clause:
    if isinstance(values, str):
        values = [v.strip() for v in values.split(",") if v.strip()]
    elif not isinstance(values, list | tuple):
        values = [values]
    return {"terms": {field: list(values)}}


def range_(field: str, **bounds: Any) -> Clause:
    """Range clause; bounds are gt, gte, lt or lte."""
    return {"range": {field: bounds}}


def wildcard(field: str, pattern: str) -> Clause:
    return {"wildcard": {field: {"value": pattern}}}


def prefix(field: str, value: str) -> Clause:
    return {"prefix": {field: value}}


def match_phrase(field: str, value: str) -> Clause:
    return {"match_phrase": {field: value}}


def exists(field: str) -> Clause:
    return {"exists": {"field": field}}


def query_string(query: str) -> Clause:
    return {"query_string": {"query": query}}


def all_of(clauses: list[Clause]) -> Clause:
    """Logical AND of clauses, evaluated in filter context."""
    return {"bool": {"filter": list(clauses)}}


def any_of(clauses: list[Clause]) -> Clause:
    """Logical OR of clauses."""
    return {"bool": {"should": list(clauses), "minimum_should_match": 1}}


def none_of(clauses: list[Clause]) -> Clause:
    """Logical NOT of clauses."""
    return {"bool": {"must_not": list(clauses)}}


def contains(field: str, value: Any) -> Clause:
    """Substring match over every whitespace separated part of value.

    Compiles to ``(all parts as *part* wildcards) OR (all parts as phrases)``
    so that partial words and multi-word values both match.
    """
    parts = str(value).split()
    wildcards = all_of([wildcard(field, f"*{wildcard_escape(part)}*") for part in parts])
    phrases = all_of([match_phrase(field, part) for part in parts])
    return any_of([wildcards, phrases])
