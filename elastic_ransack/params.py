# elastic_ransack/params.py
"""Decoding of bracketed query strings into parameter maps."""

import re
from typing import Any
from urllib.parse import parse_qsl

_KEY_PART = re.compile(r"\[([^\]]*)\]")


def _path(key: str) -> list[str]:
    """Split "g[0][name_eq]" into ["g", "0", "name_eq"]."""
    head, _, rest = key.partition("[")
    if not rest:
        return [head]
    return [head, *_KEY_PART.findall("[" + rest)]


def _assign(target: dict[str, Any], path: list[str], value: str) -> None:
    name, *rest = path
    if not rest:
        target[name] = value
        return
    if rest == [""]:
        existing = target.setdefault(name, [])
        if isinstance(existing, list):
            existing.append(value)
        return
    child = target.setdefault(name, {})
    if isinstance(child, dict):
        _assign(child, rest, value)


def parse_query_string(query: str) -> dict[str, Any]:
    """Decode a query string with bracket nesting.

    Example:
        >>> parse_query_string("id_in[]=1&id_in[]=2&g[0][state_eq]=open&s=name+desc")
        {'id_in': ['1', '2'], 'g': {'0': {'state_eq': 'open'}}, 's': 'name desc'}
    """
    params: dict[str, Any] = {}
    for key, value in parse_qsl(query.lstrip("?"), keep_blank_values=True):
        _assign(params, _path(key), value)
    return params
