# elastic_ransack/query/values.py
"""Coercion of raw parameter values into typed values."""

import re
from collections.abc import Callable
from datetime import date, datetime
from typing import Any

from elastic_ransack.query.types import FieldType

DATETIME_PATTERN = re.compile(r"\d{2}\.\d{2}\.\d{4} \d{2}:\d{2}")
DATE_PATTERN = re.compile(r"\d{2}\.\d{2}\.\d{4}")
INTEGER_PATTERN = re.compile(r"-?\d+")

DATETIME_FORMATS = ("%d.%m.%Y %H:%M", "%d.%m.%Y")

# Characters with a meaning in Lucene query syntax
LUCENE_SPECIAL = re.compile(r'([+\-!(){}\[\]^"~*?:\\/]|&&|\|\|)')

DatetimeParser = Callable[[str], datetime]


class ValueCoercionError(ValueError):
    """A value looked like a date but could not be parsed."""

    def __init__(self, value: str, reason: Exception) -> None:
        super().__init__(f"Cannot parse {value!r} as a date: {reason}")
        self.value = value


def parse_datetime(text: str) -> datetime:
    """Default datetime parser for ``DD.MM.YYYY HH:MM`` and ``DD.MM.YYYY``."""
    text = text.strip()
    for fmt in DATETIME_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    raise ValueError(f"no format matches {text!r}")


def is_blank(value: Any) -> bool:
    """True for None, whitespace-only strings and empty containers."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, list | tuple | dict | set):
        return len(value) == 0
    return False


def normalize_integer_values(value: Any) -> Any:
    """Convert a list of integer strings into a list of ints.

    Only applies when every element is integer-like, so range and ``in``
    predicates compare numbers instead of strings. Anything else is returned
    unchanged.
    """
    if not isinstance(value, list | tuple) or not value:
        return value
    if all(isinstance(v, int) and not isinstance(v, bool) for v in value):
        return list(value)
    if all(isinstance(v, str) and INTEGER_PATTERN.fullmatch(v.strip()) for v in value):
        return [int(v) for v in value]
    return value


def _coerce_boolean(value: Any) -> Any:
    match value:
        case True | False:
            return value
        case 1 | "1":
            return True
        case 0 | "0":
            return False
        case _:
            return value


def _parse(value: str, parser: DatetimeParser) -> datetime:
    try:
        return parser(value)
    except ValueError as e:
        raise ValueCoercionError(value, e) from e


def normalize(
    value: Any,
    field_type: FieldType = FieldType.UNKNOWN,
    datetime_parser: DatetimeParser = parse_datetime,
) -> Any:
    """Coerce a raw value for a field of the given type.

    Boolean fields are coerced first so their values are never mistaken for
    dates. Strings matching ``DD.MM.YYYY HH:MM`` become datetimes, strings
    matching ``DD.MM.YYYY`` become dates. Everything else passes through.

    Raises:
        ValueCoercionError: if the parser rejects a date-looking value.
    """
    if field_type is FieldType.BOOLEAN:
        return _coerce_boolean(value)

    if not isinstance(value, str):
        return value

    if DATETIME_PATTERN.search(value):
        return _parse(value, datetime_parser)
    if DATE_PATTERN.search(value):
        parsed = _parse(value, datetime_parser)
        return parsed.date() if isinstance(parsed, datetime) else parsed
    return value


def lucene_escape(text: str) -> str:
    """Escape Lucene query syntax characters in text."""
    return LUCENE_SPECIAL.sub(r"\\\1", text)


def to_json_value(obj: Any) -> Any:
    """``json.dumps`` default hook for dates and datetimes."""
    if isinstance(obj, datetime | date):
        return obj.isoformat()
    raise TypeError(f"Object of type {type(obj)} is not JSON serializable")
