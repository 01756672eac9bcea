# elastic_ransack/query/keys.py
from collections.abc import Sequence
from dataclasses import dataclass

from elastic_ransack.query import predicates as registry
from elastic_ransack.query.predicates import Predicate

OR_SEPARATOR = "_or_"


@dataclass(frozen=True)
class ParsedKey:
    """A filter key split into its referenced fields and predicate."""

    fields: tuple[str, ...]
    predicate: Predicate

    @property
    def is_multi_field(self) -> bool:
        return len(self.fields) > 1


def split_fields(field_part: str, or_separator: str = OR_SEPARATOR) -> tuple[str, ...]:
    """Split "name_or_title" into ("name", "title"), dropping empty names."""
    return tuple(name for name in field_part.split(or_separator) if name)


def parse_key(
    key: str,
    predicates: Sequence[Predicate] = registry.PREDICATES,
    or_separator: str = OR_SEPARATOR,
) -> ParsedKey | None:
    """Parse a filter key such as "name_or_title_cont".

    The predicate suffix is stripped before splitting on the OR separator, so
    "a_or_b_eq" references fields a and b with the eq predicate. Returns None
    when no predicate suffix matches.
    """
    found = registry.match(key, predicates)
    if found is None:
        return None
    field_part, predicate = found
    fields = split_fields(field_part, or_separator)
    if not fields:
        return None
    return ParsedKey(fields=fields, predicate=predicate)
