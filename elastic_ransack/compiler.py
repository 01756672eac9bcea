# elastic_ransack/compiler.py
"""Compiles flat filter parameters into an Elasticsearch request body."""

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from elastic_ransack.config import Settings, get_settings
from elastic_ransack.query import clauses
from elastic_ransack.query import predicates as registry
from elastic_ransack.query.clauses import Clause
from elastic_ransack.query.keys import ParsedKey, parse_key
from elastic_ransack.query.sort import DEFAULT_SORT, SortField, build_sort
from elastic_ransack.query.types import FieldTypeResolver
from elastic_ransack.query.values import (
    is_blank,
    lucene_escape,
    normalize,
    normalize_integer_values,
    to_json_value,
)

logger = logging.getLogger(__name__)

FREE_TEXT_KEYS = frozenset({"q_cont", "q_eq"})
SORT_KEY = "s"
MODE_KEY = "m"
GROUP_KEY = "g"


@dataclass(frozen=True)
class CompiledQuery:
    """The result of compiling a parameter map."""

    free_text: Clause | None = None
    filters: tuple[Clause, ...] = ()
    sort: tuple[SortField, ...] = DEFAULT_SORT
    source_fields: tuple[str, ...] | None = None

    @property
    def matches_everything(self) -> bool:
        return self.free_text is None and not self.filters

    @property
    def query(self) -> Clause:
        if self.free_text is not None and self.filters:
            return {"bool": {"must": [self.free_text], "filter": list(self.filters)}}
        if self.free_text is not None:
            return self.free_text
        if self.filters:
            return {"bool": {"filter": list(self.filters)}}
        return clauses.match_all()

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "query": self.query,
            "sort": [s.to_dict() for s in self.sort],
        }
        if self.source_fields:
            body["_source"] = list(self.source_fields)
        return body

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_body(), indent=indent, ensure_ascii=False, default=to_json_value)


def _text(value: Any) -> str:
    if isinstance(value, list | tuple):
        return " ".join(str(v) for v in value)
    return str(value)


class QueryCompiler:
    """Turns a parameter map into a CompiledQuery.

    Keys are handled as follows:

    - ``m`` is dropped, ``s`` is the sort directive;
    - ``q_cont`` / ``q_eq`` are free text, joined into a ``query_string``;
    - a single-field ``<field>_cont`` is a fuzzy free-text term on that field
      (``translations_<name>`` becomes ``<name>_<locale>`` when globalize is on);
    - ``g`` holds OR-ed groups of AND-ed filters;
    - any other ``<field>[_or_<field>...]_<predicate>`` key is a filter.

    Keys matching none of these, and blank values, are ignored.
    """

    def __init__(
        self,
        model: Any = None,
        *,
        globalize: bool = True,
        escape: bool | None = None,
        locale: str | None = None,
        fields: Iterable[str] | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.model = model
        self.settings = settings or get_settings()
        self.globalize = globalize
        self.escape = self.settings.escape_free_text if escape is None else escape
        self.fields = tuple(fields) if fields else None
        self._locale = locale
        try:
            self._contains = registry.get("cont", self.settings.predicates)
        except KeyError:
            self._contains = None

    @property
    def locale(self) -> str:
        return self._locale or self.settings.locale()

    def compile(self, params: Mapping[str, Any]) -> CompiledQuery:
        params = {str(k): v for k, v in params.items()}
        params.pop(MODE_KEY, None)
        sort = build_sort(params.pop(SORT_KEY, None))
        resolver = FieldTypeResolver.for_model(self.model, self.settings.boolean_prefixes)

        terms: list[str] = []
        filters: list[Clause] = []

        for key, value in params.items():
            if is_blank(value):
                continue
            value = normalize_integer_values(value)

            if key in FREE_TEXT_KEYS:
                text = _text(value)
                terms.append(lucene_escape(text) if self.escape else text)
                continue

            if key == GROUP_KEY:
                clause = self._group_clause(value, resolver)
            else:
                parsed = self._parse(key)
                if parsed is None:
                    logger.debug("Ignoring unrecognised parameter %s", key)
                    continue
                if parsed.predicate is self._contains and not parsed.is_multi_field:
                    terms.append(self._field_contains_term(parsed.fields[0], value))
                    continue
                clause = self._filter_clause(parsed, value, resolver)

            if clause is not None:
                filters.append(clause)

        free_text = None
        if terms:
            free_text = clauses.query_string(" OR ".join(f"({t})" for t in terms))

        compiled = CompiledQuery(
            free_text=free_text,
            filters=tuple(filters),
            sort=sort,
            source_fields=self.fields,
        )
        logger.debug("Compiled %s parameters into %s", len(params), compiled.query)
        return compiled

    def _parse(self, key: str) -> ParsedKey | None:
        return parse_key(key, self.settings.predicates, self.settings.or_separator)

    def localize(self, field: str) -> str:
        """Rewrite ``translations_<name>`` to ``<name>_<locale>`` when globalize is on."""
        prefix = self.settings.translation_prefix
        if self.globalize and field.startswith(prefix) and len(field) > len(prefix):
            return f"{field[len(prefix):]}_{self.locale}"
        return field

    def _field_contains_term(self, field: str, value: Any) -> str:
        field = self.localize(field)
        parts = [lucene_escape(part) for part in _text(value).split()]
        wildcards = " AND ".join(f"{field}:*{part}*" for part in parts)
        phrases = " AND ".join(f'{field}:"{part}"' for part in parts)
        return f"({wildcards}) OR ({phrases})"

    def _filter_clause(self, parsed: ParsedKey, value: Any, resolver: FieldTypeResolver) -> Clause:
        field_type = resolver.resolve(parsed.fields[0])
        value = normalize(value, field_type, self.settings.datetime_parser)
        field_clauses = [parsed.predicate.build(field, value) for field in parsed.fields]
        if parsed.is_multi_field:
            return clauses.any_of(field_clauses)
        return field_clauses[0]

    def _group_clause(self, value: Any, resolver: FieldTypeResolver) -> Clause | None:
        groups = value.values() if isinstance(value, Mapping) else value
        if not isinstance(groups, Iterable) or isinstance(groups, str):
            logger.debug("Ignoring malformed group parameter %r", value)
            return None

        branches: list[Clause] = []
        for group in groups:
            if not isinstance(group, Mapping):
                continue
            group_filters: list[Clause] = []
            for key, raw in group.items():
                if is_blank(raw):
                    continue
                parsed = self._parse(str(key))
                if parsed is None:
                    logger.debug("Ignoring unrecognised group parameter %s", key)
                    continue
                raw = normalize_integer_values(raw)
                group_filters.append(self._filter_clause(parsed, raw, resolver))
            if group_filters:
                branches.append(clauses.all_of(group_filters))

        if not branches:
            return None
        return clauses.any_of(branches)
