# elastic_ransack/query/__init__.py
from elastic_ransack.query.clauses import Clause
from elastic_ransack.query.keys import ParsedKey, parse_key
from elastic_ransack.query.predicates import PREDICATES, Predicate, match
from elastic_ransack.query.sort import DEFAULT_SORT, SortDirection, SortField, build_sort
from elastic_ransack.query.types import FieldType, FieldTypeResolver, flatten_mapping
from elastic_ransack.query.values import ValueCoercionError, lucene_escape, normalize

__all__ = [
    "Clause",
    "ParsedKey",
    "parse_key",
    "PREDICATES",
    "Predicate",
    "match",
    "DEFAULT_SORT",
    "SortDirection",
    "SortField",
    "build_sort",
    "FieldType",
    "FieldTypeResolver",
    "flatten_mapping",
    "ValueCoercionError",
    "lucene_escape",
    "normalize",
]
