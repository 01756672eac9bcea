# elastic_ransack/__init__.py
"""elastic_ransack - compile filter parameters into Elasticsearch queries."""

from elastic_ransack.backends import Backend, Elasticsearch
from elastic_ransack.compiler import CompiledQuery, QueryCompiler
from elastic_ransack.config import Settings, configure, get_settings
from elastic_ransack.models import IndexModel, Model, Page
from elastic_ransack.params import parse_query_string
from elastic_ransack.query import (
    PREDICATES,
    FieldType,
    Predicate,
    SortDirection,
    SortField,
    ValueCoercionError,
)
from elastic_ransack.search import Search

__all__ = [
    # Compiler
    "QueryCompiler",
    "CompiledQuery",
    "PREDICATES",
    "Predicate",
    "FieldType",
    "SortDirection",
    "SortField",
    "ValueCoercionError",
    "parse_query_string",
    # Settings
    "Settings",
    "configure",
    "get_settings",
    # Models
    "Model",
    "IndexModel",
    "Page",
    # Search
    "Search",
    "Backend",
    "Elasticsearch",
]
