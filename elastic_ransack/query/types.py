# elastic_ransack/query/types.py
"""Field type resolution from declared schemas and naming conventions."""

import logging
from collections.abc import Mapping, Sequence
from enum import Enum, StrEnum
from typing import Any

logger = logging.getLogger(__name__)


class FieldType(StrEnum):
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    NUMERIC = "numeric"
    TEXT = "text"
    UNKNOWN = "unknown"


DECLARED_TYPES: dict[str, FieldType] = {
    "boolean": FieldType.BOOLEAN,
    "bool": FieldType.BOOLEAN,
    "date": FieldType.DATE,
    "datetime": FieldType.DATETIME,
    "date_nanos": FieldType.DATETIME,
    "timestamp": FieldType.DATETIME,
    "integer": FieldType.NUMERIC,
    "int": FieldType.NUMERIC,
    "long": FieldType.NUMERIC,
    "short": FieldType.NUMERIC,
    "byte": FieldType.NUMERIC,
    "float": FieldType.NUMERIC,
    "double": FieldType.NUMERIC,
    "half_float": FieldType.NUMERIC,
    "scaled_float": FieldType.NUMERIC,
    "decimal": FieldType.NUMERIC,
    "numeric": FieldType.NUMERIC,
    "text": FieldType.TEXT,
    "keyword": FieldType.TEXT,
    "string": FieldType.TEXT,
    "str": FieldType.TEXT,
    "wildcard": FieldType.TEXT,
}


def _key_name(key: Any) -> str:
    if isinstance(key, Enum):
        return str(key.value)
    return str(key)


def _type_name(declared: Any) -> str:
    if isinstance(declared, FieldType):
        return declared.value
    if isinstance(declared, Enum):
        declared = declared.value
    if isinstance(declared, type):
        return declared.__name__.lower()
    return str(declared).lower()


def flatten_mapping(mapping: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    """Flatten an Elasticsearch index mapping into {dotted.name: type}.

    Accepts the ``properties`` block or any dict that contains one
    (``{"mappings": {"properties": ...}}`` as returned by ``GET /index/_mapping``).
    """
    if "mappings" in mapping:
        mapping = mapping["mappings"]
    properties = mapping.get("properties", {})

    flat: dict[str, str] = {}
    for name, definition in properties.items():
        full_name = f"{prefix}{name}"
        if "type" in definition:
            flat[full_name] = definition["type"]
        if "properties" in definition:
            flat.update(flatten_mapping(definition, prefix=f"{full_name}."))
    return flat


def declared_types(model: Any) -> dict[str, Any] | None:
    """Read declared field types from a model adapter.

    Tries ``field_types()`` first, then a ``columns`` description (objects
    with ``name`` and ``type``). Returns None when the model exposes neither.
    """
    if model is None:
        return None

    field_types = getattr(model, "field_types", None)
    if callable(field_types):
        field_types = field_types()
    if isinstance(field_types, Mapping):
        return {_key_name(k): v for k, v in field_types.items()}

    columns = getattr(model, "columns", None)
    if isinstance(columns, Sequence) and not isinstance(columns, str):
        return {_key_name(c.name): c.type for c in columns}

    return None


class FieldTypeResolver:
    """Resolves the semantic type of a field.

    Lookup order: the declared schema, then the boolean naming convention
    (``is_active`` -> boolean), then ``FieldType.UNKNOWN``.
    """

    def __init__(
        self,
        schema: Mapping[Any, Any] | None = None,
        boolean_prefixes: Sequence[str] = ("is_",),
    ) -> None:
        self._schema = {_key_name(k): v for k, v in (schema or {}).items()}
        self._boolean_prefixes = tuple(boolean_prefixes)

    @classmethod
    def for_model(cls, model: Any, boolean_prefixes: Sequence[str] = ("is_",)) -> "FieldTypeResolver":
        return cls(declared_types(model), boolean_prefixes)

    def resolve(self, field: str | Enum) -> FieldType:
        name = _key_name(field)
        declared = self._schema.get(name)
        if declared is not None:
            field_type = DECLARED_TYPES.get(_type_name(declared), FieldType.UNKNOWN)
            logger.debug("Field %s declared as %s -> %s", name, declared, field_type)
            return field_type

        if name.startswith(self._boolean_prefixes):
            return FieldType.BOOLEAN

        return FieldType.UNKNOWN
