"""Cross-file schema registry for multi-file compiles."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from schemabase.compilation.naming import (
    fk_column_name,
    table_name_from_schema_file,
    to_snake_case,
)
from schemabase.core.schemas import (
    ColumnType,
    RegistryEntry,
    RegistryPrimaryKey,
    SchemaNode,
    SchemaSource,
)
from schemabase.resolution.pointer import is_external_ref

SCALAR_TYPES = ("string", "integer", "number", "boolean")
NESTED_TYPES = ("object", "array")

DEFAULT_PRIMARY_KEY_PROPERTY = "id"
DEFAULT_KEY_TYPE = ColumnType(json_type="string", format="uuid")


def infer_column_type(schema: SchemaNode) -> ColumnType:
    """Map a property schema onto a column type.

    Only string properties whose `enum` is a non-empty list of strings become
    enum columns. Unknown or missing types fall back to plain strings.
    """
    json_type = schema.type
    if json_type in NESTED_TYPES:
        return ColumnType(json_type=json_type)
    if json_type not in SCALAR_TYPES:
        return ColumnType(json_type="string")

    enum = None
    if (
        json_type == "string"
        and schema.enum
        and all(isinstance(v, str) for v in schema.enum)
    ):
        enum = tuple(schema.enum)
    return ColumnType(json_type=json_type, format=schema.format, enum=enum)


def registry_key(path: Path | str) -> Path:
    return Path(path).resolve()


class SchemaRegistry:
    """Read-only map from absolute schema path to its `RegistryEntry`."""

    def __init__(self, entries: Iterable[RegistryEntry] = ()) -> None:
        self._entries = {registry_key(e.path): e for e in entries}

    def get(self, path: Path | str) -> RegistryEntry | None:
        return self._entries.get(registry_key(path))

    def __contains__(self, path: object) -> bool:
        return isinstance(path, (str, Path)) and registry_key(path) in self._entries


def build_registry_entry(source: SchemaSource) -> RegistryEntry:
    """Compute table name and primary key of one raw (unresolved) schema.

    A composite `x-schemabase.primaryKey` contributes only its first property:
    references from other files always target a single column.
    """
    schema = SchemaNode.from_raw(source.schema, source.path)
    pk_props = schema.extension.primary_key
    pk_prop = pk_props[0] if pk_props else DEFAULT_PRIMARY_KEY_PROPERTY

    pk_schema = schema.properties.get(pk_prop)
    if pk_schema is None:
        primary_key = RegistryPrimaryKey(
            column=to_snake_case(pk_prop), type=DEFAULT_KEY_TYPE
        )
    elif pk_schema.ref is not None and is_external_ref(pk_schema.ref):
        primary_key = RegistryPrimaryKey(
            column=fk_column_name(pk_prop), type=DEFAULT_KEY_TYPE
        )
    else:
        primary_key = RegistryPrimaryKey(
            column=pk_schema.extension.column or to_snake_case(pk_prop),
            type=infer_column_type(pk_schema),
        )

    return RegistryEntry(
        path=str(registry_key(source.path)),
        table_name=table_name_from_schema_file(source.path, schema),
        primary_key=primary_key,
    )


def build_schema_registry(sources: Iterable[SchemaSource]) -> SchemaRegistry:
    """Build the registry of a multi-file compile. Pure: no file is read."""
    return SchemaRegistry(build_registry_entry(source) for source in sources)
