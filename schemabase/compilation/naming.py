"""Naming conventions for tables and columns."""

from __future__ import annotations

import re
from pathlib import PurePosixPath

from schemabase.core.schemas import SchemaNode

_CASE_CHANGE = re.compile(r"([a-z0-9])([A-Z])")
_SEPARATORS = re.compile(r"[ .-]+")
_UNDERSCORES = re.compile(r"_+")


def to_snake_case(value: str) -> str:
    """Convert `userId`, `User Tag` or `user-tag` style names to snake_case."""
    value = _CASE_CHANGE.sub(r"\1_\2", value)
    value = _SEPARATORS.sub("_", value.strip())
    return _UNDERSCORES.sub("_", value.lower())


def pluralize(name: str) -> str:
    name = name.lower()
    return name if name.endswith("s") else f"{name}s"


def default_table_name(id_or_title: str) -> str:
    return pluralize(to_snake_case(id_or_title))


def fk_column_name(property_name: str) -> str:
    """Column name of a foreign-key property: `author` -> `author_id`."""
    if property_name.endswith("Id") or property_name.endswith("_id"):
        return to_snake_case(property_name)
    return to_snake_case(f"{property_name}_id")


def _name_from_id(schema_id: str) -> str:
    # "https://example.com/schemas/user.json#" -> "user"
    last = schema_id.split("#", 1)[0].rstrip("/").rsplit("/", 1)[-1]
    if not last:
        return schema_id
    return last.rsplit(".", 1)[0] if last.endswith(".json") else last


def table_name_from_schema_file(file: str, schema: SchemaNode) -> str:
    """Table name of a schema document.

    `x-schemabase.table` is used verbatim. Otherwise the name comes from
    `$id`, `title` or the file stem, snake-cased and pluralized.
    """
    if schema.extension.table:
        return schema.extension.table
    if schema.id:
        source = _name_from_id(schema.id)
    elif schema.title:
        source = schema.title
    else:
        source = PurePosixPath(file.replace("\\", "/")).stem or "schema"
    return default_table_name(source)
