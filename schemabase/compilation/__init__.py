"""Compilation of resolved JSON Schemas into the relational IR."""

from schemabase.compilation.compiler import (
    compile_json_schema_to_ir,
    compile_json_schemas_to_ir,
    compile_table,
)
from schemabase.compilation.enum_inference import infer_enums
from schemabase.compilation.naming import fk_column_name, pluralize, to_snake_case
from schemabase.compilation.registry import SchemaRegistry, build_schema_registry
from schemabase.compilation.table_compiler import TableCompiler

__all__ = [
    "SchemaRegistry",
    "TableCompiler",
    "build_schema_registry",
    "compile_json_schema_to_ir",
    "compile_json_schemas_to_ir",
    "compile_table",
    "fk_column_name",
    "infer_enums",
    "pluralize",
    "to_snake_case",
]
