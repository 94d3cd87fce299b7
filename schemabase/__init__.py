"""
schemabase

Compiles JSON Schema documents (single files or directories of interlinked
files) into a relational model and emits DDL for a SQL dialect.
"""

from schemabase.cli.generator import SchemaGenerator
from schemabase.compilation.compiler import (
    compile_json_schema_to_ir,
    compile_json_schemas_to_ir,
)
from schemabase.core.schemas import RelationalIR, SchemaSource
from schemabase.emitters.base import get_emitter
from schemabase.emitters.postgres import PostgresEmitter

__all__ = [
    "PostgresEmitter",
    "RelationalIR",
    "SchemaGenerator",
    "SchemaSource",
    "compile_json_schema_to_ir",
    "compile_json_schemas_to_ir",
    "get_emitter",
]
