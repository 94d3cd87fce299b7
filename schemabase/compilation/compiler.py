"""Single-file and multi-file compile entry points."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from schemabase.compilation.enum_inference import infer_enums
from schemabase.compilation.registry import SchemaRegistry, build_schema_registry
from schemabase.compilation.table_compiler import TableCompiler
from schemabase.core.schemas import (
    CompiledTable,
    ForeignKey,
    RelationalIR,
    SchemaNode,
    SchemaSource,
    Table,
)
from schemabase.logger import logger
from schemabase.resolution.interfaces import IDocumentLoader
from schemabase.resolution.resolver import JSONRefResolver


def compile_table(
    schema: dict[str, Any],
    file: str,
    base_dir: Path | str | None = None,
    registry: SchemaRegistry | None = None,
    loader: IDocumentLoader | None = None,
) -> CompiledTable:
    """Resolve one raw schema and compile it into a table."""
    base_dir = Path(base_dir) if base_dir is not None else Path(file).parent
    resolved = JSONRefResolver(file, base_dir, loader).resolve_references(schema)
    compiler = TableCompiler(file, base_dir, registry)
    return compiler.compile(
        SchemaNode.from_raw(schema, file), SchemaNode.from_raw(resolved, file)
    )


def _with_enums(tables: list[Table], foreign_keys: list[ForeignKey]) -> RelationalIR:
    ir = RelationalIR(tables=tables, foreign_keys=foreign_keys)
    return RelationalIR(tables=tables, foreign_keys=foreign_keys, enums=infer_enums(ir))


def compile_json_schema_to_ir(
    schema: dict[str, Any],
    file: str,
    base_dir: Path | str | None = None,
    loader: IDocumentLoader | None = None,
) -> RelationalIR:
    """Compile a single schema document into the relational IR.

    Args:
        schema: The parsed schema document
        file: Path of the document; external refs resolve against its
            directory unless `base_dir` is given
        base_dir: Directory external references are resolved against
        loader: Loader for external documents

    Returns:
        IR holding one table, no foreign keys (there is no registry to
        resolve targets against) and the inferred enums

    Raises:
        ResolveError: If a reference cannot be resolved
        CompileError: If the schema cannot be compiled into a table
    """
    compiled = compile_table(schema, file, base_dir, loader=loader)
    logger.info("Compiled %s into table %s", file, compiled.table.name)
    return _with_enums([compiled.table], compiled.foreign_keys)


def compile_json_schemas_to_ir(
    sources: Sequence[SchemaSource],
    base_dir: Path | str | None = None,
    loader: IDocumentLoader | None = None,
) -> RelationalIR:
    """Compile several interlinked schema documents into one relational IR.

    The registry is built from the raw documents first, so foreign keys to any
    file can be typed without resolving that file. Each file is then resolved
    and compiled in input order.

    Raises:
        ResolveError: If a reference cannot be resolved
        CompileError: If a schema cannot be compiled into a table
    """
    registry = build_schema_registry(sources)
    tables: list[Table] = []
    foreign_keys: list[ForeignKey] = []
    for source in sources:
        compiled = compile_table(
            source.schema, source.path, base_dir, registry=registry, loader=loader
        )
        logger.info("Compiled %s into table %s", source.path, compiled.table.name)
        tables.append(compiled.table)
        foreign_keys.extend(compiled.foreign_keys)
    return _with_enums(tables, foreign_keys)
