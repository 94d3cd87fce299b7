"""Postgres DDL emitter."""

from __future__ import annotations

from collections.abc import Callable

from schemabase.compilation.enum_inference import enum_type_name
from schemabase.core.exceptions import EmitError
from schemabase.core.schemas import Column, RelationalIR, Table
from schemabase.plan.builder import build_plan
from schemabase.plan.types import (
    AddForeignKeyOp,
    CreateEnumOp,
    CreateIndexOp,
    CreateTableOp,
    MigrationPlan,
    Operation,
)

_SCALAR_TYPES = {
    "integer": "INTEGER",
    "number": "DOUBLE PRECISION",
    "boolean": "BOOLEAN",
}
_STRING_FORMATS = {
    "uuid": "UUID",
    "date-time": "TIMESTAMPTZ",
}


def quote_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def pg_type(table: Table, column: Column) -> str:
    col_type = column.type
    if col_type.enum:
        return enum_type_name(table.name, column.name)
    if col_type.json_type in ("object", "array"):
        return "JSONB"
    if col_type.json_type in _SCALAR_TYPES:
        return _SCALAR_TYPES[col_type.json_type]
    return _STRING_FORMATS.get(col_type.format or "", "TEXT")


class PostgresEmitter:
    """Renders the relational IR as a Postgres create script."""

    dialect = "postgres"

    def __init__(self) -> None:
        self._renderers: dict[str, Callable[..., str]] = {
            "CreateEnum": self._create_enum,
            "CreateTable": self._create_table,
            "AddForeignKey": self._add_foreign_key,
            "CreateIndex": self._create_index,
        }

    def emit(self, ir: RelationalIR) -> str:
        return self.emit_plan(build_plan(ir))

    def emit_plan(self, plan: MigrationPlan) -> str:
        statements = [self.emit_operation(op) for op in plan.operations]
        return "\n\n".join(statements) + "\n"

    def emit_operation(self, op: Operation) -> str:
        """Render one plan operation as a statement.

        Raises:
            EmitError: If the operation kind has no renderer
        """
        kind = getattr(op, "kind", type(op).__name__)
        renderer = self._renderers.get(kind)
        if renderer is None:
            raise EmitError(f"Unsupported operation: {kind}")
        return renderer(op)

    @staticmethod
    def _create_enum(op: CreateEnumOp) -> str:
        values = ", ".join(quote_literal(v) for v in op.enum.values)
        return f"CREATE TYPE {op.enum.name} AS ENUM ({values});"

    @staticmethod
    def _create_table(op: CreateTableOp) -> str:
        table = op.table
        composite = table.primary_key is not None
        lines = []
        for column in table.columns:
            parts = [f"{column.name} {pg_type(table, column)}"]
            if not column.nullable:
                parts.append("NOT NULL")
            if column.primary_key and not composite:
                parts.append("PRIMARY KEY")
            lines.append("  " + " ".join(parts))
        if table.primary_key is not None:
            lines.append(f"  PRIMARY KEY ({', '.join(table.primary_key.columns)})")
        return f"CREATE TABLE {table.name} (\n" + ",\n".join(lines) + "\n);"

    @staticmethod
    def _add_foreign_key(op: AddForeignKeyOp) -> str:
        fk = op.foreign_key
        statement = (
            f"ALTER TABLE {fk.table} ADD CONSTRAINT {fk.name} "
            f"FOREIGN KEY ({', '.join(fk.columns)}) "
            f"REFERENCES {fk.referenced_table} ({', '.join(fk.referenced_columns)})"
        )
        if fk.on_delete:
            statement += f" ON DELETE {fk.on_delete.upper()}"
        if fk.on_update:
            statement += f" ON UPDATE {fk.on_update.upper()}"
        return statement + ";"

    @staticmethod
    def _create_index(op: CreateIndexOp) -> str:
        index = op.index
        unique = "UNIQUE " if index.unique else ""
        columns = ", ".join(index.columns)
        return f"CREATE {unique}INDEX {index.name} ON {index.table} ({columns});"
