"""Compilation of one resolved schema into a table."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from schemabase.compilation.naming import (
    fk_column_name,
    table_name_from_schema_file,
    to_snake_case,
)
from schemabase.compilation.registry import (
    DEFAULT_KEY_TYPE,
    DEFAULT_PRIMARY_KEY_PROPERTY,
    NESTED_TYPES,
    SchemaRegistry,
    infer_column_type,
)
from schemabase.core.exceptions import CompileError
from schemabase.core.schemas import (
    Column,
    CompiledTable,
    ForeignKey,
    Index,
    PrimaryKeyConstraint,
    Provenance,
    SchemaNode,
    Table,
)
from schemabase.resolution.pointer import is_external_ref, split_ref

ROOT_POINTER = "/"


@dataclass
class CompiledProperty:
    column: Column
    foreign_key: ForeignKey | None = None
    indexes: list[Index] = field(default_factory=list)


def index_name(table: str, column: str, unique: bool) -> str:
    return f"{table}_{column}_{'uidx' if unique else 'idx'}"


def has_external_ref(schema: SchemaNode) -> bool:
    return schema.ref is not None and is_external_ref(schema.ref)


def column_name_for(property_name: str, schema: SchemaNode) -> str:
    """Actual column name a property compiles to."""
    if has_external_ref(schema):
        return fk_column_name(property_name)
    return schema.extension.column or to_snake_case(property_name)


class TableCompiler:
    """Turns one resolved schema into a `Table` and its foreign keys.

    Properties are tried in order as external references (foreign-key
    columns), nested objects/arrays (JSON document columns), then scalars.
    """

    def __init__(
        self,
        file: str,
        base_dir: Path | str | None = None,
        registry: SchemaRegistry | None = None,
    ) -> None:
        """Initialize the table compiler.

        Args:
            file: Path of the schema file, used for naming and provenance
            base_dir: Directory `$ref` file parts are relative to. Defaults to
                the directory of `file`.
            registry: Registry of every file in a multi-file compile
        """
        self.file = file
        self.base_dir = Path(base_dir) if base_dir is not None else Path(file).parent
        self.registry = registry

    def compile(self, schema: SchemaNode, resolved: SchemaNode) -> CompiledTable:
        """Compile a schema into a table.

        Args:
            schema: The raw schema, read for naming and the primary-key override
            resolved: The same schema after reference resolution

        Raises:
            CompileError: If the top-level type is not an object or no columns
                can be inferred
        """
        if resolved.type != "object":
            raise CompileError(
                f"Top-level schema must be an object (got {resolved.type or 'unknown'})"
            )

        table_name = table_name_from_schema_file(self.file, schema)
        required = set(resolved.required)
        pk_props = schema.extension.primary_key or None
        pk_prop_set = set(pk_props) if pk_props else None

        columns: list[Column] = []
        foreign_keys: list[ForeignKey] = []
        indexes: list[Index] = []
        column_sources: dict[str, str] = {}
        for prop_name, prop_schema in resolved.properties.items():
            compiled = self.compile_property(
                prop_name, prop_schema, table_name, required, pk_prop_set
            )
            column_name = compiled.column.name
            if column_name in column_sources:
                raise CompileError(
                    f"Duplicate column '{column_name}' in table {table_name} "
                    f"(properties '{column_sources[column_name]}', '{prop_name}')"
                )
            column_sources[column_name] = prop_name
            columns.append(compiled.column)
            if compiled.foreign_key is not None:
                foreign_keys.append(compiled.foreign_key)
            indexes.extend(compiled.indexes)

        if not columns:
            raise CompileError(
                f"Schema has no properties to infer columns from: {self.file}"
            )

        indexes.extend(self.infer_indexes(table_name, resolved))

        primary_key = None
        if pk_props:
            primary_key = PrimaryKeyConstraint(
                columns=[
                    column_name_for(p, resolved.properties.get(p, SchemaNode()))
                    for p in pk_props
                ]
            )

        table = Table(
            name=table_name,
            columns=columns,
            indexes=indexes,
            primary_key=primary_key,
            provenance=Provenance(file=self.file, pointer=ROOT_POINTER),
        )
        return CompiledTable(table=table, foreign_keys=foreign_keys)

    def compile_property(
        self,
        prop_name: str,
        prop_schema: SchemaNode,
        table_name: str,
        required: set[str],
        pk_prop_set: set[str] | None,
    ) -> CompiledProperty:
        nullable = self.is_nullable(prop_name, required, pk_prop_set)
        file_part = split_ref(prop_schema.ref).file_part if prop_schema.ref else None
        if prop_schema.ref is not None and file_part is not None:
            return self._compile_external_ref(
                prop_name, prop_schema.ref, file_part, prop_schema, table_name, nullable
            )
        if prop_schema.type in NESTED_TYPES:
            return CompiledProperty(
                column=Column(
                    name=column_name_for(prop_name, prop_schema),
                    type=infer_column_type(prop_schema),
                    nullable=nullable,
                )
            )
        return self._compile_scalar(prop_name, prop_schema, nullable, pk_prop_set)

    @staticmethod
    def is_nullable(
        prop_name: str, required: set[str], pk_prop_set: set[str] | None
    ) -> bool:
        if pk_prop_set is not None and prop_name in pk_prop_set:
            return False
        return prop_name not in required

    def _compile_external_ref(
        self,
        prop_name: str,
        ref: str,
        file_part: str,
        prop_schema: SchemaNode,
        table_name: str,
        nullable: bool,
    ) -> CompiledProperty:
        column_name = fk_column_name(prop_name)
        target = (
            self.registry.get(self.ref_target_path(file_part))
            if self.registry
            else None
        )
        column_type = target.primary_key.type if target else DEFAULT_KEY_TYPE

        compiled = CompiledProperty(
            column=Column(
                name=column_name,
                type=column_type.model_copy(update={"ref": ref}),
                nullable=nullable,
            )
        )
        if prop_schema.extension.unique:
            compiled.indexes.append(
                Index(
                    name=index_name(table_name, column_name, unique=True),
                    table=table_name,
                    columns=[column_name],
                    unique=True,
                )
            )
        if target is not None:
            compiled.foreign_key = ForeignKey(
                name=f"{table_name}_{column_name}_fkey",
                table=table_name,
                columns=[column_name],
                referenced_table=target.table_name,
                referenced_columns=[
                    target.primary_key.column or DEFAULT_PRIMARY_KEY_PROPERTY
                ],
            )
        return compiled

    def _compile_scalar(
        self,
        prop_name: str,
        prop_schema: SchemaNode,
        nullable: bool,
        pk_prop_set: set[str] | None,
    ) -> CompiledProperty:
        is_primary_key = (
            prop_name == DEFAULT_PRIMARY_KEY_PROPERTY
            and not nullable
            and pk_prop_set is None
        )
        return CompiledProperty(
            column=Column(
                name=column_name_for(prop_name, prop_schema),
                type=infer_column_type(prop_schema),
                nullable=nullable,
                primary_key=True if is_primary_key else None,
            )
        )

    def infer_indexes(self, table_name: str, resolved: SchemaNode) -> list[Index]:
        """Indexes requested by `unique`/`index` flags on scalar properties.

        Foreign-key columns get their unique index during property compilation.
        """
        indexes: list[Index] = []
        for prop_name, prop_schema in resolved.properties.items():
            if has_external_ref(prop_schema) or prop_schema.type in NESTED_TYPES:
                continue
            ext = prop_schema.extension
            if not (ext.unique or ext.index):
                continue
            column = column_name_for(prop_name, prop_schema)
            indexes.append(
                Index(
                    name=index_name(table_name, column, ext.unique),
                    table=table_name,
                    columns=[column],
                    unique=ext.unique,
                )
            )
        return indexes

    def ref_target_path(self, file_part: str) -> Path:
        """Absolute path of the file an external `$ref` points to."""
        return (self.base_dir / file_part).resolve()
