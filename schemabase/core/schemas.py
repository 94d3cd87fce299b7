"""Pydantic models for schema documents and the relational IR."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from .config import config
from .exceptions import CompileError

JsonType = Literal["string", "integer", "number", "boolean", "object", "array"]
ReferentialAction = Literal["cascade", "restrict", "set null", "no action"]


class SchemaExtension(BaseModel):
    """The `x-schemabase` extension block of a schema node.

    Unknown keys are kept in `model_extra` and never interpreted.
    """

    model_config = ConfigDict(extra="allow")

    unique: bool = False
    index: bool = False
    table: str | None = None
    column: str | None = None
    primary_key: list[str] | None = Field(None, alias="primaryKey")


class SchemaNode(BaseModel):
    """Typed view over one JSON Schema node.

    Only the keywords the compiler reads are modelled. Everything else is
    preserved opaquely in `model_extra`.
    """

    model_config = ConfigDict(extra="allow")

    id: str | None = Field(None, alias="$id")
    title: str | None = None
    description: str | None = None
    type: str | None = None
    format: str | None = None
    properties: dict[str, SchemaNode] = Field(default_factory=dict)
    required: list[str] = Field(default_factory=list)
    enum: list[Any] | None = None
    items: SchemaNode | None = None
    definitions: dict[str, SchemaNode] = Field(default_factory=dict)
    defs: dict[str, SchemaNode] = Field(default_factory=dict, alias="$defs")
    ref: str | None = Field(None, alias="$ref")
    extension: SchemaExtension = Field(
        default_factory=SchemaExtension,
        alias=config.json_schema_fields.extension_field,
    )

    @field_validator("type", mode="before")
    @classmethod
    def first_type_tag(cls, v: Any) -> Any:
        """Collapse `type: [a, b]` into its first tag."""
        if isinstance(v, list):
            return v[0] if v else None
        return v

    @field_validator("items", mode="before")
    @classmethod
    def single_items_schema(cls, v: Any) -> Any:
        """Tuple-form and boolean `items` carry no column information."""
        return v if isinstance(v, dict) else None

    @property
    def all_defs(self) -> dict[str, SchemaNode]:
        """`definitions` merged with `$defs`, `$defs` winning on conflict."""
        return {**self.definitions, **self.defs}

    @classmethod
    def from_raw(cls, raw: dict[str, Any], file: str) -> SchemaNode:
        """Parse a JSON tree, reporting schemas the model rejects as CompileError."""
        try:
            return cls.model_validate(raw)
        except PydanticValidationError as e:
            raise CompileError(f"Unsupported schema structure in {file}: {e}") from e


class IRModel(BaseModel):
    """Base for immutable IR values serialized with camelCase keys."""

    model_config = ConfigDict(
        frozen=True, populate_by_name=True, alias_generator=to_camel
    )


class Provenance(IRModel):
    file: str
    pointer: str


class ColumnType(IRModel):
    """Dialect-independent column type.

    `ref` keeps the raw `$ref` string of a foreign-key column for provenance.
    """

    json_type: JsonType
    format: str | None = None
    enum: tuple[str, ...] | None = None
    ref: str | None = None


class Column(IRModel):
    name: str
    type: ColumnType
    nullable: bool
    primary_key: bool | None = None


class Index(IRModel):
    name: str
    table: str
    columns: tuple[str, ...]
    unique: bool


class ForeignKey(IRModel):
    name: str
    table: str
    columns: tuple[str, ...]
    referenced_table: str
    referenced_columns: tuple[str, ...]
    on_delete: ReferentialAction | None = None
    on_update: ReferentialAction | None = None

    @model_validator(mode="after")
    def check_column_counts(self) -> ForeignKey:
        if len(self.columns) != len(self.referenced_columns):
            raise ValueError(
                "Foreign key must reference as many columns as it declares"
            )
        return self


class PrimaryKeyConstraint(IRModel):
    columns: tuple[str, ...]


class Table(IRModel):
    name: str
    columns: tuple[Column, ...]
    indexes: tuple[Index, ...] = ()
    primary_key: PrimaryKeyConstraint | None = None
    provenance: Provenance

    def column(self, name: str) -> Column | None:
        """Return the column called `name`, if any."""
        return next((c for c in self.columns if c.name == name), None)


class EnumType(IRModel):
    name: str
    values: tuple[str, ...]
    provenance: Provenance


class RelationalIR(IRModel):
    """The whole relational model produced by a compile."""

    tables: tuple[Table, ...] = ()
    foreign_keys: tuple[ForeignKey, ...] = ()
    enums: tuple[EnumType, ...] = ()

    def table(self, name: str) -> Table | None:
        """Return the table called `name`, if any."""
        return next((t for t in self.tables if t.name == name), None)

    def to_json(self, indent: int | None = None) -> str:
        """Serialize to the IR JSON shape (camelCase keys, absent fields omitted)."""
        return json.dumps(
            self.model_dump(mode="json", by_alias=True, exclude_none=True),
            indent=indent,
            ensure_ascii=False,
        )

    @classmethod
    def from_json(cls, text: str) -> RelationalIR:
        """Parse text produced by `to_json`."""
        return cls.model_validate_json(text)


class CompiledTable(IRModel):
    """One compiled table plus the foreign keys its external refs imply."""

    table: Table
    foreign_keys: tuple[ForeignKey, ...] = ()


class RegistryPrimaryKey(IRModel):
    column: str
    type: ColumnType


class RegistryEntry(IRModel):
    """Precomputed table name and primary key of one schema file."""

    path: str
    table_name: str
    primary_key: RegistryPrimaryKey


@dataclass(frozen=True)
class SchemaSource:
    """A raw schema document and the path it was loaded from."""

    path: str
    schema: dict[str, Any]


class ValidationResult(BaseModel):
    """Result of schema validation with type safety.

    Provides validated results for schema validation operations.
    """

    is_valid: bool = Field(..., description="Whether the schema passed validation")
    errors: list[str] = Field(
        default_factory=list, description="Validation error messages"
    )
    warnings: list[str] = Field(
        default_factory=list, description="Validation warning messages"
    )

    def add_error(self, message: str) -> None:
        """Add an error message to the validation result."""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str) -> None:
        """Add a warning message to the validation result."""
        self.warnings.append(message)
