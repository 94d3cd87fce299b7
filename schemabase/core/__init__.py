"""Core data models and shared types."""

from schemabase.core.config import config
from schemabase.core.exceptions import (
    CircularReferenceError,
    CompileError,
    ConfigurationError,
    EmitError,
    LoadError,
    ReferenceResolutionError,
    ResolveError,
    SchemaGenerationError,
    ValidationError,
)
from schemabase.core.schemas import (
    Column,
    ColumnType,
    EnumType,
    ForeignKey,
    Index,
    RelationalIR,
    SchemaNode,
    SchemaSource,
    Table,
    ValidationResult,
)

__all__ = [
    "Column",
    "ColumnType",
    "EnumType",
    "ForeignKey",
    "Index",
    "RelationalIR",
    "SchemaNode",
    "SchemaSource",
    "Table",
    "ValidationResult",
    "SchemaGenerationError",
    "LoadError",
    "ResolveError",
    "ReferenceResolutionError",
    "CircularReferenceError",
    "CompileError",
    "EmitError",
    "ValidationError",
    "ConfigurationError",
    "config",
]
