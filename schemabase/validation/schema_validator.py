"""Structural validation of the JSON Schema keywords the compiler reads."""

from __future__ import annotations

from typing import Any

from jsonschema import Draft7Validator

from schemabase.core.config import config
from schemabase.core.schemas import ValidationResult

TYPE_NAMES = ["object", "array", "string", "integer", "number", "boolean", "null"]


def build_meta_schema() -> dict[str, Any]:
    """Draft 7 schema describing the keyword subset understood by the compiler.

    Keywords outside the subset are not constrained.
    """
    fields = config.json_schema_fields
    node_ref = {"$ref": "#/definitions/node"}
    node_map = {"type": "object", "additionalProperties": node_ref}
    return {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "definitions": {
            "typeName": {"enum": TYPE_NAMES},
            "extension": {
                "type": "object",
                "properties": {
                    "unique": {"type": "boolean"},
                    "index": {"type": "boolean"},
                    "table": {"type": "string", "minLength": 1},
                    "column": {"type": "string", "minLength": 1},
                    "primaryKey": {
                        "type": "array",
                        "items": {"type": "string"},
                        "uniqueItems": True,
                    },
                },
            },
            "node": {
                "type": "object",
                "properties": {
                    fields.id_field: {"type": "string"},
                    "title": {"type": "string"},
                    "description": {"type": "string"},
                    fields.ref_field: {"type": "string"},
                    "type": {
                        "anyOf": [
                            {"$ref": "#/definitions/typeName"},
                            {
                                "type": "array",
                                "items": {"$ref": "#/definitions/typeName"},
                                "minItems": 1,
                            },
                        ]
                    },
                    "format": {"type": "string"},
                    "properties": node_map,
                    "required": {"type": "array", "items": {"type": "string"}},
                    fields.enum_field: {"type": "array"},
                    "items": {"anyOf": [node_ref, {"type": ["array", "boolean"]}]},
                    fields.definitions_field: node_map,
                    fields.defs_field: node_map,
                    fields.extension_field: {"$ref": "#/definitions/extension"},
                },
            },
        },
        "$ref": "#/definitions/node",
    }


class SchemaValidator:
    """Validates input schemas before they are compiled.

    Errors are structural problems the compiler cannot work with. Warnings
    flag documents that compile but probably not as intended.
    """

    def __init__(self) -> None:
        meta_schema = build_meta_schema()
        Draft7Validator.check_schema(meta_schema)
        self._validator = Draft7Validator(meta_schema)

    def validate_schema(self, schema: dict[str, Any]) -> ValidationResult:
        """Validate a raw schema document.

        Args:
            schema: Schema to validate

        Returns:
            ValidationResult with validation status and any errors/warnings
        """
        result = ValidationResult(is_valid=True)

        for error in self._validator.iter_errors(schema):
            result.add_error(f"{error.json_path}: {error.message}")

        self._validate_table_structure(schema, result)
        return result

    def _validate_table_structure(
        self, schema: dict[str, Any], result: ValidationResult
    ) -> None:
        """Warn about top-level shapes that will not compile into a useful table."""
        schema_type = schema.get("type")
        if isinstance(schema_type, list):
            schema_type = schema_type[0] if schema_type else None
        if schema_type != "object":
            result.add_warning(
                f"Top-level 'type' should be 'object' (got {schema_type!r})"
            )

        properties = schema.get("properties")
        if not isinstance(properties, dict) or not properties:
            result.add_warning("Missing 'properties' - no columns can be inferred")

        if config.json_schema_fields.id_field not in schema and "title" not in schema:
            result.add_warning(
                "Missing '$id' and 'title' - table name falls back to the file name"
            )
