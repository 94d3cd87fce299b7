"""Shared test fixtures and schema builders."""

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from schemabase.core.schemas import SchemaSource
from schemabase.io.loader import load_schema_file


@pytest.fixture
def write_schema(tmp_path: Path) -> Callable[[str, dict[str, Any]], Path]:
    """Write a schema document into the test's temporary directory."""

    def _write(name: str, schema: dict[str, Any]) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(schema, f, indent=2)
        return path

    return _write


@pytest.fixture
def load_sources() -> Callable[..., list[SchemaSource]]:
    """Load schema files into SchemaSource pairs, keeping the given order."""

    def _load(*paths: Path) -> list[SchemaSource]:
        return [SchemaSource(path=str(p), schema=load_schema_file(p)) for p in paths]

    return _load


class SchemaTestHelper:
    """Helper class for creating test schemas."""

    @staticmethod
    def user_schema() -> dict[str, Any]:
        return {
            "$id": "User",
            "type": "object",
            "properties": {"id": {"type": "string", "format": "uuid"}},
            "required": ["id"],
        }

    @staticmethod
    def tag_schema() -> dict[str, Any]:
        return {
            "$id": "Tag",
            "type": "object",
            "properties": {"id": {"type": "string", "format": "uuid"}},
            "required": ["id"],
        }

    @staticmethod
    def post_schema(author_ref: str = "./user.json") -> dict[str, Any]:
        return {
            "$id": "Post",
            "type": "object",
            "properties": {
                "id": {"type": "string", "format": "uuid"},
                "authorId": {"$ref": author_ref},
            },
            "required": ["id", "authorId"],
        }

    @staticmethod
    def simple_user_schema() -> dict[str, Any]:
        return {
            "$id": "User",
            "type": "object",
            "properties": {
                "id": {"type": "string", "format": "uuid"},
                "email": {
                    "type": "string",
                    "format": "email",
                    "x-schemabase": {"unique": True},
                },
                "createdAt": {"type": "string", "format": "date-time"},
                "role": {"type": "string", "enum": ["admin", "member"]},
                "age": {"type": "integer"},
                "score": {"type": "number"},
                "active": {"type": "boolean"},
                "settings": {"type": "object", "properties": {"theme": {"type": "string"}}},
                "nicknames": {"type": "array", "items": {"type": "string"}},
            },
            "required": ["id", "email", "role"],
        }


@pytest.fixture
def schema_helper():
    """Provide schema helper for tests."""
    return SchemaTestHelper()
