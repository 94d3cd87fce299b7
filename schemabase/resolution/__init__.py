"""JSON Schema reference resolution components."""

from schemabase.resolution.resolver import JSONRefResolver, resolve_json_schema

__all__ = ["JSONRefResolver", "resolve_json_schema"]
