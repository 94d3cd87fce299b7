"""JSON Pointer navigation and `$ref` string helpers."""

from __future__ import annotations

from typing import Any, NamedTuple

from schemabase.core.config import config
from schemabase.core.exceptions import ResolveError

_LEGACY_DEFS_PREFIX = f"#/{config.json_schema_fields.definitions_field}/"
_DEFS_PREFIX = f"#/{config.json_schema_fields.defs_field}/"


class RefParts(NamedTuple):
    """A `$ref` split into its optional file part and its pointer."""

    file_part: str | None
    pointer: str


def split_ref(ref: str) -> RefParts:
    """Split a `$ref` into file part and pointer.

    Examples:
        "#/$defs/User"              -> (None, "#/$defs/User")
        "./other.json#/$defs/User"  -> ("./other.json", "#/$defs/User")
        "./other.json"              -> ("./other.json", "#")
    """
    idx = ref.find("#")
    if idx == -1:
        return RefParts(ref or None, "#")
    file_part = ref[:idx] if idx > 0 else None
    return RefParts(file_part, f"#{ref[idx + 1:]}")


def is_external_ref(ref: str) -> bool:
    return split_ref(ref).file_part is not None


def normalize_ref(ref: str) -> str:
    """Rewrite a legacy `#/definitions/X` pointer to `#/$defs/X`.

    Refs that need no rewrite are returned unchanged.
    """
    file_part, pointer = split_ref(ref)
    if not pointer.startswith(_LEGACY_DEFS_PREFIX):
        return ref
    pointer = _DEFS_PREFIX + pointer[len(_LEGACY_DEFS_PREFIX):]
    return pointer if file_part is None else f"{file_part}{pointer}"


def decode_segment(segment: str) -> str:
    return segment.replace("~1", "/").replace("~0", "~")


def node_kind(node: Any) -> str:
    if isinstance(node, dict):
        return "object"
    if isinstance(node, list):
        return "array"
    if node is None:
        return "null"
    return "scalar"


def get_by_json_pointer(root: Any, pointer: str) -> Any:
    """Walk `root` along a `#/a/b` pointer.

    Returns None when the last segment is missing from its parent object.

    Raises:
        ResolveError: If the pointer is malformed or walks through a
            non-object node
    """
    if pointer in ("", "#"):
        return root
    if not pointer.startswith("#/"):
        raise ResolveError(f"Unsupported JSON pointer: {pointer}")

    current = root
    for segment in (decode_segment(s) for s in pointer[2:].split("/")):
        if not isinstance(current, dict):
            raise ResolveError(
                f"Invalid pointer '{pointer}' (expected object at '{segment}', "
                f"got {node_kind(current)})"
            )
        current = current.get(segment)
    return current


def normalize_defs(node: dict[str, Any]) -> dict[str, Any]:
    """Fold `definitions` into `$defs` on a single node.

    Entries from `definitions` are added only under names not already in
    `$defs`. The `definitions` key itself is kept.
    """
    definitions = node.get(config.json_schema_fields.definitions_field)
    if not isinstance(definitions, dict):
        return node
    defs_field = config.json_schema_fields.defs_field
    existing = node.get(defs_field)
    existing = existing if isinstance(existing, dict) else {}
    return {**node, defs_field: {**definitions, **existing}}


def normalize_defs_deep(node: Any) -> Any:
    """Apply `normalize_defs` to every object in a tree, leaving `enum` alone."""
    if isinstance(node, list):
        return [normalize_defs_deep(item) for item in node]
    if not isinstance(node, dict):
        return node
    out = {
        key: value
        if key == config.json_schema_fields.enum_field
        else normalize_defs_deep(value)
        for key, value in node.items()
    }
    return normalize_defs(out)
