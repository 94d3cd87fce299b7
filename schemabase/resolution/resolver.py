"""JSON Schema reference resolver."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from schemabase.core.config import config
from schemabase.core.exceptions import (
    CircularReferenceError,
    LoadError,
    ReferenceResolutionError,
    ResolveError,
)
from schemabase.io.loader import JSONFileLoader
from schemabase.logger import logger
from schemabase.resolution.interfaces import IDocumentLoader
from schemabase.resolution.pointer import (
    get_by_json_pointer,
    is_external_ref,
    normalize_defs,
    normalize_defs_deep,
    normalize_ref,
    split_ref,
)


class ExternalDocumentCache:
    """External documents loaded during one resolve call, keyed by absolute path.

    Documents are normalized for `$defs` once, when first loaded.
    """

    def __init__(self, loader: IDocumentLoader) -> None:
        self._loader = loader
        self._documents: dict[Path, dict[str, Any]] = {}

    def __contains__(self, path: Path) -> bool:
        return path in self._documents

    def get(self, path: Path, ref: str) -> dict[str, Any]:
        if path not in self._documents:
            try:
                document = self._loader.load(path)
            except (LoadError, OSError) as e:
                raise ReferenceResolutionError(ref, e) from e
            self._documents[path] = normalize_defs_deep(document)
        return self._documents[path]


@dataclass
class _ResolutionRun:
    root: dict[str, Any]
    cache: ExternalDocumentCache
    resolution_stack: list[str] = field(default_factory=list)


def merge_schema_objects(
    base: dict[str, Any], override: dict[str, Any]
) -> dict[str, Any]:
    """Merge the sibling keys of a `$ref` node over its resolved target.

    Objects merge recursively; arrays and scalars from `override` replace.
    The `$ref` of `override` itself is dropped.
    """
    ref_field = config.json_schema_fields.ref_field
    return _merge(base, {k: v for k, v in override.items() if k != ref_field})


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = copy.deepcopy(base)
    for key, value in override.items():
        previous = result.get(key)
        if isinstance(previous, dict) and isinstance(value, dict):
            result[key] = _merge(previous, value)
        else:
            result[key] = copy.deepcopy(value)
    return result


class JSONRefResolver:
    """Handles JSON Schema $ref reference resolution.

    Local references (`#/...`) are inlined so the compiler sees nested schemas
    directly. External references (`other.json#/...`) are validated and kept
    on the output node, because the compiler infers foreign keys from them.
    """

    def __init__(
        self,
        file: str = "inline",
        base_dir: Path | str | None = None,
        loader: IDocumentLoader | None = None,
    ) -> None:
        """Initialize the JSON reference resolver.

        Args:
            file: Label of the document being resolved, used in error messages
            base_dir: Directory external references are resolved against. Without
                it only local references are supported.
            loader: Loader for external documents, JSON files by default
        """
        self.file = file
        self.base_dir = Path(base_dir) if base_dir is not None else None
        self.loader = loader if loader is not None else JSONFileLoader()

    def resolve_references(self, schema: dict[str, Any]) -> dict[str, Any]:
        """Resolve every `$ref` in a schema document.

        Each call owns a fresh external document cache.

        Raises:
            ResolveError: On malformed pointers, invalid targets, reference
                cycles, or external references without a base directory
        """
        root = normalize_defs_deep(copy.deepcopy(schema))
        run = _ResolutionRun(root=root, cache=ExternalDocumentCache(self.loader))
        return self._walk(root, run)

    def _walk(self, node: Any, run: _ResolutionRun) -> Any:
        if isinstance(node, list):
            return [self._walk(item, run) for item in node]
        if not isinstance(node, dict):
            return node

        fields = config.json_schema_fields
        result: dict[str, Any] = {}
        for key, value in node.items():
            if key == fields.enum_field:
                result[key] = value
                continue
            if key == fields.ref_field and isinstance(value, str):
                ref = normalize_ref(value)
                if not is_external_ref(ref):
                    return self._inline_local_ref(node, ref, run)
                self._check_external_target(ref, run)
                result[key] = ref
                continue
            result[key] = self._walk(value, run)
        return normalize_defs(result)

    def _inline_local_ref(
        self, node: dict[str, Any], ref: str, run: _ResolutionRun
    ) -> dict[str, Any]:
        if self.detect_circular_reference(ref, run.resolution_stack):
            raise CircularReferenceError(run.resolution_stack + [ref])

        target = get_by_json_pointer(run.root, split_ref(ref).pointer)
        if not isinstance(target, dict):
            raise ResolveError(
                f"Invalid $ref target (not an object): {self.file}:{ref}"
            )

        merged = merge_schema_objects(normalize_defs(target), normalize_defs(node))
        run.resolution_stack.append(ref)
        try:
            return self._walk(merged, run)
        finally:
            run.resolution_stack.pop()

    def _check_external_target(self, ref: str, run: _ResolutionRun) -> None:
        if self.base_dir is None:
            raise ResolveError(f"External $ref requires base_dir: {self.file}:{ref}")

        file_part, pointer = split_ref(ref)
        path = (self.base_dir / file_part).resolve()
        if path not in run.cache:
            logger.debug("Resolving external reference %s -> %s", ref, path)
        document = run.cache.get(path, ref)

        target = get_by_json_pointer(document, pointer)
        if not isinstance(target, dict):
            raise ResolveError(f"Invalid $ref target: {path}:{ref}")

    @staticmethod
    def detect_circular_reference(ref: str, resolution_stack: list[str]) -> bool:
        """Check if inlining this reference would re-enter one being inlined.

        Args:
            ref: The normalized local reference to check
            resolution_stack: References currently being inlined

        Returns:
            True if this would create a circular reference, False otherwise
        """
        return ref in resolution_stack


def resolve_json_schema(
    schema: dict[str, Any],
    file: str = "inline",
    base_dir: Path | str | None = None,
    loader: IDocumentLoader | None = None,
) -> dict[str, Any]:
    """Resolve a schema document with a one-shot `JSONRefResolver`."""
    return JSONRefResolver(file, base_dir, loader).resolve_references(schema)
