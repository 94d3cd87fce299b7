"""Tests for JSON pointer handling and $ref resolution."""

import copy

import pytest

from schemabase.core.exceptions import (
    CircularReferenceError,
    ReferenceResolutionError,
    ResolveError,
)
from schemabase.resolution.pointer import (
    get_by_json_pointer,
    normalize_defs,
    normalize_ref,
    split_ref,
)
from schemabase.resolution.resolver import (
    JSONRefResolver,
    merge_schema_objects,
    resolve_json_schema,
)


class TestPointer:
    """Test ref splitting, normalization and pointer walking."""

    def test_split_local_ref(self):
        assert split_ref("#/$defs/User") == (None, "#/$defs/User")

    def test_split_file_ref(self):
        assert split_ref("./user.json#/$defs/User") == ("./user.json", "#/$defs/User")

    def test_split_file_without_fragment(self):
        assert split_ref("./user.json") == ("./user.json", "#")

    def test_normalize_legacy_local_ref(self):
        assert normalize_ref("#/definitions/Address") == "#/$defs/Address"

    def test_normalize_legacy_file_ref(self):
        assert normalize_ref("other.json#/definitions/A") == "other.json#/$defs/A"

    def test_normalize_leaves_other_refs_untouched(self):
        assert normalize_ref("./user.json") == "./user.json"

    def test_pointer_unescapes_segments(self):
        root = {"$defs": {"a/b": {"x": 1}, "c~d": {"y": 2}}}
        assert get_by_json_pointer(root, "#/$defs/a~1b") == {"x": 1}
        assert get_by_json_pointer(root, "#/$defs/c~0d") == {"y": 2}

    def test_root_pointers(self):
        root = {"a": 1}
        assert get_by_json_pointer(root, "#") is root
        assert get_by_json_pointer(root, "") is root

    def test_malformed_pointer(self):
        with pytest.raises(ResolveError, match="Unsupported JSON pointer"):
            get_by_json_pointer({}, "$defs/User")

    def test_pointer_through_scalar(self):
        with pytest.raises(ResolveError, match="got scalar"):
            get_by_json_pointer({"a": 5}, "#/a/b")

    def test_pointer_through_array(self):
        with pytest.raises(ResolveError, match="got array"):
            get_by_json_pointer({"a": [1]}, "#/a/0")

    def test_normalize_defs_prefers_defs(self):
        node = {
            "definitions": {"A": {"type": "string"}, "B": {"type": "integer"}},
            "$defs": {"A": {"type": "boolean"}},
        }
        result = normalize_defs(node)
        assert result["$defs"] == {
            "A": {"type": "boolean"},
            "B": {"type": "integer"},
        }


class TestMerge:
    """Test merging of $ref siblings over the resolved target."""

    def test_objects_merge_recursively(self):
        base = {"type": "object", "properties": {"a": {"type": "string"}}}
        override = {"$ref": "#/x", "properties": {"b": {"type": "integer"}}}
        result = merge_schema_objects(base, override)
        assert result == {
            "type": "object",
            "properties": {"a": {"type": "string"}, "b": {"type": "integer"}},
        }

    def test_arrays_and_scalars_replace(self):
        base = {"required": ["a"], "description": "base"}
        override = {"required": ["b"], "description": "override"}
        assert merge_schema_objects(base, override) == {
            "required": ["b"],
            "description": "override",
        }

    def test_does_not_mutate_inputs(self):
        base = {"properties": {"a": {"type": "string"}}}
        snapshot = copy.deepcopy(base)
        merge_schema_objects(base, {"properties": {"b": {}}})
        assert base == snapshot


class TestLocalRefs:
    """Test inlining of local references."""

    def test_no_refs_is_identity(self):
        schema = {"type": "object", "properties": {"foo": {"type": "string"}}}
        assert resolve_json_schema(schema) == schema

    def test_inlines_defs_ref_with_siblings(self):
        schema = {
            "type": "object",
            "properties": {
                "address": {"$ref": "#/$defs/Address", "description": "Home"}
            },
            "$defs": {
                "Address": {
                    "type": "object",
                    "properties": {"city": {"type": "string"}},
                }
            },
        }
        address = resolve_json_schema(schema)["properties"]["address"]
        assert "$ref" not in address
        assert address["type"] == "object"
        assert address["description"] == "Home"
        assert address["properties"] == {"city": {"type": "string"}}

    def test_legacy_definitions_ref(self):
        schema = {
            "type": "object",
            "properties": {"status": {"$ref": "#/definitions/Status"}},
            "definitions": {"Status": {"type": "string", "enum": ["a", "b"]}},
        }
        resolved = resolve_json_schema(schema)
        assert resolved["properties"]["status"] == {
            "type": "string",
            "enum": ["a", "b"],
        }
        assert "Status" in resolved["$defs"]

    def test_transitive_refs(self):
        schema = {
            "type": "object",
            "properties": {"a": {"$ref": "#/$defs/A"}},
            "$defs": {
                "A": {"type": "object", "properties": {"b": {"$ref": "#/$defs/B"}}},
                "B": {"type": "integer"},
            },
        }
        resolved = resolve_json_schema(schema)
        assert resolved["properties"]["a"]["properties"]["b"] == {"type": "integer"}

    def test_alias_definition_is_followed(self):
        schema = {
            "type": "object",
            "properties": {"a": {"$ref": "#/$defs/Alias"}},
            "$defs": {"Alias": {"$ref": "#/$defs/Real"}, "Real": {"type": "boolean"}},
        }
        resolved = resolve_json_schema(schema)
        assert resolved["properties"]["a"] == {"type": "boolean"}

    def test_enum_is_passed_through(self):
        schema = {"type": "object", "enum": [{"$ref": "#/nowhere"}]}
        assert resolve_json_schema(schema)["enum"] == [{"$ref": "#/nowhere"}]

    def test_input_is_not_mutated(self):
        schema = {
            "type": "object",
            "properties": {"a": {"$ref": "#/$defs/A"}},
            "definitions": {"A": {"type": "string"}},
        }
        snapshot = copy.deepcopy(schema)
        resolve_json_schema(schema)
        assert schema == snapshot

    def test_target_must_be_object(self):
        schema = {"type": "object", "properties": {"a": {"$ref": "#/type"}}}
        with pytest.raises(ResolveError, match="not an object"):
            resolve_json_schema(schema)

    def test_missing_target(self):
        schema = {"type": "object", "properties": {"a": {"$ref": "#/$defs/Nope"}}}
        with pytest.raises(ResolveError, match="not an object"):
            resolve_json_schema(schema)

    def test_self_referencing_definition_is_a_cycle(self):
        schema = {
            "type": "object",
            "properties": {"root": {"$ref": "#/$defs/Node"}},
            "$defs": {
                "Node": {
                    "type": "object",
                    "properties": {"child": {"$ref": "#/$defs/Node"}},
                }
            },
        }
        with pytest.raises(CircularReferenceError) as exc_info:
            resolve_json_schema(schema)
        assert exc_info.value.reference_chain == ["#/$defs/Node", "#/$defs/Node"]

    def test_mutual_cycle(self):
        schema = {
            "type": "object",
            "$defs": {"A": {"$ref": "#/$defs/B"}, "B": {"$ref": "#/$defs/A"}},
        }
        with pytest.raises(CircularReferenceError):
            resolve_json_schema(schema)

    def test_sibling_refs_to_same_definition_are_not_a_cycle(self):
        schema = {
            "type": "object",
            "properties": {
                "billing": {"$ref": "#/$defs/Address"},
                "shipping": {"$ref": "#/$defs/Address"},
            },
            "$defs": {"Address": {"type": "object"}},
        }
        resolved = resolve_json_schema(schema)
        assert resolved["properties"]["billing"] == {"type": "object"}
        assert resolved["properties"]["shipping"] == {"type": "object"}


class TestExternalRefs:
    """Test validation and preservation of external references."""

    def test_external_ref_is_preserved(self, write_schema):
        write_schema("user.json", {"type": "object"})
        post = write_schema(
            "post.json",
            {"type": "object", "properties": {"author": {"$ref": "./user.json"}}},
        )
        resolved = resolve_json_schema(
            {"type": "object", "properties": {"author": {"$ref": "./user.json"}}},
            file=str(post),
            base_dir=post.parent,
        )
        assert resolved["properties"]["author"] == {"$ref": "./user.json"}

    def test_external_legacy_pointer_is_normalized(self, write_schema):
        other = write_schema(
            "other.json", {"definitions": {"Thing": {"type": "object"}}}
        )
        resolved = resolve_json_schema(
            {"properties": {"t": {"$ref": "other.json#/definitions/Thing"}}},
            base_dir=other.parent,
        )
        assert resolved["properties"]["t"]["$ref"] == "other.json#/$defs/Thing"

    def test_external_ref_requires_base_dir(self):
        schema = {"properties": {"author": {"$ref": "./user.json"}}}
        with pytest.raises(ResolveError, match="requires base_dir"):
            resolve_json_schema(schema)

    def test_missing_external_file(self, tmp_path):
        schema = {"properties": {"author": {"$ref": "./missing.json"}}}
        with pytest.raises(ReferenceResolutionError) as exc_info:
            resolve_json_schema(schema, base_dir=tmp_path)
        assert exc_info.value.ref_path == "./missing.json"

    def test_badly_encoded_external_file(self, tmp_path):
        (tmp_path / "user.json").write_bytes(b'{"title": "\xff"}')
        schema = {"properties": {"author": {"$ref": "./user.json"}}}
        with pytest.raises(ReferenceResolutionError, match="invalid UTF-8") as exc_info:
            resolve_json_schema(schema, base_dir=tmp_path)
        assert exc_info.value.ref_path == "./user.json"

    def test_external_target_must_be_object(self, write_schema):
        other = write_schema("other.json", {"title": "x"})
        schema = {"properties": {"t": {"$ref": "other.json#/title"}}}
        with pytest.raises(ResolveError, match="Invalid \\$ref target"):
            resolve_json_schema(schema, base_dir=other.parent)

    def test_external_document_loaded_once_per_call(self, tmp_path):
        calls = []

        class CountingLoader:
            def load(self, path):
                calls.append(path)
                return {"type": "object"}

        schema = {
            "properties": {
                "a": {"$ref": "./user.json"},
                "b": {"$ref": "./user.json#"},
            }
        }
        resolver = JSONRefResolver("post.json", tmp_path, loader=CountingLoader())
        resolver.resolve_references(schema)
        assert len(calls) == 1

        # A second call starts with an empty cache.
        resolver.resolve_references(schema)
        assert len(calls) == 2
