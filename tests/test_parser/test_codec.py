"""Tests for oasmodel.parser.codec."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import yaml

from oasmodel.document import OpenAPI, Schema
from oasmodel.exceptions import (
    DecodeError,
    MalformedInput,
    MaxDepthExceeded,
    MissingRequiredField,
    TypeMismatch,
    format_pointer,
)
from oasmodel.parser import decode, decode_value, encode, encode_value, parse_text
from oasmodel.parser.codec import DEFAULT_MAX_DEPTH, json_type_name, locate, normalize

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


# ---------------------------------------------------------------------------
# parse_text
# ---------------------------------------------------------------------------


class TestParseText:
    """JSON is tried first, then YAML."""

    def test_json(self) -> None:
        assert parse_text('{"a": 1}') == {"a": 1}

    def test_yaml(self) -> None:
        assert parse_text("a: 1\nb: [x, y]\n") == {"a": 1, "b": ["x", "y"]}

    def test_bytes_with_bom(self) -> None:
        assert parse_text(b'\xef\xbb\xbf{"a": 1}') == {"a": 1}

    def test_invalid_utf8(self) -> None:
        with pytest.raises(MalformedInput, match="UTF-8"):
            parse_text(b"\xff\xfe\xfa")

    def test_empty(self) -> None:
        with pytest.raises(MalformedInput, match="empty"):
            parse_text("   ")

    def test_json_hint_is_final(self) -> None:
        with pytest.raises(MalformedInput, match="invalid JSON"):
            parse_text("a: 1", hint="json")

    def test_unparseable(self) -> None:
        with pytest.raises(MalformedInput):
            parse_text("a: [1, 2\nb: {")


# ---------------------------------------------------------------------------
# normalize
# ---------------------------------------------------------------------------


class TestNormalize:
    """Non-string keys are stringified and nesting is capped."""

    def test_yaml_scalar_keys(self) -> None:
        assert normalize({200: "a", True: "b", None: "c", 1.5: "d"}) == {
            "200": "a",
            "true": "b",
            "null": "c",
            "1.5": "d",
        }

    def test_nested_keys(self) -> None:
        assert normalize({"responses": [{404: {"x": 1}}]}) == {"responses": [{"404": {"x": 1}}]}

    def test_depth_limit_counts_root(self) -> None:
        assert normalize({"a": {}}, max_depth=2) == {"a": {}}
        with pytest.raises(MaxDepthExceeded) as exc_info:
            normalize({"a": {"b": []}}, max_depth=2)
        assert exc_info.value.path == ("a", "b")

    def test_scalars_do_not_count(self) -> None:
        assert normalize({"a": "deep"}, max_depth=1) == {"a": "deep"}

    def test_yaml_alias_cycle(self) -> None:
        data = yaml.safe_load("a: &loop [*loop]")
        with pytest.raises(MaxDepthExceeded):
            normalize(data, max_depth=10)


# ---------------------------------------------------------------------------
# Round trip
# ---------------------------------------------------------------------------


class TestRoundTrip:
    """decode/encode are inverse on canonical documents."""

    def test_canonical_json_reproduced(
        self, petstore: OpenAPI, petstore_raw: dict[str, Any]
    ) -> None:
        assert json.loads(encode(petstore)) == petstore_raw

    def test_decode_encode_decode(self, petstore: OpenAPI) -> None:
        assert decode(encode(petstore)) == petstore

    def test_yaml_round_trip(self, petstore: OpenAPI, petstore_raw: dict[str, Any]) -> None:
        text = encode(petstore, format="yaml")
        assert yaml.safe_load(text) == petstore_raw
        assert decode(text) == petstore

    def test_property_order(self, petstore: OpenAPI) -> None:
        encoded = json.loads(encode(petstore))
        properties = encoded["components"]["schemas"]["Pet"]["properties"]
        assert list(properties) == ["id", "name", "tag", "owner"]

    def test_json_layout(self, petstore: OpenAPI) -> None:
        data = encode(petstore)
        assert data.startswith(b'{\n  "openapi": "3.0.3",\n  "info": {')
        assert data.endswith(b"}\n")

    def test_indent(self, petstore: OpenAPI) -> None:
        assert encode(petstore, indent=4).startswith(b'{\n    "openapi"')

    def test_yaml_layout(self, petstore: OpenAPI) -> None:
        text = encode(petstore, format="yaml").decode("utf-8")
        assert text.startswith("openapi: 3.0.3\ninfo:\n  title: Swagger Petstore\n")
        assert text.endswith("\n")

    def test_unicode_is_not_escaped(self, minimal_raw: dict[str, Any]) -> None:
        raw = dict(minimal_raw)
        raw["info"] = {"title": "Café", "version": "1"}
        doc = decode(json.dumps(raw))
        assert "Café".encode("utf-8") in encode(doc)
        assert "Café".encode("utf-8") in encode(doc, format="yaml")

    def test_unknown_format(self, petstore: OpenAPI) -> None:
        with pytest.raises(ValueError, match="unknown format"):
            encode(petstore, format="toml")


# ---------------------------------------------------------------------------
# YAML input
# ---------------------------------------------------------------------------


class TestYamlDecode:
    """YAML documents decode to the same model as JSON."""

    def test_unquoted_status_codes(self) -> None:
        doc = decode((FIXTURES_DIR / "petstore.yaml").read_text(encoding="utf-8"))
        assert list(doc.paths["/pets"].get.responses) == ["200", "default"]

    def test_vendor_extension_dropped(self) -> None:
        doc = decode((FIXTURES_DIR / "petstore.yaml").read_text(encoding="utf-8"))
        assert "x-logo" not in json.loads(encode(doc))["info"]


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestDecodeErrors:
    """Validation failures become exactly one typed error."""

    def test_not_a_mapping(self) -> None:
        with pytest.raises(MalformedInput, match="found array"):
            decode("[1, 2]")

    def test_type_mismatch(self, minimal_raw: dict[str, Any]) -> None:
        raw = dict(minimal_raw)
        raw["info"] = {"title": 5, "version": "1"}
        with pytest.raises(TypeMismatch) as exc_info:
            decode(json.dumps(raw))
        error = exc_info.value
        assert error.field == "title"
        assert error.expected == "string"
        assert error.found == "integer"
        assert str(error) == "#/info/title: 'title' expected string, found integer"

    def test_union_member_errors_are_combined(self) -> None:
        with pytest.raises(TypeMismatch) as exc_info:
            decode_value(Schema, {"minimum": "zero"})
        assert exc_info.value.expected == "integer or number"

    def test_error_count(self) -> None:
        with pytest.raises(DecodeError) as exc_info:
            decode('{"openapi": "3.0.3", "info": {"title": "t"}}')
        error = exc_info.value
        assert isinstance(error, MissingRequiredField)
        assert error.path == ("info", "version")
        assert error.error_count == 2

    def test_default_depth_limit(self) -> None:
        nested: Any = "leaf"
        for _ in range(DEFAULT_MAX_DEPTH + 5):
            nested = [nested]
        raw = {
            "openapi": "3.0.3",
            "info": {"title": "t", "version": "1"},
            "paths": {},
            "components": {"schemas": {"Deep": {"example": nested}}},
        }
        with pytest.raises(MaxDepthExceeded) as exc_info:
            decode(json.dumps(raw))
        assert exc_info.value.limit == DEFAULT_MAX_DEPTH

    def test_max_depth_argument(self, petstore_text: str) -> None:
        with pytest.raises(MaxDepthExceeded):
            decode(petstore_text, max_depth=4)

    def test_json_too_deep_to_parse(self) -> None:
        text = '{"openapi": "3.0.0", "x": ' + "[" * 5000 + "]" * 5000 + "}"
        with pytest.raises(MaxDepthExceeded) as exc_info:
            decode(text)
        assert exc_info.value.limit == DEFAULT_MAX_DEPTH

    def test_yaml_too_deep_to_parse(self) -> None:
        text = "openapi: 3.0.0\nx: " + "[" * 5000 + "]" * 5000 + "\n"
        with pytest.raises(MaxDepthExceeded):
            decode(text, hint="yaml")

    def test_limit_beyond_stack_still_typed(self) -> None:
        nested: Any = "leaf"
        for _ in range(3000):
            nested = [nested]
        with pytest.raises(MaxDepthExceeded) as exc_info:
            decode_value(Schema, {"example": nested}, max_depth=10000)
        assert exc_info.value.limit == 10000


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestHelpers:
    """Pointer rendering, location mapping and JSON type names."""

    def test_format_pointer_escapes(self) -> None:
        assert format_pointer(()) == "#"
        assert format_pointer(("paths", "/a~b", "get", 0)) == "#/paths/~1a~0b/get/0"

    def test_locate_skips_tags(self) -> None:
        raw = {"paths": {"/p": {"parameters": [{"schema": {"type": 1}}]}}}
        loc = ("paths", "/p", "parameters", 0, "inline", "representation",
               "SchemaRepresentation", "schema", "inline", "type")
        assert locate(raw, loc) == ("paths", "/p", "parameters", 0, "schema", "type")

    @pytest.mark.parametrize(
        ("value", "name"),
        [(None, "null"), (True, "boolean"), (1, "integer"), (1.5, "number"),
         ("s", "string"), ([], "array"), ({}, "object")],
    )
    def test_json_type_name(self, value: Any, name: str) -> None:
        assert json_type_name(value) == name

    def test_encode_value_container(self) -> None:
        assert encode_value({"a": Schema(nullable=True)}) == {"a": {"nullable": True}}
