"""Tests for oasmodel.document.walk."""

from __future__ import annotations

from oasmodel.document import (
    OpenAPI,
    Parameter,
    count_component_references,
    iter_component_references,
)
from oasmodel.parser import decode_value


class TestIterComponentReferences:
    """References are reported with wire-key paths and never followed."""

    def test_petstore_counts(self, petstore: OpenAPI) -> None:
        assert dict(count_component_references(petstore)) == {
            "Pets": 1,
            "Pet": 3,
            "Owner": 1,
            "Error": 1,
        }

    def test_paths_use_wire_keys(self, petstore: OpenAPI) -> None:
        paths = {path for path, _ in iter_component_references(petstore)}
        assert ("components", "schemas", "Pets", "items") in paths
        assert (
            "paths", "/pets", "post", "requestBody", "content", "application/json", "schema"
        ) in paths
        assert ("components", "schemas", "Pet", "properties", "owner") in paths

    def test_flattened_union_adds_no_segment(self) -> None:
        param = decode_value(
            Parameter,
            {"name": "pet", "in": "query", "schema": {"$ref": "#/components/schemas/Pet"}},
        )
        found = list(iter_component_references(param))
        assert [(path, ref.name) for path, ref in found] == [(("schema",), "Pet")]

    def test_generic_references_are_not_schema_references(self) -> None:
        param = decode_value(Parameter, {"name": "q", "in": "query", "schema": {"type": "string"}})
        assert list(iter_component_references(param)) == []

    def test_prefix_path(self, petstore: OpenAPI) -> None:
        schemas = petstore.components.schemas
        found = list(iter_component_references(schemas["Pets"], ("Pets",)))
        assert [path for path, _ in found] == [("Pets", "items")]
