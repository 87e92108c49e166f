"""Tests for specview.parser.resolver -- table-driven $ref resolution."""

from __future__ import annotations

from typing import Any

import pytest

from specview.exceptions import BrokenReference, SpecParseError
from specview.parser.resolver import (
    ReferenceResolver,
    RefKind,
    is_ref,
    parse_pointer,
    ref_name,
)


# ---------------------------------------------------------------------------
# Pointer parsing
# ---------------------------------------------------------------------------


class TestParsePointer:
    def test_internal_pointer(self) -> None:
        assert parse_pointer("#/components/schemas/Pet") == ("components", "schemas", "Pet")

    def test_escapes_are_decoded(self) -> None:
        assert parse_pointer("#/paths/~1pets~0v2") == ("paths", "/pets~v2")

    def test_bare_name(self) -> None:
        assert parse_pointer("limit") == ("limit",)

    @pytest.mark.parametrize(
        "pointer",
        ["other.yaml#/definitions/Pet", "#Pet", "", "#/definitions//Pet"],
    )
    def test_unsupported_pointers_raise(self, pointer: str) -> None:
        with pytest.raises(BrokenReference):
            parse_pointer(pointer)

    def test_ref_name_is_last_segment(self) -> None:
        assert ref_name("#/definitions/Pet") == "Pet"
        assert ref_name("Pet") == "Pet"

    def test_is_ref(self) -> None:
        assert is_ref({"$ref": "#/definitions/Pet"})
        assert not is_ref({"type": "string"})
        assert not is_ref("#/definitions/Pet")


# ---------------------------------------------------------------------------
# resolve()
# ---------------------------------------------------------------------------


class TestResolve:
    def test_swagger2_parameter(self, swagger2_doc: dict[str, Any]) -> None:
        resolver = ReferenceResolver(swagger2_doc)
        param = resolver.resolve("#/parameters/limitParam", RefKind.PARAMETER)
        assert param["name"] == "limit"
        assert param is swagger2_doc["parameters"]["limitParam"]

    def test_openapi3_parameter(self, openapi3_doc: dict[str, Any]) -> None:
        resolver = ReferenceResolver(openapi3_doc)
        param = resolver.resolve("#/components/parameters/userId", RefKind.PARAMETER)
        assert param["in"] == "path"

    def test_openapi3_request_body(self, openapi3_doc: dict[str, Any]) -> None:
        resolver = ReferenceResolver(openapi3_doc)
        body = resolver.resolve("#/components/requestBodies/UserBody", RefKind.REQUEST_BODY)
        assert body["required"] is True

    def test_openapi3_response(self, openapi3_doc: dict[str, Any]) -> None:
        resolver = ReferenceResolver(openapi3_doc)
        response = resolver.resolve("#/components/responses/UserResponse", RefKind.RESPONSE)
        assert response["description"] == "A user"

    def test_bare_name_parameter(self, swagger2_doc: dict[str, Any]) -> None:
        resolver = ReferenceResolver(swagger2_doc)
        assert resolver.resolve("limitParam", RefKind.PARAMETER)["name"] == "limit"

    def test_bare_name_schema_searches_legacy_models(self, legacy_doc: dict[str, Any]) -> None:
        resolver = ReferenceResolver(legacy_doc)
        assert resolver.resolve("Pet", RefKind.SCHEMA)["id"] == "Pet"

    def test_missing_name_raises_with_pointer(self, swagger2_doc: dict[str, Any]) -> None:
        resolver = ReferenceResolver(swagger2_doc)
        with pytest.raises(BrokenReference, match="not found") as exc_info:
            resolver.resolve("#/parameters/offsetParam", RefKind.PARAMETER)
        assert exc_info.value.pointer == "#/parameters/offsetParam"

    def test_wrong_table_for_kind_raises(self, swagger2_doc: dict[str, Any]) -> None:
        resolver = ReferenceResolver(swagger2_doc)
        with pytest.raises(BrokenReference, match="not a parameter pointer"):
            resolver.resolve("#/definitions/Pet", RefKind.PARAMETER)

    def test_missing_table_raises(self, swagger2_doc: dict[str, Any]) -> None:
        resolver = ReferenceResolver(swagger2_doc)
        with pytest.raises(BrokenReference, match="document has no"):
            resolver.resolve("#/components/parameters/limit", RefKind.PARAMETER)

    def test_missing_bare_name_raises(self, swagger2_doc: dict[str, Any]) -> None:
        resolver = ReferenceResolver(swagger2_doc)
        with pytest.raises(BrokenReference, match="no shared parameter named 'nope'"):
            resolver.resolve("nope", RefKind.PARAMETER)

    def test_non_object_target_raises(self) -> None:
        resolver = ReferenceResolver({"parameters": {"limit": "not an object"}})
        with pytest.raises(BrokenReference, match="not an object"):
            resolver.resolve("#/parameters/limit", RefKind.PARAMETER)

    def test_broken_reference_is_a_parse_error(self) -> None:
        assert issubclass(BrokenReference, SpecParseError)
        assert BrokenReference("x", "y").exit_code == 7


# ---------------------------------------------------------------------------
# deref()
# ---------------------------------------------------------------------------


class TestDeref:
    def test_plain_node_returned_unchanged(self) -> None:
        node = {"name": "q", "in": "query"}
        assert ReferenceResolver({}).deref(node, RefKind.PARAMETER) is node

    def test_follows_chains(self) -> None:
        doc = {
            "components": {
                "responses": {
                    "Alias": {"$ref": "#/components/responses/Real"},
                    "Real": {"description": "real"},
                }
            }
        }
        resolver = ReferenceResolver(doc)
        node = resolver.deref({"$ref": "#/components/responses/Alias"}, RefKind.RESPONSE)
        assert node == {"description": "real"}

    def test_cycle_raises(self) -> None:
        doc = {
            "parameters": {
                "a": {"$ref": "#/parameters/b"},
                "b": {"$ref": "#/parameters/a"},
            }
        }
        with pytest.raises(BrokenReference, match="circular reference"):
            ReferenceResolver(doc).deref({"$ref": "#/parameters/a"}, RefKind.PARAMETER)

    def test_document_is_not_modified(self, openapi3_doc: dict[str, Any]) -> None:
        before = repr(openapi3_doc)
        resolver = ReferenceResolver(openapi3_doc)
        resolver.deref({"$ref": "#/components/requestBodies/UserBody"}, RefKind.REQUEST_BODY)
        assert repr(openapi3_doc) == before
