"""Tests for the Swagger 2.0 view builder."""

from __future__ import annotations

from typing import Any

import pytest

from specview.exceptions import AmbiguousContentType, BrokenReference
from specview.generator.swagger2 import Swagger2Builder
from specview.models import (
    GenerationOptions,
    Header,
    Method,
    SecurityKind,
    SpecVersion,
    TargetType,
    ViewModel,
)


@pytest.fixture
def view(swagger2_doc: dict[str, Any]) -> ViewModel:
    return Swagger2Builder().build(swagger2_doc, GenerationOptions(class_name="PetApi"))


def _method(view: ViewModel, name: str) -> Method:
    return next(m for m in view.methods if m.method_name == name)


class TestDocumentLevel:
    def test_version_and_domain(self, view: ViewModel) -> None:
        assert view.version is SpecVersion.SWAGGER_2
        assert view.domain == "https://petstore.example.com/v2"
        assert view.description == "Pet store API"
        assert view.class_name == "PetApi"

    def test_domain_empty_without_host(self, swagger2_doc: dict[str, Any]) -> None:
        del swagger2_doc["host"]
        assert Swagger2Builder().build(swagger2_doc).domain == ""

    def test_method_order_follows_document(self, view: ViewModel) -> None:
        assert [m.method_name for m in view.methods] == [
            "listPets",
            "createPet",
            "getPetsByPetId",
            "deletePet",
            "getInventory",
        ]

    def test_security_flags_promoted(self, view: ViewModel) -> None:
        assert view.is_secure
        assert view.is_secure_token
        assert view.is_secure_api_key
        assert not view.is_secure_basic

    def test_security_schemes(self, view: ViewModel) -> None:
        by_name = {s.name: s for s in view.security_schemes}
        assert by_name["petstore_auth"].kind is SecurityKind.OAUTH2
        assert by_name["api_key"].param_name == "X-API-Key"
        assert by_name["api_key"].location == "header"

    def test_definitions(self, view: ViewModel) -> None:
        assert len(view.definitions) == 1
        pet = view.definitions[0]
        assert pet.name == "Pet"
        assert pet.description == "A pet"
        assert pet.ts_type == "{ 'id'?: number; 'name': string }"


class TestMethods:
    def test_list_pets(self, view: ViewModel) -> None:
        method = _method(view, "listPets")
        assert method.method == "GET"
        assert method.is_get and not method.is_post
        assert method.summary == "List pets"
        assert method.tags == ["Pets"]
        assert method.is_secure_api_key and not method.is_secure_token
        assert method.headers == [
            Header(name="Accept", value="'application/json'"),
            Header(name="Content-Type", value="'application/json'"),
        ]

    def test_shared_parameter_ref_resolved(self, view: ViewModel) -> None:
        limit, status = _method(view, "listPets").parameters
        assert limit.name == "limit"
        assert limit.default_json == "20"
        assert limit.description == "Maximum number of items"
        assert status.is_singleton
        assert status.singleton == "available"

    def test_only_success_responses(self, view: ViewModel) -> None:
        responses = _method(view, "listPets").responses
        assert len(responses) == 1
        assert responses[0].status_code == "200"
        assert responses[0].content_type == "application/json"
        assert responses[0].ts_type == "Array<Pet>"
        assert responses[0].is_last

    def test_body_parameter(self, view: ViewModel) -> None:
        method = _method(view, "createPet")
        assert method.is_post
        assert method.has_body
        assert not method.all_optional
        (pet,) = method.parameters
        assert pet.is_body_parameter
        assert pet.ts_type == "Pet"
        assert pet.cardinality == ""

    def test_operation_security_replaces_global(self, view: ViewModel) -> None:
        method = _method(view, "createPet")
        assert method.is_secure_token
        assert not method.is_secure_api_key

    def test_response_without_schema_is_void(self, view: ViewModel) -> None:
        (created,) = _method(view, "createPet").responses
        assert created.status_code == "201"
        assert created.ts_type == "void"

    def test_derived_name_and_description_summary(self, view: ViewModel) -> None:
        method = _method(view, "getPetsByPetId")
        assert method.summary == "Find pet by id"
        (pet_id,) = method.parameters
        assert pet_id.is_path_parameter
        assert pet_id.required
        assert method.all_optional

    def test_own_parameters_before_path_level(self, view: ViewModel) -> None:
        method = _method(view, "deletePet")
        assert [p.name for p in method.parameters] == ["X-Request-ID", "petId"]
        assert method.parameters[0].camel_case_name == "xRequestId"
        assert method.has_extra_header

    def test_empty_operation_security(self, view: ViewModel) -> None:
        method = _method(view, "deletePet")
        assert method.is_secure
        assert not (method.is_secure_token or method.is_secure_api_key or method.is_secure_basic)
        assert method.responses == []

    def test_one_descriptor_per_produced_type(self, view: ViewModel) -> None:
        method = _method(view, "getInventory")
        assert method.headers[0].value == "'application/json, application/xml'"
        assert [r.content_type for r in method.responses] == [
            "application/json",
            "application/xml",
        ]
        assert [r.is_last for r in method.responses] == [False, True]
        assert method.responses[0].ts_type == "{ [key: string]: number }"


class TestOptions:
    def test_destination_from_first_tag(self, swagger2_doc: dict[str, Any]) -> None:
        options = GenerationOptions(class_name="PetApi", multiple=True, path="./out")
        view = Swagger2Builder().build(swagger2_doc, options)
        assert _method(view, "listPets").destination == "pets"
        assert _method(view, "getInventory").destination == "default"

    def test_no_destination_without_multiple(self, view: ViewModel) -> None:
        assert all(m.destination is None for m in view.methods)

    def test_strict_content_type(self, swagger2_doc: dict[str, Any]) -> None:
        swagger2_doc["consumes"] = ["application/json", "application/xml"]
        with pytest.raises(AmbiguousContentType):
            Swagger2Builder().build(swagger2_doc, GenerationOptions(strict_content_type=True))

    def test_first_content_type_when_lenient(self, swagger2_doc: dict[str, Any]) -> None:
        swagger2_doc["consumes"] = ["application/xml", "application/json"]
        view = Swagger2Builder().build(swagger2_doc)
        assert Header(name="Content-Type", value="'application/xml'") in view.methods[0].headers

    def test_react_target_sets_node_and_es6(self, swagger2_doc: dict[str, Any]) -> None:
        view = Swagger2Builder().build(swagger2_doc, target=TargetType.REACT)
        assert view.is_node
        assert view.is_es6


class TestErrors:
    def test_broken_parameter_ref(self, swagger2_doc: dict[str, Any]) -> None:
        swagger2_doc["paths"]["/pets"]["get"]["parameters"].append(
            {"$ref": "#/parameters/missing"}
        )
        with pytest.raises(BrokenReference) as exc_info:
            Swagger2Builder().build(swagger2_doc)
        assert exc_info.value.pointer == "#/parameters/missing"

    def test_unknown_verbs_skipped(self, swagger2_doc: dict[str, Any]) -> None:
        swagger2_doc["paths"]["/pets"]["x-internal"] = {"operationId": "hidden"}
        swagger2_doc["paths"]["/pets"]["trace"] = {"operationId": "traceIt"}
        names = [m.method_name for m in Swagger2Builder().build(swagger2_doc).methods]
        assert "hidden" not in names
        assert "traceIt" not in names
