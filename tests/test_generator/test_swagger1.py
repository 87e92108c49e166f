"""Tests for the legacy Swagger 1.x view builder."""

from __future__ import annotations

from typing import Any

import pytest

from specview.generator.swagger1 import Swagger1Builder
from specview.models import Method, SecurityKind, SpecVersion, ViewModel


@pytest.fixture
def view(legacy_doc: dict[str, Any]) -> ViewModel:
    return Swagger1Builder().build(legacy_doc)


def _method(view: ViewModel, name: str) -> Method:
    return next(m for m in view.methods if m.method_name == name)


class TestLegacyDocument:
    def test_document_fields(self, view: ViewModel) -> None:
        assert view.version is SpecVersion.SWAGGER_1
        assert view.domain == "http://legacy.example.com/api"
        assert view.description == "Legacy pets"

    def test_options_always_skipped(self, view: ViewModel) -> None:
        assert all(m.method != "OPTIONS" for m in view.methods)
        assert "petOptions" not in [m.method_name for m in view.methods]

    def test_duplicate_nicknames_suffixed(self, view: ViewModel) -> None:
        assert [m.method_name for m in view.methods] == [
            "getPetById",
            "updatePetWithForm",
            "getPetById_1",
        ]

    def test_models_become_definitions(self, view: ViewModel) -> None:
        (pet,) = view.definitions
        assert pet.name == "Pet"
        assert pet.ts_type == "{ 'id'?: number; 'name'?: string }"

    def test_authorizations(self, view: ViewModel) -> None:
        assert view.is_secure
        assert view.is_secure_api_key
        assert view.is_secure_basic
        assert not view.is_secure_token
        api_key = next(s for s in view.security_schemes if s.kind is SecurityKind.API_KEY)
        assert api_key.param_name == "api_key"
        assert api_key.location == "header"


class TestLegacyMethods:
    def test_param_type_locations(self, view: ViewModel) -> None:
        method = _method(view, "getPetById")
        (pet_id,) = method.parameters
        assert pet_id.is_path_parameter
        assert pet_id.ts_type == "number"
        assert method.headers[0].value == "'application/json'"
        assert method.responses == []

    def test_operation_authorizations(self, view: ViewModel) -> None:
        method = _method(view, "getPetById")
        assert method.is_secure
        assert method.is_secure_api_key
        assert not method.is_secure_basic

    def test_notes_used_as_summary(self, view: ViewModel) -> None:
        method = _method(view, "updatePetWithForm")
        assert method.summary == "Updates a pet"
        assert method.is_form_method
        assert method.is_secure_basic

    def test_unsecured_operation(self, view: ViewModel) -> None:
        method = _method(view, "getPetById_1")
        assert not method.is_secure
        (status,) = method.parameters
        assert status.is_pattern_type
        assert status.pattern == "status.*"
