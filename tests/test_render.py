"""Tests for specview.render -- custom Jinja2 templates."""

from __future__ import annotations

from typing import Any

import pytest

from specview.exceptions import InvalidUsageError
from specview.generator import build_view
from specview.models import GenerationOptions, ViewModel
from specview.render import render_view


@pytest.fixture
def view(swagger2_doc: dict[str, Any]) -> ViewModel:
    return build_view(swagger2_doc, GenerationOptions(class_name="PetApi"), "custom")


class TestRenderView:
    def test_class_template_sees_camel_case_context(self, view: ViewModel) -> None:
        rendered = render_view(view, "class {{ className }} // {{ domain }}")
        assert rendered == "class PetApi // https://petstore.example.com/v2"

    def test_method_template_included(self, view: ViewModel) -> None:
        class_template = (
            "{% for method in methods %}\n"
            "{% include 'method' %}\n"
            "{% endfor %}\n"
        )
        method_template = "{{ method.methodName }}:{{ method.method }}\n"
        rendered = render_view(view, class_template, method_template)
        assert rendered.splitlines() == [
            "listPets:GET",
            "createPet:POST",
            "getPetsByPetId:GET",
            "deletePet:DELETE",
            "getInventory:GET",
        ]

    def test_extra_context(self, view: ViewModel) -> None:
        rendered = render_view(view, "// {{ banner }}", extra={"banner": "generated"})
        assert rendered == "// generated"

    def test_no_html_escaping(self, view: ViewModel) -> None:
        template = "{{ methods[0].responses[0].tsType }}"
        assert render_view(view, template) == "Array<Pet>"

    def test_empty_template_rejected(self, view: ViewModel) -> None:
        with pytest.raises(InvalidUsageError, match="class template is required"):
            render_view(view, "   ")

    def test_undefined_variable_rejected(self, view: ViewModel) -> None:
        with pytest.raises(InvalidUsageError, match="Template error"):
            render_view(view, "{{ notAField }}")

    def test_syntax_error_rejected(self, view: ViewModel) -> None:
        with pytest.raises(InvalidUsageError, match="Template error"):
            render_view(view, "{% for m in methods %}")
