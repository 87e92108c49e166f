"""Pick the view builder matching a document's version marker.

* ``swagger: "2.0"`` -> :class:`~specview.generator.swagger2.Swagger2Builder`
* ``openapi: "3.*"`` -> :class:`~specview.generator.openapi3.OpenAPI3Builder`
* no marker, but a legacy shape (``swaggerVersion`` or an ``apis`` list)
  -> :class:`~specview.generator.swagger1.Swagger1Builder`

Anything else raises :class:`~specview.exceptions.UnsupportedVersion`
rather than being handed to the legacy builder.
"""

from __future__ import annotations

from typing import Any

from specview.exceptions import UnsupportedVersion
from specview.generator.base import ViewBuilder
from specview.generator.openapi3 import OpenAPI3Builder
from specview.generator.swagger1 import Swagger1Builder
from specview.generator.swagger2 import Swagger2Builder
from specview.models import SpecVersion

_BUILDERS: dict[SpecVersion, type[ViewBuilder]] = {
    SpecVersion.SWAGGER_1: Swagger1Builder,
    SpecVersion.SWAGGER_2: Swagger2Builder,
    SpecVersion.OPENAPI_3: OpenAPI3Builder,
}


def detect_version(document: dict[str, Any]) -> SpecVersion:
    """Return the grammar *document* is written in.

    Raises:
        UnsupportedVersion: If the marker is missing or names another version.
    """
    if "swagger" in document:
        marker = str(document["swagger"])
        if marker == "2.0":
            return SpecVersion.SWAGGER_2
        raise UnsupportedVersion(
            f"Unsupported Swagger version: {marker}. "
            "Swagger 2.0 must declare swagger: \"2.0\"."
        )

    if "openapi" in document:
        marker = str(document["openapi"])
        if marker.startswith("3."):
            return SpecVersion.OPENAPI_3
        raise UnsupportedVersion(
            f"Unsupported OpenAPI version: {marker}. Only OpenAPI 3.x is supported."
        )

    if "swaggerVersion" in document or isinstance(document.get("apis"), list):
        legacy = str(document.get("swaggerVersion", "1"))
        if legacy.startswith("1"):
            return SpecVersion.SWAGGER_1
        raise UnsupportedVersion(f"Unsupported swaggerVersion: {legacy}")

    raise UnsupportedVersion(
        "Missing version marker: expected 'swagger: \"2.0\"', 'openapi: \"3.x\"' "
        "or a Swagger 1.x 'apis' list."
    )


def select_builder(document: dict[str, Any]) -> ViewBuilder:
    """Return a builder instance for *document*'s grammar."""
    return _BUILDERS[detect_version(document)]()
