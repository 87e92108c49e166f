"""View builder for legacy Swagger 1.x documents.

Legacy documents list resources under ``apis``; each entry has a ``path``
and a list of ``operations`` carrying ``method``, ``nickname``,
``parameters`` (located by ``paramType``), ``produces`` and
``authorizations``.  Models live under ``models`` and authorization schemes
under the top-level ``authorizations`` object.

``OPTIONS`` operations are always skipped for this grammar, unlike the
Swagger 2.0 and OpenAPI 3.x builders.  Legacy documents declare no
response content types, so methods carry no response descriptors.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, Optional

from specview.generator.base import (
    AUTHORIZED_METHODS,
    BuildContext,
    RawOperation,
    ViewBuilder,
    quoted,
)
from specview.generator.security import merge_security
from specview.models import Header, Method, SpecVersion

logger = logging.getLogger(__name__)


class Swagger1Builder(ViewBuilder):
    """Builds views from legacy ``apis`` / ``models`` documents."""

    version = SpecVersion.SWAGGER_1
    location_field = "paramType"

    def domain(self, document: dict[str, Any]) -> str:
        return str(document.get("basePath") or "")

    def description(self, document: dict[str, Any]) -> Optional[str]:
        return document.get("description") or super().description(document)

    def definitions_table(self, document: dict[str, Any]) -> dict[str, Any]:
        models = document.get("models")
        return models if isinstance(models, dict) else {}

    def security_table(self, document: dict[str, Any]) -> Optional[dict[str, Any]]:
        return document.get("authorizations")

    def build_methods(self, ctx: BuildContext) -> Iterator[Method]:
        schemes = self.security_table(ctx.document)
        for op in _iter_legacy_operations(ctx.document.get("apis")):
            node = op.node
            authorizations = node.get("authorizations")
            requirements = [authorizations] if isinstance(authorizations, dict) else None
            security = merge_security(schemes, None, requirements)

            headers: list[Header] = []
            if node.get("produces"):
                headers.append(Header(name="Accept", value=quoted(node["produces"])))

            raw_parameters = node.get("parameters")
            yield self.assemble_method(
                ctx,
                op,
                method_name=self.allocate_name(ctx, op, node.get("nickname")),
                security=security,
                is_secure=bool(authorizations),
                parameters=self.classify_parameters(
                    ctx, raw_parameters if isinstance(raw_parameters, list) else []
                ),
                headers=headers,
                responses=[],
                summary=node.get("summary") or node.get("notes"),
            )


def _iter_legacy_operations(apis: Any) -> Iterator[RawOperation]:
    if not isinstance(apis, list):
        return
    for api in apis:
        if not isinstance(api, dict):
            continue
        path = str(api.get("path", ""))
        for node in api.get("operations") or []:
            if not isinstance(node, dict):
                continue
            verb = str(node.get("method", "")).upper()
            if verb == "OPTIONS" or verb not in AUTHORIZED_METHODS:
                logger.debug("Skipping %r operation under %s", verb, path)
                continue
            yield RawOperation(path=path, verb=verb, node=node, shared_parameters=[])
