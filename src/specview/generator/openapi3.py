"""View builder for OpenAPI 3.x documents (``openapi: "3.x.y"``).

OpenAPI 3 moves request payloads out of the parameter list into
``requestBody`` and declares content types per response.  This builder folds
both back into the shape the other grammars produce:

* the request body becomes a trailing pseudo-parameter (see
  :func:`~specview.generator.params.request_body_parameter`);
* ``Accept`` lists every content type of the 200/201 responses, in order of
  first appearance;
* ``Content-Type`` is the content type chosen for the request body.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional

from specview.generator.base import (
    SUCCESS_STATUSES,
    BuildContext,
    RawOperation,
    ViewBuilder,
    iter_operations,
    quoted,
)
from specview.generator.params import request_body_parameter
from specview.generator.security import merge_security
from specview.models import Header, Method, ResponseDescriptor, SpecVersion
from specview.parser.resolver import RefKind


class OpenAPI3Builder(ViewBuilder):
    """Builds views from OpenAPI 3.x ``paths`` and ``components``."""

    version = SpecVersion.OPENAPI_3

    def domain(self, document: dict[str, Any]) -> str:
        servers = document.get("servers")
        if isinstance(servers, list) and servers and isinstance(servers[0], dict):
            return str(servers[0].get("url", "")).rstrip("/")
        return ""

    def definitions_table(self, document: dict[str, Any]) -> dict[str, Any]:
        schemas = _components(document).get("schemas")
        return schemas if isinstance(schemas, dict) else {}

    def security_table(self, document: dict[str, Any]) -> Optional[dict[str, Any]]:
        return _components(document).get("securitySchemes")

    def build_methods(self, ctx: BuildContext) -> Iterator[Method]:
        doc = ctx.document
        for op in iter_operations(doc.get("paths")):
            node = op.node
            security = merge_security(
                self.security_table(doc), doc.get("security"), node.get("security")
            )
            method_name = self.allocate_name(ctx, op, node.get("operationId"))

            own = node.get("parameters")
            raw_parameters = (own if isinstance(own, list) else []) + op.shared_parameters
            parameters = self.classify_parameters(ctx, raw_parameters)

            responses = self._responses(ctx, op)
            headers: list[Header] = []
            accept = list(dict.fromkeys(r.content_type for r in responses))
            if accept:
                headers.append(Header(name="Accept", value=quoted(accept)))

            body = ctx.resolver.deref(node.get("requestBody"), RefKind.REQUEST_BODY)
            if isinstance(body, dict):
                body_parameter, content_type = request_body_parameter(
                    body,
                    name_override=ctx.options.request_body_parameter_name,
                    operation=node,
                    strict=ctx.options.strict_content_type,
                    where=f"{op.verb} {op.path}",
                    type_mapper=ctx.type_mapper,
                )
                parameters.append(body_parameter)
                if content_type:
                    headers.append(Header(name="Content-Type", value=quoted([content_type])))

            yield self.assemble_method(
                ctx,
                op,
                method_name=method_name,
                security=security,
                is_secure="security" in doc or "security" in node,
                parameters=parameters,
                headers=headers,
                responses=responses,
            )

    def _responses(self, ctx: BuildContext, op: RawOperation) -> list[ResponseDescriptor]:
        responses = op.node.get("responses")
        if not isinstance(responses, dict):
            return []
        descriptors: list[ResponseDescriptor] = []
        for status, raw in responses.items():
            if str(status) not in SUCCESS_STATUSES:
                continue
            response = ctx.resolver.deref(raw, RefKind.RESPONSE)
            content = response.get("content") if isinstance(response, dict) else None
            if not isinstance(content, dict):
                continue
            for content_type, media in content.items():
                schema = media.get("schema") if isinstance(media, dict) else None
                descriptors.append(
                    ResponseDescriptor(
                        status_code=str(status),
                        content_type=content_type,
                        ts_type=ctx.type_mapper(schema) if schema is not None else "void",
                        description=response.get("description"),
                    )
                )
        return descriptors


def _components(document: dict[str, Any]) -> dict[str, Any]:
    components = document.get("components")
    return components if isinstance(components, dict) else {}
