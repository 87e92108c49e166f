"""View builder for Swagger 2.0 documents (``swagger: "2.0"``)."""

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
from specview.generator.params import choose_content_type
from specview.generator.security import merge_security
from specview.models import Header, Method, ResponseDescriptor, SpecVersion
from specview.parser.resolver import RefKind

DEFAULT_RESPONSE_CONTENT_TYPE = "application/json"


class Swagger2Builder(ViewBuilder):
    """Builds views from Swagger 2.0 ``paths``, ``definitions`` and ``securityDefinitions``.

    * ``Accept`` comes from ``produces`` (operation, else document).
    * ``Content-Type`` comes from the first ``consumes`` entry.
    * 200/201 responses yield one descriptor per ``produces`` type.
    """

    version = SpecVersion.SWAGGER_2

    def domain(self, document: dict[str, Any]) -> str:
        schemes = document.get("schemes")
        host = document.get("host")
        base_path = document.get("basePath")
        if schemes and host and base_path:
            return f"{schemes[0]}://{host}{base_path.rstrip('/')}"
        return ""

    def definitions_table(self, document: dict[str, Any]) -> dict[str, Any]:
        definitions = document.get("definitions")
        return definitions if isinstance(definitions, dict) else {}

    def security_table(self, document: dict[str, Any]) -> Optional[dict[str, Any]]:
        return document.get("securityDefinitions")

    def build_methods(self, ctx: BuildContext) -> Iterator[Method]:
        doc = ctx.document
        for op in iter_operations(doc.get("paths")):
            node = op.node
            security = merge_security(
                self.security_table(doc), doc.get("security"), node.get("security")
            )
            method_name = self.allocate_name(ctx, op, node.get("operationId"))

            produces = node.get("produces") or doc.get("produces")
            consumes = node.get("consumes") or doc.get("consumes")
            headers: list[Header] = []
            if produces:
                headers.append(Header(name="Accept", value=quoted(produces)))
            if consumes:
                content_type = choose_content_type(
                    consumes,
                    strict=ctx.options.strict_content_type,
                    where=f"{op.verb} {op.path}",
                )
                headers.append(Header(name="Content-Type", value=quoted([content_type])))

            own = node.get("parameters")
            raw_parameters = (own if isinstance(own, list) else []) + op.shared_parameters

            yield self.assemble_method(
                ctx,
                op,
                method_name=method_name,
                security=security,
                is_secure="security" in doc or "security" in node,
                parameters=self.classify_parameters(ctx, raw_parameters),
                headers=headers,
                responses=self._responses(ctx, op, produces),
            )

    def _responses(
        self, ctx: BuildContext, op: RawOperation, produces: Optional[list[str]]
    ) -> list[ResponseDescriptor]:
        responses = op.node.get("responses")
        if not isinstance(responses, dict):
            return []
        content_types = produces or [DEFAULT_RESPONSE_CONTENT_TYPE]
        descriptors: list[ResponseDescriptor] = []
        for status, raw in responses.items():
            if str(status) not in SUCCESS_STATUSES:
                continue
            response = ctx.resolver.deref(raw, RefKind.RESPONSE)
            if not isinstance(response, dict):
                continue
            schema = response.get("schema")
            ts_type = ctx.type_mapper(schema) if schema is not None else "void"
            for content_type in content_types:
                descriptors.append(
                    ResponseDescriptor(
                        status_code=str(status),
                        content_type=content_type,
                        ts_type=ts_type,
                        description=response.get("description"),
                    )
                )
        return descriptors
