"""Shared machinery for the version-specific view builders.

A :class:`ViewBuilder` turns one parsed document into a
:class:`~specview.models.ViewModel`.  The three subclasses
(:class:`~specview.generator.swagger1.Swagger1Builder`,
:class:`~specview.generator.swagger2.Swagger2Builder`,
:class:`~specview.generator.openapi3.OpenAPI3Builder`) only supply the parts
that differ between grammars; walking operations, classifying parameters and
assembling methods live here.

Every call to :meth:`ViewBuilder.build` creates a fresh :class:`BuildContext`
holding the name allocator and the security accumulator, so nothing leaks
between calls or between documents built concurrently.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Optional

from specview.generator.naming import (
    MethodNameAllocator,
    normalize_name,
    path_to_method_name,
)
from specview.generator.params import all_optional, classify_parameter
from specview.generator.security import SecurityAccumulator, read_security_schemes
from specview.generator.typemap import TypeMapper, convert_type
from specview.models import (
    Definition,
    GenerationOptions,
    Header,
    Method,
    ParameterLocation,
    ResponseDescriptor,
    SecurityFlags,
    SpecVersion,
    TargetType,
    ViewModel,
    ViewParameter,
)
from specview.parser.resolver import ReferenceResolver, RefKind

logger = logging.getLogger(__name__)

AUTHORIZED_METHODS = (
    "GET", "POST", "PUT", "DELETE", "PATCH", "COPY", "HEAD", "OPTIONS",
    "LINK", "UNLINK", "PURGE", "LOCK", "UNLOCK", "PROPFIND",
)

SUCCESS_STATUSES = ("200", "201")

DEFAULT_DESTINATION = "default"


@dataclass
class BuildContext:
    """Per-call state threaded through a build."""

    document: dict[str, Any]
    options: GenerationOptions
    target: TargetType
    resolver: ReferenceResolver
    type_mapper: TypeMapper = convert_type
    names: MethodNameAllocator = field(default_factory=MethodNameAllocator)
    security: SecurityAccumulator = field(default_factory=SecurityAccumulator)

    @property
    def is_node(self) -> bool:
        return self.target.is_node


@dataclass
class RawOperation:
    """One whitelisted verb entry, as found in the document."""

    path: str
    verb: str
    node: dict[str, Any]
    shared_parameters: list[Any]


class ViewBuilder(ABC):
    """Build a :class:`~specview.models.ViewModel` from one document grammar."""

    version: SpecVersion
    location_field = "in"

    def build(
        self,
        document: dict[str, Any],
        options: Optional[GenerationOptions] = None,
        target: TargetType | str = TargetType.CUSTOM,
    ) -> ViewModel:
        """Normalise *document* into a view model.

        Args:
            document: The parsed document.  It is read, never modified.
            options: Generation options; defaults apply when ``None``.
            target: Output style; decides ``isNode`` and ``isES6``.

        Returns:
            A frozen :class:`~specview.models.ViewModel`.

        Raises:
            BrokenReference: If any reference cannot be resolved.
            AmbiguousContentType: In strict content-type mode.
        """
        options = options or GenerationOptions()
        target = TargetType(target)
        ctx = BuildContext(
            document=document,
            options=options,
            target=target,
            resolver=ReferenceResolver(document),
        )

        methods = list(self.build_methods(ctx))
        flags = ctx.security.flags

        return ViewModel(
            version=self.version,
            description=self.description(document),
            domain=self.domain(document),
            module_name=options.module_name,
            class_name=options.class_name,
            imports=list(options.imports),
            is_node=target.is_node,
            is_es6=options.is_es6 or target is TargetType.REACT,
            is_secure=self.security_table(document) is not None,
            is_secure_token=flags.token,
            is_secure_api_key=flags.api_key,
            is_secure_basic=flags.basic,
            security_schemes=read_security_schemes(self.security_table(document)),
            methods=methods,
            definitions=self.build_definitions(ctx),
        )

    # ------------------------------------------------------------------ #
    # Grammar-specific hooks
    # ------------------------------------------------------------------ #

    @abstractmethod
    def build_methods(self, ctx: BuildContext) -> Iterator[Method]:
        """Yield one method per retained operation, in document order."""

    @abstractmethod
    def domain(self, document: dict[str, Any]) -> str:
        """Base URL generated clients default to."""

    @abstractmethod
    def definitions_table(self, document: dict[str, Any]) -> dict[str, Any]:
        """The document's named schemas."""

    def security_table(self, document: dict[str, Any]) -> Optional[dict[str, Any]]:
        """The document's security scheme table, or ``None``."""
        return None

    def description(self, document: dict[str, Any]) -> Optional[str]:
        info = document.get("info")
        return info.get("description") if isinstance(info, dict) else None

    # ------------------------------------------------------------------ #
    # Shared steps
    # ------------------------------------------------------------------ #

    def allocate_name(self, ctx: BuildContext, op: RawOperation, explicit: Any) -> str:
        """Name an operation from its explicit id or its verb and path."""
        if isinstance(explicit, str) and explicit.strip():
            base = normalize_name(explicit)
        else:
            base = path_to_method_name(op.verb, op.path)
        return ctx.names.allocate(base)

    def classify_parameters(
        self, ctx: BuildContext, raw_parameters: Iterable[Any]
    ) -> list[ViewParameter]:
        """Resolve and classify parameters, keeping declaration order."""
        parameters: list[ViewParameter] = []
        for raw in raw_parameters:
            node = ctx.resolver.deref(raw, RefKind.PARAMETER)
            if not isinstance(node, dict):
                continue
            parameter = classify_parameter(
                node,
                is_node=ctx.is_node,
                location_field=self.location_field,
                type_mapper=ctx.type_mapper,
            )
            if parameter is not None:
                parameters.append(parameter)
        return parameters

    def assemble_method(
        self,
        ctx: BuildContext,
        op: RawOperation,
        *,
        method_name: str,
        security: SecurityFlags,
        is_secure: bool,
        parameters: list[ViewParameter],
        headers: list[Header],
        responses: list[ResponseDescriptor],
        summary: Optional[str] = None,
    ) -> Method:
        """Build a :class:`Method` and promote its security flags."""
        ctx.security.observe(security)

        tags = [str(t) for t in op.node.get("tags") or []]
        destination = None
        if ctx.options.multiple:
            destination = tags[0].lower() if tags else DEFAULT_DESTINATION

        return Method(
            method_name=method_name,
            method=op.verb,
            path=op.path,
            class_name=ctx.options.class_name,
            summary=summary if summary is not None else (
                op.node.get("description") or op.node.get("summary")
            ),
            external_docs=op.node.get("externalDocs"),
            tags=tags,
            is_get=op.verb == "GET",
            is_post=op.verb == "POST",
            is_secure=is_secure,
            is_secure_token=security.token,
            is_secure_api_key=security.api_key,
            is_secure_basic=security.basic,
            parameters=parameters,
            headers=headers,
            responses=mark_last(responses),
            destination=destination,
            has_body=_has_location(parameters, ParameterLocation.BODY),
            is_form_method=_has_location(parameters, ParameterLocation.FORM),
            has_extra_header=_has_location(parameters, ParameterLocation.HEADER),
            all_optional=all_optional(parameters),
        )

    def build_definitions(self, ctx: BuildContext) -> list[Definition]:
        definitions: list[Definition] = []
        for name, schema in self.definitions_table(ctx.document).items():
            if not isinstance(schema, dict):
                continue
            definitions.append(
                Definition(
                    name=name,
                    description=schema.get("description"),
                    ts_type=ctx.type_mapper(schema),
                )
            )
        return definitions


# ---------------------------------------------------------------------- #
# Helpers
# ---------------------------------------------------------------------- #


def iter_operations(paths: Any) -> Iterator[RawOperation]:
    """Walk a Swagger 2.0 / OpenAPI 3.x ``paths`` table.

    Path-level ``parameters`` are collected first and attached to every
    operation of the path.  Keys that are not whitelisted verbs are skipped.
    """
    if not isinstance(paths, dict):
        return
    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            continue
        shared = path_item.get("parameters")
        shared = shared if isinstance(shared, list) else []
        for key, node in path_item.items():
            verb = str(key).upper()
            if verb not in AUTHORIZED_METHODS:
                if key != "parameters":
                    logger.debug("Skipping '%s' under %s", key, path)
                continue
            if not isinstance(node, dict):
                continue
            yield RawOperation(path=path, verb=verb, node=node, shared_parameters=shared)


def quoted(values: Iterable[str], separator: str = ", ") -> str:
    """Render header values as a single-quoted literal."""
    return "'" + separator.join(str(v) for v in values) + "'"


def mark_last(responses: list[ResponseDescriptor]) -> list[ResponseDescriptor]:
    """Flag the final descriptor so renderers can drop a trailing separator."""
    if not responses:
        return responses
    return [*responses[:-1], responses[-1].model_copy(update={"is_last": True})]


def _has_location(parameters: list[ViewParameter], location: ParameterLocation) -> bool:
    return any(p.location is location for p in parameters)
