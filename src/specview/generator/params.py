"""Classify raw parameter nodes into :class:`~specview.models.ViewParameter`.

Each raw node (already reference-resolved) goes through these steps:

1. dropped when it carries ``x-exclude-from-bindings: true``;
2. dropped when it carries ``x-proxy-header`` and the target is not
   server-side (headers injected by proxies and app servers);
3. ``camelCaseName`` computed from the declared name;
4. a one-value ``enum`` marks it a singleton;
5. location read from ``in`` (2.0 / 3.x) or ``paramType`` (legacy);
   ``formData`` and ``form`` both mean form, unknown locations are dropped;
6. a query parameter with ``x-name-pattern`` is pattern-typed;
7. the type string comes from the type mapper;
8. cardinality is ``""`` for required parameters and ``"?"`` otherwise,
   taken from the declared ``required`` flag for every location.

OpenAPI 3.x request bodies are not parameters; :func:`request_body_parameter`
synthesises one so templates see a single parameter list.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Optional

from specview.exceptions import AmbiguousContentType
from specview.generator.naming import camel_case
from specview.generator.typemap import TypeMapper, convert_type
from specview.models import ParameterLocation, ViewParameter

logger = logging.getLogger(__name__)

_LOCATIONS: dict[str, ParameterLocation] = {
    "path": ParameterLocation.PATH,
    "query": ParameterLocation.QUERY,
    "header": ParameterLocation.HEADER,
    "body": ParameterLocation.BODY,
    "formData": ParameterLocation.FORM,
    "form": ParameterLocation.FORM,
}

FORM_CONTENT_TYPES = frozenset(
    {"application/x-www-form-urlencoded", "multipart/form-data"}
)

DEFAULT_BODY_PARAMETER_NAME = "body"


def classify_parameter(
    node: dict[str, Any],
    *,
    is_node: bool,
    location_field: str = "in",
    type_mapper: TypeMapper = convert_type,
) -> Optional[ViewParameter]:
    """Classify one raw parameter node.

    Args:
        node: The reference-resolved parameter node.
        is_node: Whether the target is server-side (keeps proxy headers).
        location_field: ``"in"`` for Swagger 2.0 / OpenAPI 3.x,
            ``"paramType"`` for legacy documents.
        type_mapper: Maps the node to a type string.

    Returns:
        The classified parameter, or ``None`` when it is dropped.
    """
    name = str(node.get("name", ""))

    if node.get("x-exclude-from-bindings") is True:
        logger.debug("Parameter '%s' excluded from bindings", name)
        return None

    if node.get("x-proxy-header") and not is_node:
        logger.debug("Parameter '%s' is a proxy header, skipped for this target", name)
        return None

    location = _LOCATIONS.get(node.get(location_field))
    if location is None:
        logger.debug(
            "Parameter '%s' has unsupported location %r, skipped",
            name, node.get(location_field),
        )
        return None

    schema = node.get("schema") if isinstance(node.get("schema"), dict) else {}

    enum_values = node.get("enum", schema.get("enum"))
    is_singleton = isinstance(enum_values, list) and len(enum_values) == 1

    pattern = None
    if location is ParameterLocation.QUERY and node.get("x-name-pattern"):
        pattern = node["x-name-pattern"]

    required = node.get("required") is True
    default = node.get("default", schema.get("default"))

    return ViewParameter(
        name=name,
        camel_case_name=camel_case(name),
        location=location,
        description=node.get("description"),
        required=required,
        is_path_parameter=location is ParameterLocation.PATH,
        is_query_parameter=location is ParameterLocation.QUERY,
        is_header_parameter=location is ParameterLocation.HEADER,
        is_body_parameter=location is ParameterLocation.BODY,
        is_form_parameter=location is ParameterLocation.FORM,
        is_singleton=is_singleton,
        singleton=enum_values[0] if is_singleton else None,
        is_pattern_type=pattern is not None,
        pattern=pattern,
        default=default,
        default_json=json.dumps(default, default=str) if default is not None else None,
        ts_type=type_mapper(node),
        cardinality="" if required else "?",
    )


def choose_content_type(
    content_types: Iterable[str], *, strict: bool, where: str
) -> Optional[str]:
    """Pick the content type a request is sent with.

    *content_types* is a Swagger 2.0 ``consumes`` list or an OpenAPI 3.x
    ``content`` map (its keys are used).  The first declared type wins; the
    rest are ignored.  With *strict* set, more than one declared type raises
    instead.

    Raises:
        AmbiguousContentType: In strict mode, when several types are declared.
    """
    content_types = [str(ct) for ct in content_types]
    if not content_types:
        return None
    if len(content_types) > 1:
        if strict:
            raise AmbiguousContentType(
                f"{where} declares several content types "
                f"({', '.join(content_types)}); only one is supported"
            )
        logger.warning(
            "%s declares %d content types, using '%s'",
            where, len(content_types), content_types[0],
        )
    return content_types[0]


def request_body_parameter(
    body: dict[str, Any],
    *,
    name_override: Optional[str] = None,
    operation: Optional[dict[str, Any]] = None,
    strict: bool = False,
    where: str = "request body",
    type_mapper: TypeMapper = convert_type,
) -> tuple[ViewParameter, Optional[str]]:
    """Synthesise the pseudo-parameter for an OpenAPI 3.x request body.

    The name is *name_override*, else the ``x-codegen-request-body-name``
    extension on *operation* (where converters put it) or on the body itself,
    else ``"body"``.  Form content types give a form parameter; everything
    else a body parameter.

    Returns:
        ``(parameter, content_type)``; the content type is ``None`` when the
        body declares no content.
    """
    content = body.get("content") if isinstance(body.get("content"), dict) else {}
    content_type = choose_content_type(content, strict=strict, where=where)
    media = content.get(content_type) if content_type else None
    schema = media.get("schema") if isinstance(media, dict) else None

    name = (
        name_override
        or (operation or {}).get("x-codegen-request-body-name")
        or body.get("x-codegen-request-body-name")
        or DEFAULT_BODY_PARAMETER_NAME
    )
    location = (
        ParameterLocation.FORM
        if content_type in FORM_CONTENT_TYPES
        else ParameterLocation.BODY
    )
    required = body.get("required") is True

    parameter = ViewParameter(
        name=name,
        camel_case_name=camel_case(name),
        location=location,
        description=body.get("description"),
        required=required,
        is_body_parameter=location is ParameterLocation.BODY,
        is_form_parameter=location is ParameterLocation.FORM,
        ts_type=type_mapper(schema),
        cardinality="" if required else "?",
    )
    return parameter, content_type


def all_optional(parameters: list[ViewParameter]) -> bool:
    """Whether a method's parameter object may default to empty.

    Path parameters are supplied structurally and never make the object
    mandatory; any other required parameter does.
    """
    return not any(
        p.required for p in parameters if p.location is not ParameterLocation.PATH
    )
