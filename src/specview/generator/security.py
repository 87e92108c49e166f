"""Decide which credential families apply to an operation.

Security requirements are lists of requirement objects, each mapping scheme
names to scopes.  An operation-level ``security`` list replaces the
document-level one (an explicit ``[]`` means "no security"); the two are
never combined.  Each scheme name found in the merged requirements is looked
up in the scheme table and sets one flag:

* ``oauth2``, OpenAPI ``http`` with ``bearer``, ``openIdConnect`` -> token
* ``apiKey`` -> api_key
* Swagger 2.0 ``basic``, legacy ``basicAuth``, OpenAPI ``http`` with
  ``basic`` -> basic

Names absent from the table are ignored.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from specview.models import SecurityFlags, SecurityKind, SecurityScheme

logger = logging.getLogger(__name__)


def scheme_kind(scheme: dict[str, Any]) -> Optional[SecurityKind]:
    """Classify a raw scheme object, or return ``None`` for unknown types."""
    scheme_type = scheme.get("type")
    if scheme_type in ("oauth2", "openIdConnect"):
        return SecurityKind.OAUTH2
    if scheme_type == "apiKey":
        return SecurityKind.API_KEY
    if scheme_type in ("basic", "basicAuth"):
        return SecurityKind.BASIC
    if scheme_type == "http":
        http_scheme = str(scheme.get("scheme", "")).lower()
        if http_scheme == "basic":
            return SecurityKind.BASIC
        if http_scheme == "bearer":
            return SecurityKind.OAUTH2
    return None


def read_security_schemes(table: Optional[dict[str, Any]]) -> list[SecurityScheme]:
    """Normalise a raw scheme table into :class:`SecurityScheme` models.

    Schemes of unknown type are skipped.  Order follows the document.
    """
    schemes: list[SecurityScheme] = []
    for name, raw in (table or {}).items():
        if not isinstance(raw, dict):
            continue
        kind = scheme_kind(raw)
        if kind is None:
            logger.debug("Skipping security scheme '%s' of type %r", name, raw.get("type"))
            continue
        param_name = location = None
        if kind is SecurityKind.API_KEY:
            # legacy documents use keyname/passAs
            param_name = raw.get("name") or raw.get("keyname")
            location = raw.get("in") or raw.get("passAs")
        schemes.append(
            SecurityScheme(
                name=name,
                kind=kind,
                description=raw.get("description"),
                param_name=param_name,
                location=location,
            )
        )
    return schemes


def effective_requirements(
    global_requirements: Optional[list[dict[str, Any]]],
    operation_requirements: Optional[list[dict[str, Any]]],
) -> list[dict[str, Any]]:
    """Return the requirement list that applies to an operation."""
    if operation_requirements is not None:
        return list(operation_requirements)
    return list(global_requirements or [])


def merge_security(
    schemes: Optional[dict[str, Any]],
    global_requirements: Optional[list[dict[str, Any]]],
    operation_requirements: Optional[list[dict[str, Any]]],
) -> SecurityFlags:
    """Compute the security flags of one operation.

    Args:
        schemes: Raw scheme table (``securityDefinitions`` or
            ``components.securitySchemes``); may be ``None``.
        global_requirements: Document-level ``security``; may be ``None``.
        operation_requirements: Operation-level ``security``; ``None`` when
            the operation does not declare one.

    Returns:
        A :class:`~specview.models.SecurityFlags` with one flag per
        credential family found.
    """
    if not schemes:
        return SecurityFlags()

    names: list[str] = []
    for requirement in effective_requirements(global_requirements, operation_requirements):
        if isinstance(requirement, dict):
            names.extend(requirement.keys())

    kinds = set()
    for name in names:
        raw = schemes.get(name)
        if isinstance(raw, dict):
            kind = scheme_kind(raw)
            if kind is not None:
                kinds.add(kind)

    return SecurityFlags(
        token=SecurityKind.OAUTH2 in kinds,
        api_key=SecurityKind.API_KEY in kinds,
        basic=SecurityKind.BASIC in kinds,
    )


class SecurityAccumulator:
    """Document-wide security flags, promoted as methods are built.

    A flag becomes true the first time a secured method needs that credential
    family and stays true for the rest of the call.
    """

    def __init__(self) -> None:
        self._flags = SecurityFlags()

    def observe(self, flags: SecurityFlags) -> None:
        self._flags = self._flags | flags

    @property
    def flags(self) -> SecurityFlags:
        return self._flags
