"""Map Swagger / OpenAPI schema nodes to TypeScript type strings.

The builders treat this as a black box: a parameter or schema node goes in,
a type descriptor string comes out (``"number"``, ``"Array<Pet>"``,
``"{ 'name': string; 'tag'?: string }"``).  References are never followed;
a ``$ref`` maps to the name of its target so that definitions render as
named types.

Rules, in order of precedence:

* a node carrying ``schema`` (2.0 body parameters, 3.x parameters) maps its
  schema;
* ``$ref`` maps to the referenced name;
* ``enum`` maps to a union of JSON literals;
* ``allOf`` is an intersection, ``oneOf`` / ``anyOf`` a union;
* primitive ``type`` values map to ``string`` / ``number`` / ``boolean``;
  ``file`` maps to ``any``; legacy model names pass through unchanged;
* ``array`` maps to ``Array<items>``;
* objects map to an inline literal type, or an index signature when only
  ``additionalProperties`` is declared;
* anything else maps to ``any``.
"""

from __future__ import annotations

import json
from typing import Any, Callable

from specview.parser.resolver import ref_name

TypeMapper = Callable[[Any], str]
"""Signature of a type mapper: schema-ish node in, type string out."""

_PRIMITIVES: dict[str, str] = {
    "string": "string",
    "integer": "number",
    "number": "number",
    "boolean": "boolean",
    "null": "null",
    "file": "any",
    "void": "void",
}


def convert_type(node: Any) -> str:
    """Return the TypeScript type string for *node*.

    Example::

        >>> convert_type({"type": "array", "items": {"$ref": "#/definitions/Pet"}})
        'Array<Pet>'
        >>> convert_type({"enum": ["asc", "desc"]})
        '"asc" | "desc"'
    """
    if not isinstance(node, dict):
        return "any"

    if "schema" in node and isinstance(node["schema"], dict):
        return convert_type(node["schema"])

    if isinstance(node.get("$ref"), str):
        return ref_name(node["$ref"])

    ts_type = _convert_structure(node)
    if node.get("nullable") is True and ts_type not in ("any", "null"):
        ts_type = f"{ts_type} | null"
    return ts_type


def _convert_structure(node: dict[str, Any]) -> str:
    enum_values = node.get("enum")
    if isinstance(enum_values, list) and enum_values:
        return " | ".join(json.dumps(v, default=str) for v in enum_values)

    for key, joiner in (("allOf", " & "), ("oneOf", " | "), ("anyOf", " | ")):
        members = node.get(key)
        if isinstance(members, list) and members:
            return joiner.join(convert_type(m) for m in members)

    type_value = node.get("type")

    # OpenAPI 3.1 type arrays, e.g. ["string", "null"]
    if isinstance(type_value, list):
        return " | ".join(
            _convert_structure({**node, "type": t}) for t in type_value
        ) or "any"

    if type_value == "array":
        return f"Array<{convert_type(node.get('items'))}>"

    if type_value == "object" or (type_value is None and "properties" in node):
        return _convert_object(node)

    if isinstance(type_value, str):
        # Legacy documents name models directly in ``type``.
        return _PRIMITIVES.get(type_value, type_value)

    return "any"


def _convert_object(node: dict[str, Any]) -> str:
    properties = node.get("properties")
    if isinstance(properties, dict) and properties:
        required = set(node.get("required") or [])
        members = [
            f"'{name}'{'' if name in required else '?'}: {convert_type(schema)}"
            for name, schema in properties.items()
        ]
        return "{ " + "; ".join(members) + " }"

    additional = node.get("additionalProperties")
    if isinstance(additional, dict):
        return f"{{ [key: string]: {convert_type(additional)} }}"
    if additional is True:
        return "{ [key: string]: any }"
    return "{}"
