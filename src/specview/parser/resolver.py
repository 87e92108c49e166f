"""Resolve ``$ref`` pointers to shared parameters, schemas, bodies and responses.

Swagger and OpenAPI documents share parameter and schema definitions through
``$ref`` pointers such as ``#/parameters/limit`` (Swagger 2.0) or
``#/components/parameters/limit`` (OpenAPI 3.x).  Legacy documents and some
hand-written Swagger 2.0 files use a bare name (``"limit"``) instead.

Resolution here is table-driven: each :class:`RefKind` lists the table paths
it may point into, and a pointer is accepted only when it is exactly
``<table path>/<name>``.  Anything else -- an external file, a pointer into an
unexpected section, a name missing from its table -- raises
:class:`~specview.exceptions.BrokenReference` instead of producing an empty
node that would corrupt every field derived from it.

Unlike a whole-document resolver, nothing is copied: the resolver returns the
target node from the document itself and callers must treat it as read-only.
"""

from __future__ import annotations

import enum
from typing import Any

from specview.exceptions import BrokenReference


class RefKind(str, enum.Enum):
    """What a pointer is expected to designate."""

    PARAMETER = "parameter"
    SCHEMA = "schema"
    REQUEST_BODY = "requestBody"
    RESPONSE = "response"


# Table paths per kind, in lookup order for bare names.
_TABLES: dict[RefKind, tuple[tuple[str, ...], ...]] = {
    RefKind.PARAMETER: (("parameters",), ("components", "parameters")),
    RefKind.SCHEMA: (("definitions",), ("components", "schemas"), ("models",)),
    RefKind.REQUEST_BODY: (("components", "requestBodies"),),
    RefKind.RESPONSE: (("responses",), ("components", "responses")),
}


def parse_pointer(pointer: str) -> tuple[str, ...]:
    """Split *pointer* into decoded segments.

    ``#/a/b`` yields ``("a", "b")`` with RFC 6901 escapes (``~1`` for ``/``,
    ``~0`` for ``~``) decoded.  A bare name yields a one-element tuple.

    Raises:
        BrokenReference: For external references and empty pointers.
    """
    if not isinstance(pointer, str) or not pointer:
        raise BrokenReference(str(pointer), "empty pointer")
    if pointer.startswith("#/"):
        segments = pointer[2:].split("/")
        if not all(segments):
            raise BrokenReference(pointer, "empty path segment")
        return tuple(s.replace("~1", "/").replace("~0", "~") for s in segments)
    if "/" in pointer or pointer.startswith("#"):
        raise BrokenReference(
            pointer, "only internal references (#/...) or bare names are supported"
        )
    return (pointer,)


def ref_name(pointer: str) -> str:
    """Return the name a pointer designates (its last segment)."""
    return parse_pointer(pointer)[-1]


def is_ref(node: Any) -> bool:
    """Whether *node* is a reference object."""
    return isinstance(node, dict) and isinstance(node.get("$ref"), str)


class ReferenceResolver:
    """Resolve pointers against one document.

    Args:
        document: The parsed document.  It is never modified.

    Example::

        resolver = ReferenceResolver(doc)
        param = resolver.resolve("#/components/parameters/limit", RefKind.PARAMETER)
    """

    def __init__(self, document: dict[str, Any]) -> None:
        self._document = document

    def resolve(self, pointer: str, kind: RefKind) -> dict[str, Any]:
        """Return the definition *pointer* names in a table of *kind*.

        Raises:
            BrokenReference: If the pointer does not address a known table of
                *kind* or the name is missing from it.
        """
        segments = parse_pointer(pointer)
        if len(segments) == 1:
            return self._lookup_bare(pointer, segments[0], kind)

        table_path, name = segments[:-1], segments[-1]
        if table_path not in _TABLES[kind]:
            raise BrokenReference(
                pointer, f"not a {kind.value} pointer (expected one of "
                f"{', '.join(_format_table(t) for t in _TABLES[kind])})"
            )
        table = self._table(table_path)
        if table is None:
            raise BrokenReference(
                pointer, f"document has no '{_format_table(table_path)}' table"
            )
        if name not in table:
            raise BrokenReference(
                pointer, f"'{name}' not found in '{_format_table(table_path)}'"
            )
        return _as_node(pointer, table[name])

    def deref(self, node: Any, kind: RefKind) -> Any:
        """Follow *node* through any chain of references of *kind*.

        Non-reference nodes are returned unchanged.

        Raises:
            BrokenReference: On a broken link or a reference cycle.
        """
        seen: set[str] = set()
        while is_ref(node):
            pointer = node["$ref"]
            if pointer in seen:
                raise BrokenReference(pointer, "circular reference")
            seen.add(pointer)
            node = self.resolve(pointer, kind)
        return node

    def _lookup_bare(self, pointer: str, name: str, kind: RefKind) -> dict[str, Any]:
        for table_path in _TABLES[kind]:
            table = self._table(table_path)
            if table is not None and name in table:
                return _as_node(pointer, table[name])
        raise BrokenReference(pointer, f"no shared {kind.value} named '{name}'")

    def _table(self, table_path: tuple[str, ...]) -> dict[str, Any] | None:
        current: Any = self._document
        for segment in table_path:
            if not isinstance(current, dict):
                return None
            current = current.get(segment)
        return current if isinstance(current, dict) else None


def _as_node(pointer: str, value: Any) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise BrokenReference(
            pointer, f"target is a {type(value).__name__}, not an object"
        )
    return value


def _format_table(table_path: tuple[str, ...]) -> str:
    return "#/" + "/".join(table_path) + "/"
