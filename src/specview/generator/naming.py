"""Derive unique, identifier-safe method names for operations.

An operation is named after its ``operationId`` when it has one (legacy
documents use ``nickname``), with characters that cannot appear in an
identifier replaced by ``_``.  Otherwise the name is derived from the HTTP
verb and the path::

    GET  /users/{id}        -> getUsersById
    POST /users/            -> postUsers
    GET  /                  -> get

:class:`MethodNameAllocator` then makes the name unique within one document
by appending ``_1``, ``_2`` ... on collision.  An allocator belongs to a
single generation call.
"""

from __future__ import annotations

import re

# Letter and digit runs; anything else (``_`` included) separates words.
_RUN_RE = re.compile(r"[^\W_]+")

_INVALID_IDENT_RE = re.compile(r"[^\w$]")


def _split_run(run: str) -> list[str]:
    # Acronyms, capitalised words, lower-case runs and digit runs, as lodash
    # ``_.words`` splits them.  Uncased letters count as lower case.
    words = []
    current = ""
    prev = ""
    for ch in run:
        kind = "d" if ch.isdigit() else ("u" if ch.isupper() else "l")
        if current:
            if (kind == "d") != (prev == "d") or (kind == "u" and prev == "l"):
                words.append(current)
                current = ""
            elif kind == "l" and prev == "u" and len(current) > 1:
                words.append(current[:-1])
                current = current[-1]
        current += ch
        prev = kind
    if current:
        words.append(current)
    return words


def camel_case(text: str) -> str:
    """Convert *text* to camelCase the way lodash ``_.camelCase`` does.

    Example::

        >>> camel_case("X-Request-ID")
        'xRequestId'
        >>> camel_case("pet_id")
        'petId'
    """
    words = [word for run in _RUN_RE.findall(text) for word in _split_run(run)]
    if not words:
        return ""
    head, *rest = words
    return head.lower() + "".join(w[:1].upper() + w[1:].lower() for w in rest)


def normalize_name(operation_id: str) -> str:
    """Turn an explicit operation id into a valid identifier.

    ``.``, ``-``, ``{``, ``}``, whitespace and any other character not allowed
    in an identifier become ``_``; a leading digit gets a ``_`` prefix.
    """
    name = _INVALID_IDENT_RE.sub("_", operation_id.strip())
    if not name:
        return "_"
    if name[0].isdigit():
        name = f"_{name}"
    return name


def path_to_method_name(verb: str, path: str) -> str:
    """Derive a method name from an HTTP verb and a path template."""
    verb = verb.lower()
    if path in ("/", ""):
        return verb

    clean_path = path[:-1] if path.endswith("/") else path
    segments = [s for s in clean_path.split("/") if s]
    rewritten = []
    for segment in segments:
        if len(segment) > 2 and segment[0] == "{" and segment[-1] == "}":
            segment = "by" + segment[1].upper() + segment[2:-1]
        rewritten.append(segment)

    result = camel_case("-".join(rewritten))
    if not result:
        return verb
    return verb + result[0].upper() + result[1:]


class MethodNameAllocator:
    """Hands out method names unique within one document.

    Example::

        allocator = MethodNameAllocator()
        allocator.allocate("list")   # 'list'
        allocator.allocate("list")   # 'list_1'
    """

    def __init__(self) -> None:
        self._used: set[str] = set()

    def allocate(self, name: str) -> str:
        """Return *name*, or the first free ``name_<n>``, and record it."""
        candidate = name
        suffix = 1
        while candidate in self._used:
            candidate = f"{name}_{suffix}"
            suffix += 1
        self._used.add(candidate)
        return candidate

    def __contains__(self, name: object) -> bool:
        return name in self._used

    def __len__(self) -> int:
        return len(self._used)
