"""Document parser -- load API descriptions and resolve ``$ref`` pointers.

Typical usage::

    from specview.parser import load_spec, ReferenceResolver, RefKind

    doc = load_spec("https://petstore.swagger.io/v2/swagger.json")
    limit = ReferenceResolver(doc).resolve("#/parameters/limit", RefKind.PARAMETER)

Sub-modules:

* :mod:`~specview.parser.loader` -- I/O layer (URL, file, stdin) plus format
  detection.
* :mod:`~specview.parser.resolver` -- Table-driven ``$ref`` resolution that
  fails loudly on broken pointers.
"""

from specview.parser.loader import load_spec
from specview.parser.resolver import ReferenceResolver, RefKind

__all__ = ["load_spec", "ReferenceResolver", "RefKind"]
