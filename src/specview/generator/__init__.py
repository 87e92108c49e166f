"""View generator -- turn a parsed document into a :class:`~specview.models.ViewModel`.

Typical usage::

    from specview.generator import build_view
    from specview.models import GenerationOptions

    view = build_view(document, GenerationOptions(class_name="PetApi"), "node")

Sub-modules:

* :mod:`~specview.generator.dispatch` -- Detect the document grammar and pick
  a builder.
* :mod:`~specview.generator.base` -- Builder base class and shared steps.
* :mod:`~specview.generator.swagger1`, :mod:`~specview.generator.swagger2`,
  :mod:`~specview.generator.openapi3` -- One builder per grammar.
* :mod:`~specview.generator.params` -- Parameter classification.
* :mod:`~specview.generator.security` -- Security requirement merging.
* :mod:`~specview.generator.naming` -- Method name derivation and
  de-duplication.
* :mod:`~specview.generator.typemap` -- Schema to TypeScript type strings.
* :mod:`~specview.generator.view` -- The :func:`build_view` entry point.
"""

from specview.generator.dispatch import detect_version, select_builder
from specview.generator.view import build_view

__all__ = ["build_view", "detect_version", "select_builder"]
