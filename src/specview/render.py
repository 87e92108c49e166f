"""Render a view model with user-supplied Jinja2 templates (``custom`` target).

The class template receives the camelCase view model (see
:meth:`~specview.models.ViewModel.to_template_dict`) as its context.  When a
method template is supplied it is registered under the name ``"method"`` so
the class template can pull it in per method::

    {% for method in methods %}
    {% include "method" %}
    {% endfor %}

Extra context entries (``extra``) are merged over the view model, which lets
callers inject values such as a banner or a version string.
"""

from __future__ import annotations

from typing import Any, Optional

from jinja2 import DictLoader, Environment, StrictUndefined, TemplateError

from specview.exceptions import InvalidUsageError
from specview.models import ViewModel

CLASS_TEMPLATE = "class"
METHOD_TEMPLATE = "method"


def create_environment(
    class_template: str, method_template: Optional[str] = None
) -> Environment:
    """Build a Jinja2 environment holding the caller's templates.

    Autoescaping is off (the output is source code, not HTML) and undefined
    variables raise so that typos in templates surface immediately.
    """
    templates = {CLASS_TEMPLATE: class_template}
    if method_template is not None:
        templates[METHOD_TEMPLATE] = method_template
    return Environment(
        loader=DictLoader(templates),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )


def render_view(
    view: ViewModel,
    class_template: str,
    method_template: Optional[str] = None,
    extra: Optional[dict[str, Any]] = None,
) -> str:
    """Render *view* through the given templates.

    Args:
        view: The view model to render.
        class_template: Jinja2 source of the top-level template.
        method_template: Optional Jinja2 source available as ``"method"``.
        extra: Additional context merged over the view model.

    Returns:
        The rendered text.

    Raises:
        InvalidUsageError: If the class template is empty or fails to
            compile or render.
    """
    if not class_template or not class_template.strip():
        raise InvalidUsageError(
            "A class template is required for the custom target"
        )

    context = view.to_template_dict()
    context.update(extra or {})

    env = create_environment(class_template, method_template)
    try:
        return env.get_template(CLASS_TEMPLATE).render(**context)
    except TemplateError as exc:
        raise InvalidUsageError(f"Template error: {exc}") from exc
