"""Generation entry point: options in, view model out.

:func:`build_view` checks the options bag, selects the builder for the
document's grammar and runs it.  Any structural error aborts the call before
a view model exists, so callers never see partial output.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from specview.exceptions import (
    InvalidUsageError,
    MissingRequiredOption,
    UnsupportedVersion,
)
from specview.generator.dispatch import select_builder
from specview.models import GenerationOptions, SpecVersion, TargetType, ViewModel

logger = logging.getLogger(__name__)

DEFAULT_CONTROLLERS_DIR_NAME = "routes_generated"
DEFAULT_DEFINITIONS_DIR_NAME = "definitions_generated"


def check_options(
    document: Optional[dict[str, Any]], options: GenerationOptions
) -> GenerationOptions:
    """Validate *options* and fill in multi-file defaults.

    Returns:
        A copy of *options* with default directory names applied.

    Raises:
        MissingRequiredOption: When the document is missing, or when
            ``multiple`` is set without ``class_name`` or ``path``.
    """
    if not document:
        raise MissingRequiredOption("Missing the API description document")
    if not options.multiple:
        return options

    if not options.class_name:
        raise MissingRequiredOption("Missing the class name (required with multiple)")
    if not options.path:
        raise MissingRequiredOption("Missing the destination path (required with multiple)")

    updates: dict[str, str] = {}
    if not options.controllers_dir_name:
        logger.info(
            "Controllers directory name not provided, using '%s'",
            DEFAULT_CONTROLLERS_DIR_NAME,
        )
        updates["controllers_dir_name"] = DEFAULT_CONTROLLERS_DIR_NAME
    if not options.definitions_dir_name:
        logger.info(
            "Definitions directory name not provided, using '%s'",
            DEFAULT_DEFINITIONS_DIR_NAME,
        )
        updates["definitions_dir_name"] = DEFAULT_DEFINITIONS_DIR_NAME
    return options.model_copy(update=updates)


def build_view(
    document: Optional[dict[str, Any]],
    options: Optional[GenerationOptions] = None,
    target: TargetType | str = TargetType.CUSTOM,
) -> ViewModel:
    """Normalise a Swagger 1.x / 2.0 or OpenAPI 3.x document into a view model.

    Args:
        document: The parsed document, as returned by
            :func:`~specview.parser.loader.load_spec`.
        options: Generation options; defaults apply when ``None``.
        target: Output style (``angular``, ``node``, ``react``,
            ``typescript`` or ``custom``).

    Returns:
        The :class:`~specview.models.ViewModel` for *document*.

    Raises:
        MissingRequiredOption: See :func:`check_options`.
        InvalidUsageError: If *target* is not a known output style.
        UnsupportedVersion: If the version marker is unrecognised, or a
            TypeScript target is requested for a legacy document.
        BrokenReference: If a ``$ref`` does not resolve.

    Example::

        doc = load_spec("petstore.yaml")
        view = build_view(doc, GenerationOptions(class_name="PetApi"), "node")
        for method in view.methods:
            print(method.method_name)
    """
    options = check_options(document, options or GenerationOptions())
    try:
        target = TargetType(target)
    except ValueError:
        choices = ", ".join(t.value for t in TargetType)
        raise InvalidUsageError(
            f"Unknown target '{target}' (expected one of: {choices})"
        ) from None
    builder = select_builder(document)

    if target is TargetType.TYPESCRIPT and builder.version is SpecVersion.SWAGGER_1:
        raise UnsupportedVersion(
            "TypeScript output requires a Swagger 2.0 or OpenAPI 3.x document"
        )

    logger.debug("Building %s view for target '%s'", builder.version.value, target.value)
    return builder.build(document, options, target)
