"""Generation option resolution with project-file and environment precedence.

A repository that generates clients usually pins the same options on every
run (class name, target, request-body name ...).  Those can live in a
project-local ``specview.json``::

    {
        "target": "node",
        "className": "PetApi",
        "moduleName": "pets",
        "requestBodyParameterName": "payload"
    }

Keys are :class:`~specview.models.GenerationOptions` fields (camelCase or
snake_case) plus ``target``.  :func:`resolve_options` layers environment
variables and CLI flags on top.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from specview.exceptions import ConfigError
from specview.models import GenerationOptions, TargetType

PROJECT_CONFIG_FILENAME = "specview.json"

_ENV_OPTIONS = {
    "SPECVIEW_CLASS_NAME": "class_name",
    "SPECVIEW_MODULE_NAME": "module_name",
}
_ENV_TARGET = "SPECVIEW_TARGET"


def load_project_config(directory: Optional[Path] = None) -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``specview.json``.

    Args:
        directory: Where to look; defaults to the current working directory.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = (directory or Path.cwd()) / PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


def _parse_target(value: Any, source: str) -> TargetType:
    try:
        return TargetType(value)
    except ValueError:
        choices = ", ".join(t.value for t in TargetType)
        raise ConfigError(
            f"Unknown target '{value}' in {source} (expected one of: {choices})"
        ) from None


def resolve_options(
    cli_options: Optional[dict[str, Any]] = None,
    cli_target: Optional[str] = None,
    directory: Optional[Path] = None,
) -> tuple[GenerationOptions, TargetType]:
    """Resolve generation options with full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_options`` entries that are not ``None``,
           ``cli_target``)
        2. Environment variables (``SPECVIEW_CLASS_NAME``,
           ``SPECVIEW_MODULE_NAME``, ``SPECVIEW_TARGET``)
        3. Project config (``./specview.json``)
        4. Defaults

    Returns:
        A tuple of ``(options, target)``.

    Raises:
        ConfigError: If the project file or an environment value is invalid.
    """
    # 4 + 3. Project config over model defaults
    project = dict(load_project_config(directory) or {})
    target = TargetType.CUSTOM
    if "target" in project:
        target = _parse_target(project.pop("target"), PROJECT_CONFIG_FILENAME)

    try:
        options = GenerationOptions.model_validate(project)
    except ValidationError as exc:
        raise ConfigError(f"Invalid options in {PROJECT_CONFIG_FILENAME}: {exc}") from exc

    # 2. Environment variables
    updates: dict[str, Any] = {}
    for env_var, field_name in _ENV_OPTIONS.items():
        value = os.environ.get(env_var)
        if value:
            updates[field_name] = value
    env_target = os.environ.get(_ENV_TARGET)
    if env_target:
        target = _parse_target(env_target, _ENV_TARGET)

    # 1. CLI flags (highest precedence)
    for field_name, value in (cli_options or {}).items():
        if value is not None:
            updates[field_name] = value
    if cli_target is not None:
        target = _parse_target(cli_target, "--target")

    if updates:
        try:
            options = GenerationOptions.model_validate(
                {**options.model_dump(), **updates}
            )
        except ValidationError as exc:
            raise ConfigError(f"Invalid generation options: {exc}") from exc

    return options, target
