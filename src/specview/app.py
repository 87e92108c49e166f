"""Typer application and CLI entry point for specview.

Commands:

* ``specview view SOURCE`` -- print the view model as JSON.
* ``specview methods SOURCE`` -- list generated methods.
* ``specview definitions SOURCE`` -- list exposed definitions.
* ``specview render SOURCE --template FILE`` -- render the view model with
  Jinja2 templates (``custom`` target).

``SOURCE`` is a file path, an ``http(s)://`` URL, or ``-`` for stdin.
Generation options come from flags, ``SPECVIEW_*`` environment variables and
``./specview.json`` (see :mod:`specview.config`).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional

import typer

from specview import __version__
from specview.exceptions import InvalidUsageError, SpecviewError
from specview.exit_codes import EXIT_GENERIC_FAILURE
from specview.models import ViewModel

app = typer.Typer(
    name="specview",
    help="Normalise Swagger 1.x / 2.0 and OpenAPI 3.x documents into a client view model.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"specview {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
    output_file: Optional[str] = typer.Option(
        None, "-o", "--output", help="Write data output to this file."
    ),
) -> None:
    """Install the global output manager and logging level for this run."""
    from specview.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(
        OutputManager(
            format=fmt,
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
            output_file=output_file,
        )
    )

    logging.basicConfig(
        stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s"
    )
    logging.getLogger("specview").setLevel(
        logging.DEBUG if verbose else logging.WARNING
    )


@contextmanager
def _handle_errors() -> Iterator[None]:
    """Turn :class:`SpecviewError` into a stderr message and its exit code."""
    from specview.output import error

    try:
        yield
    except SpecviewError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def _build(
    source: str,
    target: Optional[str],
    cli_options: Optional[dict[str, Any]] = None,
) -> ViewModel:
    """Load *source*, resolve options and build the view model."""
    from specview.config import resolve_options
    from specview.generator import build_view
    from specview.output import debug
    from specview.parser import load_spec

    options, resolved_target = resolve_options(cli_options, target)
    debug(f"Loading spec from {source}")
    document = load_spec(source)
    return build_view(document, options, resolved_target)


# Shared option declarations
_SOURCE = typer.Argument(..., help="Spec file path, URL, or '-' for stdin.")
_TARGET = typer.Option(
    None, "--target", "-t",
    help="Output style: angular, node, react, typescript, custom.",
)


@app.command("view")
def view_command(
    source: str = _SOURCE,
    target: Optional[str] = _TARGET,
    class_name: Optional[str] = typer.Option(None, "--class-name", help="Generated class name."),
    module_name: Optional[str] = typer.Option(None, "--module-name", help="Generated module name."),
    multiple: Optional[bool] = typer.Option(
        None, "--multiple/--single", help="Group methods per tag."
    ),
    path: Optional[str] = typer.Option(
        None, "--path", help="Destination directory (required with --multiple)."
    ),
    request_body_name: Optional[str] = typer.Option(
        None, "--request-body-name", help="Name of the synthesized OpenAPI 3 body parameter."
    ),
    es6: Optional[bool] = typer.Option(None, "--es6/--no-es6", help="Target ES6 output."),
    esnext: Optional[bool] = typer.Option(None, "--esnext/--no-esnext", help="Allow ESNext syntax."),
    strict_content_type: Optional[bool] = typer.Option(
        None,
        "--strict-content-type/--first-content-type",
        help="Fail when a request declares several content types.",
    ),
) -> None:
    """Print the view model of SOURCE as JSON.

    Example::

        specview view petstore.yaml --target node --class-name PetApi
    """
    from specview.output import print_json

    with _handle_errors():
        view = _build(
            source,
            target,
            {
                "class_name": class_name,
                "module_name": module_name,
                "multiple": multiple,
                "path": path,
                "request_body_parameter_name": request_body_name,
                "is_es6": es6,
                "esnext": esnext,
                "strict_content_type": strict_content_type,
            },
        )
        print_json(view.to_template_dict())


@app.command("methods")
def methods_command(
    source: str = _SOURCE,
    target: Optional[str] = _TARGET,
) -> None:
    """List the methods generated for SOURCE.

    Example::

        specview methods https://petstore.swagger.io/v2/swagger.json
    """
    from specview.output import print_table, warning

    with _handle_errors():
        view = _build(source, target)

    if not view.methods:
        warning("No operations found")
    rows = [
        [
            m.method_name,
            m.method,
            m.path,
            ", ".join(
                label
                for label, enabled in (
                    ("token", m.is_secure_token),
                    ("apiKey", m.is_secure_api_key),
                    ("basic", m.is_secure_basic),
                )
                if enabled
            ) or "-",
        ]
        for m in view.methods
    ]
    print_table(
        ["Method", "Verb", "Path", "Auth"],
        rows,
        title=f"Methods ({len(rows)}) -- Swagger/OpenAPI {view.version.value}",
    )


@app.command("definitions")
def definitions_command(
    source: str = _SOURCE,
    target: Optional[str] = _TARGET,
) -> None:
    """List the definitions exposed for SOURCE."""
    from specview.output import info, print_table

    with _handle_errors():
        view = _build(source, target)

    if not view.definitions:
        info("Document declares no definitions")
    rows = [[d.name, d.ts_type, d.description or "-"] for d in view.definitions]
    print_table(["Name", "Type", "Description"], rows, title=f"Definitions ({len(rows)})")


@app.command("render")
def render_command(
    source: str = _SOURCE,
    template: Path = typer.Option(..., "--template", help="Jinja2 class template."),
    method_template: Optional[Path] = typer.Option(
        None, "--method-template", help="Jinja2 method template, available as 'method'."
    ),
    class_name: Optional[str] = typer.Option(None, "--class-name", help="Generated class name."),
    module_name: Optional[str] = typer.Option(None, "--module-name", help="Generated module name."),
    request_body_name: Optional[str] = typer.Option(
        None, "--request-body-name", help="Name of the synthesized OpenAPI 3 body parameter."
    ),
) -> None:
    """Render SOURCE with custom Jinja2 templates.

    Example::

        specview render petstore.yaml --template client.js.j2 -o client.js
    """
    from specview.output import print_data, success
    from specview.render import render_view

    with _handle_errors():
        class_source = _read_template(template)
        method_source = _read_template(method_template) if method_template else None
        view = _build(
            source,
            "custom",
            {
                "class_name": class_name,
                "module_name": module_name,
                "request_body_parameter_name": request_body_name,
            },
        )
        print_data(render_view(view, class_source, method_source))
    success(f"Rendered {len(view.methods)} method(s) for {view.class_name or 'client'}")


def _read_template(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InvalidUsageError(f"Cannot read template {path}: {exc}") from exc


def main() -> None:
    """CLI entry point invoked by the ``specview`` console script.

    Unhandled :class:`~specview.exceptions.SpecviewError` instances cause a
    clean exit with the error's ``exit_code``; anything else exits with
    :data:`~specview.exit_codes.EXIT_GENERIC_FAILURE`.
    """
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from specview.output import error

        if isinstance(exc, SpecviewError):
            error(str(exc))
            sys.exit(exc.exit_code)
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
