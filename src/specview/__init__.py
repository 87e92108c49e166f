"""specview -- Normalise Swagger 1.x, Swagger 2.0 and OpenAPI 3.x documents into a view model.

The view model is a version-independent description of an API (methods,
parameters, headers, responses, definitions and security flags) that client
code templates consume.  Three very different input grammars come out as one
consistent, order-stable shape.

Typical workflow::

    specview view petstore.yaml --target node --class-name PetApi
    specview render petstore.yaml --template client.js.j2

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models shared across the entire package.
    config: Option resolution from CLI flags, environment and project file.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
    render: Jinja2 rendering of a view model with user templates.
"""

__version__ = "0.1.0"
