"""Exception hierarchy for specview.

All exceptions inherit from :class:`SpecviewError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`specview.exit_codes`.
The top-level error handler in :func:`specview.app.main` catches
``SpecviewError`` and exits with the appropriate code.

Structural errors (:class:`BrokenReference`, :class:`MissingRequiredOption`,
:class:`UnsupportedVersion`) abort a generation call before any view model is
returned.

Subclass hierarchy::

    SpecviewError (exit 1)
    +-- InvalidUsageError       (exit 2)
    +-- MissingRequiredOption   (exit 2)
    +-- SpecParseError          (exit 7)
    |   +-- UnsupportedVersion
    |   +-- BrokenReference
    |   +-- AmbiguousContentType
    +-- ConfigError             (exit 1)
"""

from specview.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SPEC_PARSE_ERROR,
)


class SpecviewError(Exception):
    """Base exception for all specview errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`specview.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SpecviewError):
    """Raised for invalid CLI arguments or unusable templates."""

    exit_code = EXIT_INVALID_USAGE


class MissingRequiredOption(SpecviewError):
    """Raised when a mandatory generation option (document, class name, destination path) is absent."""

    exit_code = EXIT_INVALID_USAGE


class SpecParseError(SpecviewError):
    """Raised when the API description cannot be loaded or normalized."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class UnsupportedVersion(SpecParseError):
    """Raised when the document's version marker is not Swagger 1.x, 2.0 or OpenAPI 3.x."""


class BrokenReference(SpecParseError):
    """Raised when a ``$ref`` pointer does not resolve against the table it names.

    Args:
        pointer: The offending pointer string.
        reason: Short explanation appended to the message.
    """

    def __init__(self, pointer: str, reason: str):
        super().__init__(f"Cannot resolve $ref '{pointer}': {reason}")
        self.pointer = pointer


class AmbiguousContentType(SpecParseError):
    """Raised in strict mode when a request body declares several content types."""


class ConfigError(SpecviewError):
    """Raised for configuration problems (invalid project file, bad environment values)."""

    exit_code = EXIT_GENERIC_FAILURE
