"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~specview.exceptions.SpecviewError` subclass.
Build scripts wrapping ``specview`` can inspect the exit code to tell a
broken document from a bad invocation without parsing stderr.

Example::

    $ specview view petstore.json --multiple
    $ echo $?
    2   # EXIT_INVALID_USAGE -- --class-name and --path are required
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required options."""

EXIT_SPEC_PARSE_ERROR = 7
"""The API description could not be loaded, dispatched, or normalized."""
