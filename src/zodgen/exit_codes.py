"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~zodgen.exceptions.ZodgenError` subclass.
CI scripts can inspect the exit code to tell a broken spec from a cyclic
schema graph without parsing stderr.

Example::

    $ zodgen generate -i openapi.json
    $ echo $?
    8   # EXIT_CIRCULAR_DEPENDENCY -- schemas reference each other in a loop
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_SPEC_PARSE_ERROR = 7
"""The OpenAPI specification could not be loaded, parsed or validated."""

EXIT_CIRCULAR_DEPENDENCY = 8
"""The schema dependency graph contains a cycle; no emission order exists."""

EXIT_UNRESOLVED_REFERENCE = 9
"""A schema references a name that is not defined (strict mode only)."""

EXIT_OUTPUT_ERROR = 11
"""Generated files could not be written."""
