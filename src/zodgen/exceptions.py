"""Exception hierarchy for zodgen.

All exceptions inherit from :class:`ZodgenError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`zodgen.exit_codes`.
The top-level error handler in :func:`zodgen.app.main` catches
``ZodgenError`` and exits with the appropriate code.

Subclass hierarchy::

    ZodgenError (exit 1)
    +-- InvalidUsageError         (exit 2)
    +-- SpecParseError            (exit 7)
    +-- CircularDependencyError   (exit 8)
    +-- UnresolvedReferenceError  (exit 9)
    +-- OutputError               (exit 11)
    +-- ConfigError               (exit 1)
"""

from __future__ import annotations

from typing import Iterable

from zodgen.exit_codes import (
    EXIT_CIRCULAR_DEPENDENCY,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_OUTPUT_ERROR,
    EXIT_SPEC_PARSE_ERROR,
    EXIT_UNRESOLVED_REFERENCE,
)


class ZodgenError(Exception):
    """Base exception for all zodgen errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`zodgen.exit_codes`. The entry point catches
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


class InvalidUsageError(ZodgenError):
    """Raised for invalid CLI arguments or missing required parameters."""

    exit_code = EXIT_INVALID_USAGE


class SpecParseError(ZodgenError):
    """Raised when the OpenAPI spec cannot be loaded, parsed, or fails validation."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class CircularDependencyError(ZodgenError):
    """Raised when schema definitions reference each other in a cycle.

    Single-pass emission cannot forward-reference a validator that is not
    yet defined, so a cycle aborts the whole run before anything is written.

    Args:
        names: The schema names that lie on a cycle.
    """

    exit_code = EXIT_CIRCULAR_DEPENDENCY

    def __init__(self, names: Iterable[str]):
        self.names = sorted(names)
        super().__init__(
            "Circular dependency detected between schemas: " + ", ".join(self.names)
        )


class UnresolvedReferenceError(ZodgenError):
    """Raised in strict mode when a ``$ref`` targets an undefined schema."""

    exit_code = EXIT_UNRESOLVED_REFERENCE

    def __init__(self, names: Iterable[str]):
        self.names = sorted(names)
        super().__init__("Unresolved schema references: " + ", ".join(self.names))


class OutputError(ZodgenError):
    """Raised when generated files cannot be written to the output directory."""

    exit_code = EXIT_OUTPUT_ERROR


class ConfigError(ZodgenError):
    """Raised for configuration problems (invalid project config, bad env values)."""

    exit_code = EXIT_GENERIC_FAILURE
