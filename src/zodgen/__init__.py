"""zodgen -- Generate zod schemas and typed API functions from OpenAPI 3.x specs.

This package compiles an OpenAPI description into three TypeScript modules:
dependency-ordered zod validators with matching type aliases, a small shared
transport client, and one typed async function per API operation.

Typical workflow::

    zodgen generate --input openapi.json --output ./__generated__

Modules:
    app: Typer application and CLI entry point.
    pipeline: Wires loader, compiler and emitter together.
    models: Pydantic models shared across the entire package.
    config: Layered generator configuration.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stderr status reporting with Rich support.
    parser: Spec loading and schema classification.
    compiler: Dependency graph, ordering, type resolution and operations.
    emitter: Jinja2 rendering of the TypeScript modules.
"""

__version__ = "0.1.0"
