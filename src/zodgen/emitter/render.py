"""Render the generated TypeScript modules from Jinja2 templates.

The environment mirrors the one used for documentation output elsewhere in
the ecosystem: a :class:`~jinja2.FileSystemLoader` over the package's
``templates/`` directory, block trimming enabled, autoescape disabled for
``.ts.j2`` files since the output is source code, not HTML.

Each ``render_*`` function builds a plain context dict and hands it to one
template. The context builders only reshape compiler output; they decide
nothing.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from zodgen.compiler.naming import argument_name, property_key, schema_symbol, type_name
from zodgen.compiler.typemap import TypeResolver
from zodgen.models import CLIENT_FILENAME, SCHEMAS_FILENAME, Operation, SchemaNode


TEMPLATE_DIR = Path(__file__).parent / "templates"
"""Path to the Jinja2 template directory (``emitter/templates/``)."""


def create_environment() -> Environment:
    """Create the Jinja2 environment for the TypeScript templates."""
    return Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(disabled_extensions=("ts.j2",)),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def _module_name(filename: str) -> str:
    """Import specifier for a sibling generated file (``client.api.ts`` -> ``./client.api``)."""
    return "./" + filename.removesuffix(".ts")


def render_schemas(
    order: list[str],
    schemas: Mapping[str, SchemaNode],
    env: Optional[Environment] = None,
) -> str:
    """Render the schemas module.

    Args:
        order: Schema names in emission order (dependencies first), as
            returned by :func:`~zodgen.compiler.ordering.order_schemas`.
        schemas: Every named schema node.
        env: Optional pre-built environment.

    Returns:
        The module source: for each name, an exported type alias followed
        by an exported validator annotated with that alias.
    """
    resolver = TypeResolver()
    entries: list[dict[str, str]] = []
    for name in order:
        resolved = resolver.resolve(schemas[name])
        entries.append(
            {
                "name": type_name(name),
                "symbol": schema_symbol(name),
                "type": resolved.type,
                "validator": resolved.validator,
            }
        )

    env = env or create_environment()
    return env.get_template("schemas.ts.j2").render(schemas=entries)


def render_client(base_url: str, env: Optional[Environment] = None) -> str:
    """Render the fixed transport client module with *base_url* baked in."""
    env = env or create_environment()
    return env.get_template("client.ts.j2").render(base_url=base_url)


def _comment_text(text: Optional[str]) -> Optional[str]:
    """Collapse *text* onto one line that cannot close a block comment."""
    if not text:
        return None
    return " ".join(text.split()).replace("*/", "*\\/")


def _function_context(operation: Operation) -> dict[str, Any]:
    args = [f"{argument_name(name)}: string" for name in operation.path_params]
    if operation.query_params:
        bag = ", ".join(f"{property_key(name)}?: string" for name in operation.query_params)
        args.append(f"params?: {{ {bag} }}")
    if operation.request_body_type is not None:
        args.append(f"body: {operation.request_body_type}")
    args.append("options: RequestOptions")

    return {
        "identifier": operation.identifier,
        "summary": _comment_text(operation.summary),
        "deprecated": operation.deprecated,
        "method": operation.method.value.upper(),
        "path": operation.path,
        "args": ", ".join(args),
        "response_type": operation.response_type,
        "client_method": operation.method.client_method,
        "url_template": operation.url_template,
        "has_query": bool(operation.query_params),
        "has_body": operation.request_body_type is not None,
    }


def render_endpoints(
    operations: list[Operation],
    base_url: str,
    env: Optional[Environment] = None,
) -> str:
    """Render the endpoints module: one exported async function per operation."""
    env = env or create_environment()
    return env.get_template("endpoints.ts.j2").render(
        base_url=base_url,
        client_module=_module_name(CLIENT_FILENAME),
        schemas_module=_module_name(SCHEMAS_FILENAME),
        functions=[_function_context(op) for op in operations],
    )
