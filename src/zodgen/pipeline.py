"""Wire the parser, compiler and emitter into one generation run.

:func:`generate` is the pure core: it takes a parsed
:class:`~zodgen.models.Document` and returns the three rendered modules as a
:class:`~zodgen.models.GeneratedSources`. Nothing is written until the whole
document has compiled, so a circular dependency or a strict-mode dangling
reference leaves the output directory untouched.

:func:`write_sources` and :func:`run` add the I/O on either side.

Example::

    from pathlib import Path

    from zodgen.output import silent_reporter
    from zodgen.parser import build_document, load_spec, validate_openapi_version
    from zodgen.pipeline import generate, write_sources

    raw = load_spec("openapi.yaml")
    document = build_document(raw, validate_openapi_version(raw))
    sources = generate(document, reporter=silent_reporter())
    write_sources(sources, Path("./__generated__"))
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from zodgen.compiler.graph import build_dependency_graph, find_dangling_references
from zodgen.compiler.naming import find_name_collisions
from zodgen.compiler.operations import compile_operations, extract_base_path
from zodgen.compiler.ordering import order_schemas
from zodgen.config import atomic_write
from zodgen.emitter import render_client, render_endpoints, render_schemas
from zodgen.emitter.render import create_environment
from zodgen.exceptions import OutputError, UnresolvedReferenceError
from zodgen.models import Document, GeneratedSources, GeneratorConfig
from zodgen.output import Reporter, silent_reporter
from zodgen.parser import build_document, load_spec, validate_openapi_version

logger = logging.getLogger(__name__)


def generate(
    document: Document,
    *,
    base_url: Optional[str] = None,
    strict_refs: bool = False,
    reporter: Optional[Reporter] = None,
) -> GeneratedSources:
    """Compile *document* into the schemas, client and endpoints modules.

    Args:
        document: The parsed API description.
        base_url: Optional origin placed before the common path prefix in
            the client's ``API_BASE_URL``.
        strict_refs: Raise instead of warning when a ``$ref`` targets a
            schema that is not defined.
        reporter: Destination for status messages. Defaults to a reporter
            that only shows warnings and errors.

    Returns:
        The rendered sources together with the schema order and operations
        they were rendered from.

    Raises:
        CircularDependencyError: If the schemas reference each other in a
            cycle.
        UnresolvedReferenceError: If *strict_refs* is set and a reference
            target is missing.
    """
    reporter = reporter or silent_reporter()
    env = create_environment()

    reporter.progress("Generating schemas...")
    graph = build_dependency_graph(document.schemas)
    dangling = find_dangling_references(graph)
    if dangling:
        if strict_refs:
            raise UnresolvedReferenceError(dangling)
        logger.debug("Dangling references: %s", dangling)
        reporter.warning(
            "Unresolved schema references (emitted as-is): " + ", ".join(dangling)
        )

    order = order_schemas(graph)
    for alias, names in find_name_collisions(document.schemas).items():
        reporter.warning(
            f"Schemas {', '.join(names)} all map to the TypeScript name {alias} "
            "(duplicate declarations)"
        )
    schemas = render_schemas(order, document.schemas, env=env)
    reporter.success(f"Schemas generated ({len(order)})")

    reporter.progress("Generating client...")
    base_path = extract_base_path(list(document.paths))
    client_base = (base_url or "").rstrip("/") + base_path
    client = render_client(client_base, env=env)
    reporter.success("Client generated")

    reporter.progress("Generating endpoints...")
    operations = compile_operations(document, base_path)
    endpoints = render_endpoints(operations, base_path, env=env)
    reporter.success(f"Endpoints generated ({len(operations)})")

    reporter.debug(f"Base path: {base_path or '(none)'}")
    return GeneratedSources(
        schemas=schemas,
        client=client,
        endpoints=endpoints,
        schema_order=order,
        operations=operations,
        base_url=client_base,
    )


def write_sources(sources: GeneratedSources, output_dir: Path) -> list[Path]:
    """Write every generated module into *output_dir*.

    The directory is created if needed and each file is replaced atomically.

    Returns:
        The written paths, in file order.

    Raises:
        OutputError: If the directory or a file cannot be written.
    """
    written: list[Path] = []
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        for filename, content in sources.files().items():
            path = output_dir / filename
            atomic_write(path, content)
            logger.debug("Wrote %s (%d bytes)", path, len(content))
            written.append(path)
    except OSError as exc:
        raise OutputError(f"Cannot write generated files to {output_dir}: {exc}") from exc
    return written


def run(
    locator: str,
    config: GeneratorConfig,
    reporter: Optional[Reporter] = None,
    *,
    dry_run: bool = False,
) -> GeneratedSources:
    """Load *locator*, generate, and (unless *dry_run*) write to ``config.output``."""
    reporter = reporter or silent_reporter()

    reporter.info(f"Reading spec from: {locator}")
    raw = load_spec(locator)
    version = validate_openapi_version(raw)
    document = build_document(raw, version)
    reporter.debug(
        f"{document.title} {document.version} (OpenAPI {version}): "
        f"{len(document.schemas)} schemas, {len(document.paths)} paths"
    )

    sources = generate(
        document,
        base_url=config.base_url,
        strict_refs=config.strict_refs,
        reporter=reporter,
    )

    output_dir = Path(config.output)
    if dry_run:
        for filename in sources.files():
            reporter.info(f"Would write: {output_dir / filename}")
        return sources

    write_sources(sources, output_dir)
    reporter.success(f"Files written to {output_dir}")
    return sources
