"""Typer application and CLI entry point for zodgen.

The root callback builds a :class:`~zodgen.output.Reporter` from the global
flags and stores it in ``ctx.obj``; the ``generate`` sub-command resolves the
effective :class:`~zodgen.models.GeneratorConfig` and hands both to
:func:`zodgen.pipeline.run`.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs a SIGINT handler, configures :mod:`logging`,
invokes the Typer app and maps :class:`~zodgen.exceptions.ZodgenError` to its
exit code.

See Also:
    :mod:`zodgen.config`: Configuration precedence resolution.
    :mod:`zodgen.exit_codes`: The exit code table.
"""

from __future__ import annotations

import logging
import signal
import sys
from typing import Any, Optional

import typer

from zodgen import __version__
from zodgen.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="zodgen",
    help="Generate zod schemas and a typed fetch client from OpenAPI 3.0/3.1 specs.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"zodgen {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Args:
        ctx: Typer invocation context.
        version: If ``True``, print the version string and exit.
        no_color: Disable all colour and Rich markup.
        quiet: Suppress progress and success messages.
        verbose: Enable debug-level diagnostic output.
    """
    from zodgen.output import Reporter

    if verbose:
        logging.getLogger("zodgen").setLevel(logging.DEBUG)

    ctx.ensure_object(dict)
    ctx.obj["reporter"] = Reporter(no_color=no_color, quiet=quiet, verbose=verbose)
    ctx.obj["verbose"] = verbose


@app.command("generate")
def generate_command(
    ctx: typer.Context,
    spec: str = typer.Option(
        ...,
        "--input",
        "-i",
        help="OpenAPI spec URL or file path (use '-' for stdin).",
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Output directory for generated files."
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="Origin placed before the common path prefix."
    ),
    strict_refs: Optional[bool] = typer.Option(
        None,
        "--strict-refs/--no-strict-refs",
        help="Fail when a $ref targets an undefined schema.",
        show_default=False,
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Show what would be written without writing."
    ),
) -> None:
    """Generate schemas.api.ts, client.api.ts and endpoints.api.ts.

    Example::

        zodgen generate --input ./openapi.yaml --output ./src/api
        curl -s https://api.example.com/openapi.json | zodgen generate -i -
    """
    from zodgen.config import resolve_config
    from zodgen.exceptions import InvalidUsageError, ZodgenError
    from zodgen.output import Reporter
    from zodgen.pipeline import run

    obj = ctx.obj or {}
    reporter: Reporter = obj.get("reporter") or Reporter()

    try:
        if not spec.strip():
            raise InvalidUsageError("--input must be a URL, a file path or '-'")
        config = resolve_config(
            cli_output=output,
            cli_base_url=base_url,
            cli_strict_refs=strict_refs,
        )
        run(spec, config, reporter, dry_run=dry_run)
    except ZodgenError as exc:
        reporter.error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if not dry_run:
        reporter.suggest("Import the endpoints module: import * as api from \"./endpoints.api\"")


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``zodgen`` console script.

    :class:`~zodgen.exceptions.ZodgenError` instances cause a clean exit with
    the error's ``exit_code``. Any other exception is reported and exits with
    the generic failure code; ``--verbose`` adds the traceback.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    logging.basicConfig(level=logging.WARNING, format="%(name)s: %(message)s")
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from zodgen.exceptions import ZodgenError
        from zodgen.output import Reporter

        reporter = Reporter()
        if isinstance(exc, ZodgenError):
            reporter.error(str(exc))
            sys.exit(exc.exit_code)
        logging.getLogger(__name__).debug("Unexpected error", exc_info=True)
        reporter.error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
