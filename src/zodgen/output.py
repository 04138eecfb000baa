"""Status reporting on stderr, following `clig.dev <https://clig.dev/>`_ conventions.

zodgen's real output is files on disk, so everything printed is a diagnostic
and goes to **stderr**: progress, success, warnings and errors. Colour is
applied through Rich and switched off by ``--no-color``, ``NO_COLOR`` or
``TERM=dumb``.

A :class:`Reporter` is created by the CLI from its flags and passed into
:func:`~zodgen.pipeline.generate`; the compiler never reaches for a global
console. Library callers that want silence pass :func:`silent_reporter`.
"""

from __future__ import annotations

import os
import sys
from typing import Optional, TextIO

from rich.console import Console


class Reporter:
    """Writes user-facing status messages to stderr.

    Args:
        no_color: Disable all colour and Rich markup.
        quiet: Suppress informational, success and progress messages.
            Warnings and errors are always shown.
        verbose: Show debug messages.
        stream: Destination stream; defaults to ``sys.stderr``.
    """

    def __init__(
        self,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
        stream: Optional[TextIO] = None,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._stream = stream if stream is not None else sys.stderr
        self._console = Console(
            file=self._stream,
            no_color=self._no_color,
            highlight=False,
            stderr=stream is None,
        )

    @property
    def is_quiet(self) -> bool:
        """Whether quiet mode is enabled."""
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        """Whether verbose mode is enabled."""
        return self._verbose

    def _emit(self, plain: str, markup: str) -> None:
        if self._no_color:
            print(plain, file=self._stream, flush=True)
        else:
            self._console.print(markup)

    def info(self, message: str) -> None:
        """Print an informational message. Suppressed by ``--quiet``."""
        if not self._quiet:
            self._emit(message, message)

    def progress(self, message: str) -> None:
        """Print a dimmed step message (``Generating schemas...``). Suppressed by ``--quiet``."""
        if not self._quiet:
            self._emit(message, f"[dim]{message}[/dim]")

    def success(self, message: str) -> None:
        """Print a green check-marked message. Suppressed by ``--quiet``."""
        if not self._quiet:
            self._emit(f"✔ {message}", f"[green]✔ {message}[/green]")

    def warning(self, message: str) -> None:
        """Print a yellow warning. NOT suppressed by ``--quiet``."""
        self._emit(f"Warning: {message}", f"[yellow]Warning:[/yellow] {message}")

    def error(self, message: str) -> None:
        """Print a bold-red error. Never suppressed."""
        self._emit(f"Error: {message}", f"[bold red]Error:[/bold red] {message}")

    def suggest(self, message: str) -> None:
        """Print a dimmed next-step hint. Suppressed by ``--quiet``."""
        if not self._quiet:
            formatted = f"→ {message}"
            self._emit(formatted, f"[dim]{formatted}[/dim]")

    def debug(self, message: str) -> None:
        """Print a debug message. Only shown with ``--verbose``."""
        if self._verbose:
            self._emit(f"[debug] {message}", f"[dim]\\[debug] {message}[/dim]")


def silent_reporter() -> Reporter:
    """A reporter that shows only warnings and errors."""
    return Reporter(no_color=True, quiet=True)


def _should_disable_color() -> bool:
    """Check if color should be disabled per clig.dev.

    Returns True when NO_COLOR env var is set (any value) or TERM=dumb.
    """
    if os.environ.get("NO_COLOR") is not None:
        return True
    if os.environ.get("TERM") == "dumb":
        return True
    return False
