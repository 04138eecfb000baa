"""Generator configuration with precedence resolution and atomic file writes.

Settings come from four layers, highest precedence first:

1. CLI flags (``--output``, ``--base-url``, ``--strict-refs``)
2. Environment variables (``ZODGEN_OUTPUT``, ``ZODGEN_BASE_URL``,
   ``ZODGEN_STRICT_REFS``)
3. Project config (``./zodgen.json``)
4. Defaults declared on :class:`~zodgen.models.GeneratorConfig`

:func:`resolve_config` merges them. :func:`atomic_write` is the single place
generated files are written, using a temp-file-then-rename strategy so an
interrupted run never leaves a half-written module behind.
"""

from __future__ import annotations

import contextlib
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from zodgen.exceptions import ConfigError
from zodgen.models import GeneratorConfig

_PROJECT_CONFIG_FILENAME = "zodgen.json"

_ENV_OUTPUT = "ZODGEN_OUTPUT"
_ENV_BASE_URL = "ZODGEN_BASE_URL"
_ENV_STRICT_REFS = "ZODGEN_STRICT_REFS"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


# --- Atomic file writes ---


def atomic_write(path: Path, data: str) -> None:
    """Replace *path* with *data* in one rename.

    The text is written and fsynced to a hidden sibling temp file, which is
    then moved over *path* with ``os.replace``. Readers see either the old file
    or the complete new one. The temp file is removed if anything fails,
    including ``KeyboardInterrupt``.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_name)
        raise


# --- Project-local config ---


def load_project_config(directory: Optional[Path] = None) -> dict[str, Any]:
    """Load ``zodgen.json`` from *directory* (default: the working directory).

    Returns:
        The parsed JSON object, or an empty dict if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = (directory or Path.cwd()) / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


def _env_flag(name: str) -> Optional[bool]:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean (got {raw!r})")


# --- Precedence resolution ---


def resolve_config(
    cli_output: Optional[str] = None,
    cli_base_url: Optional[str] = None,
    cli_strict_refs: Optional[bool] = None,
    project_dir: Optional[Path] = None,
) -> GeneratorConfig:
    """Resolve the effective :class:`~zodgen.models.GeneratorConfig`.

    ``None`` for a CLI argument means "not given on the command line" and
    lets the lower layers decide.

    Raises:
        ConfigError: If the project config or an environment variable holds
            an invalid value.
    """
    # 3. Project config over defaults
    merged: dict[str, Any] = dict(load_project_config(project_dir))

    # 2. Environment
    env_output = os.environ.get(_ENV_OUTPUT)
    if env_output:
        merged["output"] = env_output
    env_base_url = os.environ.get(_ENV_BASE_URL)
    if env_base_url:
        merged["base_url"] = env_base_url
    env_strict = _env_flag(_ENV_STRICT_REFS)
    if env_strict is not None:
        merged["strict_refs"] = env_strict

    # 1. CLI flags
    if cli_output is not None:
        merged["output"] = cli_output
    if cli_base_url is not None:
        merged["base_url"] = cli_base_url
    if cli_strict_refs is not None:
        merged["strict_refs"] = cli_strict_refs

    try:
        return GeneratorConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
