"""Load OpenAPI documents from a URL, a local file, or stdin.

This is the only module in the parser that performs I/O. Whatever the source,
the text is decoded as JSON or YAML and must yield a mapping; the compiler
never sees anything but a plain ``dict``.

The two public functions are:

* :func:`load_spec` -- Fetch and decode a document from any supported locator.
* :func:`validate_openapi_version` -- Return the ``openapi`` version string,
  rejecting Swagger 2.x and non-3.x documents.

The decoded dict is then handed to :func:`~zodgen.parser.document.build_document`.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from zodgen.exceptions import SpecParseError

logger = logging.getLogger(__name__)

_FETCH_TIMEOUT = 30.0
_YAML_SUFFIXES = (".yaml", ".yml")


def is_url(locator: str) -> bool:
    """Return ``True`` when *locator* should be fetched over HTTP(S)."""
    return locator.startswith(("http://", "https://"))


def load_spec(locator: str) -> dict[str, Any]:
    """Load an OpenAPI document from *locator*.

    Args:
        locator: An ``http(s)://`` URL, a path to a ``.json``/``.yaml``/``.yml``
            file, or ``-`` to read from stdin.

    Returns:
        The decoded document.

    Raises:
        SpecParseError: If the source cannot be read or does not decode to a
            mapping.
    """
    if locator == "-":
        text, hint = _read_stdin(), ""
    elif is_url(locator):
        text, hint = _fetch(locator)
    else:
        text, hint = _read_file(locator)

    logger.debug("Loaded %d characters from %s", len(text), locator)
    return _decode(text, hint)


def _read_stdin() -> str:
    try:
        text = sys.stdin.read()
    except OSError as exc:
        raise SpecParseError(f"Failed to read from stdin: {exc}") from exc
    if not text.strip():
        raise SpecParseError("No input received from stdin")
    return text


def _fetch(url: str) -> tuple[str, str]:
    """GET *url* and return its body with a format hint from ``Content-Type``."""
    try:
        response = httpx.get(url, timeout=_FETCH_TIMEOUT, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecParseError(
            f"HTTP {exc.response.status_code} fetching spec from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SpecParseError(f"Failed to fetch spec from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"
    else:
        hint = ""
    return response.text, hint


def _read_file(path: str) -> tuple[str, str]:
    """Read a local spec file and return its text with a hint from the suffix."""
    file_path = Path(path)
    if not file_path.is_file():
        raise SpecParseError(f"Spec file not found: {path}")
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecParseError(f"Failed to read spec file {path}: {exc}") from exc
    if not text.strip():
        raise SpecParseError(f"Spec file is empty: {path}")

    suffix = file_path.suffix.lower()
    if suffix == ".json":
        return text, "json"
    if suffix in _YAML_SUFFIXES:
        return text, "yaml"
    return text, ""


def _decode(text: str, hint: str = "") -> dict[str, Any]:
    """Decode *text* as JSON, falling back to YAML.

    JSON is tried first unless the hint says YAML, since every JSON document
    is also YAML. A ``json`` hint disables the YAML fallback.
    """
    errors: list[str] = []

    if hint != "yaml":
        try:
            return _require_mapping(json.loads(text))
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc
            errors.append(f"JSON error: {exc}")

    try:
        return _require_mapping(yaml.safe_load(text))
    except yaml.YAMLError as exc:
        errors.append(f"YAML error: {exc}")

    raise SpecParseError(
        "Failed to parse spec as JSON or YAML\n  " + "\n  ".join(errors)
    )


def _require_mapping(value: Any) -> dict[str, Any]:
    if isinstance(value, dict):
        return value
    kind = "empty document" if value is None else type(value).__name__
    raise SpecParseError(f"Spec must be a JSON/YAML object (got {kind})")


def validate_openapi_version(spec: dict[str, Any]) -> str:
    """Return the document's OpenAPI version string.

    Any ``3.x`` version is accepted.

    Raises:
        SpecParseError: For Swagger 2.x documents, a missing ``openapi``
            field, or a non-3.x version.
    """
    if "swagger" in spec:
        raise SpecParseError(
            f"Swagger {spec['swagger']} is not supported. "
            "Only OpenAPI 3.x documents can be compiled. "
            "Consider converting with https://converter.swagger.io"
        )

    version = spec.get("openapi")
    if version is None:
        raise SpecParseError(
            "Missing 'openapi' field. Is this an OpenAPI 3.x document?"
        )

    version_str = str(version)
    if not version_str.startswith("3."):
        raise SpecParseError(
            f"Unsupported OpenAPI version: {version_str}. "
            "Only OpenAPI 3.x documents can be compiled."
        )
    return version_str
