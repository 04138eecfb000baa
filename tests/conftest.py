"""Shared test fixtures for zodgen.

Provides the raw petstore document, its parsed :class:`~zodgen.models.Document`,
an isolated working directory with no ``ZODGEN_*`` environment, and a
reporter that writes into a :class:`io.StringIO` for assertions.
"""

from __future__ import annotations

import io
import json
from pathlib import Path
from typing import Any, Callable

import pytest

from zodgen.models import Document
from zodgen.output import Reporter
from zodgen.parser import build_document


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Spec fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_path() -> Path:
    """Path to the petstore fixture on disk."""
    return FIXTURES_DIR / "petstore.json"


@pytest.fixture
def petstore_raw(petstore_path: Path) -> dict[str, Any]:
    """Load raw petstore spec dict."""
    with open(petstore_path) as f:
        return json.load(f)


@pytest.fixture
def petstore_document(petstore_raw: dict[str, Any]) -> Document:
    """Petstore spec parsed into a Document."""
    return build_document(petstore_raw, petstore_raw["openapi"])


@pytest.fixture
def make_spec() -> Callable[..., dict[str, Any]]:
    """Factory for a minimal OpenAPI 3.0 dict around given schemas and paths."""

    def _make(
        schemas: dict[str, Any] | None = None,
        paths: dict[str, Any] | None = None,
        **components: Any,
    ) -> dict[str, Any]:
        return {
            "openapi": "3.0.3",
            "info": {"title": "Test API", "version": "1.0.0"},
            "paths": paths or {},
            "components": {"schemas": schemas or {}, **components},
        }

    return _make


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run inside an empty temp directory with zodgen's env vars cleared."""
    for var in ("ZODGEN_OUTPUT", "ZODGEN_BASE_URL", "ZODGEN_STRICT_REFS", "NO_COLOR"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Reporter capture
# ---------------------------------------------------------------------------


@pytest.fixture
def report_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def reporter(report_stream: io.StringIO) -> Reporter:
    """Uncoloured reporter writing into ``report_stream``."""
    return Reporter(no_color=True, stream=report_stream)
