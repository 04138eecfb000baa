"""Tests for zodgen.config -- atomic writes, project config, precedence."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from zodgen.config import atomic_write, load_project_config, resolve_config
from zodgen.exceptions import ConfigError


def _write_json(path: Path, data: Any) -> None:
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    def test_creates_file_and_parents(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "out.ts"
        atomic_write(target, "export {};\n")
        assert target.read_text(encoding="utf-8") == "export {};\n"

    def test_replaces_existing(self, tmp_path: Path) -> None:
        target = tmp_path / "out.ts"
        target.write_text("old", encoding="utf-8")
        atomic_write(target, "new")
        assert target.read_text(encoding="utf-8") == "new"

    def test_no_temp_file_left_on_failure(self, tmp_path: Path) -> None:
        target = tmp_path / "out.ts"
        with patch("zodgen.config.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError, match="disk full"):
                atomic_write(target, "data")
        assert not target.exists()
        assert os.listdir(tmp_path) == []


# ---------------------------------------------------------------------------
# Project config
# ---------------------------------------------------------------------------


class TestLoadProjectConfig:
    def test_missing_file(self, isolated_env: Path) -> None:
        assert load_project_config() == {}

    def test_reads_cwd(self, isolated_env: Path) -> None:
        _write_json(isolated_env / "zodgen.json", {"output": "./src/api"})
        assert load_project_config() == {"output": "./src/api"}

    def test_explicit_directory(self, tmp_path: Path) -> None:
        _write_json(tmp_path / "zodgen.json", {"strict_refs": True})
        assert load_project_config(tmp_path) == {"strict_refs": True}

    def test_invalid_json(self, isolated_env: Path) -> None:
        (isolated_env / "zodgen.json").write_text("{oops", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid project config"):
            load_project_config()

    def test_non_object(self, isolated_env: Path) -> None:
        _write_json(isolated_env / "zodgen.json", ["output"])
        with pytest.raises(ConfigError, match="expected a JSON object"):
            load_project_config()


# ---------------------------------------------------------------------------
# Precedence
# ---------------------------------------------------------------------------


class TestResolveConfig:
    def test_defaults(self, isolated_env: Path) -> None:
        config = resolve_config()
        assert config.output == "./__generated__"
        assert config.base_url is None
        assert config.strict_refs is False

    def test_project_over_defaults(self, isolated_env: Path) -> None:
        _write_json(isolated_env / "zodgen.json", {"output": "proj", "base_url": "https://p.test"})
        config = resolve_config()
        assert config.output == "proj"
        assert config.base_url == "https://p.test"

    def test_env_over_project(self, isolated_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_json(isolated_env / "zodgen.json", {"output": "proj", "strict_refs": False})
        monkeypatch.setenv("ZODGEN_OUTPUT", "env")
        monkeypatch.setenv("ZODGEN_STRICT_REFS", "yes")
        config = resolve_config()
        assert config.output == "env"
        assert config.strict_refs is True

    def test_cli_over_env(self, isolated_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ZODGEN_OUTPUT", "env")
        monkeypatch.setenv("ZODGEN_BASE_URL", "https://env.test")
        monkeypatch.setenv("ZODGEN_STRICT_REFS", "1")
        config = resolve_config(
            cli_output="cli", cli_base_url="https://cli.test", cli_strict_refs=False
        )
        assert config.output == "cli"
        assert config.base_url == "https://cli.test"
        assert config.strict_refs is False

    def test_empty_env_ignored(self, isolated_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ZODGEN_OUTPUT", "")
        assert resolve_config().output == "./__generated__"

    def test_bad_env_flag(self, isolated_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ZODGEN_STRICT_REFS", "maybe")
        with pytest.raises(ConfigError, match="ZODGEN_STRICT_REFS must be a boolean"):
            resolve_config()

    def test_bad_project_value(self, isolated_env: Path) -> None:
        _write_json(isolated_env / "zodgen.json", {"strict_refs": "sometimes"})
        with pytest.raises(ConfigError, match="Invalid configuration"):
            resolve_config()
