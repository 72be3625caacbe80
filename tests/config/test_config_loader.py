# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for layered configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from scadlint.config import DEFAULT_DEPRECATED_PARAMETERS, Config, ConfigError, ScanConfig, deep_merge
from scadlint.config_loader import ConfigLoader, DefaultConfigSource, load_config


def test_defaults_without_files(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config == Config()
    assert config.scan.deprecated_parameters == DEFAULT_DEPRECATED_PARAMETERS
    assert config.scan.include == ["*.scad"]
    assert config.output.format == "text"


def test_pyproject_section_is_applied(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        "[tool.scadlint.scan]\nreassignments = false\n\n[tool.scadlint.output]\nformat = 'json'\n",
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.scan.reassignments is False
    assert config.scan.deprecations is True
    assert config.output.format == "json"


def test_pyproject_without_section_is_ignored(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[project]\nname = 'x'\n", encoding="utf-8")

    assert load_config(tmp_path) == Config()


def test_project_file_overrides_pyproject(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.scadlint.output]\nemoji = false\ncolor = false\n", encoding="utf-8")
    (tmp_path / ".scadlint.toml").write_text("[output]\ncolor = true\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.output.color is True
    assert config.output.emoji is False


def test_explicit_file_has_highest_precedence(tmp_path: Path) -> None:
    (tmp_path / ".scadlint.toml").write_text("[scan]\ndeprecations = false\n", encoding="utf-8")
    explicit = tmp_path / "ci.toml"
    explicit.write_text("[scan]\ndeprecations = true\n", encoding="utf-8")

    assert load_config(tmp_path, config_file=explicit).scan.deprecations is True


def test_tables_are_merged_with_defaults(tmp_path: Path) -> None:
    (tmp_path / ".scadlint.toml").write_text(
        "[scan.deprecated_parameters]\noldname = 'newname'\n\n[scan.deprecated_extensions]\nSTL = 'no stl'\n",
        encoding="utf-8",
    )

    scan = load_config(tmp_path).scan

    assert scan.deprecated_parameters == {**DEFAULT_DEPRECATED_PARAMETERS, "oldname": "newname"}
    assert set(scan.deprecated_extensions) == {".amf", ".stl"}


def test_missing_explicit_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path, config_file=tmp_path / "absent.toml")


def test_malformed_toml_raises(tmp_path: Path) -> None:
    (tmp_path / ".scadlint.toml").write_text("[scan\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Unable to read"):
        load_config(tmp_path)


@pytest.mark.parametrize(
    "body",
    [
        "[output]\nformat = 'xml'\n",
        "[scan.deprecated_parameters]\n'not valid' = 'file'\n",
        "[scan.deprecated_extensions]\n'.' = 'empty'\n",
    ],
)
def test_invalid_values_raise(tmp_path: Path, body: str) -> None:
    (tmp_path / ".scadlint.toml").write_text(body, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_loader_requires_sources() -> None:
    with pytest.raises(ValueError):
        ConfigLoader([])
    assert ConfigLoader([DefaultConfigSource()]).load() == Config()


def test_deep_merge_does_not_mutate_inputs() -> None:
    base = {"scan": {"deprecations": True, "include": ["*.scad"]}}
    override = {"scan": {"deprecations": False}}

    merged = deep_merge(base, override)

    assert merged == {"scan": {"deprecations": False, "include": ["*.scad"]}}
    assert base["scan"]["deprecations"] is True


def test_extension_keys_are_normalised() -> None:
    assert ScanConfig(deprecated_extensions={" .AMF ": "m", "obj": "n"}).deprecated_extensions == {
        ".amf": "m",
        ".obj": "n",
    }
