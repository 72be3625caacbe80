# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Config loading utilities with layered precedence."""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Final, Protocol

from pydantic import ValidationError

from .config import Config, ConfigError, deep_merge

LOGGER = logging.getLogger(__name__)

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PROJECT_CONFIG_FILENAME: Final[str] = ".scadlint.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "scadlint"


class ConfigSource(Protocol):
    """Source of a configuration fragment."""

    name: str

    def load(self) -> Mapping[str, Any]:
        """Return the raw configuration fragment provided by the source."""
        ...


class DefaultConfigSource:
    """Return the built-in defaults as a configuration fragment."""

    name = "defaults"

    def load(self) -> Mapping[str, Any]:
        return Config().to_dict()


class TomlConfigSource:
    """Load configuration data from a standalone TOML document."""

    def __init__(self, path: Path, *, name: str | None = None) -> None:
        self._path = path
        self.name = name or str(path)

    def load(self) -> Mapping[str, Any]:
        return _read_toml(self._path)


class PyProjectConfigSource(TomlConfigSource):
    """Read configuration from ``[tool.scadlint]`` within ``pyproject.toml``."""

    def load(self) -> Mapping[str, Any]:
        data = super().load()
        tool_section = data.get(PYPROJECT_TOOL_KEY)
        if not isinstance(tool_section, Mapping):
            return {}
        section = tool_section.get(PYPROJECT_SECTION_KEY)
        if not isinstance(section, Mapping):
            return {}
        return dict(section)


def _read_toml(path: Path) -> Mapping[str, Any]:
    """Parse the TOML document at ``path``.

    Args:
        path: Location of the TOML document.

    Returns:
        Mapping[str, Any]: Parsed document, or an empty mapping when the file is absent.

    Raises:
        ConfigError: If the document cannot be read or parsed.
    """

    if not path.exists():
        return {}
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Unable to read configuration at {path}: {exc}") from exc


class ConfigLoader:
    """Apply layered configuration sources with predictable precedence."""

    def __init__(self, sources: Sequence[ConfigSource]) -> None:
        """Initialise a loader that merges the supplied configuration sources.

        Args:
            sources: Ordered collection of configuration sources, lowest
                precedence first.

        Raises:
            ValueError: If ``sources`` is empty.
        """

        if not sources:
            raise ValueError("at least one configuration source is required")
        self._sources = list(sources)

    @classmethod
    def for_root(cls, project_root: Path, *, config_file: Path | None = None) -> ConfigLoader:
        """Build a loader for ``project_root`` honouring the default precedence.

        Args:
            project_root: Directory searched for ``pyproject.toml`` and ``.scadlint.toml``.
            config_file: Optional explicit configuration file overriding all others.

        Returns:
            ConfigLoader: Loader configured with default precedence ordering.

        Raises:
            ConfigError: If ``config_file`` is given but does not exist.
        """

        sources: list[ConfigSource] = [
            DefaultConfigSource(),
            PyProjectConfigSource(project_root / PYPROJECT_FILENAME),
            TomlConfigSource(project_root / PROJECT_CONFIG_FILENAME),
        ]
        if config_file is not None:
            if not config_file.is_file():
                raise ConfigError(f"Configuration file not found: {config_file}")
            sources.append(TomlConfigSource(config_file))
        return cls(sources)

    def load(self) -> Config:
        """Merge every source and validate the result.

        Returns:
            Config: Validated configuration.

        Raises:
            ConfigError: If the merged data fails validation.
        """

        merged: dict[str, Any] = {}
        for source in self._sources:
            fragment = source.load()
            if fragment:
                LOGGER.debug("applying configuration from %s", source.name)
            merged = deep_merge(merged, fragment)
        try:
            return Config.model_validate(merged)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc


def load_config(project_root: Path, *, config_file: Path | None = None) -> Config:
    """Return the effective configuration for ``project_root``.

    Args:
        project_root: Directory whose configuration files should be consulted.
        config_file: Optional explicit configuration file.

    Returns:
        Config: Validated configuration.
    """

    return ConfigLoader.for_root(project_root, config_file=config_file).load()


__all__ = [
    "ConfigLoader",
    "ConfigSource",
    "DefaultConfigSource",
    "PyProjectConfigSource",
    "TomlConfigSource",
    "load_config",
]
