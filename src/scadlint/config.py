# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and helpers for the scadlint diagnostics engine."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_DEPRECATED_PARAMETERS: Final[dict[str, str]] = {
    "filename": "file",
    "layername": "layer",
    "triangles": "faces",
}

DEFAULT_DEPRECATED_EXTENSIONS: Final[dict[str, str]] = {
    ".amf": "AMF import is deprecated. Please use 3MF instead.",
}

DEFAULT_INCLUDE_PATTERNS: Final[tuple[str, ...]] = ("*.scad",)


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class ScanConfig(BaseModel):
    """Select which lexical checks run and the tables they match against."""

    model_config = ConfigDict(validate_assignment=True)

    deprecations: bool = True
    reassignments: bool = True
    deprecated_parameters: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_DEPRECATED_PARAMETERS))
    deprecated_extensions: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_DEPRECATED_EXTENSIONS))
    include: list[str] = Field(default_factory=lambda: list(DEFAULT_INCLUDE_PATTERNS))

    @field_validator("deprecated_parameters")
    @classmethod
    def _validate_parameters(cls, value: dict[str, str]) -> dict[str, str]:
        """Ensure parameter names are plain identifiers.

        Args:
            value: Mapping of deprecated parameter names to their replacements.

        Returns:
            dict[str, str]: The validated mapping.

        Raises:
            ValueError: If a name or replacement is not an identifier.
        """

        for deprecated, replacement in value.items():
            if not deprecated.isidentifier() or not replacement.isidentifier():
                raise ValueError(f"invalid parameter rename '{deprecated}' -> '{replacement}'")
        return value

    @field_validator("deprecated_extensions")
    @classmethod
    def _normalise_extensions(cls, value: dict[str, str]) -> dict[str, str]:
        """Lower-case extensions and ensure each carries a leading dot.

        Args:
            value: Mapping of file extensions to advisory messages.

        Returns:
            dict[str, str]: Normalised mapping.
        """

        normalised: dict[str, str] = {}
        for extension, message in value.items():
            key = extension.strip().lower()
            if not key.lstrip("."):
                raise ValueError("deprecated extension must not be empty")
            if not key.startswith("."):
                key = f".{key}"
            normalised[key] = message
        return normalised


class OutputConfig(BaseModel):
    """Configuration for controlling console output."""

    model_config = ConfigDict(validate_assignment=True)

    color: bool = True
    emoji: bool = True
    format: Literal["text", "json"] = "text"


class Config(BaseModel):
    """Top-level configuration bundling the scan and output sections."""

    model_config = ConfigDict(validate_assignment=True)

    scan: ScanConfig = Field(default_factory=ScanConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    def to_dict(self) -> dict[str, Any]:
        """Return a plain mapping representation of the configuration."""

        return self.model_dump(mode="python")


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into ``base`` recursively without mutating either.

    Args:
        base: Lower-precedence mapping.
        override: Higher-precedence mapping whose values win.

    Returns:
        dict[str, Any]: Newly merged mapping.
    """

    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


__all__ = [
    "DEFAULT_DEPRECATED_EXTENSIONS",
    "DEFAULT_DEPRECATED_PARAMETERS",
    "Config",
    "ConfigError",
    "OutputConfig",
    "ScanConfig",
    "deep_merge",
]
