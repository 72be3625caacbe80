# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lexical diagnostics engine for OpenSCAD sources."""

from __future__ import annotations

from importlib import metadata

from .cache.store import CacheEntry, DiagnosticStore
from .config import Config, ConfigError, ScanConfig
from .core.models import Diagnostic, DiagnosticCode, DiagnosticKind, SourceSnapshot, TextRange
from .engine import scan_snapshot, scan_text
from .lexical.masking import mask

__all__ = [
    "CacheEntry",
    "Config",
    "ConfigError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticKind",
    "DiagnosticStore",
    "ScanConfig",
    "SourceSnapshot",
    "TextRange",
    "__version__",
    "mask",
    "scan_snapshot",
    "scan_text",
]

try:
    __version__ = metadata.version("scadlint")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
