# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Diagnostic rendering helpers."""

from __future__ import annotations

from .output import (
    FileReport,
    LocatedDiagnostic,
    ScanReport,
    dump_diagnostics,
    format_diagnostic_line,
    locate,
    render_json,
)

__all__ = [
    "FileReport",
    "LocatedDiagnostic",
    "ScanReport",
    "dump_diagnostics",
    "format_diagnostic_line",
    "locate",
    "render_json",
]
