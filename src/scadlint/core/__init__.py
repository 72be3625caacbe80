# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core models and severity helpers."""

from __future__ import annotations

from .models import Diagnostic, DiagnosticCode, DiagnosticKind, SourceSnapshot, TextRange, snapshot_key
from .severity import Severity

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticKind",
    "Severity",
    "SourceSnapshot",
    "TextRange",
    "snapshot_key",
]
