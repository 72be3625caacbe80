# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lexical checks producing deprecation and reassignment diagnostics."""

from __future__ import annotations

from .deprecations import (
    find_deprecated_imports,
    find_deprecated_parameters,
    find_deprecations,
    find_digit_identifiers,
)
from .reassignment import ScanState, Scope, advance_line, find_reassignments

__all__ = [
    "ScanState",
    "Scope",
    "advance_line",
    "find_deprecated_imports",
    "find_deprecated_parameters",
    "find_deprecations",
    "find_digit_identifiers",
    "find_reassignments",
]
