# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Diagnostic post-processing helpers."""

from __future__ import annotations

from .dedupe import DedupKey, dedupe_by_line, dedupe_key

__all__ = ["DedupKey", "dedupe_by_line", "dedupe_key"]
