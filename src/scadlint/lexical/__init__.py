# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lexical preprocessing helpers shared by the scanners."""

from __future__ import annotations

from .masking import LineStrip, mask, mask_comments, mask_comments_and_strings, strip_line_comments
from .positions import LineIndex

__all__ = [
    "LineIndex",
    "LineStrip",
    "mask",
    "mask_comments",
    "mask_comments_and_strings",
    "strip_line_comments",
]
