# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Line-based deduplication of raw diagnostics."""

from __future__ import annotations

from collections.abc import Iterable

from ..core.models import Diagnostic
from ..lexical.positions import LineIndex

DedupKey = tuple[int, str]


def dedupe_key(text: str, diagnostic: Diagnostic, index: LineIndex) -> DedupKey:
    """Return the ``(line, matched text)`` identity of ``diagnostic``.

    Args:
        text: Original (unmasked) source text.
        diagnostic: Diagnostic whose identity should be computed.
        index: Line index built from ``text``.

    Returns:
        DedupKey: 1-based line of the start offset and the flagged substring.
    """

    return index.line_of(diagnostic.start_offset), text[diagnostic.start_offset : diagnostic.end_offset]


def dedupe_by_line(text: str, diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
    """Drop diagnostics repeating an earlier ``(line, matched text)`` pair.

    Args:
        text: Original (unmasked) source text the offsets refer to.
        diagnostics: Raw diagnostics in discovery order.

    Returns:
        list[Diagnostic]: First occurrence of each pair, order preserved.
    """

    index = LineIndex(text)
    seen: set[DedupKey] = set()
    retained: list[Diagnostic] = []
    for diagnostic in diagnostics:
        key = dedupe_key(text, diagnostic, index)
        if key in seen:
            continue
        seen.add(key)
        retained.append(diagnostic)
    return retained


__all__ = ["DedupKey", "dedupe_by_line", "dedupe_key"]
