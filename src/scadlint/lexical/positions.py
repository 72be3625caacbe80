# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Offset to line/column translation for source text."""

from __future__ import annotations

from bisect import bisect_right


class LineIndex:
    """Map character offsets to 1-based line and column numbers.

    Line starts are computed once per text; each lookup is a binary search.
    """

    __slots__ = ("_line_starts",)

    def __init__(self, text: str) -> None:
        """Index the line starts of ``text``.

        Args:
            text: Source text whose newline positions should be recorded.
        """

        starts = [0]
        position = text.find("\n")
        while position >= 0:
            starts.append(position + 1)
            position = text.find("\n", position + 1)
        self._line_starts = starts

    @property
    def line_count(self) -> int:
        """Return the number of lines in the indexed text."""

        return len(self._line_starts)

    def line_of(self, offset: int) -> int:
        """Return the 1-based line containing ``offset``.

        Args:
            offset: Character offset into the indexed text.

        Returns:
            int: Line number starting at ``1``.
        """

        return bisect_right(self._line_starts, offset)

    def line_start(self, line: int) -> int:
        """Return the offset at which 1-based ``line`` begins."""

        return self._line_starts[line - 1]

    def position_of(self, offset: int) -> tuple[int, int]:
        """Return the 1-based ``(line, column)`` pair for ``offset``.

        Args:
            offset: Character offset into the indexed text.

        Returns:
            tuple[int, int]: Line and column numbers, both starting at ``1``.
        """

        line = self.line_of(offset)
        return line, offset - self.line_start(line) + 1


__all__ = ["LineIndex"]
