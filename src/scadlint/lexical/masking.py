# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Length-preserving comment and string masking for OpenSCAD source text.

Masked characters are replaced with spaces while newlines are kept verbatim, so
every offset and line number computed against the masked text also holds for
the original text. The regex-based finders run over the masked output.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Final

MASK_CHAR: Final[str] = " "
NEWLINE: Final[str] = "\n"
LINE_COMMENT_START: Final[str] = "//"
BLOCK_COMMENT_START: Final[str] = "/*"
BLOCK_COMMENT_END: Final[str] = "*/"
STRING_QUOTES: Final[frozenset[str]] = frozenset({'"', "'"})
ESCAPE_CHAR: Final[str] = "\\"


class _LexState(Enum):
    NORMAL = auto()
    LINE_COMMENT = auto()
    BLOCK_COMMENT = auto()
    STRING = auto()


def mask(text: str, *, mask_strings: bool = False) -> str:
    """Blank out comments, and optionally string literals, in ``text``.

    Args:
        text: Original source text.
        mask_strings: When ``True`` quoted string literals are masked as well;
            otherwise quotes are not recognised at all.

    Returns:
        str: Text of identical length with masked characters replaced by spaces
        and newlines preserved.
    """

    chars = list(text)
    length = len(chars)
    state = _LexState.NORMAL
    quote = ""
    index = 0
    while index < length:
        char = chars[index]
        if state is _LexState.NORMAL:
            pair = text[index : index + 2]
            if pair == BLOCK_COMMENT_START:
                chars[index] = chars[index + 1] = MASK_CHAR
                state = _LexState.BLOCK_COMMENT
                index += 2
                continue
            if pair == LINE_COMMENT_START:
                state = _LexState.LINE_COMMENT
                continue
            if mask_strings and char in STRING_QUOTES:
                quote = char
                chars[index] = MASK_CHAR
                state = _LexState.STRING
            index += 1
        elif state is _LexState.LINE_COMMENT:
            if char == NEWLINE:
                state = _LexState.NORMAL
            else:
                chars[index] = MASK_CHAR
            index += 1
        elif state is _LexState.BLOCK_COMMENT:
            if text.startswith(BLOCK_COMMENT_END, index):
                chars[index] = chars[index + 1] = MASK_CHAR
                state = _LexState.NORMAL
                index += 2
                continue
            if char != NEWLINE:
                chars[index] = MASK_CHAR
            index += 1
        else:
            if char == ESCAPE_CHAR and index + 1 < length:
                chars[index] = chars[index + 1] = MASK_CHAR
                index += 2
                continue
            if char == quote:
                state = _LexState.NORMAL
            if char != NEWLINE:
                chars[index] = MASK_CHAR
            index += 1
    return "".join(chars)


def mask_comments(text: str) -> str:
    """Return ``text`` with only comments masked."""

    return mask(text, mask_strings=False)


def mask_comments_and_strings(text: str) -> str:
    """Return ``text`` with comments and string literals masked."""

    return mask(text, mask_strings=True)


@dataclass(frozen=True, slots=True)
class LineStrip:
    """Result of masking comment content on a single source line.

    Attributes:
        text: Working line with comment characters replaced by spaces; it has
            the same length as the original line.
        started_in_block_comment: ``True`` when the line began inside a block
            comment carried over from a previous line.
        in_block_comment: Block comment state carried into the next line.
    """

    text: str
    started_in_block_comment: bool
    in_block_comment: bool


def _blank(length: int) -> str:
    return MASK_CHAR * length


def strip_line_comments(line: str, in_block_comment: bool) -> LineStrip:
    """Mask comment content on ``line`` given the carried block-comment state.

    Only the first block comment opening on a line is recognised; a second
    ``/*`` later on the same line is left untouched.

    Args:
        line: Source line without its trailing newline.
        in_block_comment: Whether the previous line ended inside a block comment.

    Returns:
        LineStrip: Working text and block comment bookkeeping for the line.
    """

    started_in_block = in_block_comment
    working = line
    if in_block_comment:
        end = line.find(BLOCK_COMMENT_END)
        if end >= 0:
            in_block_comment = False
            cut = end + len(BLOCK_COMMENT_END)
            working = _blank(cut) + line[cut:]
        else:
            working = _blank(len(line))

    if not in_block_comment:
        start = working.find(BLOCK_COMMENT_START)
        if start >= 0:
            end = working.find(BLOCK_COMMENT_END, start + len(BLOCK_COMMENT_START))
            if end >= 0:
                cut = end + len(BLOCK_COMMENT_END)
                working = working[:start] + _blank(cut - start) + working[cut:]
            else:
                in_block_comment = True
                working = working[:start] + _blank(len(working) - start)

    line_comment = working.find(LINE_COMMENT_START)
    if line_comment >= 0:
        working = working[:line_comment] + _blank(len(working) - line_comment)

    return LineStrip(text=working, started_in_block_comment=started_in_block, in_block_comment=in_block_comment)


__all__ = [
    "LineStrip",
    "mask",
    "mask_comments",
    "mask_comments_and_strings",
    "strip_line_comments",
]
