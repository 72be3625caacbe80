# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Detect variables assigned more than once in the same lexical scope.

OpenSCAD only opens a new variable scope for module and function bodies; bare
``{ }`` blocks share the enclosing scope, and a repeated assignment silently
keeps the last value. The scanner walks the source one line at a time and
threads a :class:`ScanState` accumulator through :func:`advance_line`, so a
partial input can be fed line by line and inspected between steps.

Assignments are only recognised at the start of a line and outside any open
parenthesis, which excludes named arguments in calls and default parameter
values in signatures. A signature followed by a second signature before its
opening brace anchors the scope on the first brace seen.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Final

from ..core.models import Diagnostic, DiagnosticCode, DiagnosticKind
from ..lexical.masking import strip_line_comments

_ASSIGNMENT_RE: Final[re.Pattern[str]] = re.compile(r"^\s*(\w+)\s*=\s*[^=]", re.ASCII)
_SIGNATURE_RE: Final[re.Pattern[str]] = re.compile(r"^\s*(module|function)\s+\w+\s*\(", re.ASCII)
_STRUCTURAL_KEYWORDS: Final[frozenset[str]] = frozenset(
    {"module", "function", "if", "else", "for", "let", "each"},
)
GLOBAL_SCOPE_ID: Final[int] = 0

AssignmentKey = tuple[int, str]


@dataclass(frozen=True, slots=True)
class Scope:
    """Module or function body on the scope stack.

    Attributes:
        id: Monotonically increasing scope identifier; ``0`` is the global scope.
        anchor_depth: Brace depth recorded right after the body's opening brace.
    """

    id: int
    anchor_depth: int


@dataclass(frozen=True, slots=True)
class AssignmentRecord:
    """First assignment of a name within a scope."""

    line: int
    offset: int


@dataclass(slots=True)
class ScanState:
    """Running state threaded through :func:`advance_line`."""

    brace_depth: int = 0
    paren_depth: int = 0
    in_block_comment: bool = False
    scopes: list[Scope] = field(default_factory=lambda: [Scope(GLOBAL_SCOPE_ID, 0)])
    next_scope_id: int = GLOBAL_SCOPE_ID + 1
    pending_scope: bool = False
    assignments: dict[AssignmentKey, AssignmentRecord] = field(default_factory=dict)
    line_number: int = 0
    line_offset: int = 0

    @property
    def current_scope(self) -> Scope:
        """Return the innermost live scope."""

        return self.scopes[-1]

    def open_brace(self) -> None:
        """Count an opening brace, pushing a scope when a signature is pending."""

        self.brace_depth += 1
        if self.pending_scope:
            self.scopes.append(Scope(self.next_scope_id, self.brace_depth))
            self.next_scope_id += 1
            self.pending_scope = False

    def close_brace(self) -> None:
        """Count a closing brace, popping the scope it anchors."""

        top = self.current_scope
        if len(self.scopes) > 1 and top.anchor_depth == self.brace_depth:
            self.scopes.pop()
            stale = [key for key in self.assignments if key[0] == top.id]
            for key in stale:
                del self.assignments[key]
        self.brace_depth = max(0, self.brace_depth - 1)

    def count_parens(self, text: str) -> None:
        """Update the parenthesis depth from ``text``, clamping at zero."""

        for char in text:
            if char == "(":
                self.paren_depth += 1
            elif char == ")":
                self.paren_depth = max(0, self.paren_depth - 1)


def reassignment_message(name: str, first_line: int) -> str:
    """Return the warning message for a name reassigned after ``first_line``."""

    return f"'{name}' was assigned on line {first_line} but was overwritten"


def advance_line(state: ScanState, line: str) -> list[Diagnostic]:
    """Process one source line and advance ``state`` past it.

    Args:
        state: Accumulator carried between lines; updated in place.
        line: Source line without its trailing newline.

    Returns:
        list[Diagnostic]: Reassignment warnings found on the line.
    """

    state.line_number += 1
    stripped = strip_line_comments(line, state.in_block_comment)
    state.in_block_comment = stripped.in_block_comment
    working = stripped.text
    start_paren_depth = state.paren_depth

    if _SIGNATURE_RE.search(working):
        state.pending_scope = True

    for _ in range(working.count("{")):
        state.open_brace()

    warnings: list[Diagnostic] = []
    if start_paren_depth == 0 and not stripped.started_in_block_comment:
        warning = _check_assignment(state, working)
        if warning is not None:
            warnings.append(warning)

    state.count_parens(working)

    for _ in range(working.count("}")):
        state.close_brace()

    state.line_offset += len(line) + 1
    return warnings


def _check_assignment(state: ScanState, working: str) -> Diagnostic | None:
    """Record or flag the assignment on ``working`` if there is one.

    Comment characters on the working line are blanked rather than removed, so
    the identifier offset within it is also its offset within the original line.

    Args:
        state: Current scan state.
        working: Comment-stripped text of the current line.

    Returns:
        Diagnostic | None: Reassignment warning when the name is already bound.
    """

    match = _ASSIGNMENT_RE.search(working)
    if match is None:
        return None
    name = match.group(1)
    if name in _STRUCTURAL_KEYWORDS:
        return None
    key = (state.current_scope.id, name)
    offset = state.line_offset + match.start(1)
    original = state.assignments.get(key)
    if original is None:
        state.assignments[key] = AssignmentRecord(line=state.line_number, offset=offset)
        return None
    return Diagnostic(
        kind=DiagnosticKind.REASSIGNMENT,
        code=DiagnosticCode.VARIABLE_REASSIGNMENT,
        start_offset=offset,
        end_offset=offset + len(name),
        message=reassignment_message(name, original.line),
    )


def find_reassignments(text: str) -> list[Diagnostic]:
    """Return reassignment warnings for ``text`` in source order.

    Args:
        text: Original source text.

    Returns:
        list[Diagnostic]: One warning per repeated assignment.
    """

    state = ScanState()
    warnings: list[Diagnostic] = []
    for line in text.split("\n"):
        warnings.extend(advance_line(state, line))
    return warnings


__all__ = [
    "AssignmentRecord",
    "GLOBAL_SCOPE_ID",
    "Scope",
    "ScanState",
    "advance_line",
    "find_reassignments",
    "reassignment_message",
]
