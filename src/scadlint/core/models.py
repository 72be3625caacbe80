# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the scadlint package."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .severity import Severity

SNAPSHOT_KEY_SEPARATOR: Final[str] = ":"


class DiagnosticKind(str, Enum):
    """Enumerate the diagnostic families produced by the lexical scanners."""

    DEPRECATION = "deprecation"
    REASSIGNMENT = "reassignment"


class DiagnosticCode(str, Enum):
    """Stable identifiers for the individual finders."""

    DEPRECATED_PARAMETER = "deprecated-parameter"
    DEPRECATED_IMPORT = "deprecated-import"
    DIGIT_IDENTIFIER = "digit-identifier"
    VARIABLE_REASSIGNMENT = "variable-reassignment"


@dataclass(frozen=True, slots=True)
class TextRange:
    """Half-open ``[start, end)`` range of character offsets."""

    start: int
    end: int

    def contains(self, other: TextRange) -> bool:
        """Return whether ``other`` lies entirely inside this range.

        Args:
            other: Candidate range to test.

        Returns:
            bool: ``True`` when ``other`` starts and ends within the range.
        """

        return self.start <= other.start and other.end <= self.end

    def as_tuple(self) -> tuple[int, int]:
        """Return the range as a ``(start, end)`` tuple."""

        return self.start, self.end


class Diagnostic(BaseModel):
    """Diagnostic anchored to a half-open range of the original source text."""

    model_config = ConfigDict(frozen=True)

    kind: DiagnosticKind
    code: DiagnosticCode
    start_offset: int = Field(ge=0)
    end_offset: int
    message: str
    replacement: str | None = None

    @model_validator(mode="after")
    def _check_span(self) -> Diagnostic:
        """Reject empty or inverted spans.

        Returns:
            Diagnostic: The validated diagnostic.

        Raises:
            ValueError: If ``end_offset`` does not exceed ``start_offset``.
        """

        if self.end_offset <= self.start_offset:
            raise ValueError(
                f"end_offset ({self.end_offset}) must be greater than start_offset ({self.start_offset})",
            )
        return self

    @property
    def range(self) -> TextRange:
        """Return the diagnostic span as a :class:`TextRange`."""

        return TextRange(self.start_offset, self.end_offset)

    @property
    def severity(self) -> Severity:
        """Return the severity used when presenting the diagnostic.

        Both diagnostic families are advisory: deprecated syntax still works and a
        reassignment is legal (last write wins).
        """

        return Severity.WARNING


class SourceSnapshot(BaseModel):
    """Immutable view of a file's text at one edit version."""

    model_config = ConfigDict(frozen=True)

    path: str
    version: int
    text: str

    @property
    def key(self) -> str:
        """Return the ``"path:version"`` cache key for the snapshot."""

        return snapshot_key(self.path, self.version)


def snapshot_key(path: str, version: int) -> str:
    """Return the cache key identifying ``path`` at ``version``.

    Args:
        path: Stable identity of the file.
        version: Edit stamp of the snapshot.

    Returns:
        str: Key rendered as ``"path:version"``.
    """

    return f"{path}{SNAPSHOT_KEY_SEPARATOR}{version}"


__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticKind",
    "SourceSnapshot",
    "TextRange",
    "snapshot_key",
]
