# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helpers for rendering diagnostics as text lines or JSON reports."""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from typing import Final

from pydantic import BaseModel, ConfigDict, Field
from rich.text import Text

from ..core.models import Diagnostic
from ..core.severity import Severity
from ..lexical.positions import LineIndex
from ..runtime.console import get_console_manager

LOCATION_SEPARATOR: Final[str] = ":"
JSON_INDENT: Final[int] = 2


class LocatedDiagnostic(BaseModel):
    """Diagnostic paired with its 1-based line and column."""

    model_config = ConfigDict(frozen=True)

    file: str
    line: int
    column: int
    diagnostic: Diagnostic


class FileReport(BaseModel):
    """Diagnostics found in a single file."""

    file: str
    diagnostics: list[LocatedDiagnostic] = Field(default_factory=list)


class ScanReport(BaseModel):
    """Aggregate report across every scanned file."""

    files: list[FileReport] = Field(default_factory=list)

    @property
    def total(self) -> int:
        """Return the number of diagnostics across all files."""

        return sum(len(report.diagnostics) for report in self.files)


def locate(file: str, text: str, diagnostics: Iterable[Diagnostic]) -> list[LocatedDiagnostic]:
    """Attach line and column numbers to ``diagnostics``.

    Args:
        file: Display path of the scanned file.
        text: Text the diagnostic offsets refer to.
        diagnostics: Diagnostics to locate.

    Returns:
        list[LocatedDiagnostic]: Located diagnostics in the input order.
    """

    index = LineIndex(text)
    located: list[LocatedDiagnostic] = []
    for diagnostic in diagnostics:
        line, column = index.position_of(diagnostic.start_offset)
        located.append(LocatedDiagnostic(file=file, line=line, column=column, diagnostic=diagnostic))
    return located


def severity_color(sev: Severity) -> str:
    """Return the rich colour name associated with a severity level."""

    return {
        Severity.ERROR: "red",
        Severity.WARNING: "yellow",
        Severity.NOTICE: "blue",
        Severity.NOTE: "cyan",
    }.get(sev, "yellow")


def raw_location(located: LocatedDiagnostic) -> str:
    """Return the ``file:line:column`` location string."""

    return LOCATION_SEPARATOR.join((located.file, str(located.line), str(located.column)))


def format_diagnostic_line(located: LocatedDiagnostic, *, color: bool) -> Text:
    """Return a formatted ``location: kind[code]: message`` line.

    Args:
        located: Diagnostic with its location.
        color: Whether rich styles should be applied.

    Returns:
        Text: Renderable line for the console.
    """

    diagnostic = located.diagnostic
    line = Text(f"{raw_location(located)}: ")
    kind = Text(diagnostic.kind.value)
    if color:
        kind.stylize(severity_color(diagnostic.severity))
    line.append_text(kind)
    line.append(f"[{diagnostic.code.value}]: {diagnostic.message}")
    if diagnostic.replacement:
        line.append(f" (replace with '{diagnostic.replacement}')")
    return line


def dump_diagnostics(located: Sequence[LocatedDiagnostic], *, color: bool, emoji: bool) -> None:
    """Print formatted diagnostics through the shared console."""

    if not located:
        return
    console = get_console_manager().get(color=color, emoji=emoji)
    for item in located:
        console.print(format_diagnostic_line(item, color=color))


def render_json(report: ScanReport) -> str:
    """Serialise ``report`` as indented JSON.

    Args:
        report: Aggregate scan report.

    Returns:
        str: JSON document containing a ``files`` list and a ``total`` count.
    """

    payload = report.model_dump(mode="json")
    payload["total"] = report.total
    return json.dumps(payload, indent=JSON_INDENT)


__all__ = [
    "FileReport",
    "LocatedDiagnostic",
    "ScanReport",
    "dump_diagnostics",
    "format_diagnostic_line",
    "locate",
    "raw_location",
    "render_json",
    "severity_color",
]
