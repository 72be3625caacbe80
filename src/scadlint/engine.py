# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Scan pipeline turning source text into diagnostics."""

from __future__ import annotations

import logging
from pathlib import Path

from .checks.deprecations import find_deprecations
from .checks.reassignment import find_reassignments
from .config import ScanConfig
from .core.models import Diagnostic, SourceSnapshot

LOGGER = logging.getLogger(__name__)


def scan_text(text: str, config: ScanConfig | None = None) -> list[Diagnostic]:
    """Return every diagnostic for ``text``.

    Deprecations come first (deduplicated per line and matched text), followed
    by reassignment warnings, which are unique by construction. An empty list is
    a valid result.

    Args:
        text: Source text to scan.
        config: Optional scan configuration; defaults enable both families.

    Returns:
        list[Diagnostic]: Diagnostics with offsets into ``text``.
    """

    cfg = config or ScanConfig()
    diagnostics: list[Diagnostic] = []
    if cfg.deprecations:
        diagnostics.extend(find_deprecations(text, cfg))
    if cfg.reassignments:
        diagnostics.extend(find_reassignments(text))
    return diagnostics


def scan_snapshot(snapshot: SourceSnapshot, config: ScanConfig | None = None) -> list[Diagnostic]:
    """Return every diagnostic for ``snapshot``."""

    diagnostics = scan_text(snapshot.text, config)
    LOGGER.debug("scanned %s: %d diagnostic(s)", snapshot.key, len(diagnostics))
    return diagnostics


def scan_file(path: Path, config: ScanConfig | None = None) -> tuple[str, list[Diagnostic]]:
    """Read ``path`` as UTF-8 and scan it.

    Args:
        path: File to scan.
        config: Optional scan configuration.

    Returns:
        tuple[str, list[Diagnostic]]: File text and its diagnostics.

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """

    text = path.read_text(encoding="utf-8")
    return text, scan_text(text, config)


__all__ = ["scan_file", "scan_snapshot", "scan_text"]
