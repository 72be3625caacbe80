# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Finders that flag deprecated OpenSCAD syntax.

Each finder takes pre-masked text and returns raw diagnostics. The results may
repeat on a line; :func:`find_deprecations` runs the finders and removes the
repeats.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from functools import lru_cache
from typing import Final

from ..config import ScanConfig
from ..core.models import Diagnostic, DiagnosticCode, DiagnosticKind
from ..diagnostics.dedupe import dedupe_by_line
from ..lexical.masking import mask_comments, mask_comments_and_strings

_DIGIT_IDENTIFIER_RE: Final[re.Pattern[str]] = re.compile(r"(?<![.\w])(\d+[a-zA-Z_]\w*)", re.ASCII)
_SCIENTIFIC_RE: Final[re.Pattern[str]] = re.compile(r"\d+[eE][+\-]?\d*", re.ASCII)


@lru_cache(maxsize=32)
def _parameter_pattern(name: str) -> re.Pattern[str]:
    return re.compile(rf"\b({re.escape(name)})\s*=", re.ASCII)


@lru_cache(maxsize=32)
def _import_pattern(extension: str) -> re.Pattern[str]:
    return re.compile(
        rf"""import\s*\(\s*(?:[^)]*["']([^"']+{re.escape(extension)})["'])""",
        re.IGNORECASE,
    )


def parameter_message(deprecated: str, replacement: str) -> str:
    """Return the advisory message for a renamed parameter."""

    return f"{deprecated}= is deprecated. Please use {replacement}="


def digit_identifier_message(token: str) -> str:
    """Return the advisory message for an identifier that starts with digits."""

    return f"Identifier names starting with digits ({token}) will be removed in future releases."


def find_deprecated_parameters(
    masked: str,
    parameters: Mapping[str, str],
) -> list[Diagnostic]:
    """Flag named arguments that use a deprecated parameter name.

    Args:
        masked: Source text with comments masked (strings preserved).
        parameters: Mapping of deprecated names to their replacements.

    Returns:
        list[Diagnostic]: One diagnostic per occurrence, spanning the name only.
    """

    diagnostics: list[Diagnostic] = []
    for deprecated, replacement in parameters.items():
        for match in _parameter_pattern(deprecated).finditer(masked):
            start, end = match.span(1)
            diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.DEPRECATION,
                    code=DiagnosticCode.DEPRECATED_PARAMETER,
                    start_offset=start,
                    end_offset=end,
                    message=parameter_message(deprecated, replacement),
                    replacement=replacement,
                ),
            )
    return diagnostics


def find_deprecated_imports(
    masked: str,
    extensions: Mapping[str, str],
) -> list[Diagnostic]:
    """Flag ``import()`` calls that load a file with a deprecated extension.

    Args:
        masked: Source text with comments masked (strings preserved).
        extensions: Mapping of lower-case extensions to advisory messages.

    Returns:
        list[Diagnostic]: Diagnostics spanning the quoted filename contents.
    """

    diagnostics: list[Diagnostic] = []
    for extension, message in extensions.items():
        for match in _import_pattern(extension).finditer(masked):
            start, end = match.span(1)
            diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.DEPRECATION,
                    code=DiagnosticCode.DEPRECATED_IMPORT,
                    start_offset=start,
                    end_offset=end,
                    message=message,
                ),
            )
    return diagnostics


def find_digit_identifiers(masked: str) -> list[Diagnostic]:
    """Flag identifiers that start with one or more digits.

    Scientific-notation numerals such as ``1e10`` or ``2E-5`` are valid numbers
    and are skipped.

    Args:
        masked: Source text with comments and strings masked.

    Returns:
        list[Diagnostic]: One diagnostic per digit-leading token.
    """

    diagnostics: list[Diagnostic] = []
    for match in _DIGIT_IDENTIFIER_RE.finditer(masked):
        token = match.group(1)
        if _SCIENTIFIC_RE.fullmatch(token):
            continue
        start, end = match.span(1)
        diagnostics.append(
            Diagnostic(
                kind=DiagnosticKind.DEPRECATION,
                code=DiagnosticCode.DIGIT_IDENTIFIER,
                start_offset=start,
                end_offset=end,
                message=digit_identifier_message(token),
            ),
        )
    return diagnostics


def find_deprecations(text: str, config: ScanConfig | None = None) -> list[Diagnostic]:
    """Return deduplicated deprecation diagnostics for ``text``.

    Args:
        text: Original source text.
        config: Optional scan configuration supplying the lookup tables.

    Returns:
        list[Diagnostic]: At most one diagnostic per line and matched text, in
        discovery order (parameters, imports, then digit-leading identifiers).
    """

    cfg = config or ScanConfig()
    without_comments = mask_comments(text)
    without_comments_or_strings = mask_comments_and_strings(text)
    found = [
        *find_deprecated_parameters(without_comments, cfg.deprecated_parameters),
        *find_deprecated_imports(without_comments, cfg.deprecated_extensions),
        *find_digit_identifiers(without_comments_or_strings),
    ]
    return dedupe_by_line(text, found)


__all__ = [
    "digit_identifier_message",
    "find_deprecated_imports",
    "find_deprecated_parameters",
    "find_deprecations",
    "find_digit_identifiers",
    "parameter_message",
]
