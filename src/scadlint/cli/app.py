# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point for scanning OpenSCAD sources."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Final, Literal

import typer

from ..config import Config, ConfigError, ScanConfig
from ..config_loader import load_config
from ..engine import scan_file, scan_text
from ..logging import enable_debug_logging, fail, info, ok, warn
from ..reporting.output import FileReport, ScanReport, dump_diagnostics, locate, render_json

EXIT_CLEAN: Final[int] = 0
EXIT_DIAGNOSTICS: Final[int] = 1
EXIT_USAGE: Final[int] = 2
TEXT_DISPLAY_NAME: Final[str] = "<text>"

app = typer.Typer(
    name="scadlint",
    help="Lexical deprecation and reassignment diagnostics for OpenSCAD sources.",
    add_completion=False,
    no_args_is_help=True,
)

OutputFormat = Literal["text", "json"]


@dataclass(slots=True)
class CLIOptions:
    """Presentation and check selection shared by every command."""

    root: Path
    config_file: Path | None
    output_format: OutputFormat | None
    no_color: bool
    no_emoji: bool
    no_deprecations: bool
    no_reassignments: bool
    verbose: bool


ROOT_OPTION = Annotated[
    Path,
    typer.Option("--root", help="Project root searched for pyproject.toml and .scadlint.toml."),
]
CONFIG_OPTION = Annotated[
    Path | None,
    typer.Option("--config", help="Explicit configuration file overriding project settings."),
]
FORMAT_OPTION = Annotated[
    str | None,
    typer.Option("--format", help="Output format: text or json."),
]
NO_COLOR_OPTION = Annotated[bool, typer.Option("--no-color", help="Disable ANSI colour output.")]
NO_EMOJI_OPTION = Annotated[bool, typer.Option("--no-emoji", help="Disable emoji in status messages.")]
NO_DEPRECATIONS_OPTION = Annotated[bool, typer.Option("--no-deprecations", help="Skip deprecated syntax checks.")]
NO_REASSIGNMENTS_OPTION = Annotated[
    bool,
    typer.Option("--no-reassignments", help="Skip variable reassignment checks."),
]
VERBOSE_OPTION = Annotated[bool, typer.Option("--verbose", "-v", help="Log debug details to stderr.")]


def _coerce_format(value: str | None) -> OutputFormat | None:
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized == "text":
        return "text"
    if normalized == "json":
        return "json"
    raise typer.BadParameter("Format must be 'text' or 'json'.", param_hint="--format")


def resolve_config(options: CLIOptions) -> Config:
    """Load project configuration and apply command-line overrides.

    Args:
        options: Parsed command-line options.

    Returns:
        Config: Effective configuration.

    Raises:
        typer.BadParameter: If the configuration cannot be loaded.
    """

    try:
        config = load_config(options.root, config_file=options.config_file)
    except ConfigError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc

    scan_updates: dict[str, bool] = {}
    if options.no_deprecations:
        scan_updates["deprecations"] = False
    if options.no_reassignments:
        scan_updates["reassignments"] = False
    output_updates: dict[str, object] = {}
    if options.output_format is not None:
        output_updates["format"] = options.output_format
    if options.no_color:
        output_updates["color"] = False
    if options.no_emoji:
        output_updates["emoji"] = False
    return config.model_copy(
        update={
            "scan": config.scan.model_copy(update=scan_updates),
            "output": config.output.model_copy(update=output_updates),
        },
    )


def collect_sources(paths: Sequence[Path], config: ScanConfig) -> list[Path]:
    """Expand ``paths`` into the files to scan.

    Files are taken as given; directories are searched recursively for the
    configured include patterns. The result is de-duplicated and sorted.

    Args:
        paths: Files and directories supplied on the command line.
        config: Scan configuration providing the include patterns.

    Returns:
        list[Path]: Files to scan.

    Raises:
        typer.BadParameter: If a path does not exist.
    """

    found: set[Path] = set()
    for path in paths:
        if path.is_file():
            found.add(path)
        elif path.is_dir():
            found.update(_expand_directory(path, config.include))
        else:
            raise typer.BadParameter(f"Path not found: {path}", param_hint="PATHS")
    return sorted(found)


def _expand_directory(directory: Path, patterns: Iterable[str]) -> set[Path]:
    matches: set[Path] = set()
    for pattern in patterns:
        matches.update(candidate for candidate in directory.rglob(pattern) if candidate.is_file())
    return matches


def _emit(report: ScanReport, config: Config) -> None:
    output = config.output
    if output.format == "json":
        typer.echo(render_json(report))
    else:
        for file_report in report.files:
            dump_diagnostics(file_report.diagnostics, color=output.color, emoji=output.emoji)
        total = report.total
        if total:
            affected = sum(1 for file_report in report.files if file_report.diagnostics)
            warn(
                f"{total} diagnostic(s) found in {affected} file(s)",
                use_emoji=output.emoji,
                use_color=output.color,
            )
        else:
            ok("No diagnostics found", use_emoji=output.emoji, use_color=output.color)
    raise typer.Exit(code=EXIT_DIAGNOSTICS if report.total else EXIT_CLEAN)


def _build_options(
    root: Path,
    config_file: Path | None,
    output_format: str | None,
    no_color: bool,
    no_emoji: bool,
    no_deprecations: bool,
    no_reassignments: bool,
    verbose: bool,
) -> CLIOptions:
    options = CLIOptions(
        root=root,
        config_file=config_file,
        output_format=_coerce_format(output_format),
        no_color=no_color,
        no_emoji=no_emoji,
        no_deprecations=no_deprecations,
        no_reassignments=no_reassignments,
        verbose=verbose,
    )
    if verbose:
        enable_debug_logging()
    return options


@app.command("scan")
def scan_command(
    paths: Annotated[list[Path], typer.Argument(help="Files or directories to scan.")],
    root: ROOT_OPTION = Path(),
    config_file: CONFIG_OPTION = None,
    output_format: FORMAT_OPTION = None,
    no_color: NO_COLOR_OPTION = False,
    no_emoji: NO_EMOJI_OPTION = False,
    no_deprecations: NO_DEPRECATIONS_OPTION = False,
    no_reassignments: NO_REASSIGNMENTS_OPTION = False,
    verbose: VERBOSE_OPTION = False,
) -> None:
    """Scan OpenSCAD files for deprecated syntax and reassigned variables.

    Raises:
        typer.Exit: With status ``1`` when diagnostics are found, ``0`` when
            clean, and ``2`` when a file cannot be read.
    """

    options = _build_options(
        root, config_file, output_format, no_color, no_emoji, no_deprecations, no_reassignments, verbose
    )
    config = resolve_config(options)
    report = ScanReport()
    show_progress = options.verbose and config.output.format == "text"
    for source in collect_sources(paths, config.scan):
        if show_progress:
            info(f"Scanning {source.as_posix()}", use_emoji=config.output.emoji, use_color=config.output.color)
        try:
            text, diagnostics = scan_file(source, config.scan)
        except (OSError, UnicodeDecodeError) as exc:
            fail(f"Unable to read {source}: {exc}", use_emoji=config.output.emoji, use_color=config.output.color)
            raise typer.Exit(code=EXIT_USAGE) from exc
        display = source.as_posix()
        report.files.append(FileReport(file=display, diagnostics=locate(display, text, diagnostics)))
    _emit(report, config)


@app.command("check-text")
def check_text_command(
    text: Annotated[str, typer.Option("--text", help="OpenSCAD source snippet to scan.")],
    root: ROOT_OPTION = Path(),
    config_file: CONFIG_OPTION = None,
    output_format: FORMAT_OPTION = None,
    no_color: NO_COLOR_OPTION = False,
    no_emoji: NO_EMOJI_OPTION = False,
    no_deprecations: NO_DEPRECATIONS_OPTION = False,
    no_reassignments: NO_REASSIGNMENTS_OPTION = False,
    verbose: VERBOSE_OPTION = False,
) -> None:
    """Scan an inline OpenSCAD snippet.

    Raises:
        typer.Exit: With status ``1`` when diagnostics are found, ``0`` otherwise.
    """

    options = _build_options(
        root, config_file, output_format, no_color, no_emoji, no_deprecations, no_reassignments, verbose
    )
    config = resolve_config(options)
    diagnostics = scan_text(text, config.scan)
    report = ScanReport(
        files=[FileReport(file=TEXT_DISPLAY_NAME, diagnostics=locate(TEXT_DISPLAY_NAME, text, diagnostics))],
    )
    _emit(report, config)


def main() -> None:
    """Console script entry point."""

    app()


__all__ = ["app", "collect_sources", "main", "resolve_config"]
