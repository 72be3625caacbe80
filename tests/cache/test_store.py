# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the snapshot diagnostic store."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from scadlint.cache import DiagnosticStore
from scadlint.config import ScanConfig
from scadlint.core.models import Diagnostic, SourceSnapshot, TextRange
from scadlint.engine import scan_text

SOURCE = 'import(filename="a.stl");\nx = 1;\nx = 2;\n'


class CountingScanner:
    """Scanner double recording how often each text is scanned."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def __call__(self, text: str) -> list[Diagnostic]:
        self.calls.append(text)
        return scan_text(text)


@pytest.fixture
def scanner() -> CountingScanner:
    return CountingScanner()


@pytest.fixture
def store(scanner: CountingScanner) -> DiagnosticStore:
    return DiagnosticStore(scanner)


def test_scans_each_snapshot_once(store: DiagnosticStore, scanner: CountingScanner) -> None:
    first = store.get("a.scad", 1, SOURCE)
    second = store.get("a.scad", 1, SOURCE)

    assert first is second
    assert scanner.calls == [SOURCE]
    assert [d.code.value for d in first.diagnostics] == ["deprecated-parameter", "variable-reassignment"]
    info = store.info()
    assert (info.entries, info.hits, info.misses) == (1, 1, 1)


def test_lazy_text_only_read_on_miss(store: DiagnosticStore) -> None:
    reads: list[int] = []

    def load() -> str:
        reads.append(1)
        return SOURCE

    store.get("a.scad", 1, load)
    store.get("a.scad", 1, load)

    assert reads == [1]


def test_each_diagnostic_consumed_once(store: DiagnosticStore) -> None:
    entry = store.get("a.scad", 1, SOURCE)
    whole = TextRange(0, len(SOURCE))

    assert len(store.consume_for_range(entry, whole)) == 2
    assert store.consume_for_range(entry, whole) == []
    assert entry.consumed == {0, 1}


def test_partial_range_returns_contained_diagnostics_only(store: DiagnosticStore) -> None:
    entry = store.get("a.scad", 1, SOURCE)
    first_line = TextRange(0, SOURCE.index("\n"))

    released = store.consume_for_range(entry, first_line)

    assert [d.code.value for d in released] == ["deprecated-parameter"]
    # A range ending before the diagnostic ends does not release it.
    clipped = TextRange(0, SOURCE.rindex("x"))
    assert store.consume_for_range(entry, clipped) == []
    rest = store.consume_for_range(entry, TextRange(0, len(SOURCE)))
    assert [d.code.value for d in rest] == ["variable-reassignment"]


def test_diagnostics_sharing_a_span_are_all_released(store: DiagnosticStore) -> None:
    text = "2D = 1;\n2D = 2;\n"
    entry = store.get("p.scad", 1, text)
    second_line = TextRange(text.index("\n") + 1, len(text))

    released = store.consume_for_range(entry, second_line)

    assert [(d.code.value, d.start_offset, d.end_offset) for d in released] == [
        ("digit-identifier", 8, 10),
        ("variable-reassignment", 8, 10),
    ]
    assert len(store.consume_for_range(entry, TextRange(0, len(text)))) == 1
    assert store.consume_for_range(entry, TextRange(0, len(text))) == []


def test_empty_range_releases_nothing(store: DiagnosticStore) -> None:
    entry = store.get("a.scad", 1, SOURCE)

    assert store.consume_for_range(entry, TextRange(7, 7)) == []
    assert entry.consumed == set()


def test_new_version_evicts_previous_and_resets_consumption(store: DiagnosticStore) -> None:
    old = store.get("a.scad", 1, SOURCE)
    store.consume_for_range(old, TextRange(0, len(SOURCE)))

    fresh = store.get("a.scad", 2, SOURCE)

    assert "a.scad:1" not in store
    assert "a.scad:2" in store
    assert len(store.consume_for_range(fresh, TextRange(0, len(SOURCE)))) == 2
    assert store.info().evictions == 1


def test_eviction_matches_exact_path(store: DiagnosticStore) -> None:
    store.get("a.scad", 1, SOURCE)
    store.get("a.scad2", 1, SOURCE)

    store.get("a.scad", 2, SOURCE)

    assert "a.scad2:1" in store
    assert len(store) == 2


def test_evict_and_clear(store: DiagnosticStore) -> None:
    store.get("a.scad", 1, SOURCE)
    store.get("b.scad", 1, SOURCE)

    assert store.evict("a.scad") == 1
    assert store.evict("a.scad") == 0
    assert len(store) == 1

    store.clear()
    assert len(store) == 0
    assert store.info().misses == 0


def test_snapshot_helpers(store: DiagnosticStore) -> None:
    snapshot = SourceSnapshot(path="s.scad", version=3, text=SOURCE)

    entry = store.get_snapshot(snapshot)

    assert entry.key == snapshot.key == "s.scad:3"
    assert len(store.consume(snapshot, TextRange(0, len(SOURCE)))) == 2


def test_default_scanner_honours_config() -> None:
    store = DiagnosticStore(config=ScanConfig(reassignments=False))

    entry = store.get("a.scad", 1, SOURCE)

    assert [d.code.value for d in entry.diagnostics] == ["deprecated-parameter"]


def test_concurrent_consumers_share_diagnostics(store: DiagnosticStore, scanner: CountingScanner) -> None:
    text = "\n".join(f"v{i} = 1;\nv{i} = 2;" for i in range(50))
    snapshot = SourceSnapshot(path="c.scad", version=1, text=text)
    lines = text.split("\n")
    starts = [sum(len(line) + 1 for line in lines[:i]) for i in range(len(lines))]
    ranges = [TextRange(start, start + len(line)) for start, line in zip(starts, lines, strict=True)]

    with ThreadPoolExecutor(max_workers=8) as pool:
        batches = list(pool.map(lambda r: store.consume(snapshot, r), ranges * 3))

    released = [diag for batch in batches for diag in batch]
    assert len(released) == 50
    assert len({d.range.as_tuple() for d in released}) == 50
    assert len(scanner.calls) == 1
