# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Per-snapshot diagnostic cache with exactly-once range consumption.

A host integration creates one :class:`DiagnosticStore` per project or session
and tears it down on close. Rendering layers that visit a document node by node
call :meth:`DiagnosticStore.consume_for_range` for each node and receive every
diagnostic at most once per ``(path, version)``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from threading import Lock

from ..config import ScanConfig
from ..core.models import Diagnostic, SourceSnapshot, TextRange, snapshot_key
from ..engine import scan_text

LOGGER = logging.getLogger(__name__)

Scanner = Callable[[str], list[Diagnostic]]
TextSource = str | Callable[[], str]


@dataclass(slots=True)
class CacheEntry:
    """Diagnostics computed for one snapshot plus which of them were handed out.

    Attributes:
        path: Stable identity of the scanned file.
        version: Edit stamp of the scanned snapshot.
        diagnostics: Diagnostics computed for the snapshot, in scan order.
        consumed: Positions in ``diagnostics`` already returned to the consumer.
    """

    path: str
    version: int
    diagnostics: list[Diagnostic]
    consumed: set[int] = field(default_factory=set)

    @property
    def key(self) -> str:
        """Return the ``"path:version"`` key of the entry."""

        return snapshot_key(self.path, self.version)


@dataclass(frozen=True, slots=True)
class StoreInfo:
    """Describe store occupancy and hit statistics.

    Attributes:
        entries: Number of snapshots currently cached.
        hits: Number of :meth:`DiagnosticStore.get` calls served from the cache.
        misses: Number of snapshots scanned.
        evictions: Number of entries dropped for stale versions or closed files.
    """

    entries: int
    hits: int
    misses: int
    evictions: int


class DiagnosticStore:
    """Memoise diagnostics per ``(path, version)`` and hand each out once."""

    def __init__(self, scanner: Scanner | None = None, *, config: ScanConfig | None = None) -> None:
        """Initialise an empty store.

        Args:
            scanner: Callable producing diagnostics for a text; defaults to the
                full scan pipeline configured by ``config``.
            config: Scan configuration used by the default scanner.
        """

        self._config = config or ScanConfig()
        self._scanner: Scanner = scanner or self._default_scan
        self._entries: dict[str, CacheEntry] = {}
        self._lock = Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def _default_scan(self, text: str) -> list[Diagnostic]:
        return scan_text(text, self._config)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def get(self, path: str, version: int, text: TextSource) -> CacheEntry:
        """Return the entry for ``path`` at ``version``, scanning on first request.

        Computing a new version evicts every cached version of the same path.

        Args:
            path: Stable identity of the file.
            version: Edit stamp of the snapshot.
            text: Snapshot text, or a zero-argument callable returning it; the
                callable is only invoked on a cache miss.

        Returns:
            CacheEntry: Memoised entry for the snapshot.
        """

        key = snapshot_key(path, version)
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                self._hits += 1
                return entry
            self._evict_locked(path, keep=version)
            source = text() if callable(text) else text
            entry = CacheEntry(path=path, version=version, diagnostics=self._scanner(source))
            self._entries[key] = entry
            self._misses += 1
            LOGGER.debug("cached %d diagnostic(s) for %s", len(entry.diagnostics), key)
            return entry

    def get_snapshot(self, snapshot: SourceSnapshot) -> CacheEntry:
        """Return the entry for ``snapshot``."""

        return self.get(snapshot.path, snapshot.version, snapshot.text)

    def consume_for_range(self, entry: CacheEntry, text_range: TextRange) -> list[Diagnostic]:
        """Return unconsumed diagnostics lying entirely inside ``text_range``.

        Returned diagnostics are marked consumed, so overlapping or repeated
        queries against the same entry never yield a diagnostic twice. Consumption
        is tracked per diagnostic, so a deprecation and a reassignment warning
        sharing one span are both released.

        Args:
            entry: Entry obtained from :meth:`get`.
            text_range: Range of the node being visited.

        Returns:
            list[Diagnostic]: Newly consumed diagnostics in scan order.
        """

        with self._lock:
            released: list[Diagnostic] = []
            for position, diagnostic in enumerate(entry.diagnostics):
                if position in entry.consumed or not text_range.contains(diagnostic.range):
                    continue
                entry.consumed.add(position)
                released.append(diagnostic)
            return released

    def consume(self, snapshot: SourceSnapshot, text_range: TextRange) -> list[Diagnostic]:
        """Fetch the entry for ``snapshot`` and consume ``text_range`` from it."""

        return self.consume_for_range(self.get_snapshot(snapshot), text_range)

    def evict(self, path: str) -> int:
        """Drop every cached version of ``path``.

        Args:
            path: Identity of the file being closed.

        Returns:
            int: Number of entries removed.
        """

        with self._lock:
            return self._evict_locked(path, keep=None)

    def clear(self) -> None:
        """Drop all entries and reset statistics."""

        with self._lock:
            self._entries.clear()
            self._hits = self._misses = self._evictions = 0

    def info(self) -> StoreInfo:
        """Return occupancy and hit statistics."""

        with self._lock:
            return StoreInfo(
                entries=len(self._entries),
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
            )

    def _evict_locked(self, path: str, *, keep: int | None) -> int:
        stale = [key for key, entry in self._entries.items() if entry.path == path and entry.version != keep]
        for key in stale:
            del self._entries[key]
        if stale:
            self._evictions += len(stale)
            LOGGER.debug("evicted %d stale entr(ies) for %s", len(stale), path)
        return len(stale)


__all__ = ["CacheEntry", "DiagnosticStore", "Scanner", "StoreInfo", "TextSource"]
