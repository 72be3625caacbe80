# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Snapshot-scoped diagnostic caching."""

from __future__ import annotations

from .store import CacheEntry, DiagnosticStore, StoreInfo

__all__ = ["CacheEntry", "DiagnosticStore", "StoreInfo"]
