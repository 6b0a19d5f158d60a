# src/cache/base_cache_store.py — v2
"""Abstract layered summary cache interface.

Implementations only store and return snapshots. Whether a stored snapshot
is still valid is decided by the caller (see summary.engine).
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from caselens.core.models import LayeredSummary


class BaseSummaryCache(ABC):
    """Get/set contract keyed by (case_id, org_id)."""

    @abstractmethod
    async def get(self, case_id: str, org_id: str) -> LayeredSummary | None:
        """Return the stored snapshot, or None when absent."""

    @abstractmethod
    async def set(self, case_id: str, org_id: str, summary: LayeredSummary) -> None:
        """Store a snapshot, replacing any previous one for the key."""
