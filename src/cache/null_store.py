# src/cache/null_store.py — v1
"""Always-miss cache (default when no backend is configured)."""

from __future__ import annotations

from caselens.cache.base_cache_store import BaseSummaryCache
from caselens.core.models import LayeredSummary


class NullSummaryCache(BaseSummaryCache):
    """Never stores anything; every lookup is a miss."""

    async def get(self, case_id: str, org_id: str) -> LayeredSummary | None:
        return None

    async def set(self, case_id: str, org_id: str, summary: LayeredSummary) -> None:
        return None
