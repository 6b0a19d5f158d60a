# src/cache/memory_store.py — v2
"""In-process cache scoped to one instance.

No module-level store: each caller (or test) builds its own instance and
passes it in. Not selectable through Settings, since a fresh instance per
request would never hit.
"""

from __future__ import annotations

from caselens.cache.base_cache_store import BaseSummaryCache
from caselens.core.models import LayeredSummary


class InMemorySummaryCache(BaseSummaryCache):
    """Dict-backed cache. Snapshots are deep-copied on the way in and out.

    Frozen models still carry mutable lists and dicts, so a caller that
    edits a returned snapshot in place must not affect later hits.
    """

    def __init__(self) -> None:
        self._entries: dict[tuple[str, str], LayeredSummary] = {}

    async def get(self, case_id: str, org_id: str) -> LayeredSummary | None:
        entry = self._entries.get((case_id, org_id))
        if entry is None:
            return None
        return entry.model_copy(deep=True)

    async def set(self, case_id: str, org_id: str, summary: LayeredSummary) -> None:
        self._entries[(case_id, org_id)] = summary.model_copy(deep=True)

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        """Drop every stored snapshot."""
        self._entries.clear()
