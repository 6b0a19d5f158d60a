# src/cache/envelope_store.py — v1
"""Base class for caches that persist into a larger external record.

Subclasses provide raw envelope I/O; this class does the read-modify-write
merge so sibling fields of the record are never dropped. Backing resources
are bound inside ``get``/``set`` only, never at construction.
"""

from __future__ import annotations

from abc import abstractmethod

from caselens.cache.base_cache_store import BaseSummaryCache
from caselens.cache.models import (
    Envelope,
    merge_summary_into_envelope,
    summary_from_envelope,
)
from caselens.core.models import LayeredSummary


class EnvelopeSummaryCache(BaseSummaryCache):
    """Read-modify-write adapter over an external per-case record."""

    async def get(self, case_id: str, org_id: str) -> LayeredSummary | None:
        envelope = await self._read_envelope(case_id, org_id)
        return summary_from_envelope(envelope)

    async def set(self, case_id: str, org_id: str, summary: LayeredSummary) -> None:
        envelope = await self._read_envelope(case_id, org_id)
        await self._write_envelope(
            case_id, org_id, merge_summary_into_envelope(envelope, summary)
        )

    @abstractmethod
    async def _read_envelope(self, case_id: str, org_id: str) -> Envelope | None:
        """Load the full record, or None if it does not exist yet."""

    @abstractmethod
    async def _write_envelope(
        self, case_id: str, org_id: str, envelope: Envelope
    ) -> None:
        """Persist the full record."""
