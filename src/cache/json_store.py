# src/cache/json_store.py — v3
"""JSON file-backed layered summary cache (CACHE_BACKEND=json).

One envelope file per (org, case) under CACHE_ROOT. The file may carry
other fields written by the host application; they are preserved.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from urllib.parse import quote

from caselens.cache.envelope_store import EnvelopeSummaryCache
from caselens.cache.models import Envelope

logger = logging.getLogger(__name__)


class JsonFileSummaryCache(EnvelopeSummaryCache):
    """File-based envelope store. Directories are created on first write."""

    def __init__(self, cache_root: Path | str) -> None:
        self._root = Path(cache_root).expanduser()

    async def _read_envelope(self, case_id: str, org_id: str) -> Envelope | None:
        path = self._entry_path(case_id, org_id)
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.warning("Corrupt cache record %s: %s", path, e)
            return None
        return data if isinstance(data, dict) else None

    async def _write_envelope(
        self, case_id: str, org_id: str, envelope: Envelope
    ) -> None:
        path = self._entry_path(case_id, org_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(json.dumps(envelope, indent=2), encoding="utf-8")
        tmp.replace(path)

    def _entry_path(self, case_id: str, org_id: str) -> Path:
        """Return file path for a (case, org) record."""
        return self._root / _safe_key(org_id) / f"{_safe_key(case_id)}.json"


def _safe_key(key: str) -> str:
    """Percent-encode an id into a single path segment that stays under the root."""
    encoded = quote(key, safe="")
    if encoded.startswith("."):
        encoded = "%2E" + encoded[1:]
    return encoded or "%00"
