# src/cache/fingerprint.py — v3
"""Content fingerprint for layered summary cache invalidation.

FNV-1a (32-bit) over a canonical JSON payload. Fast and deterministic, not
collision resistant: it decides whether a cached summary is still current,
nothing more.
"""

from __future__ import annotations

import json
from collections.abc import Sequence

from caselens.core.models import KeyDate

_FNV_OFFSET_BASIS = 0x811C9DC5
_FNV_PRIME = 0x01000193
_MASK_32 = 0xFFFFFFFF


def fnv1a_32(text: str) -> str:
    """FNV-1a hash of the UTF-8 bytes of ``text`` as 8 lowercase hex chars."""
    h = _FNV_OFFSET_BASIS
    for byte in text.encode("utf-8"):
        h ^= byte
        h = (h * _FNV_PRIME) & _MASK_32
    return f"{h:08x}"


def compute_summary_fingerprint(
    document_ids: Sequence[str],
    total_pages: int | None,
    latest_analysis_version: int | None,
    key_dates: Sequence[KeyDate],
    main_risks: Sequence[str],
) -> str:
    """Fingerprint the inputs that decide whether a cached summary is valid.

    Document ids are sorted, so membership order does not matter. Key dates
    (reduced to label/date) and risks keep caller order.
    """
    payload = {
        "documentIds": sorted(document_ids),
        "totalPages": total_pages,
        "latestAnalysisVersion": latest_analysis_version,
        "keyDates": [{"label": kd.label, "date": kd.date} for kd in key_dates],
        "mainRisks": list(main_risks),
    }
    return fnv1a_32(json.dumps(payload, separators=(",", ":"), ensure_ascii=False))
