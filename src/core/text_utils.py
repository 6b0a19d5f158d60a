# src/core/text_utils.py — v2
"""Text helpers shared by the summary builders.

Pure functions, no I/O.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import TypeVar

T = TypeVar("T")

_WHITESPACE_RE = re.compile(r"\s+")
_SENTENCE_BOUNDARY_RE = re.compile(r"(?<=[.!?])\s+")


def normalize_text(text: str | None) -> str:
    """Lowercase and collapse whitespace. Punctuation is kept ("a&e", "x-ray")."""
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip().lower()


def split_into_sentences(text: str | None) -> list[str]:
    """Split on terminal punctuation followed by whitespace."""
    if not text:
        return []
    parts = _SENTENCE_BOUNDARY_RE.split(text.strip())
    return [p.strip() for p in parts if p.strip()]


def uniq(items: Iterable[T]) -> list[T]:
    """De-duplicate while keeping first-seen order."""
    return list(dict.fromkeys(items))


def parse_iso_date(value: str | None) -> datetime | None:
    """Parse an ISO-8601 date or datetime. Naive values are taken as UTC.

    Returns None for empty or unparseable input.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def ensure_utc(value: datetime | None) -> datetime:
    """Return ``value`` as an aware datetime (naive is taken as UTC), or UTC now."""
    if value is None:
        return datetime.now(timezone.utc)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
