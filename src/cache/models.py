# src/cache/models.py — v2
"""Persisted cache envelope helpers.

The externally persisted record for a (case, org) pair is a JSON object
owned by the host application. This package reads and writes only the
``layeredSummary`` field; every other field must survive a write untouched.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from caselens.core.models import LayeredSummary

logger = logging.getLogger(__name__)

ENVELOPE_FIELD = "layeredSummary"

Envelope = dict[str, Any]


def summary_from_envelope(envelope: Envelope | None) -> LayeredSummary | None:
    """Extract the snapshot from an envelope. Invalid payloads count as absent."""
    if not envelope:
        return None
    payload = envelope.get(ENVELOPE_FIELD)
    if not isinstance(payload, dict):
        return None
    try:
        return LayeredSummary.model_validate(payload)
    except ValidationError as e:
        logger.warning("Discarding unreadable cached layered summary: %s", e)
        return None


def merge_summary_into_envelope(
    envelope: Envelope | None, summary: LayeredSummary
) -> Envelope:
    """Return a new envelope with the snapshot set and all siblings kept."""
    merged: Envelope = dict(envelope or {})
    merged[ENVELOPE_FIELD] = summary.model_dump(by_alias=True, mode="json")
    return merged
