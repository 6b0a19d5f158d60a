# src/summary/engine.py — v2
"""Layered summary orchestrator.

Two entry points:
  - build_layered_summary: pure build, no cache.
  - get_or_build_layered_summary: fingerprint check against an injected
    cache, rebuild on miss, best-effort write-back.

Within one build the domain engine runs exactly once and the role lenses
are derived from its output. Caller inputs are never mutated.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime

from caselens.cache.base_cache_store import BaseSummaryCache
from caselens.cache.fingerprint import compute_summary_fingerprint
from caselens.cache.null_store import NullSummaryCache
from caselens.core.models import (
    Document,
    KeyDate,
    LayeredSummary,
    LayeredSummarySource,
    MissingEvidenceItem,
    PracticeArea,
)
from caselens.core.text_utils import ensure_utc
from caselens.logging.context import case_context, stage_context
from caselens.summary.domain_engine import build_domain_summaries
from caselens.summary.role_lenses import RoleLensContext, build_role_lenses

logger = logging.getLogger(__name__)

LARGE_BUNDLE_PAGE_THRESHOLD = 300
LAYERED_SUMMARY_VERSION = 1


def is_large_bundle(total_pages: int | None) -> bool:
    """Display-density flag: more than 300 pages."""
    return (total_pages or 0) > LARGE_BUNDLE_PAGE_THRESHOLD


def build_layered_summary(
    *,
    practice_area: PracticeArea,
    documents: Sequence[Document],
    key_dates: Sequence[KeyDate] = (),
    main_risks: Sequence[str] = (),
    missing_evidence: Sequence[MissingEvidenceItem] | None = None,
    total_pages: int | None = None,
    latest_analysis_version: int | None = None,
    now: datetime | None = None,
) -> LayeredSummary:
    """Build a fresh LayeredSummary without touching any cache.

    Args:
        practice_area: Normalized practice area of the case.
        documents: Case documents in caller order.
        key_dates: Key dates; feed timelines and supervisor deadlines.
        main_risks: Top-level risks from upstream analysis.
        missing_evidence: Canonical missing-evidence items.
        total_pages: Bundle page count; drives large-bundle mode.
        latest_analysis_version: Version of the analysis the gaps came from.
        now: Reference time for computed_at and deadline windows. Naive
            values are taken as UTC.

    Returns:
        Fully assembled, immutable LayeredSummary.
    """
    now = ensure_utc(now)
    document_ids = sorted(doc.id for doc in documents)
    key_facts_hash = compute_summary_fingerprint(
        document_ids, total_pages, latest_analysis_version, key_dates, main_risks
    )
    large_bundle = is_large_bundle(total_pages)

    with stage_context("classify"):
        domain_summaries = build_domain_summaries(
            practice_area, documents, key_dates, missing_evidence
        )

    with stage_context("lenses"):
        role_lenses = build_role_lenses(
            domain_summaries,
            RoleLensContext(
                practice_area=practice_area,
                is_large_bundle_mode=large_bundle,
                key_dates=tuple(key_dates),
                main_risks=tuple(main_risks),
            ),
            now=now,
        )

    return LayeredSummary(
        version=LAYERED_SUMMARY_VERSION,
        computed_at=now,
        practice_area=practice_area,
        source=LayeredSummarySource(
            document_ids=document_ids,
            total_pages=total_pages,
            latest_analysis_version=latest_analysis_version,
            key_facts_hash=key_facts_hash,
        ),
        is_large_bundle_mode=large_bundle,
        domain_summaries=domain_summaries,
        role_lenses=role_lenses,
    )


async def get_or_build_layered_summary(
    *,
    case_id: str,
    org_id: str,
    practice_area: PracticeArea,
    documents: Sequence[Document],
    key_dates: Sequence[KeyDate] = (),
    main_risks: Sequence[str] = (),
    missing_evidence: Sequence[MissingEvidenceItem] | None = None,
    total_pages: int | None = None,
    latest_analysis_version: int | None = None,
    cache: BaseSummaryCache | None = None,
    now: datetime | None = None,
) -> LayeredSummary:
    """Return the cached summary when still current, else rebuild and store.

    A cached snapshot is reused only when both its fingerprint and its
    sorted document id list equal the freshly computed ones. Cache read and
    write failures are logged and never reach the caller.
    """
    if cache is None:
        cache = NullSummaryCache()

    with case_context(case_id, org_id):
        document_ids = sorted(doc.id for doc in documents)
        fingerprint = compute_summary_fingerprint(
            document_ids, total_pages, latest_analysis_version, key_dates, main_risks
        )

        cached: LayeredSummary | None = None
        try:
            cached = await cache.get(case_id, org_id)
        except Exception:
            logger.warning(
                "Layered summary cache read failed; rebuilding", exc_info=True
            )

        if cached is not None:
            if (
                cached.source.key_facts_hash == fingerprint
                and cached.source.document_ids == document_ids
            ):
                logger.debug("Layered summary cache hit (hash=%s)", fingerprint)
                return cached
            logger.info(
                "Layered summary cache stale (cached=%s, current=%s)",
                cached.source.key_facts_hash, fingerprint,
            )
        else:
            logger.debug("Layered summary cache miss")

        summary = build_layered_summary(
            practice_area=practice_area,
            documents=documents,
            key_dates=key_dates,
            main_risks=main_risks,
            missing_evidence=missing_evidence,
            total_pages=total_pages,
            latest_analysis_version=latest_analysis_version,
            now=now,
        )

        try:
            await cache.set(case_id, org_id, summary)
        except Exception:
            logger.warning(
                "Layered summary cache write failed; returning fresh build",
                exc_info=True,
            )

        return summary
