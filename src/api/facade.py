# src/api/facade.py — v2
"""Public API facade: single entry point for layered case summaries.

Usage:
    from caselens.api.facade import get_layered_summary
    result = await get_layered_summary(request)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from caselens.api.models import LayeredSummaryRequest, LayeredSummaryResult
from caselens.cache.cache_factory import create_summary_cache
from caselens.core.practice_area import normalize_practice_area
from caselens.summary.default_role import select_default_role
from caselens.summary.engine import get_or_build_layered_summary

if TYPE_CHECKING:
    from caselens.cache.base_cache_store import BaseSummaryCache
    from caselens.config.settings import Settings

logger = logging.getLogger(__name__)


async def get_layered_summary(
    request: LayeredSummaryRequest,
    settings: Settings | None = None,
    cache: BaseSummaryCache | None = None,
) -> LayeredSummaryResult:
    """Build (or reuse) the layered summary for a case.

    The layered summary is optional decoration for the host application:
    if the build itself fails the error is logged and the result carries
    ``summary=None`` instead of raising.

    Args:
        request: Validated inputs for the case.
        settings: Used to create a cache when none is injected.
        cache: Cache backend. Takes precedence over ``settings``.

    Returns:
        LayeredSummaryResult with the summary and the role to show first.
    """
    practice_area = normalize_practice_area(request.practice_area)
    default_role = select_default_role(request.role, practice_area)

    if cache is None:
        cache = create_summary_cache(settings)

    try:
        summary = await get_or_build_layered_summary(
            case_id=request.case_id,
            org_id=request.org_id,
            practice_area=practice_area,
            documents=request.documents,
            key_dates=request.key_dates,
            main_risks=request.main_risks,
            missing_evidence=request.missing_evidence,
            total_pages=request.total_pages,
            latest_analysis_version=request.latest_analysis_version,
            cache=cache,
        )
    except Exception:
        logger.warning(
            "Layered summary build failed for case %s (non-fatal)",
            request.case_id, exc_info=True,
        )
        return LayeredSummaryResult(summary=None, default_role=default_role)

    return LayeredSummaryResult(summary=summary, default_role=default_role)
