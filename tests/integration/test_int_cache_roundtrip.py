# tests/integration/test_int_cache_roundtrip.py — v1
"""Cache reuse across backends through the orchestrator."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from caselens.cache.json_store import JsonFileSummaryCache
from caselens.summary import domain_engine
from caselens.summary.engine import get_or_build_layered_summary


class TestJsonCacheReuse:
    @pytest.mark.asyncio
    async def test_reuse_then_invalidate(self, tmp_path, pi_documents, key_dates, fixed_now):
        record = tmp_path / "org-1" / "case-1.json"
        record.parent.mkdir(parents=True)
        record.write_text(json.dumps({"keyFacts": {"court": "County Court"}}))

        cache = JsonFileSummaryCache(tmp_path)
        kwargs = dict(
            case_id="case-1",
            org_id="org-1",
            practice_area="personal_injury",
            key_dates=key_dates,
            cache=cache,
            now=fixed_now,
        )

        with patch(
            "caselens.summary.engine.build_domain_summaries",
            wraps=domain_engine.build_domain_summaries,
        ) as spy:
            first = await get_or_build_layered_summary(documents=pi_documents, **kwargs)
            again = await get_or_build_layered_summary(documents=pi_documents[::-1], **kwargs)
            assert spy.call_count == 1
            assert again == first

            fewer = await get_or_build_layered_summary(documents=pi_documents[:3], **kwargs)
            assert spy.call_count == 2
            assert fewer.source.document_ids == ["doc-1", "doc-2", "doc-3"]

        data = json.loads(record.read_text())
        assert data["keyFacts"] == {"court": "County Court"}
        assert data["layeredSummary"]["source"]["documentIds"] == ["doc-1", "doc-2", "doc-3"]
