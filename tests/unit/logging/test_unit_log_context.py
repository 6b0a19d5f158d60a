# tests/unit/logging/test_unit_log_context.py — v2
"""Tests for logging/context.py — contextual logging variables."""

from __future__ import annotations

import asyncio

import pytest

from caselens.logging.context import (
    case_context,
    clear_context,
    get_context,
    stage_context,
)


class TestLogContext:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_initial_state(self):
        ctx = get_context()
        assert ctx.case_id is None
        assert ctx.org_id is None
        assert ctx.stage is None

    def test_case_context_binds_and_resets(self):
        with case_context("case-1", "org-1"):
            ctx = get_context()
            assert ctx.case_id == "case-1"
            assert ctx.org_id == "org-1"
        assert get_context().case_id is None

    def test_reset_on_exception(self):
        with pytest.raises(RuntimeError):
            with stage_context("classify"):
                raise RuntimeError("fail")
        assert get_context().stage is None

    def test_nested_stage(self):
        with stage_context("classify"):
            with stage_context("lenses"):
                assert get_context().stage == "lenses"
            assert get_context().stage == "classify"

    def test_as_dict_filters_none(self):
        with case_context("case-1", "org-1"):
            assert get_context().as_dict() == {"case_id": "case-1", "org_id": "org-1"}

    @pytest.mark.asyncio
    async def test_isolated_between_tasks(self):
        async def worker(case_id: str) -> str | None:
            with case_context(case_id, "org-1"):
                await asyncio.sleep(0)
                return get_context().case_id

        results = await asyncio.gather(worker("a"), worker("b"))
        assert results == ["a", "b"]
