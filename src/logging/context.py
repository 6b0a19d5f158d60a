# src/logging/context.py — v2
"""Contextual logging support: attach case_id, org_id and stage to log records."""

from __future__ import annotations

import contextvars
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

# Set per orchestrator call; asyncio tasks each see their own copy.
_case_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "case_id", default=None
)
_org_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "org_id", default=None
)
_stage: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "stage", default=None
)


@dataclass(frozen=True)
class LogContext:
    """Immutable snapshot of current logging context."""

    case_id: str | None = None
    org_id: str | None = None
    stage: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        case_id=_case_id.get(),
        org_id=_org_id.get(),
        stage=_stage.get(),
    )


@contextmanager
def case_context(case_id: str, org_id: str) -> Iterator[None]:
    """Bind case/org ids to every record logged inside the block."""
    case_token = _case_id.set(case_id)
    org_token = _org_id.set(org_id)
    try:
        yield
    finally:
        _case_id.reset(case_token)
        _org_id.reset(org_token)


@contextmanager
def stage_context(stage: str) -> Iterator[None]:
    """Bind the current build stage (e.g. "classify", "lenses")."""
    token = _stage.set(stage)
    try:
        yield
    finally:
        _stage.reset(token)


def clear_context() -> None:
    """Reset all context variables."""
    _case_id.set(None)
    _org_id.set(None)
    _stage.set(None)
