# src/api/models.py — v2
"""API-level models: LayeredSummaryRequest, LayeredSummaryResult.

The request is the boundary DTO for everything the host application hands
over. Entries that cannot contribute (documents without a string id,
non-string risks, non-integer counts) are dropped here rather than
rejected.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from caselens.core.models import (
    Document,
    KeyDate,
    LayeredSummary,
    MissingEvidenceItem,
    RoleKey,
    RoleLens,
)


class LayeredSummaryRequest(BaseModel):
    """Inputs for one get-or-build call."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    case_id: str
    org_id: str
    practice_area: str | None = None
    role: str | None = None
    documents: list[Document] = Field(default_factory=list)
    key_dates: list[KeyDate] = Field(default_factory=list)
    main_risks: list[str] = Field(default_factory=list)
    missing_evidence: list[MissingEvidenceItem] = Field(
        default_factory=list, alias="versionMissingEvidence"
    )
    total_pages: int | None = None
    latest_analysis_version: int | None = None

    @field_validator("documents", mode="before")
    @classmethod
    def _keep_identifiable_documents(cls, v: Any) -> list[Any]:
        if not isinstance(v, list):
            return []
        return [
            d for d in v
            if isinstance(d, Document)
            or (isinstance(d, dict) and isinstance(d.get("id"), str))
        ]

    @field_validator("key_dates", "missing_evidence", mode="before")
    @classmethod
    def _keep_records(cls, v: Any) -> list[Any]:
        if not isinstance(v, list):
            return []
        return [item for item in v if isinstance(item, (dict, BaseModel))]

    @field_validator("main_risks", mode="before")
    @classmethod
    def _keep_string_risks(cls, v: Any) -> list[str]:
        if not isinstance(v, list):
            return []
        return [r for r in v if isinstance(r, str)]

    @field_validator("total_pages", "latest_analysis_version", mode="before")
    @classmethod
    def _int_or_none(cls, v: Any) -> int | None:
        if isinstance(v, bool) or not isinstance(v, int):
            return None
        return v

    @field_validator("practice_area", "role", mode="before")
    @classmethod
    def _str_or_none(cls, v: Any) -> str | None:
        return v if isinstance(v, str) else None


class LayeredSummaryResult(BaseModel):
    """Return value of facade.get_layered_summary()."""

    summary: LayeredSummary | None = None
    default_role: RoleKey

    @property
    def active_lens(self) -> RoleLens | None:
        """Lens for the default role, if a summary is available."""
        if self.summary is None:
            return None
        return self.summary.role_lenses.get(self.default_role)
