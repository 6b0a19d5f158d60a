# src/core/models.py — v1
"""Shared Pydantic models used across modules.

Inbound models are boundary DTOs: every optional field is defaulted and
wrong-typed values are coerced to "no contribution" at ingestion, so the
summary builders never see unvalidated shapes.

Outbound models (DomainSummary, RoleLens, LayeredSummary) are frozen and
serialize with camelCase aliases for cache payloads.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# === CLOSED ENUMERATIONS ===

PracticeArea = Literal[
    "housing_disrepair",
    "personal_injury",
    "clinical_negligence",
    "family",
    "criminal",
    "other_litigation",
]

Severity = Literal["LOW", "MEDIUM", "HIGH", "CRITICAL"]

DomainKey = Literal[
    "incident_accident",
    "hospital_medical",
    "police_procedural",
    "disclosure_integrity",
    "expert_opinion",
    "damages_impact",
]

RoleKey = Literal[
    "criminal_solicitor",
    "clinical_neg_solicitor",
    "pi_solicitor",
    "housing_solicitor",
    "family_solicitor",
    "general_litigation_solicitor",
]

DOMAIN_ORDER: tuple[DomainKey, ...] = (
    "incident_accident",
    "hospital_medical",
    "police_procedural",
    "disclosure_integrity",
    "expert_opinion",
    "damages_impact",
)

CASE_SOLICITOR_ROLES: tuple[RoleKey, ...] = (
    "criminal_solicitor",
    "clinical_neg_solicitor",
    "pi_solicitor",
    "housing_solicitor",
    "family_solicitor",
    "general_litigation_solicitor",
)


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _str_or_empty(value: Any) -> str:
    return value if isinstance(value, str) else ""


# === INBOUND (boundary DTOs) ===


class DocumentDate(BaseModel):
    """A structured {label, date} pair found in a document's extracted content."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    label: str | None = None
    iso_date: str | None = Field(default=None, alias="isoDate")
    date: str | None = None

    @field_validator("label", "iso_date", "date", mode="before")
    @classmethod
    def _coerce_str(cls, v: Any) -> str | None:
        return _str_or_none(v)

    @property
    def resolved_date(self) -> str | None:
        """Date value, preferring the ``isoDate`` key over ``date``."""
        return self.iso_date if self.iso_date is not None else self.date


class ExtractedContent(BaseModel):
    """Subset of the opaque extraction blob this package reads."""

    model_config = ConfigDict(extra="ignore")

    summary: str = ""
    text: str = ""
    raw_text: str = ""
    dates: list[DocumentDate] = Field(default_factory=list)

    @field_validator("summary", "text", "raw_text", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> str:
        return _str_or_empty(v)

    @field_validator("dates", mode="before")
    @classmethod
    def _coerce_dates(cls, v: Any) -> list[Any]:
        if not isinstance(v, list):
            return []
        return [d for d in v if isinstance(d, dict)]


class Document(BaseModel):
    """Read-only case document as handed over by the ingestion layer."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str | None = None
    type: str | None = None
    extracted: ExtractedContent = Field(
        default_factory=ExtractedContent, alias="extracted_json"
    )
    created_at: str | None = None

    @field_validator("name", "type", "created_at", mode="before")
    @classmethod
    def _coerce_optional_str(cls, v: Any) -> str | None:
        return _str_or_none(v)

    @field_validator("extracted", mode="before")
    @classmethod
    def _coerce_extracted(cls, v: Any) -> Any:
        if isinstance(v, (dict, ExtractedContent)):
            return v
        return {}


class KeyDate(BaseModel):
    """Externally computed case key date."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    label: str = ""
    date: str = ""
    is_past: bool = Field(default=False, alias="isPast")
    is_urgent: bool = Field(default=False, alias="isUrgent")

    @field_validator("label", "date", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> str:
        return _str_or_empty(v)

    @field_validator("is_past", "is_urgent", mode="before")
    @classmethod
    def _coerce_flag(cls, v: Any) -> bool:
        return v is True


class MissingEvidenceItem(BaseModel):
    """Evidentiary gap reported by the latest case analysis."""

    model_config = ConfigDict(extra="ignore")

    area: str | None = None
    label: str = ""
    priority: str | None = None
    notes: str | None = None

    @field_validator("area", "priority", "notes", mode="before")
    @classmethod
    def _coerce_optional_str(cls, v: Any) -> str | None:
        return _str_or_none(v)

    @field_validator("label", mode="before")
    @classmethod
    def _coerce_label(cls, v: Any) -> str:
        return _str_or_empty(v)

    @property
    def severity(self) -> Severity | None:
        """Priority parsed case-insensitively; unknown values yield None."""
        value = (self.priority or "").upper()
        if value in ("LOW", "MEDIUM", "HIGH", "CRITICAL"):
            return value  # type: ignore[return-value]
        return None


# === OUTBOUND (immutable snapshot) ===


class _Snapshot(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class TimelineHighlight(_Snapshot):
    date_iso: str = Field(alias="dateISO")
    label: str
    source_doc_ids: list[str] | None = None


class DomainMissingEvidence(_Snapshot):
    label: str
    priority: Severity | None = None
    notes: str | None = None


class DomainSummary(_Snapshot):
    """Evidentiary summary for one domain with at least one document."""

    domain: DomainKey
    title: str
    source_doc_ids: list[str]
    relevance_score: int
    key_facts: list[str] = Field(default_factory=list)
    timeline_highlights: list[TimelineHighlight] = Field(default_factory=list)
    contradictions_or_uncertainties: list[str] = Field(default_factory=list)
    missing_evidence: list[DomainMissingEvidence] = Field(default_factory=list)
    helps_hurts: list[str] = Field(default_factory=list)


class SupervisorAddendum(_Snapshot):
    top_risks: list[str] = Field(default_factory=list)
    upcoming_deadlines: list[str] = Field(default_factory=list)
    spend_guardrails: list[str] = Field(default_factory=list)
    escalation_triggers: list[str] = Field(default_factory=list)


class RoleLens(_Snapshot):
    """Prioritised view of the domain summaries for one solicitor role."""

    role: RoleKey
    title: str
    top_domains: list[DomainKey]
    what_matters_most: list[str]
    primary_risk: str
    recommended_next_move: str
    supervisor_addendum: SupervisorAddendum


class LayeredSummarySource(_Snapshot):
    document_ids: list[str]
    total_pages: int | None = None
    latest_analysis_version: int | None = None
    key_facts_hash: str


class LayeredSummary(_Snapshot):
    """Aggregate result: domain summaries plus one lens per role."""

    version: Literal[1] = 1
    computed_at: datetime
    practice_area: PracticeArea
    source: LayeredSummarySource
    is_large_bundle_mode: bool
    domain_summaries: list[DomainSummary]
    role_lenses: dict[RoleKey, RoleLens]
