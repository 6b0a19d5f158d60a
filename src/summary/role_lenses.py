# src/summary/role_lenses.py — v2
"""Role lens builder — one prioritised view per solicitor role.

Works exclusively on DomainSummary values produced by the domain engine;
nothing here looks at documents. Every lens is a re-ordering and selection
of data the domain engine already computed.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from caselens.core.models import (
    CASE_SOLICITOR_ROLES,
    DomainKey,
    DomainSummary,
    KeyDate,
    PracticeArea,
    RoleKey,
    RoleLens,
    SupervisorAddendum,
)
from caselens.core.text_utils import ensure_utc, parse_iso_date, uniq

logger = logging.getLogger(__name__)

MAX_TOP_DOMAINS = 3
MAX_HEADLINES = 2
MAX_HEADLINES_LARGE_BUNDLE = 3
MAX_TOP_RISKS = 5
MAX_EXTERNAL_RISKS = 3
MAX_DEADLINES = 5
MAX_ESCALATION_TRIGGERS = 3
DEADLINE_WINDOW = timedelta(days=14)

ROLE_TITLES: dict[RoleKey, str] = {
    "criminal_solicitor": "Criminal Defence Lens",
    "clinical_neg_solicitor": "Clinical Neg Lens",
    "pi_solicitor": "PI Lens",
    "housing_solicitor": "Housing Lens",
    "family_solicitor": "Family Lens",
    "general_litigation_solicitor": "General Litigation Lens",
}

# Most relevant domain first; used as a filter and to break relevance ties.
ROLE_DOMAIN_PREFERENCES: dict[RoleKey, tuple[DomainKey, ...]] = {
    "criminal_solicitor": (
        "disclosure_integrity", "police_procedural", "incident_accident",
        "expert_opinion", "damages_impact", "hospital_medical",
    ),
    "clinical_neg_solicitor": (
        "hospital_medical", "expert_opinion", "incident_accident",
        "damages_impact", "disclosure_integrity", "police_procedural",
    ),
    "pi_solicitor": (
        "incident_accident", "hospital_medical", "damages_impact",
        "expert_opinion", "disclosure_integrity", "police_procedural",
    ),
    "housing_solicitor": (
        "incident_accident", "damages_impact", "disclosure_integrity",
        "expert_opinion", "hospital_medical", "police_procedural",
    ),
    "family_solicitor": (
        "incident_accident", "disclosure_integrity", "police_procedural",
        "damages_impact", "expert_opinion", "hospital_medical",
    ),
    "general_litigation_solicitor": (
        "incident_accident", "disclosure_integrity", "expert_opinion",
        "hospital_medical", "damages_impact", "police_procedural",
    ),
}

INSUFFICIENT_DATA_RISK = (
    "Insufficient structured data to identify a clear primary risk yet (treat "
    "bundle coverage as incomplete until core documents are confirmed)."
)
CONFIRM_BUNDLE_MOVE = (
    "Confirm bundle completeness: identify what is missing for the leading "
    "domain(s) and request those items before committing to a fixed narrative."
)
SPEND_GUARDRAILS: tuple[str, ...] = (
    "Do not instruct experts until the core evidence set for the top one or two "
    "domains is confirmed present (or formally requested).",
    "If disclosure or continuity gaps exist, press for production and metadata "
    "first; avoid expensive steps that can be undermined by missing material.",
)


@dataclass(frozen=True)
class RoleLensContext:
    """Case-level inputs the lenses need besides the domain summaries."""

    practice_area: PracticeArea
    is_large_bundle_mode: bool
    key_dates: Sequence[KeyDate] = field(default_factory=tuple)
    main_risks: Sequence[str] = field(default_factory=tuple)


def build_role_lenses(
    domains: Sequence[DomainSummary],
    context: RoleLensContext,
    now: datetime | None = None,
) -> dict[RoleKey, RoleLens]:
    """Derive one lens per role from already-built domain summaries.

    Args:
        domains: Output of ``build_domain_summaries``.
        context: Case-level context (bundle mode, key dates, risks).
        now: Reference time for the deadline window. Defaults to UTC now; naive values are taken as UTC.

    Returns:
        Mapping with exactly one RoleLens for each role in CASE_SOLICITOR_ROLES.
    """
    now = ensure_utc(now)
    by_domain = {d.domain: d for d in domains}
    addendum = _supervisor_addendum(domains, context, now)

    lenses: dict[RoleKey, RoleLens] = {}
    for role in CASE_SOLICITOR_ROLES:
        top = top_domains_for_role(role, domains)
        top_summaries = [by_domain[d] for d in top]
        lenses[role] = RoleLens(
            role=role,
            title=ROLE_TITLES[role],
            top_domains=top,
            what_matters_most=_what_matters_most(top_summaries, context.is_large_bundle_mode),
            primary_risk=_primary_risk(top_summaries, context.main_risks),
            recommended_next_move=_recommended_next_move(top_summaries),
            supervisor_addendum=addendum,
        )
    return lenses


def top_domains_for_role(
    role: RoleKey, domains: Sequence[DomainSummary]
) -> list[DomainKey]:
    """Relevance-descending domains the role cares about, ties by preference."""
    preference = ROLE_DOMAIN_PREFERENCES[role]
    candidates = [d for d in domains if d.domain in preference]
    ranked = sorted(
        candidates,
        key=lambda d: (-d.relevance_score, preference.index(d.domain)),
    )
    return [d.domain for d in ranked][:MAX_TOP_DOMAINS]


def _what_matters_most(
    top: Sequence[DomainSummary], is_large_bundle_mode: bool
) -> list[str]:
    bullets: list[str] = []
    for d in top:
        headline = (d.key_facts[:1] or d.helps_hurts[:1] or [d.title])[0]
        bullets.append(f"{d.title}: {headline}")
    limit = MAX_HEADLINES_LARGE_BUNDLE if is_large_bundle_mode else MAX_HEADLINES
    return bullets[:limit]


def _primary_risk(top: Sequence[DomainSummary], main_risks: Sequence[str]) -> str:
    for d in top:
        if d.contradictions_or_uncertainties:
            return d.contradictions_or_uncertainties[0]
    for d in top:
        for m in d.missing_evidence:
            if m.label:
                return f"Missing evidence: {m.label}"
    for risk in main_risks:
        if risk:
            return risk
    return INSUFFICIENT_DATA_RISK


def _recommended_next_move(top: Sequence[DomainSummary]) -> str:
    for d in top:
        for m in d.missing_evidence:
            if not m.label:
                continue
            if m.notes:
                return f"Obtain / chase: {m.label} ({m.notes})"
            return f"Obtain / chase: {m.label}"
    return CONFIRM_BUNDLE_MOVE


def _supervisor_addendum(
    domains: Sequence[DomainSummary],
    context: RoleLensContext,
    now: datetime,
) -> SupervisorAddendum:
    top_risks = uniq(
        [
            *[r for r in context.main_risks if r][:MAX_EXTERNAL_RISKS],
            *[
                d.contradictions_or_uncertainties[0]
                for d in domains
                if d.contradictions_or_uncertainties
            ],
        ]
    )[:MAX_TOP_RISKS]

    deadlines: list[str] = []
    for kd in context.key_dates:
        if not kd.date:
            continue
        parsed = parse_iso_date(kd.date)
        within_window = parsed is not None and parsed - now <= DEADLINE_WINDOW
        if not (kd.is_urgent or within_window):
            continue
        shown = parsed.astimezone(timezone.utc).date().isoformat() if parsed else kd.date
        deadlines.append(f"{kd.label}: {shown}")
        if len(deadlines) >= MAX_DEADLINES:
            break

    escalation_triggers = uniq(
        f"If still missing after chase(s), escalate on: {m.label}"
        for d in domains
        for m in d.missing_evidence
        if m.priority in ("CRITICAL", "HIGH") and m.label
    )[:MAX_ESCALATION_TRIGGERS]

    return SupervisorAddendum(
        top_risks=top_risks,
        upcoming_deadlines=deadlines,
        spend_guardrails=list(SPEND_GUARDRAILS),
        escalation_triggers=escalation_triggers,
    )
