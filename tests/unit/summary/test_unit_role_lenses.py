# tests/unit/summary/test_unit_role_lenses.py — v2
"""Tests for summary/role_lenses.py — per-role prioritisation."""

from __future__ import annotations

from datetime import datetime, timezone

from caselens.core.models import (
    CASE_SOLICITOR_ROLES,
    DomainMissingEvidence,
    DomainSummary,
    KeyDate,
)
from caselens.summary.domain_engine import build_domain_summaries
from caselens.summary.role_lenses import (
    CONFIRM_BUNDLE_MOVE,
    INSUFFICIENT_DATA_RISK,
    ROLE_TITLES,
    SPEND_GUARDRAILS,
    RoleLensContext,
    build_role_lenses,
    top_domains_for_role,
)

NOW = datetime(2025, 1, 20, 9, 0, 0, tzinfo=timezone.utc)


def _summary(domain, score, **kwargs) -> DomainSummary:
    kwargs.setdefault("title", domain.replace("_", " ").title())
    kwargs.setdefault("source_doc_ids", ["doc-1"])
    return DomainSummary(domain=domain, relevance_score=score, **kwargs)


def _context(**kwargs) -> RoleLensContext:
    kwargs.setdefault("practice_area", "other_litigation")
    kwargs.setdefault("is_large_bundle_mode", False)
    return RoleLensContext(**kwargs)


class TestBuildRoleLenses:
    def test_one_lens_per_role(self, pi_documents, key_dates, pi_missing_evidence):
        domains = build_domain_summaries("personal_injury", pi_documents, key_dates, pi_missing_evidence)
        lenses = build_role_lenses(domains, _context(practice_area="personal_injury"), now=NOW)
        assert list(lenses) == list(CASE_SOLICITOR_ROLES)
        for role, lens in lenses.items():
            assert lens.role == role
            assert lens.title == ROLE_TITLES[role]
            assert len(lens.top_domains) <= 3

    def test_empty_domains(self):
        lenses = build_role_lenses([], _context(), now=NOW)
        for lens in lenses.values():
            assert lens.top_domains == []
            assert lens.what_matters_most == []
            assert lens.primary_risk == INSUFFICIENT_DATA_RISK
            assert lens.recommended_next_move == CONFIRM_BUNDLE_MOVE

    def test_scenario_top_domains(self, pi_documents, key_dates, pi_missing_evidence):
        domains = build_domain_summaries("personal_injury", pi_documents, key_dates, pi_missing_evidence)
        lenses = build_role_lenses(domains, _context(practice_area="personal_injury"), now=NOW)
        assert lenses["pi_solicitor"].top_domains == [
            "disclosure_integrity",
            "expert_opinion",
            "hospital_medical",
        ]
        assert lenses["pi_solicitor"].recommended_next_move == (
            "Obtain / chase: CCTV native export + metadata"
        )

    def test_addendum_shared_across_roles(self, pi_documents, key_dates, pi_missing_evidence):
        domains = build_domain_summaries("personal_injury", pi_documents, key_dates, pi_missing_evidence)
        lenses = build_role_lenses(domains, _context(key_dates=key_dates), now=NOW)
        addendum = lenses["pi_solicitor"].supervisor_addendum
        assert all(lens.supervisor_addendum == addendum for lens in lenses.values())
        assert addendum.spend_guardrails == list(SPEND_GUARDRAILS)
        assert addendum.escalation_triggers == [
            "If still missing after chase(s), escalate on: CCTV native export + metadata",
            "If still missing after chase(s), escalate on: Engineering report (liability)",
        ]


class TestTopDomains:
    def test_sorted_by_relevance(self):
        domains = [
            _summary("incident_accident", 1),
            _summary("hospital_medical", 9),
            _summary("expert_opinion", 4),
            _summary("damages_impact", 6),
        ]
        assert top_domains_for_role("pi_solicitor", domains) == [
            "hospital_medical",
            "damages_impact",
            "expert_opinion",
        ]

    def test_ties_broken_by_role_preference(self):
        domains = [
            _summary("hospital_medical", 3),
            _summary("disclosure_integrity", 3),
            _summary("police_procedural", 3),
        ]
        assert top_domains_for_role("criminal_solicitor", domains) == [
            "disclosure_integrity",
            "police_procedural",
            "hospital_medical",
        ]
        assert top_domains_for_role("clinical_neg_solicitor", domains) == [
            "hospital_medical",
            "disclosure_integrity",
            "police_procedural",
        ]


class TestWhatMattersMost:
    def _domains(self):
        return [
            _summary("hospital_medical", 5, title="Hospital", key_facts=["Admitted overnight."]),
            _summary("expert_opinion", 4, title="Expert", helps_hurts=["Helps: strong report."]),
            _summary("damages_impact", 3, title="Damages"),
        ]

    def test_two_headlines_normally(self):
        lens = build_role_lenses(self._domains(), _context(), now=NOW)["pi_solicitor"]
        assert lens.what_matters_most == [
            "Hospital: Admitted overnight.",
            "Expert: Helps: strong report.",
        ]

    def test_three_headlines_in_large_bundle_mode(self):
        lens = build_role_lenses(
            self._domains(), _context(is_large_bundle_mode=True), now=NOW
        )["pi_solicitor"]
        assert lens.what_matters_most[-1] == "Damages: Damages"
        assert len(lens.what_matters_most) == 3


class TestPrimaryRisk:
    def test_contradiction_first(self):
        domains = [
            _summary(
                "hospital_medical",
                5,
                missing_evidence=[DomainMissingEvidence(label="GP records")],
            ),
            _summary("expert_opinion", 4, contradictions_or_uncertainties=["Reports disagree."]),
        ]
        lens = build_role_lenses(domains, _context(), now=NOW)["clinical_neg_solicitor"]
        assert lens.primary_risk == "Reports disagree."

    def test_missing_evidence_second(self):
        domains = [
            _summary("hospital_medical", 5, missing_evidence=[DomainMissingEvidence(label="GP records")])
        ]
        lens = build_role_lenses(domains, _context(main_risks=("Limitation",)), now=NOW)[
            "clinical_neg_solicitor"
        ]
        assert lens.primary_risk == "Missing evidence: GP records"

    def test_main_risk_third(self):
        domains = [_summary("hospital_medical", 5)]
        lens = build_role_lenses(domains, _context(main_risks=("", "Limitation")), now=NOW)[
            "clinical_neg_solicitor"
        ]
        assert lens.primary_risk == "Limitation"


class TestRecommendedNextMove:
    def test_includes_notes(self):
        domains = [
            _summary(
                "hospital_medical",
                5,
                missing_evidence=[
                    DomainMissingEvidence(label=""),
                    DomainMissingEvidence(label="GP records", notes="2019 onwards"),
                ],
            )
        ]
        lens = build_role_lenses(domains, _context(), now=NOW)["clinical_neg_solicitor"]
        assert lens.recommended_next_move == "Obtain / chase: GP records (2019 onwards)"


class TestSupervisorAddendum:
    def test_top_risks_merge_main_risks_and_contradictions(self):
        domains = [
            _summary("hospital_medical", 5, contradictions_or_uncertainties=["A", "B"]),
            _summary("expert_opinion", 4, contradictions_or_uncertainties=["R1"]),
        ]
        context = _context(main_risks=("R1", "R2", "R3", "R4"))
        addendum = build_role_lenses(domains, context, now=NOW)["pi_solicitor"].supervisor_addendum
        assert addendum.top_risks == ["R1", "R2", "R3", "A"]

    def test_deadlines_urgent_or_within_window(self):
        key_dates = [
            KeyDate(label="Far away", date="2025-06-01"),
            KeyDate(label="Urgent far away", date="2025-06-02", is_urgent=True),
            KeyDate(label="Next week", date="2025-01-27"),
            KeyDate(label="Fifteen days", date="2025-02-04T10:00:00Z"),
            KeyDate(label="Undated", date=""),
        ]
        addendum = build_role_lenses([], _context(key_dates=key_dates), now=NOW)[
            "pi_solicitor"
        ].supervisor_addendum
        assert addendum.upcoming_deadlines == [
            "Urgent far away: 2025-06-02",
            "Next week: 2025-01-27",
        ]

    def test_naive_now(self):
        key_dates = [KeyDate(label="Next week", date="2025-01-27")]
        addendum = build_role_lenses(
            [], _context(key_dates=key_dates), now=datetime(2025, 1, 20, 9, 0)
        )["pi_solicitor"].supervisor_addendum
        assert addendum.upcoming_deadlines == ["Next week: 2025-01-27"]

    def test_deadlines_capped(self):
        key_dates = [KeyDate(label=f"D{i}", date="2025-01-21") for i in range(8)]
        addendum = build_role_lenses([], _context(key_dates=key_dates), now=NOW)[
            "pi_solicitor"
        ].supervisor_addendum
        assert len(addendum.upcoming_deadlines) == 5

    def test_unparseable_urgent_date_kept_verbatim(self):
        key_dates = [KeyDate(label="Hearing", date="TBC", is_urgent=True)]
        addendum = build_role_lenses([], _context(key_dates=key_dates), now=NOW)[
            "pi_solicitor"
        ].supervisor_addendum
        assert addendum.upcoming_deadlines == ["Hearing: TBC"]

    def test_escalation_only_high_and_critical(self):
        domains = [
            _summary(
                "hospital_medical",
                5,
                missing_evidence=[
                    DomainMissingEvidence(label="Low item", priority="LOW"),
                    DomainMissingEvidence(label="High item", priority="HIGH"),
                ],
            ),
            _summary(
                "expert_opinion",
                4,
                missing_evidence=[
                    DomainMissingEvidence(label="High item", priority="HIGH"),
                    DomainMissingEvidence(label="Critical item", priority="CRITICAL"),
                    DomainMissingEvidence(label="Other critical", priority="CRITICAL"),
                    DomainMissingEvidence(label="Fourth", priority="HIGH"),
                ],
            ),
        ]
        addendum = build_role_lenses(domains, _context(), now=NOW)["pi_solicitor"].supervisor_addendum
        assert addendum.escalation_triggers == [
            "If still missing after chase(s), escalate on: High item",
            "If still missing after chase(s), escalate on: Critical item",
            "If still missing after chase(s), escalate on: Other critical",
        ]
