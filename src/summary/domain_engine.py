# src/summary/domain_engine.py — v1
"""Domain classifier and per-domain summary builder.

Tags each document into zero or more of the six evidence domains using
keyword containment plus witness-statement detection, then builds one
DomainSummary per domain that received at least one document.

Pure function, deterministic for a given input order. Malformed optional
fields contribute nothing; this module never raises on input shape.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from datetime import datetime, timezone

from caselens.core.models import (
    DOMAIN_ORDER,
    Document,
    DomainKey,
    DomainMissingEvidence,
    DomainSummary,
    KeyDate,
    MissingEvidenceItem,
    PracticeArea,
    TimelineHighlight,
)
from caselens.core.text_utils import (
    normalize_text,
    parse_iso_date,
    split_into_sentences,
    uniq,
)

logger = logging.getLogger(__name__)

MAX_KEY_FACTS = 8
MAX_TIMELINE_HIGHLIGHTS = 8
MAX_CONTRADICTIONS = 5
MAX_MISSING_EVIDENCE = 8
MAX_HELPS_HURTS = 4

MIN_FACT_LENGTH = 15
MAX_FACT_LENGTH = 260

DOMAIN_TITLES: dict[DomainKey, str] = {
    "incident_accident": "Incident / Accident Summary",
    "hospital_medical": "Hospital / Medical Summary",
    "police_procedural": "Police / Procedural Summary",
    "disclosure_integrity": "Disclosure & Evidence Integrity Summary",
    "expert_opinion": "Expert / Opinion Summary",
    "damages_impact": "Damages / Impact Summary",
}

# Case-insensitive substring containment against the normalized corpus.
DOMAIN_KEYWORDS: dict[DomainKey, tuple[str, ...]] = {
    "incident_accident": (
        "incident", "accident", "collision", "rta", "rtc", "mechanism",
        "fall", "slip", "trip", "impact", "assault", "attack", "altercation",
        "injury occurred", "where it happened",
    ),
    "hospital_medical": (
        "a&e", "accident and emergency", "hospital", "nhs", "trust", "ward",
        "clinic", "gp", "radiology", "x-ray", "xray", "ct", "mri", "scan",
        "operation", "surgery", "diagnosis", "treatment", "discharge",
        "consultant",
    ),
    "police_procedural": (
        "custody", "interview", "pace", "caution", "detention", "bail",
        "conditions", "arrest", "police", "statement", "mg5", "mg6", "mg 6",
        "cps", "court", "hearing", "listing", "charge", "charged", "remand",
    ),
    "disclosure_integrity": (
        "disclosure", "unused material", "mg6a", "mg6c", "schedule",
        "continuity", "exhibit", "chain of custody", "metadata", "late served",
        "served late", "missing pages", "redaction", "cctv", "bwv",
        "body worn", "999", "cad", "call log",
    ),
    "expert_opinion": (
        "expert", "report", "opinion", "consultant opinion", "engineer",
        "orthopaedic", "psychiatric", "forensic", "pathologist", "addendum",
        "joint statement", "instruction",
    ),
    "damages_impact": (
        "damages", "impact", "loss of earnings", "special damages",
        "general damages", "quantum", "care", "needs", "rehab",
        "accommodation", "employment", "benefits", "medical expenses",
        "symptoms",
    ),
}

# === WITNESS STATEMENT DETECTION ===

_WITNESS_NAME_RE = re.compile(
    r"\b(witness\s*statement|statement\s+of\s+witness|mg\s*11)\b", re.IGNORECASE
)
_WITNESS_PHRASES = ("witness details", "statement of truth")
_FIRST_PERSON_PATTERNS = (
    re.compile(r"\bi\s+(saw|witnessed|observed|noticed|heard)\b", re.IGNORECASE),
    re.compile(r"\bi\s+(was|am)\s+(told|informed|involved|present|there)\b", re.IGNORECASE),
    re.compile(r"\bi\s+(told|said|stated|informed|reported)\b", re.IGNORECASE),
    re.compile(r"\bi\s+(remember|remembered|recall|recalled|noted|became)\b", re.IGNORECASE),
)
_MIN_FIRST_PERSON_MATCHES = 2

WITNESS_DOMAINS: tuple[DomainKey, ...] = ("incident_accident", "police_procedural")

# === MISSING EVIDENCE MAPPING ===

# (terms matched against the item's area, terms matched against its label)
_MISSING_EVIDENCE_RULES: dict[DomainKey, tuple[tuple[str, ...], tuple[str, ...]]] = {
    "incident_accident": (
        (),
        ("incident", "accident", "mechanism", "photos", "witness"),
    ),
    "hospital_medical": (
        ("medical",),
        ("medical", "records", "radiology"),
    ),
    "police_procedural": (
        ("admin",),
        ("custody", "interview", "pace", "bail", "charge"),
    ),
    "disclosure_integrity": (
        (),
        ("disclosure", "mg6", "schedule", "cctv", "bwv", "999", "cad"),
    ),
    "expert_opinion": (
        ("expert",),
        ("expert", "report", "instruction"),
    ),
    "damages_impact": (
        ("funding",),
        ("loss", "earnings", "damages", "care", "rehab"),
    ),
}

# === FRAMING ===

HELPS_WHEN_COMPLETE = (
    "Helps: this domain is comparatively complete, which supports clearer "
    "sequencing and firmer requests."
)
HURTS_WHEN_MISSING = (
    "Hurts (for now): key supporting material appears to be missing in this "
    "domain, which limits how hard you can commit to a narrative."
)

# Decision-support framing per (practice area, domain).
PRACTICE_AREA_FRAMING: dict[tuple[PracticeArea, DomainKey], tuple[str, ...]] = {
    ("criminal", "disclosure_integrity"): (
        "Key leverage area: if CPIA or continuity gaps exist, the prosecution may "
        "be forced to explain, narrow, or adjourn. Treat this as evidence-first, "
        "not argument-first.",
    ),
    ("criminal", "police_procedural"): (
        "Key leverage area: if CPIA or continuity gaps exist, the prosecution may "
        "be forced to explain, narrow, or adjourn. Treat this as evidence-first, "
        "not argument-first.",
        "Check custody and interview records against PACE timings before relying "
        "on anything said in interview.",
    ),
    ("clinical_negligence", "hospital_medical"): (
        "Critical to merits: the clinical timeline (presentation, diagnosis, "
        "treatment) usually drives breach and causation direction. Anchor requests "
        "to dates, not impressions.",
    ),
    ("clinical_negligence", "expert_opinion"): (
        "Expert evidence must address breach and causation separately; a report "
        "that blends them is easy to attack.",
    ),
    ("personal_injury", "incident_accident"): (
        "Liability hinge: mechanism plus independent corroboration (CCTV, witness, "
        "photos) is usually what forces early admissions or exposes weak denials.",
    ),
    ("personal_injury", "damages_impact"): (
        "Quantum is only as strong as its vouching: tie each head of loss to a "
        "document before the schedule is served.",
    ),
    ("housing_disrepair", "damages_impact"): (
        "Impact on the household (health, belongings, use of rooms) carries general "
        "damages; dated photos and GP entries make it concrete.",
    ),
    ("housing_disrepair", "disclosure_integrity"): (
        "Repair logs and inspection records from the landlord are often the "
        "decisive documents; request them early.",
    ),
    ("family", "police_procedural"): (
        "Police disclosure in family proceedings needs a specific request; note "
        "what has been asked for and when.",
    ),
}


def build_domain_summaries(
    practice_area: PracticeArea,
    documents: Sequence[Document],
    key_dates: Sequence[KeyDate],
    missing_evidence: Sequence[MissingEvidenceItem] | None = None,
) -> list[DomainSummary]:
    """Classify documents into domains and summarise each triggered domain.

    Args:
        practice_area: Practice area of the case (drives framing only).
        documents: Case documents, in caller order.
        key_dates: Externally computed key dates, reused as timeline anchors.
        missing_evidence: Canonical missing-evidence list from the latest analysis.

    Returns:
        DomainSummary list in fixed domain order, only for domains with at
        least one assigned document.
    """
    docs_by_id: dict[str, Document] = {doc.id: doc for doc in documents}
    domain_doc_ids: dict[DomainKey, list[str]] = {d: [] for d in DOMAIN_ORDER}

    for doc in documents:
        for domain in infer_domains_for_doc(doc):
            domain_doc_ids[domain].append(doc.id)

    gaps = list(missing_evidence or [])

    summaries: list[DomainSummary] = []
    for domain in DOMAIN_ORDER:
        ids = uniq(domain_doc_ids[domain])
        if not ids:
            continue

        mapped = [m for m in gaps if maps_to_domain(domain, m)]
        domain_missing = [
            DomainMissingEvidence(label=m.label, priority=m.severity, notes=m.notes)
            for m in mapped
        ][:MAX_MISSING_EVIDENCE]

        relevance_score = (
            min(10, len(ids))
            + (5 if any(m.priority == "CRITICAL" for m in domain_missing) else 0)
            + (2 if any(m.priority == "HIGH" for m in domain_missing) else 0)
        )

        summaries.append(
            DomainSummary(
                domain=domain,
                title=DOMAIN_TITLES[domain],
                source_doc_ids=ids,
                relevance_score=relevance_score,
                key_facts=_build_key_facts(ids, docs_by_id),
                timeline_highlights=_build_timeline_highlights(ids, docs_by_id, key_dates),
                contradictions_or_uncertainties=_build_contradictions(
                    ids, docs_by_id, has_missing=bool(mapped)
                ),
                missing_evidence=domain_missing,
                helps_hurts=_build_helps_hurts(
                    domain, practice_area, has_missing=bool(mapped)
                ),
            )
        )

    logger.debug(
        "Classified %d documents into %d domains: %s",
        len(documents), len(summaries), [s.domain for s in summaries],
    )
    return summaries


def infer_domains_for_doc(doc: Document) -> list[DomainKey]:
    """Return the domains a document belongs to (possibly none)."""
    corpus = normalize_text(
        " ".join(part for part in (doc.name, doc.type, doc.extracted.summary) if part)
    )

    matched: list[DomainKey] = []
    if is_witness_statement(doc):
        matched.extend(WITNESS_DOMAINS)

    for domain in DOMAIN_ORDER:
        if any(kw in corpus for kw in DOMAIN_KEYWORDS[domain]):
            matched.append(domain)

    return uniq(matched)


def is_witness_statement(doc: Document) -> bool:
    """Detect a witness statement from explicit markers or first-person narrative."""
    heading = f"{doc.name or ''} {doc.type or ''}"
    if _WITNESS_NAME_RE.search(heading):
        return True

    extracted = doc.extracted
    corpus = normalize_text(
        " ".join(t for t in (extracted.summary, extracted.text, extracted.raw_text) if t)
    )
    if not corpus:
        return False

    if any(phrase in corpus for phrase in _WITNESS_PHRASES):
        return True

    hits = sum(1 for pattern in _FIRST_PERSON_PATTERNS if pattern.search(corpus))
    return hits >= _MIN_FIRST_PERSON_MATCHES


def maps_to_domain(domain: DomainKey, item: MissingEvidenceItem) -> bool:
    """Whether a missing-evidence item plausibly concerns ``domain``."""
    area = (item.area or "other").lower()
    label = normalize_text(item.label)
    area_terms, label_terms = _MISSING_EVIDENCE_RULES[domain]
    return any(t in area for t in area_terms) or any(t in label for t in label_terms)


def _build_key_facts(ids: list[str], docs_by_id: dict[str, Document]) -> list[str]:
    facts: list[str] = []
    seen: set[str] = set()

    for doc_id in ids:
        doc = docs_by_id.get(doc_id)
        if doc is None:
            continue
        corpus = f"{doc.name or ''}. {doc.extracted.summary}".strip()
        for sentence in split_into_sentences(corpus):
            if not MIN_FACT_LENGTH <= len(sentence) <= MAX_FACT_LENGTH:
                continue
            key = normalize_text(sentence)
            if key in seen:
                continue
            seen.add(key)
            facts.append(sentence)
            if len(facts) >= MAX_KEY_FACTS:
                return facts

    return facts


def _build_timeline_highlights(
    ids: list[str],
    docs_by_id: dict[str, Document],
    key_dates: Sequence[KeyDate],
) -> list[TimelineHighlight]:
    candidates: list[TimelineHighlight] = [
        TimelineHighlight(date_iso=kd.date, label=kd.label)
        for kd in key_dates
        if kd.date and kd.label
    ]

    for doc_id in ids:
        doc = docs_by_id.get(doc_id)
        if doc is None:
            continue
        for d in doc.extracted.dates:
            date_value = d.resolved_date
            if not date_value or not d.label:
                continue
            candidates.append(
                TimelineHighlight(date_iso=date_value, label=d.label, source_doc_ids=[doc_id])
            )

    seen: set[tuple[str, str]] = set()
    deduped: list[TimelineHighlight] = []
    for item in candidates:
        key = (item.date_iso, item.label)
        if key in seen:
            continue
        seen.add(key)
        deduped.append(item)

    # Stable sort; unparseable dates go last in their original order.
    deduped.sort(key=_timeline_sort_key)
    return deduped[:MAX_TIMELINE_HIGHLIGHTS]


def _timeline_sort_key(item: TimelineHighlight) -> tuple[int, datetime]:
    parsed = parse_iso_date(item.date_iso)
    if parsed is None:
        return (1, datetime.max.replace(tzinfo=timezone.utc))
    return (0, parsed)


def _build_contradictions(
    ids: list[str],
    docs_by_id: dict[str, Document],
    has_missing: bool,
) -> list[str]:
    out: list[str] = []

    if len(ids) == 1:
        out.append(
            "Bundle coverage for this domain looks thin (only 1 relevant document "
            "detected). Treat gaps as likely until confirmed."
        )

    dates_by_label: dict[str, dict[str, None]] = {}
    for doc_id in ids:
        doc = docs_by_id.get(doc_id)
        if doc is None:
            continue
        for d in doc.extracted.dates:
            label = (d.label or "").strip()
            date_value = (d.resolved_date or "").strip()
            if not label or not date_value:
                continue
            dates_by_label.setdefault(label, {})[date_value] = None

    for label, dates in dates_by_label.items():
        if len(dates) >= 2:
            out.append(
                f'Date inconsistency detected for "{label}" across documents '
                f"({', '.join(dates)})."
            )
            break

    if has_missing:
        out.append(
            "This domain contains missing evidence items; treat any conclusions "
            "here as provisional until those items are obtained."
        )

    return uniq(out)[:MAX_CONTRADICTIONS]


def _build_helps_hurts(
    domain: DomainKey,
    practice_area: PracticeArea,
    has_missing: bool,
) -> list[str]:
    out = [HURTS_WHEN_MISSING if has_missing else HELPS_WHEN_COMPLETE]
    out.extend(PRACTICE_AREA_FRAMING.get((practice_area, domain), ())[:3])
    return uniq(out)[:MAX_HELPS_HURTS]


