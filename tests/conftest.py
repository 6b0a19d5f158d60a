# tests/conftest.py — v2
"""Shared test fixtures for unit and integration tests.

Sample case bundles, key dates and missing-evidence lists.
No external dependencies: all I/O is local or mocked.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from caselens.core.models import Document, KeyDate, MissingEvidenceItem


# === FIXTURES: Sample data ===


@pytest.fixture
def fixed_now() -> datetime:
    """Reference time used for deadline windows and computed_at."""
    return datetime(2025, 1, 20, 9, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def pi_documents() -> list[Document]:
    """Four documents hitting the medical, disclosure, expert and damages domains only."""
    return [
        Document(
            id="doc-1",
            name="A&E attendance note",
            type="medical",
            extracted_json={
                "summary": "Seen in A&E by the orthopaedic registrar. X-ray showed a fractured wrist.",
                "dates": [{"label": "A&E attendance", "isoDate": "2025-01-02"}],
            },
            created_at="2025-01-03T00:00:00.000Z",
        ),
        Document(
            id="doc-2",
            name="CCTV footage request",
            type="email",
            extracted_json={
                "summary": "Requested the CCTV footage from the shop owner. Footage not yet received.",
                "dates": [{"label": "CCTV requested", "isoDate": "2025-01-05"}],
            },
            created_at="2025-01-06T00:00:00.000Z",
        ),
        Document(
            id="doc-3",
            name="Expert opinion on prognosis",
            type="report",
            extracted_json={
                "summary": "Expert opinion confirms a full recovery is expected within nine months.",
                "dates": [{"label": "Expert report date", "isoDate": "2025-02-10"}],
            },
            created_at="2025-02-11T00:00:00.000Z",
        ),
        Document(
            id="doc-4",
            name="Schedule of loss",
            type="draft",
            extracted_json={
                "summary": "Schedule of loss itemising loss of earnings and medical expenses.",
                "dates": [{"label": "Schedule drafted", "isoDate": "2025-03-01"}],
            },
            created_at="2025-03-02T00:00:00.000Z",
        ),
    ]


@pytest.fixture
def criminal_documents() -> list[Document]:
    return [
        Document(
            id="doc-1",
            name="MG6 schedule",
            type="form",
            extracted_json={"summary": "MG6 schedule referenced. Disclosure outstanding."},
            created_at="2025-01-01T00:00:00.000Z",
        ),
        Document(
            id="doc-2",
            name="Police interview transcript",
            type="transcript",
            extracted_json={
                "summary": "PACE interview recorded. Caution given. No solicitor present."
            },
            created_at="2025-01-02T00:00:00.000Z",
        ),
    ]


@pytest.fixture
def key_dates() -> list[KeyDate]:
    return [KeyDate(label="Instructions", date="2025-01-01", is_past=True)]


@pytest.fixture
def pi_missing_evidence() -> list[MissingEvidenceItem]:
    return [
        MissingEvidenceItem(area="expert", label="Engineering report (liability)", priority="HIGH"),
        MissingEvidenceItem(area="admin", label="CCTV native export + metadata", priority="CRITICAL"),
    ]
