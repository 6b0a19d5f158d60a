# src/core/practice_area.py — v1
"""Practice area labels and normalisation of legacy/free-text values."""

from __future__ import annotations

import re

from caselens.core.models import PracticeArea

PRACTICE_AREA_LABELS: dict[PracticeArea, str] = {
    "housing_disrepair": "Housing Disrepair",
    "personal_injury": "Personal Injury",
    "clinical_negligence": "Clinical Negligence",
    "family": "Family",
    "criminal": "Criminal Law",
    "other_litigation": "Other Litigation",
}

# Checked in order; first hit wins.
_AREA_MARKERS: list[tuple[PracticeArea, tuple[str, ...]]] = [
    ("housing_disrepair", ("housing", "disrepair")),
    ("personal_injury", ("pi", "personal", "injury", "rta", "accident")),
    ("clinical_negligence", ("clin", "medical", "negligence")),
    ("family", ("family", "child", "divorce", "matrimonial", "financial_remedy")),
    (
        "criminal",
        ("criminal", "defence", "defense", "cps", "pace", "custody", "interview", "disclosure"),
    ),
]


def normalize_practice_area(area: str | None) -> PracticeArea:
    """Map a stored practice area value onto the supported set.

    Unknown or empty values fall back to ``other_litigation``.
    """
    if not area:
        return "other_litigation"
    if area in PRACTICE_AREA_LABELS:
        return area  # type: ignore[return-value]

    lowered = re.sub(r"[^a-z_]", "_", area.lower())
    for practice_area, markers in _AREA_MARKERS:
        if any(marker in lowered for marker in markers):
            return practice_area
    return "other_litigation"
