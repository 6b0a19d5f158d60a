# src/summary/default_role.py — v1
"""Pick which role lens to show first."""

from __future__ import annotations

from caselens.core.models import CASE_SOLICITOR_ROLES, RoleKey

_ROLE_BY_PRACTICE_AREA: dict[str, RoleKey] = {
    "criminal": "criminal_solicitor",
    "clinical_negligence": "clinical_neg_solicitor",
    "personal_injury": "pi_solicitor",
    "housing_disrepair": "housing_solicitor",
    "family": "family_solicitor",
}

DEFAULT_ROLE: RoleKey = "general_litigation_solicitor"


def select_default_role(
    role_param: str | None = None,
    practice_area: str | None = None,
) -> RoleKey:
    """Explicit role parameter > practice area's natural role > general litigation.

    Unknown role parameters and practice areas are ignored rather than rejected.
    """
    if role_param and role_param in CASE_SOLICITOR_ROLES:
        return role_param  # type: ignore[return-value]
    if practice_area:
        return _ROLE_BY_PRACTICE_AREA.get(practice_area, DEFAULT_ROLE)
    return DEFAULT_ROLE
