from dataclasses import asdict
from typing import Any, Dict, Optional

from relief.draft import BOOL_FIELDS, AssessmentDraft

# Free text that the backend stores as NULL when not answered.
OPTIONAL_TEXT_FIELDS = (
    "previous_job_business",
    "issues_returning_to_school",
    "illnesses_after_flood",
    "priority_1",
    "priority_2",
    "priority_3",
    "notes",
)
# UI-only values that are never sent as-is.
UI_ONLY_FIELDS = ("living_status",)


def _text_or_none(value: Optional[str]) -> Optional[str]:
    text = (value or "").strip()
    return text or None


def _family_members(value: Any) -> int:
    try:
        n = int(float(value or 0))
    except (TypeError, ValueError):
        return 0
    return max(0, n)


def validate_for_submission(draft: AssessmentDraft) -> Optional[str]:
    """Light guard against empty saves; returns the first blocking message or None."""
    if not draft.name.strip():
        return "Name is required."
    if not draft.contact_number.strip():
        return "Contact number is required."
    if not draft.living_status:
        return "Please select where the household is currently living."
    if not draft.enough_daily_food:
        return "Please select whether there is enough daily food."
    return None


def to_backend_payload(draft: AssessmentDraft) -> Dict[str, Any]:
    values = asdict(draft)
    payload: Dict[str, Any] = {}

    for key, value in values.items():
        if key in UI_ONLY_FIELDS:
            continue
        if key in OPTIONAL_TEXT_FIELDS:
            payload[key] = _text_or_none(value)
        elif key in BOOL_FIELDS:
            payload[key] = bool(value)
        else:
            payload[key] = value

    payload["name"] = draft.name.strip()
    payload["contact_number"] = draft.contact_number.strip()
    payload["family_members"] = _family_members(draft.family_members)
    payload["enough_daily_food"] = draft.enough_daily_food or None

    payload["living_own_home"] = draft.living_status == "OWN"
    payload["living_relatives_home"] = draft.living_status == "RELATIVE"
    payload["living_temporary_shelter"] = draft.living_status == "SHELTER"
    return payload
