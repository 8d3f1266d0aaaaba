from typing import Any, Dict

from relief.draft import AssessmentDraft

CHECK_LABELS = {
    "has_name": "Name",
    "has_contact": "Contact",
    "has_living": "Living status",
    "has_food": "Food answer",
    "has_priority": "At least one priority",
}


def _filled(text: str) -> bool:
    return len((text or "").strip()) > 0


def completion_checklist(draft: AssessmentDraft) -> Dict[str, Any]:
    checks = {
        "has_name": _filled(draft.name),
        "has_contact": _filled(draft.contact_number),
        "has_living": bool(draft.living_status),
        "has_food": draft.enough_daily_food in ("YES", "NO"),
        "has_priority": any(_filled(p) for p in (draft.priority_1, draft.priority_2, draft.priority_3)),
    }
    total = len(checks)
    done = sum(1 for v in checks.values() if v)
    return {**checks, "complete_count": done, "total_count": total}
