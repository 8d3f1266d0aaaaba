from dataclasses import dataclass, fields, replace
from typing import Any, Dict, List, Optional, Tuple

# Living situation is one choice in the form but three booleans in the backend schema.
LIVING_OPTIONS: List[Tuple[str, str]] = [
    ("OWN", "Own home"),
    ("RELATIVE", "Relative's home"),
    ("SHELTER", "Temporary shelter"),
]
YES_NO_OPTIONS: List[Tuple[str, str]] = [("YES", "Yes"), ("NO", "No")]

SUPPORT_FIELDS = ("support_government", "support_ngo_charity", "support_community_relatives")
SUPPORT_NONE = "support_none"


@dataclass(frozen=True)
class AssessmentDraft:
    # 1) Household information
    name: str = ""
    contact_number: str = ""
    family_members: int = 0
    vulnerable_elderly: bool = False
    vulnerable_children_u5: bool = False
    vulnerable_pregnant_lactating: bool = False

    # 2) Housing & living conditions
    house_structurally_damaged: bool = False
    furniture_lost: bool = False
    living_status: str = ""          # "OWN" | "RELATIVE" | "SHELTER"
    need_repairs: bool = False
    need_bedding: bool = False
    need_cooking_items: bool = False
    need_water: bool = False
    need_sanitation: bool = False

    # 3) Livelihood & income
    previous_job_business: str = ""
    tools_equipment_lost: bool = False
    unable_to_work_currently: bool = False
    restart_tools: bool = False
    restart_materials: bool = False
    restart_capital: bool = False
    restart_training: bool = False

    # 4) Food & essential supplies
    enough_daily_food: str = ""      # "YES" | "NO"
    clean_drinking_water_available: bool = False
    need_dry_rations: bool = False
    need_hygiene_items: bool = False
    need_medicine: bool = False
    need_clothing: bool = False

    # 5) Children & schooling
    children_attending_school_before_flood: bool = False
    lost_books_uniforms_supplies: bool = False
    issues_returning_to_school: str = ""
    school_transport_affected: bool = False

    # 6) Health & well-being
    illnesses_after_flood: str = ""
    on_regular_medication: bool = False
    emotional_stress_adults: bool = False
    emotional_stress_children: bool = False

    # 7) Support received
    support_government: bool = False
    support_ngo_charity: bool = False
    support_community_relatives: bool = False
    support_none: bool = False

    # 8) Priority needs
    priority_1: str = ""
    priority_2: str = ""
    priority_3: str = ""
    notes: str = ""


FIELD_NAMES = tuple(f.name for f in fields(AssessmentDraft))
BOOL_FIELDS = tuple(f.name for f in fields(AssessmentDraft) if f.type is bool)

# (section title, [(group label or None, [(field, label), ...]), ...])
FORM_SECTIONS: List[Tuple[str, List[Tuple[Optional[str], List[Tuple[str, str]]]]]] = [
    ("1. Household Information", [
        (None, [("name", "Name"), ("contact_number", "Contact Number"),
                ("family_members", "Number of family members")]),
        ("Vulnerable members", [("vulnerable_elderly", "Elderly"),
                                ("vulnerable_children_u5", "Children < 5"),
                                ("vulnerable_pregnant_lactating", "Pregnant / Lactating")]),
    ]),
    ("2. Housing & Living Conditions", [
        (None, [("house_structurally_damaged", "House structurally damaged"),
                ("furniture_lost", "Furniture lost")]),
        ("Currently living in", [("living_status", "Currently living in")]),
        ("Immediate needs", [("need_repairs", "Repairs"), ("need_bedding", "Bedding"),
                             ("need_cooking_items", "Cooking items"), ("need_water", "Water"),
                             ("need_sanitation", "Sanitation")]),
    ]),
    ("3. Livelihood & Income", [
        (None, [("previous_job_business", "Previous job / business"),
                ("tools_equipment_lost", "Tools/equipment lost"),
                ("unable_to_work_currently", "Unable to work currently")]),
        ("Needs to restart livelihood", [("restart_tools", "Tools"), ("restart_materials", "Materials"),
                                         ("restart_capital", "Capital"), ("restart_training", "Training")]),
    ]),
    ("4. Food & Essential Supplies", [
        (None, [("enough_daily_food", "Enough daily food?"),
                ("clean_drinking_water_available", "Clean drinking water available")]),
        ("Needs", [("need_dry_rations", "Dry rations"), ("need_hygiene_items", "Hygiene items"),
                   ("need_medicine", "Medicine"), ("need_clothing", "Clothing")]),
    ]),
    ("5. Children & Schooling", [
        (None, [("children_attending_school_before_flood", "Children attending school before flood"),
                ("lost_books_uniforms_supplies", "Lost books/uniforms/school supplies"),
                ("school_transport_affected", "School transport affected"),
                ("issues_returning_to_school", "Issues returning to school")]),
    ]),
    ("6. Health & Well-Being", [
        (None, [("illnesses_after_flood", "Any illnesses after flood?"),
                ("on_regular_medication", "On regular medication")]),
        ("Emotional stress observed in", [("emotional_stress_adults", "Adults"),
                                          ("emotional_stress_children", "Children")]),
    ]),
    ("7. Support Received So Far", [
        (None, [("support_government", "Government assistance"),
                ("support_ngo_charity", "NGO/charity support"),
                ("support_community_relatives", "Community/relatives support"),
                ("support_none", "No support received yet")]),
    ]),
    ("8. Priority Needs (Top 3)", [
        (None, [("priority_1", "Priority 1"), ("priority_2", "Priority 2"),
                ("priority_3", "Priority 3"), ("notes", "Extra notes (optional)")]),
    ]),
]


def new_draft() -> AssessmentDraft:
    return AssessmentDraft()


def living_label(value: str) -> str:
    return dict(LIVING_OPTIONS).get(value, "-")


def set_support(draft: AssessmentDraft, key: str, value: bool) -> AssessmentDraft:
    """
    Update one support flag and keep the group consistent in a single transition:
    "none" clears the three support sources, any source clears "none".
    """
    if key != SUPPORT_NONE and key not in SUPPORT_FIELDS:
        raise KeyError(f"not a support field: {key}")
    changes: Dict[str, Any] = {key: bool(value)}
    if value and key == SUPPORT_NONE:
        changes.update({k: False for k in SUPPORT_FIELDS})
    elif value:
        changes[SUPPORT_NONE] = False
    return replace(draft, **changes)


def set_field(draft: AssessmentDraft, key: str, value: Any) -> AssessmentDraft:
    """Return a copy of the draft with one field replaced."""
    if key not in FIELD_NAMES:
        raise KeyError(f"unknown assessment field: {key}")
    if key == SUPPORT_NONE or key in SUPPORT_FIELDS:
        return set_support(draft, key, value)
    return replace(draft, **{key: value})
