from typing import Callable, List, Tuple

from relief.draft import AssessmentDraft

MAX_TAGS = 10

# Evaluated in order; when more than MAX_TAGS hold, the later ones are dropped.
TAG_RULES: List[Tuple[str, Callable[[AssessmentDraft], bool]]] = [
    ("Structural damage", lambda d: d.house_structurally_damaged),
    ("Furniture lost", lambda d: d.furniture_lost),
    ("Needs water", lambda d: d.need_water),
    ("Needs sanitation", lambda d: d.need_sanitation),
    ("Needs medicine", lambda d: d.need_medicine),
    ("Needs dry rations", lambda d: d.need_dry_rations),
    ("No support yet", lambda d: d.support_none),
    ("Unable to work", lambda d: d.unable_to_work_currently),
    ("Children <5", lambda d: d.vulnerable_children_u5),
    ("Elderly", lambda d: d.vulnerable_elderly),
    ("Pregnant/Lactating", lambda d: d.vulnerable_pregnant_lactating),
    ("In temporary shelter", lambda d: d.living_status == "SHELTER"),
    ("Not enough food", lambda d: d.enough_daily_food == "NO"),
]


def summary_tags(draft: AssessmentDraft) -> List[str]:
    out = [label for label, applies in TAG_RULES if applies(draft)]
    return out[:MAX_TAGS]
