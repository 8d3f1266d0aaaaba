from dataclasses import replace

import pytest

from relief.draft import FIELD_NAMES, AssessmentDraft, new_draft
from relief.payload import OPTIONAL_TEXT_FIELDS, to_backend_payload, validate_for_submission

LIVING_KEYS = ("living_own_home", "living_relatives_home", "living_temporary_shelter")


def scenario():
    return AssessmentDraft(name="Asha", contact_number="0771234567", living_status="SHELTER",
                           enough_daily_food="NO", priority_1="Water")


def test_scenario_validates():
    assert validate_for_submission(scenario()) is None


@pytest.mark.parametrize("changes,message", [
    ({"name": ""}, "Name is required."),
    ({"name": "   "}, "Name is required."),
    ({"contact_number": ""}, "Contact number is required."),
    ({"living_status": ""}, "Please select where the household is currently living."),
    ({"enough_daily_food": ""}, "Please select whether there is enough daily food."),
])
def test_first_failure_is_reported(changes, message):
    assert validate_for_submission(replace(scenario(), **changes)) == message


def test_name_checked_before_everything_else():
    assert validate_for_submission(new_draft()) == "Name is required."


@pytest.mark.parametrize("status,expected", [
    ("OWN", "living_own_home"),
    ("RELATIVE", "living_relatives_home"),
    ("SHELTER", "living_temporary_shelter"),
])
def test_living_status_expands_to_one_flag(status, expected):
    payload = to_backend_payload(AssessmentDraft(living_status=status))
    assert [k for k in LIVING_KEYS if payload[k]] == [expected]
    assert "living_status" not in payload


def test_unset_living_status_is_all_false():
    payload = to_backend_payload(new_draft())
    assert not any(payload[k] for k in LIVING_KEYS)


def test_blank_optional_text_becomes_none():
    payload = to_backend_payload(AssessmentDraft(notes="   ", priority_2=""))
    for key in OPTIONAL_TEXT_FIELDS:
        assert payload[key] is None
    assert payload["enough_daily_food"] is None


def test_trimming_is_idempotent():
    padded = AssessmentDraft(name="  Asha ", contact_number=" 0771234567\n", priority_1=" Water ",
                             notes="\tcheck roof  ", previous_job_business=" fisher ")
    clean = AssessmentDraft(name="Asha", contact_number="0771234567", priority_1="Water",
                            notes="check roof", previous_job_business="fisher")
    assert to_backend_payload(padded) == to_backend_payload(clean)
    assert to_backend_payload(padded)["notes"] == "check roof"


def test_payload_has_every_backend_field():
    payload = to_backend_payload(scenario())
    expected = (set(FIELD_NAMES) - {"living_status"}) | set(LIVING_KEYS)
    assert set(payload) == expected


@pytest.mark.parametrize("raw,count", [(3, 3), ("4", 4), ("", 0), (None, 0), ("abc", 0), (-2, 0)])
def test_family_members_coerced(raw, count):
    assert to_backend_payload(AssessmentDraft(family_members=raw))["family_members"] == count


def test_booleans_are_real_bools():
    payload = to_backend_payload(AssessmentDraft(need_water=1))
    assert payload["need_water"] is True
    assert payload["need_bedding"] is False
