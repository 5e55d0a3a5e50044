from core.config import ClinicalConfig, NursingConfig
from scheduler.builder import generate_roster
from scheduler.profiles import ClinicalProfile, NursingProfile
from utils.validate import collect_input_warnings

CLINICAL = ClinicalProfile(ClinicalConfig(year=2024, month=1))


def test_clean_input_has_no_warnings(clinical_team):
    staff, slots = clinical_team
    assert collect_input_warnings(staff, slots, CLINICAL, 31) == []


def test_requested_off_overlap_is_reported(make_staff, make_slot):
    staff = [make_staff("x", off_days={3, 4}, requested_days={4, 9})]

    warnings = collect_input_warnings(staff, [make_slot("ward")], CLINICAL, 31)

    assert len(warnings) == 1
    assert "day(s) 4" in warnings[0]
    assert "off days win" in warnings[0]


def test_days_outside_horizon_are_reported(make_staff, make_slot):
    staff = [make_staff("x", requested_days={20, 31})]

    warnings = collect_input_warnings(staff, [make_slot("ward")], CLINICAL, 28)

    assert any("31" in w and "outside 1..28" in w for w in warnings)


def test_slot_without_eligible_staff_is_reported(make_staff, make_slot):
    staff = [make_staff("x", 1), make_staff("off", 3, is_active=False)]

    warnings = collect_input_warnings(staff, [make_slot("juniors", tiers=(3,))], CLINICAL, 31)

    assert warnings == ["⚠️ Slot type 'Juniors' has no eligible staff; its minimum will stay EMPTY."]


def test_min_above_max_is_reported(make_staff, make_slot):
    warnings = collect_input_warnings([make_staff("x")], [make_slot("ward", 2, 1)], CLINICAL, 31)
    assert any("minimum 2 is above maximum 1" in w for w in warnings)


def test_nursing_juniors_are_eligible_everywhere(make_staff, make_slot):
    profile = NursingProfile(NursingConfig(year=2024, month=1))
    staff = [make_staff("j1", 3, unit="ER")]

    warnings = collect_input_warnings(staff, [make_slot("icu", tiers=(), allowed_units={"ICU"})], profile, 31)

    assert warnings == []


def test_warnings_reach_the_roster_logs(make_staff, make_slot):
    staff = [make_staff("x", off_days={2}, requested_days={2})]
    config = ClinicalConfig(year=2024, month=1, num_days=3, max_retries=2, seed=1)

    result = generate_roster(staff, [make_slot("ward")], config)

    assert any("off days win" in line for line in result.logs)
    assert "x" not in result.day(2).staff_ids
