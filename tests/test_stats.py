import pytest

from core.config import ClinicalConfig, NursingConfig
from core.models import Assignment, DaySchedule, RosterResult, StaffStats
from exceptions.custom_errors import AssignmentNotFoundError, UnknownStaffError
from scheduler.builder import generate_roster
from scheduler.editor import apply_manual_edit
from scheduler.extractor import extract_schedule_and_summary
from scheduler.profiles import ClinicalProfile, NursingProfile
from scheduler.stats import aggregate_stats, count_unfilled, fitness_of, quota_deviation

CLINICAL = ClinicalConfig(year=2024, month=1, max_retries=3, seed=5)


def _week():
    # 2024-01-05 is a Friday, 06 Saturday, 07 Sunday
    return [
        DaySchedule(
            day=5,
            weekday=4,
            assignments=(
                Assignment(5, "ward", "x", "X"),
                Assignment(5, "er", "y", "Y", is_emergency=True),
            ),
        ),
        DaySchedule(
            day=6,
            weekday=5,
            assignments=(Assignment(6, "ward", "y", "Y"), Assignment.empty(6, "er", True)),
            is_weekend=True,
        ),
        DaySchedule(
            day=7,
            weekday=6,
            assignments=(Assignment(7, "ward", "x", "X"),),
            is_weekend=True,
        ),
        DaySchedule(
            day=8,
            weekday=0,
            assignments=(Assignment(8, "ward", "z", "Z"),),
            is_holiday=True,
        ),
    ]


# == Aggregation ==
def test_aggregate_stats_counts_categories():
    stats = {s.staff_id: s for s in aggregate_stats(_week(), ["x", "y", "w"])}

    assert stats["x"] == StaffStats("x", 2, 2, 0, 1, 0, 1)
    assert stats["y"] == StaffStats("y", 2, 1, 1, 1, 1, 0)
    assert stats["w"] == StaffStats("w")
    assert stats["z"].total_shifts == 1
    assert "EMPTY" not in stats


def test_aggregate_stats_is_idempotent():
    schedule = _week()
    assert aggregate_stats(schedule, ["x"]) == aggregate_stats(schedule, ["x"])


def test_holidays_count_as_weekend_when_asked():
    plain = {s.staff_id: s for s in aggregate_stats(_week())}
    clinical = {s.staff_id: s for s in aggregate_stats(_week(), holidays_as_weekend=True)}

    assert plain["z"].weekend_shifts == 0
    assert clinical["z"].weekend_shifts == 1


def test_unfilled_and_fitness():
    assert count_unfilled(_week()) == 1
    assert fitness_of(2, 7) == 20007
    assert fitness_of(0, 0) == 0


def test_quota_deviation_per_profile(make_staff):
    staff = {
        "x": make_staff("x", quota_service=3, quota_emergency=1),
        "y": make_staff("y", quota_service=1, quota_emergency=1),
    }
    stats = aggregate_stats(_week(), ["x", "y"])

    # clinical: x |3-2| + |1-0|, y |1-1| + |1-1|
    assert quota_deviation(stats, staff, ClinicalProfile(CLINICAL)) == 2
    # nursing: x |3-2|, y |1-2|
    assert quota_deviation(stats, staff, NursingProfile(NursingConfig(2024, 1))) == 2


# == Manual edit ==
@pytest.fixture
def generated(clinical_team):
    staff, slots = clinical_team
    return staff, slots, generate_roster(staff, slots, CLINICAL)


def test_manual_edit_replaces_and_recomputes(generated):
    staff, slots, result = generated
    target = next(a for a in result.day(10).assignments if not a.is_empty)
    replacement = next(
        s for s in staff if s.is_active and s.id not in result.day(10).staff_ids and s.tier in (1, 2)
    )

    edited = apply_manual_edit(
        result, 10, target.slot_type_id, target.staff_id, replacement.id, staff, slots, CLINICAL
    )

    new = next(a for a in edited.day(10).assignments if a.staff_id == replacement.id)
    assert new.slot_type_id == target.slot_type_id
    assert new.is_emergency == target.is_emergency
    assert target.staff_id not in edited.day(10).staff_ids
    assert edited.stats_for(replacement.id).total_shifts == result.stats_for(replacement.id).total_shifts + 1
    assert any(line.startswith("Manual edit on day 10") for line in edited.logs)
    assert result.day(10) != edited.day(10)


def test_manual_edit_can_clear_a_position(generated):
    staff, slots, result = generated
    target = next(a for a in result.day(3).assignments if not a.is_empty)

    edited = apply_manual_edit(
        result, 3, target.slot_type_id, target.staff_id, None, staff, slots, CLINICAL
    )

    assert edited.unfilled_slots == result.unfilled_slots + 1


def test_manual_edit_reports_back_to_back(make_staff, make_slot):
    staff = [make_staff("x"), make_staff("y")]
    slots = [make_slot("ward")]
    config = ClinicalConfig(year=2024, month=1, num_days=3, max_retries=5, seed=1)
    result = generate_roster(staff, slots, config)
    day2 = result.day(2).assignments[0]
    other = "y" if day2.staff_id == "x" else "x"

    edited = apply_manual_edit(result, 2, "ward", day2.staff_id, other, staff, slots, config)

    assert any("consecutive days" in line for line in edited.logs)


def test_manual_edit_errors(generated):
    staff, slots, result = generated
    target = next(a for a in result.day(4).assignments if not a.is_empty)

    with pytest.raises(AssignmentNotFoundError):
        apply_manual_edit(result, 4, target.slot_type_id, "nobody", "a1", staff, slots, CLINICAL)
    with pytest.raises(AssignmentNotFoundError):
        apply_manual_edit(result, 40, target.slot_type_id, target.staff_id, "a1", staff, slots, CLINICAL)
    with pytest.raises(UnknownStaffError):
        apply_manual_edit(result, 4, target.slot_type_id, target.staff_id, "ghost", staff, slots, CLINICAL)


def test_manual_edit_finds_days_by_number(make_staff, make_slot):
    staff = [make_staff("a"), make_staff("b")]
    slots = [make_slot("ward")]
    # a schedule holding only days 2 and 3
    partial = RosterResult(
        schedule=(
            DaySchedule(day=2, weekday=1, assignments=(Assignment(2, "ward", "a", "A"),)),
            DaySchedule(day=3, weekday=2, assignments=(Assignment(3, "ward", "b", "B"),)),
        ),
        unfilled_slots=0,
        stats=(),
    )

    edited = apply_manual_edit(partial, 3, "ward", "b", "a", staff, slots, CLINICAL)

    assert [ds.day for ds in edited.schedule] == [2, 3]
    assert edited.day(3).staff_ids == {"a"}
    assert edited.day(2) == partial.day(2)
    assert any("consecutive days 2 and 3" in line for line in edited.logs)
    with pytest.raises(AssignmentNotFoundError):
        apply_manual_edit(partial, 1, "ward", "a", "b", staff, slots, CLINICAL)
    with pytest.raises(KeyError):
        partial.day(1)


# == Tables ==
def test_extract_schedule_and_summary(generated):
    staff, slots, result = generated

    schedule_df, summary_df, metrics = extract_schedule_and_summary(result, staff, slots, CLINICAL)

    assert list(schedule_df.index) == [s.id for s in staff]
    assert len(schedule_df.columns) == 31
    assert schedule_df.columns[0] == "Mon 2024-01-01"
    assert (schedule_df.loc["b3", ["Wed 2024-01-10", "Thu 2024-01-11"]] == "OFF").all()
    assert set(summary_df["id"]) == {s.id for s in staff if s.is_active}
    assert summary_df["deviation"].sum() == result.deviation
    assert metrics["Unfilled Slots"] == result.unfilled_slots
