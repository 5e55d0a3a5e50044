import pytest

from core.config import ClinicalConfig, NursingConfig, UnitConstraint
from core.day_context import build_day_context
from exceptions.custom_errors import InvalidConfigError
from utils.constants import DAY_PRIORITY


def test_january_2024_calendar():
    days = build_day_context(ClinicalConfig(year=2024, month=1))

    assert len(days) == 31
    assert days[1].weekday == 0  # Monday
    assert days[6].is_saturday and days[6].is_weekend
    assert days[7].is_sunday and days[7].is_weekend
    assert days[4].is_thursday and not days[4].is_weekend
    assert not days[8].is_weekend


def test_february_length_and_leap_year():
    assert len(build_day_context(ClinicalConfig(year=2023, month=2))) == 28
    assert len(build_day_context(ClinicalConfig(year=2024, month=2))) == 29


def test_holidays_rank_above_weekends():
    days = build_day_context(ClinicalConfig(year=2024, month=1, holidays=frozenset({1})))

    assert days[1].is_holiday
    assert days[1].priority == DAY_PRIORITY["holiday"]
    assert days[6].priority == DAY_PRIORITY["saturday"]
    assert days[7].priority == DAY_PRIORITY["sunday"]
    assert days[5].priority == DAY_PRIORITY["friday"]
    assert days[4].priority == DAY_PRIORITY["thursday"]
    assert days[2].priority == DAY_PRIORITY["other"]
    assert days[1].priority > days[6].priority > days[7].priority > days[5].priority > days[4].priority


def test_horizon_shorter_than_month():
    days = build_day_context(ClinicalConfig(year=2024, month=1, num_days=5))
    assert sorted(days) == [1, 2, 3, 4, 5]


@pytest.mark.parametrize(
    "config",
    [
        ClinicalConfig(year=2024, month=13),
        ClinicalConfig(year=2024, month=0),
        ClinicalConfig(year=2024, month=2, num_days=30),
        ClinicalConfig(year=2024, month=2, num_days=0),
    ],
)
def test_impossible_calendars_are_rejected(config):
    with pytest.raises(InvalidConfigError):
        build_day_context(config)


def test_unit_constraints_block_other_weekdays():
    config = NursingConfig(
        year=2024,
        month=1,
        unit_constraints=(UnitConstraint(" Endo ", frozenset({0, 2})),),
    )
    days = build_day_context(config)

    assert days[1].allows_unit("Endo")  # Monday
    assert days[3].allows_unit("Endo")  # Wednesday
    assert not days[2].allows_unit("Endo")  # Tuesday
    assert not days[2].allows_unit(" Endo")
    assert days[2].allows_unit("ICU")
    assert days[2].allows_unit(None)


def test_clinical_config_ignores_unit_permissions():
    days = build_day_context(ClinicalConfig(year=2024, month=1))
    assert all(not info.blocked_units for info in days.values())
