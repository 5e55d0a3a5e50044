from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional

from core.config import NursingConfig, RosterConfig
from exceptions.custom_errors import InvalidConfigError
from utils.day_utils import (
    FRIDAY,
    SATURDAY,
    SUNDAY,
    THURSDAY,
    day_priority,
    days_in_month,
    weekday_of,
)


@dataclass(frozen=True)
class DayInfo:
    """Calendar facts about one day of the roster month."""

    day: int
    weekday: int
    """0 = Monday ... 6 = Sunday."""
    is_weekend: bool
    is_holiday: bool = False
    blocked_units: FrozenSet[str] = frozenset()
    """Units or specialties whose day-of-week permission excludes this day."""

    @property
    def is_thursday(self) -> bool:
        return self.weekday == THURSDAY

    @property
    def is_friday(self) -> bool:
        return self.weekday == FRIDAY

    @property
    def is_saturday(self) -> bool:
        return self.weekday == SATURDAY

    @property
    def is_sunday(self) -> bool:
        return self.weekday == SUNDAY

    @property
    def priority(self) -> int:
        return day_priority(self.weekday, self.is_holiday)

    def allows_unit(self, unit: Optional[str]) -> bool:
        return not unit or unit.strip() not in self.blocked_units


def resolve_num_days(config: RosterConfig) -> int:
    """Horizon length for a configuration, checked against the calendar."""
    if not 1 <= config.month <= 12:
        raise InvalidConfigError(f"Month must be between 1 and 12, got {config.month}")

    month_length = days_in_month(config.year, config.month)
    if config.num_days is None:
        return month_length
    if not 1 <= config.num_days <= month_length:
        raise InvalidConfigError(
            f"Horizon of {config.num_days} days does not fit {config.year}-{config.month:02d} "
            f"({month_length} days)"
        )
    return config.num_days


def build_day_context(config: RosterConfig) -> Dict[int, DayInfo]:
    """
    Precompute weekday, weekend, holiday and unit-permission facts for every day 1..N.

    The result is shared read-only by every attempt of a generation run.
    """
    num_days = resolve_num_days(config)

    constraints = config.unit_constraints if isinstance(config, NursingConfig) else ()

    days: Dict[int, DayInfo] = {}
    for d in range(1, num_days + 1):
        weekday = weekday_of(config.year, config.month, d)
        blocked = frozenset(
            uc.unit.strip() for uc in constraints if weekday not in uc.allowed_weekdays
        )
        days[d] = DayInfo(
            day=d,
            weekday=weekday,
            is_weekend=weekday in (SATURDAY, SUNDAY),
            is_holiday=d in config.holidays,
            blocked_units=blocked,
        )
    return days
