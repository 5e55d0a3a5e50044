import calendar
from typing import Tuple

from utils.constants import DAY_PRIORITY

WEEKDAY_LABELS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

THURSDAY, FRIDAY, SATURDAY, SUNDAY = 3, 4, 5, 6


def days_in_month(year: int, month: int) -> int:
    """Number of days in the given month."""
    return calendar.monthrange(year, month)[1]


def weekday_of(year: int, month: int, day: int) -> int:
    """Weekday of a day of month, 0 = Monday."""
    return calendar.weekday(year, month, day)


def weekday_label(weekday: int) -> str:
    return WEEKDAY_LABELS[weekday]


def previous_month(year: int, month: int) -> Tuple[int, int]:
    """(year, month) of the month before the given one."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def day_priority(weekday: int, is_holiday: bool) -> int:
    """
    Difficulty of a calendar day for ordering the greedy passes.
    Holidays first, then Saturday, Sunday, Friday and Thursday.
    """
    if is_holiday:
        return DAY_PRIORITY["holiday"]
    match weekday:
        case 5:
            return DAY_PRIORITY["saturday"]
        case 6:
            return DAY_PRIORITY["sunday"]
        case 4:
            return DAY_PRIORITY["friday"]
        case 3:
            return DAY_PRIORITY["thursday"]
        case _:
            return DAY_PRIORITY["other"]
