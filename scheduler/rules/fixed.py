from typing import List, Optional, Sequence

from core.models import DaySchedule

"""
This module contains the continuity rules that reach into the previous month's schedule (the bridge).
"""


class PreviousMonthBridge:
    """
    Read-only view of the tail of the previous month's roster.

    Day 0 of the current month maps to the last day of the previous schedule,
    day -1 to the one before, and so on.
    """

    def __init__(self, previous_schedule: Optional[Sequence[DaySchedule]] = None):
        self.days: List[DaySchedule] = list(previous_schedule or [])

    @property
    def active(self) -> bool:
        return bool(self.days)

    def day_schedule(self, day: int) -> Optional[DaySchedule]:
        idx = len(self.days) + day - 1
        if day > 0 or idx < 0:
            return None
        return self.days[idx]

    def worked(self, day: int, staff_id: str) -> bool:
        """Whether `staff_id` held a non-EMPTY assignment on a day <= 0."""
        ds = self.day_schedule(day)
        return ds is not None and staff_id in ds.staff_ids


def bridge_adjacency_violations(schedule: Sequence[DaySchedule], bridge: PreviousMonthBridge) -> List[str]:
    """
    Staff ids that work day 1 of the new month and also worked the last day of the previous one.

    :param schedule: Days 1..N of the new month.
    :param bridge: Previous-month bridge.
    """
    if not schedule or not bridge.active:
        return []
    return sorted(sid for sid in schedule[0].staff_ids if bridge.worked(0, sid))
