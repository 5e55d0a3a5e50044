from typing import Dict, Iterable, Optional, Sequence, Tuple

from core.models import DaySchedule, RosterResult, StaffMember, StaffStats
from core.state import StaffTally
from utils.constants import UNFILLED_FITNESS_WEIGHT
from utils.day_utils import SATURDAY, SUNDAY


def aggregate_stats(
    schedule: Sequence[DaySchedule],
    staff_ids: Iterable[str] = (),
    holidays_as_weekend: bool = False,
) -> Tuple[StaffStats, ...]:
    """
    Per-staff shift counts for a schedule. Pure and idempotent.

    Staff listed in `staff_ids` always get an entry, in that order; anyone else found in
    the schedule is appended. EMPTY assignments are not counted.

    Args:
        schedule: Day schedules to reduce.
        staff_ids: Staff ids to report even when they have no shifts.
        holidays_as_weekend: Count holidays as weekend shifts (clinical rosters).

    Returns:
        Tuple[StaffStats, ...]: One record per staff member.
    """
    tallies: Dict[str, StaffTally] = {sid: StaffTally() for sid in staff_ids}
    for ds in schedule:
        weekend = ds.is_weekend or (holidays_as_weekend and ds.is_holiday)
        for a in ds.assignments:
            if a.is_empty:
                continue
            tally = tallies.setdefault(a.staff_id, StaffTally())
            tally.record(
                a.is_emergency, weekend, ds.weekday == SATURDAY, ds.weekday == SUNDAY
            )
    return tuple(t.freeze(sid) for sid, t in tallies.items())


def count_unfilled(schedule: Sequence[DaySchedule]) -> int:
    """Number of EMPTY assignments."""
    return sum(1 for ds in schedule for a in ds.assignments if a.is_empty)


def quota_deviation(stats: Iterable[StaffStats], staff_by_id: Dict[str, StaffMember], profile) -> int:
    """Sum of |target - actual| over staff and quota categories."""
    total = 0
    for s in stats:
        person = staff_by_id.get(s.staff_id)
        if person is not None:
            total += profile.quota_deviation(person, s)
    return total


def fitness_of(unfilled: int, deviation: int) -> float:
    return unfilled * UNFILLED_FITNESS_WEIGHT + deviation


def summarize(
    schedule: Sequence[DaySchedule],
    ctx,
    logs: Tuple[str, ...] = (),
    fitness: Optional[float] = None,
) -> RosterResult:
    """Build a RosterResult for a schedule, recomputing stats, unfilled slots and deviation."""
    schedule = tuple(schedule)
    stats = aggregate_stats(
        schedule, ctx.staff_by_id.keys(), ctx.profile.holidays_count_as_weekend
    )
    return RosterResult(
        schedule=schedule,
        unfilled_slots=count_unfilled(schedule),
        stats=stats,
        logs=tuple(logs),
        fitness=fitness,
        deviation=quota_deviation(stats, ctx.staff_by_id, ctx.profile),
    )
