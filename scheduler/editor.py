import logging
from dataclasses import replace
from typing import Optional, Sequence

from core.config import RosterConfig
from core.models import Assignment, RosterResult, SlotType, StaffMember
from core.run_log import RunLog
from exceptions.custom_errors import AssignmentNotFoundError, UnknownStaffError
from scheduler.setup import setup_context
from scheduler.stats import summarize
from utils.constants import EMPTY_STAFF_ID

logger = logging.getLogger(__name__)


def apply_manual_edit(
    result: RosterResult,
    day: int,
    slot_type_id: str,
    old_staff_id: str,
    new_staff_id: Optional[str],
    staff: Sequence[StaffMember],
    slot_types: Sequence[SlotType],
    config: RosterConfig,
) -> RosterResult:
    """
    Replace one assignment of a finished roster and recompute its stats.

    The first assignment on `day` matching (`slot_type_id`, `old_staff_id`) is replaced by
    `new_staff_id`, or cleared to EMPTY when `new_staff_id` is None or the EMPTY sentinel.
    The emergency flag of the slot is kept. Hard rules are not re-checked; adjacency
    conflicts introduced by the edit are reported in the logs.

    Raises:
        AssignmentNotFoundError: No such assignment on that day.
        UnknownStaffError: `new_staff_id` is not a known staff member.
    """
    pos = result.position_of(day)
    if pos is None:
        raise AssignmentNotFoundError(f"Day {day} is not part of the roster.")

    ds = result.schedule[pos]
    idx = next(
        (
            i
            for i, a in enumerate(ds.assignments)
            if a.slot_type_id == slot_type_id and a.staff_id == old_staff_id
        ),
        None,
    )
    if idx is None:
        raise AssignmentNotFoundError(
            f"No assignment of '{old_staff_id}' to slot type '{slot_type_id}' on day {day}."
        )

    current = ds.assignments[idx]
    staff_by_id = {s.id: s for s in staff}
    if new_staff_id is None or new_staff_id == EMPTY_STAFF_ID:
        updated = Assignment.empty(day, slot_type_id, current.is_emergency)
    else:
        person = staff_by_id.get(new_staff_id)
        if person is None:
            raise UnknownStaffError(f"Unknown staff id '{new_staff_id}'.")
        updated = replace(
            current,
            staff_id=person.id,
            staff_name=person.name,
            tier=person.tier,
            group=person.group,
            unit=person.unit,
        )

    assignments = list(ds.assignments)
    assignments[idx] = updated
    days = list(result.schedule)
    days[pos] = replace(ds, assignments=tuple(assignments))

    log = RunLog(result.logs)
    log.add(f"Manual edit on day {day}: {current.staff_name} -> {updated.staff_name} ({slot_type_id}).")
    if not updated.is_empty:
        by_day = {d.day: d for d in days}
        for neighbour in (day - 1, day + 1):
            if neighbour in by_day and updated.staff_id in by_day[neighbour].staff_ids:
                log.add(f"⚠️ {updated.staff_name} now works on consecutive days {min(day, neighbour)} and {max(day, neighbour)}.")

    ctx = setup_context(staff, slot_types, config)
    logger.info(f"✏️ Manual edit applied on day {day} ({slot_type_id})")
    return summarize(days, ctx, logs=log.snapshot())
