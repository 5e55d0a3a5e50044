from typing import Dict, Iterable, List, Optional, Sequence

from core.config import RosterConfig
from core.day_context import build_day_context
from core.models import DaySchedule, SlotType, StaffMember
from core.state import RosterContext
from exceptions.custom_errors import InputMismatchError
from scheduler.profiles import RosterProfile, get_profile
from scheduler.rules.fixed import PreviousMonthBridge
from utils.constants import OFF_DAYS_AVAILABILITY_LIMIT, SLOT_DIFFICULTY
from utils.staff_utils import get_active_staff, get_roommates


def check_unique_ids(records: Iterable, label: str):
    """Raise InputMismatchError when two records share an id."""
    seen, dupes = set(), set()
    for r in records:
        if r.id in seen:
            dupes.add(r.id)
        seen.add(r.id)
    if dupes:
        raise InputMismatchError(f"Duplicate {label} ids: {', '.join(sorted(dupes))}")


def compute_flexibility(
    profile: RosterProfile, staff: List[StaffMember], slot_types: List[SlotType]
) -> Dict[str, int]:
    """Number of slot types each staff member is eligible for."""
    return {
        person.id: sum(1 for slot in slot_types if profile.is_eligible(person, slot))
        for person in staff
    }


def count_available(profile: RosterProfile, staff: List[StaffMember], slot: SlotType) -> int:
    """Staff who are eligible for a slot, match its group and are not mostly off."""
    count = 0
    for person in staff:
        if not profile.is_eligible(person, slot):
            continue
        if len(person.off_days) >= OFF_DAYS_AVAILABILITY_LIMIT:
            continue
        if slot.restricts_group and profile.affiliation(person) != slot.required_group:
            continue
        count += 1
    return count


def slot_difficulty(slot: SlotType, available: int) -> int:
    """Harder slots (fewer candidates, higher minimum, priority tiers, emergency) are filled first."""
    score = SLOT_DIFFICULTY["base"] - available * SLOT_DIFFICULTY["per_eligible"]
    score += slot.min_daily_count * SLOT_DIFFICULTY["per_min"]
    if slot.priority_tiers:
        score += SLOT_DIFFICULTY["priority_tiers"]
    if slot.is_emergency:
        score += SLOT_DIFFICULTY["emergency"]
    return score


def setup_context(
    staff: Sequence[StaffMember],
    slot_types: Sequence[SlotType],
    config: RosterConfig,
    previous_schedule: Optional[Sequence[DaySchedule]] = None,
) -> RosterContext:
    """
    Build the static context of a generation run: active staff, day context,
    slot ordering, flexibility, roommates, bridge and the profile's rules.
    """
    check_unique_ids(staff, "staff")
    check_unique_ids(slot_types, "slot type")

    profile = get_profile(config)
    active = get_active_staff(staff)
    slots = list(slot_types)
    days = build_day_context(config)

    eligible_counts = {slot.id: count_available(profile, active, slot) for slot in slots}
    ordered = sorted(
        slots, key=lambda s: slot_difficulty(s, eligible_counts[s.id]), reverse=True
    )

    return RosterContext(
        config=config,
        profile=profile,
        staff=active,
        staff_by_id={s.id: s for s in active},
        slot_types=slots,
        slots_by_id={s.id: s for s in slots},
        ordered_slots=ordered,
        days=days,
        num_days=len(days),
        max_layer=max((s.max_daily_count for s in slots), default=0),
        flexibility=compute_flexibility(profile, active, slots),
        eligible_counts=eligible_counts,
        roommates=get_roommates(active),
        bridge=PreviousMonthBridge(previous_schedule),
        rules=profile.build_rules(),
    )
