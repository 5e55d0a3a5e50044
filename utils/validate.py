from typing import List, Sequence

from core.models import SlotType, StaffMember


def collect_input_warnings(
    staff: Sequence[StaffMember],
    slot_types: Sequence[SlotType],
    profile,
    num_days: int,
) -> List[str]:
    """
    Report input conflicts that generation tolerates rather than rejects.

    - Days that are both requested and off: the off day wins, since the hard rules
      run before scoring.
    - Days outside 1..num_days: ignored.
    - Slot types nobody is eligible for: their minimums stay EMPTY.
    - Slot types whose minimum is above their maximum: only the maximum is used.

    Args:
        staff (Sequence[StaffMember]): Staff records (inactive ones are skipped).
        slot_types (Sequence[SlotType]): Slot type records.
        profile: The run's RosterProfile, used for eligibility.
        num_days (int): Length of the horizon.

    Returns:
        List[str]: Warning lines, empty when nothing looks off.
    """
    warnings = []
    active = [s for s in staff if s.is_active]

    for person in active:
        overlap = person.off_days & person.requested_days
        if overlap:
            days = ", ".join(str(d) for d in sorted(overlap))
            warnings.append(
                f"⚠️ {person.name}: day(s) {days} are both requested and off; off days win."
            )
        outside = sorted(
            d for d in person.off_days | person.requested_days if not 1 <= d <= num_days
        )
        if outside:
            days = ", ".join(str(d) for d in outside)
            warnings.append(f"⚠️ {person.name}: day(s) {days} fall outside 1..{num_days} and are ignored.")

    for slot in slot_types:
        if not any(profile.is_eligible(p, slot) for p in active):
            warnings.append(
                f"⚠️ Slot type '{slot.name}' has no eligible staff; its minimum will stay EMPTY."
            )
        if slot.min_daily_count > slot.max_daily_count:
            warnings.append(
                f"⚠️ Slot type '{slot.name}': minimum {slot.min_daily_count} is above "
                f"maximum {slot.max_daily_count}; only {slot.max_daily_count} position(s) are staffed."
            )
    return warnings
