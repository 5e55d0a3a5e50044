from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple

from utils.constants import ANY_GROUP, DEFAULT_GROUP, EMPTY_STAFF_ID, EMPTY_STAFF_NAME

"""
Immutable records passed into and returned from the roster engine.
"""


@dataclass(frozen=True)
class StaffMember:
    """A person who can be placed into duty slots."""

    id: str
    """Unique staff identifier."""
    name: str
    """Display name, copied into every assignment."""
    tier: int
    """Seniority level; 1 is the most senior."""
    group: str = DEFAULT_GROUP
    """Clinical affiliation matched against `SlotType.required_group`."""
    quota_service: int = 0
    """Target number of regular shifts (nursing: target number of all shifts)."""
    quota_emergency: int = 0
    """Target number of emergency shifts (clinical only)."""
    weekend_limit: int = 0
    """Maximum number of weekend shifts in the month."""
    off_days: FrozenSet[int] = frozenset()
    """Days of month the person must not work."""
    requested_days: FrozenSet[int] = frozenset()
    """Days of month the person would like to work."""
    is_active: bool = True
    """Inactive staff are dropped before generation."""
    unit: Optional[str] = None
    """Nursing unit; the nursing affiliation."""
    specialty: Optional[str] = None
    """Nursing specialty name, matched against unit constraints."""
    room: Optional[str] = None
    """Shared room; staff with the same room never work adjacent days."""

    @property
    def has_specialty(self) -> bool:
        return bool(self.specialty and self.specialty.strip())


@dataclass(frozen=True)
class SlotType:
    """A recurring daily duty with a staffing range and an eligibility set."""

    id: str
    name: str
    min_daily_count: int
    max_daily_count: int
    allowed_tiers: FrozenSet[int] = frozenset()
    """Tiers eligible for this slot (clinical)."""
    allowed_units: FrozenSet[str] = frozenset()
    """Units eligible for this slot (nursing); empty admits everyone."""
    priority_tiers: FrozenSet[int] = frozenset()
    """Tiers that get a scoring bonus on this slot."""
    required_group: Optional[str] = None
    """Required affiliation; `None` or "Any" means unrestricted."""
    is_emergency: bool = False

    @property
    def restricts_group(self) -> bool:
        return bool(self.required_group) and self.required_group != ANY_GROUP


@dataclass(frozen=True)
class Assignment:
    """A staff member (or the EMPTY sentinel) placed into one slot on one day."""

    day: int
    slot_type_id: str
    staff_id: str
    staff_name: str
    tier: int = 0
    group: str = ""
    unit: Optional[str] = None
    is_emergency: bool = False

    @property
    def is_empty(self) -> bool:
        return self.staff_id == EMPTY_STAFF_ID

    @classmethod
    def for_staff(cls, day: int, slot: SlotType, person: StaffMember) -> "Assignment":
        return cls(
            day=day,
            slot_type_id=slot.id,
            staff_id=person.id,
            staff_name=person.name,
            tier=person.tier,
            group=person.group,
            unit=person.unit,
            is_emergency=slot.is_emergency,
        )

    @classmethod
    def empty(cls, day: int, slot_type_id: str, is_emergency: bool = False) -> "Assignment":
        return cls(
            day=day,
            slot_type_id=slot_type_id,
            staff_id=EMPTY_STAFF_ID,
            staff_name=EMPTY_STAFF_NAME,
            is_emergency=is_emergency,
        )


@dataclass(frozen=True)
class DaySchedule:
    day: int
    weekday: int
    """0 = Monday ... 6 = Sunday."""
    assignments: Tuple[Assignment, ...] = ()
    is_weekend: bool = False
    is_holiday: bool = False

    @property
    def staff_ids(self) -> FrozenSet[str]:
        return frozenset(a.staff_id for a in self.assignments if not a.is_empty)

    @property
    def has_empty(self) -> bool:
        return any(a.is_empty for a in self.assignments)


@dataclass(frozen=True)
class StaffStats:
    staff_id: str
    total_shifts: int = 0
    service_shifts: int = 0
    emergency_shifts: int = 0
    weekend_shifts: int = 0
    saturday_shifts: int = 0
    sunday_shifts: int = 0


@dataclass(frozen=True)
class RosterResult:
    """Outcome of one generation run (or one attempt inside it)."""

    schedule: Tuple[DaySchedule, ...]
    unfilled_slots: int
    stats: Tuple[StaffStats, ...]
    logs: Tuple[str, ...] = ()
    fitness: Optional[float] = None
    deviation: int = field(default=0, compare=False)
    """Total quota deviation, kept for attempt selection."""

    def position_of(self, day: int) -> Optional[int]:
        """Index of a day of month in `schedule`, or None when the roster does not hold it."""
        if 1 <= day <= len(self.schedule) and self.schedule[day - 1].day == day:
            return day - 1
        return next((i for i, ds in enumerate(self.schedule) if ds.day == day), None)

    def day(self, day: int) -> DaySchedule:
        pos = self.position_of(day)
        if pos is None:
            raise KeyError(f"Day {day} is not part of the roster")
        return self.schedule[pos]

    def stats_for(self, staff_id: str) -> Optional[StaffStats]:
        return next((s for s in self.stats if s.staff_id == staff_id), None)
