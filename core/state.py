import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Set, Tuple

from core.day_context import DayInfo
from core.models import Assignment, SlotType, StaffMember, StaffStats


@dataclass
class RosterContext:
    """
    Everything about a generation run that does not change between attempts.
    Built once by `scheduler.setup.setup_context` and shared by all attempts.
    """

    config: Any
    """The `ClinicalConfig` or `NursingConfig` of the run."""
    profile: Any
    """The `RosterProfile` implementing the run's rule set."""
    staff: List[StaffMember]
    """Active staff, in input order."""
    staff_by_id: Dict[str, StaffMember]
    """Active staff keyed by id."""
    slot_types: List[SlotType]
    """Slot types in input order."""
    slots_by_id: Dict[str, SlotType]
    """Slot types keyed by id."""
    ordered_slots: List[SlotType]
    """Slot types sorted by descending difficulty."""
    days: Dict[int, DayInfo]
    """Day context for days 1..N."""
    num_days: int
    """Length of the horizon."""
    max_layer: int
    """Largest `max_daily_count` over all slot types."""
    flexibility: Dict[str, int]
    """Number of slot types each staff member is eligible for."""
    eligible_counts: Dict[str, int]
    """Number of staff eligible for each slot type, keyed by slot id."""
    roommates: Dict[str, Tuple[str, ...]]
    """Staff id to the ids of their roommates."""
    bridge: Any
    """`PreviousMonthBridge` answering lookups for days <= 0."""
    rules: Any = None
    """`ConstraintManager` holding the filter rules of the profile."""


@dataclass
class StaffTally:
    """Running counters for one staff member during an attempt."""

    total: int = 0
    service: int = 0
    emergency: int = 0
    weekend: int = 0
    saturday: int = 0
    sunday: int = 0

    def record(self, is_emergency: bool, weekend: bool, saturday: bool, sunday: bool):
        self.total += 1
        if is_emergency:
            self.emergency += 1
        else:
            self.service += 1
        if weekend:
            self.weekend += 1
        if saturday:
            self.saturday += 1
        if sunday:
            self.sunday += 1

    def freeze(self, staff_id: str) -> StaffStats:
        return StaffStats(
            staff_id=staff_id,
            total_shifts=self.total,
            service_shifts=self.service,
            emergency_shifts=self.emergency,
            weekend_shifts=self.weekend,
            saturday_shifts=self.saturday,
            sunday_shifts=self.sunday,
        )


@dataclass
class AttemptState:
    """
    Mutable state of one greedy attempt. Never shared between attempts.
    """

    rng: random.Random
    """Random source of the attempt."""
    assignments: Dict[int, List[Assignment]]
    """Assignments made so far, per day."""
    staff_on_day: Dict[int, Set[str]]
    """Ids of staff working each day."""
    tallies: Dict[str, StaffTally]
    """Shift counters per staff id."""
    stress: Dict[str, float] = field(default_factory=dict)
    """Fatigue stress per staff id."""
    unfilled: int = 0
    """Number of EMPTY placements."""

    @classmethod
    def fresh(cls, num_days: int, staff: List[StaffMember], rng: random.Random) -> "AttemptState":
        return cls(
            rng=rng,
            assignments={d: [] for d in range(1, num_days + 1)},
            staff_on_day={d: set() for d in range(1, num_days + 1)},
            tallies={s.id: StaffTally() for s in staff},
            stress={s.id: 0.0 for s in staff},
        )

    def slot_count(self, day: int, slot_id: str) -> int:
        """Placements (EMPTY included) for a slot on a day."""
        return sum(1 for a in self.assignments[day] if a.slot_type_id == slot_id)

    def staffed_count(self, day: int) -> int:
        return len(self.staff_on_day[day])
