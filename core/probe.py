from dataclasses import dataclass, field
from typing import Dict, Optional, Set

from core.day_context import DayInfo
from core.models import SlotType, StaffMember
from core.state import AttemptState, RosterContext, StaffTally


@dataclass
class DayView:
    """Snapshot of one day's partial assignment state, taken before a candidate search."""

    info: DayInfo
    assigned_ids: Set[str]
    affiliation_counts: Dict[str, int]
    yesterday_affiliation_counts: Dict[str, int]
    senior_count: int
    peer_floor: Dict[int, int] = field(default_factory=dict)
    """Per tier, the lowest total among specialty-free peers with unmet quota."""
    junior_floor: Optional[int] = None
    """Lowest total among junior-tier staff, when any exist."""

    @classmethod
    def capture(cls, ctx: RosterContext, state: AttemptState, day: int) -> "DayView":
        profile = ctx.profile
        assigned = state.staff_on_day[day]
        people = [ctx.staff_by_id[sid] for sid in assigned if sid in ctx.staff_by_id]

        yesterday = []
        if day - 1 in state.staff_on_day:
            yesterday = [
                ctx.staff_by_id[sid]
                for sid in state.staff_on_day[day - 1]
                if sid in ctx.staff_by_id
            ]

        view = cls(
            info=ctx.days[day],
            assigned_ids=assigned,
            affiliation_counts=_count_affiliations(profile, people),
            yesterday_affiliation_counts=_count_affiliations(profile, yesterday),
            senior_count=sum(1 for p in people if p.tier == profile.senior_tier),
        )
        if profile.tracks_peer_floor:
            view.peer_floor = _peer_floor(ctx, state)
            view.junior_floor = _junior_floor(ctx, state)
        return view


def _count_affiliations(profile, people) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for person in people:
        key = profile.affiliation(person)
        if key:
            counts[key] = counts.get(key, 0) + 1
    return counts


def _peer_floor(ctx: RosterContext, state: AttemptState) -> Dict[int, int]:
    floors: Dict[int, int] = {}
    for tier in {s.tier for s in ctx.staff}:
        peers = [s for s in ctx.staff if s.tier == tier and not s.has_specialty]
        unfinished = [p for p in peers if state.tallies[p.id].total < p.quota_service]
        reference = unfinished or peers
        floors[tier] = min((state.tallies[p.id].total for p in reference), default=0)
    return floors


def _junior_floor(ctx: RosterContext, state: AttemptState) -> Optional[int]:
    juniors = [s for s in ctx.staff if s.tier == ctx.profile.junior_tier]
    if not juniors:
        return None
    return min(state.tallies[j.id].total for j in juniors)


@dataclass
class CandidateProbe:
    """One (candidate, slot, day) question asked of the filter rules and the scorer."""

    ctx: RosterContext
    state: AttemptState
    slot: SlotType
    today: DayView
    person: StaffMember
    desperate: bool = False

    @property
    def day(self) -> int:
        return self.today.info.day

    @property
    def tally(self) -> StaffTally:
        return self.state.tallies[self.person.id]

    @property
    def stress(self) -> float:
        return self.state.stress.get(self.person.id, 0.0)

    @property
    def counts_as_weekend(self) -> bool:
        return self.ctx.profile.counts_as_weekend(self.today.info)

    def worked_on(self, day: int, staff_id: Optional[str] = None) -> bool:
        """Whether a staff member (the candidate by default) works on a day, using the bridge for days <= 0."""
        sid = staff_id or self.person.id
        if day <= 0:
            return self.ctx.bridge.worked(day, sid)
        if day > self.ctx.num_days:
            return False
        return sid in self.state.staff_on_day[day]

    def worked_this_month(self, day: int) -> bool:
        """Like `worked_on`, but days before the 1st count as free; the bridge only answers adjacency."""
        return day > 0 and self.worked_on(day)
