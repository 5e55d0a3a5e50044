import logging
import random
from typing import List, Optional

from core.models import Assignment, DaySchedule, RosterResult, SlotType, StaffMember
from core.run_log import RunLog
from core.state import AttemptState, RosterContext
from scheduler.candidate import find_best_candidate
from scheduler.stats import summarize
from utils.constants import FATIGUE
from utils.day_utils import weekday_label

logger = logging.getLogger(__name__)


class GreedyEngine:
    """
    Single forward pass over layers, days and slot types. A placement is never revisited;
    unmet minimums become EMPTY assignments.
    """

    def __init__(self, ctx: RosterContext):
        self.ctx = ctx

    def order_days(self, rng: random.Random) -> List[int]:
        """Hardest days first; equal days in random order when `randomize_order` is set."""
        days = list(self.ctx.days)
        if self.ctx.config.randomize_order:
            rng.shuffle(days)
        days.sort(key=lambda d: self.ctx.days[d].priority, reverse=True)
        return days

    def run_attempt(self, rng: random.Random, log: Optional[RunLog] = None) -> RosterResult:
        """Build one complete roster with its own state and random source."""
        ctx = self.ctx
        log = log if log is not None else RunLog()
        state = AttemptState.fresh(ctx.num_days, ctx.staff, rng)
        order = self.order_days(rng)

        if ctx.profile.reserves_specialists:
            self._reserve_specialists(state, order, log)
        if ctx.profile.reserves_seniors:
            self._reserve_seniors(state, order, log)

        for layer in range(ctx.max_layer):
            for day in order:
                for slot in ctx.ordered_slots:
                    self._fill_position(state, day, slot, layer, log)

        return self._finish(state, log)

    def run_seeded(self, seed: int) -> RosterResult:
        return self.run_attempt(random.Random(seed))

    def _fill_position(self, state: AttemptState, day: int, slot: SlotType, layer: int, log: RunLog):
        if layer >= slot.max_daily_count:
            return
        if state.slot_count(day, slot.id) > layer:
            return

        must_fill = slot.min_daily_count > layer
        if not must_fill and not self.ctx.profile.allows_optional(state, day):
            return

        person = find_best_candidate(self.ctx, state, slot, day)
        if person is None and must_fill:
            person = find_best_candidate(self.ctx, state, slot, day, desperate=True)
            if person is not None:
                log.add(
                    f"Day {day}: {slot.name} position {layer + 1} filled by {person.name} "
                    f"with soft rules relaxed."
                )

        if person is not None:
            self.place(state, day, slot, person)
        elif must_fill:
            state.assignments[day].append(Assignment.empty(day, slot.id, slot.is_emergency))
            state.unfilled += 1
            info = self.ctx.days[day]
            log.add(
                f"Day {day} ({weekday_label(info.weekday)}): no candidate for {slot.name} "
                f"position {layer + 1}, left EMPTY."
            )

    def place(self, state: AttemptState, day: int, slot: SlotType, person: StaffMember):
        """Record an assignment and update the running counters and fatigue."""
        ctx = self.ctx
        info = ctx.days[day]
        weekend = ctx.profile.counts_as_weekend(info)

        state.assignments[day].append(Assignment.for_staff(day, slot, person))
        state.staff_on_day[day].add(person.id)
        state.tallies[person.id].record(
            slot.is_emergency, weekend, info.is_saturday, info.is_sunday
        )

        if ctx.profile.uses_fatigue:
            load = FATIGUE["emergency"] if slot.is_emergency else FATIGUE["service"]
            if weekend or info.is_holiday:
                load *= FATIGUE["weekend_multiplier"]
            state.stress[person.id] = state.stress.get(person.id, 0.0) + load

    def _reserve_specialists(self, state: AttemptState, order: List[int], log: RunLog):
        """Seat one specialist per day on each day their specialty is scheduled for."""
        ctx = self.ctx
        mandatory = [s for s in ctx.ordered_slots if s.min_daily_count > 0]

        for uc in ctx.config.unit_constraints:
            specialty = uc.unit.strip()
            specialists = [
                s for s in ctx.staff if s.has_specialty and s.specialty.strip() == specialty
            ]
            if not specialists:
                continue

            # slots dedicated to the specialty first, then by difficulty
            slots = sorted(mandatory, key=lambda s: specialty not in s.allowed_units)

            for day in order:
                if not ctx.days[day].allows_unit(specialty):
                    continue
                on_duty = {
                    ctx.staff_by_id[sid].specialty.strip()
                    for sid in state.staff_on_day[day]
                    if ctx.staff_by_id[sid].has_specialty
                }
                if specialty in on_duty:
                    continue

                for slot in slots:
                    if state.slot_count(day, slot.id) >= slot.max_daily_count:
                        continue
                    person = find_best_candidate(ctx, state, slot, day, pool=specialists)
                    if person is not None:
                        self.place(state, day, slot, person)
                        break
                else:
                    log.add(f"Day {day}: no {specialty} specialist could be reserved.")

    def _reserve_seniors(self, state: AttemptState, order: List[int], log: RunLog):
        """Try to seat one senior-tier staff member per day in a mandatory slot."""
        ctx = self.ctx
        seniors = [s for s in ctx.staff if s.tier == ctx.profile.senior_tier]
        if not seniors:
            return
        mandatory = [s for s in ctx.slot_types if s.min_daily_count > 0]

        for day in order:
            if any(ctx.staff_by_id[sid].tier == ctx.profile.senior_tier for sid in state.staff_on_day[day]):
                continue
            slots = list(mandatory)
            state.rng.shuffle(slots)
            for slot in slots:
                if state.slot_count(day, slot.id) >= slot.min_daily_count:
                    continue
                person = find_best_candidate(ctx, state, slot, day, pool=seniors)
                if person is not None:
                    self.place(state, day, slot, person)
                    break
            else:
                log.add(f"Day {day}: no senior available for the daily senior seat.")

    def _finish(self, state: AttemptState, log: RunLog) -> RosterResult:
        ctx = self.ctx
        schedule = [
            DaySchedule(
                day=d,
                weekday=info.weekday,
                assignments=tuple(state.assignments[d]),
                is_weekend=info.is_weekend,
                is_holiday=info.is_holiday,
            )
            for d, info in sorted(ctx.days.items())
        ]
        return summarize(schedule, ctx, logs=log.snapshot())
