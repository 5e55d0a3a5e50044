import math
from typing import Iterable, Optional

from core.models import SlotType, StaffMember
from core.probe import CandidateProbe, DayView
from core.state import AttemptState, RosterContext
from scheduler.rules.scoring import score_candidate


def find_best_candidate(
    ctx: RosterContext,
    state: AttemptState,
    slot: SlotType,
    day: int,
    desperate: bool = False,
    pool: Optional[Iterable[StaffMember]] = None,
) -> Optional[StaffMember]:
    """
    Lowest-scoring staff member admitted by the profile's rules, or None.

    :param ctx: Static context of the run.
    :param state: Current attempt state.
    :param slot: Slot type being filled.
    :param day: Day being filled.
    :param desperate: Skip the relaxable rules and desperate-only score terms.
    :param pool: Restrict the search to these staff (reservation passes).
    """
    today = DayView.capture(ctx, state, day)
    best, best_score = None, math.inf
    for person in ctx.staff if pool is None else pool:
        probe = CandidateProbe(ctx, state, slot, today, person, desperate)
        if not ctx.rules.admits(probe):
            continue
        score = score_candidate(probe)
        if score < best_score:
            best, best_score = person, score
    return best
