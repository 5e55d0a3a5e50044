from typing import Callable, Dict

from core.probe import CandidateProbe
from utils.constants import (
    FATIGUE,
    FLEXIBLE_MIN_FLEXIBILITY,
    SPECIALIST_MAX_FLEXIBILITY,
)

"""
Candidate scoring terms. Each term returns a raw factor; the profile's weight table
(config/constants.json) turns the factors into a score. Lower scores win.
"""


def priority_tier(probe: CandidateProbe) -> float:
    return 1 if probe.person.tier in probe.slot.priority_tiers else 0


def requested_day(probe: CandidateProbe) -> float:
    return 1 if probe.day in probe.person.requested_days else 0


def remaining_quota(probe: CandidateProbe) -> float:
    """Shifts left before the candidate reaches the quota of the slot's category."""
    return probe.ctx.profile.remaining_quota(probe.person, probe.tally, probe.slot)


def _is_specialist(probe: CandidateProbe) -> bool:
    return probe.ctx.flexibility.get(probe.person.id, 0) <= SPECIALIST_MAX_FLEXIBILITY


def _is_flexible(probe: CandidateProbe) -> bool:
    return probe.ctx.flexibility.get(probe.person.id, 0) >= FLEXIBLE_MIN_FLEXIBILITY


def specialist_on_specific(probe: CandidateProbe) -> float:
    """Staff eligible for few slot types are kept for the slots only they can cover."""
    if _is_specialist(probe) and not probe.ctx.profile.is_generic(probe.slot):
        return 1
    return 0


def specialist_on_generic(probe: CandidateProbe) -> float:
    if probe.desperate:
        return 0
    if _is_specialist(probe) and probe.ctx.profile.is_generic(probe.slot):
        return 1
    return 0


def flexible_on_generic(probe: CandidateProbe) -> float:
    if _is_flexible(probe) and probe.ctx.profile.is_generic(probe.slot):
        return 1
    return 0


def anti_cluster(probe: CandidateProbe) -> float:
    """Count of D-2 and D+2 shifts, when every-other-day prevention is on."""
    if probe.desperate or not probe.ctx.config.prevent_every_other_day:
        return 0
    d = probe.day
    return int(probe.worked_this_month(d - 2)) + int(probe.worked_this_month(d + 2))


def group_balance(probe: CandidateProbe) -> float:
    """Colleagues of the same group or unit already on duty today."""
    profile = probe.ctx.profile
    if profile.slot_targets_affiliation(probe.slot, probe.person):
        return 0
    return probe.today.affiliation_counts.get(profile.affiliation(probe.person), 0)


def unit_diversity(probe: CandidateProbe) -> float:
    """First member of their unit on the day."""
    key = probe.ctx.profile.affiliation(probe.person)
    return 1 if key and probe.today.affiliation_counts.get(key, 0) == 0 else 0


def unit_smoothing(probe: CandidateProbe) -> float:
    """Their unit already worked yesterday."""
    profile = probe.ctx.profile
    key = profile.affiliation(probe.person)
    if not key or profile.slot_targets_affiliation(probe.slot, probe.person):
        return 0
    return 1 if probe.today.yesterday_affiliation_counts.get(key, 0) > 0 else 0


def unit_gap(probe: CandidateProbe) -> float:
    """Their unit is absent both yesterday and today so far."""
    key = probe.ctx.profile.affiliation(probe.person)
    if not key:
        return 0
    today = probe.today
    if today.affiliation_counts.get(key, 0) or today.yesterday_affiliation_counts.get(key, 0):
        return 0
    return 1


def fatigue(probe: CandidateProbe) -> float:
    if not probe.ctx.profile.uses_fatigue:
        return 0
    return probe.stress


def fatigue_overload(probe: CandidateProbe) -> float:
    if probe.desperate or not probe.ctx.profile.uses_fatigue:
        return 0
    return 1 if probe.stress > FATIGUE["threshold"] else 0


def weekend_load(probe: CandidateProbe) -> float:
    return probe.tally.weekend if probe.counts_as_weekend else 0


def senior_stacking(probe: CandidateProbe) -> float:
    if probe.person.tier != probe.ctx.profile.senior_tier:
        return 0
    return 1 if probe.today.senior_count >= 1 else 0


def saturday_senior(probe: CandidateProbe) -> float:
    if probe.person.tier != probe.ctx.profile.senior_tier:
        return 0
    return 1 if probe.today.info.is_saturday else 0


def junior_bias(probe: CandidateProbe) -> float:
    return 1 if probe.person.tier == probe.ctx.profile.junior_tier else 0


def specialty_day(probe: CandidateProbe) -> float:
    """Specialists on a day their specialty is scheduled for."""
    return 1 if probe.ctx.profile.specialty_day_allowed(probe.person, probe.today.info) else 0


SCORE_TERMS: Dict[str, Callable[[CandidateProbe], float]] = {
    "priority_tier": priority_tier,
    "requested_day": requested_day,
    "remaining_quota": remaining_quota,
    "specialist_on_specific": specialist_on_specific,
    "specialist_on_generic": specialist_on_generic,
    "flexible_on_generic": flexible_on_generic,
    "anti_cluster": anti_cluster,
    "group_balance": group_balance,
    "unit_diversity": unit_diversity,
    "unit_smoothing": unit_smoothing,
    "unit_gap": unit_gap,
    "fatigue": fatigue,
    "fatigue_overload": fatigue_overload,
    "weekend_load": weekend_load,
    "senior_stacking": senior_stacking,
    "saturday_senior": saturday_senior,
    "junior_bias": junior_bias,
    "specialty_day": specialty_day,
}


def score_candidate(probe: CandidateProbe) -> float:
    """
    Weighted sum of the profile's score terms plus a random jitter from the attempt's source.

    :param probe: The (candidate, slot, day) being scored.
    :return: The score; lower is better.
    """
    weights = probe.ctx.profile.weights
    score = 0.0
    for name, weight in weights.items():
        term = SCORE_TERMS.get(name)
        if term is None or not weight:
            continue
        score += weight * term(probe)
    return score + probe.state.rng.random() * weights.get("jitter", 0)
