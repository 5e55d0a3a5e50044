from core.probe import CandidateProbe
from utils.constants import SENIOR_DAILY_CAP, SENIOR_DAILY_CAP_DESPERATE

"""
Hard eligibility rules. These are applied in every pass, desperate mode included.

Each rule takes a CandidateProbe and returns True when the candidate may take the slot.
"""


def eligible_for_slot(probe: CandidateProbe) -> bool:
    """The candidate's tier (clinical) or unit (nursing) is in the slot's eligibility set."""
    return probe.ctx.profile.is_eligible(probe.person, probe.slot)


def not_assigned_today(probe: CandidateProbe) -> bool:
    return probe.person.id not in probe.today.assigned_ids


def not_off_day(probe: CandidateProbe) -> bool:
    return probe.day not in probe.person.off_days


def matches_required_group(probe: CandidateProbe) -> bool:
    """A slot with a required group or unit only takes staff of that affiliation."""
    slot = probe.slot
    if not slot.restricts_group:
        return True
    return probe.ctx.profile.affiliation(probe.person) == slot.required_group


def no_adjacent_shift(probe: CandidateProbe) -> bool:
    """No back-to-back shifts; day 0 and earlier are answered by the previous-month bridge."""
    d = probe.day
    return not probe.worked_on(d - 1) and not probe.worked_on(d + 1)


def no_roommate_conflict(probe: CandidateProbe) -> bool:
    """
    Roommates never work on the same or adjacent days, and nobody works on a day
    their roommate has off.
    """
    d = probe.day
    ctx = probe.ctx
    for roommate_id in ctx.roommates.get(probe.person.id, ()):
        if any(probe.worked_on(day, roommate_id) for day in (d - 1, d, d + 1)):
            return False
        roommate = ctx.staff_by_id.get(roommate_id)
        if roommate is not None and d in roommate.off_days:
            return False
    return True


def within_senior_cap(probe: CandidateProbe) -> bool:
    """At most one senior-tier staff member per day; a second one only in desperate mode."""
    if probe.person.tier != probe.ctx.profile.senior_tier:
        return True
    cap = SENIOR_DAILY_CAP_DESPERATE if probe.desperate else SENIOR_DAILY_CAP
    return probe.today.senior_count < cap
