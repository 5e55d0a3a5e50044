from core.probe import CandidateProbe

"""
Soft pre-filters. Registered as relaxable, so desperate mode skips them.
"""


def no_weekend_span(probe: CandidateProbe) -> bool:
    """
    Avoid Thursday-to-weekend stretches: no Saturday or Sunday shift after a worked Thursday,
    and no Thursday shift before a worked Saturday or Sunday.
    """
    info = probe.today.info
    d = probe.day
    if info.is_saturday:
        return not probe.worked_this_month(d - 2)
    if info.is_sunday:
        return not probe.worked_this_month(d - 3)
    if info.is_thursday:
        return not probe.worked_this_month(d + 2) and not probe.worked_this_month(d + 3)
    return True


def within_category_quota(probe: CandidateProbe) -> bool:
    return probe.ctx.profile.remaining_quota(probe.person, probe.tally, probe.slot) > 0


def within_weekend_limit(probe: CandidateProbe) -> bool:
    if not probe.counts_as_weekend:
        return True
    return probe.tally.weekend < probe.person.weekend_limit


def balanced_weekend_days(probe: CandidateProbe) -> bool:
    """Saturday and Sunday counts may not drift more than one apart."""
    info = probe.today.info
    tally = probe.tally
    if info.is_saturday:
        return tally.saturday < tally.sunday + 1
    if info.is_sunday:
        return tally.sunday < tally.saturday + 1
    return True


def catches_up_with_peers(probe: CandidateProbe) -> bool:
    """
    A specialty-free candidate must not be ahead of the lowest total among same-tier peers
    who still have quota left.
    """
    person = probe.person
    if person.has_specialty:
        return True
    floor = probe.today.peer_floor.get(person.tier)
    if floor is None:
        return True
    return probe.tally.total <= floor


def middle_tier_waits_for_juniors(probe: CandidateProbe) -> bool:
    """Middle-tier staff are held back while they are at or above the junior minimum."""
    profile = probe.ctx.profile
    floor = probe.today.junior_floor
    if probe.person.tier != profile.middle_tier or floor is None:
        return True
    return probe.tally.total < floor


def unit_day_permitted(probe: CandidateProbe) -> bool:
    """The unit and specialty day-of-week permission table must allow the day. Juniors are exempt."""
    person = probe.person
    if person.tier == probe.ctx.profile.junior_tier:
        return True
    info = probe.today.info
    if not info.allows_unit(person.unit):
        return False
    if person.has_specialty and not info.allows_unit(person.specialty):
        return False
    return True
