from typing import Dict, Optional

from core.config import ClinicalConfig, NursingConfig, RosterConfig
from core.constraint_manager import ConstraintManager
from core.day_context import DayInfo
from core.models import SlotType, StaffMember, StaffStats
from core.state import AttemptState, StaffTally
from exceptions.custom_errors import InvalidConfigError
from scheduler.rules import *
from utils.constants import (
    CLINICAL_WEIGHTS,
    GENERIC_SLOT_MIN_ELIGIBLE,
    JUNIOR_TIER,
    MIDDLE_TIER,
    NURSING_WEIGHTS,
    SENIOR_TIER,
)


class RosterProfile:
    """
    Rule set shared by both roster kinds. Subclasses decide eligibility, affiliation,
    quota categories and which filters and score terms apply.
    """

    name = ""
    senior_tier = SENIOR_TIER
    middle_tier = MIDDLE_TIER
    junior_tier = JUNIOR_TIER
    holidays_count_as_weekend = False
    tracks_peer_floor = False
    reserves_specialists = False
    reserves_seniors = False

    def __init__(self, config: RosterConfig, weights: Optional[Dict[str, float]] = None):
        self.config = config
        self.weights = dict(weights if weights is not None else self.default_weights())

    def default_weights(self) -> Dict[str, float]:
        return {}

    @property
    def uses_fatigue(self) -> bool:
        return False

    def affiliation(self, person: StaffMember) -> str:
        raise NotImplementedError

    def is_eligible(self, person: StaffMember, slot: SlotType) -> bool:
        raise NotImplementedError

    def is_generic(self, slot: SlotType) -> bool:
        raise NotImplementedError

    def remaining_quota(self, person: StaffMember, tally: StaffTally, slot: SlotType) -> int:
        raise NotImplementedError

    def quota_deviation(self, person: StaffMember, stats: StaffStats) -> int:
        raise NotImplementedError

    def counts_as_weekend(self, info: DayInfo) -> bool:
        return info.is_weekend or (self.holidays_count_as_weekend and info.is_holiday)

    def can_take(self, person: StaffMember, slot: SlotType) -> bool:
        """Eligible for the slot and of its required group or unit, if it names one."""
        if not self.is_eligible(person, slot):
            return False
        return not slot.restricts_group or self.affiliation(person) == slot.required_group

    def slot_targets_affiliation(self, slot: SlotType, person: StaffMember) -> bool:
        """Whether the slot is reserved for the candidate's own group or unit."""
        return slot.restricts_group and slot.required_group == self.affiliation(person)

    def specialty_day_allowed(self, person: StaffMember, info: DayInfo) -> bool:
        return False

    def allows_optional(self, state: AttemptState, day: int) -> bool:
        """Whether positions above a slot's minimum may still be staffed on a day."""
        return True

    def build_rules(self) -> ConstraintManager:
        rules = ConstraintManager()
        rules.add_rule(eligible_for_slot)
        rules.add_rule(not_assigned_today)
        rules.add_rule(not_off_day)
        rules.add_rule(matches_required_group)
        rules.add_rule(no_adjacent_shift)

        rules.add_rule(no_weekend_span, relaxable=True)
        rules.add_rule(within_category_quota, relaxable=True)
        rules.add_rule(within_weekend_limit, relaxable=True)
        rules.add_rule(balanced_weekend_days, relaxable=True)
        return rules


class ClinicalProfile(RosterProfile):
    """Physician rosters: tier eligibility, group affiliation, service and emergency quotas."""

    name = "clinical"
    holidays_count_as_weekend = True

    def default_weights(self):
        return CLINICAL_WEIGHTS

    @property
    def uses_fatigue(self) -> bool:
        return bool(getattr(self.config, "use_fatigue_model", False))

    def affiliation(self, person):
        return person.group

    def is_eligible(self, person, slot):
        return person.tier in slot.allowed_tiers

    def is_generic(self, slot):
        return len(slot.allowed_tiers) >= GENERIC_SLOT_MIN_ELIGIBLE

    def remaining_quota(self, person, tally, slot):
        if slot.is_emergency:
            return person.quota_emergency - tally.emergency
        return person.quota_service - tally.service

    def quota_deviation(self, person, stats):
        return abs(person.quota_service - stats.service_shifts) + abs(
            person.quota_emergency - stats.emergency_shifts
        )


class NursingProfile(RosterProfile):
    """
    Nursing-unit rosters: unit eligibility (juniors may work anywhere), one unified quota,
    roommates, a daily senior cap, catch-up fairness and a day-of-week unit table.
    """

    name = "nursing"
    tracks_peer_floor = True
    reserves_specialists = True
    reserves_seniors = True

    def __init__(self, config, weights=None):
        super().__init__(config, weights)
        self.constrained_units = {
            uc.unit.strip() for uc in getattr(config, "unit_constraints", ())
        }

    def default_weights(self):
        return NURSING_WEIGHTS

    def affiliation(self, person):
        return (person.unit or "").strip()

    def is_eligible(self, person, slot):
        if not slot.allowed_units or person.tier == self.junior_tier:
            return True
        return self.affiliation(person) in slot.allowed_units

    def is_generic(self, slot):
        return not slot.allowed_units or len(slot.allowed_units) >= GENERIC_SLOT_MIN_ELIGIBLE

    def remaining_quota(self, person, tally, slot):
        return person.quota_service - tally.total

    def quota_deviation(self, person, stats):
        return abs(person.quota_service - stats.total_shifts)

    def slot_targets_affiliation(self, slot, person):
        unit = self.affiliation(person)
        if unit and unit in slot.allowed_units:
            return True
        return super().slot_targets_affiliation(slot, person)

    def specialty_day_allowed(self, person, info):
        if not person.has_specialty:
            return False
        specialty = person.specialty.strip()
        return specialty in self.constrained_units and info.allows_unit(specialty)

    def allows_optional(self, state, day):
        target = getattr(self.config, "daily_total_target", 0)
        return target > 0 and state.staffed_count(day) < target

    def build_rules(self):
        rules = super().build_rules()
        rules.add_rule(no_roommate_conflict)
        rules.add_rule(within_senior_cap)

        rules.add_rule(catches_up_with_peers, relaxable=True)
        rules.add_rule(middle_tier_waits_for_juniors, relaxable=True)
        rules.add_rule(unit_day_permitted, relaxable=True)
        return rules


def get_profile(config: RosterConfig, weights: Optional[Dict[str, float]] = None) -> RosterProfile:
    """Pick the rule set matching the configuration's profile tag."""
    match config:
        case ClinicalConfig():
            return ClinicalProfile(config, weights)
        case NursingConfig():
            return NursingProfile(config, weights)
        case _:
            raise InvalidConfigError(f"Unknown roster profile: {type(config).__name__}")
