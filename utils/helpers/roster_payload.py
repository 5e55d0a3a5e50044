from typing import Any, Dict, List, Sequence

from core.config import ClinicalConfig, NursingConfig, UnitConstraint
from core.models import Assignment, DaySchedule, RosterResult, SlotType, StaffMember
from schemas.roster.generate import (
    ClinicalSettings,
    DayScheduleSpec,
    SlotTypeSpec,
    StaffProfile,
)
from utils.day_utils import SATURDAY, SUNDAY, days_in_month, previous_month, weekday_of


def to_staff(profiles: Sequence[StaffProfile]) -> List[StaffMember]:
    """Convert request staff profiles into engine records."""
    return [
        StaffMember(
            id=str(p.id).strip(),
            name=p.name.strip(),
            tier=p.tier,
            group=p.group,
            quota_service=p.quotaService,
            quota_emergency=p.quotaEmergency,
            weekend_limit=p.weekendLimit,
            off_days=frozenset(p.offDays),
            requested_days=frozenset(p.requestedDays),
            is_active=p.isActive,
            unit=p.unit,
            specialty=p.specialty,
            room=p.room,
        )
        for p in profiles
    ]


def to_slot_types(specs: Sequence[SlotTypeSpec]) -> List[SlotType]:
    return [
        SlotType(
            id=str(s.id).strip(),
            name=s.name,
            min_daily_count=s.minDailyCount,
            max_daily_count=s.maxDailyCount,
            allowed_tiers=frozenset(s.allowedTiers),
            allowed_units=frozenset(u.strip() for u in s.allowedUnits),
            priority_tiers=frozenset(s.priorityTiers),
            required_group=s.requiredGroup,
            is_emergency=s.isEmergency,
        )
        for s in specs
    ]


def to_config(settings) -> ClinicalConfig | NursingConfig:
    """Convert the tagged request settings into the matching run configuration."""
    common = dict(
        year=settings.year,
        month=settings.month,
        max_retries=settings.maxRetries,
        randomize_order=settings.randomizeOrder,
        prevent_every_other_day=settings.preventEveryOtherDay,
        holidays=frozenset(settings.holidays),
        num_days=settings.numDays,
        seed=settings.seed,
        workers=settings.workers,
    )
    if isinstance(settings, ClinicalSettings):
        return ClinicalConfig(
            **common,
            use_fatigue_model=settings.useFatigueModel,
            use_genetic_algorithm=settings.useGeneticAlgorithm,
            population_size=settings.populationSize,
            generations=settings.generations,
            elitism_count=settings.elitismCount,
            crossover_rate=settings.crossoverRate,
        )
    return NursingConfig(
        **common,
        unit_constraints=tuple(
            UnitConstraint(unit=uc.unit, allowed_weekdays=frozenset(uc.allowedWeekdays))
            for uc in settings.unitConstraints
        ),
        daily_total_target=settings.dailyTotalTarget,
    )


def to_day_schedules(
    specs: Sequence[DayScheduleSpec],
    year: int,
    month: int,
    holidays: Sequence[int] = (),
) -> List[DaySchedule]:
    """
    Convert day schedule payloads of a given month, sorted by day.
    Weekday and weekend flags come from the calendar when the day exists in that month.
    """
    month_length = days_in_month(year, month)
    days = []
    for entry in sorted(specs, key=lambda s: s.day):
        if entry.day <= month_length:
            weekday = weekday_of(year, month, entry.day)
            is_weekend = weekday in (SATURDAY, SUNDAY)
        else:
            weekday, is_weekend = 0, entry.isWeekend
        days.append(
            DaySchedule(
                day=entry.day,
                weekday=weekday,
                assignments=tuple(
                    Assignment(
                        day=entry.day,
                        slot_type_id=a.slotTypeId,
                        staff_id=a.staffId,
                        staff_name=a.staffName,
                        tier=a.tier,
                        group=a.group,
                        unit=a.unit,
                        is_emergency=a.isEmergency,
                    )
                    for a in entry.assignments
                ),
                is_weekend=is_weekend,
                is_holiday=entry.isHoliday or entry.day in holidays,
            )
        )
    return days


def to_previous_schedule(specs: Sequence[DayScheduleSpec], year: int, month: int) -> List[DaySchedule]:
    """Previous-month tail for the bridge, read against the calendar of the month before."""
    prev_year, prev_month = previous_month(year, month)
    return to_day_schedules(specs, prev_year, prev_month)


def to_result(days: Sequence[DaySchedule], logs: Sequence[str] = ()) -> RosterResult:
    """Wrap a client-held schedule so it can be edited; stats are recomputed by the editor."""
    return RosterResult(
        schedule=tuple(days),
        unfilled_slots=sum(1 for d in days for a in d.assignments if a.is_empty),
        stats=(),
        logs=tuple(logs),
    )


def assignment_to_dict(a: Assignment) -> Dict[str, Any]:
    return {
        "slotTypeId": a.slot_type_id,
        "staffId": a.staff_id,
        "staffName": a.staff_name,
        "tier": a.tier,
        "group": a.group,
        "unit": a.unit,
        "isEmergency": a.is_emergency,
    }


def result_to_dict(result: RosterResult) -> Dict[str, Any]:
    """Serialize a roster into the camelCase response shape."""
    return {
        "schedule": [
            {
                "day": ds.day,
                "weekday": ds.weekday,
                "isWeekend": ds.is_weekend,
                "isHoliday": ds.is_holiday,
                "assignments": [assignment_to_dict(a) for a in ds.assignments],
            }
            for ds in result.schedule
        ],
        "unfilledSlots": result.unfilled_slots,
        "stats": [
            {
                "staffId": s.staff_id,
                "totalShifts": s.total_shifts,
                "serviceShifts": s.service_shifts,
                "emergencyShifts": s.emergency_shifts,
                "weekendShifts": s.weekend_shifts,
                "saturdayShifts": s.saturday_shifts,
                "sundayShifts": s.sunday_shifts,
            }
            for s in result.stats
        ],
        "logs": list(result.logs),
        "fitness": result.fitness,
        "deviation": result.deviation,
    }
