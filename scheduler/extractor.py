import logging
from datetime import date
from typing import Dict, Sequence, Tuple

import pandas as pd

from core.config import RosterConfig
from core.models import RosterResult, SlotType, StaffMember
from scheduler.profiles import get_profile

logger = logging.getLogger(__name__)

OFF_LABEL = "OFF"


def extract_schedule_and_summary(
    result: RosterResult,
    staff: Sequence[StaffMember],
    slot_types: Sequence[SlotType],
    config: RosterConfig,
) -> Tuple[pd.DataFrame, pd.DataFrame, Dict]:
    """
    Turn a roster into tables.

    Returns a schedule DataFrame (one row per staff member, one column per date, cells hold
    the slot name, "OFF" for declared off days or "" otherwise), a summary DataFrame with
    shift counts and quota deviation per staff member, and a metrics dict.
    """
    profile = get_profile(config)
    slot_names = {s.id: s.name for s in slot_types}
    headers = [
        date(config.year, config.month, ds.day).strftime("%a %Y-%m-%d") for ds in result.schedule
    ]

    schedule = {}
    for person in staff:
        row = []
        for ds in result.schedule:
            worked = [a for a in ds.assignments if a.staff_id == person.id]
            if worked:
                row.append("/".join(slot_names.get(a.slot_type_id, a.slot_type_id) for a in worked))
            elif ds.day in person.off_days:
                row.append(OFF_LABEL)
            else:
                row.append("")
        schedule[person.id] = row

    schedule_df = pd.DataFrame.from_dict(schedule, orient="index", columns=headers)
    schedule_df.index.name = "id"

    stats_by_id = {s.staff_id: s for s in result.stats}
    summary = []
    for person in staff:
        s = stats_by_id.get(person.id)
        if s is None:
            continue
        summary.append(
            {
                "id": person.id,
                "name": person.name,
                "tier": person.tier,
                "total": s.total_shifts,
                "service": s.service_shifts,
                "emergency": s.emergency_shifts,
                "weekend": s.weekend_shifts,
                "saturday": s.saturday_shifts,
                "sunday": s.sunday_shifts,
                "quotaService": person.quota_service,
                "quotaEmergency": person.quota_emergency,
                "deviation": profile.quota_deviation(person, s),
            }
        )
    summary_df = pd.DataFrame(summary)

    unfilled_by_day = {
        ds.day: sum(1 for a in ds.assignments if a.is_empty)
        for ds in result.schedule
        if ds.has_empty
    }
    metrics = {
        "Unfilled Slots": result.unfilled_slots,
        "Unfilled By Day": unfilled_by_day,
        "Quota Deviation": result.deviation,
        "Fitness": result.fitness,
    }
    logger.info(f"📊 Extracted roster tables for {len(staff)} staff over {len(headers)} days")
    return schedule_df, summary_df, metrics
