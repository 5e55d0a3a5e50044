from fastapi import APIRouter, HTTPException
from starlette.concurrency import run_in_threadpool
from schemas.roster.generate import GenerateRosterRequest
from schemas.roster.edit import EditRosterRequest
from scheduler.builder import generate_roster
from scheduler.editor import apply_manual_edit
from scheduler.extractor import extract_schedule_and_summary
from exceptions.custom_errors import *
from docs.roster.generate import generate_roster_description
from docs.roster.edit import edit_roster_description
from utils.helpers.roster_payload import (
    result_to_dict,
    to_config,
    to_day_schedules,
    to_previous_schedule,
    to_result,
    to_slot_types,
    to_staff,
)
from utils.logger import logger
import traceback

router = APIRouter(prefix="/roster", tags=["Roster"])


def build_response(result, staff, slot_types, config) -> dict:
    table_df, summary_df, metrics = extract_schedule_and_summary(
        result, staff, slot_types, config
    )
    response = result_to_dict(result)
    response["summary"] = summary_df.to_dict(orient="records")
    response["table"] = table_df.reset_index().to_dict(orient="records")
    response["metrics"] = metrics
    return response


# generate roster
@router.post(
    "/generate",
    response_model=dict,
    description=generate_roster_description,
    summary="Generate Roster",
)
async def generate(request: GenerateRosterRequest):
    try:
        staff = to_staff(request.staff)
        slot_types = to_slot_types(request.slotTypes)
        config = to_config(request.config)
        previous = to_previous_schedule(
            request.previousSchedule, config.year, config.month
        )

        logger.info(
            f"📥 Roster request: {config.profile} {config.year}-{config.month:02d}, "
            f"{len(staff)} staff, {len(slot_types)} slot types"
        )
        # CPU-bound search runs off the event loop
        result = await run_in_threadpool(
            generate_roster, staff, slot_types, config, previous or None
        )
        return build_response(result, staff, slot_types, config)

    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))
    except Exception as e:
        tb = traceback.format_exc()
        raise HTTPException(status_code=500, detail=f"{str(e)}\n\nTraceback:\n{tb}")


# manual edit
@router.post(
    "/edit",
    response_model=dict,
    description=edit_roster_description,
    summary="Edit Roster Assignment",
)
async def edit(request: EditRosterRequest):
    try:
        staff = to_staff(request.staff)
        slot_types = to_slot_types(request.slotTypes)
        config = to_config(request.config)
        days = to_day_schedules(
            request.schedule, config.year, config.month, sorted(config.holidays)
        )

        result = apply_manual_edit(
            to_result(days, request.logs),
            request.day,
            request.slotTypeId,
            request.oldStaffId,
            request.newStaffId,
            staff,
            slot_types,
            config,
        )
        return build_response(result, staff, slot_types, config)

    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))
    except Exception as e:
        tb = traceback.format_exc()
        raise HTTPException(status_code=500, detail=f"{str(e)}\n\nTraceback:\n{tb}")
