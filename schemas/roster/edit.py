from pydantic import BaseModel, model_validator, Field, ConfigDict
from typing import List, Optional
from schemas.roster.generate import (
    DayScheduleSpec,
    Settings,
    SlotTypeSpec,
    StaffProfile,
    check_unique,
)


class EditRosterRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    staff: List[StaffProfile]
    slotTypes: List[SlotTypeSpec]
    config: Settings
    schedule: List[DayScheduleSpec]
    logs: List[str] = []
    day: int = Field(ge=1, le=31)
    slotTypeId: str
    oldStaffId: str
    # None (or "EMPTY") clears the assignment
    newStaffId: Optional[str] = None

    @model_validator(mode="after")
    def validate_ids(self) -> "EditRosterRequest":
        check_unique(self.staff, "staff")
        check_unique(self.slotTypes, "slot type")
        return self
