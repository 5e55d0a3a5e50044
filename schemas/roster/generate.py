from pydantic import BaseModel, model_validator, Field, ConfigDict
from typing import Annotated, List, Literal, Optional, Union, Any
from utils.constants import *


# Define data models
class StaffProfile(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    tier: int = Field(ge=1)
    group: str = Field(default=DEFAULT_GROUP)
    quotaService: int = Field(default=0, ge=0)
    quotaEmergency: int = Field(default=0, ge=0)
    weekendLimit: int = Field(default=0, ge=0)
    offDays: List[int] = []
    requestedDays: List[int] = []
    isActive: bool = True
    unit: Optional[str] = None
    specialty: Optional[str] = None
    room: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def extract_tier(cls, values: Any) -> Any:
        """
        Model validator to pick up the seniority tier from other keys if "tier" is not present.

        Rosters exported from older tools call the field "role" or "seniority"; the first key
        containing either word is moved to "tier".
        """
        if isinstance(values, dict) and "tier" not in values:
            for key in list(values.keys()):
                lowered = key.lower()
                if "role" in lowered or "seniority" in lowered:
                    values["tier"] = values.pop(key)
                    break
        return values

    @model_validator(mode="after")
    def check_days(self) -> "StaffProfile":
        for label, days in (("offDays", self.offDays), ("requestedDays", self.requestedDays)):
            bad = [d for d in days if not 1 <= d <= 31]
            if bad:
                raise ValueError(f"{label} of {self.name} contains invalid day(s): {bad}")
        return self


class SlotTypeSpec(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    minDailyCount: int = Field(ge=0)
    maxDailyCount: int = Field(ge=0)
    allowedTiers: List[int] = []
    allowedUnits: List[str] = []
    priorityTiers: List[int] = []
    requiredGroup: Optional[str] = None
    isEmergency: bool = False

    @model_validator(mode="after")
    def check_range(self) -> "SlotTypeSpec":
        if self.minDailyCount > self.maxDailyCount:
            raise ValueError(
                f"minDailyCount ({self.minDailyCount}) of slot type {self.name} exceeds maxDailyCount ({self.maxDailyCount})"
            )
        return self


class UnitConstraintSpec(BaseModel):
    model_config = ConfigDict(extra="allow")

    unit: str
    # 0 = Monday ... 6 = Sunday
    allowedWeekdays: List[int] = []

    @model_validator(mode="after")
    def check_weekdays(self) -> "UnitConstraintSpec":
        bad = [d for d in self.allowedWeekdays if not 0 <= d <= 6]
        if bad:
            raise ValueError(f"allowedWeekdays of {self.unit} contains invalid weekday(s): {bad}")
        return self


class RosterSettings(BaseModel):
    model_config = ConfigDict(extra="allow")

    year: int = Field(ge=1900, le=9999)
    month: int = Field(ge=1, le=12)
    maxRetries: Optional[int] = Field(default=None, ge=0)
    randomizeOrder: bool = True
    preventEveryOtherDay: bool = False
    holidays: List[int] = []
    numDays: Optional[int] = Field(default=None, ge=1, le=31)
    seed: Optional[int] = None
    workers: int = Field(default=1, ge=1)


class ClinicalSettings(RosterSettings):
    profile: Literal["clinical"] = "clinical"
    useFatigueModel: bool = False
    useGeneticAlgorithm: bool = False
    populationSize: int = Field(default=POPULATION_SIZE, ge=0)
    generations: int = Field(default=GENERATIONS, ge=0)
    elitismCount: int = Field(default=ELITISM_COUNT, ge=1)
    crossoverRate: float = Field(default=CROSSOVER_RATE, ge=0, le=1)


class NursingSettings(RosterSettings):
    profile: Literal["nursing"] = "nursing"
    unitConstraints: List[UnitConstraintSpec] = []
    dailyTotalTarget: int = Field(default=DAILY_TOTAL_TARGET, ge=0)


Settings = Annotated[Union[ClinicalSettings, NursingSettings], Field(discriminator="profile")]


class AssignmentSpec(BaseModel):
    model_config = ConfigDict(extra="allow")

    slotTypeId: str
    staffId: str
    staffName: str = ""
    tier: int = 0
    group: str = ""
    unit: Optional[str] = None
    isEmergency: bool = False


class DayScheduleSpec(BaseModel):
    model_config = ConfigDict(extra="allow")

    day: int = Field(ge=1, le=31)
    assignments: List[AssignmentSpec] = []
    isWeekend: bool = False
    isHoliday: bool = False


def check_unique(items: List[Any], label: str):
    seen = set()
    for item in items:
        if item.id in seen:
            raise ValueError(f"Duplicate {label} id: {item.id}")
        seen.add(item.id)


class GenerateRosterRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    staff: List[StaffProfile]
    slotTypes: List[SlotTypeSpec]
    config: Settings
    previousSchedule: List[DayScheduleSpec] = []

    @model_validator(mode="after")
    def validate_ids(self) -> "GenerateRosterRequest":
        check_unique(self.staff, "staff")
        check_unique(self.slotTypes, "slot type")
        return self
