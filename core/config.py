from dataclasses import dataclass
from typing import ClassVar, FrozenSet, Optional, Tuple, Union

from utils.constants import (
    CLINICAL_MAX_RETRIES,
    CROSSOVER_RATE,
    DAILY_TOTAL_TARGET,
    ELITISM_COUNT,
    GENERATIONS,
    NURSING_MAX_RETRIES,
    POPULATION_SIZE,
)

"""
Run configuration. `ClinicalConfig` and `NursingConfig` share the `RosterConfig` base;
the class itself is the profile tag.
"""


@dataclass(frozen=True)
class UnitConstraint:
    """Weekdays (0 = Monday ... 6 = Sunday) on which a unit or specialty may be staffed."""

    unit: str
    allowed_weekdays: FrozenSet[int] = frozenset()


@dataclass(frozen=True)
class RosterConfig:
    year: int
    month: int
    max_retries: Optional[int] = None
    """Number of Monte Carlo attempts; `None` uses the profile default."""
    randomize_order: bool = True
    """Shuffle days of equal difficulty instead of keeping calendar order."""
    prevent_every_other_day: bool = False
    """Penalize D-2/D+2 shifts (anti-clustering)."""
    holidays: FrozenSet[int] = frozenset()
    num_days: Optional[int] = None
    """Horizon shorter than the month; `None` means the whole month."""
    seed: Optional[int] = None
    workers: int = 1
    """Worker processes for Monte Carlo attempts."""

    profile: ClassVar[str] = ""
    default_retries: ClassVar[int] = 1

    @property
    def attempts(self) -> int:
        return self.default_retries if self.max_retries is None else self.max_retries


@dataclass(frozen=True)
class ClinicalConfig(RosterConfig):
    use_fatigue_model: bool = False
    use_genetic_algorithm: bool = False
    population_size: int = POPULATION_SIZE
    generations: int = GENERATIONS
    elitism_count: int = ELITISM_COUNT
    crossover_rate: float = CROSSOVER_RATE

    profile: ClassVar[str] = "clinical"
    default_retries: ClassVar[int] = CLINICAL_MAX_RETRIES


@dataclass(frozen=True)
class NursingConfig(RosterConfig):
    unit_constraints: Tuple[UnitConstraint, ...] = ()
    daily_total_target: int = DAILY_TOTAL_TARGET
    """Staffed positions per day; optional positions stop once it is reached."""

    profile: ClassVar[str] = "nursing"
    default_retries: ClassVar[int] = NURSING_MAX_RETRIES


AnyConfig = Union[ClinicalConfig, NursingConfig]
