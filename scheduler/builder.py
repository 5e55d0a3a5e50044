import logging
import random
from typing import Optional, Sequence

from core.config import RosterConfig
from core.models import DaySchedule, RosterResult, SlotType, StaffMember
from core.run_log import RunLog
from scheduler.engine import GreedyEngine
from scheduler.genetic import GeneticRefiner
from scheduler.montecarlo import MonteCarloController
from scheduler.rules.fixed import bridge_adjacency_violations
from scheduler.setup import setup_context
from utils.validate import collect_input_warnings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    encoding="utf-8",
)
logger = logging.getLogger(__name__)


# == Generate Roster ==
def generate_roster(
    staff: Sequence[StaffMember],
    slot_types: Sequence[SlotType],
    config: RosterConfig,
    previous_schedule: Optional[Sequence[DaySchedule]] = None,
    rng: Optional[random.Random] = None,
) -> RosterResult:
    """
    Generates a monthly roster that never breaks the hard rules and optimizes the soft ones heuristically.
    Runs Monte Carlo restarts, or genetic refinement when the clinical config asks for it.

    :param staff: Staff records; inactive staff are ignored.
    :param slot_types: Daily duty slot types.
    :param config: ClinicalConfig or NursingConfig.
    :param previous_schedule: Tail of the previous month's roster, for the month-boundary checks.
    :param rng: Random source; defaults to one seeded with `config.seed`.
    :return: The best roster found.
    """
    # === Model setup ===
    logger.info(f"📋 Building {config.profile} roster context for {config.year}-{config.month:02d}...")
    ctx = setup_context(staff, slot_types, config, previous_schedule)
    rng = rng if rng is not None else random.Random(config.seed)

    header = RunLog()
    header.extend(collect_input_warnings(staff, slot_types, ctx.profile, ctx.num_days))

    engine = GreedyEngine(ctx)

    # === Search ===
    if getattr(config, "use_genetic_algorithm", False):
        header.add("Mode: genetic refinement.")
        header.add("Building and evolving the population...")
        refiner = GeneticRefiner(
            engine,
            rng,
            population_size=config.population_size,
            generations=config.generations,
            elitism_count=config.elitism_count,
            crossover_rate=config.crossover_rate,
        )
        result = refiner.run(header.snapshot())
    else:
        header.add("Mode: Monte Carlo restarts.")
        if ctx.bridge.active:
            header.add("Previous month schedule found; month-boundary checks are active.")
        header.add(f"{config.attempts} attempt(s) will be run.")
        controller = MonteCarloController(engine, config.attempts, rng, workers=config.workers)
        result = controller.run(header.snapshot())

    clashes = bridge_adjacency_violations(result.schedule, ctx.bridge)
    if clashes:
        logger.warning(f"⚠️ Staff working both sides of the month boundary: {', '.join(clashes)}")

    logger.info(
        f"✅ Roster ready: {result.unfilled_slots} unfilled slot(s), quota deviation {result.deviation}"
    )
    return result
