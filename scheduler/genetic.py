import logging
import random
from dataclasses import replace
from typing import Iterable, List, Optional

from core.models import Assignment, RosterResult
from core.run_log import RunLog
from exceptions.custom_errors import NoAttemptsError
from scheduler.engine import GreedyEngine
from scheduler.stats import fitness_of, summarize
from utils.constants import CROSSOVER_RATE, ELITISM_COUNT, GENERATIONS, POPULATION_SIZE

logger = logging.getLogger(__name__)


class GeneticRefiner:
    """
    Evolve a population of greedy rosters with elitism, one-point crossover over days
    and same-day swap mutation. Fitness is `unfilled * 10000 + quota deviation`, lower is better.
    """

    def __init__(
        self,
        engine: GreedyEngine,
        rng: random.Random,
        population_size: int = POPULATION_SIZE,
        generations: int = GENERATIONS,
        elitism_count: int = ELITISM_COUNT,
        crossover_rate: float = CROSSOVER_RATE,
    ):
        self.engine = engine
        self.ctx = engine.ctx
        self.rng = rng
        self.population_size = population_size
        self.generations = generations
        self.elitism_count = elitism_count
        self.crossover_rate = crossover_rate
        self.history: List[float] = []
        """Best fitness at the start of each generation, plus the final population."""

    def scored(self, result: RosterResult) -> RosterResult:
        return replace(result, fitness=fitness_of(result.unfilled_slots, result.deviation))

    def _rebuild(self, days) -> RosterResult:
        return self.scored(summarize(days, self.ctx))

    def crossover(
        self, parent_a: RosterResult, parent_b: RosterResult, split_day: Optional[int] = None
    ) -> RosterResult:
        """
        Days 1..k from `parent_a`, k+1..N from `parent_b`. Staff working day k who reappear
        on day k+1 are replaced by EMPTY there.
        """
        n = self.ctx.num_days
        if split_day is None:
            split_day = self.rng.randint(2, n - 1) if n >= 3 else n
        k = min(max(split_day, 1), n)

        days = [parent_a.day(d) if d <= k else parent_b.day(d) for d in range(1, n + 1)]
        if k < n:
            boundary = days[k - 1].staff_ids
            repaired = tuple(
                Assignment.empty(a.day, a.slot_type_id, a.is_emergency)
                if not a.is_empty and a.staff_id in boundary
                else a
                for a in days[k].assignments
            )
            days[k] = replace(days[k], assignments=repaired)
        return self._rebuild(days)

    def mutate(self, parent: RosterResult) -> RosterResult:
        """
        Swap two staffed assignments of different slot types on one day, when each person
        can take the other's slot. Days with EMPTY assignments are picked first.
        """
        ctx = self.ctx
        problem_days = [ds.day for ds in parent.schedule if ds.has_empty]
        day = self.rng.choice(problem_days) if problem_days else self.rng.randint(1, ctx.num_days)
        ds = parent.day(day)
        if len(ds.assignments) < 2:
            return parent

        i = self.rng.randrange(len(ds.assignments))
        j = self.rng.randrange(len(ds.assignments))
        first, second = ds.assignments[i], ds.assignments[j]
        if i == j or first.is_empty or second.is_empty:
            return parent
        if first.slot_type_id == second.slot_type_id:
            return parent

        person_a = ctx.staff_by_id.get(first.staff_id)
        person_b = ctx.staff_by_id.get(second.staff_id)
        slot_a = ctx.slots_by_id.get(first.slot_type_id)
        slot_b = ctx.slots_by_id.get(second.slot_type_id)
        if None in (person_a, person_b, slot_a, slot_b):
            return parent
        if not (ctx.profile.can_take(person_a, slot_b) and ctx.profile.can_take(person_b, slot_a)):
            return parent

        assignments = list(ds.assignments)
        assignments[i] = Assignment.for_staff(day, slot_a, person_b)
        assignments[j] = Assignment.for_staff(day, slot_b, person_a)

        days = list(parent.schedule)
        days[parent.position_of(day)] = replace(ds, assignments=tuple(assignments))
        return self._rebuild(days)

    def run(self, header: Iterable[str] = ()) -> RosterResult:
        if self.population_size <= 0:
            raise NoAttemptsError("Genetic search needs a population of at least one roster.")

        logger.info(
            f"🧬 Genetic refinement: population {self.population_size}, {self.generations} generations"
        )
        population = [
            self.scored(self.engine.run_seeded(self.rng.getrandbits(64)))
            for _ in range(self.population_size)
        ]
        self.history = []

        for generation in range(self.generations):
            population.sort(key=lambda r: r.fitness)
            best = population[0]
            self.history.append(best.fitness)
            logger.debug(f"Generation {generation + 1}: best fitness {best.fitness}")
            if best.fitness == 0:
                break

            next_gen = population[: self.elitism_count]
            parents = population[: max(1, len(population) // 2)]
            while len(next_gen) < self.population_size:
                if self.rng.random() < self.crossover_rate:
                    child = self.crossover(self.rng.choice(parents), self.rng.choice(parents))
                else:
                    child = self.mutate(self.rng.choice(parents))
                next_gen.append(child)
            population = next_gen

        population.sort(key=lambda r: r.fitness)
        best = population[0]
        self.history.append(best.fitness)

        logs = RunLog(header)
        logs.add(f"Genetic refinement finished. Best fitness: {best.fitness}")
        logs.extend(best.logs)
        return replace(best, logs=logs.snapshot())
