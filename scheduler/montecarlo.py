import logging
import random
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, replace
from functools import partial
from typing import Iterable, Iterator, List, Optional, Sequence

from core.models import RosterResult
from core.run_log import RunLog
from exceptions.custom_errors import NoAttemptsError
from scheduler.engine import GreedyEngine
from scheduler.setup import setup_context

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttemptSummary:
    attempt: int
    seed: int
    unfilled_slots: int
    deviation: int


def is_better(candidate: RosterResult, incumbent: Optional[RosterResult]) -> bool:
    """Strictly fewer unfilled slots wins; on a tie, strictly lower quota deviation."""
    if incumbent is None:
        return True
    if candidate.unfilled_slots != incumbent.unfilled_slots:
        return candidate.unfilled_slots < incumbent.unfilled_slots
    return candidate.deviation < incumbent.deviation


def _run_in_worker(inputs, seed: int) -> RosterResult:
    # each worker process rebuilds the static context from picklable inputs
    return GreedyEngine(setup_context(*inputs)).run_seeded(seed)


class MonteCarloController:
    """
    Run the greedy engine repeatedly with independent seeds and keep the best roster.

    Seeds are drawn up front from the controller's random source, so a process pool
    returns the same roster as a sequential run.
    """

    def __init__(self, engine: GreedyEngine, attempts: int, rng: random.Random, workers: int = 1):
        self.engine = engine
        self.attempts = attempts
        self.rng = rng
        self.workers = workers
        self.history: List[AttemptSummary] = []

    def _results(self, seeds: Sequence[int]) -> Iterator[RosterResult]:
        if self.workers <= 1:
            for seed in seeds:
                yield self.engine.run_seeded(seed)
            return

        ctx = self.engine.ctx
        inputs = (ctx.staff, ctx.slot_types, ctx.config, ctx.bridge.days)
        chunksize = max(1, len(seeds) // (self.workers * 4))
        executor = ProcessPoolExecutor(max_workers=self.workers)
        try:
            yield from executor.map(partial(_run_in_worker, inputs), seeds, chunksize=chunksize)
        finally:
            # attempts not yet started are dropped after an early stop
            executor.shutdown(wait=True, cancel_futures=True)

    def run(self, header: Iterable[str] = ()) -> RosterResult:
        if self.attempts <= 0:
            raise NoAttemptsError("Monte Carlo search needs at least one attempt (max_retries > 0).")

        seeds = [self.rng.getrandbits(64) for _ in range(self.attempts)]
        self.history = []
        best: Optional[RosterResult] = None

        results = self._results(seeds)
        try:
            for i, (seed, result) in enumerate(zip(seeds, results), start=1):
                self.history.append(
                    AttemptSummary(i, seed, result.unfilled_slots, result.deviation)
                )
                if is_better(result, best):
                    best = result
                    logger.debug(
                        f"Attempt {i}: new best with {result.unfilled_slots} unfilled, "
                        f"deviation {result.deviation}"
                    )
                if best.unfilled_slots == 0 and best.deviation == 0:
                    break
        finally:
            results.close()

        logs = RunLog(header)
        logs.add(
            f"Best roster: {best.unfilled_slots} unfilled slots, quota deviation {best.deviation} "
            f"({len(self.history)} attempts)."
        )
        logs.extend(best.logs)
        return replace(best, logs=logs.snapshot())
