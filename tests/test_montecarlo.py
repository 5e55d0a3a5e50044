import random
from dataclasses import replace

import pytest

from core.config import ClinicalConfig, NursingConfig
from core.run_log import RunLog
from exceptions.custom_errors import NoAttemptsError
from scheduler.builder import generate_roster
from scheduler.engine import GreedyEngine
from scheduler.montecarlo import MonteCarloController, is_better
from scheduler.setup import setup_context


def _controller(staff, slots, config, attempts, seed=0, workers=1):
    engine = GreedyEngine(setup_context(staff, slots, config))
    return MonteCarloController(engine, attempts, random.Random(seed), workers=workers)


def test_zero_retries_raise(clinical_team):
    staff, slots = clinical_team
    with pytest.raises(NoAttemptsError):
        generate_roster(staff, slots, ClinicalConfig(year=2024, month=1, max_retries=0))


def test_best_attempt_is_kept(clinical_team):
    staff, slots = clinical_team
    controller = _controller(staff, slots, ClinicalConfig(year=2024, month=1), attempts=6, seed=3)

    result = controller.run()

    assert 1 <= len(controller.history) <= 6
    best = min((h.unfilled_slots, h.deviation) for h in controller.history)
    assert (result.unfilled_slots, result.deviation) == best
    # ties keep the earlier attempt
    first_best = next(h for h in controller.history if (h.unfilled_slots, h.deviation) == best)
    assert result.schedule == controller.engine.run_seeded(first_best.seed).schedule


def test_perfect_roster_stops_early(make_staff, make_slot):
    staff = [make_staff("x", quota_service=1), make_staff("y", quota_service=1)]
    config = ClinicalConfig(year=2024, month=1, num_days=2)
    controller = _controller(staff, [make_slot("ward")], config, attempts=10)

    result = controller.run()

    assert result.unfilled_slots == 0
    assert result.deviation == 0
    assert len(controller.history) == 1


def test_pooled_run_stops_early_on_perfect_roster(make_staff, make_slot):
    staff = [make_staff("x", quota_service=1), make_staff("y", quota_service=1)]
    config = ClinicalConfig(year=2024, month=1, num_days=2)
    controller = _controller(staff, [make_slot("ward")], config, attempts=40, workers=2)

    result = controller.run()

    assert result.unfilled_slots == 0
    assert len(controller.history) == 1
    assert "(1 attempts)" in result.logs[0]


def test_same_seed_same_result(nursing_team):
    staff, slots = nursing_team
    config = NursingConfig(year=2024, month=2, max_retries=3, seed=21)

    assert generate_roster(staff, slots, config) == generate_roster(staff, slots, config)


def test_worker_pool_matches_sequential_run(clinical_team):
    staff, slots = clinical_team
    config = ClinicalConfig(year=2024, month=1)

    sequential = _controller(staff, slots, config, attempts=4, seed=13).run()
    pooled = _controller(staff, slots, config, attempts=4, seed=13, workers=2).run()

    assert pooled.schedule == sequential.schedule
    assert pooled.unfilled_slots == sequential.unfilled_slots


def test_header_comes_first_in_logs(clinical_team):
    staff, slots = clinical_team
    controller = _controller(staff, slots, ClinicalConfig(year=2024, month=1), attempts=2)

    result = controller.run(["header line"])

    assert result.logs[0] == "header line"
    assert result.logs[1].startswith("Best roster:")


def test_is_better_orders_by_unfilled_then_deviation(clinical_team):
    staff, slots = clinical_team
    base = GreedyEngine(setup_context(staff, slots, ClinicalConfig(year=2024, month=1))).run_seeded(1)
    assert is_better(base, None)
    assert is_better(replace(base, unfilled_slots=0, deviation=50), replace(base, unfilled_slots=1, deviation=0))
    assert is_better(replace(base, unfilled_slots=1, deviation=3), replace(base, unfilled_slots=1, deviation=4))
    assert not is_better(replace(base, unfilled_slots=1, deviation=4), replace(base, unfilled_slots=1, deviation=4))


def test_run_log_keeps_first_lines_only():
    log = RunLog(limit=3)
    log.extend(f"line {i}" for i in range(5))

    assert len(log) == 3
    assert log.snapshot() == ("line 0", "line 1", "line 2")
