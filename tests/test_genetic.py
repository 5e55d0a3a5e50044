import random

import pytest

from core.config import ClinicalConfig
from core.models import Assignment, DaySchedule
from exceptions.custom_errors import NoAttemptsError
from scheduler.builder import generate_roster
from scheduler.engine import GreedyEngine
from scheduler.genetic import GeneticRefiner
from scheduler.setup import setup_context
from scheduler.stats import fitness_of, summarize


def _refiner(staff, slots, config, seed=0, **kwargs):
    return GeneticRefiner(GreedyEngine(setup_context(staff, slots, config)), random.Random(seed), **kwargs)


def _roster(ctx, plan):
    """Build a roster from {day: [(slot_id, staff_id), ...]}."""
    days = [
        DaySchedule(
            day=d,
            weekday=ctx.days[d].weekday,
            assignments=tuple(
                Assignment.for_staff(d, ctx.slots_by_id[slot_id], ctx.staff_by_id[sid])
                for slot_id, sid in plan[d]
            ),
            is_weekend=ctx.days[d].is_weekend,
        )
        for d in sorted(plan)
    ]
    return summarize(days, ctx)


def test_crossover_repairs_the_split_boundary(make_staff, make_slot):
    staff = [make_staff("x"), make_staff("y"), make_staff("z")]
    refiner = _refiner(staff, [make_slot("ward")], ClinicalConfig(year=2024, month=1, num_days=4))
    ctx = refiner.ctx
    parent_a = _roster(ctx, {1: [("ward", "x")], 2: [("ward", "y")], 3: [("ward", "x")], 4: [("ward", "y")]})
    parent_b = _roster(ctx, {1: [("ward", "z")], 2: [("ward", "x")], 3: [("ward", "y")], 4: [("ward", "z")]})

    child = refiner.crossover(parent_a, parent_b, split_day=2)

    assert child.day(1) == parent_a.day(1)
    assert child.day(2) == parent_a.day(2)
    assert child.day(3).assignments[0].is_empty
    assert child.day(4) == parent_b.day(4)
    assert child.unfilled_slots == 1
    assert child.fitness == fitness_of(child.unfilled_slots, child.deviation)
    # parents are untouched
    assert parent_b.day(3).staff_ids == {"y"}


def test_crossover_split_stays_inside_the_month(clinical_team):
    staff, slots = clinical_team
    refiner = _refiner(staff, slots, ClinicalConfig(year=2024, month=1), seed=4)
    a = refiner.engine.run_seeded(1)
    b = refiner.engine.run_seeded(2)

    child = refiner.crossover(a, b)

    assert [ds.day for ds in child.schedule] == list(range(1, 32))
    assert child.day(1) == a.day(1)
    assert child.day(31) == b.day(31)


def test_mutation_swaps_across_slot_types(make_staff, make_slot):
    staff = [make_staff("x"), make_staff("y")]
    slots = [make_slot("ward"), make_slot("er", is_emergency=True)]
    refiner = _refiner(staff, slots, ClinicalConfig(year=2024, month=1, num_days=3), seed=6)
    plan = {d: [("ward", "x"), ("er", "y")] for d in (1, 2, 3)}
    parent = _roster(refiner.ctx, plan)

    children = [refiner.mutate(parent) for _ in range(50)]
    swapped = [c for c in children if c is not parent]

    assert swapped
    child = swapped[0]
    changed = [ds for ds in child.schedule if ds != parent.day(ds.day)]
    assert len(changed) == 1
    by_slot = {a.slot_type_id: a for a in changed[0].assignments}
    assert by_slot["ward"].staff_id == "y"
    assert by_slot["er"].staff_id == "x"
    assert by_slot["er"].is_emergency
    assert not by_slot["ward"].is_emergency


def test_mutation_never_breaks_eligibility(make_staff, make_slot):
    staff = [make_staff("x", 1), make_staff("t", 3)]
    slots = [make_slot("ward", tiers=(1, 3)), make_slot("er", tiers=(1,))]
    refiner = _refiner(staff, slots, ClinicalConfig(year=2024, month=1, num_days=3), seed=8)
    parent = _roster(refiner.ctx, {d: [("ward", "t"), ("er", "x")] for d in (1, 2, 3)})

    for _ in range(50):
        assert refiner.mutate(parent) is parent


def test_best_fitness_never_gets_worse(clinical_team):
    staff, slots = clinical_team
    refiner = _refiner(
        staff,
        slots,
        ClinicalConfig(year=2024, month=1),
        seed=2,
        population_size=6,
        generations=4,
        elitism_count=1,
    )

    result = refiner.run()

    assert refiner.history
    assert all(later <= earlier for earlier, later in zip(refiner.history, refiner.history[1:]))
    assert result.fitness == refiner.history[-1]
    assert result.fitness == fitness_of(result.unfilled_slots, result.deviation)


def test_empty_population_raises(clinical_team):
    staff, slots = clinical_team
    with pytest.raises(NoAttemptsError):
        _refiner(staff, slots, ClinicalConfig(year=2024, month=1), population_size=0).run()


def test_builder_runs_genetic_mode(clinical_team):
    staff, slots = clinical_team
    config = ClinicalConfig(
        year=2024,
        month=1,
        seed=10,
        use_genetic_algorithm=True,
        population_size=4,
        generations=2,
        elitism_count=1,
    )

    result = generate_roster(staff, slots, config)

    assert "Mode: genetic refinement." in result.logs
    assert any(line.startswith("Genetic refinement finished") for line in result.logs)
    assert result.fitness is not None


def test_mutation_keeps_required_groups(make_staff, make_slot):
    staff = [make_staff("a", group="A"), make_staff("b", group="B")]
    slots = [make_slot("x", required_group="A"), make_slot("y")]
    refiner = _refiner(staff, slots, ClinicalConfig(year=2024, month=1, num_days=3), seed=0)
    parent = _roster(refiner.ctx, {d: [("x", "a"), ("y", "b")] for d in (1, 2, 3)})

    for _ in range(50):
        assert refiner.mutate(parent) is parent


def test_can_take_combines_eligibility_and_group(make_staff, make_slot):
    refiner = _refiner(
        [make_staff("a", group="A"), make_staff("b", group="B"), make_staff("t", 3, group="A")],
        [make_slot("x", required_group="A"), make_slot("y", tiers=(1, 3), required_group="Any")],
        ClinicalConfig(year=2024, month=1),
    )
    ctx = refiner.ctx
    can_take = ctx.profile.can_take

    assert can_take(ctx.staff_by_id["a"], ctx.slots_by_id["x"])
    assert not can_take(ctx.staff_by_id["b"], ctx.slots_by_id["x"])
    assert not can_take(ctx.staff_by_id["t"], ctx.slots_by_id["x"])
    assert can_take(ctx.staff_by_id["b"], ctx.slots_by_id["y"])
