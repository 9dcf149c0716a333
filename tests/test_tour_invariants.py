"""Randomised operation sequences; invariants are checked after every call."""

from __future__ import annotations

import random

import pytest

from tests.factories import make_step
from tours.domain.models import Direction
from tours.engine import TourStateEngine
from tours.errors import TourError
from tours.memory_store import InMemoryTourStore

TITLES = ["Intro", "Setup", "Deep Dive", "Wrap"]
FILES = ["intro.tour", "setup.tour", "deep.tour", "wrap.tour", "bad.txt"]


def _check_invariants(engine: TourStateEngine) -> None:
    tours = engine.list_tours()
    titles = [t.title for t in tours]
    files = [t.tour_file for t in tours]
    assert len(titles) == len(set(titles))
    assert len(files) == len(set(files))
    for t in tours:
        assert len({s.id for s in t.steps}) == len(t.steps)
        for s in t.steps:
            assert (s.file is None) == (s.line is None)
    active = engine.navigation.active_tour_id
    if active is not None:
        assert engine.find_tour(active) is not None
        tour = engine.get_active_tour()
        index = engine.get_active_step_index()
        if tour.step_count == 0:
            assert index is None
        elif index is not None:
            assert 0 <= index < tour.step_count


def _random_op(engine: TourStateEngine, rng: random.Random) -> None:
    tours = engine.list_tours()
    tour = rng.choice(tours) if tours else None
    op = rng.randrange(9)
    if op == 0 or tour is None:
        engine.create_tour(rng.choice(TITLES), rng.choice(FILES))
    elif op == 1:
        engine.rename_tour(tour, rng.choice(TITLES))
    elif op == 2:
        engine.delete_tour(tour)
    elif op == 3:
        if rng.random() < 0.5:
            engine.add_step(tour, make_step(f"s{rng.randrange(100)}", file="a.py", line=rng.randrange(1, 50)))
        else:
            engine.add_step(tour, make_step(f"s{rng.randrange(100)}"))
    elif op == 4:
        engine.edit_step(tour, rng.randrange(-1, tour.step_count + 1), make_step("edited"))
    elif op == 5:
        engine.move_step(tour, rng.randrange(-1, tour.step_count + 1), rng.choice(list(Direction)))
    elif op == 6:
        engine.delete_step(tour, rng.randrange(-1, tour.step_count + 1))
    elif op == 7 and tour.step_count:
        engine.select_step(tour.id, rng.randrange(tour.step_count))
    else:
        engine.go_next() if rng.random() < 0.5 else engine.go_prev()


@pytest.mark.parametrize("seed", range(8))
def test_random_operation_sequences_keep_invariants(seed):
    rng = random.Random(seed)
    engine = TourStateEngine(store=InMemoryTourStore())
    engine.reload_state()
    for _ in range(300):
        try:
            _random_op(engine, rng)
        except TourError:
            pass
        _check_invariants(engine)


def test_move_down_then_up_restores_sequence():
    engine = TourStateEngine()
    tour = engine.create_tour("T", "t.tour")
    for name in "abcde":
        tour = engine.add_step(tour, make_step(name))
    original = tour.steps
    for i in range(len(original) - 1):
        engine.move_step(tour.id, i, Direction.DOWN)
        restored = engine.move_step(tour.id, i + 1, Direction.UP)
        assert restored.steps == original
