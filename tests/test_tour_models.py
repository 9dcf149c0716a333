from __future__ import annotations

from datetime import datetime, timezone

import pytest

from tours.domain.models import Direction, Step, Tour
from tours.errors import ErrorKind, InvalidStepError


def test_step_location_both_or_neither():
    assert Step(title="a").is_navigable is False
    assert Step(title="b", file="app.py", line=3).location_label == "app.py:3"
    with pytest.raises(InvalidStepError) as exc:
        Step(title="c", file="app.py")
    assert exc.value.kind is ErrorKind.INVALID_STEP
    with pytest.raises(InvalidStepError):
        Step(title="d", line=4)


def test_step_requires_title():
    with pytest.raises(InvalidStepError):
        Step(title="")


def test_step_ids_are_generated_and_distinct():
    assert Step(title="a").id != Step(title="a").id


def test_tour_steps_are_stored_as_tuple():
    tour = Tour(id="t1", title="T", tour_file="t.tour", steps=[Step(title="a")])
    assert isinstance(tour.steps, tuple)
    assert tour.step_count == 1
    assert tour.step_at(1) is None
    assert tour.step_at(-1) is None


def test_tour_json_shape():
    step_a = Step(title="Entry", description="main", file="app.py", line=10, id="s1")
    step_b = Step(title="Notes", description="", id="s2")
    tour = Tour(
        id="t1",
        title="Intro",
        tour_file="intro.tour",
        description="d",
        created_at=datetime(2024, 5, 1, 9, 30),
        steps=(step_a, step_b),
    )
    data = tour.to_json()
    assert data == {
        "id": "t1",
        "title": "Intro",
        "tourFile": "intro.tour",
        "description": "d",
        "createdAt": "2024-05-01T09:30:00",
        "steps": [
            {"id": "s1", "title": "Entry", "description": "main", "file": "app.py", "line": 10},
            {"id": "s2", "title": "Notes", "description": ""},
        ],
    }
    assert Tour.from_json(data) == tour


def test_from_json_fills_missing_optional_fields():
    tour = Tour.from_json(
        {"title": "X", "tourFile": "x.tour", "steps": [{"title": "only", "line": "7", "file": "a.py"}]}
    )
    assert tour.id
    assert tour.description == ""
    assert tour.steps[0].line == 7
    assert tour.steps[0].id


def test_from_json_rejects_half_location():
    with pytest.raises(InvalidStepError):
        Step.from_json({"title": "bad", "file": "a.py"})


def test_direction_offsets():
    assert Direction.UP.offset == -1
    assert Direction("down").offset == 1


def test_from_json_accepts_utc_z_suffix():
    tour = Tour.from_json({"title": "X", "tourFile": "x.tour", "createdAt": "2024-05-01T12:30:00Z"})
    assert tour.created_at == datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
