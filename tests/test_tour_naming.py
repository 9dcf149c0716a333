from __future__ import annotations

import pytest

from tours.naming import (
    TourValidator,
    file_name_from_title,
    has_tour_extension,
    sanitize,
    unique_file_name,
)


def test_sanitize():
    assert sanitize("  Hello, World!  ") == "Hello_World"
    assert sanitize("a - b") == "a_b"


@pytest.mark.parametrize(
    "name,ok",
    [("intro.tour", True), ("a.tour", True), (".tour", False), ("intro.tours", False), ("intro", False)],
)
def test_has_tour_extension(name, ok):
    assert has_tour_extension(name) is ok


def test_file_name_from_title():
    assert file_name_from_title("My First Tour") == "My_First_Tour.tour"
    assert file_name_from_title("!!!") == "newTour.tour"


def test_unique_file_name_suffixes():
    taken = ["intro.tour", "intro_2.tour"]
    assert unique_file_name("intro", taken) == "intro_3.tour"
    assert unique_file_name("other", taken) == "other.tour"


def test_tour_validator():
    taken = {"Intro"}
    validator = TourValidator(lambda text: text not in taken)
    assert validator.check_input("Fresh")
    assert not validator.check_input("Intro")
    assert not validator.check_input("")
    assert not validator.can_close(None)
