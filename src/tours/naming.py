"""Tour file naming helpers and input validators."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterable

from config import settings

__all__ = [
    "sanitize",
    "has_tour_extension",
    "file_name_from_title",
    "unique_file_name",
    "TourValidator",
]

_SANITIZE_PATTERN = re.compile(r"[^\w\s-]")
_WS_PATTERN = re.compile(r"[-\s]+")


def sanitize(value: str) -> str:
    value = _SANITIZE_PATTERN.sub("", value).strip()
    return _WS_PATTERN.sub("_", value)


def has_tour_extension(file_name: str) -> bool:
    # A bare ".tour" has no stem and is not a usable handle
    return len(file_name) > len(settings.TOUR_EXTENSION) and file_name.endswith(
        settings.TOUR_EXTENSION
    )


def file_name_from_title(title: str) -> str:
    stem = sanitize(title) or settings.DEFAULT_TOUR_FILE_STEM
    return stem + settings.TOUR_EXTENSION


def unique_file_name(title: str, taken: Iterable[str]) -> str:
    """Derive a file name from ``title`` that is not in ``taken``.

    Collisions get a numeric suffix: ``intro.tour``, ``intro_2.tour``, ...
    """
    taken_set = set(taken)
    candidate = file_name_from_title(title)
    if candidate not in taken_set:
        return candidate
    stem = candidate[: -len(settings.TOUR_EXTENSION)]
    n = 2
    while f"{stem}_{n}{settings.TOUR_EXTENSION}" in taken_set:
        n += 1
    return f"{stem}_{n}{settings.TOUR_EXTENSION}"


@dataclass(frozen=True)
class TourValidator:
    """Predicate wrapper used by input dialogs to accept or reject text."""

    predicate: Callable[[str], bool]

    def check_input(self, text: str | None) -> bool:
        return bool(text) and self.predicate(text)  # type: ignore[arg-type]

    def can_close(self, text: str | None) -> bool:
        return self.check_input(text)
