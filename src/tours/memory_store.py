"""In-process ``TourStore`` used by tests and headless sessions."""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from tours.domain.models import Tour

__all__ = ["InMemoryTourStore"]


class InMemoryTourStore:
    """Keeps tours keyed by id; ``load_all`` returns them in save order.

    ``saved`` and ``deleted`` record every call so tests can assert on the
    persistence hand-off.
    """

    def __init__(self, tours: Iterable[Tour] = ()) -> None:
        self._tours: Dict[str, Tour] = {t.id: t for t in tours}
        self.saved: List[Tour] = []
        self.deleted: List[Tour] = []

    def load_all(self) -> Tuple[Tour, ...]:
        return tuple(self._tours.values())

    def save(self, tour: Tour) -> None:
        self._tours[tour.id] = tour
        self.saved.append(tour)

    def delete(self, tour: Tour) -> None:
        self._tours.pop(tour.id, None)
        self.deleted.append(tour)
