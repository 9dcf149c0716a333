"""Canonical in-memory collection of tours for one workspace session.

The repository is the single source of truth the editor mutates and the UI
reads from. It enforces the two repository-wide invariants:

- tour titles are pairwise distinct (case-sensitive)
- tour file handles are pairwise distinct

Insertion order is preserved and is the order ``list()`` reports.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Sequence, Tuple

from tours.domain.models import Tour
from tours.errors import DuplicateFileError, DuplicateTitleError, TourNotFoundError

if TYPE_CHECKING:  # pragma: no cover
    from tours.navigation import NavigationState

__all__ = ["TourRepository"]

_logger = logging.getLogger(__name__)


class TourRepository:
    def __init__(self, tours: Iterable[Tour] = ()) -> None:
        self._tours: Dict[str, Tour] = {}
        self._navigation: Optional["NavigationState"] = None
        for tour in tours:
            self.insert(tour)

    def attach_navigation(self, navigation: "NavigationState") -> None:
        """Register the navigation state to clear on removal / reload."""
        self._navigation = navigation

    # Queries ------------------------------------------------------------
    def list(self) -> Tuple[Tour, ...]:
        return tuple(self._tours.values())

    def find(self, tour_id: str) -> Optional[Tour]:
        return self._tours.get(tour_id)

    def get(self, tour_id: str) -> Tour:
        tour = self._tours.get(tour_id)
        if tour is None:
            raise TourNotFoundError(tour_id=tour_id)
        return tour

    def __len__(self) -> int:
        return len(self._tours)

    def __contains__(self, tour_id: object) -> bool:
        return tour_id in self._tours

    # Uniqueness predicates ------------------------------------------------
    def is_title_available(self, title: str, *, exclude_id: str | None = None) -> bool:
        return all(t.title != title for t in self._tours.values() if t.id != exclude_id)

    def is_file_available(self, tour_file: str, *, exclude_id: str | None = None) -> bool:
        return all(t.tour_file != tour_file for t in self._tours.values() if t.id != exclude_id)

    def check_unique(self, tour: Tour, *, exclude_id: str | None = None) -> None:
        """Raise if ``tour`` would clash with a tour other than ``exclude_id``."""
        if not self.is_title_available(tour.title, exclude_id=exclude_id):
            raise DuplicateTitleError(title=tour.title)
        if not self.is_file_available(tour.tour_file, exclude_id=exclude_id):
            raise DuplicateFileError(tour_file=tour.tour_file)

    # Mutation -----------------------------------------------------------
    def load_all(self, tours: Sequence[Tour]) -> None:
        """Replace the whole collection; all-or-nothing.

        The incoming batch is validated against itself before anything is
        replaced. Navigation state is cleared on success.
        """
        staged = TourRepository()
        for tour in tours:
            staged.insert(tour)
        self._tours = staged._tours
        if self._navigation is not None:
            self._navigation.clear()
        _logger.info("Loaded %d tours", len(self._tours))
        for tour in self._tours.values():
            _logger.debug("Loaded tour %r with %d steps", tour.title, tour.step_count)

    def insert(self, tour: Tour) -> None:
        if tour.id in self._tours:
            raise ValueError(f"tour id {tour.id!r} already present")
        self.check_unique(tour)
        self._tours[tour.id] = tour

    def remove(self, tour_id: str) -> Tour:
        tour = self._tours.pop(tour_id, None)
        if tour is None:
            raise TourNotFoundError(tour_id=tour_id)
        if self._navigation is not None and self._navigation.active_tour_id == tour_id:
            self._navigation.clear()
        return tour

    def replace(self, tour: Tour) -> Tour:
        """Swap in a new version of an existing tour, keeping its position.

        Returns the previous version.
        """
        previous = self._tours.get(tour.id)
        if previous is None:
            raise TourNotFoundError(tour_id=tour.id)
        self.check_unique(tour, exclude_id=tour.id)
        self._tours[tour.id] = tour
        return previous

    def titles(self) -> List[str]:
        return [t.title for t in self._tours.values()]

    def tour_files(self) -> List[str]:
        return [t.tour_file for t in self._tours.values()]
