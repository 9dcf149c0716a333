"""Active tour / active step tracking.

``NavigationState`` stores a lookup key for the active tour and a candidate
step index. The index is validated lazily against the tour's *current* step
count every time it is read, so a stale index left behind by a concurrent
edit reads back as "no step selected" instead of pointing past the end.
"""

from __future__ import annotations

from typing import Optional

from tours.domain.models import Step, Tour
from tours.repository import TourRepository

__all__ = ["NavigationState"]


class NavigationState:
    def __init__(self, repository: TourRepository) -> None:
        self._repository = repository
        self._active_tour_id: Optional[str] = None
        self._active_step_index: Optional[int] = None
        repository.attach_navigation(self)

    # Accessors ----------------------------------------------------------
    @property
    def active_tour_id(self) -> Optional[str]:
        if self._active_tour_id is not None and self._active_tour_id not in self._repository:
            return None
        return self._active_tour_id

    def get_active_tour(self) -> Optional[Tour]:
        if self._active_tour_id is None:
            return None
        return self._repository.find(self._active_tour_id)

    def get_active_step_index(self) -> Optional[int]:
        tour = self.get_active_tour()
        index = self._active_step_index
        if tour is None or index is None:
            return None
        if 0 <= index < tour.step_count:
            return index
        return None

    def get_active_step(self) -> Optional[Step]:
        tour = self.get_active_tour()
        index = self.get_active_step_index()
        if tour is None or index is None:
            return None
        return tour.steps[index]

    def get_prev_step(self) -> Optional[Step]:
        return self._adjacent(-1)

    def get_next_step(self) -> Optional[Step]:
        return self._adjacent(1)

    def has_prev(self) -> bool:
        return self.get_prev_step() is not None

    def has_next(self) -> bool:
        return self.get_next_step() is not None

    # Mutation -----------------------------------------------------------
    def set_active_tour(self, tour_id: Optional[str]) -> None:
        """Activate ``tour_id`` (or nothing) and unset the step index.

        Unknown ids leave the state cleared rather than dangling.
        """
        if tour_id is not None and tour_id not in self._repository:
            tour_id = None
        self._active_tour_id = tour_id
        self._active_step_index = None

    def set_active_step_index(self, index: Optional[int]) -> None:
        """Select a step of the active tour.

        Out-of-range requests clamp to "unset" silently: step counts can change
        between the caller computing an index and this call.
        """
        tour = self.get_active_tour()
        if tour is None or index is None or not 0 <= index < tour.step_count:
            self._active_step_index = None
            return
        self._active_step_index = index

    def clear(self) -> None:
        self._active_tour_id = None
        self._active_step_index = None

    # Internal -----------------------------------------------------------
    def _adjacent(self, offset: int) -> Optional[Step]:
        tour = self.get_active_tour()
        index = self.get_active_step_index()
        if tour is None or index is None:
            return None
        return tour.step_at(index + offset)

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return (
            f"NavigationState(active_tour_id={self._active_tour_id!r}, "
            f"active_step_index={self._active_step_index!r})"
        )
