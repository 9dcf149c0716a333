"""Validated mutations over the tour repository.

``TourEditor`` is the only component that changes tours or steps. Each
operation follows the same shape:

1. refuse if an event delivery is in progress (re-entrant call)
2. resolve the target tour from the repository by id
3. refuse if the target is the reserved onboarding tour
4. build the new ``Tour`` value and validate it against the repository
5. hand it to the store (if any), commit it, fix up navigation state
6. publish exactly one ``TOUR_LIST_CHANGED`` event

Any failure in steps 1-5 raises before the repository or navigation state
is touched, so callers never observe a half-applied change.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional, Union

from config import settings
from gui.services.event_bus import EventBus, TourEvent
from tours.domain.models import Direction, Step, Tour, new_id
from tours.errors import (
    CannotMoveError,
    IndexOutOfRangeError,
    InvalidFileNameError,
    InvalidTitleError,
    ReadOnlyTourError,
    ReentrantMutationError,
    TourError,
)
from tours.naming import has_tour_extension
from tours.navigation import NavigationState
from tours.onboarding import is_onboarding_tour
from tours.protocols import TourStore
from tours.repository import TourRepository

__all__ = ["TourEditor", "TourRef"]

_logger = logging.getLogger(__name__)

TourRef = Union[Tour, str]


class TourEditor:
    def __init__(
        self,
        repository: TourRepository,
        navigation: NavigationState,
        bus: EventBus,
        store: Optional[TourStore] = None,
    ) -> None:
        self._repository = repository
        self._navigation = navigation
        self._bus = bus
        self._store = store

    # Tours --------------------------------------------------------------
    def create_tour(self, title: str, tour_file: str, description: str = "") -> Tour:
        self._guard("create_tour")
        try:
            if not title:
                raise InvalidTitleError(title=title)
            if title == settings.ONBOARDING_TOUR_TITLE:
                raise ReadOnlyTourError(title=title)
            if not has_tour_extension(tour_file):
                raise InvalidFileNameError(tour_file=tour_file)
            if tour_file == settings.ONBOARDING_TOUR_FILE:
                raise ReadOnlyTourError(tour_file=tour_file)
            tour = Tour(
                id=new_id(),
                title=title,
                tour_file=tour_file,
                description=description,
                created_at=datetime.now(),
            )
            self._repository.check_unique(tour)
        except TourError as exc:
            self._rejected("create_tour", exc)
            raise
        self._save(tour)
        self._repository.insert(tour)
        _logger.info("Created tour %r (file %s)", tour.title, tour.tour_file)
        return self._changed(tour)

    def rename_tour(self, tour: TourRef, new_title: str) -> Tour:
        self._guard("rename_tour")
        try:
            current = self._writable(tour)
            if not new_title:
                raise InvalidTitleError(title=new_title)
            if new_title == settings.ONBOARDING_TOUR_TITLE:
                raise ReadOnlyTourError(title=new_title)
            updated = replace(current, title=new_title)
            self._repository.check_unique(updated, exclude_id=updated.id)
        except TourError as exc:
            self._rejected("rename_tour", exc)
            raise
        self._commit(updated)
        _logger.info("Renamed tour %r to %r", current.title, new_title)
        return self._changed(updated)

    def delete_tour(self, tour: TourRef) -> Tour:
        self._guard("delete_tour")
        try:
            current = self._writable(tour)
        except TourError as exc:
            self._rejected("delete_tour", exc)
            raise
        if self._store is not None:
            self._store.delete(current)
        # remove() clears navigation when the active tour goes away
        self._repository.remove(current.id)
        _logger.info("Deleted tour %r (file %s)", current.title, current.tour_file)
        return self._changed(current)

    # Steps --------------------------------------------------------------
    def add_step(self, tour: TourRef, step: Step) -> Tour:
        self._guard("add_step")
        try:
            current = self._writable(tour)
        except TourError as exc:
            self._rejected("add_step", exc)
            raise
        if current.index_of(step.id) is not None:
            step = replace(step, id=new_id())
        updated = replace(current, steps=current.steps + (step,))
        self._commit(updated)
        _logger.info("Added step %r to tour %r", step.title, updated.title)
        return self._changed(updated)

    def edit_step(self, tour: TourRef, index: int, new_step: Step) -> Tour:
        self._guard("edit_step")
        try:
            current = self._writable(tour)
            self._check_index(current, index)
        except TourError as exc:
            self._rejected("edit_step", exc)
            raise
        # The slot keeps its identity; only content and location change
        new_step = replace(new_step, id=current.steps[index].id)
        steps = list(current.steps)
        steps[index] = new_step
        updated = replace(current, steps=tuple(steps))
        self._commit(updated)
        _logger.info("Updated step %d of tour %r", index, updated.title)
        return self._changed(updated)

    def move_step(self, tour: TourRef, index: int, direction: Direction) -> Tour:
        self._guard("move_step")
        try:
            current = self._writable(tour)
            self._check_index(current, index)
            target = index + Direction(direction).offset
            if not 0 <= target < current.step_count:
                raise CannotMoveError(
                    tour_id=current.id, index=index, direction=Direction(direction).value
                )
        except TourError as exc:
            self._rejected("move_step", exc)
            raise
        steps = list(current.steps)
        steps[index], steps[target] = steps[target], steps[index]
        updated = replace(current, steps=tuple(steps))
        active = self._active_index_in(current)
        self._commit(updated)
        if active == index:
            self._navigation.set_active_step_index(target)
        elif active == target:
            self._navigation.set_active_step_index(index)
        _logger.info("Moved step %d of tour %r to %d", index, updated.title, target)
        return self._changed(updated)

    def delete_step(self, tour: TourRef, index: int) -> Tour:
        self._guard("delete_step")
        try:
            current = self._writable(tour)
            self._check_index(current, index)
        except TourError as exc:
            self._rejected("delete_step", exc)
            raise
        removed = current.steps[index]
        updated = replace(current, steps=current.steps[:index] + current.steps[index + 1 :])
        active = self._active_index_in(current)
        self._commit(updated)
        if active is not None:
            remaining = updated.step_count
            if remaining == 0:
                self._navigation.set_active_step_index(None)
            elif active == index:
                self._navigation.set_active_step_index(min(remaining - 1, index))
            elif active > index:
                self._navigation.set_active_step_index(active - 1)
        _logger.info("Deleted step %r from tour %r", removed.title, updated.title)
        return self._changed(updated)

    # Internal -----------------------------------------------------------
    def _guard(self, operation: str) -> None:
        if self._bus.dispatching:
            during = self._bus.current_event.name.value
            exc = ReentrantMutationError(operation=operation, during=during)
            self._rejected(operation, exc)
            raise exc

    def _writable(self, tour: TourRef) -> Tour:
        tour_id = tour if isinstance(tour, str) else tour.id
        current = self._repository.get(tour_id)
        if is_onboarding_tour(current):
            raise ReadOnlyTourError(tour_id=current.id)
        return current

    @staticmethod
    def _check_index(tour: Tour, index: int) -> None:
        if not 0 <= index < tour.step_count:
            raise IndexOutOfRangeError(tour_id=tour.id, index=index, length=tour.step_count)

    def _active_index_in(self, tour: Tour) -> Optional[int]:
        if self._navigation.active_tour_id != tour.id:
            return None
        return self._navigation.get_active_step_index()

    def _save(self, tour: Tour) -> None:
        if self._store is not None:
            self._store.save(tour)

    def _commit(self, tour: Tour) -> None:
        self._save(tour)
        self._repository.replace(tour)

    def _changed(self, tour: Tour) -> Tour:
        self._bus.publish(TourEvent.TOUR_LIST_CHANGED, tour)
        return tour

    @staticmethod
    def _rejected(operation: str, exc: TourError) -> None:
        _logger.debug("Rejected %s: %s", operation, exc.kind.value)
