"""Tour state engine: the public surface for one workspace session.

``TourStateEngine`` wires the repository, navigation state, editor and event
bus together, and talks to the external collaborators (store, navigator, doc
renderer). Construct one per workspace and pass it to the components that need
it; there is no process-wide accessor.

Usage::

    engine = TourStateEngine(store=my_store, navigator=my_navigator)
    engine.reload_state()
    engine.subscribe(TourEvent.TOUR_LIST_CHANGED, lambda evt: view.reload(engine.tree()))
    intro = engine.create_tour("Intro", "intro.tour")
    engine.add_step(intro, Step(title="Entry point", file="app.py", line=1))
    engine.select_step(intro.id, 0)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from gui.services.event_bus import EventBus, EventHandler, Subscription, TourEvent
from gui.services.navigation_state_persistence import (
    NavigationSnapshot,
    NavigationStatePersistenceService,
)
from gui.services.settings_service import SettingsService
from tours.domain.models import Direction, Step, Tour
from tours.editor import TourEditor, TourRef
from tours.errors import IndexOutOfRangeError, ReentrantMutationError
from tours.naming import unique_file_name
from tours.navigation import NavigationState
from tours.onboarding import build_onboarding_tour
from tours.protocols import DocRenderer, Location, Navigator, StepPosition, TourStore
from tours.repository import TourRepository
from tours.tree import RootNode, build_tree

__all__ = ["TourStateEngine"]

_logger = logging.getLogger(__name__)


class TourStateEngine:
    """Façade over the tour repository, navigation state and editor.

    Parameters
    ----------
    store: TourStore | None
        Persistence collaborator. Without one, tours live only in memory and
        ``reload_state`` starts from an empty list.
    navigator: Navigator | None
        Resolves selected steps to openable locations.
    renderer: DocRenderer | None
        Renders step documentation; defaults to ``StepDocRenderer``.
    settings: SettingsService | None
        User toggles (onboarding assistant).
    settings_dir: str | Path | None
        Where toggled settings are saved. ``None`` keeps them in memory.
    bus: EventBus | None
        Event channel; a private bus is created when omitted.
    """

    def __init__(
        self,
        *,
        store: Optional[TourStore] = None,
        navigator: Optional[Navigator] = None,
        renderer: Optional[DocRenderer] = None,
        settings: Optional[SettingsService] = None,
        settings_dir: str | Path | None = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        self.bus = bus or EventBus()
        self.repository = TourRepository()
        self.navigation = NavigationState(self.repository)
        self.editor = TourEditor(self.repository, self.navigation, self.bus, store)
        self.settings = settings or SettingsService()
        self._settings_dir = settings_dir
        self._store = store
        self._navigator = navigator
        if renderer is None:
            # Local import: the renderer module imports tours.* itself
            from gui.services.step_doc_renderer import StepDocRenderer

            renderer = StepDocRenderer()
        self._renderer: DocRenderer = renderer
        self.last_location: Optional[Location] = None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def reload_state(self) -> Sequence[Tour]:
        """Reload every tour from the store and reset navigation."""
        if self.bus.dispatching:
            during = self.bus.current_event.name.value
            exc = ReentrantMutationError(operation="reload_state", during=during)
            _logger.debug("Rejected reload_state: %s", exc.kind.value)
            raise exc
        tours: List[Tour] = list(self._store.load_all()) if self._store is not None else []
        if self.settings.onboarding_assistant_on:
            tours.append(build_onboarding_tour())
        self.repository.load_all(tours)
        self.last_location = None
        _logger.info("Reloaded %d tours", len(tours))
        self.bus.publish(TourEvent.TOUR_LIST_CHANGED, None)
        return self.repository.list()

    # ------------------------------------------------------------------
    # Editing (delegates to TourEditor)
    # ------------------------------------------------------------------
    def create_tour(self, title: str, tour_file: str, description: str = "") -> Tour:
        return self.editor.create_tour(title, tour_file, description)

    def rename_tour(self, tour: TourRef, new_title: str) -> Tour:
        return self.editor.rename_tour(tour, new_title)

    def delete_tour(self, tour: TourRef) -> Tour:
        return self.editor.delete_tour(tour)

    def add_step(self, tour: TourRef, step: Step) -> Tour:
        return self.editor.add_step(tour, step)

    def edit_step(self, tour: TourRef, index: int, new_step: Step) -> Tour:
        return self.editor.edit_step(tour, index, new_step)

    def move_step(self, tour: TourRef, index: int, direction: Direction) -> Tour:
        return self.editor.move_step(tour, index, direction)

    def delete_step(self, tour: TourRef, index: int) -> Tour:
        return self.editor.delete_step(tour, index)

    # ------------------------------------------------------------------
    # Onboarding toggle (the only operation allowed to touch that tour)
    # ------------------------------------------------------------------
    def set_onboarding_assistant(self, on: bool) -> Sequence[Tour]:
        """Flip the onboarding setting and reload; the flag is restored if the reload fails."""
        previous = self.settings.onboarding_assistant_on
        self.settings.set_onboarding_assistant(on)
        try:
            tours = self.reload_state()
        except Exception:
            self.settings.set_onboarding_assistant(previous)
            raise
        if self._settings_dir is not None:
            self.settings.save(self._settings_dir)
        return tours

    def toggle_onboarding_assistant(self) -> Sequence[Tour]:
        return self.set_onboarding_assistant(not self.settings.onboarding_assistant_on)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def select_tour(self, tour_id: str) -> Tour:
        tour = self.repository.get(tour_id)
        self.navigation.set_active_tour(tour.id)
        return tour

    def select_step(self, tour_id: str, index: int) -> Optional[Location]:
        """User-driven step selection: activate, announce, then navigate."""
        tour = self.repository.get(tour_id)
        step = tour.step_at(index)
        if step is None:
            raise IndexOutOfRangeError(tour_id=tour.id, index=index, length=tour.step_count)
        if self.navigation.active_tour_id != tour.id:
            self.navigation.set_active_tour(tour.id)
        self.navigation.set_active_step_index(index)
        _logger.debug("Selected step %d of tour %r", index, tour.title)
        return self._announce(step)

    def go_next(self) -> Optional[Step]:
        return self._step_by(1)

    def go_prev(self) -> Optional[Step]:
        return self._step_by(-1)

    def get_active_tour(self) -> Optional[Tour]:
        return self.navigation.get_active_tour()

    def get_active_step_index(self) -> Optional[int]:
        return self.navigation.get_active_step_index()

    def get_active_step(self) -> Optional[Step]:
        return self.navigation.get_active_step()

    def get_prev_step(self) -> Optional[Step]:
        return self.navigation.get_prev_step()

    def get_next_step(self) -> Optional[Step]:
        return self.navigation.get_next_step()

    def save_navigation(self, service: NavigationStatePersistenceService) -> bool:
        return service.save(
            NavigationSnapshot(
                active_tour_id=self.navigation.active_tour_id,
                active_step_index=self.navigation.get_active_step_index(),
            )
        )

    def restore_navigation(self, service: NavigationStatePersistenceService) -> None:
        """Re-apply a saved snapshot; unknown tours or indices are ignored."""
        snapshot = service.load()
        if snapshot.active_tour_id is None or snapshot.active_tour_id not in self.repository:
            return
        self.navigation.set_active_tour(snapshot.active_tour_id)
        self.navigation.set_active_step_index(snapshot.active_step_index)

    # ------------------------------------------------------------------
    # Read helpers for views
    # ------------------------------------------------------------------
    def list_tours(self) -> Sequence[Tour]:
        return self.repository.list()

    def find_tour(self, tour_id: str) -> Optional[Tour]:
        return self.repository.find(tour_id)

    def tree(self) -> RootNode:
        return build_tree(self.repository.list(), self.navigation.active_tour_id)

    def step_position(self, tour_id: str, index: int) -> Optional[StepPosition]:
        tour = self.repository.find(tour_id)
        if tour is None or tour.step_at(index) is None:
            return None
        return StepPosition(ordinal=index + 1, total=tour.step_count)

    def render_step(self, tour_id: str, index: int) -> str:
        tour = self.repository.get(tour_id)
        step = tour.step_at(index)
        if step is None:
            raise IndexOutOfRangeError(tour_id=tour.id, index=index, length=tour.step_count)
        return self._renderer.render(step, self.step_position(tour_id, index))

    def is_title_available(self, title: str, exclude_id: str | None = None) -> bool:
        return bool(title) and self.repository.is_title_available(title, exclude_id=exclude_id)

    def is_file_available(self, tour_file: str) -> bool:
        return self.repository.is_file_available(tour_file)

    def suggest_file_name(self, title: str) -> str:
        return unique_file_name(title, self.repository.tour_files())

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def subscribe(
        self, event: str | TourEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        return self.bus.subscribe(event, handler, once=once)

    def unsubscribe(self, subscription: Subscription) -> None:
        self.bus.unsubscribe(subscription)

    # Internal -----------------------------------------------------------
    def _step_by(self, offset: int) -> Optional[Step]:
        index = self.navigation.get_active_step_index()
        step = self.navigation.get_next_step() if offset > 0 else self.navigation.get_prev_step()
        if step is None or index is None:
            return None
        self.navigation.set_active_step_index(index + offset)
        _logger.debug("Moved to step %d", index + offset)
        self._announce(step)
        return step

    def _announce(self, step: Step) -> Optional[Location]:
        self.bus.publish(TourEvent.STEP_SELECTED, step)
        self.last_location = self._navigator.resolve(step) if self._navigator else None
        return self.last_location
