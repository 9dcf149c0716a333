"""Collaborator interfaces consumed by the tour engine.

The engine never performs I/O itself. Loading and saving tours, resolving a
step to something an editor can open, and rendering step documentation are
delegated to objects satisfying these protocols.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence, runtime_checkable

from tours.domain.models import Step, Tour

__all__ = ["Location", "StepPosition", "TourStore", "Navigator", "DocRenderer"]


@dataclass(frozen=True, slots=True)
class Location:
    """An openable target resolved from a step's ``file``/``line``."""

    path: str
    line: int


@dataclass(frozen=True, slots=True)
class StepPosition:
    """1-based ordinal of a step within its tour, plus the tour length."""

    ordinal: int
    total: int


@runtime_checkable
class TourStore(Protocol):
    def load_all(self) -> Sequence[Tour]:  # pragma: no cover - interface
        ...

    def save(self, tour: Tour) -> None:  # pragma: no cover - interface
        ...

    def delete(self, tour: Tour) -> None:  # pragma: no cover - interface
        ...


@runtime_checkable
class Navigator(Protocol):
    def resolve(self, step: Step) -> Optional[Location]:  # pragma: no cover - interface
        ...


@runtime_checkable
class DocRenderer(Protocol):
    def render(
        self, step: Step, position: Optional[StepPosition] = None
    ) -> str:  # pragma: no cover - interface
        ...
