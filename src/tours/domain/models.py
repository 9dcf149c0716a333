"""Domain models for tours and their steps.

Both records are frozen: a ``Tour`` never exposes a mutable step list, so the
only way to change one is to build a new instance (``dataclasses.replace``)
and hand it to the repository through the editor.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from tours.errors import InvalidStepError

__all__ = ["Step", "Tour", "Direction", "new_id"]


def new_id() -> str:
    return str(uuid.uuid4())


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"

    @property
    def offset(self) -> int:
        return -1 if self is Direction.UP else 1


@dataclass(frozen=True, slots=True)
class Step:
    """A single stop in a tour.

    ``file`` and ``line`` are either both set (navigable step) or both None
    (description-only step).
    """

    title: str
    description: str = ""
    file: Optional[str] = None
    line: Optional[int] = None
    id: str = field(default_factory=new_id)

    def __post_init__(self) -> None:
        if not self.title:
            raise InvalidStepError(reason="empty_title")
        if self.description is None:
            raise InvalidStepError(title=self.title, reason="null_description")
        if (self.file is None) != (self.line is None):
            raise InvalidStepError(title=self.title, file=self.file, line=self.line)

    @property
    def is_navigable(self) -> bool:
        return self.file is not None

    @property
    def location_label(self) -> str:
        return f"{self.file}:{self.line}" if self.is_navigable else ""

    def to_json(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
        }
        if self.is_navigable:
            data["file"] = self.file
            data["line"] = self.line
        return data

    @classmethod
    def from_json(cls, obj: Dict[str, Any]) -> "Step":
        line = obj.get("line")
        return cls(
            title=obj["title"],
            description=obj.get("description") or "",
            file=obj.get("file"),
            line=int(line) if line is not None else None,
            id=obj.get("id") or new_id(),
        )


@dataclass(frozen=True, slots=True)
class Tour:
    id: str
    title: str
    tour_file: str
    description: str = ""
    created_at: datetime = field(default_factory=datetime.now)
    steps: Tuple[Step, ...] = ()

    def __post_init__(self) -> None:
        # Accept any iterable of steps but always store a tuple
        if not isinstance(self.steps, tuple):
            object.__setattr__(self, "steps", tuple(self.steps))

    @property
    def step_count(self) -> int:
        return len(self.steps)

    def step_at(self, index: int) -> Optional[Step]:
        if 0 <= index < len(self.steps):
            return self.steps[index]
        return None

    def index_of(self, step_id: str) -> Optional[int]:
        for i, step in enumerate(self.steps):
            if step.id == step_id:
                return i
        return None

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "tourFile": self.tour_file,
            "description": self.description,
            "createdAt": self.created_at.isoformat(),
            "steps": [s.to_json() for s in self.steps],
        }

    @classmethod
    def from_json(cls, obj: Dict[str, Any]) -> "Tour":
        created = obj.get("createdAt")
        if created and created.endswith("Z"):
            # fromisoformat only accepts the Z suffix from 3.11 on
            created = created[:-1] + "+00:00"
        return cls(
            id=obj.get("id") or new_id(),
            title=obj["title"],
            tour_file=obj["tourFile"],
            description=obj.get("description") or "",
            created_at=datetime.fromisoformat(created) if created else datetime.now(),
            steps=tuple(Step.from_json(s) for s in obj.get("steps", [])),
        )
