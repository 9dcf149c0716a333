"""Navigation state persistence.

Persists where the user was between sessions:
 - Active tour id (if any)
 - Active step index within that tour (if any)

Stored as a small versioned JSON file. The service is independent of Qt so it
can be unit tested easily; restoring the snapshot into a live engine is the
engine's job (ids that no longer exist are ignored there).
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from config import settings

__all__ = ["NavigationSnapshot", "NavigationStatePersistenceService"]

NAV_STATE_VERSION = 1


@dataclass
class NavigationSnapshot:
    version: int = NAV_STATE_VERSION
    active_tour_id: Optional[str] = None
    active_step_index: Optional[int] = None

    def to_json(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "active_tour_id": self.active_tour_id,
            "active_step_index": self.active_step_index,
        }

    @classmethod
    def from_json(cls, obj: Dict[str, Any]) -> "NavigationSnapshot":
        if obj.get("version") != NAV_STATE_VERSION:
            raise ValueError("version mismatch")
        index = obj.get("active_step_index")
        return cls(
            version=obj["version"],
            active_tour_id=obj.get("active_tour_id"),
            active_step_index=int(index) if index is not None else None,
        )


class NavigationStatePersistenceService:
    def __init__(self, base_dir: str | None = None):
        self.base_dir = base_dir or settings.STATE_DIR
        os.makedirs(self.base_dir, exist_ok=True)

    def _path(self) -> str:
        return os.path.join(self.base_dir, "navigation_state.json")

    def load(self) -> NavigationSnapshot:
        path = self._path()
        if not os.path.exists(path):
            return NavigationSnapshot()
        try:
            with open(path, "r", encoding="utf-8") as f:
                obj = json.load(f)
            return NavigationSnapshot.from_json(obj)
        except (OSError, ValueError, TypeError, AttributeError):
            # Keep the unreadable file aside and start fresh
            backup = path + f".corrupt.{datetime.now().strftime('%Y%m%d%H%M%S')}"
            os.replace(path, backup)
            return NavigationSnapshot()

    def save(self, snapshot: NavigationSnapshot) -> bool:
        path = self._path()
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(snapshot.to_json(), f, indent=2)
            return True
        except OSError:
            return False
