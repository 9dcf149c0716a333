"""Application-level settings for the tours tool window.

Holds user toggles that survive restarts. The only toggle today is the
onboarding assistant, which appends a generated read-only tour to the tour
list when switched on.

Persistence follows the other small JSON state files: an explicit schema
``version`` field, and a corrupt or incompatible file produces defaults
instead of raising.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict

from config import settings

__all__ = ["SettingsService", "SETTINGS_VERSION"]

SETTINGS_VERSION = 1  # Increment when structure changes

DEFAULT_FILENAME = "settings.json"


def _resolve_path(base_dir: str | Path | None) -> Path:
    base = Path(base_dir) if base_dir else Path(settings.STATE_DIR)
    return base / DEFAULT_FILENAME


@dataclass
class SettingsService:
    """Runtime settings and feature flags.

    Attributes:
        onboarding_assistant_on: When True, reloading tours also loads the
            reserved onboarding tour. Default False.
        version: Schema version for migration handling.
    """

    onboarding_assistant_on: bool = False
    version: int = SETTINGS_VERSION

    def toggle_onboarding_assistant(self) -> bool:
        self.onboarding_assistant_on = not self.onboarding_assistant_on
        return self.onboarding_assistant_on

    def set_onboarding_assistant(self, on: bool) -> None:
        self.onboarding_assistant_on = bool(on)

    # Persistence ------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SettingsService":
        return cls(
            onboarding_assistant_on=bool(data.get("onboarding_assistant_on", False)),
            version=int(data.get("version", SETTINGS_VERSION)),
        )

    @classmethod
    def load(cls, base_dir: str | Path | None = None) -> "SettingsService":
        path = _resolve_path(base_dir)
        if not path.exists():
            return cls()
        try:
            svc = cls.from_dict(json.loads(path.read_text(encoding="utf-8")))
        except (OSError, ValueError, TypeError, AttributeError):
            return cls()
        if svc.version != SETTINGS_VERSION:
            return cls()
        return svc

    def save(self, base_dir: str | Path | None = None) -> Path:
        """Persist settings to directory; returns the path written."""
        path = _resolve_path(base_dir)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(path.suffix + ".tmp")
        tmp.write_text(json.dumps(self.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
        tmp.replace(path)
        return path
