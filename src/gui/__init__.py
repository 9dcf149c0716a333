"""Tours GUI layer.

Headless services (event bus, settings, doc rendering) live in
``gui.services``; the Qt tree model lives in ``gui.tour_tree_model`` and is
not imported here so that the engine can be used without PyQt6 loaded.
"""

from __future__ import annotations

from .services.event_bus import EventBus, TourEvent  # noqa: F401

__all__ = ["EventBus", "TourEvent"]
