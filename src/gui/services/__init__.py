"""Service layer exports.

Responsibilities:
 - EventBus publish/subscribe core
 - Small headless services the tour engine and views share (settings,
   navigation snapshots, step doc rendering)

Only the bus is re-exported here; the other services are imported from their
modules so importing the package stays cheap.
"""

from .event_bus import EventBus, TourEvent  # noqa: F401

__all__ = [
    "EventBus",
    "TourEvent",
]
