"""Synchronous event channel between the tour engine and its views.

The engine publishes two events, both listed in ``TourEvent``:

 - ``TOUR_LIST_CHANGED`` with the affected ``Tour``, or ``None`` after a bulk
   reload
 - ``STEP_SELECTED`` with the newly selected ``Step``

Delivery happens on the publishing call, in subscription order. A handler
that raises does not stop delivery to the others; the failure is logged and
kept as a ``HandlerFailure`` record.

While any delivery is running the bus reports ``dispatching`` and exposes the
innermost event as ``current_event``. The tour editor reads both to refuse
mutations made from inside a handler.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from time import perf_counter
from typing import Any, Callable, Deque, Dict, List, Optional

__all__ = [
    "TourEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "HandlerFailure",
    "Subscription",
    "TraceEntry",
]

_logger = logging.getLogger(__name__)


class TourEvent(str, Enum):
    TOUR_LIST_CHANGED = "tour_list_changed"
    STEP_SELECTED = "step_selected"


@dataclass(frozen=True)
class Event:
    name: TourEvent
    payload: Any
    timestamp: float = field(default_factory=perf_counter)


EventHandler = Callable[[Event], None]


@dataclass(eq=False)
class Subscription:
    event: TourEvent
    handler: EventHandler
    once: bool = False
    active: bool = True

    def cancel(self) -> None:
        self.active = False


@dataclass(frozen=True)
class HandlerFailure:
    event: Event
    handler: EventHandler
    error: Exception


@dataclass(frozen=True)
class TraceEntry:
    name: TourEvent
    timestamp: float
    summary: str


def _summarize(payload: Any) -> str:
    if payload is None:
        return "-"
    # Tours and steps summarize by title; anything else by its str()
    text = getattr(payload, "title", None) or str(payload)
    return text if len(text) <= 40 else text[:37] + "..."


class EventBus:
    DEFAULT_TRACE_CAPACITY = 50

    def __init__(self) -> None:
        self._subs: Dict[TourEvent, List[Subscription]] = {event: [] for event in TourEvent}
        self._failures: List[HandlerFailure] = []
        self._delivering: List[Event] = []
        self._traces: Optional[Deque[TraceEntry]] = None

    def subscribe(
        self, event: TourEvent | str, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        """Register ``handler``; plain strings must name a ``TourEvent`` value."""
        sub = Subscription(event=TourEvent(event), handler=handler, once=once)
        self._subs[sub.event].append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        sub.active = False
        bucket = self._subs[sub.event]
        if sub in bucket:
            bucket.remove(sub)

    def publish(self, event: TourEvent | str, payload: Any = None) -> Event:
        evt = Event(name=TourEvent(event), payload=payload)
        if self._traces is not None:
            self._traces.append(TraceEntry(evt.name, evt.timestamp, _summarize(payload)))
        # Handlers may (un)subscribe while we iterate
        subs = list(self._subs[evt.name])
        self._delivering.append(evt)
        try:
            for sub in subs:
                if not sub.active:
                    continue
                if sub.once:
                    self.unsubscribe(sub)
                try:
                    sub.handler(evt)
                except Exception as exc:  # noqa: BLE001 - isolate handler failures
                    _logger.warning("Handler for %s failed: %r", evt.name.value, exc)
                    self._failures.append(HandlerFailure(evt, sub.handler, exc))
        finally:
            self._delivering.pop()
        return evt

    @property
    def dispatching(self) -> bool:
        return bool(self._delivering)

    @property
    def current_event(self) -> Optional[Event]:
        return self._delivering[-1] if self._delivering else None

    def subscriber_count(self, event: TourEvent | str) -> int:
        return len(self._subs[TourEvent(event)])

    @property
    def errors(self) -> List[HandlerFailure]:
        return list(self._failures)

    # Tracing ------------------------------------------------------------
    def enable_tracing(self, enabled: bool = True, *, capacity: Optional[int] = None) -> None:
        """Start or stop recording published events in a ring buffer.

        Calling it again while enabled keeps the recorded entries, trimmed to
        the new ``capacity``. Disabling drops them.
        """
        if not enabled:
            self._traces = None
            return
        size = capacity or self.DEFAULT_TRACE_CAPACITY
        self._traces = deque(self._traces or (), maxlen=size)

    def recent_traces(self) -> List[TraceEntry]:
        return list(self._traces) if self._traces is not None else []
