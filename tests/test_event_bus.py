import pytest

from gui.services.event_bus import EventBus, HandlerFailure, TourEvent


def test_subscribe_and_publish_order():
    bus = EventBus()
    order = []
    bus.subscribe(TourEvent.STEP_SELECTED, lambda e: order.append(("h1", e.name)))
    bus.subscribe(TourEvent.STEP_SELECTED, lambda e: order.append(("h2", e.name)))
    bus.publish(TourEvent.STEP_SELECTED, {"id": 1})
    assert order == [("h1", TourEvent.STEP_SELECTED), ("h2", TourEvent.STEP_SELECTED)]


def test_string_names_resolve_to_tour_events():
    bus = EventBus()
    seen = []
    bus.subscribe("tour_list_changed", lambda e: seen.append(e.name))
    bus.publish(TourEvent.TOUR_LIST_CHANGED)
    assert seen == [TourEvent.TOUR_LIST_CHANGED]
    assert bus.subscriber_count("tour_list_changed") == 1


def test_unknown_event_name_is_rejected():
    bus = EventBus()
    with pytest.raises(ValueError):
        bus.subscribe("custom", lambda e: None)
    with pytest.raises(ValueError):
        bus.publish("custom")


def test_once_subscription():
    bus = EventBus()
    calls = []
    sub = bus.subscribe(TourEvent.TOUR_LIST_CHANGED, lambda e: calls.append(e.payload), once=True)
    bus.publish(TourEvent.TOUR_LIST_CHANGED, 1)
    bus.publish(TourEvent.TOUR_LIST_CHANGED, 2)
    assert calls == [1]
    assert not sub.active
    assert bus.subscriber_count(TourEvent.TOUR_LIST_CHANGED) == 0


def test_once_subscription_is_dropped_even_when_it_fails():
    bus = EventBus()
    bus.subscribe(TourEvent.STEP_SELECTED, lambda e: 1 / 0, once=True)
    bus.publish(TourEvent.STEP_SELECTED)
    bus.publish(TourEvent.STEP_SELECTED)
    assert len(bus.errors) == 1


def test_unsubscribe():
    bus = EventBus()
    calls = []
    sub = bus.subscribe(TourEvent.TOUR_LIST_CHANGED, lambda e: calls.append(1))
    bus.publish(TourEvent.TOUR_LIST_CHANGED)
    bus.unsubscribe(sub)
    bus.unsubscribe(sub)
    bus.publish(TourEvent.TOUR_LIST_CHANGED)
    assert calls == [1]
    assert not sub.active


def test_unsubscribe_removes_only_that_subscription():
    bus = EventBus()
    calls = []

    def handler(e):
        calls.append(e.payload)

    first = bus.subscribe(TourEvent.STEP_SELECTED, handler)
    bus.subscribe(TourEvent.STEP_SELECTED, handler)
    bus.unsubscribe(first)
    bus.publish(TourEvent.STEP_SELECTED, "x")
    assert calls == ["x"]


def test_cancelled_subscription_is_skipped():
    bus = EventBus()
    calls = []
    sub = bus.subscribe(TourEvent.STEP_SELECTED, lambda e: calls.append(1))
    sub.cancel()
    bus.publish(TourEvent.STEP_SELECTED)
    assert calls == []


def test_handler_unsubscribing_later_handler_during_delivery():
    bus = EventBus()
    calls = []
    later = None

    def first(e):
        calls.append("first")
        bus.unsubscribe(later)

    bus.subscribe(TourEvent.STEP_SELECTED, first)
    later = bus.subscribe(TourEvent.STEP_SELECTED, lambda e: calls.append("later"))
    bus.publish(TourEvent.STEP_SELECTED)
    assert calls == ["first"]


def test_error_isolation(caplog):
    bus = EventBus()
    calls = []

    def bad(e):
        raise RuntimeError("boom")

    bus.subscribe(TourEvent.TOUR_LIST_CHANGED, bad)
    bus.subscribe(TourEvent.TOUR_LIST_CHANGED, lambda e: calls.append("ok"))
    with caplog.at_level("WARNING", logger="gui.services.event_bus"):
        evt = bus.publish(TourEvent.TOUR_LIST_CHANGED, "payload")
    assert calls == ["ok"]
    [failure] = bus.errors
    assert isinstance(failure, HandlerFailure)
    assert failure.event is evt
    assert failure.handler is bad
    assert isinstance(failure.error, RuntimeError)
    assert "tour_list_changed" in caplog.text


def test_dispatching_and_current_event_only_during_delivery():
    bus = EventBus()
    seen = []
    bus.subscribe(
        TourEvent.STEP_SELECTED,
        lambda e: seen.append((bus.dispatching, bus.current_event is e)),
    )
    assert not bus.dispatching
    assert bus.current_event is None
    bus.publish(TourEvent.STEP_SELECTED)
    assert seen == [(True, True)]
    assert not bus.dispatching
    assert bus.current_event is None


def test_nested_publish_tracks_innermost_event():
    bus = EventBus()
    seen = []

    def outer(_):
        bus.publish(TourEvent.STEP_SELECTED)
        seen.append(("outer-after-inner", bus.dispatching, bus.current_event.name))

    bus.subscribe(TourEvent.TOUR_LIST_CHANGED, outer)
    bus.subscribe(
        TourEvent.STEP_SELECTED,
        lambda e: seen.append(("inner", bus.dispatching, bus.current_event.name)),
    )
    bus.publish(TourEvent.TOUR_LIST_CHANGED)
    assert seen == [
        ("inner", True, TourEvent.STEP_SELECTED),
        ("outer-after-inner", True, TourEvent.TOUR_LIST_CHANGED),
    ]
    assert not bus.dispatching


def test_dispatching_reset_after_handler_failure():
    bus = EventBus()
    bus.subscribe(TourEvent.STEP_SELECTED, lambda e: 1 / 0)
    bus.publish(TourEvent.STEP_SELECTED)
    assert not bus.dispatching


def test_tracing_ring_buffer():
    bus = EventBus()
    bus.publish(TourEvent.STEP_SELECTED)
    assert bus.recent_traces() == []
    bus.enable_tracing(True, capacity=3)
    for i in range(5):
        bus.publish(TourEvent.STEP_SELECTED, f"step {i}")
    assert [t.summary for t in bus.recent_traces()] == ["step 2", "step 3", "step 4"]
    assert {t.name for t in bus.recent_traces()} == {TourEvent.STEP_SELECTED}
    bus.enable_tracing(False)
    assert bus.recent_traces() == []


def test_trace_summary_uses_title_and_dash_for_none(engine):
    engine.bus.enable_tracing()
    engine.reload_state()
    engine.create_tour("A fairly long tour title that will be cut short", "long.tour")
    first, second = engine.bus.recent_traces()
    assert first.summary == "-"
    assert second.summary == "A fairly long tour title that will be..."
