"""Event bus tests."""

from downhill.core.events import Event, EventBus, EventType, key_down_event, tick_event


class TestEmit:

    def test_subscriber_receives_event(self, event_bus):
        received = []
        event_bus.subscribe(EventType.GAME_RESET, received.append)

        event = Event(EventType.GAME_RESET)
        event_bus.emit(event)
        assert received == [event]

    def test_other_types_are_not_delivered(self, event_bus):
        received = []
        event_bus.subscribe(EventType.GAME_RESET, received.append)
        event_bus.emit(Event(EventType.GAME_PAUSED))
        assert received == []

    def test_unsubscribe(self, event_bus):
        received = []
        unsubscribe = event_bus.subscribe(EventType.TICK, received.append)
        unsubscribe()
        event_bus.emit(tick_event(0.016, 1))
        assert received == []

    def test_failing_handler_does_not_stop_others(self, event_bus):
        received = []

        def broken(event):
            raise RuntimeError("boom")

        event_bus.subscribe(EventType.TICK, broken)
        event_bus.subscribe(EventType.TICK, received.append)
        event_bus.emit(tick_event(0.016, 1))
        assert len(received) == 1

    def test_emit_skips_async_handlers(self, event_bus):
        calls = []

        async def handler(event):
            calls.append(event)

        event_bus.subscribe(EventType.TICK, handler)
        event_bus.emit(tick_event(0.016, 1))
        assert calls == []


class TestQueue:
    """Queued events wait for the frame boundary."""

    async def test_queued_events_wait_for_processing(self, event_bus):
        received = []
        event_bus.subscribe(EventType.KEY_DOWN, received.append)

        event_bus.queue_event(key_down_event("left"))
        event_bus.queue_event(key_down_event("jump"))
        assert received == []
        assert event_bus.queued == 2

        assert await event_bus.process_queue() == 2
        assert [e.data["key"] for e in received] == ["left", "jump"]
        assert event_bus.queued == 0

    async def test_async_handlers_are_awaited(self, event_bus):
        calls = []

        async def handler(event):
            calls.append(event.data["key"])

        event_bus.subscribe(EventType.KEY_DOWN, handler)
        event_bus.queue_event(key_down_event("up"))
        await event_bus.process_queue()
        assert calls == ["up"]

    async def test_failing_async_handler_is_logged(self, event_bus, caplog):
        async def handler(event):
            raise ValueError("nope")

        event_bus.subscribe(EventType.KEY_DOWN, handler)
        event_bus.queue_event(key_down_event("up"))
        await event_bus.process_queue()
        assert "nope" in caplog.text


class TestHistory:

    def test_history_filters_by_type(self, event_bus):
        event_bus.emit(Event(EventType.GAME_PAUSED))
        event_bus.emit(Event(EventType.GAME_RESUMED))
        event_bus.emit(Event(EventType.GAME_PAUSED))

        assert len(event_bus.get_history(EventType.GAME_PAUSED)) == 2
        assert len(event_bus.get_history()) == 3

    def test_history_is_bounded(self):
        bus = EventBus()
        for frame in range(150):
            bus.emit(tick_event(0.016, frame))

        history = bus.get_history(limit=1000)
        assert len(history) == 100
        assert history[-1].data["frame"] == 149


def test_key_down_event_payload():
    event = key_down_event("left")
    assert event.type == EventType.KEY_DOWN
    assert event.data == {"key": "left"}
    assert event.source == "keyboard"
