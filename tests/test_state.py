"""Game mode state machine and clock tests."""

from downhill.core.clock import FrameQueue, ManualClock
from downhill.core.state import GameMode, StateMachine


class TestStateMachine:

    def test_starts_playing(self):
        assert StateMachine().state == GameMode.PLAYING

    def test_pause_and_resume(self):
        machine = StateMachine()
        assert machine.transition(GameMode.PAUSED) is True
        assert machine.state == GameMode.PAUSED
        assert machine.transition(GameMode.PLAYING) is True
        assert machine.state == GameMode.PLAYING

    def test_same_state_is_not_a_transition(self):
        machine = StateMachine()
        assert machine.can_transition(GameMode.PLAYING) is False
        assert machine.transition(GameMode.PLAYING) is False

    def test_listeners_get_old_and_new_state(self):
        machine = StateMachine()
        changes = []
        machine.add_listener(lambda old, new: changes.append((old, new)))

        machine.transition(GameMode.PAUSED)
        assert changes == [(GameMode.PLAYING, GameMode.PAUSED)]

    def test_failing_listener_does_not_block_transition(self):
        machine = StateMachine()

        def broken(old, new):
            raise RuntimeError("boom")

        machine.add_listener(broken)
        assert machine.transition(GameMode.PAUSED) is True
        assert machine.state == GameMode.PAUSED

    def test_reset_notifies_only_on_change(self):
        machine = StateMachine()
        changes = []
        machine.add_listener(lambda old, new: changes.append(new))

        machine.reset()
        assert changes == []

        machine.transition(GameMode.PAUSED)
        machine.reset()
        assert machine.state == GameMode.PLAYING
        assert changes == [GameMode.PAUSED, GameMode.PLAYING]

    def test_quiet_reset(self):
        machine = StateMachine()
        changes = []
        machine.add_listener(lambda old, new: changes.append(new))

        machine.transition(GameMode.PAUSED)
        machine.reset(notify=False)
        assert machine.state == GameMode.PLAYING
        assert changes == [GameMode.PAUSED]


class TestClock:

    def test_manual_clock_only_moves_when_told(self):
        clock = ManualClock(start_ms=50)
        assert clock.now() == 50
        assert clock.advance(16) == 66
        clock.advance(934)
        assert clock.now() == 1000


class TestFrameQueue:

    def test_runs_requested_callbacks_once(self):
        queue = FrameQueue()
        calls = []
        queue.request_frame(lambda: calls.append("a"))
        queue.request_frame(lambda: calls.append("b"))

        assert queue.run_pending() == 2
        assert calls == ["a", "b"]
        assert queue.run_pending() == 0
        assert queue.ticks == 2

    def test_requests_made_during_a_tick_wait_for_the_next(self):
        queue = FrameQueue()
        calls = []

        def frame():
            calls.append(queue.ticks)
            queue.request_frame(frame)

        queue.request_frame(frame)
        queue.run_pending()
        queue.run_pending()
        assert calls == [1, 2]
        assert queue.pending == 1

