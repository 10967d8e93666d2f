"""Tests for TimerRegistry."""
import logging

from machina import TimerRegistry, VirtualClock


class TestTimerRegistry:

    def test_schedule_fires(self):
        clock = VirtualClock()
        timers = TimerRegistry(clock)
        fired = []

        timers.schedule("t", 2.0, lambda: fired.append(clock.now))

        assert timers.pending("t")
        clock.advance(2.0)
        assert fired == [2.0]

    def test_entry_removed_on_fire(self):
        clock = VirtualClock()
        timers = TimerRegistry(clock)
        timers.schedule("t", 1.0, lambda: None)

        clock.advance(1.0)

        assert not timers.pending("t")
        assert len(timers) == 0

    def test_cancel_prevents_fire(self):
        clock = VirtualClock()
        timers = TimerRegistry(clock)
        fired = []
        timers.schedule("t", 2.0, lambda: fired.append(1))

        clock.advance(1.0)
        timers.cancel("t")
        clock.advance(5.0)

        assert fired == []
        assert not timers.pending("t")

    def test_cancel_absent_is_noop(self):
        timers = TimerRegistry(VirtualClock())
        timers.cancel("never")
        timers.cancel("never")
        assert len(timers) == 0

    def test_cancel_all(self):
        clock = VirtualClock()
        timers = TimerRegistry(clock)
        fired = []
        for name in ["a", "b", "c"]:
            timers.schedule(name, 1.0, lambda n=name: fired.append(n))

        timers.cancel_all()
        clock.advance(2.0)

        assert fired == []
        assert timers.names() == []

    def test_names(self):
        timers = TimerRegistry(VirtualClock())
        timers.schedule("a", 1.0, lambda: None)
        timers.schedule("b", 1.0, lambda: None)
        assert timers.names() == ["a", "b"]

    def test_callback_may_reschedule_same_name(self):
        clock = VirtualClock()
        timers = TimerRegistry(clock)
        fired = []

        def on_fire():
            fired.append(clock.now)
            if len(fired) < 3:
                timers.schedule("poll", 1.0, on_fire)

        timers.schedule("poll", 1.0, on_fire)
        clock.advance(10.0)

        assert fired == [1.0, 2.0, 3.0]
        assert not timers.pending("poll")


class TestDoubleScheduling:
    """The same name scheduled twice keeps both tasks alive."""

    def test_both_tasks_fire(self):
        clock = VirtualClock()
        timers = TimerRegistry(clock)
        fired = []

        timers.schedule("t", 1.0, lambda: fired.append("first"))
        timers.schedule("t", 2.0, lambda: fired.append("second"))
        clock.advance(3.0)

        assert fired == ["first", "second"]

    def test_cancel_reaches_only_newest(self):
        clock = VirtualClock()
        timers = TimerRegistry(clock)
        fired = []

        timers.schedule("t", 1.0, lambda: fired.append("first"))
        timers.schedule("t", 2.0, lambda: fired.append("second"))
        timers.cancel("t")
        clock.advance(3.0)

        assert fired == ["first"]

    def test_older_fire_keeps_newer_slot(self):
        clock = VirtualClock()
        timers = TimerRegistry(clock)

        timers.schedule("t", 1.0, lambda: None)
        timers.schedule("t", 2.0, lambda: None)
        clock.advance(1.0)

        assert timers.pending("t")
        clock.advance(1.0)
        assert not timers.pending("t")

    def test_warning_logged(self, caplog):
        timers = TimerRegistry(VirtualClock())
        timers.schedule("t", 1.0, lambda: None)
        with caplog.at_level(logging.WARNING, logger="machina.timers"):
            timers.schedule("t", 1.0, lambda: None)
        assert "still pending" in caplog.text
