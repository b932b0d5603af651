"""Tests for the self-clearing status line."""

from __future__ import annotations

from broom.picker.status import StatusLine


class TestStatusLine:
    def test_show_and_expire(self, fake_timers):
        changes = []
        status = StatusLine(on_change=lambda: changes.append(status.message), timer_factory=fake_timers)
        status.show("hello", 2.0)
        timer = fake_timers.created[0]
        assert status.message == "hello"
        assert timer.started
        assert timer.daemon
        assert timer.interval == 2.0

        timer.fire()
        assert status.message is None
        assert changes == [None]

    def test_new_message_cancels_previous_timer(self, fake_timers):
        status = StatusLine(timer_factory=fake_timers)
        status.show("first", 2.0)
        status.show("second", 3.0)
        first, second = fake_timers.created
        assert first.cancelled
        assert not second.cancelled

        first.function()
        assert status.message == "second"

    def test_cancel_keeps_message(self, fake_timers):
        status = StatusLine(timer_factory=fake_timers)
        status.show("sticky", 2.0)
        status.cancel()
        assert fake_timers.created[0].cancelled
        assert status.message == "sticky"

    def test_clear(self, fake_timers):
        status = StatusLine(timer_factory=fake_timers)
        status.show("gone", 2.0)
        status.clear()
        assert status.message is None
