"""Tests for the in-process event bus."""

import asyncio

import pytest

from foodchat.marketplace.messaging import ChatMessage
from foodchat.platform.bus import EventBus


def _msg(body: str) -> ChatMessage:
    return ChatMessage.system(body)


def _bodies(messages) -> list[str]:
    return [m.body for m in messages]


class TestPublish:
    """Test suite for synchronous publishing."""

    def test_fifo_for_every_subscriber(self, bus: EventBus):
        """Test all subscribers observe publishes in call order."""
        first, second = [], []
        bus.subscribe(first.append)
        bus.subscribe(second.append)

        for body in ("a", "b", "c"):
            bus.publish(_msg(body))

        assert _bodies(first) == _bodies(second) == ["a", "b", "c"]
        assert _bodies(bus.history) == ["a", "b", "c"]

    def test_subscription_order(self, bus: EventBus):
        """Test handlers run in subscription order."""
        calls = []
        bus.subscribe(lambda m: calls.append("first"))
        bus.subscribe(lambda m: calls.append("second"))
        bus.publish(_msg("x"))
        assert calls == ["first", "second"]

    def test_reentrant_publish_is_queued(self, bus: EventBus):
        """Test a publish from inside a handler is delivered after the current message."""
        seen_by_second = []

        def echo(message: ChatMessage):
            if message.body == "ping":
                bus.publish(_msg("pong"))

        bus.subscribe(echo)
        bus.subscribe(seen_by_second.append)
        bus.publish(_msg("ping"))

        assert _bodies(seen_by_second) == ["ping", "pong"]
        assert _bodies(bus.history) == ["ping", "pong"]

    def test_history_is_a_copy(self, bus: EventBus):
        """Test the history cannot be modified from outside."""
        bus.publish(_msg("a"))
        bus.history.clear()
        assert len(bus.history) == 1

    def test_failing_handler_does_not_stop_delivery(self, bus: EventBus, caplog):
        """Test handler exceptions are logged and other subscribers still run."""
        received = []

        def broken(message):
            raise RuntimeError("boom")

        bus.subscribe(broken)
        bus.subscribe(received.append)
        bus.publish(_msg("a"))

        assert _bodies(received) == ["a"]
        assert "failed to handle message" in caplog.text

    def test_unsubscribe(self, bus: EventBus):
        """Test unsubscribed handlers stop receiving and unknown ones are ignored."""
        received = []
        bus.subscribe(received.append)
        bus.publish(_msg("a"))
        bus.unsubscribe(received.append)
        bus.unsubscribe(print)
        bus.publish(_msg("b"))
        assert _bodies(received) == ["a"]


class TestPublishAfter:
    """Test suite for deferred publishing."""

    @pytest.mark.asyncio
    async def test_publish_after_does_not_block(self, bus: EventBus):
        """Test the message appears only once the delay has passed."""
        task = bus.publish_after(0.01, lambda: _msg("later"))
        assert bus.history == []
        assert bus.pending == 1
        await task
        assert _bodies(bus.history) == ["later"]
        assert bus.pending == 0

    @pytest.mark.asyncio
    async def test_order_follows_firing_time(self, bus: EventBus):
        """Test deferred messages are ordered by when they fire."""
        bus.publish_after(0.05, lambda: _msg("slow"))
        bus.publish_after(0.01, lambda: _msg("fast"))
        bus.publish(_msg("now"))
        await bus.flush()
        assert _bodies(bus.history) == ["now", "fast", "slow"]

    @pytest.mark.asyncio
    async def test_factory_runs_when_fired(self, bus: EventBus):
        """Test the factory sees state as of firing time."""
        state = {"value": "before"}
        bus.publish_after(0, lambda: _msg(state["value"]))
        state["value"] = "after"
        await bus.flush()
        assert _bodies(bus.history) == ["after"]

    @pytest.mark.asyncio
    async def test_factory_can_return_many_or_none(self, bus: EventBus):
        """Test lists are published in order and None publishes nothing."""
        bus.publish_after(0, lambda: [_msg("1"), _msg("2")])
        bus.publish_after(0, lambda: None)
        await bus.flush()
        assert _bodies(bus.history) == ["1", "2"]

    @pytest.mark.asyncio
    async def test_flush_waits_for_nested_schedules(self, bus: EventBus):
        """Test publishes scheduled while flushing are awaited too."""

        def outer():
            bus.publish_after(0.01, lambda: _msg("inner"))
            return _msg("outer")

        bus.publish_after(0, outer)
        await bus.flush()
        assert _bodies(bus.history) == ["outer", "inner"]

    @pytest.mark.asyncio
    async def test_failing_factory_is_logged(self, bus: EventBus, caplog):
        """Test a factory exception does not break the bus."""

        def broken():
            raise RuntimeError("boom")

        bus.publish_after(0, broken)
        bus.publish_after(0, lambda: _msg("ok"))
        await bus.flush()
        assert _bodies(bus.history) == ["ok"]
        assert "Deferred message factory failed" in caplog.text

    def test_requires_running_loop(self, bus: EventBus):
        """Test scheduling outside an event loop is an error."""
        with pytest.raises(RuntimeError):
            bus.publish_after(0, lambda: _msg("x"))

    @pytest.mark.asyncio
    async def test_negative_delay_fires_immediately(self, bus: EventBus):
        """Test a negative delay is treated as zero."""
        await asyncio.wait_for(bus.publish_after(-1, lambda: _msg("x")), timeout=1)
        assert _bodies(bus.history) == ["x"]
