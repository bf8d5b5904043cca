"""In-process publish/subscribe bus with deferred publishing.

The bus is the only place subscriptions live. ``publish`` fans a message out to
every subscriber synchronously and in subscription order. ``publish_after``
simulates network or kitchen latency: it schedules a message factory on the
running asyncio loop and publishes whatever the factory returns once the delay
has elapsed. Because everything runs on one event loop, dispatch never happens
concurrently, and the global delivery order is the order in which publishes
fire.
"""

import asyncio
import logging
from collections import deque
from collections.abc import Callable, Sequence
from typing import Generic, TypeVar

from pydantic import BaseModel

logger = logging.getLogger(__name__)

TMessage = TypeVar("TMessage", bound=BaseModel)

MessageHandler = Callable[[TMessage], None]
MessageFactory = Callable[[], TMessage | Sequence[TMessage] | None]


class EventBus(Generic[TMessage]):  # noqa: UP046
    """Synchronous fan-out bus that also owns the message history."""

    def __init__(self):
        """Initialize an empty bus."""
        self._subscribers: list[MessageHandler[TMessage]] = []
        self._history: list[TMessage] = []
        self._queue: deque[TMessage] = deque()
        self._dispatching = False
        self._tasks: list[asyncio.Task] = []

    @property
    def history(self) -> list[TMessage]:
        """Every message published so far, oldest first."""
        return list(self._history)

    @property
    def pending(self) -> int:
        """Number of deferred publishes that have not fired yet."""
        return len(self._tasks)

    def subscribe(self, handler: MessageHandler[TMessage]) -> None:
        """Register a handler; it receives every message published from now on."""
        self._subscribers.append(handler)

    def unsubscribe(self, handler: MessageHandler[TMessage]) -> None:
        """Remove a handler. Unknown handlers are ignored."""
        try:
            self._subscribers.remove(handler)
        except ValueError:
            logger.debug("Ignoring unsubscribe of a handler that is not subscribed.")

    def publish(self, message: TMessage) -> None:
        """Append ``message`` to the history and deliver it to all subscribers.

        A handler may publish while it is being called. Such messages are queued
        and delivered after the current message has reached every subscriber, so
        all subscribers observe the same order.
        """
        self._queue.append(message)
        if self._dispatching:
            return

        self._dispatching = True
        try:
            while self._queue:
                self._dispatch(self._queue.popleft())
        finally:
            self._dispatching = False

    def publish_after(
        self, delay: float, factory: MessageFactory[TMessage]
    ) -> asyncio.Task:
        """Publish the result of ``factory()`` once ``delay`` seconds have passed.

        The call never blocks. The factory runs when the delay expires, so it
        sees the state of the world at that moment. It may return one message, a
        sequence of messages published in order, or None to publish nothing.

        Returns:
            The scheduled task, in case the caller wants to wait for it.

        Raises:
            RuntimeError: If there is no running event loop.

        """
        loop = asyncio.get_running_loop()
        task = loop.create_task(self._publish_later(max(delay, 0.0), factory))
        self._tasks.append(task)
        task.add_done_callback(self._remove_task)
        return task

    async def flush(self) -> None:
        """Wait until every deferred publish has fired.

        Publishes scheduled while flushing are waited for as well.
        """
        while self._tasks:
            tasks = list(self._tasks)
            await asyncio.gather(*tasks, return_exceptions=True)

    def _dispatch(self, message: TMessage) -> None:
        self._history.append(message)
        logger.debug(f"Dispatching {type(message).__name__} #{len(self._history)}")
        for handler in list(self._subscribers):
            try:
                handler(message)
            except Exception:
                logger.exception(f"Subscriber {handler!r} failed to handle message")

    async def _publish_later(
        self, delay: float, factory: MessageFactory[TMessage]
    ) -> None:
        await asyncio.sleep(delay)
        try:
            produced = factory()
        except Exception:
            logger.exception("Deferred message factory failed")
            return

        if produced is None:
            return
        if isinstance(produced, BaseModel):
            self.publish(produced)  # type: ignore[arg-type]
            return
        for message in produced:
            self.publish(message)

    def _remove_task(self, task: asyncio.Task) -> None:
        try:
            self._tasks.remove(task)
        except ValueError:
            logger.debug("Failed to remove task: task is not in list.")
