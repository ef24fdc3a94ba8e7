"""Publish/subscribe service that queues events and dispatches them in its loop."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

from crosswind.framework import Service
from crosswind.queues import CircularQueue, CircularQueueFullError

TOPIC_NONE = 0

EventHandler = Callable[[Any], None]


class EventData:
    """Base class for event payloads."""


class EventBrokerQueueFullError(Exception):
    """Raised when an event is published while the event queue is full."""


class EventBroker(Service):
    """Queues published events and hands them to subscribers on each loop."""

    SERVICE_NAME = "EventBroker"
    MAX_EVENT_QUEUE_SIZE = 16

    def __init__(self) -> None:
        self._topics: dict[str, int] = {}
        self._next_topic = 1
        self._topic_lock = threading.RLock()
        self._queue: CircularQueue[tuple[int, Any]] = CircularQueue(self.MAX_EVENT_QUEUE_SIZE)
        self._queue_lock = threading.RLock()
        self._subscriptions: dict[int, list[EventHandler]] = {}
        self._subscription_lock = threading.Lock()

    def name(self) -> str:
        return self.SERVICE_NAME

    def init(self) -> None:
        """Start with an empty event queue."""
        with self._queue_lock:
            self._queue = CircularQueue(self.MAX_EVENT_QUEUE_SIZE)

    def loop(self) -> None:
        """Dispatch every queued event, including ones published meanwhile."""
        with self._queue_lock:
            while not self._queue.empty():
                topic, data = self._queue.dequeue()
                with self._subscription_lock:
                    handlers = list(self._subscriptions.get(topic, ()))
                for handler in handlers:
                    if handler is not None:
                        handler(data)

    def register_topic(self, topic_name: str) -> int:
        """Return the topic id for a name, allocating one on first use."""
        with self._topic_lock:
            topic = self._topics.get(topic_name)
            if topic is None:
                topic = self._next_topic
                self._next_topic = (self._next_topic + 1) & 0xFF
                self._topics[topic_name] = topic
            return topic

    def find_topic(self, topic_name: str) -> int:
        """Return the topic id for a name, or ``TOPIC_NONE`` if unregistered."""
        with self._topic_lock:
            return self._topics.get(topic_name, TOPIC_NONE)

    def subscribe(self, topic: int | str, handler: EventHandler) -> None:
        """Call ``handler`` with the data of each event on ``topic``."""
        if isinstance(topic, str):
            topic = self.find_topic(topic)
        with self._subscription_lock:
            self._subscriptions.setdefault(topic, []).append(handler)

    def publish(self, topic: int, data: Any) -> None:
        """Queue an event for dispatch on the next loop."""
        with self._queue_lock:
            try:
                self._queue.enqueue((topic, data))
            except CircularQueueFullError as exc:
                raise EventBrokerQueueFullError("event queue is full") from exc