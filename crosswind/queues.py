"""Bounded FIFO queues that raise when full or empty."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Generic, TypeVar

T = TypeVar("T")


class CircularQueueEmptyError(IndexError):
    """Raised when reading from an empty circular queue."""


class CircularQueueFullError(IndexError):
    """Raised when adding to a full circular queue."""


class FixedQueueEmptyError(IndexError):
    """Raised when reading from an empty fixed queue."""


class FixedQueueFullError(IndexError):
    """Raised when adding to a fixed queue would exceed its capacity."""


class CircularQueue(Generic[T]):
    """A ring buffer of fixed capacity."""

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._slots: list[T | None] = [None] * capacity
        self._front = 0
        self._size = 0

    def enqueue(self, value: T) -> None:
        """Append a value at the rear."""
        if self.full():
            raise CircularQueueFullError("circular queue is full")
        self._slots[(self._front + self._size) % len(self._slots)] = value
        self._size += 1

    def dequeue(self) -> T:
        """Remove and return the value at the front."""
        value = self.front()
        self._slots[self._front] = None
        self._front = (self._front + 1) % len(self._slots)
        self._size -= 1
        return value

    def front(self) -> T:
        """Return the value at the front without removing it."""
        if self.empty():
            raise CircularQueueEmptyError("circular queue is empty")
        return self._slots[self._front]  # type: ignore[return-value]

    def __len__(self) -> int:
        return self._size

    def capacity(self) -> int:
        return len(self._slots)

    def full(self) -> bool:
        return self._size == len(self._slots)

    def empty(self) -> bool:
        return self._size == 0


class FixedQueue(Generic[T]):
    """A contiguous queue of fixed capacity that supports bulk add and drop."""

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self._capacity = capacity
        self._items: list[T] = []

    def enqueue(self, value: T) -> None:
        """Append one value."""
        if self.full():
            raise FixedQueueFullError("fixed queue is full")
        self._items.append(value)

    def extend(self, values: Iterable[T]) -> None:
        """Append all values, or none of them if they would not fit."""
        items = list(values)
        if self.full() or len(self._items) + len(items) > self._capacity:
            raise FixedQueueFullError("fixed queue cannot hold the values")
        self._items.extend(items)

    def dequeue(self) -> T:
        """Remove and return the first value."""
        if self.empty():
            raise FixedQueueEmptyError("fixed queue is empty")
        return self._items.pop(0)

    def drop(self, count: int) -> None:
        """Discard up to ``count`` values from the front."""
        if count < 0:
            raise ValueError("count must not be negative")
        del self._items[:count]

    def front(self) -> T:
        """Return the first value without removing it."""
        if self.empty():
            raise FixedQueueEmptyError("fixed queue is empty")
        return self._items[0]

    def clear(self) -> None:
        self._items.clear()

    def contents(self) -> tuple[T, ...]:
        """Return the queued values in order."""
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def capacity(self) -> int:
        return self._capacity

    def full(self) -> bool:
        return len(self._items) == self._capacity

    def empty(self) -> bool:
        return not self._items