# hfsm/runtime/event_queue.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from collections import deque
from typing import Deque, Optional

from hfsm.interfaces.types import EventName


class EventQueue:
    """
    FIFO queue of event names waiting to be dispatched by one machine instance.
    Not thread-safe: an instance and its queue are driven from a single thread.
    """

    def __init__(self) -> None:
        self._queue: Deque[EventName] = deque()

    def enqueue(self, event: EventName) -> None:
        """
        Add an event to the back of the queue.

        :param event: The event to enqueue.
        """
        self._queue.append(event)

    def dequeue(self) -> Optional[EventName]:
        """
        Remove and return the next event from the queue, or None if empty.
        """
        if self._queue:
            return self._queue.popleft()
        return None

    def clear(self) -> None:
        """
        Remove all events from the queue.
        """
        self._queue.clear()

    def __len__(self) -> int:
        return len(self._queue)

    def __bool__(self) -> bool:
        return bool(self._queue)
