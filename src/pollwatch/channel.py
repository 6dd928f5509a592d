"""Blocking, closeable channel used to hand events to the consumer."""

import threading
from collections import deque
from typing import Deque, Generic, Iterator, Optional, Tuple, TypeVar

from .exceptions import ChannelClosedError

T = TypeVar("T")


class Channel(Generic[T]):
    """
    Thread-safe FIFO channel with blocking sends.

    With capacity 0 (the default) the channel is unbuffered: send() returns
    only once a receiver has taken the item, so a consumer that stops
    draining stalls the producer. With capacity > 0 send() blocks only while
    the buffer is full.

    Closing wakes every waiter. Pending sends on an unbuffered channel fail
    with ChannelClosedError; items already buffered can still be received.
    """

    def __init__(self, capacity: int = 0):
        """
        Initialize the channel.

        Args:
            capacity: Number of items held without a receiver
        """
        if capacity < 0:
            raise ValueError(f"capacity cannot be negative: {capacity}")
        self.capacity = capacity
        self._items: Deque[Tuple[int, T]] = deque()
        self._cond = threading.Condition()
        self._closed = False
        self._sent = 0
        self._received = 0

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    def send(self, item: T) -> None:
        """
        Send an item, blocking until it is taken (or buffered).

        Args:
            item: Item to deliver

        Raises:
            ChannelClosedError: If the channel is closed before delivery
        """
        with self._cond:
            if self.capacity > 0:
                self._cond.wait_for(
                    lambda: self._closed or len(self._items) < self.capacity
                )
            if self._closed:
                raise ChannelClosedError("send on closed channel")

            self._sent += 1
            ticket = self._sent
            self._items.append((ticket, item))
            self._cond.notify_all()

            if self.capacity == 0:
                self._cond.wait_for(lambda: self._closed or self._received >= ticket)
                if self._received < ticket:
                    raise ChannelClosedError("channel closed before item was received")

    def receive(self, timeout: Optional[float] = None) -> T:
        """
        Take the next item.

        Args:
            timeout: Seconds to wait; None waits forever

        Returns:
            The next item

        Raises:
            ChannelClosedError: If the channel is closed and drained
            TimeoutError: If no item arrived within timeout
        """
        with self._cond:
            self._cond.wait_for(lambda: self._closed or self._items, timeout=timeout)
            if not self._items:
                if self._closed:
                    raise ChannelClosedError("receive on closed channel")
                raise TimeoutError(f"no item received within {timeout}s")

            _, item = self._items.popleft()
            self._received += 1
            self._cond.notify_all()
            return item

    def close(self) -> bool:
        """
        Close the channel.

        Returns:
            True if this call closed it, False if it was already closed
        """
        with self._cond:
            if self._closed:
                return False
            self._closed = True
            if self.capacity == 0:
                self._items.clear()
            self._cond.notify_all()
            return True

    def __iter__(self) -> Iterator[T]:
        """Yield items until the channel is closed and drained."""
        while True:
            try:
                yield self.receive()
            except ChannelClosedError:
                return

    def __len__(self) -> int:
        """Return the number of items waiting to be received."""
        with self._cond:
            return len(self._items)
