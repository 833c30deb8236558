"""Linked FIFO queue used for the waiting and attention lines."""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar

from clinic.errors import QueueUnderflow

T = TypeVar("T")


@dataclass
class _Node(Generic[T]):
    info: T
    link: "_Node[T] | None" = None


class LinkedQueue(Generic[T]):
    """Unbounded singly-linked FIFO queue.

    Iterating walks the nodes front to rear without changing the queue, so a
    full scan never leaves the queue short of an element.
    """

    def __init__(self):
        """Create an empty queue."""
        self._front: _Node[T] | None = None
        self._rear: _Node[T] | None = None
        self._count = 0

    def enqueue(self, item: T) -> None:
        """Add an item to the rear of the queue."""
        node = _Node(item)
        if self._rear is None:
            self._front = node
        else:
            self._rear.link = node
        self._rear = node
        self._count += 1

    def dequeue(self) -> T:
        """Remove and return the front item.

        Raises:
            QueueUnderflow: If the queue is empty
        """
        if self._front is None:
            raise QueueUnderflow("Dequeue attempted on empty queue.")

        node = self._front
        self._front = node.link
        if self._front is None:
            self._rear = None
        self._count -= 1
        return node.info

    def peek(self) -> T:
        """Return the front item without removing it."""
        if self._front is None:
            raise QueueUnderflow("Peek attempted on empty queue.")
        return self._front.info

    def is_empty(self) -> bool:
        """Check if the queue holds no items."""
        return self._front is None

    def is_full(self) -> bool:
        """A linked queue is never full."""
        return False

    def size(self) -> int:
        """Number of items in the queue."""
        return self._count

    def rotate_scan(self) -> Iterator[T]:
        """Yield every item by dequeuing and re-enqueuing it, exactly size() times.

        Leaves the queue in its original order once exhausted. Only safe while
        nothing else touches the queue.
        """
        for _ in range(self._count):
            item = self.dequeue()
            self.enqueue(item)
            yield item

    def __iter__(self) -> Iterator[T]:
        node = self._front
        seen = 0
        while node is not None:
            seen += 1
            yield node.info
            node = node.link
        if seen != self._count:
            raise QueueUnderflow(f"Scan found {seen} item(s) but queue size is {self._count}.")

    def __len__(self) -> int:
        return self._count

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __str__(self) -> str:
        return "".join(f"{item}\n" for item in self)
