# colour_thief/pqueue.py
from __future__ import annotations

"""
Binary min-heap with an injected comparator.

Exports:
  Comparator: Callable[[T, T], int]  # <0 when a sorts before b
  PriorityQueue(compare)
    push(item), pop() -> item, peek() -> item, size() -> int, drain() -> list

Notes:
  The quantizer passes descending comparators, so pop() yields the most
  significant box. Equal keys come out in no guaranteed order.
"""

from typing import Callable, Generic, List, TypeVar

T = TypeVar("T")

Comparator = Callable[[T, T], int]


class PriorityQueue(Generic[T]):
    """Array-backed binary heap ordered by `compare` (smallest first)."""

    def __init__(self, compare: Comparator) -> None:
        if compare is None:
            raise TypeError("compare must be a callable, got None")
        self._compare = compare
        self._data: List[T] = []

    def __len__(self) -> int:
        return len(self._data)

    def __bool__(self) -> bool:
        return bool(self._data)

    def size(self) -> int:
        return len(self._data)

    def push(self, item: T) -> None:
        self._data.append(item)
        self._sift_up(len(self._data) - 1)

    def peek(self) -> T:
        if not self._data:
            raise IndexError("peek from empty priority queue")
        return self._data[0]

    def pop(self) -> T:
        """Remove and return the first item under the comparator."""
        if not self._data:
            raise IndexError("pop from empty priority queue")
        top = self._data[0]
        last = self._data.pop()
        if self._data:
            self._data[0] = last
            self._sift_down(0)
        return top

    def drain(self) -> List[T]:
        """Pop every item, returning them in priority order."""
        out: List[T] = []
        while self._data:
            out.append(self.pop())
        return out

    # Heap maintenance

    def _sift_up(self, child: int) -> None:
        data = self._data
        while child > 0:
            parent = (child - 1) // 2
            if self._compare(data[child], data[parent]) >= 0:
                break
            data[child], data[parent] = data[parent], data[child]
            child = parent

    def _sift_down(self, parent: int) -> None:
        data = self._data
        n = len(data)
        while True:
            left = 2 * parent + 1
            if left >= n:
                break
            right = left + 1
            smaller = left
            if right < n and self._compare(data[right], data[left]) < 0:
                smaller = right
            if self._compare(data[parent], data[smaller]) <= 0:
                break
            data[parent], data[smaller] = data[smaller], data[parent]
            parent = smaller


__all__ = ["Comparator", "PriorityQueue"]
