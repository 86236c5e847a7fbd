"""A heap-backed priority queue ordered by a caller supplied less function."""

from __future__ import annotations

import heapq
import itertools
from typing import Any, Callable, Optional

LessFn = Callable[[Any, Any], bool]


class _Entry:
    __slots__ = ("item", "seq", "less_fn")

    def __init__(self, item: Any, seq: int, less_fn: Optional[LessFn]) -> None:
        self.item = item
        self.seq = seq
        self.less_fn = less_fn

    def __lt__(self, other: "_Entry") -> bool:
        if self.less_fn is None:
            return self.seq < other.seq
        return bool(self.less_fn(self.item, other.item))


class PriorityQueue:
    """Queue that pops the item for which ``less_fn`` holds against all others.

    Without a less function items come out in the order they were pushed.
    """

    def __init__(self, less_fn: Optional[LessFn] = None) -> None:
        self._less_fn = less_fn
        self._heap: list[_Entry] = []
        self._counter = itertools.count()

    def push(self, item: Any) -> None:
        heapq.heappush(self._heap, _Entry(item, next(self._counter), self._less_fn))

    def pop(self) -> Any:
        """Remove and return the first item, or None when the queue is empty."""
        if not self._heap:
            return None
        return heapq.heappop(self._heap).item

    def empty(self) -> bool:
        return not self._heap

    def __len__(self) -> int:
        return len(self._heap)