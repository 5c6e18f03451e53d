"""Iteration over a group generated by a set of elements."""

from __future__ import annotations

import bisect
from collections import deque
from typing import Any, Iterator, Optional, Sequence

from .group_item import GroupOps


class GenIter(Iterator[Any]):
    """Yields every element of the group generated by `gens`, in BFS order.

    A fuzzy lookup table records how many times each element has been found,
    so elements are dropped from it once they can't be found again.
    """

    def __init__(self, dim: Any, gens: Sequence[Any], ops: GroupOps) -> None:
        if not gens:
            raise ValueError("a group needs at least one generator")
        self.dim = dim
        self.gens = list(gens)
        self.ops = ops

        identity = ops.identity(dim)
        self._queue: deque = deque([identity])
        # The identity counts as found zero times, so it's neither queued nor
        # reported twice.
        self._keys: list = [ops.key(identity)]
        self._counts: list[int] = [0]
        self._gen_idx = 0

    def __iter__(self) -> "GenIter":
        return self

    def _insert(self, el: Any) -> bool:
        """Records an element; returns whether it is being reported for the first time."""
        key = self.ops.key(el)
        pos = bisect.bisect_left(self._keys, key)

        if pos == len(self._keys) or not self._keys[pos] == key:
            self._keys.insert(pos, key)
            self._counts.insert(pos, 1)
            self._queue.append(el)
            return True

        value = self._counts[pos]
        if value != len(self.gens) - 1:
            self._counts[pos] = value + 1
        else:
            del self._keys[pos]
            del self._counts[pos]
        return value == 0

    def _next_el_gen(self) -> Optional[tuple]:
        if not self._queue:
            return None

        gen = self.gens[self._gen_idx]
        self._gen_idx += 1
        if self._gen_idx == len(self.gens):
            self._gen_idx = 0
            el = self._queue.popleft()
        else:
            el = self._queue[0]
        return el, gen

    def __next__(self) -> Any:
        while True:
            pair = self._next_el_gen()
            if pair is None:
                raise StopIteration
            el, gen = pair
            new_el = self.ops.mul(el, gen)
            if self._insert(new_el):
                return new_el