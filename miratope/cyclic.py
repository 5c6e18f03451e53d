"""An iterator over a cyclic group."""

from __future__ import annotations

from typing import Any, Iterator

from .group_item import GroupOps


class Cyclic(Iterator[Any]):
    """Iterates over the powers of a single generator until it repeats.

    The generator comes first and the identity last.
    """

    def __init__(self, gen: Any, ops: GroupOps) -> None:
        self._gen = gen
        self._ops = ops
        self._cur = gen
        self._done = False

    def __iter__(self) -> "Cyclic":
        return self

    def __next__(self) -> Any:
        if self._done:
            raise StopIteration
        result = self._cur
        self._cur = self._ops.mul(self._cur, self._gen)
        if self._ops.eq(self._cur, self._gen):
            self._done = True
        return result