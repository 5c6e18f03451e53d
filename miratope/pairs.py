"""Iteration over all pairs drawn from two sets."""

from __future__ import annotations

import copy
from typing import Any, Callable, Iterable, Iterator, Optional


class Pair:
    """Two sets of elements, iterated over as all pairs (a, b).

    The element from the first set varies fastest.
    """

    def __init__(self, first: Iterable[Any], second: Iterable[Any]) -> None:
        self.first = list(first)
        self.second = list(second)

    def _pairs(self) -> Iterator[tuple[Any, Any]]:
        for b in self.second:
            for a in self.first:
                yield a, b

    def map(self, f: Callable[[Any, Any], Any]) -> Iterator[Any]:
        """Yields f(a, b) for every pair."""
        return (f(a, b) for a, b in self._pairs())

    def filter_map(self, f: Callable[[Any, Any], Optional[Any]]) -> Iterator[Any]:
        """Yields f(a, b) for every pair where it isn't None."""
        return (y for y in self.map(f) if y is not None)

    def cloned(self) -> Iterator[tuple[Any, Any]]:
        """Yields copies of every pair."""
        return self.map(lambda a, b: (copy.copy(a), copy.copy(b)))


def into_pairs(first: Iterable[Any], second: Optional[Iterable[Any]] = None) -> Pair:
    """Pairs up two sets, or a set with itself if no second set is given."""
    first = list(first)
    return Pair(first, first if second is None else second)