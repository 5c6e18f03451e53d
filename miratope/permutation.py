"""Permutations and permutation representations of groups."""

from __future__ import annotations

import bisect
import functools
from typing import Any, Iterable, Iterator, Sequence

from .group_item import GroupOps


@functools.total_ordering
class Permutation:
    """A permutation on n elements, mapping index i to self[i]."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, entries: Iterable[int]) -> None:
        values = [int(i) for i in entries]
        if sorted(values) != list(range(len(values))):
            raise ValueError(f"{values} is not a permutation")
        self._entries = values

    @classmethod
    def identity(cls, n: int) -> "Permutation":
        return cls(range(n))

    def __repr__(self) -> str:
        return f"Permutation({self._entries!r})"

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> int:
        return self._entries[index]

    def __iter__(self) -> Iterator[int]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Permutation):
            return NotImplemented
        return self._entries == other._entries

    def __lt__(self, other: "Permutation") -> bool:
        if not isinstance(other, Permutation):
            return NotImplemented
        return self._entries < other._entries

    def __mul__(self, other: "Permutation") -> "Permutation":
        """The composition mapping i to other[self[i]]."""
        if not isinstance(other, Permutation):
            return NotImplemented
        if len(self) != len(other):
            raise ValueError("permutations have different lengths")
        return Permutation(other[i] for i in self._entries)

    def inverse(self) -> "Permutation":
        inv = [0] * len(self._entries)
        for i, j in enumerate(self._entries):
            inv[j] = i
        return Permutation(inv)

    def swap(self, i: int, j: int) -> None:
        """Swaps two entries in place."""
        self._entries[i], self._entries[j] = self._entries[j], self._entries[i]


class PermutationOps(GroupOps):
    """Permutations under composition."""

    def identity(self, dim: int) -> Permutation:
        return Permutation.identity(dim)

    def inverse(self, x: Permutation) -> Permutation:
        return x.inverse()

    def mul(self, a: Permutation, b: Permutation) -> Permutation:
        return a * b

    def key(self, x: Permutation) -> tuple:
        return tuple(x)


class PermutationIter(Iterator[Permutation]):
    """Yields, for each group element a, the permutation b_j -> a * b_j of the elements."""

    def __init__(self, elements: Sequence[Any], ops: GroupOps) -> None:
        self._elements = list(elements)
        self._ops = ops
        keys = [ops.key(el) for el in self._elements]
        order = sorted(range(len(keys)), key=lambda i: keys[i])
        self._keys = [keys[i] for i in order]
        self._indices = order
        self._idx = 0

    def __iter__(self) -> "PermutationIter":
        return self

    def _index_of(self, el: Any) -> int:
        key = self._ops.key(el)
        pos = bisect.bisect_left(self._keys, key)
        if pos < len(self._keys) and self._keys[pos] == key:
            return self._indices[pos]
        raise ValueError("elements are not closed under multiplication")

    def __next__(self) -> Permutation:
        if self._idx >= len(self._elements):
            raise StopIteration
        a = self._elements[self._idx]
        self._idx += 1
        return Permutation(self._index_of(self._ops.mul(a, b)) for b in self._elements)