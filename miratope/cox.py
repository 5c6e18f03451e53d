"""Coxeter matrices and the reflection groups they describe."""

from __future__ import annotations

import math
from itertools import repeat
from typing import Iterable, Optional, Sequence

import numpy as np

from .consts import EPS
from .gen_iter import GenIter
from .group_item import MatrixOps


class Cox:
    """A Coxeter matrix: entry (i, j) is the edge value between nodes i and j.

    Nodes not joined by an edge have an entry of 2, and the diagonal is 1.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, matrix) -> None:
        self.matrix = np.array(matrix, dtype=float)

    def __repr__(self) -> str:
        return f"Cox({self.matrix.tolist()!r})"

    def dim(self) -> int:
        """The number of rows of the matrix."""
        return int(self.matrix.shape[0])

    def __getitem__(self, index: tuple[int, int]) -> float:
        return float(self.matrix[index])

    def __setitem__(self, index: tuple[int, int], value: float) -> None:
        self.matrix[index] = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cox):
            return NotImplemented
        return self.matrix.shape == other.matrix.shape and bool(
            np.array_equal(self.matrix, other.matrix)
        )

    def link(self, i: int, j: int, edge: float) -> None:
        """Joins two nodes with an edge of the given value."""
        self[(i, j)] = edge
        self[(j, i)] = edge

    @classmethod
    def trivial(cls) -> "Cox":
        """The Coxeter matrix of the trivial 1D group."""
        return cls([[1.0]])

    @classmethod
    def from_lin_diagram_iter(cls, edges: Iterable[float], dim: int) -> "Cox":
        """Builds the matrix of a linear diagram from its successive edge values."""
        matrix = np.full((dim, dim), 2.0)
        np.fill_diagonal(matrix, 1.0)
        cox = cls(matrix)
        for i, edge in enumerate(edges):
            cox.link(i, i + 1, float(edge))
        return cox

    @classmethod
    def from_lin_diagram(cls, diagram: Sequence[float]) -> "Cox":
        """Builds the matrix of a linear diagram with the given edges."""
        return cls.from_lin_diagram_iter(diagram, len(diagram))

    @classmethod
    def i2(cls, x: float) -> "Cox":
        return cls.from_lin_diagram([x])

    @classmethod
    def a(cls, n: int) -> "Cox":
        return cls.from_lin_diagram_iter(repeat(3.0, max(n - 1, 0)), n)

    @classmethod
    def b(cls, n: int) -> "Cox":
        return cls.from_lin_diagram_iter([4.0, *repeat(3.0, max(n - 2, 0))], n)

    @classmethod
    def d(cls, n: int) -> "Cox":
        cox = cls.a(n)
        cox.link(0, 1, 2.0)
        cox.link(0, 2, 3.0)
        return cox

    @classmethod
    def e(cls, n: int) -> "Cox":
        cox = cls.a(n)
        cox.link(0, 1, 2.0)
        cox.link(0, 3, 3.0)
        return cox

    @classmethod
    def h(cls, n: int) -> "Cox":
        return cls.from_lin_diagram_iter([5.0, *repeat(3.0, max(n - 2, 0))], n)

    def normals(self) -> Optional[np.ndarray]:
        """An upper triangular matrix whose columns are unit mirror normals.

        Returns None if the mirrors don't fit in spherical space.
        """
        dim = self.dim()
        mat = np.zeros((dim, dim))

        for i in range(dim):
            n_i = mat[:, i]
            for j in range(i):
                n_j = mat[:, j]
                dot = float(n_i[: j + 1] @ n_j[: j + 1])
                n_i[j] = (math.cos(math.pi / self[(i, j)]) - dot) / n_j[j]

            norm_sq = float(n_i @ n_i)
            if norm_sq >= 1.0 - EPS:
                return None
            n_i[i] = math.sqrt(1.0 - norm_sq)

        return mat

    def gen_iter(self) -> Optional[GenIter]:
        """An iterator over the reflection group, or None if it isn't spherical."""
        normals = self.normals()
        if normals is None:
            return None
        dim = normals.shape[0]

        def reflection(n: np.ndarray) -> np.ndarray:
            return np.eye(dim) - np.outer(n, n) * (2.0 / float(n @ n))

        gens = [reflection(normals[:, k].copy()) for k in range(dim)]
        return GenIter(dim, gens, MatrixOps())