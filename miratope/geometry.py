"""Points, subspaces, hyperplanes and fuzzy-ordered matrices in n dimensions."""

from __future__ import annotations

import functools
import math
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence

import numpy as np

from .consts import EPS


def _point(p) -> np.ndarray:
    return np.asarray(p, dtype=float)


@dataclass(eq=False)
class Hypersphere:
    """A hypersphere with a center and a (possibly negative) squared radius.

    A negative squared radius makes reciprocation also reflect about the center.
    """

    center: np.ndarray
    squared_radius: float

    def __post_init__(self) -> None:
        self.center = _point(self.center)
        self.squared_radius = float(self.squared_radius)

    def radius(self) -> float:
        """The radius, or NaN if the squared radius is negative."""
        if self.squared_radius < 0:
            return math.nan
        return math.sqrt(self.squared_radius)

    @classmethod
    def with_radius(cls, center, radius: float) -> "Hypersphere":
        return cls(center, radius * radius)

    @classmethod
    def with_squared_radius(cls, center, squared_radius: float) -> "Hypersphere":
        return cls(center, squared_radius)

    @classmethod
    def unit(cls, dim: int) -> "Hypersphere":
        """The unit hypersphere centered at the origin."""
        return cls(np.zeros(dim), 1.0)

    def reciprocate(self, p) -> Optional[np.ndarray]:
        """Reciprocates a point, or returns None if it's too close to the center."""
        q = _point(p) - self.center
        s = float(q @ q)
        if s < EPS:
            return None
        return q / s * self.squared_radius + self.center

    @classmethod
    def circumsphere(cls, points: Sequence) -> Optional["Hypersphere"]:
        """The circumsphere of the points, or None if they aren't circumscribable."""
        pts = [_point(p) for p in points]
        if not pts:
            raise ValueError("a circumsphere can't be computed from no points")

        first = pts[0]
        center = first.copy()
        subspace = Subspace(first.copy())

        for point in pts:
            basis_vector = subspace.add(point)
            if basis_vector is not None:
                c_p = center - point
                c_f = center - first
                distance = (float(c_p @ c_p) - float(c_f @ c_f)) / (
                    2.0 * float((point - first) @ basis_vector)
                )
                center = center + basis_vector * distance
            elif not abs(
                np.linalg.norm(center - first) - np.linalg.norm(center - point)
            ) <= EPS:
                return None

        diff = center - first
        return cls(center, float(diff @ diff))


class Subspace:
    """An affine subspace through a point, spanned by an orthonormal basis."""

    def __init__(self, offset, basis: Optional[Iterable] = None) -> None:
        self.offset = _point(offset)
        self.basis: list[np.ndarray] = [_point(b) for b in basis] if basis else []

    def __repr__(self) -> str:
        return f"Subspace(offset={self.offset!r}, basis={self.basis!r})"

    def dim(self) -> int:
        """The dimension of the ambient space."""
        return int(self.offset.shape[0])

    def rank(self) -> int:
        """The number of vectors in the basis."""
        return len(self.basis)

    def is_hyperplane(self) -> bool:
        return self.dim() == self.rank() + 1

    def is_full_rank(self) -> bool:
        return self.dim() == self.rank()

    def add(self, p) -> Optional[np.ndarray]:
        """Adds a point; returns the new basis vector, or None if p already lies here."""
        p = _point(p)
        v = p - self.project(p)
        norm = float(np.linalg.norm(v))
        if norm > EPS:
            v = v / norm
            self.basis.append(v)
            return v
        return None

    @classmethod
    def from_points(cls, points: Iterable) -> "Subspace":
        """Builds the subspace spanned by points, stopping early at full rank."""
        it = iter(points)
        try:
            first = next(it)
        except StopIteration:
            raise ValueError("a subspace can't be created from no points") from None

        subspace = cls(_point(first).copy())
        for p in it:
            if subspace.add(p) is not None and subspace.is_full_rank():
                return subspace
        return subspace

    @classmethod
    def from_points_with(cls, points: Iterable, rank: int) -> Optional["Subspace"]:
        """Builds the subspace of the points, or None if its rank exceeds `rank`."""
        it = iter(points)
        try:
            first = next(it)
        except StopIteration:
            raise ValueError("a subspace can't be created from no points") from None

        subspace = cls(_point(first).copy())
        for p in it:
            if subspace.add(p) is not None and subspace.rank() > rank:
                return None
        return subspace

    def project(self, p) -> np.ndarray:
        """Projects a point onto the subspace."""
        rel = _point(p) - self.offset
        q = self.offset.copy()
        for b in self.basis:
            q = q + b * float(rel @ b)
        return q

    def flatten(self, p) -> np.ndarray:
        """Coordinates of the projection of p in the subspace's basis."""
        rel = _point(p) - self.offset
        return np.array([float(rel @ b) for b in self.basis], dtype=float)

    def flatten_vec(self, points: Sequence) -> list:
        """Flattens every point, leaving them as they are if the subspace is full rank."""
        if self.is_full_rank():
            return list(points)
        return [self.flatten(p) for p in points]

    def distance(self, p) -> float:
        p = _point(p)
        return float(np.linalg.norm(p - self.project(p)))

    def is_outer(self, p) -> bool:
        """Whether the point lies on the subspace."""
        return abs(self.distance(p)) <= EPS

    def normal(self, p) -> Optional[np.ndarray]:
        """A unit normal pointing towards p, or None if p lies on the subspace."""
        p = _point(p)
        v = p - self.project(p)
        norm = float(np.linalg.norm(v))
        if norm <= EPS:
            return None
        return v / norm


class Hyperplane:
    """An oriented hyperplane together with its normal vector."""

    def __init__(self, normal, pos: float) -> None:
        normal = _point(normal)
        pos = float(pos)
        rank = normal.shape[0]
        subspace = Subspace(normal * pos)
        e = np.zeros(rank)

        for i in range(rank):
            e[i] = 1.0
            e = e + normal * (pos - float(e @ normal))
            subspace.add(e)
            e[i] = 0.0

        self.subspace = subspace
        self._normal = normal

    def project(self, p) -> np.ndarray:
        return self.subspace.project(p)

    def distance(self, p) -> float:
        """Signed distance; positive on the side the normal points to."""
        p = _point(p)
        return float((p - self.project(p)) @ self._normal)

    def flatten(self, p) -> np.ndarray:
        return self.subspace.flatten(p)

    def is_outer(self, p) -> bool:
        return abs(self.distance(p)) <= EPS

    def intersect(self, segment: "Segment") -> Optional[np.ndarray]:
        """The intersection with a line segment, or None if there is none."""
        d0 = self.distance(segment.start)
        d1 = self.distance(segment.end)
        if not abs(d0 - d1) <= EPS and (d0 < -EPS) != (d1 < -EPS):
            return segment.at(d1 / (d1 - d0))
        return None


@dataclass(eq=False)
class Segment:
    """A line segment between two points."""

    start: np.ndarray
    end: np.ndarray

    def __post_init__(self) -> None:
        self.start = _point(self.start)
        self.end = _point(self.end)

    def at(self, t: float) -> np.ndarray:
        """The point start * t + end * (1 - t)."""
        return self.start * t + self.end * (1.0 - t)


@functools.total_ordering
class MatrixOrd:
    """A matrix ordered lexicographically (column-major), with entries within EPS equal."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, matrix) -> None:
        self.matrix = np.asarray(matrix, dtype=float)

    def __repr__(self) -> str:
        return f"MatrixOrd({self.matrix!r})"

    def shape(self) -> tuple[int, int]:
        if self.matrix.ndim == 1:
            return (int(self.matrix.shape[0]), 1)
        rows, cols = self.matrix.shape
        return (int(rows), int(cols))

    def __iter__(self) -> Iterator[float]:
        return (float(x) for x in np.ravel(self.matrix, order="F"))

    def __getitem__(self, index):
        if self.matrix.ndim == 1 and isinstance(index, tuple):
            row, col = index
            if col != 0:
                raise IndexError("column index out of range")
            return float(self.matrix[row])
        return self.matrix[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MatrixOrd):
            return NotImplemented
        if self.shape() != other.shape():
            raise ValueError("matrix shape mismatch")
        return all(abs(x - y) <= EPS for x, y in zip(self, other))

    def __lt__(self, other: "MatrixOrd") -> bool:
        if not isinstance(other, MatrixOrd):
            return NotImplemented
        return self.compare(other) < 0

    def compare(self, other: "MatrixOrd") -> int:
        """Returns -1, 0 or 1; raises ValueError on NaN entries."""
        for x, y in zip(self, other):
            if not abs(x - y) <= EPS:
                if x < y:
                    return -1
                if x > y:
                    return 1
                raise ValueError("matrix has NaN values")
        return 0