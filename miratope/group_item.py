"""Operations that let values of various types act as elements of a group."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import numpy as np

from .geometry import MatrixOrd


class _MatrixKey(MatrixOrd):
    """A fuzzy-ordered matrix whose column-major entries are cached once."""

    def __init__(self, matrix) -> None:
        super().__init__(matrix)
        self._entries = tuple(np.ravel(self.matrix, order="F").tolist())

    def __iter__(self):
        return iter(self._entries)


class GroupOps(ABC):
    """The operations that make some type of value usable as a group element."""

    @abstractmethod
    def identity(self, dim: Any) -> Any:
        """The multiplicative identity for the given dimension parameter."""

    @abstractmethod
    def inverse(self, x: Any) -> Any:
        """The multiplicative inverse of a value."""

    @abstractmethod
    def mul(self, a: Any, b: Any) -> Any:
        """The product of two values."""

    @abstractmethod
    def key(self, x: Any) -> Any:
        """An ordered key for the value, resistant to small perturbations."""

    def eq(self, a: Any, b: Any) -> bool:
        """Whether two values are equal according to their keys."""
        return self.key(a) == self.key(b)

    def compare(self, a: Any, b: Any) -> int:
        """Compares two values by their keys, returning -1, 0 or 1."""
        ka, kb = self.key(a), self.key(b)
        if ka < kb:
            return -1
        if kb < ka:
            return 1
        return 0


class UnitOps(GroupOps):
    """The trivial group on the empty tuple."""

    def identity(self, dim: Any = None) -> tuple:
        return ()

    def inverse(self, x: tuple) -> tuple:
        return ()

    def mul(self, a: tuple, b: tuple) -> tuple:
        return ()

    def key(self, x: tuple) -> tuple:
        return ()


class FloatOps(GroupOps):
    """Nonzero floats under multiplication, compared exactly."""

    def identity(self, dim: Any = None) -> float:
        return 1.0

    def inverse(self, x: float) -> float:
        x = float(x)
        if x == 0.0:
            return float("inf") if str(x)[0] != "-" else float("-inf")
        return 1.0 / x

    def mul(self, a: float, b: float) -> float:
        return float(a) * float(b)

    def key(self, x: float) -> float:
        return float(x)


class MatrixOps(GroupOps):
    """Square matrices under multiplication, compared with a tolerance."""

    def identity(self, dim: int) -> np.ndarray:
        return np.eye(dim)

    def inverse(self, x) -> np.ndarray:
        """The inverse matrix, or an unchanged copy if the matrix is singular."""
        mat = np.array(x, dtype=float)
        try:
            return np.linalg.inv(mat)
        except np.linalg.LinAlgError:
            return mat

    def mul(self, a, b) -> np.ndarray:
        return np.asarray(a, dtype=float) @ np.asarray(b, dtype=float)

    def key(self, x) -> MatrixOrd:
        return _MatrixKey(x)


def quaternion_mul(q, r) -> np.ndarray:
    """The Hamilton product of two quaternions given as (w, x, y, z)."""
    w1, x1, y1, z1 = (float(c) for c in q)
    w2, x2, y2, z2 = (float(c) for c in r)
    return np.array(
        [
            w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
            w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
            w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
        ]
    )


class QuaternionOps(GroupOps):
    """Nonzero quaternions (w, x, y, z) under multiplication."""

    def identity(self, dim: Any = None) -> np.ndarray:
        return np.array([1.0, 0.0, 0.0, 0.0])

    def inverse(self, x) -> np.ndarray:
        q = np.asarray(x, dtype=float)
        norm_sq = float(q @ q)
        if norm_sq == 0.0:
            raise ValueError("the zero quaternion has no inverse")
        return np.array([q[0], -q[1], -q[2], -q[3]]) / norm_sq

    def mul(self, a, b) -> np.ndarray:
        return quaternion_mul(a, b)

    def key(self, x) -> MatrixOrd:
        return _MatrixKey(np.asarray(x, dtype=float))