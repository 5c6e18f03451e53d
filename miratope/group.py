"""Symmetry groups built from Coxeter diagrams, products and other constructions."""

from __future__ import annotations

import math
from itertools import chain
from typing import Any, Callable, Iterable, Iterator, Optional

import numpy as np

from .cox import Cox
from .cyclic import Cyclic
from .gen_iter import GenIter
from .group_item import (
    FloatOps,
    GroupOps,
    MatrixOps,
    QuaternionOps,
    UnitOps,
    quaternion_mul,
)
from .pairs import into_pairs
from .parse import parse_gen_iter
from .permutation import Permutation, PermutationIter, PermutationOps


def _ops_for(x: Any) -> Optional[GroupOps]:
    """Picks the group operations that suit a value, if any do."""
    if isinstance(x, Permutation):
        return PermutationOps()
    if isinstance(x, np.ndarray):
        if x.ndim == 2:
            return MatrixOps()
        if x.ndim == 1 and x.shape[0] == 4:
            return QuaternionOps()
        return None
    if isinstance(x, tuple) and not x:
        return UnitOps()
    if isinstance(x, (int, float)) and not isinstance(x, bool):
        return FloatOps()
    return None


def _items_equal(a: Any, b: Any) -> bool:
    ops = _ops_for(a)
    if ops is None:
        return bool(a == b)
    return ops.eq(a, b)


def direct_sum(mat1, mat2) -> np.ndarray:
    """The block diagonal matrix with mat1 and mat2 on the diagonal."""
    mat1 = np.asarray(mat1, dtype=float)
    mat2 = np.asarray(mat2, dtype=float)
    dim1 = mat1.shape[0]
    dim = dim1 + mat2.shape[0]
    result = np.zeros((dim, dim))
    result[:dim1, :dim1] = mat1
    result[dim1:, dim1:] = mat2
    return result


def _mat_to_quat(mat) -> np.ndarray:
    """The unit quaternion (w, x, y, z) of the rotation in the top-left 3x3 block."""
    m = np.asarray(mat, dtype=float)[:3, :3]
    tr = m[0, 0] + m[1, 1] + m[2, 2]

    if tr > 0.0:
        denom = math.sqrt(tr + 1.0) * 2.0
        q = [
            0.25 * denom,
            (m[2, 1] - m[1, 2]) / denom,
            (m[0, 2] - m[2, 0]) / denom,
            (m[1, 0] - m[0, 1]) / denom,
        ]
    elif m[0, 0] > m[1, 1] and m[0, 0] > m[2, 2]:
        denom = math.sqrt(1.0 + m[0, 0] - m[1, 1] - m[2, 2]) * 2.0
        q = [
            (m[2, 1] - m[1, 2]) / denom,
            0.25 * denom,
            (m[0, 1] + m[1, 0]) / denom,
            (m[0, 2] + m[2, 0]) / denom,
        ]
    elif m[1, 1] > m[2, 2]:
        denom = math.sqrt(1.0 + m[1, 1] - m[0, 0] - m[2, 2]) * 2.0
        q = [
            (m[0, 2] - m[2, 0]) / denom,
            (m[0, 1] + m[1, 0]) / denom,
            0.25 * denom,
            (m[1, 2] + m[2, 1]) / denom,
        ]
    else:
        denom = math.sqrt(1.0 + m[2, 2] - m[0, 0] - m[1, 1]) * 2.0
        q = [
            (m[1, 0] - m[0, 1]) / denom,
            (m[0, 2] + m[2, 0]) / denom,
            (m[1, 2] + m[2, 1]) / denom,
            0.25 * denom,
        ]

    quat = np.array(q, dtype=float)
    return quat / np.linalg.norm(quat)


def _mat_from_quats(q, r) -> np.ndarray:
    """The 4x4 matrix of x -> x' where the columns are q, qi, qj, qk times r."""
    w, x, y, z = (float(c) for c in q)
    columns = [
        (w, x, y, z),
        (-x, w, z, -y),
        (-y, -z, w, x),
        (-z, y, -x, w),
    ]
    return np.column_stack([quaternion_mul(c, r) for c in columns])


class Group(Iterator[Any]):
    """An iterator over the elements of a group.

    Creating one asserts that the elements are closed under an associative
    product, contain the identity and contain every inverse.
    """

    def __init__(self, dim: Any, elements: Iterable[Any]) -> None:
        self.dim = dim
        self._iter = iter(elements)

    def __iter__(self) -> "Group":
        return self

    def __next__(self) -> Any:
        return next(self._iter)

    # Generic constructions.

    def iso(self, dim: Any, f: Callable[[Any], Any]) -> "Group":
        """Maps every element through an isomorphism into another group."""
        return Group(dim, map(f, self._iter))

    def sub(self, predicate: Callable[[Any], bool]) -> "Group":
        """The subgroup of elements satisfying the predicate."""
        return Group(self.dim, filter(predicate, self._iter))

    def cache(self) -> "Group":
        """Collects every remaining element into a stored group."""
        return Group(self.dim, list(self._iter))

    def permutations(self) -> "Group":
        """The group of permutations that left multiplication induces on the elements."""
        elements = list(self._iter)
        ops = _ops_for(elements[0]) if elements else None
        if ops is None:
            raise TypeError("cannot determine the group operations of these elements")
        return Group(len(elements), PermutationIter(elements, ops))

    @classmethod
    def trivial(cls, dim: int) -> "Group":
        """The group holding only the identity matrix."""
        return cls(dim, [np.eye(dim)])

    @classmethod
    def cyclic_gen(cls, dim: Any, gen: Any, ops: GroupOps) -> "Group":
        """The cyclic group generated by a single element."""
        return cls(dim, Cyclic(gen, ops))

    @classmethod
    def cyclic(cls, n: int) -> "Group":
        """The cyclic group generated by a rotation of 2*pi/n."""
        angle = math.tau / n
        s, c = math.sin(angle), math.cos(angle)
        return cls.cyclic_gen(2, np.array([[c, -s], [s, c]]), MatrixOps())

    # Coxeter groups.

    @classmethod
    def coxeter(cls, cox: Cox) -> Optional["Group"]:
        """The reflection group of a Coxeter matrix, or None if it isn't spherical."""
        gen_iter: Optional[GenIter] = cox.gen_iter()
        if gen_iter is None:
            return None
        return cls(gen_iter.dim, gen_iter)

    @classmethod
    def parse(cls, text: str) -> Optional["Group"]:
        """Parses a diagram into its Coxeter group, or None if it isn't spherical."""
        gen_iter = parse_gen_iter(text)
        if gen_iter is None:
            return None
        return cls(gen_iter.dim, gen_iter)

    @classmethod
    def _valid_coxeter(cls, cox: Cox) -> "Group":
        group = cls.coxeter(cox)
        if group is None:
            raise ValueError("Coxeter matrix does not describe a spherical group")
        return group

    @classmethod
    def simplex(cls, n: int) -> "Group":
        """The A(n) group."""
        return cls._valid_coxeter(Cox.a(n))

    @classmethod
    def hypercube(cls, n: int) -> "Group":
        """The B(n) group."""
        return cls._valid_coxeter(Cox.b(n))

    @classmethod
    def demihypercube(cls, n: int) -> "Group":
        """The D(n) group."""
        return cls._valid_coxeter(Cox.d(n))

    @classmethod
    def gosset(cls, n: int) -> "Group":
        """The E(n) group, for n from 4 to 8."""
        if not 4 <= n <= 8:
            raise ValueError(f"E({n}) is not a valid Gosset group")
        return cls._valid_coxeter(Cox.e(n))

    @classmethod
    def pentagonal(cls, n: int) -> "Group":
        """The H(n) group, for n from 2 to 4."""
        if not 2 <= n <= 4:
            raise ValueError(f"H({n}) is not a valid pentagonal group")
        return cls._valid_coxeter(Cox.h(n))

    # Groups of order two.

    @classmethod
    def two(cls, dim: Any, gen: Any, ops: GroupOps) -> "Group":
        """The group of the identity and an involution."""
        return cls(dim, [ops.identity(dim), gen])

    @classmethod
    def central_inv(cls, dim: int) -> "Group":
        """The group of the identity and central inversion."""
        if dim < 1:
            raise ValueError("dimension must be at least 1")
        return cls.two(dim, -np.eye(dim), MatrixOps())

    @classmethod
    def reflection_at(cls, dim: int, idx: int) -> "Group":
        """The group of the identity and the reflection of one coordinate."""
        if dim < 1:
            raise ValueError("dimension must be at least 1")
        refl = np.eye(dim)
        refl[idx, idx] = -1.0
        return cls.two(dim, refl, MatrixOps())

    @classmethod
    def involution(cls) -> "Group":
        """The symmetric group on two elements."""
        return cls.two(2, Permutation([1, 0]), PermutationOps())

    @classmethod
    def dihedral_2(cls, n: int) -> "Group":
        """The planar dihedral group of a 2*pi/n rotation and an x reflection."""
        return cls.cyclic(n).with_reflection_at(0)

    @classmethod
    def dihedral_3(cls, n: int) -> "Group":
        """The dihedral group in 3D, with the reflection along the third axis."""
        return cls.cyclic(n).pad(1).with_reflection_at(2)

    # Matrix group constructions.

    def pad(self, dim: int) -> "Group":
        """Adds `dim` fixed dimensions to every matrix."""
        return self.direct_product(Group.trivial(dim))

    def rotations(self) -> "Group":
        """The subgroup of matrices with positive determinant."""
        return self.sub(lambda el: float(np.linalg.det(el)) > 0.0)

    def matrix_product(self, other: "Group") -> "Group":
        """All products of an element of self with one of other.

        The groups must commute for the result to be a group.
        """
        pairs = into_pairs(list(self._iter), list(other))
        return Group(self.dim, pairs.map(lambda a, b: np.asarray(a) @ np.asarray(b)))

    def with_central_inv(self) -> "Group":
        """The group with central inversion appended to every element."""
        return self.matrix_product(Group.central_inv(self.dim))

    def with_reflection_at(self, idx: int) -> "Group":
        """The group with a coordinate reflection appended to every element."""
        return self.matrix_product(Group.reflection_at(self.dim, idx))

    def direct_product(self, other: "Group") -> "Group":
        """The direct product, with pairs of matrices mapped to their direct sum."""
        pairs = into_pairs(list(self._iter), list(other))
        return Group(self.dim + other.dim, pairs.map(direct_sum))

    def swirl_hom(
        self,
        other: "Group",
        alpha: Callable[[Any], Any],
        beta: Callable[[Any], Any],
    ) -> "Group":
        """The diploid construction of two 3D rotation groups, matched by homomorphisms."""
        if self.dim != 3 or other.dim != 3:
            raise ValueError("swirl groups need two 3-dimensional groups")

        first = [(alpha(mat), _mat_to_quat(mat)) for mat in self._iter]
        second = [(beta(mat), _mat_to_quat(mat)) for mat in other]

        def combine(a, b):
            (a_val, q), (b_val, r) = a, b
            if not _items_equal(a_val, b_val):
                return None
            prod = _mat_from_quats(q, r)
            return (-prod, prod)

        return Group(4, chain.from_iterable(into_pairs(first, second).filter_map(combine)))

    def swirl(self, other: "Group") -> "Group":
        """The diploid construction of two 3D rotation groups."""
        return self.swirl_hom(other, lambda _: (), lambda _: ())

    def step_hom(self, f: Callable[[Any], Any]) -> "Group":
        """A step prism group, pairing each matrix with its image under f."""
        return self.iso(2 * self.dim, lambda mat: direct_sum(mat, f(mat)))