import math

import numpy as np
import pytest

from miratope.gen_iter import GenIter
from miratope.group_item import FloatOps, MatrixOps
from miratope.permutation import Permutation, PermutationOps


def _reflection(theta):
    return np.array(
        [
            [math.cos(2 * theta), math.sin(2 * theta)],
            [math.sin(2 * theta), -math.cos(2 * theta)],
        ]
    )


def _contains(ops, elements, x):
    return any(ops.eq(x, e) for e in elements)


def _assert_group(ops, elements, dim):
    for i, a in enumerate(elements):
        for b in elements[i + 1:]:
            assert not ops.eq(a, b)
    assert _contains(ops, elements, ops.identity(dim))
    for a in elements:
        assert _contains(ops, elements, ops.inverse(a))
        for b in elements:
            assert _contains(ops, elements, ops.mul(a, b))


def test_float_group():
    assert list(GenIter(None, [-1.0], FloatOps())) == [-1.0, 1.0]


def test_dihedral_group():
    ops = MatrixOps()
    gens = [_reflection(0.0), _reflection(math.pi / 3)]
    elements = list(GenIter(2, gens, ops))
    assert len(elements) == 6
    _assert_group(ops, elements, 2)
    rotations = [m for m in elements if np.linalg.det(m) > 0]
    assert 2 * len(rotations) == len(elements)


def test_single_rotation():
    ops = MatrixOps()
    angle = math.tau / 5
    rot = np.array(
        [[math.cos(angle), -math.sin(angle)], [math.sin(angle), math.cos(angle)]]
    )
    elements = list(GenIter(2, [rot], ops))
    assert ops.eq(elements[0], rot)
    assert ops.eq(elements[-1], np.eye(2))
    _assert_group(ops, elements, 2)


def test_symmetric_group_of_permutations():
    ops = PermutationOps()
    elements = list(GenIter(3, [Permutation([1, 0, 2]), Permutation([1, 2, 0])], ops))
    assert len(elements) == 6
    _assert_group(ops, elements, 3)


def test_permutation_matrices():
    ops = MatrixOps()
    gens = []
    for i in range(3):
        m = np.eye(4)
        m[[i, i + 1]] = m[[i + 1, i]]
        gens.append(m)
    elements = list(GenIter(4, gens, ops))
    assert len(elements) == math.factorial(4)
    _assert_group(ops, elements, 4)


def test_no_generators():
    with pytest.raises(ValueError):
        GenIter(2, [], MatrixOps())


def test_iter_returns_self():
    it = GenIter(None, [-1.0], FloatOps())
    assert iter(it) is it
    assert next(it) == -1.0