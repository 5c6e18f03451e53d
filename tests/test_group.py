import math

import numpy as np
import pytest

from miratope.cd import InvalidSymbolError
from miratope.cox import Cox
from miratope.group import Group, direct_sum
from miratope.permutation import Permutation


def check(group, order, rot_order):
    cached = group.cache()
    elements = list(cached)
    assert len(elements) == order
    rotations = list(Group(group.dim, elements).rotations())
    assert len(rotations) == rot_order


@pytest.mark.parametrize("n", range(1, 11))
def test_trivial(n):
    check(Group.trivial(n), 1, 1)


@pytest.mark.parametrize("n", range(1, 11))
def test_central_inversion(n):
    check(Group.central_inv(n), 2, (n + 1) % 2 + 1)


@pytest.mark.parametrize("n", range(2, 11))
def test_dihedral(n):
    for d in range(1, n):
        if math.gcd(n, d) != 1:
            continue
        check(Group.dihedral_2(n), 2 * n, n)


@pytest.mark.parametrize("n", range(2, 8))
def test_dihedral_3(n):
    check(Group.dihedral_3(n), 2 * n, n)


@pytest.mark.parametrize("n", range(2, 10))
def test_tetrahedral_swirl(n):
    order = 24 * n
    group = Group.simplex(3).rotations().swirl(Group.cyclic(n).pad(1))
    check(group, order, order)


def test_simplex():
    order = 2
    for n in range(2, 7):
        order *= n + 1
        check(Group.simplex(n), order, order // 2)


def test_pm_simplex():
    order = 4
    for n in range(2, 7):
        order *= n + 1
        check(Group.simplex(n).matrix_product(Group.central_inv(n)), order, order // 2)


def test_hypercube():
    order = 2
    for n in range(2, 6):
        order *= n * 2
        check(Group.hypercube(n), order, order // 2)


def test_h3():
    check(Group.parse("o5o3o"), 120, 60)


def test_h4():
    check(Group.parse("o5o3o3o"), 14400, 7200)


def test_pentagonal_matches_parse():
    check(Group.pentagonal(3), 120, 60)


def test_a3_times_a3():
    group = Group.parse("o3o3o").direct_product(Group.parse("o3o3o"))
    check(group, 576, 288)


def test_step():
    for n in range(1, 10):
        for d in range(1, n):
            group = Group.step_hom(
                Group.cyclic(n), lambda mat, d=d: np.linalg.matrix_power(mat, d)
            )
            check(group, n, n)


def test_with_central_inv_doubles_order():
    check(Group.simplex(3).with_central_inv(), 48, 24)


def test_demihypercube_d4():
    check(Group.demihypercube(4), 192, 96)


def test_cyclic_ends_with_identity():
    elements = list(Group.cyclic(4))
    assert len(elements) == 4
    assert np.allclose(elements[-1], np.eye(2))
    assert np.allclose(elements[0], [[0.0, -1.0], [1.0, 0.0]])


def test_pad_adds_dimensions():
    group = Group.cyclic(3).pad(2)
    assert group.dim == 4
    elements = list(group)
    assert len(elements) == 3
    for el in elements:
        assert el.shape == (4, 4)
        assert np.allclose(el[2:, 2:], np.eye(2))


def test_direct_sum():
    result = direct_sum(np.array([[1.0, 2.0], [3.0, 4.0]]), np.array([[5.0]]))
    expected = np.array([[1.0, 2.0, 0.0], [3.0, 4.0, 0.0], [0.0, 0.0, 5.0]])
    assert np.array_equal(result, expected)


def test_involution():
    assert list(Group.involution()) == [Permutation([0, 1]), Permutation([1, 0])]


def test_permutations_of_cyclic():
    group = Group.cyclic(3).permutations()
    assert group.dim == 3
    assert list(group) == [
        Permutation([1, 2, 0]),
        Permutation([2, 0, 1]),
        Permutation([0, 1, 2]),
    ]


def test_iso_maps_elements():
    group = Group.trivial(2).iso(2, lambda m: 2.0 * m)
    assert group.dim == 2
    assert np.array_equal(next(group), 2.0 * np.eye(2))


def test_reflection_at():
    elements = list(Group.reflection_at(3, 1))
    assert np.array_equal(elements[1], np.diag([1.0, -1.0, 1.0]))


def test_coxeter_non_spherical_is_none():
    assert Group.parse("o6o3o") is None
    assert Group.coxeter(Cox.from_lin_diagram([6.0, 3.0])) is None


def test_parse_error_propagates():
    with pytest.raises(InvalidSymbolError):
        Group.parse("x3⊕5o")


@pytest.mark.parametrize("n", [3, 9])
def test_gosset_out_of_range(n):
    with pytest.raises(ValueError):
        Group.gosset(n)


@pytest.mark.parametrize("n", [1, 5])
def test_pentagonal_out_of_range(n):
    with pytest.raises(ValueError):
        Group.pentagonal(n)


def test_central_inv_zero_dim():
    with pytest.raises(ValueError):
        Group.central_inv(0)


def test_swirl_requires_3d():
    with pytest.raises(ValueError):
        Group.cyclic(3).swirl(Group.cyclic(3))