import random

import pytest

from ringproofs.bulletproofs.scalar_vector import ScalarVector
from ringproofs.ed25519 import GROUP_ORDER, Point, point_sum, random_scalar


@pytest.fixture
def rng():
    return random.Random(7)


def _random_vector(rng, length):
    return ScalarVector(random_scalar(rng) for _ in range(length))


def test_zeros_has_requested_length_and_only_zeros():
    vector = ScalarVector.zeros(5)
    assert len(vector) == 5
    assert list(vector) == [0] * 5


def test_values_are_reduced():
    vector = ScalarVector([GROUP_ORDER + 3, -1])
    assert list(vector) == [3, GROUP_ORDER - 1]


def test_powers_match_exponentiation(rng):
    x = random_scalar(rng)
    vector = ScalarVector.powers(x, 9)
    assert len(vector) == 9
    for i, value in enumerate(vector):
        assert value == pow(x, i, GROUP_ORDER)


def test_powers_of_length_one_is_one(rng):
    assert list(ScalarVector.powers(random_scalar(rng), 1)) == [1]


def test_powers_of_length_zero_is_rejected():
    with pytest.raises(ValueError):
        ScalarVector.powers(2, 0)


def test_scalar_add_then_sub_round_trips(rng):
    vector = _random_vector(rng, 6)
    scalar = random_scalar(rng)
    assert (vector + scalar) - scalar == vector


def test_vector_add_then_sub_round_trips(rng):
    a = _random_vector(rng, 4)
    b = _random_vector(rng, 4)
    assert (a + b) - b == a


def test_elementwise_multiplication_commutes(rng):
    a = _random_vector(rng, 4)
    b = _random_vector(rng, 4)
    assert a * b == b * a
    assert (a * b)[2] == a[2] * b[2] % GROUP_ORDER


def test_scalar_multiplication_scales_sum(rng):
    vector = _random_vector(rng, 5)
    scalar = random_scalar(rng)
    assert (vector * scalar).sum() == vector.sum() * scalar % GROUP_ORDER


def test_length_mismatch_is_rejected(rng):
    with pytest.raises(ValueError):
        _random_vector(rng, 3) + _random_vector(rng, 4)


def test_inner_product_with_ones_is_sum(rng):
    vector = _random_vector(rng, 8)
    ones = ScalarVector([1] * 8)
    assert vector.inner_product(ones) == vector.sum()
    assert vector.inner_product(ScalarVector.zeros(8)) == 0


def test_weighted_inner_product_with_unit_weights(rng):
    a = _random_vector(rng, 4)
    b = _random_vector(rng, 4)
    ones = ScalarVector([1] * 4)
    assert a.weighted_inner_product(b, ones) == a.inner_product(b)


def test_split_halves_reassemble(rng):
    vector = _random_vector(rng, 8)
    left, right = vector.split()
    assert len(left) == len(right) == 4
    assert list(left) + list(right) == list(vector)


@pytest.mark.parametrize("length", [1, 3])
def test_split_rejects_unsplittable_lengths(length):
    with pytest.raises(ValueError):
        ScalarVector.zeros(length).split()


def test_setitem_reduces(rng):
    vector = ScalarVector.zeros(2)
    vector[1] = GROUP_ORDER + 5
    assert list(vector) == [0, 5]


def test_multiexp_matches_sum_of_products():
    base = Point.basepoint()
    points = [base * 2, base * 3, base * 11]
    vector = ScalarVector([4, 9, 6])
    expected = point_sum(p * s for p, s in zip(points, vector))
    assert vector.multiexp(points) == expected


def test_multiexp_length_mismatch_is_rejected():
    with pytest.raises(ValueError):
        ScalarVector([1, 2]).multiexp([Point.basepoint()])