import pytest

from ringproofs.bulletproofs.point_vector import PointVector
from ringproofs.bulletproofs.scalar_vector import ScalarVector
from ringproofs.ed25519 import Point, point_sum


@pytest.fixture
def points():
    base = Point.basepoint()
    return [base * k for k in (1, 2, 5, 9)]


def test_len_iter_and_index(points):
    vector = PointVector(points)
    assert len(vector) == 4
    assert list(vector) == points
    assert vector[2] == points[2]


def test_mul_vec_scales_each_point(points):
    scalars = ScalarVector([3, 0, 7, 1])
    scaled = PointVector(points).mul_vec(scalars)
    assert list(scaled) == [p * s for p, s in zip(points, scalars)]
    assert scaled[1].is_identity()


def test_mul_vec_length_mismatch(points):
    with pytest.raises(ValueError):
        PointVector(points).mul_vec(ScalarVector([1, 2]))


def test_multiexp_matches_sum(points):
    scalars = ScalarVector([8, 6, 4, 2])
    expected = point_sum(p * s for p, s in zip(points, scalars))
    assert PointVector(points).multiexp(scalars) == expected


def test_multiexp_of_zero_vector_is_identity(points):
    assert PointVector(points).multiexp(ScalarVector.zeros(4)).is_identity()


def test_multiexp_length_mismatch(points):
    with pytest.raises(ValueError):
        PointVector(points).multiexp(ScalarVector([1]))


def test_split_halves_reassemble(points):
    left, right = PointVector(points).split()
    assert list(left) == points[:2]
    assert list(right) == points[2:]


@pytest.mark.parametrize("count", [1, 3])
def test_split_rejects_unsplittable_lengths(points, count):
    with pytest.raises(ValueError):
        PointVector(points[:count]).split()