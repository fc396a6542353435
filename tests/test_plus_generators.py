import pytest

from ringproofs.bulletproofs.core import plus_generators
from ringproofs.bulletproofs.plus.plus_generators import (
    BpPlusGenerators,
    GeneratorsList,
    padded_pow_of_2,
    u64_decompose,
)
from ringproofs.ed25519 import Point
from ringproofs.generators import COMMITMENT_BITS, MAX_COMMITMENTS, monero_h


def test_padded_pow_of_2_is_smallest_power_at_least_value():
    for value in range(1, 130):
        padded = padded_pow_of_2(value)
        assert padded >= value
        assert padded & (padded - 1) == 0
        assert padded // 2 < value


def test_padded_pow_of_2_of_zero_is_one():
    assert padded_pow_of_2(0) == 1


@pytest.mark.parametrize("value", [0, 1, 1337, (1 << 64) - 1, 0x8000000000000001])
def test_u64_decompose_round_trips(value):
    bits = u64_decompose(value)
    assert len(bits) == 64
    assert set(bits) <= {0, 1}
    assert sum(bit << i for i, bit in enumerate(bits)) == value


@pytest.mark.parametrize("value", [-1, 1 << 64])
def test_u64_decompose_rejects_out_of_range(value):
    with pytest.raises(ValueError):
        u64_decompose(value)


def test_full_generators_match_plus_set():
    gens = BpPlusGenerators.full()
    assert len(gens) == MAX_COMMITMENTS * COMMITMENT_BITS
    assert gens.generator(GeneratorsList.G_BOLD, 3) == plus_generators().g_bold[3]
    assert gens.generator(GeneratorsList.H_BOLD, 3) == plus_generators().h_bold[3]


def test_fixed_generators():
    assert BpPlusGenerators.g() == monero_h()
    assert BpPlusGenerators.h() == Point.basepoint()


def test_reduce_rounds_up_and_keeps_prefix():
    gens = BpPlusGenerators.full()
    reduced = gens.reduce(5)
    assert len(reduced) == 8
    assert reduced.g_bold == gens.g_bold[:8]
    assert reduced.h_bold == gens.h_bold[:8]
    assert len(gens.reduce(0)) == 1


def test_reduce_rejects_more_than_available():
    gens = BpPlusGenerators.full().reduce(4)
    with pytest.raises(ValueError):
        gens.reduce(5)