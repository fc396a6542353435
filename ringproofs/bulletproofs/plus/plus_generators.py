"""Generators for Bulletproofs+ and small helpers shared by its proofs."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from ...ed25519 import Point
from ...generators import monero_h
from ..core import plus_generators
from ..scalar_vector import ScalarVector

_U64_MAX = (1 << 64) - 1


def padded_pow_of_2(value: int) -> int:
    """The smallest power of two at least `value` (and at least one)."""
    result = 1
    while result < value:
        result <<= 1
    return result


def u64_decompose(value: int) -> ScalarVector:
    """The little-endian bits of a 64-bit value as a vector of scalars."""
    if value < 0 or value > _U64_MAX:
        raise ValueError("value does not fit in 64 bits")
    return ScalarVector((value >> bit) & 1 for bit in range(64))


class GeneratorsList(enum.Enum):
    G_BOLD = "g_bold"
    H_BOLD = "h_bold"


@dataclass(frozen=True)
class BpPlusGenerators:
    """A prefix of the Bulletproofs+ bold generator vectors."""

    g_bold: tuple[Point, ...]
    h_bold: tuple[Point, ...]

    @classmethod
    def full(cls) -> "BpPlusGenerators":
        gens = plus_generators()
        return cls(gens.g_bold, gens.h_bold)

    def __len__(self) -> int:
        return len(self.g_bold)

    @staticmethod
    def g() -> Point:
        """The value generator, which is the protocol's H."""
        return monero_h()

    @staticmethod
    def h() -> Point:
        """The mask generator, which is the Ed25519 basepoint."""
        return Point.basepoint()

    def generator(self, kind: GeneratorsList, index: int) -> Point:
        if kind is GeneratorsList.G_BOLD:
            return self.g_bold[index]
        return self.h_bold[index]

    def reduce(self, count: int) -> "BpPlusGenerators":
        """Keep the first `count` generators, rounded up to a power of two."""
        count = padded_pow_of_2(count)
        if count > len(self.g_bold):
            raise ValueError("instantiated with less generators than application required")
        return BpPlusGenerators(self.g_bold[:count], self.h_bold[:count])