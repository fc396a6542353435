"""Multiexponentiation, challenge products and the fixed Bulletproofs(+) generators."""

from __future__ import annotations

from typing import Iterable

from ..ed25519 import GROUP_ORDER, Point, multiscalar_mul
from ..generators import (
    COMMITMENT_BITS,
    MAX_COMMITMENTS,
    Generators,
    bulletproofs_generators,
)

__all__ = [
    "COMMITMENT_BITS",
    "MAX_COMMITMENTS",
    "multiexp",
    "multiexp_vartime",
    "challenge_products",
    "original_generators",
    "plus_generators",
]

ORIGINAL_DST = b"bulletproof"
PLUS_DST = b"bulletproof_plus"

_N = GROUP_ORDER


def multiexp(pairs: Iterable[tuple[int, Point]]) -> Point:
    """The sum of scalar * point over (scalar, point) pairs."""
    pairs = list(pairs)
    return multiscalar_mul([scalar for scalar, _ in pairs], [point for _, point in pairs])


def multiexp_vartime(pairs: Iterable[tuple[int, Point]]) -> Point:
    """The same sum as multiexp, for public inputs."""
    return multiexp(pairs)


def challenge_products(challenges: Iterable[tuple[int, int]]) -> list[int]:
    """Products of every selection of challenge or inverse, one per index.

    For n (x, x_inv) pairs the result has 2**n entries; bit n-1-j of the index
    picks x_j when set and x_inv_j when clear.
    """
    challenges = list(challenges)
    products = [1] * (1 << len(challenges))
    if not challenges:
        return products

    first, first_inv = challenges[0]
    products[0] = first_inv % _N
    products[1] = first % _N
    for j, (x, x_inv) in enumerate(challenges[1:], start=1):
        for slot in range((1 << (j + 1)) - 1, 0, -2):
            parent = products[slot // 2]
            products[slot] = parent * x % _N
            products[slot - 1] = parent * x_inv % _N
    return products


def original_generators() -> Generators:
    """The generators of the original Bulletproofs."""
    return bulletproofs_generators(ORIGINAL_DST)


def plus_generators() -> Generators:
    """The generators of Bulletproofs+."""
    return bulletproofs_generators(PLUS_DST)