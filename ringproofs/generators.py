"""Hash-to-point, the amount generator H and the Bulletproofs(+) generators."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from Crypto.Hash import keccak

from .ed25519 import FIELD_MODULUS, GROUP_ORDER, Point
from .encoding import decompress_point, encode_varint

MAX_COMMITMENTS = 16
COMMITMENT_BITS = 64

_P = FIELD_MODULUS


def keccak256(data: bytes) -> bytes:
    return keccak.new(digest_bits=256, data=bytes(data)).digest()


def keccak256_to_scalar(data: bytes) -> int:
    return int.from_bytes(keccak256(data), "little") % GROUP_ORDER


def hash_to_point(data: bytes) -> Point:
    """The protocol's hash_to_ec function over 32 bytes."""
    if len(data) != 32:
        raise ValueError("hash_to_point takes 32 bytes")
    a = 486662
    r = int.from_bytes(keccak256(data), "little")
    v = 2 * r * r % _P
    w = (v + 1) % _P
    x = (w * w - a * a * v) % _P

    u, vv = w, x
    v3 = vv * vv % _P * vv % _P
    uv3 = u * v3 % _P
    v7 = v3 * v3 % _P * vv % _P
    uv7 = u * v7 % _P
    exponent = (-5 * pow(8, _P - 2, _P)) % _P
    big_x = uv3 * pow(uv7, exponent, _P) % _P
    x = big_x * big_x % _P * x % _P

    y = (w - x) % _P
    sign = y != 0 and (w + x) % _P != 0

    z = (-a * (1 if sign else v)) % _P
    big_z = (z + w) % _P
    big_y = (z - w) % _P
    if big_z == 0:
        raise ArithmeticError("hash_to_point reached a non-invertible denominator")
    big_y = big_y * pow(big_z, _P - 2, _P) % _P
    encoded = bytearray(big_y.to_bytes(32, "little"))
    encoded[31] |= int(sign) << 7
    point = decompress_point(bytes(encoded))
    if point is None:
        raise ArithmeticError("point from hash-to-curve wasn't on-curve")
    return point.mul_by_cofactor()


@lru_cache(maxsize=None)
def _h() -> Point:
    point = decompress_point(keccak256(Point.basepoint().compress()))
    if point is None:
        raise ArithmeticError("known on-curve point wasn't on-curve")
    return point.mul_by_cofactor()


def monero_h() -> Point:
    """The generator H used for amounts within Pedersen commitments."""
    return _h()


@lru_cache(maxsize=None)
def h_pow_2() -> tuple[Point, ...]:
    """H multiplied by 2**i for i in 0..64."""
    powers = [_h()]
    for _ in range(63):
        powers.append(powers[-1] + powers[-1])
    return tuple(powers)


@dataclass(frozen=True)
class Commitment:
    """The opening of a Pedersen commitment: mask * G + amount * H."""

    mask: int
    amount: int

    def calculate(self) -> Point:
        return Point.basepoint() * self.mask + _h() * self.amount


@dataclass(frozen=True)
class Generators:
    """The bold G and H vectors of generators for Bulletproofs(+)."""

    g_bold: tuple[Point, ...]
    h_bold: tuple[Point, ...]


@lru_cache(maxsize=None)
def bulletproofs_generators(dst: bytes) -> Generators:
    """Derive the generators for Bulletproofs(+) under a domain-separation tag."""
    preimage = _h().compress() + bytes(dst)
    g_bold = []
    h_bold = []
    for i in range(MAX_COMMITMENTS * COMMITMENT_BITS):
        h_bold.append(hash_to_point(keccak256(preimage + encode_varint(2 * i))))
        g_bold.append(hash_to_point(keccak256(preimage + encode_varint(2 * i + 1))))
    return Generators(tuple(g_bold), tuple(h_bold))