"""Arithmetic on the Ed25519 curve and its prime-order scalar field."""

from __future__ import annotations

import secrets
from typing import Iterable, Optional, Sequence

FIELD_MODULUS = 2**255 - 19
GROUP_ORDER = 2**252 + 27742317777372353535851937790883648493

_P = FIELD_MODULUS
_D = (-121665 * pow(121666, _P - 2, _P)) % _P
_D2 = (2 * _D) % _P
_SQRT_M1 = pow(2, (_P - 1) // 4, _P)
_Y_MASK = (1 << 255) - 1


def _inv(value: int) -> int:
    return pow(value, _P - 2, _P)


class Point:
    """A point on Ed25519 in extended twisted Edwards coordinates."""

    __slots__ = ("_x", "_y", "_z", "_t")

    def __init__(self, x: int, y: int, z: int, t: int) -> None:
        self._x = x % _P
        self._y = y % _P
        self._z = z % _P
        self._t = t % _P

    @classmethod
    def identity(cls) -> "Point":
        return cls(0, 1, 1, 0)

    @classmethod
    def basepoint(cls) -> "Point":
        return _BASEPOINT

    @classmethod
    def decompress(cls, data: bytes) -> Optional["Point"]:
        """Decompress 32 bytes, leniently; returns None if not on the curve."""
        if len(data) != 32:
            raise ValueError("a compressed point is 32 bytes")
        encoded = int.from_bytes(data, "little")
        sign = encoded >> 255
        y = (encoded & _Y_MASK) % _P
        y2 = y * y % _P
        u = (y2 - 1) % _P
        v = (_D * y2 + 1) % _P
        v3 = v * v % _P * v % _P
        v7 = v3 * v3 % _P * v % _P
        x = u * v3 % _P * pow(u * v7 % _P, (_P - 5) // 8, _P) % _P
        check = v * x % _P * x % _P
        if check == u:
            pass
        elif check == (-u) % _P:
            x = x * _SQRT_M1 % _P
        else:
            return None
        if x & 1:
            x = _P - x
        if sign:
            x = (-x) % _P
        return cls(x, y, 1, x * y)

    def compress(self) -> bytes:
        zi = _inv(self._z)
        x = self._x * zi % _P
        y = self._y * zi % _P
        return (y | ((x & 1) << 255)).to_bytes(32, "little")

    def _add(self, other: "Point") -> "Point":
        a = (self._y - self._x) * (other._y - other._x) % _P
        b = (self._y + self._x) * (other._y + other._x) % _P
        c = self._t * _D2 % _P * other._t % _P
        d = 2 * self._z * other._z % _P
        e, f, g, h = b - a, d - c, d + c, b + a
        return Point(e * f, g * h, f * g, e * h)

    def _double(self) -> "Point":
        a = self._x * self._x % _P
        b = self._y * self._y % _P
        c = 2 * self._z * self._z % _P
        e = ((self._x + self._y) ** 2 - a - b) % _P
        g = b - a
        f = g - c
        h = -a - b
        return Point(e * f, g * h, f * g, e * h)

    def _mul_int(self, n: int) -> "Point":
        result = Point.identity()
        for bit in bin(n)[2:] if n > 0 else "":
            result = result._double()
            if bit == "1":
                result = result._add(self)
        return result

    def __add__(self, other: "Point") -> "Point":
        if not isinstance(other, Point):
            return NotImplemented
        return self._add(other)

    def __sub__(self, other: "Point") -> "Point":
        if not isinstance(other, Point):
            return NotImplemented
        return self._add(-other)

    def __neg__(self) -> "Point":
        return Point(-self._x, self._y, self._z, -self._t)

    def __mul__(self, scalar: int) -> "Point":
        if not isinstance(scalar, int):
            return NotImplemented
        return self._mul_int(scalar % GROUP_ORDER)

    def __rmul__(self, scalar: int) -> "Point":
        return self.__mul__(scalar)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return (self._x * other._z - other._x * self._z) % _P == 0 and (
            self._y * other._z - other._y * self._z
        ) % _P == 0

    def __hash__(self) -> int:
        return hash(self.compress())

    def __repr__(self) -> str:
        return f"Point({self.compress().hex()})"

    def mul_by_cofactor(self) -> "Point":
        return self._double()._double()._double()

    def is_identity(self) -> bool:
        return self._x == 0 and self._y == self._z

    def is_torsion_free(self) -> bool:
        return self._mul_int(GROUP_ORDER).is_identity()


_BASEPOINT = Point.decompress(
    ((4 * _inv(5)) % _P).to_bytes(32, "little")
)


def scalar_from_canonical_bytes(data: bytes) -> int:
    """Decode a reduced 32-byte little-endian scalar; raise ValueError otherwise."""
    if len(data) != 32:
        raise ValueError("a scalar is 32 bytes")
    value = int.from_bytes(data, "little")
    if value >= GROUP_ORDER:
        raise ValueError("unreduced scalar")
    return value


def scalar_from_bytes_mod_order(data: bytes) -> int:
    return int.from_bytes(data, "little") % GROUP_ORDER


def scalar_to_bytes(scalar: int) -> bytes:
    return (scalar % GROUP_ORDER).to_bytes(32, "little")


def scalar_invert(scalar: int) -> int:
    """Invert a scalar; zero maps to zero."""
    return pow(scalar % GROUP_ORDER, GROUP_ORDER - 2, GROUP_ORDER)


def batch_invert(scalars: Iterable[int]) -> list[int]:
    return [scalar_invert(s) for s in scalars]


def random_scalar(rng=None) -> int:
    """A uniformly random scalar drawn from 512 random bits."""
    rng = rng if rng is not None else secrets.SystemRandom()
    return rng.getrandbits(512) % GROUP_ORDER


def multiscalar_mul(scalars: Sequence[int], points: Sequence[Point]) -> Point:
    """Compute the sum of scalar * point over the pairs (bucket method)."""
    pairs = [(s % GROUP_ORDER, p) for s, p in zip(scalars, points, strict=True)]
    pairs = [(s, p) for s, p in pairs if s]
    if not pairs:
        return Point.identity()
    window = max(1, len(pairs).bit_length() - 3)
    mask = (1 << window) - 1
    windows = (253 + window - 1) // window
    acc = Point.identity()
    for w in reversed(range(windows)):
        for _ in range(window):
            acc = acc._double()
        buckets: list[Optional[Point]] = [None] * mask
        shift = w * window
        for scalar, point in pairs:
            digit = (scalar >> shift) & mask
            if digit:
                bucket = buckets[digit - 1]
                buckets[digit - 1] = point if bucket is None else bucket._add(point)
        running: Optional[Point] = None
        total = Point.identity()
        for bucket in reversed(buckets):
            if bucket is not None:
                running = bucket if running is None else running._add(bucket)
            if running is not None:
                total = total._add(running)
        acc = acc._add(total)
    return acc


def point_sum(points: Iterable[Point]) -> Point:
    total = Point.identity()
    for point in points:
        total = total + point
    return total