"""Vectors of scalars with the element-wise arithmetic Bulletproofs(+) use."""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, Sequence, Union

from ..ed25519 import GROUP_ORDER, Point
from .core import multiexp

_N = GROUP_ORDER


class ScalarVector:
    """A list of scalars reduced modulo the group order.

    Arithmetic with another vector is element-wise and requires equal lengths;
    arithmetic with a single scalar applies it to every element.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Iterable[int] = ()) -> None:
        self._values = [value % _N for value in values]

    @classmethod
    def zeros(cls, length: int) -> "ScalarVector":
        return cls([0] * length)

    @classmethod
    def powers(cls, x: int, length: int) -> "ScalarVector":
        """The vector [1, x, x**2, ..., x**(length - 1)]."""
        if length < 1:
            raise ValueError("a vector of powers needs a positive length")
        x %= _N
        values = [1]
        for _ in range(length - 1):
            values.append(values[-1] * x % _N)
        return cls(values)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[int]:
        return iter(self._values)

    def __getitem__(self, index: Union[int, slice]) -> Union[int, "ScalarVector"]:
        if isinstance(index, slice):
            return ScalarVector(self._values[index])
        return self._values[index]

    def __setitem__(self, index: int, value: int) -> None:
        self._values[index] = value % _N

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScalarVector):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"ScalarVector({self._values!r})"

    def _combine(
        self, other: Union[int, "ScalarVector"], op: Callable[[int, int], int]
    ) -> "ScalarVector":
        if isinstance(other, ScalarVector):
            if len(other) != len(self):
                raise ValueError("vectors differ in length")
            return ScalarVector(op(a, b) for a, b in zip(self._values, other._values))
        if isinstance(other, int):
            return ScalarVector(op(a, other) for a in self._values)
        return NotImplemented

    def __add__(self, other: Union[int, "ScalarVector"]) -> "ScalarVector":
        return self._combine(other, lambda a, b: a + b)

    def __sub__(self, other: Union[int, "ScalarVector"]) -> "ScalarVector":
        return self._combine(other, lambda a, b: a - b)

    def __mul__(self, other: Union[int, "ScalarVector"]) -> "ScalarVector":
        return self._combine(other, lambda a, b: a * b)

    def sum(self) -> int:
        return sum(self._values) % _N

    def inner_product(self, other: "ScalarVector") -> int:
        return (self * other).sum()

    def weighted_inner_product(self, other: "ScalarVector", y: "ScalarVector") -> int:
        return (self * other * y).sum()

    def split(self) -> tuple["ScalarVector", "ScalarVector"]:
        """Split into two halves of equal length."""
        if len(self) < 2 or len(self) % 2:
            raise ValueError("only vectors of even length above one can be split")
        half = len(self) // 2
        return ScalarVector(self._values[:half]), ScalarVector(self._values[half:])

    def multiexp(self, points: Sequence[Point]) -> Point:
        """The sum of each scalar times its matching point."""
        return multiexp(zip(self._values, points, strict=True))