"""Vectors of points as the inner-product arguments fold them."""

from __future__ import annotations

from typing import Iterable, Iterator, Union

from ..ed25519 import Point
from .core import multiexp
from .scalar_vector import ScalarVector


class PointVector:
    """An immutable sequence of curve points."""

    __slots__ = ("_points",)

    def __init__(self, points: Iterable[Point] = ()) -> None:
        self._points = tuple(points)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    def __getitem__(self, index: Union[int, slice]) -> Union[Point, "PointVector"]:
        if isinstance(index, slice):
            return PointVector(self._points[index])
        return self._points[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PointVector):
            return NotImplemented
        return self._points == other._points

    def __repr__(self) -> str:
        return f"PointVector({list(self._points)!r})"

    def mul_vec(self, vector: ScalarVector) -> "PointVector":
        """Scale each point by the matching scalar."""
        if len(vector) != len(self):
            raise ValueError("vectors differ in length")
        return PointVector(point * scalar for point, scalar in zip(self._points, vector))

    def multiexp(self, vector: ScalarVector) -> Point:
        """The sum of each point times the matching scalar."""
        if len(vector) != len(self):
            raise ValueError("vectors differ in length")
        return multiexp(zip(vector, self._points))

    def split(self) -> tuple["PointVector", "PointVector"]:
        """Split into two halves of equal length."""
        if len(self) < 2 or len(self) % 2:
            raise ValueError("only vectors of even length above one can be split")
        half = len(self) // 2
        return PointVector(self._points[:half]), PointVector(self._points[half:])