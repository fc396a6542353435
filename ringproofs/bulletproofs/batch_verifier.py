"""Batch verification of Bulletproofs(+) through one multiscalar multiplication."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..ed25519 import Point, multiscalar_mul
from ..generators import Generators, monero_h
from .core import original_generators, plus_generators


@dataclass
class InternalBatchVerifier:
    """Accumulated scalars for the fixed generators plus variable terms."""

    g: int = 0
    h: int = 0
    g_bold: list[int] = field(default_factory=list)
    h_bold: list[int] = field(default_factory=list)
    other: list[tuple[int, Point]] = field(default_factory=list)

    def verify(self, g_point: Point, h_point: Point, generators: Generators) -> bool:
        """True if every accumulated term sums to the identity."""
        if len(self.g_bold) > len(generators.g_bold) or len(self.h_bold) > len(
            generators.h_bold
        ):
            raise ValueError("more bold scalars than generators")
        scalars = [self.g, self.h, *self.g_bold, *self.h_bold]
        points = [
            g_point,
            h_point,
            *generators.g_bold[: len(self.g_bold)],
            *generators.h_bold[: len(self.h_bold)],
        ]
        for scalar, point in self.other:
            scalars.append(scalar)
            points.append(point)
        return multiscalar_mul(scalars, points).is_identity()


@dataclass
class BulletproofsBatchVerifier:
    """Batch verifier for original Bulletproofs (G for the mask, H for the value)."""

    inner: InternalBatchVerifier = field(default_factory=InternalBatchVerifier)

    def verify(self) -> bool:
        return self.inner.verify(Point.basepoint(), monero_h(), original_generators())


@dataclass
class BulletproofsPlusBatchVerifier:
    """Batch verifier for Bulletproofs+, whose g is H and whose h is G."""

    inner: InternalBatchVerifier = field(default_factory=InternalBatchVerifier)

    def verify(self) -> bool:
        return self.inner.verify(monero_h(), Point.basepoint(), plus_generators())


@dataclass
class BatchVerifier:
    """A batch verifier for both Bulletproofs and Bulletproofs+."""

    original: BulletproofsBatchVerifier = field(default_factory=BulletproofsBatchVerifier)
    plus: BulletproofsPlusBatchVerifier = field(
        default_factory=BulletproofsPlusBatchVerifier
    )

    def verify(self) -> bool:
        """Verify every proof queued within this batch verifier."""
        return self.original.verify() and self.plus.verify()