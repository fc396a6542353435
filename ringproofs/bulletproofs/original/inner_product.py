"""The inner-product argument of the original Bulletproofs (Protocol 2 of the paper)."""

from __future__ import annotations

from dataclasses import dataclass

from ...ed25519 import GROUP_ORDER, Point, batch_invert, scalar_invert, scalar_to_bytes
from ...generators import keccak256_to_scalar, monero_h
from ..batch_verifier import BulletproofsBatchVerifier
from ..core import challenge_products, multiexp_vartime, original_generators
from ..point_vector import PointVector
from ..scalar_vector import ScalarVector

_N = GROUP_ORDER
_INV_EIGHT = scalar_invert(8)


class IpError(Exception):
    """An error from proving or verifying an inner-product statement."""


class IncorrectAmountOfGenerators(IpError):
    """The statement or proof doesn't match the amount of generators."""


class DifferingLrLengths(IpError):
    """The L and R vectors of a proof differ in length."""


def _log2_ceil(value: int) -> int:
    return max(value - 1, 0).bit_length()


@dataclass(frozen=True)
class IpWitness:
    """The witness vectors a and b; equal, non-zero, power-of-two lengths."""

    a: ScalarVector
    b: ScalarVector

    def __post_init__(self) -> None:
        length = len(self.a)
        if length == 0 or length != len(self.b):
            raise ValueError("witness vectors must be non-empty and of equal length")
        if length & (length - 1):
            raise ValueError("witness length must be a power of two")


@dataclass
class IpProof:
    """A proof for the inner-product statement."""

    L: list[Point]
    R: list[Point]
    a: int
    b: int


def _transcript_l_r(transcript: int, left: Point, right: Point) -> int:
    return keccak256_to_scalar(scalar_to_bytes(transcript) + left.compress() + right.compress())


@dataclass(frozen=True)
class IpStatement:
    """An inner-product statement whose P is already bound by the transcript.

    `h_bold_weights` scale the bold H generators and `u` is the discrete
    logarithm of the inner-product generator with respect to H.
    """

    h_bold_weights: ScalarVector
    u: int

    def prove(self, transcript: int, witness: IpWitness) -> IpProof:
        """Prove the statement for the witness."""
        generators = original_generators()
        n = len(witness.a)
        g_slice = generators.g_bold[:n]
        h_slice = generators.h_bold[:n]

        if len(self.h_bold_weights) != len(g_slice):
            raise IncorrectAmountOfGenerators("weights don't match the generators")

        u = monero_h() * self.u
        g_bold = PointVector(g_slice)
        h_bold = PointVector(h_slice).mul_vec(self.h_bold_weights)
        a, b = witness.a, witness.b

        l_vec: list[Point] = []
        r_vec: list[Point] = []
        while len(g_bold) > 1:
            a1, a2 = a.split()
            b1, b2 = b.split()
            g_bold1, g_bold2 = g_bold.split()
            h_bold1, h_bold2 = h_bold.split()

            cl = a1.inner_product(b2)
            cr = a2.inner_product(b1)

            left = multiexp_vartime([*zip(a1, g_bold2), *zip(b2, h_bold1), (cl, u)])
            right = multiexp_vartime([*zip(a2, g_bold1), *zip(b1, h_bold2), (cr, u)])
            l_vec.append(left * _INV_EIGHT)
            r_vec.append(right * _INV_EIGHT)

            transcript = _transcript_l_r(transcript, l_vec[-1], r_vec[-1])
            x = transcript
            x_inv = scalar_invert(x)

            g_bold = PointVector(
                multiexp_vartime([(x_inv, p), (x, q)]) for p, q in zip(g_bold1, g_bold2)
            )
            h_bold = PointVector(
                multiexp_vartime([(x, p), (x_inv, q)]) for p, q in zip(h_bold1, h_bold2)
            )

            a = (a1 * x) + (a2 * x_inv)
            b = (b1 * x_inv) + (b2 * x)

        return IpProof(l_vec, r_vec, a[0], b[0])

    def verify(
        self,
        verifier: BulletproofsBatchVerifier,
        ip_rows: int,
        transcript: int,
        verifier_weight: int,
        proof: IpProof,
    ) -> None:
        """Queue the proof into the batch verifier.

        Raises an IpError if the proof isn't well-formed. Success only means the
        proof was queued; the batch must still be verified.
        """
        lr_len = _log2_ceil(ip_rows)
        if len(proof.L) != lr_len:
            raise IncorrectAmountOfGenerators("proof has the wrong amount of rounds")
        if len(proof.L) != len(proof.R):
            raise DifferingLrLengths("L and R differ in length")

        xs = []
        for left, right in zip(proof.L, proof.R):
            transcript = _transcript_l_r(transcript, left, right)
            xs.append(transcript)
        x_invs = batch_invert(xs)

        inner = verifier.inner
        challenges = []
        for x, x_inv, left, right in zip(xs, x_invs, proof.L, proof.R):
            challenges.append((x, x_inv))
            inner.other.append((verifier_weight * x * x % _N, left.mul_by_cofactor()))
            inner.other.append(
                (verifier_weight * x_inv * x_inv % _N, right.mul_by_cofactor())
            )
        product_cache = challenge_products(challenges)

        c = proof.a * proof.b % _N
        for i in range(ip_rows):
            inner.g_bold[i] = (
                inner.g_bold[i] - verifier_weight * product_cache[i] * proof.a
            ) % _N
        for i in range(ip_rows):
            inner.h_bold[i] = (
                inner.h_bold[i]
                - verifier_weight
                * product_cache[len(product_cache) - 1 - i]
                * proof.b
                * self.h_bold_weights[i]
            ) % _N
        inner.h = (inner.h - verifier_weight * c * self.u) % _N