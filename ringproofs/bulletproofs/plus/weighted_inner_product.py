"""The weighted inner-product argument of Bulletproofs+ (figure 1 of the paper)."""

from __future__ import annotations

from dataclasses import dataclass

from ...ed25519 import (
    GROUP_ORDER,
    Point,
    batch_invert,
    random_scalar,
    scalar_invert,
    scalar_to_bytes,
)
from ...generators import keccak256_to_scalar
from ..batch_verifier import BulletproofsPlusBatchVerifier
from ..core import challenge_products, multiexp, multiexp_vartime
from ..point_vector import PointVector
from ..scalar_vector import ScalarVector
from .plus_generators import BpPlusGenerators, GeneratorsList, padded_pow_of_2

_N = GROUP_ORDER
_INV_EIGHT = scalar_invert(8)


def _challenge(transcript: int, first: Point, second: Point) -> int:
    return keccak256_to_scalar(
        scalar_to_bytes(transcript) + first.compress() + second.compress()
    )


@dataclass
class WipWitness:
    """The witness vectors a, b and the blinding alpha.

    The vectors must be non-empty and of equal length; they are padded with
    zeros up to the next power of two.
    """

    a: ScalarVector
    b: ScalarVector
    alpha: int

    def __post_init__(self) -> None:
        if len(self.a) == 0 or len(self.a) != len(self.b):
            raise ValueError("witness vectors must be non-empty and of equal length")
        missing = padded_pow_of_2(len(self.a)) - len(self.a)
        self.a = ScalarVector([*self.a, *([0] * missing)])
        self.b = ScalarVector([*self.b, *([0] * missing)])
        self.alpha %= _N


@dataclass
class WipProof:
    """A proof for the weighted inner-product statement."""

    L: list[Point]
    R: list[Point]
    A: Point
    B: Point
    r_answer: int
    s_answer: int
    delta_answer: int


class WipStatement:
    """The statement P = <a, g_bold> + <b, h_bold> + (a wip_y b) g + alpha h."""

    def __init__(self, generators: BpPlusGenerators, P: Point, y: int) -> None:
        n = len(generators)
        if n == 0 or n != padded_pow_of_2(n):
            raise ValueError("the amount of generators must be a power of two")
        y %= _N
        powers = [y]
        for _ in range(n - 1):
            powers.append(powers[-1] * y % _N)
        self.generators = generators
        self.P = P
        self.y = ScalarVector(powers)

    def __repr__(self) -> str:
        return f"WipStatement(n={len(self.generators)}, P={self.P!r})"

    def prove(self, rng, transcript: int, witness: WipWitness) -> WipProof:
        """Prove the statement; raises ValueError if the witness has the wrong size."""
        gens = self.generators
        if len(gens) != len(witness.a):
            raise ValueError("witness length doesn't match the generators")

        g, h = BpPlusGenerators.g(), BpPlusGenerators.h()
        g_bold = PointVector(gens.generator(GeneratorsList.G_BOLD, i) for i in range(len(gens)))
        h_bold = PointVector(gens.generator(GeneratorsList.H_BOLD, i) for i in range(len(gens)))
        y = self.y

        to_invert = []
        i = 1
        while i < len(g_bold):
            to_invert.append(y[i - 1])
            i *= 2
        y_inv = batch_invert(to_invert)

        a, b, alpha = witness.a, witness.b, witness.alpha
        l_vec: list[Point] = []
        r_vec: list[Point] = []

        while len(g_bold) > 1:
            a1, a2 = a.split()
            b1, b2 = b.split()
            g_bold1, g_bold2 = g_bold.split()
            h_bold1, h_bold2 = h_bold.split()

            n_hat = len(g_bold1)
            y_n_hat = y[n_hat - 1]
            y = y[:n_hat]

            d_l = random_scalar(rng)
            d_r = random_scalar(rng)

            c_l = a1.weighted_inner_product(b2, y)
            c_r = (a2 * y_n_hat).weighted_inner_product(b1, y)

            y_inv_n_hat = y_inv.pop()

            left = multiexp(
                [*zip(a1 * y_inv_n_hat, g_bold2), *zip(b2, h_bold1), (c_l, g), (d_l, h)]
            ) * _INV_EIGHT
            right = multiexp(
                [*zip(a2 * y_n_hat, g_bold1), *zip(b1, h_bold2), (c_r, g), (d_r, h)]
            ) * _INV_EIGHT
            l_vec.append(left)
            r_vec.append(right)

            e = _challenge(transcript, left, right)
            transcript = e
            inv_e = scalar_invert(e)
            e_y_inv = e * y_inv_n_hat % _N

            g_bold = PointVector(
                multiexp_vartime([(inv_e, p), (e_y_inv, q)]) for p, q in zip(g_bold1, g_bold2)
            )
            h_bold = PointVector(
                multiexp_vartime([(e, p), (inv_e, q)]) for p, q in zip(h_bold1, h_bold2)
            )

            a = (a1 * e) + (a2 * (y_n_hat * inv_e % _N))
            b = (b1 * inv_e) + (b2 * e)
            alpha = (alpha + d_l * e * e + d_r * inv_e * inv_e) % _N

        r = random_scalar(rng)
        s = random_scalar(rng)
        delta = random_scalar(rng)
        eta = random_scalar(rng)

        ry = r * y[0] % _N
        big_a = multiexp(
            [
                (r, g_bold[0]),
                (s, h_bold[0]),
                ((ry * b[0]) + (s * y[0] * a[0]), g),
                (delta, h),
            ]
        ) * _INV_EIGHT
        big_b = multiexp([(ry * s, g), (eta, h)]) * _INV_EIGHT

        e = _challenge(transcript, big_a, big_b)

        return WipProof(
            L=l_vec,
            R=r_vec,
            A=big_a,
            B=big_b,
            r_answer=(r + a[0] * e) % _N,
            s_answer=(s + b[0] * e) % _N,
            delta_answer=(eta + delta * e + alpha * e * e) % _N,
        )

    def verify(
        self,
        rng,
        verifier: BulletproofsPlusBatchVerifier,
        transcript: int,
        proof: WipProof,
    ) -> bool:
        """Queue the proof into the batch verifier.

        Returns False if the proof isn't sane. True only means it was queued;
        the batch must still be verified.
        """
        verifier_weight = random_scalar(rng)
        n = len(self.generators)
        y = self.y

        lr_len = max(n - 1, 0).bit_length()
        if len(proof.L) != lr_len or len(proof.R) != lr_len or n != (1 << lr_len):
            return False

        inv_y_first = scalar_invert(y[0])
        inv_y = [inv_y_first]
        while len(inv_y) < len(y):
            inv_y.append(inv_y[-1] * inv_y_first % _N)

        e_is = []
        for left, right in zip(proof.L, proof.R):
            transcript = _challenge(transcript, left, right)
            e_is.append(transcript)
        lefts = [left.mul_by_cofactor() for left in proof.L]
        rights = [right.mul_by_cofactor() for right in proof.R]

        e = _challenge(transcript, proof.A, proof.B)
        big_a = proof.A.mul_by_cofactor()
        big_b = proof.B.mul_by_cofactor()
        neg_e_square = verifier_weight * -(e * e) % _N

        inner = verifier.inner
        inner.other.append((neg_e_square, self.P))

        inv_e_is = batch_invert(e_is)
        challenges = []
        for e_i, inv_e_i, left, right in zip(e_is, inv_e_is, lefts, rights):
            challenges.append((e_i, inv_e_i))
            inner.other.append((neg_e_square * e_i * e_i % _N, left))
            inner.other.append((neg_e_square * inv_e_i * inv_e_i % _N, right))
        product_cache = challenge_products(challenges)

        while len(inner.g_bold) < n:
            inner.g_bold.append(0)
        while len(inner.h_bold) < n:
            inner.h_bold.append(0)

        re = proof.r_answer * e % _N
        for i in range(n):
            scalar = product_cache[i] * re
            if i > 0:
                scalar *= inv_y[i - 1]
            inner.g_bold[i] = (inner.g_bold[i] + verifier_weight * scalar) % _N

        se = proof.s_answer * e % _N
        for i in range(n):
            inner.h_bold[i] = (
                inner.h_bold[i] + verifier_weight * se * product_cache[-1 - i]
            ) % _N

        inner.other.append((verifier_weight * -e % _N, big_a))
        inner.g = (inner.g + verifier_weight * proof.r_answer * y[0] * proof.s_answer) % _N
        inner.h = (inner.h + verifier_weight * proof.delta_answer) % _N
        inner.other.append((-verifier_weight % _N, big_b))

        return True