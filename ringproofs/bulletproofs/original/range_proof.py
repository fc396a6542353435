"""Aggregate range proofs with the original Bulletproofs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ...ed25519 import GROUP_ORDER, Point, random_scalar, scalar_invert, scalar_to_bytes
from ...generators import Commitment, keccak256_to_scalar, monero_h
from ..batch_verifier import BulletproofsBatchVerifier
from ..core import COMMITMENT_BITS, MAX_COMMITMENTS, multiexp, original_generators
from ..scalar_vector import ScalarVector
from .inner_product import IpError, IpProof, IpStatement, IpWitness

_N = GROUP_ORDER
_INV_EIGHT = scalar_invert(8)


def _padded_pow_of_2(value: int) -> int:
    return 1 << max(value - 1, 0).bit_length()


def _check_amount(count: int) -> None:
    if count == 0 or count > MAX_COMMITMENTS:
        raise ValueError(f"between 1 and {MAX_COMMITMENTS} commitments are required")


@dataclass
class AggregateRangeProof:
    """An aggregate range proof with the original Bulletproofs."""

    A: Point
    S: Point
    T1: Point
    T2: Point
    tau_x: int
    mu: int
    t_hat: int
    ip: IpProof


@dataclass(frozen=True)
class AggregateRangeWitness:
    """The openings of the commitments proven for."""

    commitments: tuple[Commitment, ...]

    def __init__(self, commitments: Sequence[Commitment]) -> None:
        _check_amount(len(commitments))
        object.__setattr__(self, "commitments", tuple(commitments))


def _transcript_a_s(transcript: int, a: Point, s: Point) -> tuple[int, int]:
    y = keccak256_to_scalar(scalar_to_bytes(transcript) + a.compress() + s.compress())
    z = keccak256_to_scalar(scalar_to_bytes(y))
    return y, z


def _transcript_t12(transcript: int, t1: Point, t2: Point) -> int:
    t = scalar_to_bytes(transcript)
    return keccak256_to_scalar(t + t + t1.compress() + t2.compress())


def _transcript_tau_x_mu_t_hat(transcript: int, tau_x: int, mu: int, t_hat: int) -> int:
    t = scalar_to_bytes(transcript)
    return keccak256_to_scalar(
        t + t + scalar_to_bytes(tau_x) + scalar_to_bytes(mu) + scalar_to_bytes(t_hat)
    )


@dataclass(frozen=True)
class AggregateRangeStatement:
    """The statement that each commitment holds a 64-bit value."""

    commitments: tuple[Point, ...]

    def __init__(self, commitments: Sequence[Point]) -> None:
        _check_amount(len(commitments))
        object.__setattr__(self, "commitments", tuple(commitments))

    def _initial_transcript(self) -> tuple[int, list[Point]]:
        scaled = [c * _INV_EIGHT for c in self.commitments]
        return keccak256_to_scalar(b"".join(v.compress() for v in scaled)), scaled

    def prove(self, rng, witness: AggregateRangeWitness) -> AggregateRangeProof:
        """Prove the statement; raises ValueError if the witness doesn't open it."""
        if list(self.commitments) != [c.calculate() for c in witness.commitments]:
            raise ValueError("witness doesn't open the statement's commitments")

        generators = original_generators()
        transcript, _ = self._initial_transcript()

        padded = _padded_pow_of_2(len(witness.commitments))
        rows = padded * COMMITMENT_BITS

        bits = [
            (commitment.amount >> j) & 1
            for commitment in witness.commitments
            for j in range(COMMITMENT_BITS)
        ]
        a_l = ScalarVector(bits + [0] * (rows - len(bits)))
        a_r = a_l - 1

        basepoint = Point.basepoint()
        alpha = random_scalar(rng)
        big_a = multiexp(
            [(alpha, basepoint), *zip(a_l, generators.g_bold), *zip(a_r, generators.h_bold)]
        ) * _INV_EIGHT

        s_l = ScalarVector.zeros(rows)
        s_r = ScalarVector.zeros(rows)
        for i in range(rows):
            s_l[i] = random_scalar(rng)
            s_r[i] = random_scalar(rng)
        rho = random_scalar(rng)

        big_s = multiexp(
            [(rho, basepoint), *zip(s_l, generators.g_bold), *zip(s_r, generators.h_bold)]
        ) * _INV_EIGHT

        y, z = _transcript_a_s(transcript, big_a, big_s)
        transcript = z
        zs = ScalarVector.powers(z, 3 + padded)
        twos = ScalarVector.powers(2, COMMITMENT_BITS)

        l0 = a_l - zs[1]
        l1 = s_l
        y_pow_n = ScalarVector.powers(y, len(a_r))
        offsets = ScalarVector(zs[2 + j] * two for j in range(padded) for two in twos)
        r0 = (a_r + zs[1]) * y_pow_n + offsets
        r1 = s_r * y_pow_n

        t1 = (l0.inner_product(r1) + r0.inner_product(l1)) % _N
        t2 = l1.inner_product(r1)

        h = monero_h()
        tau_1 = random_scalar(rng)
        big_t1 = multiexp([(t1 * _INV_EIGHT, h), (tau_1 * _INV_EIGHT, basepoint)])
        tau_2 = random_scalar(rng)
        big_t2 = multiexp([(t2 * _INV_EIGHT, h), (tau_2 * _INV_EIGHT, basepoint)])

        transcript = _transcript_t12(transcript, big_t1, big_t2)
        x = transcript

        l = l0 + l1 * x
        r = r0 + r1 * x
        t_hat = l.inner_product(r)
        tau_x = ((tau_2 * x) + tau_1) * x
        for i, commitment in enumerate(witness.commitments):
            tau_x += zs[2 + i] * commitment.mask
        tau_x %= _N
        mu = (alpha + rho * x) % _N

        y_inv_pow_n = ScalarVector.powers(scalar_invert(y), len(l))

        transcript = _transcript_tau_x_mu_t_hat(transcript, tau_x, mu, t_hat)
        x_ip = transcript

        ip = IpStatement(y_inv_pow_n, x_ip).prove(transcript, IpWitness(l, r))
        return AggregateRangeProof(big_a, big_s, big_t1, big_t2, tau_x, mu, t_hat, ip)

    def verify(
        self, rng, verifier: BulletproofsBatchVerifier, proof: AggregateRangeProof
    ) -> bool:
        """Queue the proof into the batch verifier.

        Returns False if the proof isn't sane. True only means it was queued;
        the batch must still be verified.
        """
        padded = _padded_pow_of_2(len(self.commitments))
        ip_rows = padded * COMMITMENT_BITS
        inner = verifier.inner

        while len(inner.g_bold) < ip_rows:
            inner.g_bold.append(0)
            inner.h_bold.append(0)

        transcript, commitments = self._initial_transcript()
        commitments = [c.mul_by_cofactor() for c in commitments]

        y, z = _transcript_a_s(transcript, proof.A, proof.S)
        transcript = z
        zs = ScalarVector.powers(z, 3 + padded)
        transcript = _transcript_t12(transcript, proof.T1, proof.T2)
        x = transcript
        transcript = _transcript_tau_x_mu_t_hat(
            transcript, proof.tau_x, proof.mu, proof.t_hat
        )
        x_ip = transcript

        big_a = proof.A.mul_by_cofactor()
        big_s = proof.S.mul_by_cofactor()
        big_t1 = proof.T1.mul_by_cofactor()
        big_t2 = proof.T2.mul_by_cofactor()

        y_pow_n = ScalarVector.powers(y, ip_rows)
        y_inv_pow_n = ScalarVector.powers(scalar_invert(y), ip_rows)
        twos = ScalarVector.powers(2, COMMITMENT_BITS)

        weight = random_scalar(rng)
        inner.h = (inner.h + weight * proof.t_hat) % _N
        inner.g = (inner.g + weight * proof.tau_x) % _N

        weight = -weight % _N
        inner.h = (inner.h + weight * (zs[1] - zs[2]) * y_pow_n.sum()) % _N
        for i, commitment in enumerate(commitments):
            inner.other.append((weight * zs[2 + i] % _N, commitment))
        twos_sum = twos.sum()
        for i in range(padded):
            inner.h = (inner.h - weight * zs[3 + i] * twos_sum) % _N
        inner.other.append((weight * x % _N, big_t1))
        inner.other.append((weight * x * x % _N, big_t2))

        ip_weight = random_scalar(rng)
        inner.other.append((ip_weight, big_a))
        inner.other.append((ip_weight * x % _N, big_s))

        ip_z = ip_weight * zs[1] % _N
        for i in range(ip_rows):
            inner.h_bold[i] = (inner.h_bold[i] + ip_z) % _N
            inner.g_bold[i] = (inner.g_bold[i] - ip_z) % _N
        for j in range(padded):
            for i, two in enumerate(twos):
                full_i = j * COMMITMENT_BITS + i
                inner.h_bold[full_i] = (
                    inner.h_bold[full_i] + ip_weight * y_inv_pow_n[full_i] * zs[2 + j] * two
                ) % _N
        inner.h = (inner.h + ip_weight * x_ip * proof.t_hat) % _N
        inner.g = (inner.g - ip_weight * proof.mu) % _N

        try:
            IpStatement(y_inv_pow_n, x_ip).verify(
                verifier, ip_rows, transcript, ip_weight, proof.ip
            )
        except IpError:
            return False
        return True