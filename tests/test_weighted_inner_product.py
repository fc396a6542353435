import random

import pytest

from ringproofs.bulletproofs.batch_verifier import BulletproofsPlusBatchVerifier
from ringproofs.bulletproofs.plus.plus_generators import BpPlusGenerators, GeneratorsList
from ringproofs.bulletproofs.plus.weighted_inner_product import (
    WipProof,
    WipStatement,
    WipWitness,
)
from ringproofs.bulletproofs.point_vector import PointVector
from ringproofs.bulletproofs.scalar_vector import ScalarVector
from ringproofs.ed25519 import GROUP_ORDER, Point, random_scalar


@pytest.fixture
def rng():
    return random.Random(0xB0B)


def _instance(rng, n):
    generators = BpPlusGenerators.full().reduce(n)
    g_bold = PointVector(generators.generator(GeneratorsList.G_BOLD, i) for i in range(n))
    h_bold = PointVector(generators.generator(GeneratorsList.H_BOLD, i) for i in range(n))
    a = ScalarVector(random_scalar(rng) for _ in range(n))
    b = ScalarVector(random_scalar(rng) for _ in range(n))
    alpha = random_scalar(rng)
    y = random_scalar(rng)
    y_vec = ScalarVector.powers(y, n + 1)[1:]
    big_p = (
        g_bold.multiexp(a)
        + h_bold.multiexp(b)
        + BpPlusGenerators.g() * a.weighted_inner_product(b, y_vec)
        + BpPlusGenerators.h() * alpha
    )
    return WipStatement(generators, big_p, y), WipWitness(a, b, alpha)


def test_zero_weighted_inner_product(rng):
    generators = BpPlusGenerators.full().reduce(1)
    statement = WipStatement(generators, Point.identity(), random_scalar(rng))
    witness = WipWitness(ScalarVector.zeros(1), ScalarVector.zeros(1), 0)

    transcript = random_scalar(rng)
    proof = statement.prove(rng, transcript, witness)

    verifier = BulletproofsPlusBatchVerifier()
    assert statement.verify(rng, verifier, transcript, proof)
    assert verifier.verify()


def test_weighted_inner_product(rng):
    verifier = BulletproofsPlusBatchVerifier()
    for n in [1, 2, 4, 8, 16, 32]:
        statement, witness = _instance(rng, n)
        assert len(statement.generators) == n
        transcript = random_scalar(rng)
        proof = statement.prove(rng, transcript, witness)
        assert len(proof.L) == n.bit_length() - 1
        assert statement.verify(rng, verifier, transcript, proof)
    assert verifier.verify()


def test_tampered_answer_fails_batch(rng):
    statement, witness = _instance(rng, 4)
    transcript = random_scalar(rng)
    proof = statement.prove(rng, transcript, witness)
    proof.r_answer = (proof.r_answer + 1) % GROUP_ORDER

    verifier = BulletproofsPlusBatchVerifier()
    assert statement.verify(rng, verifier, transcript, proof)
    assert not verifier.verify()


def test_wrong_transcript_fails_batch(rng):
    statement, witness = _instance(rng, 2)
    transcript = random_scalar(rng)
    proof = statement.prove(rng, transcript, witness)

    verifier = BulletproofsPlusBatchVerifier()
    assert statement.verify(rng, verifier, (transcript + 1) % GROUP_ORDER, proof)
    assert not verifier.verify()


def test_wrong_lr_length_is_rejected(rng):
    statement, witness = _instance(rng, 4)
    transcript = random_scalar(rng)
    proof = statement.prove(rng, transcript, witness)
    short = WipProof(
        proof.L[:1], proof.R[:1], proof.A, proof.B,
        proof.r_answer, proof.s_answer, proof.delta_answer,
    )
    assert not statement.verify(rng, BulletproofsPlusBatchVerifier(), transcript, short)


def test_proof_for_other_size_is_rejected(rng):
    small, witness = _instance(rng, 4)
    transcript = random_scalar(rng)
    proof = small.prove(rng, transcript, witness)
    large, _ = _instance(rng, 8)
    assert not large.verify(rng, BulletproofsPlusBatchVerifier(), transcript, proof)


def test_witness_is_padded_to_power_of_two():
    witness = WipWitness(ScalarVector([1, 2, 3]), ScalarVector([4, 5, 6]), 7)
    assert list(witness.a) == [1, 2, 3, 0]
    assert list(witness.b) == [4, 5, 6, 0]
    assert witness.alpha == 7


def test_witness_rejects_empty():
    with pytest.raises(ValueError):
        WipWitness(ScalarVector(), ScalarVector(), 0)


def test_witness_rejects_mismatched_lengths():
    with pytest.raises(ValueError):
        WipWitness(ScalarVector([1, 2]), ScalarVector([1]), 0)


def test_prove_rejects_mismatched_generators(rng):
    generators = BpPlusGenerators.full().reduce(4)
    statement = WipStatement(generators, Point.identity(), 5)
    witness = WipWitness(ScalarVector([1, 2]), ScalarVector([3, 4]), 0)
    with pytest.raises(ValueError):
        statement.prove(rng, 1, witness)


def test_statement_y_holds_powers():
    generators = BpPlusGenerators.full().reduce(4)
    statement = WipStatement(generators, Point.identity(), 3)
    assert list(statement.y) == [3, 9, 27, 81]