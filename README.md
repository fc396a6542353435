# ringproofs

A pure-Python library of Monero RingCT primitives on Ed25519:

- Ed25519 point and scalar arithmetic (`ringproofs.ed25519`)
- canonical serialization of varints, scalars and points (`ringproofs.encoding`)
- `hash_to_point`, the amount generator `H`, Pedersen `Commitment`s and the
  Bulletproofs(+) generator vectors (`ringproofs.generators`)
- CLSAG signing, verification and serialization (`ringproofs.clsag`)
- the original Bulletproofs aggregate range proof and its inner-product argument
  (`ringproofs.bulletproofs.original`)
- the Bulletproofs+ weighted inner-product argument and generators
  (`ringproofs.bulletproofs.plus`)
- batch verification through a single multiscalar multiplication
  (`ringproofs.bulletproofs.batch_verifier`)

Everything is plain Python, so it suits tooling, testing and study rather than speed.
The 2048 generators of each Bulletproofs variant are derived on first use and cached,
which takes a noticeable moment.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Range proofs (original Bulletproofs)

```python
import secrets

from ringproofs.ed25519 import random_scalar
from ringproofs.generators import Commitment
from ringproofs.bulletproofs.batch_verifier import BulletproofsBatchVerifier
from ringproofs.bulletproofs.original.range_proof import (
    AggregateRangeStatement,
    AggregateRangeWitness,
)

rng = secrets.SystemRandom()
openings = [Commitment(random_scalar(rng), 1337), Commitment(random_scalar(rng), 42)]

statement = AggregateRangeStatement([c.calculate() for c in openings])
proof = statement.prove(rng, AggregateRangeWitness(openings))

verifier = BulletproofsBatchVerifier()
assert statement.verify(rng, verifier, proof)  # queues the proof
assert verifier.verify()                        # checks everything queued
```

Statements and witnesses take between 1 and 16 commitments and raise `ValueError`
otherwise; `prove` raises `ValueError` if the witness does not open the statement.
`verify` returns `False` for a malformed proof and `True` once the proof is queued, so
several proofs can share one verifier and one final `verify()`. `BatchVerifier` holds
one batch for each Bulletproofs variant.

The Bulletproofs+ weighted inner-product argument is available as `WipStatement`,
`WipWitness` and `WipProof` in `ringproofs.bulletproofs.plus.weighted_inner_product`,
queued into a `BulletproofsPlusBatchVerifier`.

## CLSAG

```python
from ringproofs.clsag import Clsag, ClsagContext
from ringproofs.generators import hash_to_point

context = ClsagContext(ring, signer_index, Commitment(mask, amount))
[(signature, pseudo_out)] = Clsag.sign(rng, [(secret_key, context)], sum_outputs, msg_hash)

key_image = hash_to_point(ring[signer_index][0].compress()) * secret_key
signature.verify(ring, key_image, pseudo_out, msg_hash)
```

A ring is a sequence of `(key, commitment)` point pairs and `msg_hash` is 32 bytes.
`ClsagContext` raises `InvalidRing` or `InvalidCommitment`; `sign` raises `InvalidKey`
when a secret key does not match its ring member; `verify` returns nothing on success
and raises `InvalidRing`, `InvalidS`, `InvalidImage`, `InvalidD` or `InvalidC1`, all
subclasses of `ClsagError`. `Clsag.write(stream)` and `Clsag.read(ring_len, stream)`
serialize a signature.

## Encoding

The functions in `ringproofs.encoding` write to and read from binary streams such as
`io.BytesIO`. Readers insist on canonical encodings: truncated data, non-canonical or
overflowing varints, unreduced scalars and non-canonical points raise `DecodeError`.

## What this package does not do

- It has no Bulletproofs+ aggregate range proof, only the weighted inner-product
  argument that such a proof is built on.
- It has no wire format for range proofs: proofs are Python objects only, with no
  read or write functions.
- It has no MLSAG signatures.
- It has no command-line interface.