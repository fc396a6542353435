"""The CLSAG linkable ring signature."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import BinaryIO, Sequence, Union

from .ed25519 import (
    GROUP_ORDER,
    Point,
    multiscalar_mul,
    random_scalar,
    scalar_invert,
    scalar_to_bytes,
)
from .encoding import read_point, read_raw_vec, read_scalar, write_point, write_raw_vec, write_scalar
from .generators import Commitment, hash_to_point, keccak256_to_scalar

_N = GROUP_ORDER
_INV_EIGHT = scalar_invert(8)
_MAX_RING_LEN = 255

_PREFIX = b"CLSAG_"
_AGG_0 = b"agg_0"
_ROUND = b"round"
_PREFIX_AGG_0_LEN = len(_PREFIX) + len(_AGG_0)

RingMember = tuple[Point, Point]


class ClsagError(Exception):
    """An error when working with CLSAGs."""


class InvalidRing(ClsagError):
    """The ring was invalid (such as being too small or too large)."""


class InvalidKey(ClsagError):
    """The key's discrete logarithm over G didn't match the signing ring member."""


class InvalidCommitment(ClsagError):
    """The commitment opening didn't match the signing ring member's commitment."""


class InvalidImage(ClsagError):
    """The key image was invalid (identity or torsioned)."""


class InvalidD(ClsagError):
    """The D component was invalid."""


class InvalidS(ClsagError):
    """The s vector was invalid."""


class InvalidC1(ClsagError):
    """The c1 challenge was invalid."""


@dataclass(frozen=True)
class ClsagContext:
    """The ring, the signer's position within it and the opening of its commitment."""

    ring: tuple[RingMember, ...]
    signer_index: int
    commitment: Commitment

    def __post_init__(self) -> None:
        ring = tuple((key, commitment) for key, commitment in self.ring)
        object.__setattr__(self, "ring", ring)
        if len(ring) > _MAX_RING_LEN:
            raise InvalidRing("ring exceeds 255 members")
        if not 0 <= self.signer_index < len(ring):
            raise InvalidRing("signer index outside of the ring")
        if ring[self.signer_index][1] != self.commitment.calculate():
            raise InvalidCommitment("commitment opening doesn't match the ring member")

    @property
    def signer_ring_members(self) -> RingMember:
        return self.ring[self.signer_index]


@dataclass(frozen=True)
class _Sign:
    signer_index: int
    a: Point
    ah: Point


@dataclass(frozen=True)
class _Verify:
    c1: int
    d_serialized: Point


def _core(
    ring: Sequence[RingMember],
    key_image: Point,
    pseudo_out: Point,
    msg_hash: bytes,
    d_torsion_free: Point,
    s: Sequence[int],
    mode: Union[_Sign, _Verify],
) -> tuple[tuple[Point, int, int], int]:
    """Run the ring loop shared by signing and verifying."""
    n = len(ring)
    d_inv_eight = d_torsion_free * _INV_EIGHT

    to_hash = bytearray(_PREFIX + _AGG_0 + bytes(32 - _PREFIX_AGG_0_LEN))
    keys = [member[0] for member in ring]
    for key in keys:
        to_hash += key.compress()
    offsets = [member[1] - pseudo_out for member in ring]
    for member in ring:
        to_hash += member[1].compress()

    to_hash += key_image.compress()
    if isinstance(mode, _Sign):
        to_hash += d_inv_eight.compress()
    else:
        to_hash += mode.d_serialized.compress()
    to_hash += pseudo_out.compress()

    mu_p = keccak256_to_scalar(bytes(to_hash))
    to_hash[_PREFIX_AGG_0_LEN - 1] = ord("1")
    mu_c = keccak256_to_scalar(bytes(to_hash))

    del to_hash[(2 * n + 1) * 32:]
    to_hash[len(_PREFIX):len(_PREFIX) + len(_ROUND)] = _ROUND
    to_hash += pseudo_out.compress()
    to_hash += msg_hash

    if isinstance(mode, _Sign):
        start = mode.signer_index + 1
        end = mode.signer_index + n
        to_hash += mode.a.compress()
        to_hash += mode.ah.compress()
        c = keccak256_to_scalar(bytes(to_hash))
    else:
        start, end = 0, n
        c = mode.c1

    basepoint = Point.basepoint()
    c1 = c
    for i in (j % n for j in range(start, end)):
        c_p = mu_p * c % _N
        c_c = mu_c * c % _N

        left = multiscalar_mul([s[i], c_p, c_c], [basepoint, keys[i], offsets[i]])
        key_hash = hash_to_point(keys[i].compress())
        right = multiscalar_mul([c_p, c_c, s[i]], [key_image, d_torsion_free, key_hash])

        del to_hash[(2 * n + 3) * 32:]
        to_hash += left.compress()
        to_hash += right.compress()
        c = keccak256_to_scalar(bytes(to_hash))

        if i == n - 1:
            c1 = c

    return (d_inv_eight, c * mu_p % _N, c * mu_c % _N), c1


def _check_msg_hash(msg_hash: bytes) -> bytes:
    msg_hash = bytes(msg_hash)
    if len(msg_hash) != 32:
        raise ValueError("the message hash is 32 bytes")
    return msg_hash


@dataclass
class Clsag:
    """A CLSAG signature: D, the responses s and the first challenge c1."""

    D: Point
    s: list[int] = field(default_factory=list)
    c1: int = 0

    @classmethod
    def _sign_core(
        cls,
        rng,
        key_image: Point,
        context: ClsagContext,
        mask: int,
        msg_hash: bytes,
        a: Point,
        ah: Point,
    ) -> tuple["Clsag", Point, int, int]:
        signer_index = context.signer_index
        pseudo_out = Commitment(mask, context.commitment.amount).calculate()
        mask_delta = (context.commitment.mask - mask) % _N

        generator = hash_to_point(context.ring[signer_index][0].compress())
        d_point = generator * mask_delta
        s = [random_scalar(rng) for _ in context.ring]
        (d_inv_eight, c_p, c_c), c1 = _core(
            context.ring,
            key_image,
            pseudo_out,
            msg_hash,
            d_point,
            s,
            _Sign(signer_index, a, ah),
        )
        return cls(d_inv_eight, s, c1), pseudo_out, c_p, c_c * mask_delta % _N

    @classmethod
    def sign(
        cls,
        rng,
        inputs: Sequence[tuple[int, ClsagContext]],
        sum_outputs: int,
        msg_hash: bytes,
    ) -> list[tuple["Clsag", Point]]:
        """Sign a CLSAG for each (private key, context) input.

        Every input but the last gets a random pseudo-out mask; the last one's
        mask makes the masks sum to `sum_outputs`. Returns (signature,
        pseudo-out) pairs.
        """
        msg_hash = _check_msg_hash(msg_hash)
        basepoint = Point.basepoint()

        generators = []
        key_images = []
        for private_key, context in inputs:
            key = context.signer_ring_members[0]
            if basepoint * private_key != key:
                raise InvalidKey("key doesn't match the signing ring member")
            generator = hash_to_point(key.compress())
            generators.append(generator)
            key_images.append(generator * private_key)

        result = []
        sum_pseudo_outs = 0
        last = len(inputs) - 1
        for i, (private_key, context) in enumerate(inputs):
            if i == last:
                mask = (sum_outputs - sum_pseudo_outs) % _N
            else:
                mask = random_scalar(rng)
                sum_pseudo_outs = (sum_pseudo_outs + mask) % _N

            nonce = random_scalar(rng)
            clsag, pseudo_out, key_challenge, challenged_mask = cls._sign_core(
                rng,
                key_images[i],
                context,
                mask,
                msg_hash,
                basepoint * nonce,
                generators[i] * nonce,
            )
            clsag.s[context.signer_index] = (
                nonce - (key_challenge * private_key + challenged_mask)
            ) % _N
            result.append((clsag, pseudo_out))
        return result

    def verify(
        self,
        ring: Sequence[RingMember],
        key_image: Point,
        pseudo_out: Point,
        msg_hash: bytes,
    ) -> None:
        """Verify the signature; raises a ClsagError if it's invalid."""
        msg_hash = _check_msg_hash(msg_hash)
        ring = [(key, commitment) for key, commitment in ring]
        if not ring:
            raise InvalidRing("empty ring")
        if len(ring) != len(self.s):
            raise InvalidS("s doesn't match the ring length")
        if key_image.is_identity() or not key_image.is_torsion_free():
            raise InvalidImage("invalid key image")

        d_torsion_free = self.D.mul_by_cofactor()
        if d_torsion_free.is_identity():
            raise InvalidD("invalid D")

        _, c1 = _core(
            ring,
            key_image,
            pseudo_out,
            msg_hash,
            d_torsion_free,
            self.s,
            _Verify(self.c1, self.D),
        )
        if c1 != self.c1 % _N:
            raise InvalidC1("invalid c1")

    def write(self, stream: BinaryIO) -> None:
        write_raw_vec(write_scalar, self.s, stream)
        stream.write(scalar_to_bytes(self.c1))
        write_point(self.D, stream)

    @classmethod
    def read(cls, decoys: int, stream: BinaryIO) -> "Clsag":
        """Read a CLSAG for a ring of `decoys` members."""
        s = read_raw_vec(read_scalar, decoys, stream)
        c1 = read_scalar(stream)
        d_point = read_point(stream)
        return cls(D=d_point, s=list(s), c1=c1)