"""Monero RingCT primitives: Ed25519 arithmetic, encoding, CLSAG and Bulletproofs parts."""

__version__ = "0.1.0"