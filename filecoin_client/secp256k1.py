"""Recoverable secp256k1 signatures in the 65-byte R || S || V layout."""

from __future__ import annotations

import io
import os
from typing import BinaryIO

from filecoin_client.btcec.privkey import priv_key_from_bytes
from filecoin_client.btcec.pubkey import BIT_SIZE, N, PublicKey, scalar_base_mult
from filecoin_client.btcec.signature import recover_compact, sign_compact

PRIVATE_KEY_BYTES = 32

# Bytes drawn from the seed per key: the curve size plus 64 extra bits.
_SEED_BYTES = BIT_SIZE // 8 + 8


def generate_key() -> bytes:
    """Create a new 32-byte private key from secure randomness."""
    return generate_key_from_seed(io.BytesIO(os.urandom(_SEED_BYTES)))


def generate_key_from_seed(seed: BinaryIO | bytes) -> bytes:
    """Derive a 32-byte private key from bytes read out of seed."""
    stream = io.BytesIO(seed) if isinstance(seed, (bytes, bytearray)) else seed
    data = stream.read(_SEED_BYTES)
    if len(data) < _SEED_BYTES:
        raise ValueError("unexpected EOF reading key seed")
    d = int.from_bytes(data, "big") % (N - 1) + 1
    return d.to_bytes(PRIVATE_KEY_BYTES, "big")


def public_key(sk: bytes) -> bytes:
    """The 65-byte uncompressed public key for the private key sk."""
    return PublicKey(*scalar_base_mult(sk)).serialize_uncompressed()


def sign(sk: bytes, msg: bytes) -> bytes:
    """Sign a 32-byte digest; returns R || S || V where V is the recovery id."""
    priv, _ = priv_key_from_bytes(sk)
    sig = sign_compact(priv, msg, False)
    v = (sig[0] - 27) & 0xFF
    return sig[1:] + bytes([v])


def ec_recover(msg: bytes, signature: bytes) -> bytes:
    """Recover the uncompressed public key from a digest and an R || S || V signature."""
    sig = bytes(signature[:65]).ljust(65, b"\x00")
    v = (sig[64] + 27) & 0xFF
    pub, _ = recover_compact(bytes([v]) + sig[:64], msg)
    return pub.serialize_uncompressed()