"""Private keys on the secp256k1 curve."""

from __future__ import annotations

import secrets
from dataclasses import dataclass

from filecoin_client.btcec.pubkey import N, PublicKey, scalar_base_mult
from filecoin_client.btcec.signature import Signature, sign_rfc6979

PRIV_KEY_BYTES_LEN = 32


@dataclass(frozen=True)
class PrivateKey:
    """A secp256k1 private scalar d."""

    d: int

    def pub_key(self) -> PublicKey:
        """The public key d*G belonging to this private key."""
        return PublicKey(*scalar_base_mult(self.d))

    def sign(self, hash: bytes) -> Signature:
        """Sign hash deterministically (RFC 6979) with a low-S signature."""
        return sign_rfc6979(self.d, hash)

    def serialize(self) -> bytes:
        """The scalar as big-endian bytes, left-padded to 32 bytes."""
        raw = self.d.to_bytes((self.d.bit_length() + 7) // 8, "big")
        return raw.rjust(PRIV_KEY_BYTES_LEN, b"\x00")


def priv_key_from_bytes(pk: bytes) -> tuple[PrivateKey, PublicKey]:
    """Build the private key and its public key from big-endian bytes."""
    priv = PrivateKey(int.from_bytes(pk, "big"))
    return priv, PublicKey(*scalar_base_mult(pk))


def new_private_key() -> PrivateKey:
    """Generate a fresh private key from the system's secure randomness."""
    return PrivateKey(secrets.randbelow(N - 1) + 1)