"""The secp256k1 signing scheme, registered with the signature registry on import."""

from __future__ import annotations

import hashlib

from filecoin_client import secp256k1
from filecoin_client.sigs import Address, SigType, new_secp256k1_address, register_signature


def _b2sum(msg: bytes) -> bytes:
    return hashlib.blake2b(msg, digest_size=32).digest()


class SecpSigner:
    """Signs blake2b-256 digests with recoverable secp256k1 signatures."""

    def gen_private(self) -> bytes:
        """A new 32-byte private key."""
        return secp256k1.generate_key()

    def to_public(self, pk: bytes) -> bytes:
        """The uncompressed public key for pk."""
        return secp256k1.public_key(pk)

    def sign(self, pk: bytes, msg: bytes) -> bytes:
        """Sign the blake2b-256 digest of msg."""
        return secp256k1.sign(pk, _b2sum(msg))

    def verify(self, sig: bytes, addr: Address, msg: bytes) -> None:
        """Raise ValueError unless sig over msg recovers to addr."""
        pub = secp256k1.ec_recover(_b2sum(msg), sig)
        if new_secp256k1_address(pub) != addr:
            raise ValueError("signature did not match")


register_signature(SigType.SECP256K1, SecpSigner())