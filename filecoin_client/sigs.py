"""Signature types, addresses and the registry of signing schemes."""

from __future__ import annotations

import base64
import hashlib
from dataclasses import dataclass
from enum import IntEnum
from typing import Protocol

MAINNET_PREFIX = "f"
TESTNET_PREFIX = "t"

PROTOCOL_ID = 0
PROTOCOL_SECP256K1 = 1
PROTOCOL_ACTOR = 2
PROTOCOL_BLS = 3

PAYLOAD_HASH_LENGTH = 20
CHECKSUM_HASH_LENGTH = 4
BLS_PUBLIC_KEY_BYTES = 48
MAX_ADDRESS_STRING_LENGTH = 2 + 84


class SigType(IntEnum):
    """Kinds of signature the chain knows."""

    UNKNOWN = 255
    SECP256K1 = 1
    BLS = 2


@dataclass(frozen=True)
class Signature:
    """A signature tagged with its type."""

    type: SigType
    data: bytes


def _uvarint(value: int) -> bytes:
    out = bytearray()
    while value >= 0x80:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


def _read_uvarint(data: bytes) -> int:
    value = 0
    shift = 0
    for pos, byte in enumerate(data):
        value |= (byte & 0x7F) << shift
        if not byte & 0x80:
            if pos != len(data) - 1:
                raise ValueError("invalid address payload")
            return value
        shift += 7
    raise ValueError("invalid address payload")


def _checksum(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=CHECKSUM_HASH_LENGTH).digest()


def _b32encode(data: bytes) -> str:
    return base64.b32encode(data).decode("ascii").lower().rstrip("=")


def _b32decode(text: str) -> bytes:
    padded = text.upper() + "=" * (-len(text) % 8)
    return base64.b32decode(padded)


@dataclass(frozen=True)
class Address:
    """An address: a protocol number and its payload."""

    protocol: int
    payload: bytes

    def __post_init__(self) -> None:
        if self.protocol == PROTOCOL_ID:
            _read_uvarint(self.payload)
        elif self.protocol in (PROTOCOL_SECP256K1, PROTOCOL_ACTOR):
            if len(self.payload) != PAYLOAD_HASH_LENGTH:
                raise ValueError("invalid address payload")
        elif self.protocol == PROTOCOL_BLS:
            if len(self.payload) != BLS_PUBLIC_KEY_BYTES:
                raise ValueError("invalid address payload")
        else:
            raise ValueError("unknown address protocol")

    def to_bytes(self) -> bytes:
        """The protocol byte followed by the payload."""
        return bytes([self.protocol]) + self.payload

    def _encode(self, network: str) -> str:
        if self.protocol == PROTOCOL_ID:
            return f"{network}0{_read_uvarint(self.payload)}"
        cksm = _checksum(self.to_bytes())
        return f"{network}{self.protocol}{_b32encode(self.payload + cksm)}"

    def __str__(self) -> str:
        return self._encode(TESTNET_PREFIX)


def new_secp256k1_address(pubkey: bytes) -> Address:
    """The secp256k1 address of an uncompressed public key."""
    digest = hashlib.blake2b(pubkey, digest_size=PAYLOAD_HASH_LENGTH).digest()
    return Address(PROTOCOL_SECP256K1, digest)


def new_from_string(text: str) -> Address:
    """Parse the textual form of an address, checking its checksum."""
    if len(text) > MAX_ADDRESS_STRING_LENGTH or len(text) < 3:
        raise ValueError("invalid address length")
    if text[0] not in (MAINNET_PREFIX, TESTNET_PREFIX):
        raise ValueError("unknown address network")
    protocols = {"0": PROTOCOL_ID, "1": PROTOCOL_SECP256K1, "2": PROTOCOL_ACTOR, "3": PROTOCOL_BLS}
    if text[1] not in protocols:
        raise ValueError("unknown address protocol")
    protocol = protocols[text[1]]
    raw = text[2:]

    if protocol == PROTOCOL_ID:
        if len(raw) > 20:
            raise ValueError("invalid address length")
        if not (raw.isascii() and raw.isdigit()):
            raise ValueError("invalid address payload")
        ident = int(raw)
        if ident >= 1 << 64:
            raise ValueError("invalid address payload")
        return Address(PROTOCOL_ID, _uvarint(ident))

    decoded = _b32decode(raw)
    if len(decoded) < CHECKSUM_HASH_LENGTH:
        raise ValueError("invalid address length")
    payload, cksm = decoded[:-CHECKSUM_HASH_LENGTH], decoded[-CHECKSUM_HASH_LENGTH:]
    if protocol in (PROTOCOL_SECP256K1, PROTOCOL_ACTOR) and len(payload) != PAYLOAD_HASH_LENGTH:
        raise ValueError("invalid address payload")
    if _checksum(bytes([protocol]) + payload) != cksm:
        raise ValueError("invalid address checksum")
    return Address(protocol, payload)


class SigShim(Protocol):
    """What a signing scheme provides."""

    def gen_private(self) -> bytes: ...

    def to_public(self, pk: bytes) -> bytes: ...

    def sign(self, pk: bytes, msg: bytes) -> bytes: ...

    def verify(self, sig: bytes, addr: Address, msg: bytes) -> None: ...


_SIGS: dict[SigType, SigShim] = {}


def register_signature(typ: SigType, shim: SigShim) -> None:
    """Make a signing scheme available for the given type."""
    _SIGS[typ] = shim


def _lookup(sig_type: SigType, action: str) -> SigShim:
    try:
        return _SIGS[sig_type]
    except KeyError:
        raise ValueError(f"cannot {action} of unsupported type: {sig_type!r}") from None


def sign(sig_type: SigType, privkey: bytes, msg: bytes) -> Signature:
    """Sign msg with privkey using the scheme for sig_type."""
    shim = _lookup(sig_type, "sign message with signature")
    return Signature(SigType(sig_type), shim.sign(privkey, msg))


def verify(sig: Signature | None, addr: Address, msg: bytes) -> None:
    """Raise ValueError unless sig is a valid signature of msg by addr."""
    if sig is None:
        raise ValueError("signature is nil")
    if addr.protocol == PROTOCOL_ID:
        raise ValueError("must resolve ID addresses before using them to verify a signature")
    shim = _lookup(sig.type, "verify signature")
    shim.verify(sig.data, addr, msg)


def generate(sig_type: SigType) -> bytes:
    """Generate a private key for sig_type."""
    return _lookup(sig_type, "generate private key").gen_private()


def to_public(sig_type: SigType, pk: bytes) -> bytes:
    """Derive the public key for pk under sig_type."""
    return _lookup(sig_type, "generate public key").to_public(pk)