"""Chain messages, their canonical CBOR encoding and content identifiers."""

from __future__ import annotations

import base64
import hashlib
import json
from dataclasses import dataclass

import cbor2

from filecoin_client.sigs import Address

BYTE_ARRAY_MAX_LEN = 2 << 20

_DAG_CBOR = 0x71
_BLAKE2B_256 = 0xB220
_UINT64_LIMIT = 1 << 64
_INT64_LIMIT = 1 << 63


def _uvarint(value: int) -> bytes:
    out = bytearray()
    while value >= 0x80:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


def _block_cid(data: bytes) -> str:
    """The CIDv1 (dag-cbor, blake2b-256) of data in its base32 text form."""
    digest = hashlib.blake2b(data, digest_size=32).digest()
    raw = (
        _uvarint(1)
        + _uvarint(_DAG_CBOR)
        + _uvarint(_BLAKE2B_256)
        + _uvarint(len(digest))
        + digest
    )
    return "b" + base64.b32encode(raw).decode("ascii").lower().rstrip("=")


def _big_bytes(value: int) -> bytes:
    """A token amount as a sign byte followed by its magnitude; empty for zero."""
    if value == 0:
        return b""
    magnitude = abs(value)
    sign = 0 if value > 0 else 1
    return bytes([sign]) + magnitude.to_bytes((magnitude.bit_length() + 7) // 8, "big")


@dataclass
class Message:
    """A message sent from one actor to another."""

    to: Address
    from_: Address
    nonce: int = 0
    value: int = 0
    gas_limit: int = 0
    gas_fee_cap: int = 0
    gas_premium: int = 0
    method: int = 0
    params: bytes | None = None
    version: int = 0

    def _check_ranges(self) -> None:
        for name, number in (("Version", self.version), ("Nonce", self.nonce), ("Method", self.method)):
            if not 0 <= number < _UINT64_LIMIT:
                raise ValueError(f"{name} out of range for uint64")
        if not -_INT64_LIMIT <= self.gas_limit < _INT64_LIMIT:
            raise ValueError("GasLimit out of range for int64")

    def serialize(self) -> bytes:
        """The canonical CBOR encoding: a 10-element array."""
        self._check_ranges()
        params = self.params or b""
        if len(params) > BYTE_ARRAY_MAX_LEN:
            raise ValueError("Byte array in field t.Params was too long")
        return cbor2.dumps(
            [
                self.version,
                self.to.to_bytes(),
                self.from_.to_bytes(),
                self.nonce,
                _big_bytes(self.value),
                self.gas_limit,
                _big_bytes(self.gas_fee_cap),
                _big_bytes(self.gas_premium),
                self.method,
                params,
            ]
        )

    def chain_length(self) -> int:
        """Length in bytes of the serialized message."""
        return len(self.serialize())

    def cid(self) -> str:
        """The content identifier of the serialized message."""
        return _block_cid(self.serialize())

    def to_json(self) -> str:
        """The JSON form of the message, including its CID."""
        doc = {
            "Version": self.version,
            "To": str(self.to),
            "From": str(self.from_),
            "Nonce": self.nonce,
            "Value": str(self.value),
            "GasLimit": self.gas_limit,
            "GasFeeCap": str(self.gas_fee_cap),
            "GasPremium": str(self.gas_premium),
            "Method": self.method,
            "Params": None if self.params is None else base64.b64encode(self.params).decode("ascii"),
            "CID": {"/": self.cid()},
        }
        return json.dumps(doc, separators=(",", ":"))