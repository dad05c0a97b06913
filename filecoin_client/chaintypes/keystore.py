"""Key types and the key material stored in a wallet."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum

from filecoin_client.sigs import SigType


class KeyType(str, Enum):
    """The kinds of key a wallet can hold."""

    BLS = "bls"
    SECP256K1 = "secp256k1"
    SECP256K1_LEDGER = "secp256k1-ledger"


_BY_SIG_TYPE = {
    SigType.BLS: KeyType.BLS,
    SigType.SECP256K1: KeyType.SECP256K1,
}

_UNMARSHAL_ERROR = "could not unmarshal KeyType either as string nor integer"


def parse_key_type(value: str | int | bytes | bytearray) -> KeyType | str:
    """Read a key type given by name or by signature type number.

    ``value`` is either an already decoded JSON value (a string or an integer)
    or the raw JSON text as bytes. Names that are not known key types are
    returned unchanged as plain strings; integers must name a known signature
    type.
    """
    if isinstance(value, (bytes, bytearray)):
        try:
            value = json.loads(value)
        except ValueError as exc:
            raise ValueError(f"{_UNMARSHAL_ERROR}: {exc}") from exc

    if isinstance(value, str):
        try:
            return KeyType(value)
        except ValueError:
            return value

    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 0xFF:
        raise ValueError(f"{_UNMARSHAL_ERROR}: {value!r}")

    try:
        return _BY_SIG_TYPE[value]
    except KeyError:
        raise ValueError(f"unknown sigtype: {value}") from None


@dataclass(frozen=True)
class KeyInfo:
    """A private key together with its type, as kept in a key store."""

    type: KeyType | str
    private_key: bytes