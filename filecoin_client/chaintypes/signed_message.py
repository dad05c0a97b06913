"""Messages together with their signatures."""

from __future__ import annotations

from dataclasses import dataclass

import cbor2

from filecoin_client.chaintypes.message import BYTE_ARRAY_MAX_LEN, Message, _block_cid
from filecoin_client.sigs import Signature, SigType

_CBOR_NULL = b"\xf6"
_LENGTH_PREFIX = bytes([130])


def _signature_cbor(sig: Signature | None) -> bytes:
    if sig is None:
        return _CBOR_NULL
    data = bytes([int(sig.type)]) + sig.data
    if len(data) > BYTE_ARRAY_MAX_LEN:
        raise ValueError("byte array in signature was too long")
    return cbor2.dumps(data)


@dataclass
class SignedMessage:
    """A message and the signature of its sender."""

    message: Message | None
    signature: Signature | None

    def serialize(self) -> bytes:
        """The CBOR encoding: a two-element array of message and signature."""
        body = _CBOR_NULL if self.message is None else self.message.serialize()
        return _LENGTH_PREFIX + body + _signature_cbor(self.signature)

    def cid(self) -> str:
        """The identifier: the bare message's for BLS, otherwise of the whole."""
        if self.signature is None:
            raise ValueError("signed message has no signature")
        if self.signature.type == SigType.BLS:
            if self.message is None:
                raise ValueError("signed message has no message")
            return self.message.cid()
        return _block_cid(self.serialize())