"""Filecoin chain types, CBOR message encoding and secp256k1 signing."""

__version__ = "0.1.0"