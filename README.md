# filecoin-client

Filecoin data types, message encoding and secp256k1 signing in pure Python.
The only third-party dependency is `cbor2`.

## What is in the package

- `filecoin_client.btcec.pubkey`: secp256k1 curve arithmetic
  (`point_add`, `scalar_mult`, `scalar_base_mult`, `is_on_curve`,
  `decompress_point`) and the `PublicKey` type with compressed, uncompressed
  and hybrid serialization. `parse_pub_key` parses and validates any of those
  forms; `is_compressed_pub_key` checks a key's length and prefix.
- `filecoin_client.btcec.signature`: the ECDSA `Signature` type (low-S DER
  `serialize`, `verify`, `is_equal`), `parse_signature` (BER) and
  `parse_der_signature` (strict DER), deterministic RFC 6979 signing
  (`nonce_rfc6979`, `sign_rfc6979`), and compact recoverable signatures
  (`sign_compact`, `recover_compact`).
- `filecoin_client.btcec.privkey`: `PrivateKey` (`pub_key`, `sign`,
  `serialize`), `priv_key_from_bytes` and `new_private_key`.
- `filecoin_client.secp256k1`: 65-byte recoverable signatures laid out as
  R || S || V (`generate_key`, `generate_key_from_seed`, `public_key`, `sign`,
  `ec_recover`). `sign` expects a 32-byte digest.
- `filecoin_client.sigs`: `SigType`, the tagged `Signature`, and `Address`
  (`new_secp256k1_address`, `new_from_string`; `str()` gives the testnet
  `t` form, parsing accepts `f` and `t`). A registry of signing schemes by
  type, with `register_signature`, `sign`, `verify`, `generate` and
  `to_public`. Failures raise `ValueError`.
- `filecoin_client.secp`: `SecpSigner`, which signs the BLAKE2b-256 digest of
  a message. Importing this module registers it for `SigType.SECP256K1`.
- `filecoin_client.chaintypes.message`: `Message`, with its canonical CBOR
  encoding (`serialize`, `chain_length`), its CID (`cid`) and its JSON form
  with the CID included (`to_json`).
- `filecoin_client.chaintypes.signed_message`: `SignedMessage`
  (`serialize`, `cid`; for BLS signatures the CID is that of the bare message).
- `filecoin_client.chaintypes.models`: node response types such as `Version`,
  `Actor`, `TipSet`, `BlockHeader`, `MessageReceipt`, `MsgLookup` and
  `InvocResult`, each built from decoded JSON with `from_json`.
- `filecoin_client.chaintypes.keystore`: `KeyType`, `KeyInfo` and
  `parse_key_type`, which accepts a key type by name or by signature type number.
- `filecoin_client.util`: `to_fil` and `from_fil` convert between attoFIL
  integers and `Decimal` FIL amounts (`from_fil` truncates toward zero).

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from decimal import Decimal

from filecoin_client import secp256k1, sigs
from filecoin_client import secp  # registers the secp256k1 scheme
from filecoin_client.util import from_fil, to_fil

key = secp256k1.generate_key()
digest = bytes(32)
signature = secp256k1.sign(key, digest)
assert secp256k1.ec_recover(digest, signature) == secp256k1.public_key(key)

addr = sigs.new_secp256k1_address(sigs.to_public(sigs.SigType.SECP256K1, key))
signed = sigs.sign(sigs.SigType.SECP256K1, key, b"hello")
sigs.verify(signed, addr, b"hello")  # raises ValueError on mismatch

assert from_fil(Decimal("1.5")) == 1_500_000_000_000_000_000
assert to_fil(1_500_000_000_000_000_000) == Decimal("1.5")
```

## What it does not do

- It does not talk to a node: there is no RPC client for wallet, state,
  chain or version calls. The types in `chaintypes.models` only decode
  JSON you have already fetched.
- It has no BLS scheme. Only `SigType.SECP256K1` can be registered from
  this package; `sign`, `verify`, `generate` and `to_public` raise
  `ValueError` for `SigType.BLS`.
- There is no command-line tool.