import hashlib
import io

import pytest

from filecoin_client.btcec.pubkey import GX, GY, N
from filecoin_client.btcec.signature import sign_rfc6979
from filecoin_client import secp256k1


def test_generate_key_length_and_range():
    key = secp256k1.generate_key()
    assert len(key) == secp256k1.PRIVATE_KEY_BYTES
    assert 1 <= int.from_bytes(key, "big") < N


def test_generate_key_from_seed_is_deterministic():
    seed = bytes(range(40))
    first = secp256k1.generate_key_from_seed(io.BytesIO(seed))
    second = secp256k1.generate_key_from_seed(seed)
    assert first == second
    assert len(first) == 32


def test_generate_key_from_zero_seed_is_one():
    key = secp256k1.generate_key_from_seed(io.BytesIO(b"\x00" * 40))
    assert key == b"\x00" * 31 + b"\x01"


def test_generate_key_from_short_seed_fails():
    with pytest.raises(ValueError):
        secp256k1.generate_key_from_seed(io.BytesIO(b"\x01" * 10))


def test_public_key_of_one_is_generator():
    pub = secp256k1.public_key(b"\x00" * 31 + b"\x01")
    assert pub == b"\x04" + GX.to_bytes(32, "big") + GY.to_bytes(32, "big")


def test_sign_and_recover_round_trip():
    sk = secp256k1.generate_key()
    digest = hashlib.sha256(b"payload").digest()
    sig = secp256k1.sign(sk, digest)
    assert len(sig) == 65
    assert sig[64] in (0, 1, 2, 3)
    assert secp256k1.ec_recover(digest, sig) == secp256k1.public_key(sk)


def test_sign_is_deterministic():
    sk = bytes.fromhex(
        "fd1d429f2e0744f5dbcc361796e1a6f5cf4b59ecca92c15c27f837401c12a3da"
    )
    digest = hashlib.sha256(b"payload").digest()
    first = secp256k1.sign(sk, digest)
    second = secp256k1.sign(sk, digest)
    assert first == second
    expected = sign_rfc6979(int.from_bytes(sk, "big"), digest)
    assert first[:32] == expected.r.to_bytes(32, "big")
    assert first[32:64] == expected.s.to_bytes(32, "big")
    assert secp256k1.ec_recover(digest, first) == secp256k1.public_key(sk)


def test_recover_known_vector():
    msg = bytes.fromhex(
        "ce0677bb30baa8cf067c88db9811f4333d131bf8bcf12fe7065d211dce971008"
    )
    compact = bytes.fromhex(
        "0190f27b8b488db00b00606796d2987f6a5f59ae62ea05effe84fef5b8b0e549984a691139ad57a3f0b906637673aa2f63d1f55cb1a69199d4009eea23ceaddc93"
    )
    expected = bytes.fromhex(
        "04E32DF42865E97135ACFB65F3BAE71BDC86F4D49150AD6A440B6F15878109880A0A2B2667F7E725CEEA70C673093BF67663E0312623C8E091B13CF2C0F11EF652"
    )
    assert secp256k1.ec_recover(msg, compact[1:] + compact[:1]) == expected


def test_recover_with_zero_r_fails():
    digest = hashlib.sha256(b"payload").digest()
    bad = b"\x00" * 32 + b"\x01" * 32 + b"\x00"
    with pytest.raises(ValueError):
        secp256k1.ec_recover(digest, bad)