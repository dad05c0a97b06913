import hashlib

from filecoin_client.btcec.privkey import (
    PrivateKey,
    new_private_key,
    priv_key_from_bytes,
)
from filecoin_client.btcec.pubkey import N, parse_pub_key

KEY = bytes(
    [
        0xEA, 0xF0, 0x2C, 0xA3, 0x48, 0xC5, 0x24, 0xE6,
        0x39, 0x26, 0x55, 0xBA, 0x4D, 0x29, 0x60, 0x3C,
        0xD1, 0xA7, 0x34, 0x7D, 0x9D, 0x65, 0xCF, 0xE9,
        0x3C, 0xE1, 0xEB, 0xFF, 0xDC, 0xA2, 0x26, 0x94,
    ]
)


def test_priv_keys_check_curve():
    priv, pub = priv_key_from_bytes(KEY)

    parsed = parse_pub_key(pub.serialize_uncompressed())
    assert parsed.is_equal(pub)

    hash = bytes(range(10))
    sig = priv.sign(hash)
    assert sig.verify(hash, pub)

    assert priv.serialize() == KEY


def test_pub_key_matches_from_bytes():
    priv, pub = priv_key_from_bytes(KEY)
    assert priv.pub_key().is_equal(pub)


def test_serialize_pads_to_32_bytes():
    priv = PrivateKey(1)
    assert priv.serialize() == b"\x00" * 31 + b"\x01"


def test_sign_matches_rfc6979_vector():
    key = bytes.fromhex(
        "cca9fbcc1b41e5a95d369eaa6ddcff73b61a4efaa279cfc6567e8daa39cbaf50"
    )
    priv, _ = priv_key_from_bytes(key)
    hash = hashlib.sha256(b"sample").digest()
    expected = bytes.fromhex(
        "3045022100af340daf02cc15c8d5d08d7735dfe6b98a474ed373bdb5fbecf7571be52b384202205009fb27f37034a9b24b707b7c6b79ca23ddef9e25f7282e8a797efe53a8f124"
    )
    assert priv.sign(hash).serialize() == expected


def test_new_private_key_in_range_and_round_trips():
    priv = new_private_key()
    assert 1 <= priv.d < N
    data = priv.serialize()
    assert len(data) == 32
    again, pub = priv_key_from_bytes(data)
    assert again == priv
    assert pub.is_equal(priv.pub_key())


def test_new_private_key_signs_verifiably():
    priv = new_private_key()
    hash = hashlib.sha256(b"message").digest()
    assert priv.sign(hash).verify(hash, priv.pub_key())
    assert not priv.sign(hash).verify(hashlib.sha256(b"other").digest(), priv.pub_key())