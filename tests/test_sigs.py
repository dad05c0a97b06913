import pytest

from filecoin_client import secp, sigs
from filecoin_client.secp256k1 import public_key
from filecoin_client.sigs import (
    PROTOCOL_BLS,
    PROTOCOL_ID,
    PROTOCOL_SECP256K1,
    Address,
    SigType,
    Signature,
    new_from_string,
    new_secp256k1_address,
)

SECP_TEXT = "f1ntod647g54mv7pqbkniqnyov6k7thr2uxdec42i"
BLS_TEXT = "f3qx3jo74v6d6z35qhfeax3xozsegzliowrrchuyumshnwb2kz66xajhl55pxjr5xvvpeggioytv7uko5hpzga"
SAMPLE_KEY = bytes.fromhex(
    "fd1d429f2e0744f5dbcc361796e1a6f5cf4b59ecca92c15c27f837401c12a3da"
)


class _TagShim:
    def gen_private(self):
        return b"k" * 4

    def to_public(self, pk):
        return b"pub:" + pk

    def sign(self, pk, msg):
        return pk + b"|" + msg

    def verify(self, sig, addr, msg):
        if not sig.endswith(b"|" + msg):
            raise ValueError("tag mismatch")


def test_secp_address_round_trip():
    addr = new_from_string(SECP_TEXT)
    assert addr.protocol == PROTOCOL_SECP256K1
    assert len(addr.to_bytes()) == 21
    assert str(addr) == "t" + SECP_TEXT[1:]
    assert new_from_string(str(addr)) == addr


def test_bls_address_round_trip():
    addr = new_from_string(BLS_TEXT)
    assert addr.protocol == PROTOCOL_BLS
    assert len(addr.payload) == 48
    assert str(addr) == "t" + BLS_TEXT[1:]


def test_id_address():
    addr = new_from_string("t01234")
    assert addr.protocol == PROTOCOL_ID
    assert addr.to_bytes() == b"\x00\xd2\x09"
    assert str(addr) == "t01234"


def test_secp_address_from_known_key():
    addr = new_secp256k1_address(public_key(SAMPLE_KEY))
    assert str(addr) == "t1r6egk7djfy7krbw7zdswbgdhep4hge5fecwmsoi"


@pytest.mark.parametrize(
    "text",
    [
        SECP_TEXT[:-1] + "j",
        "x1ntod647g54mv7pqbkniqnyov6k7thr2uxdec42i",
        "f9ntod647g54mv7pqbkniqnyov6k7thr2uxdec42i",
        "f1",
        "f0abc",
    ],
)
def test_invalid_addresses(text):
    with pytest.raises(ValueError):
        new_from_string(text)


def test_address_rejects_bad_payload():
    with pytest.raises(ValueError):
        Address(PROTOCOL_SECP256K1, b"\x01" * 5)


def test_unsupported_type_errors():
    with pytest.raises(ValueError, match="unsupported type"):
        sigs.sign(SigType.UNKNOWN, b"k", b"m")
    with pytest.raises(ValueError, match="unsupported type"):
        sigs.generate(SigType.UNKNOWN)
    with pytest.raises(ValueError, match="unsupported type"):
        sigs.to_public(SigType.UNKNOWN, b"k")


def test_verify_nil_signature():
    with pytest.raises(ValueError, match="signature is nil"):
        sigs.verify(None, new_from_string(SECP_TEXT), b"m")


def test_verify_id_address_rejected():
    sig = Signature(SigType.SECP256K1, b"\x00" * 65)
    with pytest.raises(ValueError, match="resolve ID addresses"):
        sigs.verify(sig, new_from_string("t01234"), b"m")


def test_registered_custom_shim():
    sigs.register_signature(SigType.BLS, _TagShim())
    sig = sigs.sign(SigType.BLS, b"key", b"msg")
    assert sig == Signature(SigType.BLS, b"key|msg")
    assert sigs.generate(SigType.BLS) == b"kkkk"
    assert sigs.to_public(SigType.BLS, b"key") == b"pub:key"
    addr = new_from_string(BLS_TEXT)
    sigs.verify(sig, addr, b"msg")
    with pytest.raises(ValueError, match="tag mismatch"):
        sigs.verify(sig, addr, b"other")


def test_secp_scheme_through_registry():
    assert isinstance(sigs._SIGS[SigType.SECP256K1], secp.SecpSigner)
    priv = sigs.generate(SigType.SECP256K1)
    assert len(priv) == 32
    pub = sigs.to_public(SigType.SECP256K1, priv)
    assert len(pub) == 65
    addr = new_secp256k1_address(pub)
    sig = sigs.sign(SigType.SECP256K1, priv, b"hello")
    assert sig.type == SigType.SECP256K1
    assert len(sig.data) == 65
    sigs.verify(sig, addr, b"hello")
    with pytest.raises(ValueError):
        sigs.verify(sig, addr, b"goodbye")