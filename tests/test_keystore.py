import pytest

from filecoin_client.chaintypes.keystore import KeyInfo, KeyType, parse_key_type
from filecoin_client.sigs import SigType


@pytest.mark.parametrize(
    "name, expected",
    [
        ("bls", KeyType.BLS),
        ("secp256k1", KeyType.SECP256K1),
        ("secp256k1-ledger", KeyType.SECP256K1_LEDGER),
    ],
)
def test_parse_known_names(name, expected):
    assert parse_key_type(name) is expected


def test_parse_unknown_name_is_kept():
    assert parse_key_type("custom") == "custom"


def test_parse_sig_type_numbers():
    assert parse_key_type(int(SigType.BLS)) is KeyType.BLS
    assert parse_key_type(int(SigType.SECP256K1)) is KeyType.SECP256K1


def test_parse_raw_json_string():
    assert parse_key_type(b'"secp256k1-ledger"') is KeyType.SECP256K1_LEDGER


def test_parse_raw_json_number():
    assert parse_key_type(str(int(SigType.BLS)).encode()) is KeyType.BLS


def test_parse_unknown_sig_type():
    with pytest.raises(ValueError, match="unknown sigtype: 3"):
        parse_key_type(3)


@pytest.mark.parametrize("value", [256, -1, b"true", b"1.5", b"{not json"])
def test_parse_rejects_other_values(value):
    with pytest.raises(ValueError, match="could not unmarshal KeyType"):
        parse_key_type(value)


def test_key_info_holds_parsed_type():
    info = KeyInfo(parse_key_type("bls"), b"\x01\x02")
    assert info.type == "bls"
    assert info.private_key == b"\x01\x02"