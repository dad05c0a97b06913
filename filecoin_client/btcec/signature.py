"""ECDSA signatures on secp256k1: DER parsing, RFC 6979 signing and key recovery."""

from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass

from filecoin_client.btcec.pubkey import (
    BIT_SIZE,
    BYTE_SIZE,
    H,
    HALF_ORDER,
    N,
    P,
    PublicKey,
    decompress_point,
    point_add,
    scalar_base_mult,
    scalar_mult,
)

# Smallest DER signature: 0x30 <len> 0x02 0x01 <r> 0x02 0x01 <s>.
MIN_SIG_LEN = 8

_INFINITY = (0, 0)


class _NegativeValue(ValueError):
    pass


class _ExcessivelyPadded(ValueError):
    pass


def _int_bytes(value: int) -> bytes:
    """Big-endian magnitude of value with no leading zeros (empty for zero)."""
    value = abs(value)
    return value.to_bytes((value.bit_length() + 7) // 8, "big")


def _canonicalize_int(value: int) -> bytes:
    data = _int_bytes(value) or b"\x00"
    if data[0] & 0x80:
        data = b"\x00" + data
    return data


def _check_canonical_padding(data: bytes) -> None:
    if data[0] & 0x80 == 0x80:
        raise _NegativeValue("value may be interpreted as negative")
    if len(data) > 1 and data[0] == 0x00 and data[1] & 0x80 != 0x80:
        raise _ExcessivelyPadded("value is excessively padded")


def _scalar(private_key: int | bytes | object) -> int:
    """Extract the secret scalar from an int, big-endian bytes or a key object."""
    if isinstance(private_key, int):
        return private_key
    if isinstance(private_key, (bytes, bytearray)):
        return int.from_bytes(private_key, "big")
    return int(getattr(private_key, "d"))


@dataclass(frozen=True)
class Signature:
    """An ECDSA signature as the pair (r, s)."""

    r: int
    s: int

    def serialize(self) -> bytes:
        """Strict DER encoding with S forced into the lower half of the order."""
        sig_s = self.s
        if sig_s > HALF_ORDER:
            sig_s = N - sig_s
        rb = _canonicalize_int(self.r)
        sb = _canonicalize_int(sig_s)
        length = 6 + len(rb) + len(sb)
        return (
            bytes([0x30, (length - 2) & 0xFF, 0x02, len(rb) & 0xFF])
            + rb
            + bytes([0x02, len(sb) & 0xFF])
            + sb
        )

    def verify(self, hash: bytes, pub_key: PublicKey) -> bool:
        """Check the signature of hash against pub_key."""
        r, s = self.r, self.s
        if r <= 0 or s <= 0 or r >= N or s >= N:
            return False
        e = hash_to_int(hash)
        w = pow(s, -1, N)
        u1 = e * w % N
        u2 = r * w % N
        x1, y1 = scalar_base_mult(u1)
        x2, y2 = scalar_mult(pub_key.x, pub_key.y, u2)
        x, y = point_add(x1, y1, x2, y2)
        if (x, y) == _INFINITY:
            return False
        return x % N == r

    def is_equal(self, other: Signature) -> bool:
        """True when r and s both match."""
        return self.r == other.r and self.s == other.s


def _parse_sig(data: bytes, der: bool) -> Signature:
    if len(data) < MIN_SIG_LEN:
        raise ValueError("malformed signature: too short")
    index = 0
    if data[index] != 0x30:
        raise ValueError("malformed signature: no header magic")
    index += 1
    siglen = data[index]
    index += 1

    total = (siglen + 2) & 0xFF
    if total > len(data) or total < MIN_SIG_LEN:
        raise ValueError("malformed signature: bad length")
    data = data[:total]

    if data[index] != 0x02:
        raise ValueError("malformed signature: no 1st int marker")
    index += 1

    r_len = data[index]
    index += 1
    if r_len <= 0 or r_len > len(data) - index - 3:
        raise ValueError("malformed signature: bogus R length")

    r_bytes = data[index:index + r_len]
    if der:
        try:
            _check_canonical_padding(r_bytes)
        except _NegativeValue:
            raise ValueError("signature R is negative") from None
        except _ExcessivelyPadded:
            raise ValueError("signature R is excessively padded") from None
    r = int.from_bytes(r_bytes, "big")
    index += r_len

    if data[index] != 0x02:
        raise ValueError("malformed signature: no 2nd int marker")
    index += 1

    s_len = data[index]
    index += 1
    if s_len <= 0 or s_len > len(data) - index:
        raise ValueError("malformed signature: bogus S length")

    s_bytes = data[index:index + s_len]
    if der:
        try:
            _check_canonical_padding(s_bytes)
        except _NegativeValue:
            raise ValueError("signature S is negative") from None
        except _ExcessivelyPadded:
            raise ValueError("signature S is excessively padded") from None
    s = int.from_bytes(s_bytes, "big")
    index += s_len

    if index != len(data):
        raise ValueError(f"malformed signature: bad final length {index} != {len(data)}")

    if r < 1:
        raise ValueError("signature R isn't 1 or more")
    if s < 1:
        raise ValueError("signature S isn't 1 or more")
    if r >= N:
        raise ValueError("signature R is >= curve.N")
    if s >= N:
        raise ValueError("signature S is >= curve.N")
    return Signature(r, s)


def parse_signature(data: bytes) -> Signature:
    """Parse a BER-encoded signature with basic sanity checks."""
    return _parse_sig(bytes(data), der=False)


def parse_der_signature(data: bytes) -> Signature:
    """Parse a signature, also requiring canonical DER integer encoding."""
    return _parse_sig(bytes(data), der=True)


def hash_to_int(hash: bytes) -> int:
    """Convert a hash to an integer truncated to the bit length of the order."""
    order_bits = N.bit_length()
    order_bytes = (order_bits + 7) // 8
    hash = bytes(hash[:order_bytes])
    value = int.from_bytes(hash, "big")
    excess = len(hash) * 8 - order_bits
    if excess > 0:
        value >>= excess
    return value


def _int2octets(value: int, rolen: int) -> bytes:
    out = _int_bytes(value)
    if len(out) < rolen:
        return out.rjust(rolen, b"\x00")
    if len(out) > rolen:
        return out[len(out) - rolen:]
    return out


def _bits2octets(data: bytes, rolen: int) -> bytes:
    z1 = hash_to_int(data)
    z2 = z1 - N
    return _int2octets(z1 if z2 < 0 else z2, rolen)


def _mac(key: bytes, msg: bytes) -> bytes:
    return hmac.new(key, msg, hashlib.sha256).digest()


def nonce_rfc6979(private_key: int | bytes | object, hash: bytes) -> int:
    """Derive the deterministic nonce k for the key and hash per RFC 6979."""
    x = _scalar(private_key)
    qlen = N.bit_length()
    holen = hashlib.sha256().digest_size
    rolen = (qlen + 7) >> 3
    bx = _int2octets(x, rolen) + _bits2octets(hash, rolen)

    v = b"\x01" * holen
    k = b"\x00" * holen
    k = _mac(k, v + b"\x00" + bx)
    v = _mac(k, v)
    k = _mac(k, v + b"\x01" + bx)
    v = _mac(k, v)

    while True:
        t = b""
        while len(t) * 8 < qlen:
            v = _mac(k, v)
            t += v
        secret = hash_to_int(t)
        if 1 <= secret < N:
            return secret
        k = _mac(k, v + b"\x00")
        v = _mac(k, v)


def sign_rfc6979(private_key: int | bytes | object, hash: bytes) -> Signature:
    """Sign hash deterministically, producing a low-S signature."""
    d = _scalar(private_key)
    k = nonce_rfc6979(d, hash)
    inv = pow(k, -1, N)
    r = scalar_base_mult(k)[0] % N
    if r == 0:
        raise ValueError("calculated R is zero")
    e = hash_to_int(hash)
    s = (d * r + e) * inv % N
    if s > HALF_ORDER:
        s = N - s
    if s == 0:
        raise ValueError("calculated S is zero")
    return Signature(r, s)


def _recover_key(sig: Signature, msg: bytes, iteration: int, do_checks: bool) -> PublicKey:
    rx = N * (iteration // 2) + sig.r
    if rx >= P:
        raise ValueError("calculated Rx is larger than curve P")
    ry = decompress_point(rx, iteration % 2 == 1)

    if do_checks and scalar_mult(rx, ry, N) != _INFINITY:
        raise ValueError("n*R does not equal the point at infinity")

    e = hash_to_int(msg)
    try:
        invr = pow(sig.r, -1, N)
    except ValueError:
        raise ValueError("signature R has no inverse") from None

    invr_s = invr * sig.s % N
    srx, sry = scalar_mult(rx, ry, invr_s)

    e = (-e) % N * invr % N
    gx, gy = scalar_base_mult(e)

    qx, qy = point_add(srx, sry, gx, gy)
    return PublicKey(qx, qy)


def sign_compact(
    private_key: int | bytes | object, hash: bytes, is_compressed_key: bool
) -> bytes:
    """Produce a 65-byte recoverable signature: header byte, R, S."""
    d = _scalar(private_key)
    sig = sign_rfc6979(d, hash)
    px, py = scalar_base_mult(d)
    curvelen = (BIT_SIZE + 7) // 8

    for i in range((H + 1) * 2):
        try:
            pk = _recover_key(sig, hash, i, True)
        except ValueError:
            continue
        if pk.x == px and pk.y == py:
            header = 27 + i + (4 if is_compressed_key else 0)
            return (
                bytes([header])
                + sig.r.to_bytes(curvelen, "big")
                + sig.s.to_bytes(curvelen, "big")
            )

    raise ValueError("no valid solution for pubkey found")


def recover_compact(signature: bytes, hash: bytes) -> tuple[PublicKey, bool]:
    """Recover the public key from a compact signature and report compression."""
    bitlen = BYTE_SIZE
    if len(signature) != 1 + bitlen * 2:
        raise ValueError("invalid compact signature size")

    header = (signature[0] - 27) & 0xFF
    iteration = header & ~4 & 0xFF
    sig = Signature(
        r=int.from_bytes(signature[1:bitlen + 1], "big"),
        s=int.from_bytes(signature[bitlen + 1:], "big"),
    )
    key = _recover_key(sig, hash, iteration, False)
    return key, (header & 4) == 4