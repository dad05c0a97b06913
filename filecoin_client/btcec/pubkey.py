"""Public keys and point arithmetic on the secp256k1 Koblitz curve."""

from __future__ import annotations

from dataclasses import dataclass

# Curve parameters for secp256k1: y^2 = x^3 + 7 over GF(P).
P = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F
N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
B = 7
GX = 0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798
GY = 0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8
H = 1
BIT_SIZE = 256
BYTE_SIZE = BIT_SIZE // 8
HALF_ORDER = N >> 1

PUBKEY_BYTES_LEN_COMPRESSED = 33
PUBKEY_BYTES_LEN_UNCOMPRESSED = 65
PUBKEY_BYTES_LEN_HYBRID = 65

PUBKEY_COMPRESSED = 0x02
PUBKEY_UNCOMPRESSED = 0x04
PUBKEY_HYBRID = 0x06

# The point at infinity is represented as (0, 0).
_INFINITY = (0, 0)


def _to_int(k: int | bytes) -> int:
    if isinstance(k, (bytes, bytearray)):
        return int.from_bytes(k, "big")
    return k


def is_on_curve(x: int, y: int) -> bool:
    """Report whether (x, y) satisfies the curve equation."""
    return (y * y - x * x * x - B) % P == 0


def point_add(x1: int, y1: int, x2: int, y2: int) -> tuple[int, int]:
    """Add two affine points; (0, 0) stands for the point at infinity."""
    if (x1, y1) == _INFINITY:
        return x2, y2
    if (x2, y2) == _INFINITY:
        return x1, y1
    if x1 % P == x2 % P:
        if (y1 + y2) % P == 0:
            return _INFINITY
        slope = (3 * x1 * x1) * pow(2 * y1, -1, P) % P
    else:
        slope = (y2 - y1) * pow(x2 - x1, -1, P) % P
    x3 = (slope * slope - x1 - x2) % P
    y3 = (slope * (x1 - x3) - y1) % P
    return x3, y3


def scalar_mult(x: int, y: int, k: int | bytes) -> tuple[int, int]:
    """Multiply the point (x, y) by k, given as an integer or big-endian bytes."""
    scalar = _to_int(k)
    result = _INFINITY
    addend = (x, y)
    while scalar > 0:
        if scalar & 1:
            result = point_add(*result, *addend)
        addend = point_add(*addend, *addend)
        scalar >>= 1
    return result


def scalar_base_mult(k: int | bytes) -> tuple[int, int]:
    """Multiply the generator point by k."""
    return scalar_mult(GX, GY, k)


def decompress_point(x: int, ybit: bool) -> int:
    """Return the y coordinate for x whose parity matches ybit."""
    x %= P
    x3 = (x * x * x + B) % P
    y = pow(x3, (P + 1) // 4, P)
    if ybit != bool(y & 1):
        y = (-y) % P
    if (y * y) % P != x3:
        raise ValueError("invalid square root")
    if ybit != bool(y & 1):
        raise ValueError("ybit doesn't match oddness")
    return y


@dataclass(frozen=True)
class PublicKey:
    """A point on secp256k1 that serializes in the usual SEC formats."""

    x: int
    y: int

    def serialize_uncompressed(self) -> bytes:
        """65 bytes: 0x04, X, Y."""
        return (
            bytes([PUBKEY_UNCOMPRESSED])
            + self.x.to_bytes(32, "big")
            + self.y.to_bytes(32, "big")
        )

    def serialize_compressed(self) -> bytes:
        """33 bytes: 0x02 or 0x03 by parity of Y, then X."""
        prefix = PUBKEY_COMPRESSED | (self.y & 1)
        return bytes([prefix]) + self.x.to_bytes(32, "big")

    def serialize_hybrid(self) -> bytes:
        """65 bytes: 0x06 or 0x07 by parity of Y, then X and Y."""
        prefix = PUBKEY_HYBRID | (self.y & 1)
        return bytes([prefix]) + self.x.to_bytes(32, "big") + self.y.to_bytes(32, "big")

    def is_equal(self, other: PublicKey) -> bool:
        """True when both coordinates match."""
        return self.x == other.x and self.y == other.y


def is_compressed_pub_key(data: bytes) -> bool:
    """True when data has the length and prefix of a compressed key."""
    return (
        len(data) == PUBKEY_BYTES_LEN_COMPRESSED
        and (data[0] & ~0x01) == PUBKEY_COMPRESSED
    )


def parse_pub_key(data: bytes) -> PublicKey:
    """Parse a compressed, uncompressed or hybrid public key and validate it."""
    if not data:
        raise ValueError("pubkey string is empty")

    ybit = bool(data[0] & 0x01)
    fmt = data[0] & ~0x01

    if len(data) == PUBKEY_BYTES_LEN_UNCOMPRESSED:
        if fmt not in (PUBKEY_UNCOMPRESSED, PUBKEY_HYBRID):
            raise ValueError(f"invalid magic in pubkey str: {data[0]}")
        x = int.from_bytes(data[1:33], "big")
        y = int.from_bytes(data[33:], "big")
        if fmt == PUBKEY_HYBRID and ybit != bool(y & 1):
            raise ValueError("ybit doesn't match oddness")
        if x >= P:
            raise ValueError("pubkey X parameter is >= to P")
        if y >= P:
            raise ValueError("pubkey Y parameter is >= to P")
        if not is_on_curve(x, y):
            raise ValueError("pubkey isn't on secp256k1 curve")
        return PublicKey(x, y)

    if len(data) == PUBKEY_BYTES_LEN_COMPRESSED:
        if fmt != PUBKEY_COMPRESSED:
            raise ValueError(f"invalid magic in compressed pubkey string: {data[0]}")
        x = int.from_bytes(data[1:33], "big")
        return PublicKey(x, decompress_point(x, ybit))

    raise ValueError(f"invalid pub key length {len(data)}")