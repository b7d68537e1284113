"""SHA-1 (FIPS 180-1) computed from plain integer operations."""

import struct

_MASK32 = 0xFFFFFFFF

_INITIAL_STATE = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476, 0xC3D2E1F0)

_K = (0x5A827999, 0x6ED9EBA1, 0x8F1BBCDC, 0xCA62C1D6)


def _rotl(value: int, amount: int) -> int:
    return ((value << amount) | (value >> (32 - amount))) & _MASK32


def _pad(data: bytes) -> bytes:
    """
    Append 0x80, zero fill to 56 mod 64, then the 64-bit big-endian bit length.
    """
    bit_length = (len(data) * 8) & 0xFFFFFFFFFFFFFFFF
    zeros = (55 - len(data)) % 64
    return data + b"\x80" + b"\x00" * zeros + struct.pack(">Q", bit_length)


def _compress(state: tuple, block: bytes) -> tuple:
    # 1. Message schedule: 16 words from the block, 64 derived
    w = list(struct.unpack(">16L", block))
    for i in range(16, 80):
        w.append(_rotl(w[i - 3] ^ w[i - 8] ^ w[i - 14] ^ w[i - 16], 1))

    a, b, c, d, e = state

    # 2. 80 rounds in four bands of 20
    for i in range(80):
        if i < 20:
            f = (b & c) | (~b & d)
            k = _K[0]
        elif i < 40:
            f = b ^ c ^ d
            k = _K[1]
        elif i < 60:
            f = (b & c) | (b & d) | (c & d)
            k = _K[2]
        else:
            f = b ^ c ^ d
            k = _K[3]

        temp = (_rotl(a, 5) + (f & _MASK32) + e + k + w[i]) & _MASK32
        e = d
        d = c
        c = _rotl(b, 30)
        b = a
        a = temp

    # 3. Fold the working registers back into the running state
    return tuple(
        (x + y) & _MASK32 for x, y in zip(state, (a, b, c, d, e))
    )


def sha1(data: bytes) -> bytes:
    """
    Compute the SHA-1 digest of a byte string.

    Args:
        data: message bytes (bytes, bytearray or memoryview)

    Returns:
        20-byte digest
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError("expected bytes, not %s" % data.__class__.__name__)

    padded = _pad(bytes(data))

    state = _INITIAL_STATE
    for offset in range(0, len(padded), 64):
        state = _compress(state, padded[offset:offset + 64])

    return struct.pack(">5L", *state)


def sha1_hex(data: bytes) -> str:
    """Hex form of sha1(data)."""
    return sha1(data).hex()
