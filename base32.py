"""RFC 4648 Base32 helpers for TOTP secrets."""

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"

_LOOKUP = {char: index for index, char in enumerate(ALPHABET)}


def b32decode(encoded: str) -> bytes:
    """
    Decode a Base32 secret into raw key bytes.

    Decoding is case-insensitive. Trailing '=' padding is stripped and any
    character outside the alphabet (spaces, dashes, stray '=') is skipped
    rather than rejected. Leftover bits shorter than a byte are dropped.

    Args:
        encoded: Base32 text, padded or unpadded

    Returns:
        Decoded bytes (possibly empty)
    """
    # 1. Normalise: drop padding, uppercase
    cleaned = encoded.rstrip("=").upper()

    # 2. Keep only alphabet characters
    values = [_LOOKUP[char] for char in cleaned if char in _LOOKUP]

    # 3. Accumulate 5-bit groups, emit whole bytes
    decoded = bytearray()
    buffer = 0
    bits = 0
    for value in values:
        buffer = (buffer << 5) | value
        bits += 5
        if bits >= 8:
            bits -= 8
            decoded.append((buffer >> bits) & 0xFF)
            buffer &= (1 << bits) - 1

    return bytes(decoded)


def b32encode(data: bytes, padding: bool = True) -> str:
    """
    Encode bytes as Base32.

    Args:
        data: bytes to encode
        padding: append '=' up to a multiple of 8 characters

    Returns:
        Base32 string
    """
    encoded = []
    buffer = 0
    bits = 0
    for byte in bytes(data):
        buffer = (buffer << 8) | byte
        bits += 8
        while bits >= 5:
            bits -= 5
            encoded.append(ALPHABET[(buffer >> bits) & 0x1F])
        buffer &= (1 << bits) - 1

    if bits:
        encoded.append(ALPHABET[(buffer << (5 - bits)) & 0x1F])

    if padding:
        encoded.append("=" * (-len(encoded) % 8))

    return "".join(encoded)


def is_valid_secret(secret: str) -> bool:
    """
    Strictly check a Base32 secret.

    Spaces are ignored and trailing padding is allowed; any other character
    outside the alphabet makes the secret invalid, as does a secret that
    decodes to no bytes.
    """
    if not isinstance(secret, str):
        return False

    cleaned = secret.replace(" ", "").rstrip("=").upper()
    if not cleaned or any(char not in _LOOKUP for char in cleaned):
        return False

    return len(b32decode(cleaned)) > 0
