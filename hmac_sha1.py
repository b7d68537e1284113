"""HMAC (RFC 2104) over the local SHA-1 implementation."""

from sha1 import sha1

BLOCK_SIZE = 64
DIGEST_SIZE = 20

_TRANS_5C = bytes((x ^ 0x5C) for x in range(256))
_TRANS_36 = bytes((x ^ 0x36) for x in range(256))


def _prepare_key(key: bytes) -> bytes:
    # Hash long keys, zero-pad short ones to exactly one block
    if len(key) > BLOCK_SIZE:
        key = sha1(key)
    return key + bytes(BLOCK_SIZE - len(key))


def hmac_sha1(key: bytes, msg: bytes) -> bytes:
    """
    Authenticate msg under key with HMAC-SHA1.

    Args:
        key: secret key of any length
        msg: message bytes

    Returns:
        20-byte authentication tag
    """
    key = _prepare_key(bytes(key))

    inner = sha1(key.translate(_TRANS_36) + bytes(msg))
    return sha1(key.translate(_TRANS_5C) + inner)
