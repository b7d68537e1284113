import logging
import secrets
import string
import struct
import time
from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qs, quote, urlencode, urlparse

from base32 import ALPHABET, b32decode, b32encode
from hmac_sha1 import hmac_sha1

logger = logging.getLogger(__name__)

DEFAULT_DIGITS = 6
DEFAULT_PERIOD = 30
DEFAULT_ALGORITHM = "SHA-1"

# The truncated value is 31 bits wide, so 10 digits is the most it can fill
MAX_DIGITS = 10


class TOTPConfigError(ValueError):
    """Raised when a TOTP is constructed with unusable parameters."""


def _is_sha1(algorithm: str) -> bool:
    return algorithm.replace("-", "").upper() == "SHA1"


def int_to_bytes(value: int) -> bytes:
    """
    Serialize a counter as an 8-byte big-endian unsigned integer.

    Raises:
        ValueError: if value is negative or does not fit in 64 bits
    """
    if value < 0 or value > 0xFFFFFFFFFFFFFFFF:
        raise ValueError(f"Counter out of range: {value}")
    return struct.pack(">Q", value)


def counter_at(timestamp_ms: float, period: int = DEFAULT_PERIOD) -> int:
    """Time step containing timestamp_ms: floor(timestamp_ms / 1000 / period)."""
    return int(timestamp_ms // 1000 // period)


def now_ms() -> int:
    """Current wall-clock time in milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class TOTP:
    """
    A shared secret paired with its TOTP parameters.

    Instances are immutable; every method is a pure function of its
    arguments and the fields below, so one instance can be shared freely.

    Only SHA-1 is implemented. `algorithm` is carried as metadata (it ends up
    in the provisioning URI) and never selects a different digest.
    """

    secret: str
    digits: int = DEFAULT_DIGITS
    period: int = DEFAULT_PERIOD
    algorithm: str = DEFAULT_ALGORITHM

    def __post_init__(self):
        if not isinstance(self.secret, str):
            raise TOTPConfigError("secret must be a Base32 string")
        if isinstance(self.digits, bool) or not isinstance(self.digits, int):
            raise TOTPConfigError(f"digits must be an integer, got {self.digits!r}")
        if not 1 <= self.digits <= MAX_DIGITS:
            raise TOTPConfigError(f"digits must be between 1 and {MAX_DIGITS}, got {self.digits}")
        if isinstance(self.period, bool) or not isinstance(self.period, int):
            raise TOTPConfigError(f"period must be an integer, got {self.period!r}")
        if self.period <= 0:
            raise TOTPConfigError(f"period must be positive, got {self.period}")
        if not isinstance(self.algorithm, str):
            raise TOTPConfigError("algorithm must be a string")
        if not _is_sha1(self.algorithm):
            logger.warning("Algorithm %s is not implemented, codes use SHA-1", self.algorithm)

    def generate_hotp(self, counter: int) -> str:
        """
        Generate the HOTP code for an explicit counter (RFC 4226).

        Args:
            counter: non-negative counter value

        Returns:
            Zero-padded decimal code of length `digits`
        """
        # 1. Key and message
        key = b32decode(self.secret)
        mac = hmac_sha1(key, int_to_bytes(counter))

        # 2. Dynamic truncation
        offset = mac[-1] & 0x0F
        binary = struct.unpack(">L", mac[offset:offset + 4])[0] & 0x7FFFFFFF

        # 3. Reduce and pad
        return str(binary % (10 ** self.digits)).zfill(self.digits)

    def generate(self, timestamp_ms: Optional[float] = None) -> str:
        """Generate the code for the period containing timestamp_ms (default: now)."""
        if timestamp_ms is None:
            timestamp_ms = now_ms()
        return self.generate_hotp(counter_at(timestamp_ms, self.period))

    def verify(self, token: str, window: int = 1, timestamp_ms: Optional[float] = None) -> bool:
        """
        Verify a code with time window tolerance

        Args:
            token: code to check, compared as an exact string
            window: number of periods before/after to accept (default 1 = ±30s)
            timestamp_ms: reference time in milliseconds (default: now)

        Returns:
            True if the token matches any counter in the window, False otherwise
        """
        if window < 0:
            raise ValueError(f"window must be non-negative, got {window}")
        if timestamp_ms is None:
            timestamp_ms = now_ms()

        current = counter_at(timestamp_ms, self.period)
        for offset in range(-window, window + 1):
            counter = current + offset
            if counter < 0:
                continue
            if self.generate_hotp(counter) == token:
                logger.debug("Token matched at offset %d", offset)
                return True

        logger.debug("Token did not match within window %d", window)
        return False

    def get_remaining_seconds(self, timestamp_ms: Optional[float] = None) -> int:
        """Seconds until the code changes, in the range [1, period]."""
        if timestamp_ms is None:
            timestamp_ms = now_ms()
        elapsed = int(timestamp_ms // 1000) % self.period
        return self.period - elapsed

    def provisioning_uri(self, label: str, issuer: Optional[str] = None) -> str:
        """
        Build the otpauth:// URI an authenticator app imports.

        Args:
            label: account name shown in the app
            issuer: service name (default "TOTP")

        Returns:
            otpauth://totp/<label>?secret=...&issuer=...&algorithm=...&digits=...&period=...
        """
        params = {
            "secret": self.secret,
            "issuer": issuer or "TOTP",
            "algorithm": self.algorithm,
            "digits": self.digits,
            "period": self.period,
        }
        return f"otpauth://totp/{quote(label, safe='')}?{urlencode(params)}"

    @classmethod
    def from_uri(cls, uri: str) -> "TOTP":
        """
        Parse an otpauth://totp/ URI back into a TOTP.

        The label and issuer are not part of the record and are dropped.

        Raises:
            ValueError: wrong scheme or type, missing secret, bad numbers
        """
        parsed = urlparse(uri)
        if parsed.scheme != "otpauth" or parsed.netloc != "totp":
            raise ValueError("Invalid scheme or type (expected otpauth://totp/)")

        query = {k: v[0] for k, v in parse_qs(parsed.query).items()}
        secret = query.get("secret")
        if not secret:
            raise ValueError("Missing secret")

        return cls(
            secret=secret.replace(" ", "").upper(),
            digits=int(query.get("digits", DEFAULT_DIGITS)),
            period=int(query.get("period", DEFAULT_PERIOD)),
            algorithm=query.get("algorithm", DEFAULT_ALGORITHM),
        )


def generate_secret(length: int = 32) -> str:
    """
    Generate a random Base32 secret for provisioning.

    Characters are drawn uniformly from the Base32 alphabet using the
    `secrets` CSPRNG.
    """
    if length <= 0:
        raise ValueError(f"length must be positive, got {length}")
    return "".join(secrets.choice(ALPHABET) for _ in range(length))


def _hex_seed_to_base32(hex_seed: str) -> str:
    """
    Helper: convert hex seed to an unpadded base32 string
    """
    return b32encode(bytes.fromhex(hex_seed), padding=False)


def seed_to_secret(seed: str) -> str:
    """
    Turn a stored seed into a Base32 secret.

    A 64-character hex seed is converted; anything else is treated as a
    Base32 secret and normalised (spaces removed, uppercased).
    """
    seed = seed.strip()
    if len(seed) == 64 and all(c in string.hexdigits for c in seed):
        return _hex_seed_to_base32(seed)
    return seed.replace(" ", "").upper()


def generate_totp_code(seed: str, digits: int = DEFAULT_DIGITS, period: int = DEFAULT_PERIOD) -> str:
    """
    Generate current TOTP code from a stored seed

    Args:
        seed: 64-character hex string or Base32 secret

    Returns:
        TOTP code as string
    """
    return TOTP(seed_to_secret(seed), digits=digits, period=period).generate()


def verify_totp_code(seed: str, code: str, valid_window: int = 1,
                     digits: int = DEFAULT_DIGITS, period: int = DEFAULT_PERIOD) -> bool:
    """
    Verify TOTP code with time window tolerance

    Args:
        seed: 64-character hex string or Base32 secret
        code: code to verify
        valid_window: number of periods before/after to accept (default 1 = ±30s)

    Returns:
        True if code is valid, False otherwise
    """
    totp = TOTP(seed_to_secret(seed), digits=digits, period=period)
    return totp.verify(code, window=valid_window)
