import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

import config
from base32 import is_valid_secret
from totp_utils import TOTP, TOTPConfigError, generate_secret, now_ms, seed_to_secret


logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
logger = logging.getLogger(__name__)

app = FastAPI()


# ---------- Helpers for the stored seed ----------

def load_seed() -> str:
    seed_path = config.SEED_FILE_PATH
    if not seed_path.exists():
        raise HTTPException(status_code=500, detail=f"Seed file not found at {seed_path}")

    return seed_path.read_text().strip()


def make_totp_from_seed(seed: str) -> TOTP:
    """
    Convert the stored seed (hex or base32) into a TOTP instance.
    We always use the same logic for generate and verify.
    """
    secret = seed_to_secret(seed)
    if not is_valid_secret(secret):
        raise HTTPException(status_code=500, detail="Stored seed is not a valid hex or base32 secret")

    return make_totp(secret)


def make_totp(secret: str) -> TOTP:
    try:
        return TOTP(secret, digits=config.TOTP_DIGITS, period=config.TOTP_PERIOD)
    except TOTPConfigError as e:
        raise HTTPException(status_code=500, detail=f"Invalid TOTP configuration: {e}")


# ---------- Request models ----------

class VerifyRequest(BaseModel):
    code: str
    window: Optional[int] = None


class SecretRequest(BaseModel):
    label: str
    issuer: Optional[str] = None
    length: int = 32


# ---------- Health check ----------

@app.get("/")
def health_check():
    return {"status": "ok"}


# ---------- API endpoints ----------

@app.get("/generate-2fa")
def generate_2fa():
    """
    Generate current TOTP code from persisted seed.
    Returns the code and how many seconds it remains valid.
    """
    totp = make_totp_from_seed(load_seed())

    # One clock reading so the code and its countdown share a period
    timestamp_ms = now_ms()
    code = totp.generate(timestamp_ms)
    seconds_remaining = totp.get_remaining_seconds(timestamp_ms)

    return {"code": code, "valid_for": seconds_remaining}


@app.post("/verify-2fa")
def verify_2fa(payload: VerifyRequest):
    """
    Verify a provided TOTP code against the same seed and parameters
    used by /generate-2fa.
    """
    window = config.TOTP_WINDOW if payload.window is None else payload.window
    if window < 0:
        raise HTTPException(status_code=400, detail="window must be non-negative")

    totp = make_totp_from_seed(load_seed())
    is_valid = totp.verify(payload.code, window=window)
    if not is_valid:
        logger.info("Rejected 2FA code")

    return {"valid": is_valid}


@app.post("/generate-secret")
def generate_secret_endpoint(payload: SecretRequest):
    """
    Create a fresh secret and its otpauth:// URI for an authenticator app.
    Nothing is stored; the caller decides where the secret goes.
    """
    if payload.length <= 0:
        raise HTTPException(status_code=400, detail="length must be positive")

    secret = generate_secret(payload.length)
    totp = make_totp(secret)

    return {
        "secret": secret,
        "uri": totp.provisioning_uri(payload.label, payload.issuer or config.TOTP_ISSUER),
    }
