"""
Service settings

Read once from the environment at import time.
"""

import logging
import os
from pathlib import Path

# Seed location inside the container
SEED_FILE_PATH = Path(os.getenv("TOTP_SEED_FILE", "/data/seed.txt"))

# TOTP parameters (SHA-1, 30s period, 6 digits by default)
TOTP_DIGITS = int(os.getenv("TOTP_DIGITS", "6"))
TOTP_PERIOD = int(os.getenv("TOTP_PERIOD", "30"))
TOTP_WINDOW = int(os.getenv("TOTP_VALID_WINDOW", "1"))
TOTP_ISSUER = os.getenv("TOTP_ISSUER", "TOTP")

# Logging
_level_name = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, _level_name, None)
if isinstance(LOG_LEVEL, bool) or not isinstance(LOG_LEVEL, int):
    raise ValueError(f"Invalid LOG_LEVEL: {_level_name}")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
