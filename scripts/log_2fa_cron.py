#!/usr/bin/env python3

import datetime
import logging

import pytz

import config
from totp_utils import generate_totp_code

logger = logging.getLogger("log_2fa_cron")


def main():
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    seed_path = config.SEED_FILE_PATH

    # 1. Read seed
    if not seed_path.exists():
        logger.error("Seed file not found at %s. Cannot generate 2FA code.", seed_path)
        return

    try:
        seed = seed_path.read_text().strip()
    except OSError as e:
        logger.error("Error reading seed: %s", e)
        return

    # 2. Generate TOTP
    try:
        code = generate_totp_code(seed, digits=config.TOTP_DIGITS, period=config.TOTP_PERIOD)
    except ValueError as e:
        logger.error("TOTP generation error: %s", e)
        return

    # 3. UTC timestamp
    timestamp = datetime.datetime.now(pytz.utc).strftime("%Y-%m-%d %H:%M:%S")

    # 4. Output
    print(f"{timestamp} - 2FA Code: {code}")


if __name__ == "__main__":
    main()
