"""Configuration constants and .env loading.

WHY: The bot needs Slack credentials, a port, and the locations of its two
JSON files. Keeping them in one place makes deployment overrides obvious.

HOW: python-dotenv loads the .env file on import. Constants are module
level and read from the environment with defaults. load_slack_credentials()
gives a clear error when a credential is missing.

RULES:
- Credentials are never hardcoded and have no defaults
- Missing credentials are a fatal startup error (raised here, exit in main)
- All other values can be overridden via environment variables
"""

from __future__ import annotations

import os
from typing import Tuple

from dotenv import load_dotenv

load_dotenv()

PORT = int(os.getenv("PORT", "3000"))
HOST = os.getenv("HOST", "0.0.0.0")

DATA_FILE = os.getenv("OFFICEORBIT_DATA_FILE", "data.json")
MANAGERS_FILE = os.getenv("OFFICEORBIT_MANAGERS_FILE", "managers.json")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def load_slack_credentials() -> Tuple[str, str]:
    """Return (signing_secret, bot_token) from the environment.

    RULES:
    - Raises ValueError naming every missing variable
    """
    signing_secret = os.getenv("SLACK_SIGNING_SECRET", "").strip()
    bot_token = os.getenv("SLACK_BOT_TOKEN", "").strip()

    missing = []
    if not signing_secret:
        missing.append("SLACK_SIGNING_SECRET")
    if not bot_token:
        missing.append("SLACK_BOT_TOKEN")
    if missing:
        raise ValueError(
            "Missing {} environment variable(s). "
            "Add them to the .env file or the process environment.".format(
                " and ".join(missing)
            )
        )
    return signing_secret, bot_token
