"""Configuration constants and .env loading.

WHY: The uploader runs inside CI/release pipelines where the Slack token
and endpoint overrides arrive through the environment. Keeping every
configurable value here means the rest of the package never reads
os.environ directly.

HOW: python-dotenv loads the .env file on import. Defaults are module
constants that can be overridden via environment variables.
load_api_token() gives a clear error when the token is missing.

RULES:
- The token is loaded from the environment (or .env), never hardcoded
- SLACK_API_BASE_URL has no trailing slash
- SLACK_HTTP_TIMEOUT is read when a client is built, not on import
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the directory the pipeline runs in
load_dotenv()

# ---------------------------------------------------------------------------
# API configuration defaults
# ---------------------------------------------------------------------------

SLACK_API_BASE_URL = os.getenv("SLACK_API_BASE_URL", "https://slack.com/api").rstrip("/")
DEFAULT_HTTP_TIMEOUT_S = 60.0

GET_UPLOAD_URL_METHOD = "files.getUploadURLExternal"
COMPLETE_UPLOAD_METHOD = "files.completeUploadExternal"


def load_api_token() -> str:
    """Load the Slack API token from the environment.

    WHY: Every Slack call needs a bearer token. Pipelines usually inject
    it as a secret environment variable rather than a command-line flag.

    HOW: Reads SLACK_API_TOKEN from os.environ (populated by python-dotenv).

    RULES:
    - Raises ValueError if the token is missing or blank
    - Never returns a default/placeholder value
    """
    token = os.getenv("SLACK_API_TOKEN", "").strip()
    if not token:
        raise ValueError(
            "Slack API token not configured. "
            "Pass --slack-api-token or set SLACK_API_TOKEN."
        )
    return token


def load_http_timeout() -> float:
    """Read the HTTP timeout in seconds from SLACK_HTTP_TIMEOUT.

    RULES:
    - Unset or blank -> DEFAULT_HTTP_TIMEOUT_S
    - Not a positive number -> ValueError naming the bad value
    """
    raw = os.getenv("SLACK_HTTP_TIMEOUT", "").strip()
    if not raw:
        return DEFAULT_HTTP_TIMEOUT_S
    try:
        timeout = float(raw)
    except ValueError:
        timeout = 0.0
    if timeout <= 0:
        raise ValueError(
            "SLACK_HTTP_TIMEOUT must be a positive number of seconds, got {!r}".format(raw)
        )
    return timeout
