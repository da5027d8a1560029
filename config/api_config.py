"""
API endpoint and authentication configuration.

This is the AUTHORITATIVE source for API configuration.
src/api_client/config.py imports from here — do not maintain parallel copies.

ENVIRONMENT VARIABLES:
    OPENAI_API_KEY   — required for every call-performing operation
    OPENAI_BASE_URL  — optional; overrides DEFAULT_BASE_URL (e.g. a proxy or
                       another OpenAI-compatible server)

Nothing here reads the environment.  Resolution happens on demand in
src/api_client/credentials.py so that importing the package never fails
when no key is configured (mock demonstrations still run).
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Environment variable names
# ---------------------------------------------------------------------------

API_KEY_ENV: str = "OPENAI_API_KEY"
BASE_URL_ENV: str = "OPENAI_BASE_URL"

# ---------------------------------------------------------------------------
# Endpoint
# ---------------------------------------------------------------------------
#
# Requests go to {base_url}/{CHAT_COMPLETIONS_PATH} with
#   Authorization: Bearer <key>
#   Content-Type: application/json

DEFAULT_BASE_URL: str = "https://api.openai.com/v1"
CHAT_COMPLETIONS_PATH: str = "chat/completions"

# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------

DEFAULT_MODEL: str = "gpt-3.5-turbo"
