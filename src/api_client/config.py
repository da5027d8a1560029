"""
API configuration and execution constants used by the call core.

Values are defined once in the root ``config`` package and re-exported here
so modules inside ``src/api_client`` import from a single local place.
"""

from config.api_config import (
    API_KEY_ENV,
    BASE_URL_ENV,
    CHAT_COMPLETIONS_PATH,
    DEFAULT_BASE_URL,
    DEFAULT_MODEL,
)
from config.model_params import (
    BACKOFF_BASE,
    BATCH_DELAY_SECONDS,
    BATCH_ERROR_POLICIES,
    DEFAULT_BATCH_ERROR_POLICY,
    DEFAULT_PARAMS,
    MAX_RETRIES,
    REQUEST_TIMEOUT_SECONDS,
    TEMPERATURE_RANGE,
    VALIDATION_MAX_TOKENS,
    VALIDATION_PROMPT,
)

__all__ = [
    "API_KEY_ENV",
    "BASE_URL_ENV",
    "CHAT_COMPLETIONS_PATH",
    "DEFAULT_BASE_URL",
    "DEFAULT_MODEL",
    "BACKOFF_BASE",
    "BATCH_DELAY_SECONDS",
    "BATCH_ERROR_POLICIES",
    "DEFAULT_BATCH_ERROR_POLICY",
    "DEFAULT_PARAMS",
    "MAX_RETRIES",
    "REQUEST_TIMEOUT_SECONDS",
    "TEMPERATURE_RANGE",
    "VALIDATION_MAX_TOKENS",
    "VALIDATION_PROMPT",
]
