"""
Generation parameters, retry/backoff schedule, batch pacing and timeouts.

This is the AUTHORITATIVE source for all parameter and execution constants.
src/api_client/config.py imports from here — do not maintain parallel copies.

Design notes:
- TEMPERATURE_RANGE is stricter than the hosted API (which accepts up to 2);
  requests outside [0, 1] are rejected before any network call.
- Backoff waits are BACKOFF_BASE ** attempt seconds, so the default schedule
  is 2 s after attempt 1, 4 s after attempt 2.  No wait follows the final
  attempt.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Default generation parameters
# ---------------------------------------------------------------------------

DEFAULT_PARAMS: dict[str, int | float] = {
    "max_tokens": 1000,   # Output limit for a plain call
    "temperature": 0.7,   # Moderate creativity
}

# Inclusive bounds enforced by the request builder
TEMPERATURE_RANGE: tuple[float, float] = (0.0, 1.0)

# ---------------------------------------------------------------------------
# Retry policy
# ---------------------------------------------------------------------------

# Total attempts per call (initial call + retries)
MAX_RETRIES: int = 3

# Wait before attempt k+1 is BACKOFF_BASE ** k seconds
BACKOFF_BASE: float = 2.0

# ---------------------------------------------------------------------------
# Execution constants
# ---------------------------------------------------------------------------

# Fixed delay between consecutive batch items (rate-limit courtesy)
BATCH_DELAY_SECONDS: float = 1.0

# HTTP request timeout; expiry raises CallTimeoutError (retriable)
REQUEST_TIMEOUT_SECONDS: int = 60

# Batch failure policy: "continue" records per-item errors, "abort" re-raises
BATCH_ERROR_POLICIES: tuple[str, ...] = ("continue", "abort")
DEFAULT_BATCH_ERROR_POLICY: str = "continue"

# ---------------------------------------------------------------------------
# Setup validation
# ---------------------------------------------------------------------------

VALIDATION_PROMPT: str = "Hello"
VALIDATION_MAX_TOKENS: int = 5
