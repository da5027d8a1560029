"""
Exception taxonomy for the chat-completion call core, plus error categorization.

Propagation rules:
- ConfigurationError and InvalidParameterError are raised immediately and
  never retried.
- CallError (and its ResponseFormatError subclass) and CallTimeoutError are
  retried by :func:`retry.with_retry`, then escalated to RetryExhaustedError.
- OperationCancelled always propagates.
"""

from __future__ import annotations


class APIClientError(Exception):
    """Base class for every error raised by the call core."""


class ConfigurationError(APIClientError):
    """Credential missing or invalid (e.g. ``OPENAI_API_KEY`` unset)."""


class InvalidParameterError(APIClientError, ValueError):
    """Malformed request or task parameters, detected before any I/O."""


class CallError(APIClientError):
    """
    Non-success HTTP response, transport failure, or malformed payload.

    Attributes:
        status_code: HTTP status code, or ``None`` when no response arrived
                     or the response was 2xx but unparseable.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    def __str__(self) -> str:
        message = super().__str__()
        if self.status_code is None:
            return message
        return f"HTTP {self.status_code}: {message}"


class ResponseFormatError(CallError):
    """2xx response whose body lacks ``choices[0].message.content``."""


class CallTimeoutError(APIClientError, TimeoutError):
    """The network round trip exceeded its timeout."""


class RetryExhaustedError(APIClientError):
    """
    Every allowed attempt failed.

    Attributes:
        attempts: Number of attempts made.
        last_error: The exception raised by the final attempt.
    """

    def __init__(self, attempts: int, last_error: BaseException) -> None:
        super().__init__(
            f"Operation failed after {attempts} attempt(s): {last_error}"
        )
        self.attempts = attempts
        self.last_error = last_error


class OperationCancelled(APIClientError):
    """A cancellation token fired at a suspension point."""


# ---------------------------------------------------------------------------
# Error categorization
# ---------------------------------------------------------------------------

CONFIGURATION = "configuration"
INVALID_PARAMETER = "invalid_parameter"
TIMEOUT = "timeout"
RATE_LIMIT = "rate_limit"
SERVICE_UNAVAILABLE = "service_unavailable"
INVALID_RESPONSE = "invalid_response"
API_ERROR = "api_error"
CANCELLED = "cancelled"
OTHER = "other"


def categorize_error(error: BaseException) -> str:
    """
    Classify an exception into a short category string for summaries.

    ``RetryExhaustedError`` is categorized by its ``last_error``.

    Args:
        error: Exception raised by a call or a batch item.

    Returns:
        One of the category constants defined in this module.
    """
    if isinstance(error, RetryExhaustedError):
        return categorize_error(error.last_error)

    if isinstance(error, ConfigurationError):
        return CONFIGURATION
    if isinstance(error, InvalidParameterError):
        return INVALID_PARAMETER
    if isinstance(error, OperationCancelled):
        return CANCELLED
    if isinstance(error, (CallTimeoutError, TimeoutError)):
        return TIMEOUT
    if isinstance(error, ResponseFormatError):
        return INVALID_RESPONSE

    if isinstance(error, CallError):
        status = error.status_code
        if status == 429:
            return RATE_LIMIT
        if status in (502, 503, 504):
            return SERVICE_UNAVAILABLE
        if status is not None:
            return API_ERROR

    err = str(error).lower()
    if "timeout" in err or "timed out" in err:
        return TIMEOUT
    if "rate limit" in err:
        return RATE_LIMIT
    if "unavailable" in err:
        return SERVICE_UNAVAILABLE
    return OTHER
