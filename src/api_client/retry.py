"""
Retry policy, exponential backoff, and the generic retry wrapper.

The backoff schedule is ``backoff_base ** attempt`` seconds after a failed
attempt, with the defaults giving 2 s after attempt 1 and 4 s after attempt 2.
The final attempt is never followed by a wait; its failure is escalated to
:class:`RetryExhaustedError` instead of being swallowed.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from .cancellation import CancellationToken, wait
from .config import BACKOFF_BASE, MAX_RETRIES
from .errors import (
    CallError,
    CallTimeoutError,
    InvalidParameterError,
    RetryExhaustedError,
    categorize_error,
)

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Policy
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RetryPolicy:
    """
    Governs re-invocation of a single fallible operation.

    Attributes:
        max_attempts: Total attempts allowed (initial call + retries).
        backoff_base: Base of the exponential wait; must be >= 1.
        retry_on: Exception types that trigger another attempt.  Anything
                  else propagates immediately.
    """

    max_attempts: int = MAX_RETRIES
    backoff_base: float = BACKOFF_BASE
    retry_on: tuple[type[BaseException], ...] = (CallError, CallTimeoutError)

    def __post_init__(self) -> None:
        if (
            not isinstance(self.max_attempts, int)
            or isinstance(self.max_attempts, bool)
            or self.max_attempts < 1
        ):
            raise InvalidParameterError(
                f"max_attempts must be a positive integer, got {self.max_attempts!r}"
            )
        if self.backoff_base < 1:
            raise InvalidParameterError(
                f"backoff_base must be >= 1, got {self.backoff_base!r}"
            )


# ---------------------------------------------------------------------------
# Backoff helpers
# ---------------------------------------------------------------------------

def exponential_backoff(attempt: int, base: float = BACKOFF_BASE) -> float:
    """
    Return the wait time in seconds after a given failed attempt.

    Args:
        attempt: 1-based attempt number that just failed.
        base: Exponential base.

    Returns:
        ``base ** attempt`` seconds.
    """
    return base ** attempt


def should_retry(error: BaseException, attempt: int, policy: RetryPolicy) -> bool:
    """
    Decide whether another attempt is allowed after ``error``.

    Args:
        error: Exception raised by the attempt.
        attempt: The 1-based attempt number that just failed.
        policy: Active retry policy.

    Returns:
        ``True`` if the call should be retried.
    """
    if attempt >= policy.max_attempts:
        return False
    return isinstance(error, policy.retry_on)


# ---------------------------------------------------------------------------
# Main retry wrapper
# ---------------------------------------------------------------------------

def with_retry(
    operation: Callable[[], T],
    max_retries: int = MAX_RETRIES,
    *,
    policy: RetryPolicy | None = None,
    cancel_token: CancellationToken | None = None,
    label: str | None = None,
) -> T:
    """
    Invoke ``operation`` until it succeeds or the attempt bound is reached.

    Only exceptions in ``policy.retry_on`` (``CallError`` and
    ``CallTimeoutError`` by default) are retried.  Any other exception,
    including a generic ``Exception`` from an arbitrary callable, is raised
    from the first attempt; widen ``retry_on`` to retry it.

    Args:
        operation: Zero-argument callable performing one attempt.
        max_retries: Total attempts allowed; ignored when ``policy`` is given.
        policy: Full retry policy (attempts, backoff base, retriable types).
        cancel_token: Checked before each attempt and during each wait.
        label: Optional prefix for progress lines.

    Returns:
        Whatever ``operation`` returns on its first successful attempt.

    Raises:
        RetryExhaustedError: The final attempt failed with a retriable error.
            ``last_error`` holds that error, which is also chained as
            ``__cause__``.
        Exception: Non-retriable errors from ``operation`` propagate unchanged.
        OperationCancelled: ``cancel_token`` fired.
    """
    if policy is None:
        policy = RetryPolicy(max_attempts=max_retries)

    prefix = f"{label}: " if label else ""
    attempt = 1

    while True:
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()

        try:
            return operation()
        except policy.retry_on as exc:
            print(
                f"  {prefix}Attempt {attempt}/{policy.max_attempts} failed "
                f"[{categorize_error(exc)}]: {str(exc)[:120]}"
            )
            if not should_retry(exc, attempt, policy):
                raise RetryExhaustedError(attempt, exc) from exc

            delay = exponential_backoff(attempt, policy.backoff_base)
            print(f"  {prefix}Retrying in {delay:g}s...")
            wait(delay, cancel_token)

        attempt += 1
