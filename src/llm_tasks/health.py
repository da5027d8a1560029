"""Yes/no health check for the API setup."""

from __future__ import annotations

from src.api_client import (
    Credential,
    build_chat_request,
    categorize_error,
    execute_chat,
    resolve_credential,
)
from src.api_client.config import VALIDATION_MAX_TOKENS, VALIDATION_PROMPT

from .tasks import ChatExecutor


def validate_setup(
    *,
    credential: Credential | None = None,
    executor: ChatExecutor = execute_chat,
) -> bool:
    """
    Send a minimal test call and report whether it succeeded.

    This is the one intentionally silent path: every failure is printed,
    never raised.  No retries are attempted.

    Args:
        credential: Pre-resolved credential; resolved from the environment
                    when ``None``.
        executor: Single-call executor (``execute_chat`` or a mock).

    Returns:
        ``True`` if the call returned text, ``False`` otherwise.
    """
    try:
        if credential is None:
            credential = resolve_credential()
        request = build_chat_request(VALIDATION_PROMPT, max_tokens=VALIDATION_MAX_TOKENS)
        response = executor(request, credential)
    except Exception as exc:
        print(f"API setup failed [{categorize_error(exc)}]: {exc}")
        return False

    print("API setup successful!")
    print(f"Test response: {response.content}")
    return True
