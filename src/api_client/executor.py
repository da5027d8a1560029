"""
Request construction and single-call execution.

A :class:`ChatRequest` is built fresh per call and never mutated.
:func:`execute_chat` performs exactly one HTTP round trip; retries are the
caller's concern (see :mod:`retry`).
"""

from __future__ import annotations

import numbers
import time
from dataclasses import dataclass

import requests

from .cancellation import CancellationToken
from .config import (
    CHAT_COMPLETIONS_PATH,
    DEFAULT_MODEL,
    DEFAULT_PARAMS,
    REQUEST_TIMEOUT_SECONDS,
    TEMPERATURE_RANGE,
)
from .credentials import Credential
from .errors import CallError, CallTimeoutError, InvalidParameterError, ResponseFormatError
from .parser import extract_response_content, extract_usage

# Characters of a failed response body kept in the CallError message
ERROR_BODY_EXCERPT = 300


# ---------------------------------------------------------------------------
# Request / response values
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ChatMessage:
    role: str
    content: str


@dataclass(frozen=True)
class ChatRequest:
    """Model, messages and generation parameters for one completion call."""

    model: str
    messages: tuple[ChatMessage, ...]
    max_tokens: int
    temperature: float

    def to_payload(self) -> dict:
        """
        Return the JSON request body.

        Returns:
            Dict suitable for the ``json=`` argument of ``requests.post()``.
        """
        return {
            "model": self.model,
            "messages": [
                {"role": message.role, "content": message.content}
                for message in self.messages
            ],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }


@dataclass(frozen=True)
class ChatResponse:
    """Generated text plus the metadata the payload carried alongside it."""

    content: str
    model: str | None = None
    prompt_tokens: int | None = None
    completion_tokens: int | None = None
    latency_seconds: float | None = None


# ---------------------------------------------------------------------------
# Request construction
# ---------------------------------------------------------------------------

def build_chat_request(
    prompt: str,
    model: str = DEFAULT_MODEL,
    max_tokens: int = DEFAULT_PARAMS["max_tokens"],
    temperature: float = DEFAULT_PARAMS["temperature"],
) -> ChatRequest:
    """
    Build a chat request with exactly one user-role message.

    Args:
        prompt: Non-empty prompt text.
        model: Model identifier.
        max_tokens: Positive output-token limit.
        temperature: Sampling temperature in ``TEMPERATURE_RANGE``.

    Returns:
        A fully-formed, immutable :class:`ChatRequest`.

    Raises:
        InvalidParameterError: On any constraint violation.
    """
    if not isinstance(prompt, str) or not prompt:
        raise InvalidParameterError("prompt must be a non-empty string")

    if not isinstance(model, str) or not model.strip():
        raise InvalidParameterError("model must be a non-empty string")

    # bool is an int subclass; True is not a token count
    if not isinstance(max_tokens, int) or isinstance(max_tokens, bool) or max_tokens <= 0:
        raise InvalidParameterError(
            f"max_tokens must be a positive integer, got {max_tokens!r}"
        )

    low, high = TEMPERATURE_RANGE
    if (
        not isinstance(temperature, numbers.Real)
        or isinstance(temperature, bool)
        or not low <= temperature <= high
    ):
        raise InvalidParameterError(
            f"temperature must be a number in [{low}, {high}], got {temperature!r}"
        )

    return ChatRequest(
        model=model,
        messages=(ChatMessage(role="user", content=prompt),),
        max_tokens=max_tokens,
        temperature=float(temperature),
    )


def build_request_headers(credential: Credential) -> dict:
    """
    Construct HTTP authentication headers for an API call.

    Args:
        credential: Resolved credential.

    Returns:
        Dict of HTTP header name → value pairs.
    """
    return {
        "Authorization": f"Bearer {credential.api_key}",
        "Content-Type": "application/json",
    }


# ---------------------------------------------------------------------------
# API call execution
# ---------------------------------------------------------------------------

def execute_chat(
    request: ChatRequest,
    credential: Credential,
    timeout: float = REQUEST_TIMEOUT_SECONDS,
    cancel_token: CancellationToken | None = None,
) -> ChatResponse:
    """
    Execute a single chat-completion call and return the generated text.

    Args:
        request: Request built by :func:`build_chat_request`.
        credential: Resolved credential (key + base URL).
        timeout: Seconds before the round trip is abandoned.
        cancel_token: Checked once before the network call.

    Returns:
        :class:`ChatResponse` whose ``content`` is the first choice's text.

    Raises:
        OperationCancelled: Token already cancelled; no request is sent.
        CallTimeoutError: The request exceeded ``timeout``.
        CallError: Transport failure or non-2xx HTTP status.
        ResponseFormatError: 2xx body that is not the expected JSON shape.
    """
    if cancel_token is not None:
        cancel_token.raise_if_cancelled()

    start = time.monotonic()
    try:
        response = requests.post(
            credential.endpoint(CHAT_COMPLETIONS_PATH),
            headers=build_request_headers(credential),
            json=request.to_payload(),
            timeout=timeout,
        )
    except requests.Timeout as exc:
        raise CallTimeoutError(f"Request timed out after {timeout}s") from exc
    except requests.RequestException as exc:
        raise CallError(f"Request failed: {exc}") from exc
    latency = round(time.monotonic() - start, 3)

    try:
        response.raise_for_status()
    except requests.HTTPError as exc:
        body = (response.text or "")[:ERROR_BODY_EXCERPT]
        raise CallError(body or str(exc), status_code=response.status_code) from exc

    try:
        payload = response.json()
    except ValueError as exc:
        raise ResponseFormatError(f"Response body is not valid JSON: {exc}") from exc

    content = extract_response_content(payload)
    prompt_tokens, completion_tokens = extract_usage(payload)
    model = payload.get("model")

    return ChatResponse(
        content=content,
        model=model if isinstance(model, str) else None,
        prompt_tokens=prompt_tokens,
        completion_tokens=completion_tokens,
        latency_seconds=latency,
    )
