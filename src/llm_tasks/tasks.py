"""
Task templates: summarization, topic extraction, and code documentation.

Each task builds its prompt, validates parameters, and routes one request
through :func:`execute_chat` wrapped in :func:`with_retry`.  The credential is
resolved (or taken from the caller) before any request is built, so a missing
``OPENAI_API_KEY`` fails with ConfigurationError without touching the network.
"""

from __future__ import annotations

from collections.abc import Callable

from src.api_client import (
    CancellationToken,
    ChatRequest,
    ChatResponse,
    Credential,
    InvalidParameterError,
    build_chat_request,
    execute_chat,
    resolve_credential,
    with_retry,
)
from src.api_client.config import DEFAULT_MODEL, MAX_RETRIES
from src.api_client.parser import parse_comma_list

from .config import (
    DEFAULT_NUM_TOPICS,
    DEFAULT_SUMMARY_WORDS,
    DOCUMENT_CODE_MAX_TOKENS,
    DOCUMENT_CODE_PROMPT,
    DOCUMENT_CODE_TEMPERATURE,
    SUMMARY_PROMPT,
    SUMMARY_TEMPERATURE,
    SUMMARY_TOKENS_PER_WORD,
    TOPICS_MAX_TOKENS,
    TOPICS_PROMPT,
    TOPICS_TEMPERATURE,
)

ChatExecutor = Callable[..., ChatResponse]


def _require_text(value: str, name: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise InvalidParameterError(f"{name} must be a non-empty string")


def _require_positive(value: int, name: str) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
        raise InvalidParameterError(f"{name} must be a positive integer, got {value!r}")


def run_prompt(
    prompt: str,
    *,
    max_tokens: int,
    temperature: float,
    model: str = DEFAULT_MODEL,
    credential: Credential | None = None,
    executor: ChatExecutor = execute_chat,
    max_retries: int = MAX_RETRIES,
    cancel_token: CancellationToken | None = None,
    label: str | None = None,
) -> str:
    """
    Send one prompt through the full stack and return the generated text.

    Args:
        prompt: Fully rendered prompt.
        max_tokens: Output-token limit.
        temperature: Sampling temperature.
        model: Model identifier.
        credential: Pre-resolved credential; resolved from the environment
                    when ``None``.
        executor: Single-call executor (``execute_chat`` or a mock).
        max_retries: Total attempts allowed.
        cancel_token: Honoured before each attempt and during backoff waits.
        label: Prefix for retry progress lines.

    Returns:
        The first completion's text.

    Raises:
        ConfigurationError: No credential available.
        InvalidParameterError: Bad generation parameters.
        RetryExhaustedError: Every attempt failed.
    """
    if credential is None:
        credential = resolve_credential()

    request: ChatRequest = build_chat_request(
        prompt, model=model, max_tokens=max_tokens, temperature=temperature
    )

    response = with_retry(
        lambda: executor(request, credential, cancel_token=cancel_token),
        max_retries,
        cancel_token=cancel_token,
        label=label,
    )
    return response.content


def summarize(
    text: str,
    target_words: int = DEFAULT_SUMMARY_WORDS,
    **call_options,
) -> str:
    """
    Summarize ``text`` in approximately ``target_words`` words.

    ``max_tokens`` is ``2 * target_words``.  Keyword options are passed to
    :func:`run_prompt` (``credential``, ``executor``, ``max_retries``,
    ``cancel_token``, ``model``).
    """
    _require_text(text, "text")
    _require_positive(target_words, "target_words")

    prompt = SUMMARY_PROMPT.format(target_words=target_words, text=text)
    return run_prompt(
        prompt,
        max_tokens=SUMMARY_TOKENS_PER_WORD * target_words,
        temperature=SUMMARY_TEMPERATURE,
        label="summarize",
        **call_options,
    )


def extract_topics(
    text: str,
    num_topics: int = DEFAULT_NUM_TOPICS,
    **call_options,
) -> list[str]:
    """
    Extract the main topics of ``text`` as a list of strings.

    The model is asked for a comma-separated list; the answer is split on
    commas, each item trimmed, and empty items dropped.  No cap is applied
    if the model returns more or fewer than ``num_topics`` items.
    """
    _require_text(text, "text")
    _require_positive(num_topics, "num_topics")

    prompt = TOPICS_PROMPT.format(num_topics=num_topics, text=text)
    response = run_prompt(
        prompt,
        max_tokens=TOPICS_MAX_TOKENS,
        temperature=TOPICS_TEMPERATURE,
        label="extract_topics",
        **call_options,
    )
    return parse_comma_list(response)


def document_code(code: str, **call_options) -> str:
    """Ask for structured documentation of ``code``; returns the raw model text."""
    _require_text(code, "code")

    prompt = DOCUMENT_CODE_PROMPT.format(code=code)
    return run_prompt(
        prompt,
        max_tokens=DOCUMENT_CODE_MAX_TOKENS,
        temperature=DOCUMENT_CODE_TEMPERATURE,
        label="document_code",
        **call_options,
    )
