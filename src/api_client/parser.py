"""
Response parsing and plain-text post-processing.

No I/O occurs here; all functions are pure transformations of strings/dicts
to support easy unit testing.
"""

from __future__ import annotations

from .errors import ResponseFormatError


def extract_response_content(response_json: object) -> str:
    """
    Extract ``choices[0].message.content`` from a chat-completion payload.

    The extraction path is fixed.  Any deviation is a protocol failure, never
    a silent default.

    Args:
        response_json: JSON-decoded response body.

    Returns:
        The generated text.  An empty string is returned as-is.

    Raises:
        ResponseFormatError: If any level of the path is missing, the wrong
                             type, or ``content`` is not a string.
    """
    if not isinstance(response_json, dict):
        raise ResponseFormatError(
            f"Expected a JSON object, got {type(response_json).__name__}"
        )

    choices = response_json.get("choices")
    if not isinstance(choices, list) or not choices:
        raise ResponseFormatError(
            "Response has no choices. "
            f"Top-level keys present: {list(response_json.keys())}"
        )

    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    if not isinstance(message, dict):
        raise ResponseFormatError("First choice has no message object")

    content = message.get("content")
    if not isinstance(content, str):
        raise ResponseFormatError(
            "First choice message has no text content "
            f"(got {type(content).__name__})"
        )

    return content


def extract_usage(response_json: dict) -> tuple[int | None, int | None]:
    """
    Return ``(prompt_tokens, completion_tokens)`` from the ``usage`` block.

    Usage is optional metadata; missing or malformed values become ``None``.
    """
    usage = response_json.get("usage")
    if not isinstance(usage, dict):
        return None, None

    def _as_int(value: object) -> int | None:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return None

    return _as_int(usage.get("prompt_tokens")), _as_int(usage.get("completion_tokens"))


def parse_comma_list(text: str) -> list[str]:
    """
    Split a comma-separated model answer into trimmed items.

    Empty segments (trailing commas, ``"a,,b"``) are dropped and the order is
    preserved: ``"A, B ,C,"`` → ``["A", "B", "C"]``.

    Args:
        text: Raw model output.

    Returns:
        List of non-empty, whitespace-trimmed items.
    """
    return [part.strip() for part in text.split(",") if part.strip()]
