"""
Credential resolution from the process environment.

Build a :class:`Credential` once (at process entry, or lazily on first call)
and pass it to every component that needs it.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from .config import API_KEY_ENV, BASE_URL_ENV, DEFAULT_BASE_URL
from .errors import ConfigurationError


@dataclass(frozen=True)
class Credential:
    """API key plus base endpoint URL.  Immutable for the process lifetime."""

    api_key: str = field(repr=False)
    base_url: str = DEFAULT_BASE_URL

    def __post_init__(self) -> None:
        check_api_key(self.api_key)

    def __repr__(self) -> str:
        return f"Credential(api_key='***', base_url={self.base_url!r})"

    def endpoint(self, path: str) -> str:
        """Join ``path`` onto the base URL with exactly one slash."""
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"


def check_api_key(api_key: str) -> None:
    """
    Reject keys that cannot be sent in an ``Authorization`` header.

    Raises:
        ConfigurationError: If the key is empty, contains whitespace or
                            control characters, or is not latin-1 encodable.
    """
    if not isinstance(api_key, str) or not api_key:
        raise ConfigurationError("API key must be a non-empty string.")

    if any(ch.isspace() or not ch.isprintable() for ch in api_key):
        raise ConfigurationError(
            "API key contains whitespace or control characters."
        )

    try:
        api_key.encode("latin-1")
    except UnicodeEncodeError as exc:
        raise ConfigurationError(
            "API key contains characters that cannot be sent in an HTTP header."
        ) from exc


def resolve_credential(environ: Mapping[str, str] | None = None) -> Credential:
    """
    Read the API key and base URL from the environment.

    Args:
        environ: Mapping to read from; defaults to ``os.environ``.

    Returns:
        A new :class:`Credential`.

    Raises:
        ConfigurationError: If ``OPENAI_API_KEY`` is unset, empty, blank, or
            malformed (see :func:`check_api_key`).
    """
    env = os.environ if environ is None else environ

    api_key = (env.get(API_KEY_ENV) or "").strip()
    if not api_key:
        raise ConfigurationError(
            f"API key not found. Set the '{API_KEY_ENV}' environment variable."
        )

    base_url = (env.get(BASE_URL_ENV) or "").strip() or DEFAULT_BASE_URL
    return Credential(api_key=api_key, base_url=base_url.rstrip("/"))
