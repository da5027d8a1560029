"""Cooperative cancellation honoured at every suspension point."""

from __future__ import annotations

import threading
import time

from .errors import OperationCancelled


class CancellationToken:
    """Thread-safe one-shot cancellation flag backed by ``threading.Event``."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise OperationCancelled("Operation cancelled")

    def wait(self, seconds: float) -> bool:
        """Block up to ``seconds``; return ``True`` if cancelled meanwhile."""
        return self._event.wait(seconds)


def wait(seconds: float, cancel_token: CancellationToken | None = None) -> None:
    """
    Sleep for ``seconds``, waking early if ``cancel_token`` fires.

    Without a token this is a plain ``time.sleep``.

    Raises:
        OperationCancelled: If the token is (or becomes) cancelled.
    """
    if seconds <= 0:
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
        return

    if cancel_token is None:
        time.sleep(seconds)
        return

    cancel_token.raise_if_cancelled()
    if cancel_token.wait(seconds):
        raise OperationCancelled("Operation cancelled during wait")
