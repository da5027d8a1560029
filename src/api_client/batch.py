"""
Sequential batch processing with pacing, per-item results, and summaries.

Items are processed strictly one at a time: item i+1 starts only after item
i's result (success or captured failure) is known.  The pacing policy is
consulted between items, never after the last one, so a batch of n items
pauses exactly n-1 times.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Generic, TypeVar

import pandas as pd

from .cancellation import CancellationToken
from .config import BATCH_DELAY_SECONDS, BATCH_ERROR_POLICIES, DEFAULT_BATCH_ERROR_POLICY
from .errors import APIClientError, InvalidParameterError, OperationCancelled, categorize_error
from .pacing import FixedDelay, PacingPolicy

T = TypeVar("T")

SUCCESS = "success"
FAILED = "failed"

# Column order of results_to_frame()
BATCH_RESULT_COLUMNS: list[str] = [
    "index",
    "item",
    "status",
    "value",
    "error_category",
    "error_message",
]


@dataclass(frozen=True)
class BatchItemResult(Generic[T]):
    """Outcome of processing ``items[index]``: a value or a captured error."""

    index: int
    item: Any
    status: str
    value: T | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.status == SUCCESS


class BatchItemError(APIClientError):
    """Raised by :func:`batch_values` when a batch contains failed items."""

    def __init__(self, failures: list[BatchItemResult]) -> None:
        indices = ", ".join(str(r.index) for r in failures)
        super().__init__(f"{len(failures)} batch item(s) failed at index {indices}")
        self.failures = failures


def batch_process(
    items: Sequence[str],
    process: Callable[[str], T],
    delay: float = BATCH_DELAY_SECONDS,
    *,
    on_error: str = DEFAULT_BATCH_ERROR_POLICY,
    pacing: PacingPolicy | None = None,
    cancel_token: CancellationToken | None = None,
    verbose: bool = True,
) -> list[BatchItemResult[T]]:
    """
    Apply ``process`` to each item in order, pausing between items.

    Args:
        items: Ordered input texts.
        process: Function applied to each item.
        delay: Seconds between items; used when ``pacing`` is not given.
        on_error: ``"continue"`` records a failed item and moves on;
                  ``"abort"`` re-raises the first failure immediately.
        pacing: Rate-limiter policy; defaults to ``FixedDelay(delay)``.
        cancel_token: Checked before each item and during each pause.
        verbose: Print a progress line per item.

    Returns:
        One :class:`BatchItemResult` per input, index-aligned with ``items``.

    Raises:
        InvalidParameterError: Unknown ``on_error`` policy.
        OperationCancelled: ``cancel_token`` fired (never captured per item).
        Exception: The first item failure when ``on_error="abort"``.
    """
    if on_error not in BATCH_ERROR_POLICIES:
        raise InvalidParameterError(
            f"on_error must be one of {BATCH_ERROR_POLICIES}, got {on_error!r}"
        )
    if pacing is None:
        pacing = FixedDelay(delay)

    total = len(items)
    results: list[BatchItemResult[T]] = []

    for index, item in enumerate(items):
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()

        if verbose:
            print(f"Processing item {index + 1} of {total}")

        try:
            value = process(item)
        except OperationCancelled:
            raise
        except Exception as exc:
            if on_error == "abort":
                raise
            if verbose:
                print(f"  Item {index + 1} failed [{categorize_error(exc)}]: {str(exc)[:120]}")
            results.append(BatchItemResult(index=index, item=item, status=FAILED, error=exc))
        else:
            results.append(BatchItemResult(index=index, item=item, status=SUCCESS, value=value))

        if index < total - 1:
            pacing.pause(cancel_token)

    return results


def batch_values(results: Sequence[BatchItemResult[T]]) -> list[T]:
    """
    Return the plain values of a fully successful batch.

    Raises:
        BatchItemError: If any item failed; ``failures`` lists them.
    """
    failures = [r for r in results if not r.ok]
    if failures:
        raise BatchItemError(failures)
    return [r.value for r in results]


def results_to_frame(results: Sequence[BatchItemResult]) -> pd.DataFrame:
    """
    Tabulate batch results for the reporting layer.

    Args:
        results: Output of :func:`batch_process`.

    Returns:
        DataFrame with ``BATCH_RESULT_COLUMNS``, one row per item.
    """
    rows = [
        {
            "index": r.index,
            "item": r.item,
            "status": r.status,
            "value": r.value,
            "error_category": categorize_error(r.error) if r.error is not None else None,
            "error_message": str(r.error) if r.error is not None else None,
        }
        for r in results
    ]
    return pd.DataFrame(rows, columns=BATCH_RESULT_COLUMNS)


def summarize_batch(results: Sequence[BatchItemResult], verbose: bool = True) -> dict:
    """
    Count successes and failures, broken down by error category.

    Args:
        results: Output of :func:`batch_process`.
        verbose: Print a summary block.

    Returns:
        Dict with keys ``total``, ``succeeded``, ``failed``,
        ``failures_by_category`` and ``timestamp``.
    """
    df = results_to_frame(results)
    succeeded = int((df["status"] == SUCCESS).sum())
    failed = int((df["status"] == FAILED).sum())
    by_category = {
        str(category): int(count)
        for category, count in df["error_category"].dropna().value_counts().items()
    }

    summary = {
        "total": len(df),
        "succeeded": succeeded,
        "failed": failed,
        "failures_by_category": by_category,
        "timestamp": datetime.now().isoformat(),
    }

    if verbose:
        sep = "=" * 60
        print(f"\n{sep}")
        print("BATCH COMPLETE")
        print(f"  Items:     {summary['total']:,}")
        print(f"  Succeeded: {succeeded:,}")
        print(f"  Failed:    {failed:,}")
        for category, count in by_category.items():
            print(f"    {category}: {count}")
        print(f"{sep}\n")

    return summary
