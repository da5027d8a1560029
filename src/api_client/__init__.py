"""
src/api_client — resilient call core for an OpenAI-compatible chat-completion API.

Module layout
-------------
config.py        — constants re-exported from the root config package
errors.py        — exception taxonomy and error categorization
credentials.py   — Credential value and environment resolution
executor.py      — ChatRequest/ChatResponse, request building, single-call execution
parser.py        — response extraction and comma-list parsing (pure)
cancellation.py  — CancellationToken and cancellable waits
retry.py         — RetryPolicy, exponential backoff, with_retry
pacing.py        — batch rate-limiter policies (FixedDelay, TokenBucket)
batch.py         — sequential batch processing, per-item results, summaries

Public interface
----------------
Resolve the credential once and pass it around:
    credential = resolve_credential()

Make one call:
    request = build_chat_request("Hello", max_tokens=5)
    execute_chat(request, credential).content

Retry a fallible operation with exponential backoff:
    with_retry(lambda: execute_chat(request, credential), max_retries=3)

Process many inputs sequentially with a delay between calls:
    results = batch_process(texts, process_fn, delay=1.0)
    results_to_frame(results)
"""

from .batch import (
    BatchItemError,
    BatchItemResult,
    batch_process,
    batch_values,
    results_to_frame,
    summarize_batch,
)
from .cancellation import CancellationToken
from .credentials import Credential, resolve_credential
from .errors import (
    APIClientError,
    CallError,
    CallTimeoutError,
    ConfigurationError,
    InvalidParameterError,
    OperationCancelled,
    ResponseFormatError,
    RetryExhaustedError,
    categorize_error,
)
from .executor import ChatMessage, ChatRequest, ChatResponse, build_chat_request, execute_chat
from .pacing import FixedDelay, PacingPolicy, TokenBucket
from .retry import RetryPolicy, exponential_backoff, with_retry

__all__ = [
    # Configuration
    "Credential",
    "resolve_credential",
    # Requests
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "build_chat_request",
    "execute_chat",
    # Resilience
    "RetryPolicy",
    "exponential_backoff",
    "with_retry",
    "CancellationToken",
    # Batch orchestration
    "batch_process",
    "batch_values",
    "results_to_frame",
    "summarize_batch",
    "BatchItemResult",
    "BatchItemError",
    "PacingPolicy",
    "FixedDelay",
    "TokenBucket",
    # Errors
    "APIClientError",
    "ConfigurationError",
    "InvalidParameterError",
    "CallError",
    "ResponseFormatError",
    "CallTimeoutError",
    "RetryExhaustedError",
    "OperationCancelled",
    "categorize_error",
]
