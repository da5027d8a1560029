"""
src/llm_tasks — task templates built on the resilient call core.

Module layout
-------------
config.py  — prompt templates and per-task generation parameters
tasks.py   — summarize, extract_topics, document_code (+ run_prompt)
health.py  — validate_setup yes/no check
mock.py    — canned-response executor for demos without an API key

Public interface
----------------
    summarize(text, target_words=200)
    extract_topics(text, num_topics=5)
    document_code(code)
    validate_setup()

Every task accepts keyword options ``credential``, ``executor``,
``max_retries``, ``cancel_token`` and ``model``.  Combine with
``src.api_client.batch_process`` for paced batches:

    batch_process(texts, lambda t: summarize(t, credential=credential))
"""

from src.api_client import batch_process

from .health import validate_setup
from .mock import MOCK_RESPONSES, MockExecutor, make_mock_executor
from .tasks import document_code, extract_topics, run_prompt, summarize

__all__ = [
    "summarize",
    "extract_topics",
    "document_code",
    "batch_process",
    "validate_setup",
    "run_prompt",
    "MockExecutor",
    "make_mock_executor",
    "MOCK_RESPONSES",
]
