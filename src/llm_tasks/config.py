"""
Prompt templates and per-task generation parameters.

Templates use ``str.format`` fields only; each task fills exactly the fields
its template names.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Summarization
# ---------------------------------------------------------------------------

SUMMARY_PROMPT: str = (
    "Please provide a concise summary of the following text in approximately "
    "{target_words} words:\n\n{text}"
)
DEFAULT_SUMMARY_WORDS: int = 200
# Heuristic token/word ratio: max_tokens = SUMMARY_TOKENS_PER_WORD * target_words
SUMMARY_TOKENS_PER_WORD: int = 2
SUMMARY_TEMPERATURE: float = 0.7

# ---------------------------------------------------------------------------
# Topic extraction
# ---------------------------------------------------------------------------

TOPICS_PROMPT: str = (
    "Extract the top {num_topics} main topics or themes from the following text. "
    "Return only the topics as a comma-separated list:\n\n{text}"
)
DEFAULT_NUM_TOPICS: int = 5
TOPICS_MAX_TOKENS: int = 200
TOPICS_TEMPERATURE: float = 0.3

# ---------------------------------------------------------------------------
# Code documentation
# ---------------------------------------------------------------------------

DOCUMENT_CODE_PROMPT: str = (
    "Add proper documentation to this function. "
    "Include title, description, parameters, return value, and examples "
    "sections:\n\n{code}"
)
DOCUMENT_CODE_MAX_TOKENS: int = 800
DOCUMENT_CODE_TEMPERATURE: float = 0.3
