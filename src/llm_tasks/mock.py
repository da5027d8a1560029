"""
Canned-response executor for demonstrations and tests without network access.

``make_mock_executor()`` returns a drop-in replacement for ``execute_chat``
that answers from fixed texts and records every request it receives::

    mock = make_mock_executor()
    summarize(article, credential=Credential("demo"), executor=mock)
    mock.requests[0].max_tokens  # -> 400
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from src.api_client import (
    CancellationToken,
    ChatRequest,
    ChatResponse,
    Credential,
    ResponseFormatError,
)

# Keyword found in the prompt → canned answer.  Checked in insertion order.
MOCK_RESPONSES: dict[str, str] = {
    "summary": (
        "The text describes how large language models can be called from a "
        "data analysis workflow to summarize documents, extract themes, and "
        "draft documentation, with retries and pacing to handle API limits."
    ),
    "topics": (
        "Large language models, API integration, Data analysis, "
        "Reproducible reporting, Rate limiting"
    ),
    "documentation": (
        "Title: Compute a rolling mean\n"
        "Description: Returns the rolling mean of a numeric vector.\n"
        "Parameters: x, the input values; window, the window size.\n"
        "Return: A numeric vector of the same length as x.\n"
        "Examples: rolling_mean([1, 2, 3, 4], window=2)"
    ),
}

DEFAULT_MOCK_RESPONSE: str = "Hello! This is a mock response."


class MockExecutor:
    """
    Callable with ``execute_chat``'s signature that never touches the network.

    Args:
        responses: Either a mapping of prompt keyword → text (matched
                   case-insensitively against the request prompt), or a
                   sequence of texts returned in order, one per call.
        default: Text returned when no keyword matches.
        model: Model name reported on each response.
    """

    def __init__(
        self,
        responses: Mapping[str, str] | Sequence[str] | None = None,
        default: str = DEFAULT_MOCK_RESPONSE,
        model: str = "mock-model",
    ) -> None:
        if responses is None:
            responses = MOCK_RESPONSES
        self.responses = responses
        self.default = default
        self.model = model
        self.requests: list[ChatRequest] = []

    def _answer(self, prompt: str) -> str:
        if isinstance(self.responses, Mapping):
            prompt_lower = prompt.lower()
            for keyword, text in self.responses.items():
                if keyword.lower() in prompt_lower:
                    return text
            return self.default

        call_index = len(self.requests) - 1
        if call_index >= len(self.responses):
            raise ResponseFormatError(
                f"Mock executor has no response for call {call_index + 1}"
            )
        return self.responses[call_index]

    def __call__(
        self,
        request: ChatRequest,
        credential: Credential,  # noqa: ARG002
        timeout: float | None = None,  # noqa: ARG002
        cancel_token: CancellationToken | None = None,
    ) -> ChatResponse:
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()

        self.requests.append(request)
        prompt = request.messages[-1].content
        content = self._answer(prompt)

        return ChatResponse(
            content=content,
            model=self.model,
            prompt_tokens=len(prompt.split()),
            completion_tokens=len(content.split()),
            latency_seconds=0.0,
        )


def make_mock_executor(
    responses: Mapping[str, str] | Sequence[str] | None = None,
    default: str = DEFAULT_MOCK_RESPONSE,
) -> MockExecutor:
    """Return a fresh :class:`MockExecutor` (see its docstring for arguments)."""
    return MockExecutor(responses, default=default)
