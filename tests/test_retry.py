"""
Unit tests for src/api_client/retry.py.

The backoff wait before attempt k+1 must be 2**k seconds, the operation must
run exactly max_retries times when it always fails, and exhaustion must
surface as RetryExhaustedError (never a plain string).
"""

from __future__ import annotations

import threading
from unittest.mock import MagicMock, call, patch

import pytest

from src.api_client import (
    CallError,
    CallTimeoutError,
    CancellationToken,
    ConfigurationError,
    InvalidParameterError,
    OperationCancelled,
    RetryExhaustedError,
    RetryPolicy,
    build_chat_request,
    execute_chat,
    exponential_backoff,
    with_retry,
)

from .conftest import POST_TARGET, completion_payload


class TestExponentialBackoff:

    @pytest.mark.parametrize("attempt, expected", [(1, 2), (2, 4), (3, 8), (4, 16)])
    def test_base_two_schedule(self, attempt, expected):
        assert exponential_backoff(attempt) == expected

    def test_custom_base(self):
        assert exponential_backoff(2, base=3) == 9


class TestRetryPolicy:

    @pytest.mark.parametrize("attempts", [0, -1, True])
    def test_rejects_non_positive_attempts(self, attempts):
        with pytest.raises(InvalidParameterError):
            RetryPolicy(max_attempts=attempts)

    def test_rejects_base_below_one(self):
        with pytest.raises(InvalidParameterError):
            RetryPolicy(backoff_base=0.5)


class TestWithRetryExhaustion:

    @pytest.mark.parametrize("n", [1, 2, 3, 5])
    def test_always_failing_operation_attempted_exactly_n_times(self, n, no_sleep):
        operation = MagicMock(side_effect=CallError("boom", status_code=500))

        with pytest.raises(RetryExhaustedError) as exc_info:
            with_retry(operation, max_retries=n)

        assert operation.call_count == n
        assert exc_info.value.attempts == n
        # wait before attempt k+1 is 2**k; none after the final attempt
        assert no_sleep.call_args_list == [call(2 ** k) for k in range(1, n)]

    def test_exhaustion_wraps_and_chains_last_error(self, no_sleep):
        errors = [CallError("first", 500), CallError("second", 502), CallError("last", 503)]
        operation = MagicMock(side_effect=errors)

        with pytest.raises(RetryExhaustedError) as exc_info:
            with_retry(operation, max_retries=3)

        assert exc_info.value.last_error is errors[-1]
        assert exc_info.value.__cause__ is errors[-1]

    def test_timeouts_are_retried(self, no_sleep):
        operation = MagicMock(side_effect=CallTimeoutError("slow"))
        with pytest.raises(RetryExhaustedError):
            with_retry(operation, max_retries=2)
        assert operation.call_count == 2


class TestWithRetrySuccess:

    def test_returns_first_success_without_waiting(self, no_sleep):
        operation = MagicMock(return_value="ok")
        assert with_retry(operation) == "ok"
        operation.assert_called_once()
        no_sleep.assert_not_called()

    def test_recovers_after_transient_failures(self, no_sleep):
        operation = MagicMock(side_effect=[CallError("503", 503), "ok"])
        assert with_retry(operation, max_retries=3) == "ok"
        assert operation.call_count == 2
        no_sleep.assert_called_once_with(2)

    def test_policy_backoff_base(self, no_sleep):
        operation = MagicMock(side_effect=[CallError("x"), CallError("x"), "ok"])
        policy = RetryPolicy(max_attempts=3, backoff_base=1.5)
        assert with_retry(operation, policy=policy) == "ok"
        assert no_sleep.call_args_list == [call(1.5), call(2.25)]


class TestWithRetryNonRetriable:

    @pytest.mark.parametrize("error", [
        ConfigurationError("no key"),
        InvalidParameterError("bad"),
        KeyError("unexpected"),
        RuntimeError("generic"),
    ])
    def test_non_retriable_errors_propagate_immediately(self, error, no_sleep):
        operation = MagicMock(side_effect=error)
        with pytest.raises(type(error)):
            with_retry(operation, max_retries=3)
        operation.assert_called_once()
        no_sleep.assert_not_called()


    def test_generic_exception_retried_when_policy_widened(self, no_sleep):
        operation = MagicMock(side_effect=RuntimeError("flaky"))
        policy = RetryPolicy(max_attempts=3, retry_on=(RuntimeError,))
        with pytest.raises(RetryExhaustedError) as exc_info:
            with_retry(operation, policy=policy)
        assert operation.call_count == 3
        assert isinstance(exc_info.value.last_error, RuntimeError)
        assert no_sleep.call_args_list == [call(2), call(4)]


class TestWithRetryCancellation:

    def test_cancelled_before_first_attempt(self):
        token = CancellationToken()
        token.cancel()
        operation = MagicMock()
        with pytest.raises(OperationCancelled):
            with_retry(operation, cancel_token=token)
        operation.assert_not_called()

    def test_cancel_during_backoff_wait_stops_retrying(self):
        token = CancellationToken()

        def failing():
            # Cancel from another thread shortly after the first failure
            threading.Timer(0.05, token.cancel).start()
            raise CallError("boom", 500)

        operation = MagicMock(side_effect=failing)
        with pytest.raises(OperationCancelled):
            with_retry(operation, max_retries=3, cancel_token=token)
        operation.assert_called_once()


class TestWithRetryOverHttp:
    """End-to-end: mocked endpoint returning HTTP 500."""

    def test_http_500_exhausts_after_three_posts(self, credential, http_response, no_sleep):
        request = build_chat_request("Hello")
        with patch(POST_TARGET, return_value=http_response(500, {"error": "down"})) as mock_post:
            with pytest.raises(RetryExhaustedError) as exc_info:
                with_retry(lambda: execute_chat(request, credential), max_retries=3)

        assert mock_post.call_count == 3
        assert isinstance(exc_info.value.last_error, CallError)
        assert exc_info.value.last_error.status_code == 500

    def test_http_500_then_success(self, credential, http_response, no_sleep):
        request = build_chat_request("Hello")
        responses = [http_response(500, {"error": "down"}), http_response(200, completion_payload("hi"))]
        with patch(POST_TARGET, side_effect=responses) as mock_post:
            result = with_retry(lambda: execute_chat(request, credential), max_retries=3)

        assert result.content == "hi"
        assert mock_post.call_count == 2
