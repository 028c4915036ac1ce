"""Test the retry policy of classification calls."""
import anthropic
import httpx
import pytest

from classification.llm_client import MalformedResponseError
from classification.retry_policy import ClassificationError, RetryPolicy


def connection_error():
    return anthropic.APIConnectionError(
        request=httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    )


def status_error(error_class, status_code):
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    response = httpx.Response(status_code, request=request)
    return error_class(f"status {status_code}", response=response, body=None)


class Flaky:
    """Fails the given number of times, then returns "ok"."""

    def __init__(self, failures, error_factory=connection_error):
        self.failures = failures
        self.error_factory = error_factory
        self.attempts = 0

    def __call__(self, *args, **kwargs):
        self.attempts += 1
        if self.attempts <= self.failures:
            raise self.error_factory()
        return "ok"


def test_first_attempt_succeeds(retry_policy, recording_sleep):
    """Test that a successful call does not wait."""
    func = Flaky(0)

    assert retry_policy.call(func) == "ok"
    assert func.attempts == 1
    assert recording_sleep.delays == []


def test_two_failures_then_success(retry_policy, recording_sleep):
    """Test quadratic backoff: 1² + 2² = 5 seconds of waiting."""
    func = Flaky(2)

    assert retry_policy.call(func) == "ok"
    assert func.attempts == 3
    assert recording_sleep.delays == [1.0, 4.0]
    assert sum(recording_sleep.delays) == 5


def test_malformed_response_is_retried(retry_policy):
    """Test that malformed output is treated like a transient fault."""
    func = Flaky(1, lambda: MalformedResponseError("empty"))

    assert retry_policy.call(func) == "ok"
    assert func.attempts == 2


def test_exhausted_attempts_raise(retry_policy):
    """Test that three failures raise a ClassificationError."""
    func = Flaky(3)

    with pytest.raises(ClassificationError) as exc_info:
        retry_policy.call(func)

    assert func.attempts == 3
    assert isinstance(exc_info.value.__cause__, anthropic.APIConnectionError)


def test_rate_limit_and_server_errors_are_retried(retry_policy):
    """Test that 429 and 5xx responses get another attempt."""
    errors = iter([
        status_error(anthropic.RateLimitError, 429),
        status_error(anthropic.InternalServerError, 503),
    ])
    func = Flaky(2, lambda: next(errors))

    assert retry_policy.call(func) == "ok"
    assert func.attempts == 3


def test_client_errors_are_not_retried(retry_policy, recording_sleep):
    """Test that a bad key or bad request fails on the first attempt."""
    for error_class, status_code in ((anthropic.AuthenticationError, 401), (anthropic.BadRequestError, 400)):
        func = Flaky(1, lambda: status_error(error_class, status_code))

        with pytest.raises(error_class):
            retry_policy.call(func)

        assert func.attempts == 1
    assert recording_sleep.delays == []


def test_other_errors_are_not_retried(retry_policy):
    """Test that programming errors propagate immediately."""
    func = Flaky(1, lambda: KeyError("bug"))

    with pytest.raises(KeyError):
        retry_policy.call(func)

    assert func.attempts == 1


def test_arguments_are_passed(recording_sleep):
    """Test that positional and keyword arguments reach the function."""
    policy = RetryPolicy(max_attempts=1, sleep=recording_sleep)

    assert policy.call(lambda a, b=0: a + b, 2, b=3) == 5


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
