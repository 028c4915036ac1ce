"""Bounded retry with quadratic backoff for classification calls."""
import time
from typing import Any, Callable

import anthropic
from tenacity import RetryError, Retrying, retry_if_exception, stop_after_attempt

from classification.llm_client import MalformedResponseError
from utils.logger import setup_logger
import config

logger = setup_logger(__name__)

# Status codes worth another attempt (timeouts, conflicts, rate limits, server errors)
TRANSIENT_STATUS_CODES = (408, 409, 429)


class ClassificationError(Exception):
    """Raised when a classification call fails after all attempts."""
    pass


def is_transient(error: BaseException) -> bool:
    """Check if another attempt may succeed.

    Connection errors, timeouts, rate limits, server errors and malformed
    model output are transient. Other status errors (bad request, bad key)
    fail the same way every time.
    """
    if isinstance(error, (anthropic.APIConnectionError, MalformedResponseError)):
        return True
    if isinstance(error, anthropic.APIStatusError):
        return error.status_code in TRANSIENT_STATUS_CODES or error.status_code >= 500
    return False


def wait_quadratic(retry_state) -> float:
    """Delay after attempt n is n² seconds (1, 4, 9, ...)."""
    return float(retry_state.attempt_number ** 2)


class RetryPolicy:
    """Retries transient failures of a call, waiting n² seconds after attempt n."""

    def __init__(self, max_attempts: int = config.MAX_RETRIES, sleep: Callable[[float], None] = time.sleep):
        """Initialize retry policy.

        Args:
            max_attempts: Total number of attempts, the first one included
            sleep: Function used to wait between attempts
        """
        self.max_attempts = max_attempts
        self.sleep = sleep

    def call(self, func: Callable, *args, **kwargs) -> Any:
        """Run ``func`` until it succeeds or attempts run out.

        Raises:
            ClassificationError: If every attempt failed with a retryable error
        """
        retrying = Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_quadratic,
            retry=retry_if_exception(is_transient),
            sleep=self.sleep,
            before_sleep=self._log_retry
        )

        try:
            return retrying(func, *args, **kwargs)
        except RetryError as e:
            last_error = e.last_attempt.exception()
            logger.error(f"Classification failed after {self.max_attempts} attempts: {last_error}")
            raise ClassificationError(
                f"No valid response from language model after {self.max_attempts} attempts: {last_error}"
            ) from last_error

    def _log_retry(self, retry_state) -> None:
        error = retry_state.outcome.exception()
        logger.warning(
            f"Attempt {retry_state.attempt_number}/{self.max_attempts} failed: {error}. "
            f"Retrying in {retry_state.next_action.sleep:.0f}s..."
        )
