"""Author name classification using LLM."""
from typing import Optional

from anthropic import Anthropic
from pydantic import ValidationError

from utils.logger import setup_logger
from classification import prompts
from classification.llm_client import MalformedResponseError, StructuredLLMClient
from classification.models import ClassificationResult
from classification.retry_policy import RetryPolicy
import config

logger = setup_logger(__name__)


class AuthorClassifier:
    """Decides whether a page title is a human name and normalizes it.

    The normalized name is the English equivalent of the name (or the same
    name if it is English or has no equivalent). It matters mainly for
    languages whose names are written in other scripts (e.g., Cyrillic).
    """

    def __init__(
        self,
        anthropic_client: Anthropic,
        model: str = config.AUTHOR_MODEL,
        retry_policy: Optional[RetryPolicy] = None
    ):
        """Initialize classifier.

        Args:
            anthropic_client: Anthropic API client
            model: Model name to use
            retry_policy: Retry policy (default: 3 attempts, quadratic backoff)
        """
        self.llm = StructuredLLMClient(anthropic_client, model, config.AUTHOR_MAX_TOKENS)
        self.retry_policy = retry_policy or RetryPolicy()

    def classify(self, candidate_name: str) -> Optional[str]:
        """Normalize a candidate author name.

        Args:
            candidate_name: Page title that may be a human name

        Returns:
            Canonical English name, or None if not a human name

        Raises:
            ClassificationError: If the model fails on every attempt
        """
        result = self.retry_policy.call(self._classify_once, candidate_name)

        if not result.is_human:
            logger.debug(f"'{candidate_name}' is not a human name")
            return None

        english_name = (result.english_name or "").strip()
        if not english_name:
            logger.warning(f"'{candidate_name}' classified as human without an English name")
            return None

        return english_name

    def _classify_once(self, candidate_name: str) -> ClassificationResult:
        payload = self.llm.call(
            prompts.AUTHOR_NAME_SYSTEM_PROMPT,
            candidate_name,
            prompts.AUTHOR_NAME_TOOL
        )
        try:
            return ClassificationResult.model_validate(payload)
        except ValidationError as e:
            raise MalformedResponseError(f"Invalid author classification {payload!r}: {e}") from e
