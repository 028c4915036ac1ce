"""Quote scoring and cleaning using LLM."""
from typing import Optional

from anthropic import Anthropic
from pydantic import ValidationError

from utils.logger import setup_logger
from classification import prompts
from classification.llm_client import (
    MalformedResponseError,
    StructuredLLMClient,
    TruncatedResponseError
)
from classification.models import ParsedQuote, ScoreResult
from classification.retry_policy import RetryPolicy
import config

logger = setup_logger(__name__)


class QuoteScorer:
    """Scores quote candidates from 0 to 100 and returns a clean rendering.

    Sometimes the candidate contains more variants of the same quote (in
    different languages) or other text that is not a part of it. The model
    keeps just a single variant of the pronounced text.
    """

    def __init__(
        self,
        anthropic_client: Anthropic,
        model: str = config.QUOTE_MODEL,
        retry_policy: Optional[RetryPolicy] = None
    ):
        """Initialize scorer.

        Args:
            anthropic_client: Anthropic API client
            model: Model name to use
            retry_policy: Retry policy (default: 3 attempts, quadratic backoff)
        """
        self.llm = StructuredLLMClient(anthropic_client, model, config.QUOTE_MAX_TOKENS)
        self.retry_policy = retry_policy or RetryPolicy()

    def score(self, author_name: str, candidate_text: str) -> ParsedQuote:
        """Score a quote candidate.

        Args:
            author_name: Canonical English name of the claimed author
            candidate_text: Plaintext candidate

        Returns:
            ParsedQuote (score 0 when the model output was truncated)

        Raises:
            ClassificationError: If the model fails on every attempt
        """
        return self.retry_policy.call(self._score_once, author_name, candidate_text)

    def _score_once(self, author_name: str, candidate_text: str) -> ParsedQuote:
        try:
            payload = self.llm.call(
                prompts.QUOTE_SCORE_SYSTEM_PROMPT,
                prompts.quote_score_input(author_name, candidate_text),
                prompts.QUOTE_SCORE_TOOL
            )
        except TruncatedResponseError as e:
            logger.warning(f"{e}, rejecting candidate by {author_name}")
            return ParsedQuote(score=0)

        try:
            result = ScoreResult.model_validate(payload)
        except ValidationError as e:
            raise MalformedResponseError(f"Invalid quote score {payload!r}: {e}") from e

        clean_quote = result.clean_quote.strip() if result.clean_quote else None
        return ParsedQuote(score=result.score, clean_quote=clean_quote or None)
