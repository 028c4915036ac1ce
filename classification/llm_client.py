"""Schema-constrained calls to the Anthropic Messages API."""
from typing import Any, Dict

from anthropic import Anthropic

from utils.logger import setup_logger
import config

logger = setup_logger(__name__)


class MalformedResponseError(Exception):
    """Raised when a successful call returns no usable structured payload."""
    pass


class TruncatedResponseError(MalformedResponseError):
    """Raised when the output hit the token ceiling before completion."""
    pass


class StructuredLLMClient:
    """Forces the model to answer through a single tool with a JSON schema."""

    def __init__(
        self,
        anthropic_client: Anthropic,
        model: str,
        max_tokens: int,
        temperature: float = config.LLM_TEMPERATURE
    ):
        """Initialize client.

        Args:
            anthropic_client: Anthropic API client
            model: Model name to use
            max_tokens: Output token ceiling per call
            temperature: Sampling temperature
        """
        self.client = anthropic_client
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.total_tokens_used = 0

    def call(self, system_prompt: str, user_text: str, tool: Dict[str, Any]) -> Dict[str, Any]:
        """Make one call and return the tool input the model produced.

        Args:
            system_prompt: System instruction
            user_text: User message
            tool: Tool definition whose input schema constrains the answer

        Returns:
            Decoded tool input

        Raises:
            TruncatedResponseError: If the output was cut by max_tokens
            MalformedResponseError: If the response has no tool payload
            anthropic.APIError: On network or server errors
        """
        message = self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            system=system_prompt,
            tools=[tool],
            tool_choice={"type": "tool", "name": tool["name"]},
            messages=[
                {"role": "user", "content": user_text}
            ]
        )

        usage = getattr(message, "usage", None)
        if usage is not None:
            self.total_tokens_used += usage.input_tokens + usage.output_tokens

        if message.stop_reason == "max_tokens":
            raise TruncatedResponseError(
                f"Response of {self.model} truncated at {self.max_tokens} tokens"
            )

        for block in message.content or []:
            if getattr(block, "type", None) == "tool_use" and block.name == tool["name"]:
                if not isinstance(block.input, dict):
                    break
                return block.input

        logger.debug(f"Response without {tool['name']} payload: {message}")
        raise MalformedResponseError(f"No {tool['name']} payload in response of {self.model}")
