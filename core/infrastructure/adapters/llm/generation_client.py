"""
Anthropic Generation Client Implementation.

Produces Terraform code through the Anthropic Messages API.
"""
from typing import Optional
import logging

import anthropic

from core.application.interfaces import IGenerationClient
from core.domain.exceptions import GenerationError
from core.settings.modules.anthropic_settings import AnthropicSettings


logger = logging.getLogger(__name__)


class AnthropicGenerationClient(IGenerationClient):
    """
    Anthropic implementation of the generation client.

    Text blocks of the reply are concatenated verbatim; fence stripping
    is left to the caller.
    """

    def __init__(
        self,
        settings: AnthropicSettings,
        client: Optional[anthropic.AsyncAnthropic] = None,
    ):
        """
        Initialize Anthropic generation client.

        Args:
            settings: Anthropic settings with API key and model
            client: Pre-built SDK client (tests)

        Raises:
            RuntimeError: If no client is given and no API key is configured
        """
        self.model = settings.model
        self.max_tokens = settings.max_tokens

        if client is None:
            if not settings.api_key:
                raise RuntimeError("anthropic_api_key is required (set ANTHROPIC_API_KEY)")
            client = anthropic.AsyncAnthropic(
                api_key=settings.api_key,
                timeout=settings.timeout_seconds,
            )
        self._client = client
        logger.info(f"AnthropicGenerationClient initialized (model={self.model})")

    async def generate(self, prompt: str) -> str:
        try:
            message = await self._client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as e:
            logger.error(f"Anthropic request failed: {e}")
            raise GenerationError(f"failed to generate code: {e}", model=self.model) from e

        if getattr(message, "stop_reason", None) == "max_tokens":
            logger.warning(f"Generation hit max_tokens={self.max_tokens}; code may be truncated")

        return "".join(
            block.text for block in message.content if getattr(block, "type", None) == "text"
        )

    async def close(self) -> None:
        await self._client.close()
