from __future__ import annotations

from typing import Optional

from pydantic import Field

from core.settings.base import ProcessorBaseSettings


class AnthropicSettings(ProcessorBaseSettings):
    """
    Settings for the code generation model.
    Loaded from environment with exact variable name matching.
    """

    api_key: Optional[str] = Field(default=None, alias="ANTHROPIC_API_KEY")
    model: str = Field(default="claude-3-5-sonnet-latest", alias="ANTHROPIC_MODEL")
    max_tokens: int = Field(default=4096, gt=0, alias="ANTHROPIC_MAX_TOKENS")
    timeout_seconds: float = Field(default=120.0, gt=0, alias="ANTHROPIC_TIMEOUT_SECONDS")
