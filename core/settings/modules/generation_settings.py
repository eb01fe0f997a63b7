from __future__ import annotations

from pydantic import Field, field_validator

from core.settings.base import ProcessorBaseSettings


class GenerationSettings(ProcessorBaseSettings):
    """Prompt-level settings."""

    provider: str = Field(default="DigitalOcean", alias="TERRAFORM_PROVIDER")

    @field_validator("provider")
    @classmethod
    def _strip_provider(cls, v: str) -> str:
        return v.strip()
