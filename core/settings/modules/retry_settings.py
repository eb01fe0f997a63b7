from __future__ import annotations

from pydantic import Field

from core.settings.base import ProcessorBaseSettings


class RetrySettings(ProcessorBaseSettings):
    """
    Convergence loop retry budget.

    Defaults: 5 attempts, 3 seconds between attempts.
    """

    max_attempts: int = Field(default=5, ge=1, alias="RETRY_MAX_ATTEMPTS")
    delay_seconds: float = Field(default=3.0, ge=0, alias="RETRY_DELAY_SECONDS")
