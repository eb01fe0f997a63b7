from __future__ import annotations

from typing import Optional

from pydantic import Field

from core.settings.base import ProcessorBaseSettings


class ServerSettings(ProcessorBaseSettings):
    host: str = Field(default="0.0.0.0", alias="SERVER_HOST")
    port: int = Field(default=8080, gt=0, lt=65536, alias="SERVER_PORT")
    # Upper bound for one /terraform request, including every retry.
    request_timeout_seconds: Optional[float] = Field(
        default=None, gt=0, alias="REQUEST_TIMEOUT_SECONDS"
    )
