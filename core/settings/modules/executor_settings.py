from __future__ import annotations

from pydantic import Field, field_validator

from core.settings.base import ProcessorBaseSettings


class ExecutorSettings(ProcessorBaseSettings):
    """
    Settings for the remote Terraform executor (gRPC).
    """

    server_addr: str = Field(default="localhost:50051", alias="GRPC_SERVER_ADDR")
    timeout_seconds: float = Field(default=300.0, gt=0, alias="GRPC_TIMEOUT_SECONDS")

    @field_validator("server_addr")
    @classmethod
    def _strip_addr(cls, v: str) -> str:
        v = v.strip()
        return v or "localhost:50051"
