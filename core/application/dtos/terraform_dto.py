"""Application DTOs for Terraform requests."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from core.domain.enums.infrastructure_action import InfrastructureAction


class TerraformRequest(BaseModel):
    """Request DTO for POST /terraform."""

    description: str = Field(default="", description="Natural-language infrastructure request")
    context: Optional[str] = Field(default=None, description="Executor context (default: 'default')")
    workspace: Optional[str] = Field(default=None, description="Workspace name (default: 'default')")
    action: InfrastructureAction = Field(
        default=InfrastructureAction.PLAN, description="plan, apply or destroy"
    )
    code: Optional[str] = Field(
        default=None, description="Existing Terraform code to run instead of generating it"
    )

    model_config = {"frozen": True}

    @field_validator("action", mode="before")
    @classmethod
    def _default_action(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return InfrastructureAction.PLAN
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @model_validator(mode="after")
    def _needs_description(self) -> "TerraformRequest":
        if self.action is InfrastructureAction.DESTROY:
            return self
        has_code = bool(self.code and self.code.strip())
        if not has_code and not self.description.strip():
            raise ValueError("description is required for plan and apply")
        return self


class TerraformResponse(BaseModel):
    """Response DTO for POST /terraform."""

    success: bool = Field(..., description="Whether the action ultimately succeeded")
    code: Optional[str] = Field(default=None, description="Code that was executed last")
    output: str = Field(default="", description="Executor output of the last attempt")
    error: Optional[str] = Field(default=None, description="Executor error of the last attempt")

    model_config = {"frozen": True}
