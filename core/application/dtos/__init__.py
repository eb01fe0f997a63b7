"""Application DTOs."""

from .terraform_dto import TerraformRequest, TerraformResponse

__all__ = ["TerraformRequest", "TerraformResponse"]
