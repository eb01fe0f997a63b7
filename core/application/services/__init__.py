"""Application services."""

from .terraform_service import TerraformService

__all__ = ["TerraformService"]
