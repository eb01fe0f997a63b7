"""
Infrastructure Action Enum.

Actions the remote executor can run against a workspace.
"""
from enum import Enum


class InfrastructureAction(str, Enum):
    """Terraform lifecycle actions."""

    PLAN = "plan"
    APPLY = "apply"
    DESTROY = "destroy"

    @property
    def requires_generation(self) -> bool:
        """Destroy runs against existing state and never needs new code."""
        return self is not InfrastructureAction.DESTROY
