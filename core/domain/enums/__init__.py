"""Domain enums."""

from .infrastructure_action import InfrastructureAction

__all__ = ["InfrastructureAction"]
