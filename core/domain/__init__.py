"""Domain layer - pure domain models and errors."""

from .enums import InfrastructureAction
from .value_objects import ActionRequest, ActionResult, ExecutorResponse, FailureRecord

__all__ = [
    "ActionRequest",
    "ActionResult",
    "ExecutorResponse",
    "FailureRecord",
    "InfrastructureAction",
]
