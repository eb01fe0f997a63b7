"""Domain value objects."""

from .infrastructure import (
    DEFAULT_CONTEXT,
    DEFAULT_WORKSPACE,
    ActionRequest,
    ActionResult,
    ExecutorResponse,
    FailureRecord,
)

__all__ = [
    "DEFAULT_CONTEXT",
    "DEFAULT_WORKSPACE",
    "ActionRequest",
    "ActionResult",
    "ExecutorResponse",
    "FailureRecord",
]
