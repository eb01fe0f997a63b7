"""Infrastructure value objects - requests, results and failure records."""

from dataclasses import dataclass
from typing import Optional

from core.domain.enums.infrastructure_action import InfrastructureAction

DEFAULT_CONTEXT = "default"
DEFAULT_WORKSPACE = "default"


@dataclass(frozen=True)
class ActionRequest:
    """
    Immutable input to one convergence run.

    Blank context/workspace names fall back to the defaults so callers
    can pass through optional request fields untouched.
    """
    description: str
    context_id: str = DEFAULT_CONTEXT
    workspace_id: str = DEFAULT_WORKSPACE
    action: InfrastructureAction = InfrastructureAction.PLAN

    def __post_init__(self):
        if not self.context_id or not self.context_id.strip():
            object.__setattr__(self, "context_id", DEFAULT_CONTEXT)
        if not self.workspace_id or not self.workspace_id.strip():
            object.__setattr__(self, "workspace_id", DEFAULT_WORKSPACE)
        if not isinstance(self.action, InfrastructureAction):
            object.__setattr__(self, "action", InfrastructureAction(self.action))


@dataclass(frozen=True)
class ExecutorResponse:
    """Transport-neutral view of an executor reply."""
    success: bool
    output: str = ""
    error: str = ""


@dataclass
class ActionResult:
    """
    Outcome of a convergence run.

    `code` is the code that was staged for the attempt that produced
    this result.
    """
    succeeded: bool
    output: str = ""
    error_message: str = ""
    code: str = ""

    @classmethod
    def from_response(cls, response: ExecutorResponse, code: str) -> "ActionResult":
        return cls(
            succeeded=response.success,
            output=response.output,
            error_message=response.error,
            code=code,
        )

    @property
    def is_clean_success(self) -> bool:
        """Executor reported success and no error text."""
        return self.succeeded and not self.error_message


@dataclass(frozen=True)
class FailureRecord:
    """Structured view of a failed action."""
    message: str
    raw_output: str = ""
    affected_resource: Optional[str] = None
