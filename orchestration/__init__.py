"""Orchestration layer - the convergence retry engine with eventing."""

from core.application.interfaces import IExecutorClient, IGenerationClient

from .bus import EventBusProtocol, InMemoryEventBus
from .cancellation import CancellationGuard
from .error_extractor import extract_failure
from .events import Event, EventMetadata
from .generation import generate_code, strip_code_fences
from .models import ConvergenceState
from .orchestrator import ConvergenceOrchestrator
from .prompts import DEFAULT_PROVIDER, PromptKind, build_prompt, select_prompt_kind
from .subscribers import EventLogSubscriber
from .workflow import RetryPolicy
from .workspace import WorkspacePreparer

__all__ = [
    "CancellationGuard",
    "ConvergenceOrchestrator",
    "ConvergenceState",
    "DEFAULT_PROVIDER",
    "Event",
    "EventBusProtocol",
    "EventLogSubscriber",
    "EventMetadata",
    "InMemoryEventBus",
    "PromptKind",
    "RetryPolicy",
    "WorkspacePreparer",
    "build_prompt",
    "extract_failure",
    "generate_code",
    "select_prompt_kind",
    "strip_code_fences",
]


def create_default_orchestrator(
    executor: IExecutorClient,
    generator: IGenerationClient,
    policy: RetryPolicy | None = None,
    provider: str = DEFAULT_PROVIDER,
) -> ConvergenceOrchestrator:
    """Create an orchestrator with an in-memory event bus that logs run events.

    Args:
        executor: Remote executor client
        generator: Code generation client
        policy: Optional retry policy
        provider: Cloud provider named in prompts

    Returns:
        ConvergenceOrchestrator instance
    """
    event_bus = InMemoryEventBus()
    EventLogSubscriber().attach(event_bus)

    return ConvergenceOrchestrator(
        executor=executor,
        generator=generator,
        policy=policy,
        event_bus=event_bus,
        provider=provider,
    )
