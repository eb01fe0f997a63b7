"""Event subscribers - turn run events into log lines."""

import logging
from typing import Optional

from core.infrastructure.logging import get_logger

from .bus import EventBusProtocol
from .events import Event

RUN_EVENTS = (
    "convergence.started",
    "convergence.attempt.failed",
    "convergence.regenerated",
    "convergence.regeneration.failed",
    "convergence.succeeded",
    "convergence.exhausted",
)

_WARNING_EVENTS = {
    "convergence.attempt.failed",
    "convergence.regeneration.failed",
    "convergence.exhausted",
}


class EventLogSubscriber:
    """Logs every run event with its target and payload."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or get_logger("orchestration.events")

    def attach(self, bus: EventBusProtocol) -> None:
        for name in RUN_EVENTS:
            bus.subscribe(name, self)

    async def __call__(self, event: Event) -> None:
        meta = event.metadata
        level = logging.WARNING if event.name in _WARNING_EVENTS else logging.INFO
        self._logger.log(
            level,
            f"{event.name} run_id={meta.run_id} action={meta.action} "
            f"target={meta.context_id}/{meta.workspace_id} payload={event.payload}",
        )
