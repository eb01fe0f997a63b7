"""Orchestration events - Event, EventMetadata."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class EventMetadata:
    """Metadata for an event."""

    run_id: str
    context_id: str
    workspace_id: str
    action: str
    timestamp: datetime


@dataclass
class Event:
    """Something that happened during a convergence run."""

    name: str
    payload: dict[str, object]
    metadata: EventMetadata
