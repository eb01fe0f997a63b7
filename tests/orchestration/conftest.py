"""Fixtures for orchestration tests."""

import pytest

from core.domain.enums.infrastructure_action import InfrastructureAction
from core.domain.value_objects import ActionRequest
from tests.mocks.recorders import FakeEventBus, RecordingSleep


@pytest.fixture
def event_bus() -> FakeEventBus:
    return FakeEventBus()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def apply_request() -> ActionRequest:
    return ActionRequest(
        description="create a 1-core droplet",
        context_id="acme",
        workspace_id="prod",
        action=InfrastructureAction.APPLY,
    )
