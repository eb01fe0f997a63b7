"""Tests for ConvergenceOrchestrator - basic functionality."""

import pytest

from core.domain.enums.infrastructure_action import InfrastructureAction
from core.domain.value_objects import ActionRequest
from core.domain.value_objects import ExecutorResponse
from orchestration.models import ConvergenceState
from orchestration.orchestrator import ConvergenceOrchestrator
from orchestration.workflow import RetryPolicy
from tests.mocks import FakeExecutorClient, FakeGenerationClient
from tests.mocks.terraform_samples import DROPLET_CODE, failed, succeeded


def make_orchestrator(executor, generator, event_bus, sleep, max_attempts=5):
    return ConvergenceOrchestrator(
        executor=executor,
        generator=generator,
        policy=RetryPolicy(max_attempts=max_attempts, delay_seconds=3.0),
        event_bus=event_bus,
        sleep=sleep,
    )


@pytest.mark.asyncio
async def test_success_on_first_attempt(apply_request, event_bus, recording_sleep):
    """First clean success returns immediately with the executed code."""
    executor = FakeExecutorClient(action_script=[succeeded("Apply complete! Resources: 1 added")])
    generator = FakeGenerationClient()
    orchestrator = make_orchestrator(executor, generator, event_bus, recording_sleep)

    result = await orchestrator.run(apply_request, DROPLET_CODE)

    assert result.succeeded is True
    assert result.output == "Apply complete! Resources: 1 added"
    assert result.error_message == ""
    assert result.code == DROPLET_CODE
    assert generator.call_count == 0
    assert recording_sleep.delays == []
    assert len(executor.action_calls) == 1
    assert executor.executed_code == [DROPLET_CODE]
    assert event_bus.names == ["convergence.started", "convergence.succeeded"]


@pytest.mark.asyncio
async def test_preparation_steps_run_in_order(apply_request, event_bus, recording_sleep):
    """Workspace is cleared, ensured, then filled before the action runs."""
    executor = FakeExecutorClient()
    orchestrator = make_orchestrator(executor, FakeGenerationClient(), event_bus, recording_sleep)

    await orchestrator.run(apply_request, DROPLET_CODE)

    assert [call[0] for call in executor.calls] == [
        "clear_code",
        "ensure_context",
        "ensure_workspace",
        "append_code",
        "apply",
    ]
    assert executor.calls_to("append_code") == [("append_code", "acme", "prod", DROPLET_CODE)]


@pytest.mark.asyncio
async def test_plan_action_calls_plan(event_bus, recording_sleep):
    executor = FakeExecutorClient(action_script=[succeeded("Plan: 1 to add")])
    orchestrator = make_orchestrator(executor, FakeGenerationClient(), event_bus, recording_sleep)
    request = ActionRequest(description="a droplet", action=InfrastructureAction.PLAN)

    result = await orchestrator.run(request, DROPLET_CODE)

    assert result.succeeded is True
    assert executor.action_calls == [("plan", "default", "default")]


@pytest.mark.asyncio
async def test_success_with_error_text_is_not_success(apply_request, event_bus, recording_sleep):
    """succeeded=True with a non-empty error still counts as a failure."""
    executor = FakeExecutorClient(
        action_script=[
            ExecutorResponse(success=True, output="partial", error="Error: provider warning"),
            succeeded(),
        ]
    )
    generator = FakeGenerationClient(["resource \"x\" \"y\" {}"])
    orchestrator = make_orchestrator(executor, generator, event_bus, recording_sleep)

    result = await orchestrator.run(apply_request, DROPLET_CODE)

    assert result.succeeded is True
    assert len(executor.action_calls) == 2
    assert generator.call_count == 1


@pytest.mark.asyncio
async def test_destroy_skips_preparation_and_generation(event_bus, recording_sleep):
    executor = FakeExecutorClient(action_script=[succeeded("Destroy complete!")])
    generator = FakeGenerationClient()
    orchestrator = make_orchestrator(executor, generator, event_bus, recording_sleep)
    request = ActionRequest(description="", action=InfrastructureAction.DESTROY)

    result = await orchestrator.run(request, "ignored code")

    assert result.succeeded is True
    assert result.code == ""
    assert executor.calls == [("destroy", "default", "default")]
    assert generator.call_count == 0


@pytest.mark.asyncio
async def test_default_context_and_workspace(event_bus, recording_sleep):
    executor = FakeExecutorClient()
    orchestrator = make_orchestrator(executor, FakeGenerationClient(), event_bus, recording_sleep)
    request = ActionRequest(description="droplet", context_id="", workspace_id="  ")

    await orchestrator.run(request, DROPLET_CODE)

    assert executor.calls_to("ensure_workspace") == [("ensure_workspace", "default", "default")]


@pytest.mark.asyncio
async def test_event_metadata_carries_target(apply_request, event_bus, recording_sleep):
    executor = FakeExecutorClient(action_script=[failed("nope"), succeeded()])
    orchestrator = make_orchestrator(executor, FakeGenerationClient(), event_bus, recording_sleep)

    await orchestrator.run(apply_request, DROPLET_CODE)

    assert event_bus.names == [
        "convergence.started",
        "convergence.attempt.failed",
        "convergence.regenerated",
        "convergence.succeeded",
    ]
    run_ids = {event.metadata.run_id for event in event_bus.events}
    assert len(run_ids) == 1
    first = event_bus.events[0].metadata
    assert (first.context_id, first.workspace_id, first.action) == ("acme", "prod", "apply")
    assert event_bus.events[1].payload["attempt"] == 1
    assert event_bus.events[1].payload["executed"] is True


def test_only_succeeded_and_exhausted_are_terminal():
    terminal = {state for state in ConvergenceState if state.is_terminal}

    assert terminal == {ConvergenceState.SUCCEEDED, ConvergenceState.EXHAUSTED}
