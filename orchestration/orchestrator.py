"""Convergence orchestrator - runs an action until it succeeds or attempts run out."""

import asyncio
import logging
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional

from core.application.interfaces import IExecutorClient, IGenerationClient
from core.domain.enums.infrastructure_action import InfrastructureAction
from core.domain.exceptions import GenerationError, PreparationError, TransportError
from core.domain.value_objects import ActionRequest, ActionResult, ExecutorResponse
from core.infrastructure.logging import get_logger

from .bus import EventBusProtocol, InMemoryEventBus
from .cancellation import CancellationGuard
from .error_extractor import extract_failure
from .events import Event, EventMetadata
from .generation import generate_code
from .models import ConvergenceState
from .prompts import DEFAULT_PROVIDER, PromptKind, build_prompt
from .workflow import RetryPolicy
from .workspace import WorkspacePreparer


class ConvergenceOrchestrator:
    """Bounded retry loop around one infrastructure action.

    Per attempt: prepare the workspace, run the action, and on failure ask
    the generator for fixed code. Exhaustion is returned as a failed
    ActionResult, never raised. Only CancellationError (and asyncio's own
    CancelledError) escape `run`.
    """

    def __init__(
        self,
        executor: IExecutorClient,
        generator: IGenerationClient,
        policy: Optional[RetryPolicy] = None,
        preparer: Optional[WorkspacePreparer] = None,
        event_bus: Optional[EventBusProtocol] = None,
        provider: str = DEFAULT_PROVIDER,
        sleep=asyncio.sleep,
    ) -> None:
        """Initialize orchestrator.

        Args:
            executor: Remote executor client
            generator: Code generation client
            policy: Retry policy (defaults: 5 attempts, 3s delay)
            preparer: Workspace preparer (built from executor if omitted)
            event_bus: Bus for run events (in-memory if omitted)
            provider: Cloud provider named in prompts
            sleep: Coroutine used for backoff when no cancel event is given
        """
        self._executor = executor
        self._generator = generator
        self._policy = policy or RetryPolicy()
        self._preparer = preparer or WorkspacePreparer(executor)
        self._event_bus = event_bus or InMemoryEventBus()
        self._provider = provider
        self._sleep = sleep
        self._logger = get_logger("orchestration.orchestrator")

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    async def run(
        self,
        request: ActionRequest,
        initial_code: str = "",
        *,
        cancel_event: Optional[asyncio.Event] = None,
        deadline: Optional[float] = None,
    ) -> ActionResult:
        """Run the action until it succeeds or the policy is exhausted.

        Args:
            request: What to run and where
            initial_code: Code for the first attempt (ignored for destroy)
            cancel_event: Set by the caller to abort the run
            deadline: Absolute loop time after which the run aborts

        Returns:
            The successful result, or the last attempt's result on exhaustion

        Raises:
            CancellationError: If cancelled or past the deadline
        """
        guard = CancellationGuard(cancel_event, deadline)
        run_id = uuid.uuid4().hex[:12]
        regenerates = request.action.requires_generation
        code = initial_code if regenerates else ""
        policy = self._policy
        last_result: Optional[ActionResult] = None

        self._logger.info(
            f"[{run_id}] {request.action.value} on {request.context_id}/{request.workspace_id} "
            f"starting (max_attempts={policy.max_attempts}, delay={policy.delay_seconds}s)"
        )
        await self._publish("convergence.started", run_id, request, {"max_attempts": policy.max_attempts})

        for attempt in range(1, policy.max_attempts + 1):
            is_last = policy.is_last(attempt)

            try:
                result = await self._attempt(request, code, guard, run_id)
            except (PreparationError, TransportError) as exc:
                last_result = ActionResult(succeeded=False, error_message=str(exc), code=code)
                self._logger.warning(
                    f"[{run_id}] attempt {attempt}/{policy.max_attempts} could not run: {exc}"
                )
                await self._publish(
                    "convergence.attempt.failed",
                    run_id,
                    request,
                    {"attempt": attempt, "error": str(exc), "executed": False},
                )
                if not is_last:
                    await guard.wait(policy.delay_seconds, self._sleep)
                continue

            self._transition(run_id, ConvergenceState.EVALUATING, attempt)
            if result.is_clean_success:
                self._transition(run_id, ConvergenceState.SUCCEEDED, attempt)
                self._logger.info(f"[{run_id}] {request.action.value} succeeded on attempt {attempt}")
                await self._publish("convergence.succeeded", run_id, request, {"attempt": attempt})
                return result

            last_result = result
            self._logger.warning(
                f"[{run_id}] attempt {attempt}/{policy.max_attempts} failed: "
                f"{result.error_message or 'no error text'}"
            )
            await self._publish(
                "convergence.attempt.failed",
                run_id,
                request,
                {"attempt": attempt, "error": result.error_message, "executed": True},
            )

            if is_last:
                break

            if regenerates:
                code = await self._regenerate(request, result, guard, run_id, attempt)
            await guard.wait(policy.delay_seconds, self._sleep)

        self._transition(run_id, ConvergenceState.EXHAUSTED, policy.max_attempts)
        self._logger.error(
            f"[{run_id}] {request.action.value} gave up after {policy.max_attempts} attempts"
        )
        await self._publish(
            "convergence.exhausted",
            run_id,
            request,
            {"attempts": policy.max_attempts, "error": last_result.error_message},
        )
        # a success reply with error text can be the last result
        return replace(last_result, succeeded=False)

    async def _attempt(
        self, request: ActionRequest, code: str, guard: CancellationGuard, run_id: str
    ) -> ActionResult:
        if request.action.requires_generation:
            self._transition(run_id, ConvergenceState.PREPARING)
            await self._preparer.prepare(
                request.context_id, request.workspace_id, code, checkpoint=guard.check
            )

        self._transition(run_id, ConvergenceState.EXECUTING)
        guard.check()
        response = await self._execute(request)
        return ActionResult.from_response(response, code)

    async def _execute(self, request: ActionRequest) -> ExecutorResponse:
        context_id, workspace_id = request.context_id, request.workspace_id
        if request.action is InfrastructureAction.PLAN:
            return await self._executor.plan(context_id, workspace_id)
        if request.action is InfrastructureAction.APPLY:
            return await self._executor.apply(context_id, workspace_id)
        return await self._executor.destroy(context_id, workspace_id)

    async def _regenerate(
        self,
        request: ActionRequest,
        result: ActionResult,
        guard: CancellationGuard,
        run_id: str,
        attempt: int,
    ) -> str:
        """Ask for fixed code; fall back to the current code on any generation failure."""
        self._transition(run_id, ConvergenceState.REGENERATING, attempt)
        failure = extract_failure(result)
        if failure.affected_resource:
            self._logger.info(f"[{run_id}] failing resource: {failure.affected_resource}")

        # nothing was staged, so there is no code to fix
        kind = PromptKind.ERROR_FIX if result.code.strip() else PromptKind.INITIAL
        prompt = build_prompt(
            kind,
            request.description,
            existing_code=result.code,
            failure=failure,
            provider=self._provider,
        )

        guard.check()
        try:
            new_code = await generate_code(self._generator, prompt)
        except GenerationError as e:
            self._logger.warning(f"[{run_id}] regeneration failed, keeping previous code: {e}")
            await self._publish(
                "convergence.regeneration.failed",
                run_id,
                request,
                {"attempt": attempt, "error": str(e)},
            )
            return result.code

        if not new_code:
            self._logger.warning(f"[{run_id}] regeneration returned no code, keeping previous code")
            await self._publish(
                "convergence.regeneration.failed",
                run_id,
                request,
                {"attempt": attempt, "error": "generator returned no code"},
            )
            return result.code
        if new_code == result.code:
            self._logger.info(f"[{run_id}] regenerated code is identical to the failed attempt")

        await self._publish(
            "convergence.regenerated",
            run_id,
            request,
            {"attempt": attempt, "affected_resource": failure.affected_resource},
        )
        return new_code

    def _transition(self, run_id: str, state: ConvergenceState, attempt: Optional[int] = None) -> None:
        suffix = f" (attempt {attempt})" if attempt is not None else ""
        level = logging.INFO if state.is_terminal else logging.DEBUG
        self._logger.log(level, f"[{run_id}] -> {state.value}{suffix}")

    async def _publish(
        self, name: str, run_id: str, request: ActionRequest, payload: dict[str, object]
    ) -> None:
        metadata = EventMetadata(
            run_id=run_id,
            context_id=request.context_id,
            workspace_id=request.workspace_id,
            action=request.action.value,
            timestamp=datetime.now(timezone.utc),
        )
        await self._event_bus.publish(Event(name=name, payload=payload, metadata=metadata))
