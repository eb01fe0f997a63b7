"""Application service for Terraform requests."""

import asyncio
import logging
from typing import Optional

from core.application.dtos.terraform_dto import TerraformRequest, TerraformResponse
from core.application.interfaces import IExecutorClient, IGenerationClient
from core.domain.exceptions import EmptyCodeError
from core.domain.value_objects import ActionRequest, ActionResult
from orchestration.cancellation import CancellationGuard
from orchestration.generation import generate_code
from orchestration.orchestrator import ConvergenceOrchestrator
from orchestration.prompts import DEFAULT_PROVIDER, PromptKind, build_prompt, select_prompt_kind

logger = logging.getLogger(__name__)


class TerraformService:
    """
    Application service for natural-language Terraform requests.

    Responsibilities:
    - Resolve the code for the first attempt (supplied, generated or none)
    - Choose between initial and modification prompts
    - Hand the run to the convergence orchestrator
    - Transform the ActionResult into the response DTO
    """

    def __init__(
        self,
        executor: IExecutorClient,
        generator: IGenerationClient,
        orchestrator: ConvergenceOrchestrator,
        provider: str = DEFAULT_PROVIDER,
        request_timeout: Optional[float] = None,
    ) -> None:
        """Initialize Terraform service.

        Args:
            executor: Remote executor client
            generator: Code generation client
            orchestrator: Convergence orchestrator sharing the same clients
            provider: Cloud provider named in prompts
            request_timeout: Upper bound in seconds for one run, retries included
        """
        self._executor = executor
        self._generator = generator
        self._orchestrator = orchestrator
        self._provider = provider
        self._request_timeout = request_timeout

    async def process(
        self, request: TerraformRequest, cancel_event: Optional[asyncio.Event] = None
    ) -> TerraformResponse:
        """Run one request end to end.

        Raises:
            GenerationError: Initial generation failed
            TransportError: Current code could not be read
            EmptyCodeError: The description produced no infrastructure code
            CancellationError: Cancelled or past the request deadline
        """
        action_request = ActionRequest(
            description=request.description,
            context_id=request.context or "",
            workspace_id=request.workspace or "",
            action=request.action,
        )

        deadline = None
        if self._request_timeout is not None:
            deadline = asyncio.get_running_loop().time() + self._request_timeout
        guard = CancellationGuard(cancel_event, deadline)

        initial_code = await self.resolve_initial_code(action_request, request.code, guard)

        result = await self._orchestrator.run(
            action_request,
            initial_code,
            cancel_event=cancel_event,
            deadline=deadline,
        )
        return self._result_to_dto(result)

    async def resolve_initial_code(
        self,
        request: ActionRequest,
        supplied_code: Optional[str] = None,
        guard: Optional[CancellationGuard] = None,
    ) -> str:
        """Code for the first attempt.

        Destroy needs none; caller-supplied code is used as-is; otherwise the
        workspace's current code decides between a modification and an
        initial prompt.
        """
        guard = guard or CancellationGuard()
        if not request.action.requires_generation:
            return ""

        if supplied_code and supplied_code.strip():
            logger.info(f"Using caller-supplied code for {request.context_id}/{request.workspace_id}")
            return supplied_code

        guard.check()
        existing_code = await self._executor.get_current_code(request.context_id, request.workspace_id)
        kind = select_prompt_kind(existing_code)
        logger.info(
            f"Generating code for {request.context_id}/{request.workspace_id} ({kind.value} prompt)"
        )

        prompt = build_prompt(
            kind,
            request.description,
            existing_code=existing_code if kind is PromptKind.MODIFICATION else None,
            provider=self._provider,
        )
        guard.check()
        code = await generate_code(self._generator, prompt)
        if not code:
            raise EmptyCodeError("description did not produce infrastructure code")
        return code

    def _result_to_dto(self, result: ActionResult) -> TerraformResponse:
        return TerraformResponse(
            success=result.succeeded,
            code=result.code or None,
            output=result.output,
            error=result.error_message or None,
        )
