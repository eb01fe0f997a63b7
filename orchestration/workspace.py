"""Workspace preparer - stages a known code state in the remote executor."""

from collections.abc import Awaitable, Callable
from typing import Optional

from core.application.interfaces import IExecutorClient
from core.domain.exceptions import PreparationError, TransportError
from core.domain.value_objects import ExecutorResponse
from core.infrastructure.logging import get_logger

Checkpoint = Callable[[], None]

_ALREADY_EXISTS = ("already exists",)
_NOTHING_STAGED = ("not found", "does not exist", "no such file")


def _mentions(error: str, phrases: tuple[str, ...]) -> bool:
    lowered = (error or "").lower()
    return any(phrase in lowered for phrase in phrases)


class WorkspacePreparer:
    """Replace a workspace's staged code wholesale.

    Steps run strictly in order:
    1. clear staged code (a missing workspace counts as already clear)
    2. ensure the context, then the workspace ("already exists" is fine)
    3. append the new code
    """

    def __init__(self, executor: IExecutorClient) -> None:
        self._executor = executor
        self._logger = get_logger("orchestration.workspace")

    async def prepare(
        self,
        context_id: str,
        workspace_id: str,
        code: str,
        checkpoint: Optional[Checkpoint] = None,
    ) -> None:
        """Stage `code` as the complete configuration of the workspace.

        Args:
            context_id: Executor context
            workspace_id: Workspace inside the context
            code: Terraform code to stage
            checkpoint: Called before every remote call; may raise to abort

        Raises:
            PreparationError: If any step fails
        """
        executor = self._executor

        await self._step(
            "clear_code",
            lambda: executor.clear_code(context_id, workspace_id),
            checkpoint,
            tolerated=_NOTHING_STAGED,
        )
        await self._step(
            "ensure_context",
            lambda: executor.ensure_context(context_id),
            checkpoint,
            tolerated=_ALREADY_EXISTS,
        )
        await self._step(
            "ensure_workspace",
            lambda: executor.ensure_workspace(context_id, workspace_id),
            checkpoint,
            tolerated=_ALREADY_EXISTS,
        )
        await self._step(
            "append_code",
            lambda: executor.append_code(context_id, workspace_id, code),
            checkpoint,
        )

        self._logger.info(
            f"Workspace {context_id}/{workspace_id} prepared ({len(code)} chars staged)"
        )

    async def _step(
        self,
        name: str,
        call: Callable[[], Awaitable[ExecutorResponse]],
        checkpoint: Optional[Checkpoint],
        tolerated: tuple[str, ...] = (),
    ) -> None:
        if checkpoint is not None:
            checkpoint()

        try:
            response = await call()
        except TransportError as e:
            raise PreparationError(name, e.message) from e

        if response.success:
            return
        if tolerated and _mentions(response.error, tolerated):
            self._logger.debug(f"{name}: tolerated executor reply: {response.error}")
            return

        raise PreparationError(name, response.error or "executor reported failure")
