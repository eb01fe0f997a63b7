"""
gRPC Executor Client Implementation.

Talks to the remote Terraform executor over grpc.aio.
"""
from typing import Callable, Dict, Optional
import logging

import grpc

from core.application.interfaces import IExecutorClient
from core.domain.exceptions import TransportError
from core.domain.value_objects import ExecutorResponse
from core.infrastructure.adapters.executor.descriptors import (
    METHODS,
    message_class,
    method_path,
    new_message,
)
from core.settings.modules.executor_settings import ExecutorSettings


logger = logging.getLogger(__name__)

# response field carrying the command output, per action rpc
_OUTPUT_FIELDS = {
    "Plan": "plan_output",
    "Apply": "apply_output",
    "Destroy": "destroy_output",
}

_MISSING_CODE_MARKERS = ("not found", "does not exist", "no such file")


class GrpcExecutorClient(IExecutorClient):
    """
    gRPC implementation of the executor client.

    Every rpc failure (unreachable server, deadline, server error status)
    is raised as TransportError. Replies with success=False are returned
    as-is for the caller to interpret.
    """

    def __init__(self, settings: ExecutorSettings, channel: Optional[grpc.aio.Channel] = None):
        """
        Initialize gRPC executor client.

        Args:
            settings: Executor settings with server address and call timeout
            channel: Pre-built channel (tests); an insecure channel is opened otherwise
        """
        self.server_addr = settings.server_addr
        self.timeout = settings.timeout_seconds
        self._channel = channel or grpc.aio.insecure_channel(settings.server_addr)
        self._calls: Dict[str, Callable] = {
            method: self._channel.unary_unary(
                method_path(method),
                request_serializer=message_class(request_name).SerializeToString,
                response_deserializer=message_class(response_name).FromString,
            )
            for method, (request_name, response_name) in METHODS.items()
        }
        logger.info(f"GrpcExecutorClient initialized for {self.server_addr}")

    async def close(self) -> None:
        await self._channel.close()

    async def _call(self, method: str, **fields):
        request = new_message(METHODS[method][0], **fields)
        try:
            return await self._calls[method](request, timeout=self.timeout)
        except grpc.aio.AioRpcError as e:
            logger.error(f"Executor rpc {method} failed: {e.code().name} {e.details()}")
            raise TransportError(method, f"{e.code().name}: {e.details()}") from e

    async def _status_call(self, method: str, **fields) -> ExecutorResponse:
        reply = await self._call(method, **fields)
        return ExecutorResponse(success=reply.success, error=reply.error)

    async def _action_call(self, method: str, context_id: str, workspace_id: str) -> ExecutorResponse:
        reply = await self._call(method, context=context_id, workspace=workspace_id)
        return ExecutorResponse(
            success=reply.success,
            output=getattr(reply, _OUTPUT_FIELDS[method]),
            error=reply.error,
        )

    async def ensure_context(self, context_id: str) -> ExecutorResponse:
        return await self._status_call("CreateContext", context=context_id)

    async def ensure_workspace(self, context_id: str, workspace_id: str) -> ExecutorResponse:
        return await self._status_call("CreateWorkspace", context=context_id, workspace=workspace_id)

    async def clear_code(self, context_id: str, workspace_id: str) -> ExecutorResponse:
        return await self._status_call("ClearCode", context=context_id, workspace=workspace_id)

    async def append_code(self, context_id: str, workspace_id: str, code: str) -> ExecutorResponse:
        return await self._status_call(
            "AppendCode", context=context_id, workspace=workspace_id, code=code
        )

    async def plan(self, context_id: str, workspace_id: str) -> ExecutorResponse:
        return await self._action_call("Plan", context_id, workspace_id)

    async def apply(self, context_id: str, workspace_id: str) -> ExecutorResponse:
        return await self._action_call("Apply", context_id, workspace_id)

    async def destroy(self, context_id: str, workspace_id: str) -> ExecutorResponse:
        return await self._action_call("Destroy", context_id, workspace_id)

    async def get_current_code(self, context_id: str, workspace_id: str) -> str:
        """
        Read main.tf of a workspace.

        NOT_FOUND and "not found"-style replies mean nothing is staged yet.
        """
        request = new_message("GetMainTfRequest", context=context_id, workspace=workspace_id)
        try:
            reply = await self._calls["GetMainTf"](request, timeout=self.timeout)
        except grpc.aio.AioRpcError as e:
            if e.code() == grpc.StatusCode.NOT_FOUND:
                return ""
            raise TransportError("GetMainTf", f"{e.code().name}: {e.details()}") from e

        if not reply.success:
            if any(marker in reply.error.lower() for marker in _MISSING_CODE_MARKERS):
                return ""
            raise TransportError("GetMainTf", reply.error or "executor reported failure")

        return reply.content

    def __repr__(self) -> str:
        return f"GrpcExecutorClient({self.server_addr!r})"
