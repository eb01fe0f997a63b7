"""Application layer interfaces."""
from abc import ABC, abstractmethod

from core.domain.value_objects import ExecutorResponse


class IExecutorClient(ABC):
    """
    Interface for the remote Terraform executor.

    Every workspace is addressed by a (context, workspace) pair. Operations
    return an ExecutorResponse; a response with success=False means the
    executor ran and refused. Implementations raise TransportError when the
    executor cannot be reached at all.
    """

    @abstractmethod
    async def ensure_context(self, context_id: str) -> ExecutorResponse:
        """Create the context. An "already exists" error may be returned."""
        pass

    @abstractmethod
    async def ensure_workspace(self, context_id: str, workspace_id: str) -> ExecutorResponse:
        """Create the workspace inside the context."""
        pass

    @abstractmethod
    async def clear_code(self, context_id: str, workspace_id: str) -> ExecutorResponse:
        """Remove all staged code from the workspace."""
        pass

    @abstractmethod
    async def append_code(self, context_id: str, workspace_id: str, code: str) -> ExecutorResponse:
        """Append a code snippet to the staged configuration."""
        pass

    @abstractmethod
    async def plan(self, context_id: str, workspace_id: str) -> ExecutorResponse:
        pass

    @abstractmethod
    async def apply(self, context_id: str, workspace_id: str) -> ExecutorResponse:
        pass

    @abstractmethod
    async def destroy(self, context_id: str, workspace_id: str) -> ExecutorResponse:
        pass

    @abstractmethod
    async def get_current_code(self, context_id: str, workspace_id: str) -> str:
        """
        Get the staged configuration of a workspace.

        Returns:
            Code text, or an empty string when nothing is staged yet
            or the workspace does not exist.
        """
        pass


class IGenerationClient(ABC):
    """
    Interface for the code generation service.
    """

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """
        Generate text for a prompt.

        Raises:
            GenerationError: If the service failed to produce a response
        """
        pass


__all__ = ["IExecutorClient", "IGenerationClient"]
