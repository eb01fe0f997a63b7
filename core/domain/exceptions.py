"""
Domain exceptions.

Collaborator failures surfaced to the convergence loop and the API layer.
An executor run that reports failure is NOT an exception; it comes back as an
ActionResult with succeeded=False.
"""
from typing import Optional


class TerraformPipelineError(Exception):
    """Base class for all pipeline errors."""


class TransportError(TerraformPipelineError):
    """A collaborator was unreachable or the call failed at protocol level."""

    def __init__(self, operation: str, message: str):
        self.operation = operation
        self.message = message
        super().__init__(f"{operation} failed: {message}")


class PreparationError(TerraformPipelineError):
    """A workspace preparation step failed."""

    def __init__(self, step: str, message: str):
        self.step = step
        self.message = message
        super().__init__(f"workspace preparation failed at '{step}': {message}")


class GenerationError(TerraformPipelineError):
    """The generation service could not produce code."""

    def __init__(self, message: str, model: Optional[str] = None):
        self.message = message
        self.model = model
        super().__init__(message)


class CancellationError(TerraformPipelineError):
    """The run was cancelled or ran past its deadline."""


class EmptyCodeError(TerraformPipelineError):
    """The generator returned no code for a request that needs some."""


__all__ = [
    "TerraformPipelineError",
    "TransportError",
    "PreparationError",
    "GenerationError",
    "CancellationError",
    "EmptyCodeError",
]
