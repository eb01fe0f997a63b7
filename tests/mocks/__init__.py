"""Test doubles for the executor and generation collaborators."""

from .fake_executor import FakeExecutorClient
from .fake_generator import FakeGenerationClient

__all__ = ["FakeExecutorClient", "FakeGenerationClient"]
