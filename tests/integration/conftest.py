"""Pytest configuration and fixtures for integration tests."""

from typing import Generator

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_terraform_service
from api.main import app
from core.application.services.terraform_service import TerraformService
from orchestration import ConvergenceOrchestrator, RetryPolicy
from tests.mocks import FakeExecutorClient, FakeGenerationClient


@pytest.fixture
def fake_executor() -> FakeExecutorClient:
    return FakeExecutorClient()


@pytest.fixture
def fake_generator() -> FakeGenerationClient:
    return FakeGenerationClient()


@pytest.fixture
def request_timeout() -> float | None:
    return None


@pytest.fixture
def test_client(fake_executor, fake_generator, request_timeout) -> Generator[TestClient, None, None]:
    """Create FastAPI test client wired to in-memory collaborators."""
    orchestrator = ConvergenceOrchestrator(
        executor=fake_executor,
        generator=fake_generator,
        policy=RetryPolicy(max_attempts=3, delay_seconds=0.0),
    )

    def override_get_terraform_service():
        return TerraformService(
            executor=fake_executor,
            generator=fake_generator,
            orchestrator=orchestrator,
            request_timeout=request_timeout,
        )

    app.dependency_overrides[get_terraform_service] = override_get_terraform_service

    with TestClient(app) as client:
        yield client

    # Cleanup
    app.dependency_overrides.clear()
