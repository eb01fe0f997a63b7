"""
FastAPI Dependencies.

Provides dependency injection for clients and services.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables ONCE before any settings objects are created
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=_PROJECT_ROOT / ".env")

from core.application.interfaces import IExecutorClient, IGenerationClient
from core.application.services.terraform_service import TerraformService
from core.settings import get_app_settings
from orchestration import ConvergenceOrchestrator, RetryPolicy, create_default_orchestrator

logger = logging.getLogger(__name__)


# =============================================================================
# SINGLETON INSTANCES
# =============================================================================

_executor_client: Optional[IExecutorClient] = None
_generation_client: Optional[IGenerationClient] = None
_orchestrator: Optional[ConvergenceOrchestrator] = None
_terraform_service: Optional[TerraformService] = None


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_executor_client() -> IExecutorClient:
    global _executor_client
    if _executor_client is None:
        from core.infrastructure.adapters.executor import GrpcExecutorClient
        _executor_client = GrpcExecutorClient(get_app_settings().executor)
        logger.info(f"Using gRPC executor client: {_executor_client}")
    return _executor_client


def get_generation_client() -> IGenerationClient:
    global _generation_client
    if _generation_client is None:
        from core.infrastructure.adapters.llm import AnthropicGenerationClient
        _generation_client = AnthropicGenerationClient(get_app_settings().anthropic)
    return _generation_client


def get_retry_policy() -> RetryPolicy:
    retry = get_app_settings().retry
    return RetryPolicy(max_attempts=retry.max_attempts, delay_seconds=retry.delay_seconds)


def get_orchestrator() -> ConvergenceOrchestrator:
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = create_default_orchestrator(
            executor=get_executor_client(),
            generator=get_generation_client(),
            policy=get_retry_policy(),
            provider=get_app_settings().generation.provider,
        )
        logger.info(f"Created ConvergenceOrchestrator ({_orchestrator.policy})")
    return _orchestrator


def get_terraform_service() -> TerraformService:
    global _terraform_service
    if _terraform_service is None:
        settings = get_app_settings()
        _terraform_service = TerraformService(
            executor=get_executor_client(),
            generator=get_generation_client(),
            orchestrator=get_orchestrator(),
            provider=settings.generation.provider,
            request_timeout=settings.server.request_timeout_seconds,
        )
        logger.info("Created TerraformService instance")
    return _terraform_service


# =============================================================================
# SHUTDOWN / RESET
# =============================================================================

async def close_dependencies() -> None:
    """Close network clients that were actually created."""
    for client in (_executor_client, _generation_client):
        close = getattr(client, "close", None)
        if close is not None:
            await close()


def reset_dependencies():
    global _executor_client, _generation_client, _orchestrator, _terraform_service

    _executor_client = None
    _generation_client = None
    _orchestrator = None
    _terraform_service = None

    logger.info("Dependencies reset")
