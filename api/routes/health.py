"""
Health check endpoints.

Used for monitoring and load balancer health checks.
"""
from fastapi import APIRouter
from datetime import datetime, timezone
import platform

from core.settings import get_app_settings


router = APIRouter()

SERVICE_NAME = "terraform-request-processor"
VERSION = "1.0.0"


@router.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns system health status.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": SERVICE_NAME,
        "version": VERSION,
        "python_version": platform.python_version(),
    }


@router.get("/health/ready")
async def readiness_check():
    """
    Readiness check endpoint.

    Reports whether the collaborators are configured. It does not call them.
    """
    settings = get_app_settings()
    generator_ready = bool(settings.anthropic.api_key)

    return {
        "status": "ready" if generator_ready else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {
            "api": "ok",
            "generator": "ok" if generator_ready else "missing ANTHROPIC_API_KEY",
            "executor": settings.executor.server_addr,
        },
        "retry": {
            "max_attempts": settings.retry.max_attempts,
            "delay_seconds": settings.retry.delay_seconds,
        },
    }
