"""
Terraform Request Processor - Main FastAPI Application.

REST API that turns natural-language infrastructure requests into
Terraform and drives them through plan / apply / destroy on the
remote executor.
"""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import argparse
import logging
import os
import time

from api.dependencies import close_dependencies
from api.routes import health, terraform
from core.infrastructure.logging import configure_logging


# Setup logging
configure_logging(os.getenv("LOG_LEVEL", "INFO"))
logger = logging.getLogger(__name__)


# =============================================================================
# CREATE FASTAPI APP
# =============================================================================

app = FastAPI(
    title="Terraform Request Processor",
    description="""
    Natural-language infrastructure changes.

    Features:
    - Terraform generation from a description
    - Modification of code already staged in a workspace
    - Plan / apply / destroy on a remote executor
    - Automatic error-driven regeneration with bounded retries
    """,
    version=health.VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)


# =============================================================================
# REQUEST LOGGING MIDDLEWARE
# =============================================================================

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests with timing."""
    start_time = time.time()

    logger.info(f"→ {request.method} {request.url.path}")

    response = await call_next(request)

    duration = time.time() - start_time
    logger.info(
        f"← {request.method} {request.url.path} "
        f"[{response.status_code}] ({duration:.3f}s)"
    )

    return response


# =============================================================================
# GLOBAL EXCEPTION HANDLER
# =============================================================================

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all uncaught exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": str(exc),
            "path": request.url.path
        }
    )


# =============================================================================
# STARTUP/SHUTDOWN EVENTS
# =============================================================================

@app.on_event("startup")
async def startup_event():
    """Run on application startup."""
    logger.info("Terraform Request Processor starting up...")


@app.on_event("shutdown")
async def shutdown_event():
    """Run on application shutdown."""
    await close_dependencies()
    logger.info("Terraform Request Processor shut down")


# =============================================================================
# INCLUDE ROUTERS
# =============================================================================

app.include_router(health.router, tags=["Health"])
app.include_router(terraform.router, tags=["Terraform"])


@app.get("/", tags=["Root"])
async def root():
    """API root endpoint."""
    return {
        "message": "Terraform Request Processor",
        "version": health.VERSION,
        "docs": "/docs",
        "health": "/health"
    }


# =============================================================================
# ENTRY POINT
# =============================================================================

def run():
    """Start the API server (console script `terraform-processor`)."""
    parser = argparse.ArgumentParser(description="Terraform request processor")
    parser.add_argument("--config", default=None, help="path to YAML config file")
    args = parser.parse_args()

    if args.config:
        os.environ["CONFIG_PATH"] = args.config

    import uvicorn
    from core.settings import get_app_settings

    settings = get_app_settings()
    logger.info(f"Server starting on {settings.server.host}:{settings.server.port}")
    uvicorn.run(app, host=settings.server.host, port=settings.server.port)


if __name__ == "__main__":
    run()
