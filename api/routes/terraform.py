"""
Terraform endpoint.

Turns a natural-language request into Terraform and runs it through
the convergence loop.
"""
from fastapi import APIRouter, Depends, HTTPException, Request, status
import asyncio
import logging

from api.dependencies import get_terraform_service
from core.application.dtos.terraform_dto import TerraformRequest, TerraformResponse
from core.application.services.terraform_service import TerraformService
from core.domain.exceptions import (
    CancellationError,
    EmptyCodeError,
    GenerationError,
    TransportError,
)


logger = logging.getLogger(__name__)
router = APIRouter()

DISCONNECT_POLL_SECONDS = 1.0


async def watch_disconnect(
    http_request: Request,
    cancel_event: asyncio.Event,
    interval: float = DISCONNECT_POLL_SECONDS,
) -> None:
    """Set `cancel_event` once the client goes away."""
    while not cancel_event.is_set():
        if await http_request.is_disconnected():
            logger.warning(f"Client disconnected from {http_request.url.path}, cancelling run")
            cancel_event.set()
            return
        await asyncio.sleep(interval)


@router.post(
    "/terraform",
    response_model=TerraformResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Plan, apply or destroy infrastructure from a description",
    description="""
    Generates Terraform code for the description (unless `code` is given or
    the action is `destroy`) and runs the action, regenerating the code
    after each failure until it succeeds or the retry budget runs out.

    A 200 response means the run happened; check `success` for its outcome.
    """
)
async def run_terraform(
    request: TerraformRequest,
    http_request: Request,
    service: TerraformService = Depends(get_terraform_service),
) -> TerraformResponse:
    """
    Run a Terraform action.

    **Body:**
    - `description`: What infrastructure to create or change
    - `context`, `workspace`: Executor target (default: `default`)
    - `action`: `plan` (default), `apply` or `destroy`
    - `code`: Optional existing code to run as-is on the first attempt
    """
    cancel_event = asyncio.Event()
    watcher = asyncio.create_task(watch_disconnect(http_request, cancel_event))
    try:
        return await service.process(request, cancel_event)

    except EmptyCodeError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except GenerationError as e:
        logger.error(f"Initial generation failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to generate code: {e}",
        )
    except TransportError as e:
        logger.error(f"Executor unavailable: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to reach executor: {e}",
        )
    except CancellationError as e:
        logger.warning(f"Terraform request aborted: {e}")
        raise HTTPException(status_code=status.HTTP_504_GATEWAY_TIMEOUT, detail=str(e))
    finally:
        watcher.cancel()
