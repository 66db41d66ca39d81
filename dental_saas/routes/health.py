"""
Dental SaaS Backend — Health Check and API Info Routes
========================================================

What:  Liveness/readiness check and a small API index.
Who:   Called by Docker health checks, load balancers and API clients.

Status levels:
    - healthy:   store reachable (HTTP 200)
    - unhealthy: store unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Request, Response, status

from dental_saas import __version__
from dental_saas.entities import MODULES
from dental_saas.schemas.common import ApiInfoResponse, HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse, "description": "Store unreachable"}},
    summary="Service health check",
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    """
    Check the store with a lightweight round trip and report aggregate status.

    Store.ping() never raises; a False result turns the response into 503.
    """
    store = request.app.state.store
    if await store.ping():
        db_status, overall = "connected", "healthy"
    else:
        db_status, overall = "disconnected", "unhealthy"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("Health check: store unreachable")

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )


@router.get("/api/v1", response_model=ApiInfoResponse, summary="API version and modules")
async def api_info() -> ApiInfoResponse:
    return ApiInfoResponse(version="v1", modules=list(MODULES))
