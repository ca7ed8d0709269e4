"""AI API — pass-through proxies to the Motion AI backend."""

import httpx
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from loguru import logger

from ..config import settings
from ..dependencies import read_json
from ..rate_limit import limiter
from ..services.adventure_service import utc_now_iso
from ..services.proxy_service import forward_json, check_backend

router = APIRouter(tags=["ai"])


@router.post("/api/ai/generate-plan")
@limiter.limit(settings.rate_limit_ai)
async def generate_plan(request: Request):
    body = await read_json(request)
    return await forward_json(
        "/api/ai/generate-plan",
        body,
        error_message="Failed to generate adventure plan",
        authorization=request.headers.get("authorization"),
        echo_status=True,
    )


@router.get("/api/ai/generate-plan")
async def generate_plan_health():
    """Health of the plan generator: checks the backend with a short timeout."""
    try:
        resp = await check_backend(timeout=settings.health_timeout_seconds)
    except httpx.HTTPError as e:
        logger.warning("Backend health check failed: {}", e)
        return JSONResponse(
            {
                "status": "UNHEALTHY",
                "backend": settings.backend_url,
                "error": str(e) or e.__class__.__name__,
                "timestamp": utc_now_iso(),
            },
            status_code=503,
        )
    return {
        "status": "OK" if resp.is_success else "UNHEALTHY",
        "backend": settings.backend_url,
        "timestamp": utc_now_iso(),
    }


@router.post("/api/ai/google-places")
@limiter.limit(settings.rate_limit_ai)
async def google_places(request: Request):
    body = await read_json(request)
    return await forward_json(
        "/api/ai/google-places", body, error_message="Failed to fetch place data",
    )


@router.post("/api/ai/regenerate-step")
@limiter.limit(settings.rate_limit_ai)
async def regenerate_step(request: Request):
    body = await read_json(request)
    return await forward_json(
        "/api/ai/regenerate-step", body, error_message="Failed to regenerate step",
    )
