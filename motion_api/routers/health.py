"""Health API — backend connectivity checks.

/api/test-railway reports success only when the backend /health call
itself returns 2xx. /api/health aggregates this service and the backend
into HEALTHY (200) or DEGRADED (503).
"""

import platform
import time

import httpx
from fastapi import APIRouter
from fastapi.responses import JSONResponse
from loguru import logger

from .. import __version__
from ..config import settings
from ..schemas.admin import HealthCheckRequest
from ..services.adventure_service import utc_now_iso
from ..services.proxy_service import check_backend

router = APIRouter(tags=["health"])

BACKEND_SERVICE = "Motion Railway Backend"
_STARTED_AT = time.monotonic()


@router.get("/api/test-railway")
async def test_railway():
    backend_url = settings.backend_url
    logger.info("Testing backend connection: {}", backend_url)
    try:
        resp = await check_backend()
        if not resp.is_success:
            details = resp.text
            logger.error("Backend health check failed: {} {}", resp.status_code, details[:500])
            return JSONResponse(
                {
                    "error": "Railway backend not responding",
                    "status": resp.status_code,
                    "details": details,
                    "backendUrl": backend_url,
                },
                status_code=500,
            )
        data = resp.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.error("Error connecting to backend {}: {}", backend_url, e)
        return JSONResponse(
            {
                "error": "Cannot connect to Railway backend",
                "details": str(e) or e.__class__.__name__,
                "backendUrl": backend_url,
            },
            status_code=500,
        )

    logger.info("Backend health check successful")
    return {
        "success": True,
        "message": "Railway backend connected successfully",
        "backendUrl": backend_url,
        "railwayResponse": data,
    }


async def _backend_status(timestamp: str) -> dict:
    started = time.perf_counter()
    try:
        resp = await check_backend(timeout=settings.health_timeout_seconds)
    except httpx.HTTPError as e:
        return {
            "status": "UNREACHABLE",
            "service": BACKEND_SERVICE,
            "timestamp": timestamp,
            "error": str(e) or e.__class__.__name__,
            "url": settings.backend_url,
        }

    if not resp.is_success:
        return {
            "status": "UNHEALTHY",
            "service": BACKEND_SERVICE,
            "timestamp": timestamp,
            "error": f"HTTP {resp.status_code}: {resp.reason_phrase}",
            "url": settings.backend_url,
        }

    try:
        data = resp.json()
    except ValueError:
        data = {}
    return {
        "status": "OK",
        "service": BACKEND_SERVICE,
        "timestamp": (data.get("timestamp") if isinstance(data, dict) else None) or timestamp,
        "responseTime": f"{round((time.perf_counter() - started) * 1000)}ms",
        "url": settings.backend_url,
    }


async def _health_report() -> tuple[dict, int]:
    timestamp = utc_now_iso()
    backend = await _backend_status(timestamp)
    overall = "HEALTHY" if backend["status"] == "OK" else "DEGRADED"
    report = {
        "status": overall,
        "timestamp": timestamp,
        "checks": {
            "frontend": {
                "status": "OK",
                "service": "Motion API",
                "timestamp": timestamp,
                "environment": settings.environment,
                "version": __version__,
            },
            "backend": backend,
        },
        "services": {
            "database": "Supabase (External)",
            "ai": "OpenAI (Backend Integrated)",
            "payments": "Stripe (Planned)",
            "deployment": {"frontend": "Vercel", "backend": "Railway"},
        },
        "environment": {
            "environment": settings.environment,
            "backend_url": settings.backend_url,
            "site_url": settings.site_url,
        },
    }
    return report, 200 if overall == "HEALTHY" else 503


@router.get("/api/health")
async def health_report():
    report, status_code = await _health_report()
    return JSONResponse(report, status_code=status_code)


@router.post("/api/health")
async def health_report_detailed(body: HealthCheckRequest | None = None):
    report, _ = await _health_report()
    if body is None or not body.include_details:
        return report
    backend = settings.backend_url
    report["diagnostics"] = {
        "uptime_seconds": round(time.monotonic() - _STARTED_AT, 1),
        "environment": {
            "platform": platform.system().lower(),
            "arch": platform.machine(),
            "python_version": platform.python_version(),
        },
        "endpoints": {
            "ai_generate": f"{backend}/api/ai/generate-plan",
            "places_enhance": f"{backend}/api/places/enhance",
            "adventures": f"{backend}/api/adventures",
        },
    }
    return report
