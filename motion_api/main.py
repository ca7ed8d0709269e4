"""
main.py — Motion API application

Builds the FastAPI app: logging, middleware, error handlers and routers.

Business Rules:
- Every response carries X-Request-ID (8 hex chars) and X-Response-Time
- Every response carries the standard security headers
- HTTP errors render as ErrorResponse {error, status_code, request_id, detail}
- Unhandled exceptions become 500 "Internal server error" and are logged

Called by: uvicorn (motion_api.main:app)
Depends on: motion_api.routers, motion_api.config, motion_api.logging_config
"""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .config import settings
from .http_client import close_clients
from .logging_config import setup_logging
from .rate_limit import limiter
from .routers import admin, adventures, ai, albums, community, health, placeholder, places, users
from .schemas.errors import ErrorResponse

setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Motion API starting",
        version=__version__,
        environment=settings.environment,
        backend=settings.backend_url,
    )
    yield
    await close_clients()
    logger.info("Motion API stopped")


app = FastAPI(title="Motion API", version=__version__, lifespan=lifespan)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Middleware ───────────────────────────────────────────────────────

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "X-API-Version": "v1",
}


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    request_id = uuid.uuid4().hex[:8]
    request.state.request_id = request_id
    started = time.perf_counter()
    with logger.contextualize(request_id=request_id):
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{elapsed_ms:.1f}ms"
        for name, value in SECURITY_HEADERS.items():
            response.headers[name] = value
        logger.info(
            "{} {} -> {} ({:.1f}ms)",
            request.method, request.url.path, response.status_code, elapsed_ms,
        )
    return response


# ── Error handlers ───────────────────────────────────────────────────


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    body = ErrorResponse(
        error=str(exc.detail),
        status_code=exc.status_code,
        request_id=_request_id(request),
    )
    return JSONResponse(
        body.model_dump(exclude_none=True),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    body = ErrorResponse(
        error="Validation error",
        status_code=422,
        request_id=_request_id(request),
        detail=[
            {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
            for err in exc.errors()
        ],
    )
    return JSONResponse(body.model_dump(), status_code=422)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.opt(exception=exc).error("Unhandled error on {} {}", request.method, request.url.path)
    body = ErrorResponse(
        error="Internal server error",
        status_code=500,
        request_id=_request_id(request),
    )
    return JSONResponse(body.model_dump(exclude_none=True), status_code=500)


# ── Routes ───────────────────────────────────────────────────────────


@app.get("/health")
async def liveness():
    return {"status": "ok", "version": __version__}


for module in (adventures, community, users, albums, places, ai, health, placeholder, admin):
    app.include_router(module.router)
