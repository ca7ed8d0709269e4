"""
proxy_service.py — Forward a JSON request to the Motion backend, relay the reply

Business Rules:
- Target is settings.backend_url + path (NEXT_PUBLIC_API_URL)
- Upstream status code is relayed unchanged, 2xx or not
- 2xx: upstream JSON body is relayed as-is
- non-2xx: {"error": <route message>, "details": <upstream text>}
- Transport failure or undecodable 2xx body: 500 {"error": "Internal server error", "details"}
- No retry

Called by: routers/ai.py
Depends on: http_client.py, config.py
"""

import httpx
from fastapi.responses import JSONResponse, Response
from loguru import logger

from ..config import settings


async def forward_json(
    path: str,
    body,
    *,
    error_message: str,
    authorization: str | None = None,
    echo_status: bool = False,
) -> Response:
    """POST `body` to the backend at `path` and relay the response."""
    from ..http_client import http

    url = f"{settings.backend_url}{path}"
    headers = {"Content-Type": "application/json"}
    if authorization:
        headers["Authorization"] = authorization

    logger.info("Proxying {} to {}", path, settings.backend_url)
    try:
        resp = await http.post(url, json=body, headers=headers)
        logger.debug("Backend responded {} for {}", resp.status_code, path)

        if not resp.is_success:
            details = resp.text
            logger.error("Backend request {} failed: {} {}", path, resp.status_code, details[:500])
            payload = {"error": error_message, "details": details}
            if echo_status:
                payload["status"] = resp.status_code
            return JSONResponse(payload, status_code=resp.status_code)

        if not resp.content:
            return Response(status_code=resp.status_code)
        return JSONResponse(resp.json(), status_code=resp.status_code)
    except (httpx.HTTPError, ValueError) as e:
        logger.error("Proxy error for {}: {}", path, e)
        return JSONResponse(
            {"error": "Internal server error", "details": str(e) or e.__class__.__name__},
            status_code=500,
        )


async def check_backend(timeout: float | None = None) -> httpx.Response:
    """GET the backend /health endpoint. Transport errors propagate."""
    from ..http_client import http

    kwargs = {"headers": {"User-Agent": "Motion-API-Health-Check/1.0"}}
    if timeout is not None:
        kwargs["timeout"] = timeout
    return await http.get(f"{settings.backend_url}/health", **kwargs)
