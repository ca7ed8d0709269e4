"""Pooled httpx client for the Motion backend (AI plans, Google Places, health).

Redirects are not followed so an upstream redirect reaches the caller as
is. Health checks pass their own shorter timeout per call. Callers import
`http` inside the function so a patched `motion_api.http_client.http` is seen.
"""

import httpx

from .config import settings

http = httpx.AsyncClient(
    timeout=settings.backend_timeout_seconds,
    limits=httpx.Limits(max_connections=50, max_keepalive_connections=20, keepalive_expiry=30),
    follow_redirects=False,
)


async def close_clients():
    """Close the pool at shutdown. Safe to call twice."""
    try:
        await http.aclose()
    except RuntimeError:
        pass
