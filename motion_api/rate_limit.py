"""Shared rate limiter, in-memory storage keyed by client IP.

Limits are per worker process. AI proxy endpoints use the stricter
settings.rate_limit_ai; everything else gets settings.rate_limit_default
through SlowAPIMiddleware (registered in main.py).
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from .config import settings

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.rate_limit_default],
    enabled=settings.rate_limit_enabled,
)
