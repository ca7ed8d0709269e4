"""Supabase client factory and query helpers.

All persistence goes through Supabase (PostgREST). One client per
(url, key) pair is created lazily and reused across requests.
"""

from functools import lru_cache

from fastapi import HTTPException
from loguru import logger
from supabase import Client, create_client

from .config import get_settings


@lru_cache
def _client_for(url: str, key: str) -> Client:
    return create_client(url, key)


def get_supabase() -> Client:
    """FastAPI dependency: the service-role Supabase client.

    Raises 500 when the URL or key is not configured, so routes fail the
    same way whether or not the environment is complete.
    """
    settings = get_settings()
    url, key = settings.resolved_supabase_url, settings.supabase_key
    if not url or not key:
        logger.error("Missing Supabase environment variables")
        raise HTTPException(500, "Supabase configuration missing")
    return _client_for(url, key)


def first_row(response) -> dict | None:
    """First row of a PostgREST response, or None when it returned nothing."""
    data = response.data if response is not None else None
    if not data:
        return None
    if isinstance(data, list):
        return data[0]
    return data
