"""
dependencies.py — Shared request helpers for routers

Some routes read the JSON body themselves instead of declaring a pydantic
body parameter, so a bad body maps to the route's own status and message
rather than the app-wide 422.

Business Rules:
- Unparseable JSON or a non-object body raises HTTPException(status, message)
- Field types a model rejects raise the same HTTPException

Called by: routers/ai.py, routers/community.py, routers/admin.py
Depends on: fastapi, pydantic
"""

from typing import TypeVar

from fastapi import HTTPException, Request
from loguru import logger
from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

INVALID_JSON = "Invalid JSON body"


async def read_json(request: Request, *, status_code: int = 400, message: str = INVALID_JSON):
    """Decoded JSON body, or HTTPException when it cannot be parsed."""
    try:
        return await request.json()
    except ValueError as e:
        logger.warning("Unparseable JSON body on {}: {}", request.url.path, e)
        raise HTTPException(status_code, message)


async def read_body(
    request: Request,
    model: type[ModelT],
    *,
    status_code: int = 400,
    message: str = INVALID_JSON,
) -> ModelT:
    """Parse the JSON body into `model`, mapping every failure to one error."""
    data = await read_json(request, status_code=status_code, message=message)
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.warning("Rejected body on {}: {}", request.url.path, e.errors())
        raise HTTPException(status_code, message)
