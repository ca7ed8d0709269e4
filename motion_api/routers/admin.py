"""Admin API — subscription privilege management.

The update-privileges endpoint grants the pro tier to any user id it is
given. It performs no caller authentication.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Request
from loguru import logger
from supabase import Client

from ..database import first_row, get_supabase
from ..dependencies import read_body
from ..schemas.admin import PrivilegeUpdate
from ..services.usage_service import pro_entitlements

router = APIRouter(tags=["admin"])

UPDATE_FAILED = "Failed to update user privileges."


async def _privilege_body(request: Request) -> PrivilegeUpdate:
    return await read_body(request, PrivilegeUpdate, status_code=500, message=UPDATE_FAILED)


@router.post("/api/admin/update-privileges")
def update_privileges(
    body: PrivilegeUpdate = Depends(_privilege_body),
    db: Client = Depends(get_supabase),
):
    logger.info("Updating user privileges for {}", body.user_id)
    payload = pro_entitlements(body.user_id, datetime.now(timezone.utc))
    try:
        resp = db.table("profiles").upsert(payload, on_conflict="id").execute()
    except Exception as e:
        logger.error("Error updating user privileges for {}: {}", body.user_id, e)
        raise HTTPException(500, UPDATE_FAILED)

    logger.info("User privileges updated for {}", body.user_id)
    return {"message": "User privileges updated successfully!", "profile": first_row(resp)}
