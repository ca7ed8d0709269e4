"""Saved Places API — a user's bookmarked Google places.

Saving the same Google place twice is not an error: the existing row is
returned flagged with alreadySaved. Deletes check ownership (403).
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger
from postgrest.exceptions import APIError
from supabase import Client

from ..database import first_row, get_supabase
from ..schemas.places import SavedPlaceCreate

router = APIRouter(prefix="/api/places", tags=["places"])

UNIQUE_VIOLATION = "23505"


@router.get("/saved")
def list_saved_places(
    user_id: str | None = Query(None, alias="userId"),
    db: Client = Depends(get_supabase),
):
    if not user_id:
        raise HTTPException(400, "userId is required")
    try:
        return (
            db.table("saved_places").select("*")
            .eq("user_id", user_id)
            .order("saved_at", desc=True)
            .execute()
        ).data or []
    except Exception as e:
        logger.error("Error fetching saved places for {}: {}", user_id, e)
        raise HTTPException(500, "Failed to fetch saved places")


def _existing_place(db: Client, user_id: str, google_place_id: str) -> dict | None:
    try:
        return first_row(
            db.table("saved_places").select("*")
            .eq("user_id", user_id)
            .eq("google_place_id", google_place_id)
            .limit(1)
            .execute()
        )
    except APIError as e:
        logger.error("Saved place lookup failed for {}: {}", google_place_id, e)
        return None


@router.post("/save")
def save_place(body: SavedPlaceCreate, db: Client = Depends(get_supabase)):
    if not body.user_id or not body.google_place_id or not body.business_name:
        raise HTTPException(400, "userId, googlePlaceId, and businessName are required")
    try:
        place = first_row(db.table("saved_places").insert(body.to_row()).execute())
    except APIError as e:
        if e.code != UNIQUE_VIOLATION:
            logger.error("Error saving place {}: {}", body.google_place_id, e)
            raise HTTPException(500, "Failed to save place")
        existing = _existing_place(db, body.user_id, body.google_place_id)
        if not existing:
            raise HTTPException(500, "Failed to save place")
        return {**existing, "alreadySaved": True}
    except Exception as e:
        logger.error("Error saving place {}: {}", body.google_place_id, e)
        raise HTTPException(500, "Failed to save place")
    if not place:
        raise HTTPException(500, "Failed to save place")
    logger.info("Place saved: {} for {}", body.business_name, body.user_id)
    return place


@router.delete("/saved/{place_id}")
def delete_saved_place(
    place_id: str,
    user_id: str | None = Query(None, alias="userId"),
    db: Client = Depends(get_supabase),
):
    try:
        place = first_row(
            db.table("saved_places").select("user_id").eq("id", place_id).limit(1).execute()
        )
    except APIError as e:
        logger.warning("Saved place ownership lookup failed for {}: {}", place_id, e)
        place = None
    if not place or not user_id or place.get("user_id") != user_id:
        raise HTTPException(403, "Access denied")

    try:
        db.table("saved_places").delete().eq("id", place_id).execute()
    except Exception as e:
        logger.error("Error deleting saved place {}: {}", place_id, e)
        raise HTTPException(500, "Failed to delete place")
    logger.info("Saved place deleted: {}", place_id)
    return {"success": True}
