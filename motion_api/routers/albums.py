"""Albums API — user collections of saved places.

Every mutation checks that the caller's userId owns the album (403
otherwise). Reading an album is allowed for the owner or when it is public.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger
from postgrest.exceptions import APIError
from supabase import Client

from ..database import first_row, get_supabase
from ..schemas.albums import AlbumCreate, AlbumPlaceAdd, AlbumUpdate

router = APIRouter(prefix="/api/albums", tags=["albums"])

UNIQUE_VIOLATION = "23505"


def _owned_album(db: Client, album_id: str, user_id: str | None) -> dict:
    """Return the album row if `user_id` owns it, else raise 403."""
    try:
        album = first_row(db.table("albums").select("user_id").eq("id", album_id).limit(1).execute())
    except APIError as e:
        logger.warning("Album ownership lookup failed for {}: {}", album_id, e)
        album = None
    if not album or not user_id or album.get("user_id") != user_id:
        raise HTTPException(403, "Access denied")
    return album


@router.get("")
def list_albums(
    user_id: str | None = Query(None, alias="userId"),
    db: Client = Depends(get_supabase),
):
    if not user_id:
        raise HTTPException(400, "userId is required")
    try:
        albums = (
            db.table("albums")
            .select("*, album_places(id, saved_place_id, added_at, notes, sort_order)")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        ).data or []
    except Exception as e:
        logger.error("Error fetching albums for {}: {}", user_id, e)
        raise HTTPException(500, "Failed to fetch albums")
    return [{**a, "place_count": len(a.get("album_places") or [])} for a in albums]


@router.get("/{album_id}")
def get_album(
    album_id: str,
    user_id: str | None = Query(None, alias="userId"),
    db: Client = Depends(get_supabase),
):
    try:
        album = first_row(
            db.table("albums")
            .select("*, album_places(id, added_at, notes, sort_order, saved_places(*))")
            .eq("id", album_id)
            .limit(1)
            .execute()
        )
    except Exception as e:
        logger.error("Error fetching album {}: {}", album_id, e)
        raise HTTPException(500, "Failed to fetch album")
    if not album:
        raise HTTPException(404, "Album not found")
    if album.get("user_id") != user_id and not album.get("is_public"):
        raise HTTPException(403, "Access denied")
    return album


@router.post("")
def create_album(body: AlbumCreate, db: Client = Depends(get_supabase)):
    if not body.user_id or not body.name:
        raise HTTPException(400, "userId and name are required")
    row = {
        "user_id": body.user_id,
        "name": body.name,
        "description": body.description or None,
        "is_public": body.is_public,
        "cover_photo_url": body.cover_photo_url or None,
    }
    try:
        album = first_row(db.table("albums").insert(row).execute())
    except Exception as e:
        logger.error("Error creating album: {}", e)
        raise HTTPException(500, "Failed to create album")
    if not album:
        raise HTTPException(500, "Failed to create album")
    logger.info("Album created: {} {}", album.get("id"), album.get("name"))
    return album


@router.put("/{album_id}")
def update_album(album_id: str, body: AlbumUpdate, db: Client = Depends(get_supabase)):
    _owned_album(db, album_id, body.user_id)
    changes = body.model_dump(
        include={"name", "description", "is_public", "cover_photo_url"},
        exclude_none=True,
    )
    try:
        album = first_row(db.table("albums").update(changes).eq("id", album_id).execute())
    except Exception as e:
        logger.error("Error updating album {}: {}", album_id, e)
        raise HTTPException(500, "Failed to update album")
    if not album:
        raise HTTPException(500, "Failed to update album")
    logger.info("Album updated: {}", album_id)
    return album


@router.delete("/{album_id}")
def delete_album(
    album_id: str,
    user_id: str | None = Query(None, alias="userId"),
    db: Client = Depends(get_supabase),
):
    _owned_album(db, album_id, user_id)
    try:
        db.table("albums").delete().eq("id", album_id).execute()
    except Exception as e:
        logger.error("Error deleting album {}: {}", album_id, e)
        raise HTTPException(500, "Failed to delete album")
    logger.info("Album deleted: {}", album_id)
    return {"success": True}


# ── Album places ─────────────────────────────────────────────────────


@router.post("/{album_id}/places")
def add_place(album_id: str, body: AlbumPlaceAdd, db: Client = Depends(get_supabase)):
    _owned_album(db, album_id, body.user_id)
    row = {
        "album_id": album_id,
        "saved_place_id": body.saved_place_id,
        "notes": body.notes or None,
        "sort_order": body.sort_order or 0,
    }
    try:
        entry = first_row(db.table("album_places").insert(row).execute())
    except APIError as e:
        if e.code == UNIQUE_VIOLATION:
            raise HTTPException(409, "Place already in album")
        logger.error("Error adding place to album {}: {}", album_id, e)
        raise HTTPException(500, "Failed to add place to album")
    except Exception as e:
        logger.error("Error adding place to album {}: {}", album_id, e)
        raise HTTPException(500, "Failed to add place to album")
    if not entry:
        raise HTTPException(500, "Failed to add place to album")
    logger.info("Place added to album {}", album_id)
    return entry


@router.delete("/{album_id}/places/{place_id}")
def remove_place(
    album_id: str,
    place_id: str,
    user_id: str | None = Query(None, alias="userId"),
    db: Client = Depends(get_supabase),
):
    _owned_album(db, album_id, user_id)
    try:
        (
            db.table("album_places").delete()
            .eq("album_id", album_id)
            .eq("saved_place_id", place_id)
            .execute()
        )
    except Exception as e:
        logger.error("Error removing place from album {}: {}", album_id, e)
        raise HTTPException(500, "Failed to remove place from album")
    logger.info("Place removed from album {}", album_id)
    return {"success": True}
