"""Adventures API — fetch, save, list, schedule, track progress, public feed."""

from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger
from postgrest.exceptions import APIError
from supabase import Client

from ..database import first_row, get_supabase
from ..schemas.adventures import (
    AdventureCreate,
    AdventureDetailResponse,
    AdventureOwner,
    AdventureSave,
    AdventureSchedule,
    StepReorder,
    StepToggle,
)
from ..services.adventure_service import (
    all_steps_completed,
    attach_profiles,
    build_quick_row,
    build_saved_row,
    merge_user_adventures,
    month_window,
    reorder_steps,
    to_calendar_event,
    to_client,
    to_detail_view,
    toggle_step,
    utc_now_iso,
)

router = APIRouter(tags=["adventures"])

PUBLIC_FEED_LIMIT = 50


# ── List / quick save ────────────────────────────────────────────────


@router.get("/api/adventures")
def list_adventures(
    user_id: str | None = Query(None, alias="userId"),
    db: Client = Depends(get_supabase),
):
    if not user_id:
        raise HTTPException(400, "User ID is required.")
    try:
        resp = (
            db.table("adventures").select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
    except Exception as e:
        logger.error("Supabase error listing adventures for {}: {}", user_id, e)
        raise HTTPException(500, "Failed to fetch adventures.")
    return {"adventures": resp.data or []}


@router.post("/api/adventures")
def create_adventure(body: AdventureCreate, db: Client = Depends(get_supabase)):
    logger.info("Saving adventure '{}' for {}", body.adventure.get("title"), body.user_id)
    row = build_quick_row(body.user_id, body.adventure, body.scheduled_for, utc_now_iso())
    try:
        saved = first_row(db.table("adventures").insert(row).execute())
    except Exception as e:
        logger.error("Supabase error saving adventure: {}", e)
        raise HTTPException(500, "Failed to save adventure to database.")
    if not saved:
        raise HTTPException(500, "Failed to save adventure to database.")
    logger.info("Adventure saved: {}", saved.get("id"))
    return {"message": "Adventure saved successfully!", "adventureId": saved.get("id")}


# ── Full save (with defaults + usage counter) ────────────────────────


@router.post("/api/adventures/save")
def save_adventure(body: AdventureSave, db: Client = Depends(get_supabase)):
    if not body.user_id or not body.adventure:
        raise HTTPException(400, "Missing required fields: userId and adventure")

    try:
        user = first_row(db.table("profiles").select("id").eq("id", body.user_id).limit(1).execute())
    except APIError as e:
        logger.warning("Profile lookup failed for {}: {}", body.user_id, e)
        user = None
    if not user:
        raise HTTPException(404, "User not found")

    row = build_saved_row(body.user_id, body.adventure, body.scheduled_date, utc_now_iso())
    try:
        saved = first_row(db.table("adventures").insert(row).execute())
    except Exception as e:
        logger.error("Error saving adventure for {}: {}", body.user_id, e)
        raise HTTPException(500, "Failed to save adventure")

    try:
        db.rpc("increment_monthly_generations", {"user_id": body.user_id}).execute()
    except Exception as e:
        logger.warning("Failed to update generation count for {}: {}", body.user_id, e)

    return {"success": True, "data": saved, "message": "Adventure saved successfully"}


@router.get("/api/adventures/save")
def list_saved_adventures(
    user_id: str | None = Query(None, alias="userId"),
    db: Client = Depends(get_supabase),
):
    if not user_id:
        raise HTTPException(400, "User ID is required")
    try:
        resp = (
            db.table("adventures").select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
    except Exception as e:
        logger.error("Error fetching adventures for {}: {}", user_id, e)
        raise HTTPException(500, "Failed to fetch adventures")
    return {"success": True, "data": [to_client(a) for a in resp.data or []]}


# ── Public feed ──────────────────────────────────────────────────────


@router.get("/api/adventures/public")
def public_adventures(db: Client = Depends(get_supabase)):
    try:
        adventures = (
            db.table("community_adventures")
            .select("*, adventure_photos(photo_url, is_cover_photo)")
            .eq("is_public", True)
            .order("shared_date", desc=True)
            .limit(PUBLIC_FEED_LIMIT)
            .execute()
        ).data or []
    except Exception as e:
        logger.error("Supabase error fetching public adventures: {}", e)
        raise HTTPException(500, "Failed to fetch adventures.")

    if not adventures:
        return {"adventures": []}

    user_ids = list(dict.fromkeys(a.get("user_id") for a in adventures))
    try:
        profiles = (
            db.table("profiles")
            .select("id, display_name, first_name, last_name, profile_picture_url")
            .in_("id", user_ids)
            .execute()
        ).data or []
    except APIError as e:
        logger.warning("Profile lookup for public feed failed: {}", e)
        return {"adventures": adventures}

    logger.info("Fetched {} public adventures", len(adventures))
    return {"adventures": attach_profiles(adventures, profiles)}


@router.get("/api/adventures/user/{user_id}")
def user_adventures(user_id: str, db: Client = Depends(get_supabase)):
    """Personal and shared adventures for a user, newest first per table."""
    personal, community = [], []
    try:
        personal = (
            db.table("adventures").select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        ).data or []
    except APIError as e:
        logger.error("Error fetching personal adventures for {}: {}", user_id, e)
    try:
        community = (
            db.table("community_adventures").select("*")
            .eq("user_id", user_id)
            .order("shared_date", desc=True)
            .execute()
        ).data or []
    except APIError as e:
        logger.error("Error fetching community adventures for {}: {}", user_id, e)

    merged = merge_user_adventures(personal, community)
    logger.info(
        "Found {} personal + {} community adventures for {}",
        len(personal), len(community), user_id,
    )
    return merged


@router.get("/api/adventures/photos")
def adventure_photos(
    adventure_id: str | None = Query(None, alias="adventureId"),
    db: Client = Depends(get_supabase),
):
    if not adventure_id:
        raise HTTPException(400, "adventureId required")
    try:
        photos = (
            db.table("adventure_photos").select("*")
            .eq("adventure_id", adventure_id)
            .order("step_index")
            .execute()
        ).data or []
    except Exception as e:
        logger.error("Error fetching photos for {}: {}", adventure_id, e)
        raise HTTPException(500, "Failed to fetch photos")
    return {"photos": photos}


@router.get("/api/adventures/calendar/{user_id}")
def adventure_calendar(
    user_id: str,
    month: str | None = None,
    year: str | None = None,
    db: Client = Depends(get_supabase),
):
    """Scheduled adventures as calendar events, optionally for one month."""
    query = (
        db.table("adventures")
        .select("id, title, scheduled_date, scheduled_start_time, location, duration, is_completed, steps")
        .eq("user_id", user_id)
        .not_.is_("scheduled_date", "null")
    )
    if month and year:
        try:
            start, end = month_window(month, year)
        except ValueError:
            raise HTTPException(400, "month and year must be a valid calendar month")
        query = query.gte("scheduled_date", start).lte("scheduled_date", end)

    try:
        rows = query.order("scheduled_date").execute().data or []
    except Exception as e:
        logger.error("Error fetching calendar for {}: {}", user_id, e)
        raise HTTPException(500, "Failed to fetch calendar data")
    return {"success": True, "events": [to_calendar_event(r) for r in rows]}


# ── Single adventure ─────────────────────────────────────────────────


@router.get("/api/adventures/{adventure_id}", response_model=AdventureDetailResponse)
def get_adventure(adventure_id: str, db: Client = Depends(get_supabase)):
    if not adventure_id.strip():
        raise HTTPException(400, "Adventure ID is required.")
    try:
        row = first_row(
            db.table("adventures").select("*").eq("id", adventure_id).limit(1).execute()
        )
    except APIError as e:
        logger.error("Supabase error fetching adventure {}: {}", adventure_id, e)
        raise HTTPException(404, "Adventure not found.")
    except Exception as e:
        logger.error("Error fetching adventure {}: {}", adventure_id, e)
        raise HTTPException(500, "Failed to fetch adventure.")
    if not row:
        raise HTTPException(404, "Adventure not found.")
    return {"adventure": to_detail_view(row)}


@router.put("/api/adventures/{adventure_id}/steps/reorder")
def reorder_adventure_steps(
    adventure_id: str,
    body: StepReorder,
    db: Client = Depends(get_supabase),
):
    """Swap two steps' step_order values."""
    if not adventure_id.strip():
        raise HTTPException(400, "Adventure ID is required")
    from_index, to_index = body.from_index, body.to_index
    if not all(isinstance(i, int) and not isinstance(i, bool) for i in (from_index, to_index)):
        raise HTTPException(400, "Both fromIndex and toIndex are required and must be numbers")

    try:
        adventure = first_row(
            db.table("adventures").select("steps").eq("id", adventure_id).limit(1).execute()
        )
    except APIError as e:
        logger.error("Error fetching adventure {}: {}", adventure_id, e)
        adventure = None
    if not adventure:
        raise HTTPException(404, "Adventure not found")

    try:
        steps = reorder_steps(adventure.get("steps"), from_index, to_index)
    except ValueError as e:
        raise HTTPException(400, str(e))

    try:
        updated = first_row(
            db.table("adventures")
            .update({"steps": steps, "updated_at": utc_now_iso()})
            .eq("id", adventure_id)
            .execute()
        )
    except Exception as e:
        logger.error("Error updating steps for adventure {}: {}", adventure_id, e)
        raise HTTPException(500, "Failed to reorder steps")

    return {
        "success": True,
        "message": f"Step {from_index + 1} moved to position {to_index + 1}",
        "steps": (updated or {}).get("steps", steps),
    }


# ── Scheduling and progress ──────────────────────────────────────────


def _owned_adventure(db: Client, adventure_id: str, user_id: str, columns: str) -> dict:
    """Fetch `columns` of the caller's adventure, or raise 404."""
    try:
        adventure = first_row(
            db.table("adventures").select(columns)
            .eq("id", adventure_id)
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
    except APIError as e:
        logger.error("Error fetching adventure {}: {}", adventure_id, e)
        adventure = None
    if not adventure:
        raise HTTPException(404, "Adventure not found")
    return adventure


def _update_owned(db: Client, adventure_id: str, user_id: str, changes: dict, failure: str) -> dict:
    try:
        updated = first_row(
            db.table("adventures").update(changes)
            .eq("id", adventure_id)
            .eq("user_id", user_id)
            .execute()
        )
    except Exception as e:
        logger.error("Error updating adventure {}: {}", adventure_id, e)
        raise HTTPException(500, failure)
    if not updated:
        raise HTTPException(404, "Adventure not found")
    return updated


@router.patch("/api/adventures/{adventure_id}/schedule")
def schedule_adventure(
    adventure_id: str,
    body: AdventureSchedule,
    db: Client = Depends(get_supabase),
):
    if not adventure_id.strip() or not body.scheduled_date or not body.user_id:
        raise HTTPException(400, "Adventure ID, scheduled date, and user ID are required")
    updated = _update_owned(
        db, adventure_id, body.user_id,
        {"scheduled_date": body.scheduled_date, "is_scheduled": True},
        "Failed to schedule adventure",
    )
    logger.info("Adventure {} scheduled for {}", adventure_id, body.scheduled_date)
    return {"success": True, "adventure": updated}


@router.patch("/api/adventures/{adventure_id}/steps/{step_id}/toggle")
def toggle_adventure_step(
    adventure_id: str,
    step_id: str,
    body: StepToggle,
    db: Client = Depends(get_supabase),
):
    """Mark one step done or not done, completing the adventure with its last step."""
    if not adventure_id.strip() or not step_id.strip() or not body.user_id:
        raise HTTPException(400, "Adventure ID, step ID, and user ID are required")
    adventure = _owned_adventure(
        db, adventure_id, body.user_id, "steps, steps_completed, is_completed"
    )
    changes, all_done = toggle_step(adventure, step_id, body.completed, utc_now_iso())
    updated = _update_owned(db, adventure_id, body.user_id, changes, "Failed to update step")
    return {
        "success": True,
        "adventure": updated,
        "step_updated": step_id,
        "all_completed": all_done,
    }


@router.patch("/api/adventures/{adventure_id}/complete")
def complete_adventure(
    adventure_id: str,
    body: AdventureOwner,
    db: Client = Depends(get_supabase),
):
    if not adventure_id.strip() or not body.user_id:
        raise HTTPException(400, "Adventure ID and user ID are required")
    adventure = _owned_adventure(db, adventure_id, body.user_id, "steps")
    if not all_steps_completed(adventure.get("steps")):
        raise HTTPException(400, "Cannot mark adventure as completed - not all steps are finished")
    now = utc_now_iso()
    updated = _update_owned(
        db, adventure_id, body.user_id,
        {"is_completed": True, "completed_at": now, "updated_at": now},
        "Failed to complete adventure",
    )
    logger.info("Adventure {} completed", adventure_id)
    return {"success": True, "adventure": updated}


@router.delete("/api/adventures/{adventure_id}")
def delete_adventure(
    adventure_id: str,
    user_id: str | None = Query(None, alias="userId"),
    db: Client = Depends(get_supabase),
):
    if not adventure_id.strip() or not user_id:
        raise HTTPException(400, "Adventure ID and user ID are required")
    try:
        db.table("adventures").delete().eq("id", adventure_id).eq("user_id", user_id).execute()
    except Exception as e:
        logger.error("Error deleting adventure {}: {}", adventure_id, e)
        raise HTTPException(500, "Failed to delete adventure")
    logger.info("Adventure deleted: {}", adventure_id)
    return {"success": True, "message": "Adventure deleted successfully"}
