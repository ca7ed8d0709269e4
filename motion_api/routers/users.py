"""Users API — per-user adventure list and monthly usage stats."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from postgrest.exceptions import APIError
from supabase import Client

from ..database import first_row, get_supabase
from ..services.usage_service import usage_summary

router = APIRouter(tags=["users"])

USER_ADVENTURE_COLUMNS = (
    "id, title, description, location, duration_hours, estimated_cost, "
    "experience_type, vibe, budget_level, group_size, radius_miles, steps, "
    "filters_used, generation_metadata, google_places_validated, "
    "premium_features_used, ai_confidence_score, difficulty_level, "
    "is_completed, is_scheduled, scheduled_date, adventure_type, "
    "likes_count, saves_count, created_at, updated_at"
)

USAGE_COLUMNS = (
    "membership_tier, monthly_generations, monthly_edits, "
    "generations_limit, edits_limit, last_reset_date"
)


@router.get("/api/users/{user_id}/adventures")
def list_user_adventures(user_id: str, db: Client = Depends(get_supabase)):
    if not user_id.strip():
        raise HTTPException(400, "User ID required")
    logger.info("Fetching adventures for user {}", user_id)
    try:
        adventures = (
            db.table("adventures").select(USER_ADVENTURE_COLUMNS)
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        ).data or []
    except APIError as e:
        logger.error("Error fetching adventures for {}: {}", user_id, e)
        raise HTTPException(500, e.message or "Failed to fetch user adventures")
    except Exception as e:
        logger.error("Error fetching adventures for {}: {}", user_id, e)
        raise HTTPException(500, "Failed to fetch user adventures")

    logger.info("Found {} adventures for {}", len(adventures), user_id)
    return {"adventures": adventures, "count": len(adventures)}


@router.get("/api/users/{user_id}/usage-stats")
def usage_stats(user_id: str, db: Client = Depends(get_supabase)):
    """Monthly generation/edit usage against the user's tier limits.

    Resets the stored counters when the last reset was in an earlier month.
    """
    if not user_id.strip():
        raise HTTPException(400, "User ID is required.")
    try:
        profile = first_row(
            db.table("profiles").select(USAGE_COLUMNS).eq("id", user_id).limit(1).execute()
        )
    except APIError as e:
        logger.error("Profile fetch error for {}: {}", user_id, e)
        profile = None
    except Exception as e:
        logger.error("Error fetching usage stats for {}: {}", user_id, e)
        raise HTTPException(500, "Failed to fetch usage statistics.")
    if not profile:
        raise HTTPException(404, "User not found.")

    now = datetime.now(timezone.utc)
    stats, reset = usage_summary(profile, now)
    if reset:
        try:
            db.table("profiles").update({
                "monthly_generations": 0,
                "monthly_edits": 0,
                "last_reset_date": now.isoformat(),
            }).eq("id", user_id).execute()
        except Exception as e:
            logger.warning("Monthly usage reset failed for {}: {}", user_id, e)
    return stats
