"""Community Adventures API — sharing and reviews."""

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from loguru import logger
from postgrest.exceptions import APIError
from supabase import Client

from ..database import first_row, get_supabase
from ..dependencies import read_body
from ..schemas.community import CommunityShare, ReviewCreate
from ..services.adventure_service import build_community_row, build_photo_rows, utc_now_iso

router = APIRouter(tags=["community"])

REVIEW_LIST_LIMIT = 100


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


# ── Sharing ──────────────────────────────────────────────────────────


@router.post("/api/community-adventures")
def share_adventure(body: CommunityShare, db: Client = Depends(get_supabase)):
    """Publish an adventure to the community feed.

    With adventureId the stored adventure is cloned along with its photos;
    otherwise the inline adventure payload is used. Extra user photos are
    appended either way. A failed photo copy does not fail the share.
    """
    if not body.user_id or (not body.adventure_id and not body.adventure):
        raise HTTPException(400, "userId and (adventureId or adventure) required")

    base, source_photos = body.adventure or {}, []
    if body.adventure_id:
        try:
            base = first_row(
                db.table("adventures").select("*").eq("id", body.adventure_id).limit(1).execute()
            )
        except APIError as e:
            logger.error("Source adventure lookup failed for {}: {}", body.adventure_id, e)
            base = None
        if not base:
            raise HTTPException(404, "Source adventure not found")
        try:
            source_photos = (
                db.table("adventure_photos").select("*")
                .eq("adventure_id", body.adventure_id)
                .order("step_index")
                .execute()
            ).data or []
        except APIError as e:
            logger.warning("Photo lookup failed for {}: {}", body.adventure_id, e)

    now = utc_now_iso()
    try:
        community = first_row(
            db.table("community_adventures")
            .insert(build_community_row(base, body.user_id, body.make_public, now))
            .execute()
        )
    except Exception as e:
        logger.error("Community insert error: {}", e)
        community = None
    if not community:
        raise HTTPException(500, "Failed to create community adventure")

    community_id = community.get("id")
    additional = [p.model_dump() for p in body.additional_photos]
    photo_rows = build_photo_rows(community_id, source_photos, additional, now)
    if photo_rows:
        try:
            db.table("adventure_photos").insert(photo_rows).execute()
        except APIError as e:
            logger.warning("Photo copy error (non-fatal): {}", e)

    return {"communityAdventureId": community_id}


# ── Reviews ──────────────────────────────────────────────────────────


@router.get("/api/community-adventures/reviews")
def list_reviews(
    community_id: str | None = Query(None, alias="communityId"),
    db: Client = Depends(get_supabase),
):
    """Newest-first reviews for one community adventure, capped at 100."""
    if not community_id:
        raise HTTPException(400, "communityId required")
    try:
        resp = (
            db.table("community_adventure_reviews").select("*")
            .eq("community_adventure_id", community_id)
            .order("created_at", desc=True)
            .limit(REVIEW_LIST_LIMIT)
            .execute()
        )
    except Exception as e:
        logger.error("Failed to fetch reviews for {}: {}", community_id, e)
        raise HTTPException(500, "Failed to fetch reviews")
    return {"reviews": resp.data or []}


def _is_id(value) -> bool:
    return isinstance(value, str) and bool(value.strip())


async def _review_body(request: Request) -> ReviewCreate:
    return await read_body(request, ReviewCreate)


@router.post("/api/community-adventures/reviews")
def create_review(body: ReviewCreate = Depends(_review_body), db: Client = Depends(get_supabase)):
    if not _is_id(body.user_id) or not _is_id(body.community_id) or not _is_number(body.rating):
        raise HTTPException(400, "userId, communityId, rating required")
    if body.text is not None and not isinstance(body.text, str):
        raise HTTPException(400, "text must be a string")

    row = {
        "user_id": body.user_id,
        "community_adventure_id": body.community_id,
        "rating": body.rating,
        "review_text": body.text or None,
        "created_at": utc_now_iso(),
    }
    try:
        review = first_row(db.table("community_adventure_reviews").insert(row).execute())
    except APIError as e:
        logger.error("Review insert error: {}", e)
        raise HTTPException(500, "Failed to add review")
    except Exception as e:
        logger.error("Review insert error: {}", e)
        raise HTTPException(500, "Unexpected error")
    return {"review": review}
