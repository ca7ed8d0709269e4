"""
adventure_service.py — Adventure row building and reshaping

Business Rules:
- Detail view: duration "<h> hours" else "4 hours", cost "$<c>" else "$50"
- Saved adventures get defaults (budget "moderate", group 1, radius 10, ...)
- Reorder swaps two steps' step_order after sorting by step_order
- Community adventures are completed by definition and dated by shared_date
- An adventure counts as completed only when every step is completed
- Calendar windows span whole calendar months

Called by: routers/adventures.py, routers/community.py
Depends on: nothing (pure functions)
"""

import calendar
from datetime import datetime, timezone


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _number_text(value) -> str:
    """Render 4.0 as '4' and 3.5 as '3.5', like the web client does."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_duration(duration_hours) -> str:
    return f"{_number_text(duration_hours)} hours" if duration_hours else "4 hours"


def format_cost(estimated_cost) -> str:
    return f"${_number_text(estimated_cost)}" if estimated_cost else "$50"


def to_detail_view(row: dict) -> dict:
    """Map an `adventures` row to the web client's detail shape."""
    return {
        "id": row.get("id"),
        "title": row.get("title"),
        "description": row.get("description"),
        "estimatedDuration": format_duration(row.get("duration_hours")),
        "estimatedCost": format_cost(row.get("estimated_cost")),
        "steps": row.get("steps") or [],
        "createdAt": row.get("created_at"),
        "scheduledFor": row.get("scheduled_date"),
        "isCompleted": bool(row.get("is_completed")),
        "isFavorite": bool(row.get("is_favorite")),
    }


def to_client(row: dict) -> dict:
    """Full camelCase transform used by GET /api/adventures/save."""
    return {
        "id": row.get("id"),
        "title": row.get("title"),
        "description": row.get("description"),
        "location": row.get("location"),
        "estimatedDuration": row.get("estimated_duration"),
        "estimatedCost": row.get("estimated_cost"),
        "steps": row.get("steps"),
        "experienceTypes": row.get("experience_types"),
        "vibe": row.get("vibe"),
        "budget": row.get("budget"),
        "groupSize": row.get("group_size"),
        "radius": row.get("radius"),
        "filtersUsed": row.get("filters_used"),
        "scheduledFor": row.get("scheduled_for"),
        "isScheduled": row.get("is_scheduled"),
        "isCompleted": row.get("is_completed"),
        "isFavorite": row.get("is_favorite"),
        "rating": row.get("rating"),
        "category": row.get("category"),
        "createdAt": row.get("created_at"),
        "updatedAt": row.get("updated_at"),
    }


def build_quick_row(user_id, adventure: dict, scheduled_for, now: str) -> dict:
    return {
        "user_id": user_id,
        "title": adventure.get("title"),
        "description": adventure.get("description"),
        "estimated_duration": adventure.get("estimatedDuration"),
        "estimated_cost": adventure.get("estimatedCost"),
        "steps": adventure.get("steps"),
        "scheduled_for": scheduled_for,
        "created_at": now,
    }


def build_saved_row(user_id: str, adventure: dict, scheduled_date, now: str) -> dict:
    return {
        "user_id": user_id,
        "title": adventure.get("title"),
        "description": adventure.get("description") or "",
        "location": adventure.get("location") or "",
        "estimated_duration": adventure.get("estimatedDuration"),
        "estimated_cost": adventure.get("estimatedCost"),
        "steps": adventure.get("steps") or [],
        "experience_types": adventure.get("experienceTypes") or [],
        "vibe": adventure.get("vibe") or None,
        "budget": adventure.get("budget") or "moderate",
        "group_size": adventure.get("groupSize") or 1,
        "radius": adventure.get("radius") or 10,
        "filters_used": adventure.get("filtersUsed") or {},
        "scheduled_for": scheduled_date or None,
        "is_scheduled": bool(scheduled_date),
        "is_completed": False,
        "is_favorite": False,
        "rating": None,
        "category": adventure.get("category") or "Adventure",
        "created_at": now,
        "updated_at": now,
    }


def reorder_steps(steps, from_index: int, to_index: int) -> list[dict]:
    """Swap the step_order of the steps at two positions.

    Positions refer to the steps sorted by step_order. Returns the sorted
    list with the two orders exchanged. Raises ValueError when there are no
    steps or an index is out of range.
    """
    if not isinstance(steps, list) or not steps:
        raise ValueError("No steps found in this adventure")
    if not (0 <= from_index < len(steps)) or not (0 <= to_index < len(steps)):
        raise ValueError("Invalid step indices")

    ordered = sorted(
        (dict(step) for step in steps),
        key=lambda s: s.get("step_order") if s.get("step_order") is not None else 0,
    )
    src, dst = ordered[from_index], ordered[to_index]
    src["step_order"], dst["step_order"] = dst.get("step_order"), src.get("step_order")
    return ordered


def merge_user_adventures(personal: list[dict], community: list[dict]) -> list[dict]:
    """Combine a user's own and shared adventures into one client list."""
    shared = [
        {**ca, "created_at": ca.get("shared_date"), "is_completed": True, "is_shared": True}
        for ca in community
    ]
    return [
        {
            **adv,
            "scheduled_for": adv.get("scheduled_date") or adv.get("scheduled_for"),
            "is_favorite": adv.get("is_favorite") if adv.get("is_favorite") is not None else False,
            "step_completions": adv.get("step_completions") if adv.get("step_completions") is not None else {},
        }
        for adv in [*personal, *shared]
    ]


def attach_profiles(adventures: list[dict], profiles: list[dict]) -> list[dict]:
    by_id = {p.get("id"): p for p in profiles}
    return [{**adv, "profiles": by_id.get(adv.get("user_id"))} for adv in adventures]


def build_community_row(base: dict, user_id: str, make_public: bool, now: str) -> dict:
    filters = base.get("filters_used") or {}
    return {
        "user_id": user_id,
        "title": base.get("title") or base.get("custom_title") or "Shared Adventure",
        "custom_title": base.get("custom_title") or base.get("title") or None,
        "custom_description": base.get("description") or base.get("custom_description") or None,
        "description": base.get("description") or None,
        "steps": base.get("steps") or base.get("adventure_steps") or [],
        "location": base.get("location") or filters.get("location"),
        "duration_hours": base.get("duration_hours") or base.get("estimated_duration") or None,
        "estimated_cost": base.get("estimated_cost") or None,
        "rating": base.get("rating") or None,
        "is_public": make_public,
        "shared_date": now,
    }


def build_photo_rows(community_id, source_photos: list[dict], additional: list[dict], now: str) -> list[dict]:
    """Copy source photos to the community adventure and append user uploads."""
    rows = []
    for p in source_photos:
        rows.append({
            "adventure_id": community_id,
            "step_index": p.get("step_index") if p.get("step_index") is not None else 0,
            "photo_order": p.get("photo_order") if p.get("photo_order") is not None else 0,
            "url": p.get("url") or p.get("photo_url"),
            "width": p.get("width") or None,
            "height": p.get("height") or None,
            "source": p.get("source") or "google",
            "label": p.get("label") or None,
            "place_id": p.get("place_id") or None,
            "address": p.get("address") or None,
            "created_at": now,
        })
    for add in additional:
        rows.append({
            "adventure_id": community_id,
            "step_index": add.get("step_index") if add.get("step_index") is not None else 0,
            "photo_order": add.get("photo_order") if add.get("photo_order") is not None else 99,
            "url": add.get("url"),
            "width": add.get("width") or None,
            "height": add.get("height") or None,
            "source": "user_uploaded",
            "label": add.get("label") or None,
            "place_id": None,
            "address": None,
            "created_at": now,
        })
    return rows


# ── Progress and calendar ────────────────────────────────────────────


def all_steps_completed(steps) -> bool:
    """True when every step is marked completed (vacuously true for none)."""
    return all(isinstance(step, dict) and step.get("completed") for step in steps or [])


def toggle_step(adventure: dict, step_id: str, completed: bool, now: str) -> tuple[dict, bool]:
    """Build the update that marks one step (by id) completed or not.

    Keeps `steps_completed` in sync and flips the adventure's own
    completion when the last step is checked or one is unchecked again.
    Returns the changes and whether all steps are now completed.
    """
    steps = [
        {**step, "completed": completed}
        if isinstance(step, dict) and str(step.get("id")) == step_id else step
        for step in adventure.get("steps") or []
    ]
    done = list(adventure.get("steps_completed") or [])
    if completed and step_id not in done:
        done.append(step_id)
    elif not completed:
        done = [s for s in done if s != step_id]

    all_done = all_steps_completed(steps)
    changes = {"steps": steps, "steps_completed": done, "updated_at": now}
    if all_done and not adventure.get("is_completed"):
        changes.update(is_completed=True, completed_at=now)
    elif not all_done and adventure.get("is_completed"):
        changes.update(is_completed=False, completed_at=None)
    return changes, all_done


def month_window(month, year) -> tuple[str, str]:
    """First and last date (YYYY-MM-DD) of a calendar month.

    Raises ValueError for a non-numeric year or a month outside 1-12.
    """
    m, y = int(month), int(year)
    if not 1 <= m <= 12:
        raise ValueError(f"month out of range: {m}")
    last_day = calendar.monthrange(y, m)[1]
    return f"{y:04d}-{m:02d}-01", f"{y:04d}-{m:02d}-{last_day:02d}"


def to_calendar_event(row: dict) -> dict:
    return {
        "id": row.get("id"),
        "title": row.get("title"),
        "date": row.get("scheduled_date"),
        "startTime": row.get("scheduled_start_time"),
        "location": row.get("location"),
        "duration": row.get("duration"),
        "is_completed": row.get("is_completed"),
        "steps": row.get("steps"),
        "type": "scheduled",
    }
