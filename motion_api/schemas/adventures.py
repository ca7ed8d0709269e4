"""
schemas/adventures.py — Pydantic models for adventure endpoints

Business Rules:
- Stored rows use snake_case columns; the frontend shape is camelCase
- Missing duration/cost are presented as "4 hours" / "$50"
- Request bodies are permissive; routers return 400 for missing fields
- Progress updates (schedule, step toggle, complete) act only on the caller's rows

Called by: routers/adventures.py, services/adventure_service.py
Depends on: pydantic
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AdventureView(BaseModel):
    """Adventure as the web client renders it."""
    model_config = ConfigDict(populate_by_name=True)

    id: str | int
    title: str | None = None
    description: str | None = None
    estimated_duration: str = Field("4 hours", alias="estimatedDuration")
    estimated_cost: str = Field("$50", alias="estimatedCost")
    steps: Any = Field(default_factory=list)
    created_at: str | None = Field(None, alias="createdAt")
    scheduled_for: str | None = Field(None, alias="scheduledFor")
    is_completed: bool = Field(False, alias="isCompleted")
    is_favorite: bool = Field(False, alias="isFavorite")


class AdventureDetailResponse(BaseModel):
    adventure: AdventureView


class AdventureCreate(BaseModel):
    """POST /api/adventures — quick save of a generated adventure."""
    model_config = ConfigDict(populate_by_name=True)

    adventure: dict[str, Any] = Field(default_factory=dict)
    user_id: str | None = Field(None, alias="userId")
    scheduled_for: str | None = Field(None, alias="scheduledFor")


class AdventureSave(BaseModel):
    """POST /api/adventures/save — full save with defaults."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: str | None = Field(None, alias="userId")
    adventure: dict[str, Any] | None = None
    scheduled_date: str | None = Field(None, alias="scheduledDate")


class StepReorder(BaseModel):
    """Swap the positions of two steps. Indices are validated by the router."""
    model_config = ConfigDict(populate_by_name=True)

    from_index: Any = Field(None, alias="fromIndex")
    to_index: Any = Field(None, alias="toIndex")


class AdventureSchedule(BaseModel):
    """PATCH /api/adventures/{id}/schedule"""
    model_config = ConfigDict(populate_by_name=True)

    user_id: str | None = Field(None, alias="userId")
    scheduled_date: str | None = Field(None, alias="scheduledDate")


class StepToggle(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str | None = Field(None, alias="userId")
    completed: bool = False


class AdventureOwner(BaseModel):
    """Body carrying only the acting user, e.g. PATCH .../complete."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: str | None = Field(None, alias="userId")
