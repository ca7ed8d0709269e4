"""
schemas/community.py — Pydantic models for community adventures and reviews

Business Rules:
- A review needs string userId and communityId, a numeric rating and an
  optional string text (checked in the router so the client gets 400, not 422)
- Sharing needs userId plus either adventureId or an adventure payload

Called by: routers/community.py
Depends on: pydantic
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ReviewCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: Any = Field(None, alias="userId")
    community_id: Any = Field(None, alias="communityId")
    rating: Any = None
    text: Any = None


class SharedPhoto(BaseModel):
    model_config = ConfigDict(extra="allow")

    url: str | None = None
    label: str | None = None
    step_index: int | None = None
    photo_order: int | None = None
    width: int | None = None
    height: int | None = None


class CommunityShare(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str | None = Field(None, alias="userId")
    adventure_id: str | None = Field(None, alias="adventureId")
    adventure: dict[str, Any] | None = None
    additional_photos: list[SharedPhoto] = Field(default_factory=list, alias="additionalPhotos")
    make_public: bool = Field(True, alias="makePublic")
