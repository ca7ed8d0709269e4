"""Pydantic models for album endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AlbumCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str | None = Field(None, alias="userId")
    name: str | None = None
    description: str | None = None
    is_public: bool = Field(False, alias="isPublic")
    cover_photo_url: str | None = Field(None, alias="coverPhotoUrl")


class AlbumUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str | None = Field(None, alias="userId")
    name: str | None = None
    description: str | None = None
    is_public: bool | None = Field(None, alias="isPublic")
    cover_photo_url: str | None = Field(None, alias="coverPhotoUrl")


class AlbumPlaceAdd(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str | None = Field(None, alias="userId")
    saved_place_id: str | None = Field(None, alias="savedPlaceId")
    notes: str | None = None
    sort_order: int = Field(0, alias="sortOrder")
