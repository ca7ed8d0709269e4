"""Pydantic models for saved-place endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SavedPlaceCreate(BaseModel):
    """A Google place bookmarked by a user. Columns mirror saved_places."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: str | None = Field(None, alias="userId")
    google_place_id: str | None = Field(None, alias="googlePlaceId")
    business_name: str | None = Field(None, alias="businessName")
    address: str | None = None
    lat: float | None = None
    lng: float | None = None
    photo_url: str | None = Field(None, alias="photoUrl")
    rating: float | None = None
    price_level: int | None = Field(None, alias="priceLevel")
    phone: str | None = None
    website: str | None = None
    business_hours: Any = Field(None, alias="businessHours")
    types: list[str] | None = None
    google_data: dict[str, Any] | None = Field(None, alias="googleData")
    notes: str | None = None

    def to_row(self) -> dict:
        """snake_case insert row; empty values are stored as NULL."""
        row = self.model_dump(by_alias=False)
        return {k: (v if v not in ("", [], {}) else None) for k, v in row.items()}
