"""Pydantic models for admin and health endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PrivilegeUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str | None = Field(None, alias="userId")


class HealthCheckRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    include_details: bool = Field(False, alias="includeDetails")
