"""Pydantic schemas for application settings."""

from pydantic import BaseModel, Field


class SettingResponse(BaseModel):
    key: str
    value: str | None


class SettingUpdateRequest(BaseModel):
    value: str | None = Field(..., description="New value; null clears it")


class SettingDeleteResponse(BaseModel):
    success: bool
    message: str
