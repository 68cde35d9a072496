# -*- coding: utf-8 -*-
"""Profile: Pydantic models."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


class ProfileUpdateRequest(BaseModel):
    # Loose on purpose: the form sends strings, numbers or blanks.
    age: Optional[Any] = None
    weight: Optional[Any] = None
    height: Optional[Any] = None
    gender: Optional[str] = None
    username: Optional[str] = Field(default=None, max_length=80)
    photo_url: Optional[str] = Field(default=None, description="data URL (uploaded) or existing URL")


class Profile(BaseModel):
    uid: str
    email: Optional[str] = None
    username: Optional[str] = None
    age: Optional[float] = None
    weight: Optional[float] = None
    height: Optional[float] = None
    gender: Optional[str] = None
    photo_url: Optional[str] = None
    created_at: str
    updated_at: str


class ProfileResponse(BaseModel):
    profile: Optional[Profile] = None
    is_admin: bool = False
