# -*- coding: utf-8 -*-
"""Profile: API endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from ..auth.security import get_current_user
from ..auth.storage import is_admin_user
from ..images.compensation import uploaded_image
from ..images.hosting import ImageHost, get_image_host
from .models import Profile, ProfileResponse, ProfileUpdateRequest
from .storage import finite_or_none, get_profile, upsert_profile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/profile", tags=["Profile"])

PROFILE_FOLDER = "users"


@router.get("", response_model=ProfileResponse, summary="Get my profile")
def read_profile(user: dict = Depends(get_current_user)):
    row = get_profile(user["id"])
    return ProfileResponse(
        profile=Profile(**row) if row else None,
        is_admin=is_admin_user(user["id"], user.get("email")),
    )


@router.post("", response_model=ProfileResponse, summary="Create or update my profile")
def save_profile(
    request: ProfileUpdateRequest,
    user: dict = Depends(get_current_user),
    host: ImageHost = Depends(get_image_host),
):
    uid = user["id"]
    photo = (request.photo_url or "").strip() or None
    # Stable public id so a new photo replaces the old one.
    with uploaded_image(host, photo, folder=PROFILE_FOLDER, public_id=uid, overwrite=True) as uploaded:
        row = upsert_profile(
            uid,
            email=user.get("email"),
            username=request.username.strip() if request.username is not None else None,
            age=finite_or_none(request.age),
            weight=finite_or_none(request.weight),
            height=finite_or_none(request.height),
            gender=request.gender,
            photo_url=uploaded.url if uploaded else photo,
        )
    logger.info("Saved profile %s", uid)
    return ProfileResponse(profile=Profile(**row), is_admin=is_admin_user(uid, user.get("email")))
