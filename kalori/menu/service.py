# -*- coding: utf-8 -*-
"""Menu mutations that touch both the image host and the database."""

from __future__ import annotations

from fastapi import HTTPException

from ..images.compensation import uploaded_image
from ..images.hosting import ImageHost
from . import storage
from .models import ItemCreateRequest, ItemUpdateRequest, MenuItem

MENU_FOLDER = "menu"


def update_menu_item(item_id: str, request: ItemUpdateRequest, host: ImageHost) -> MenuItem:
    name = request.name.strip() if request.name is not None else None
    if name == "":
        raise HTTPException(status_code=400, detail="Menu name must not be blank")

    image_path = (request.image_path or "").strip() or None
    with uploaded_image(host, image_path, folder=MENU_FOLDER) as uploaded:
        return storage.update_item(
            item_id,
            name=name,
            calories=request.calories,
            hidden=request.hidden,
            image_path=uploaded.url if uploaded else image_path,
            image_public_id=uploaded.public_id if uploaded else None,
        )


def add_menu_item(request: ItemCreateRequest, host: ImageHost) -> MenuItem:
    name = request.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Menu name is required")
    image_path = request.image_path.strip()
    if not image_path:
        raise HTTPException(status_code=400, detail="Image is required")

    with uploaded_image(host, image_path, folder=MENU_FOLDER) as uploaded:
        return storage.create_item(
            category_id=request.category_id,
            name=name,
            calories=request.calories,
            image_path=uploaded.url if uploaded else image_path,
            image_public_id=uploaded.public_id if uploaded else None,
            hidden=request.hidden,
        )
