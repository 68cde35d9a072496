# -*- coding: utf-8 -*-
"""Menu: API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from ..auth.security import require_admin
from ..images.hosting import ImageHost, get_image_host
from . import storage
from .models import (
    CategoryId,
    ItemCreateRequest,
    ItemUpdateRequest,
    MenuItem,
    MenuResponse,
    MenuStats,
    OrderResponse,
    OrderUpdateRequest,
    TallyRequest,
    TallyResponse,
)
from .service import add_menu_item, update_menu_item
from .stats import compute_menu_stats
from .tally import CalorieTally

router = APIRouter(prefix="/api/menu", tags=["Menu"])


@router.get("", response_model=MenuResponse, summary="Effective menu per category")
def get_menu(include_hidden: bool = Query(default=False)):
    return MenuResponse(categories=storage.list_categories(include_hidden=include_hidden))


@router.post("/tally", response_model=TallyResponse, summary="Total calories for selected quantities")
def tally_menu(request: TallyRequest):
    tally = CalorieTally.for_menu(storage.list_categories(include_hidden=False))
    for item_id, quantity in request.quantities.items():
        tally.set_quantity(item_id, quantity)
    return TallyResponse(total_calories=tally.total_calories, lines=tally.lines())


@router.get("/stats", response_model=MenuStats, summary="Admin overview counts")
def menu_stats(user: dict = Depends(require_admin)):
    return compute_menu_stats(storage.list_categories(include_hidden=True))


@router.post("/items", response_model=MenuItem, status_code=201, summary="Add a menu item")
def add_item(
    request: ItemCreateRequest,
    user: dict = Depends(require_admin),
    host: ImageHost = Depends(get_image_host),
):
    return add_menu_item(request, host)


@router.patch("/items/{item_id}", response_model=MenuItem, summary="Update a menu item")
def update_item(
    item_id: str,
    request: ItemUpdateRequest,
    user: dict = Depends(require_admin),
    host: ImageHost = Depends(get_image_host),
):
    return update_menu_item(item_id, request, host)


@router.delete("/items/{item_id}", summary="Delete a menu item")
def delete_item(item_id: str, user: dict = Depends(require_admin)):
    storage.delete_item(item_id)
    return {"status": "ok", "item_id": item_id}


@router.put("/order/{category_id}", response_model=OrderResponse, summary="Replace a category's item order")
def set_order(category_id: CategoryId, request: OrderUpdateRequest, user: dict = Depends(require_admin)):
    order = storage.set_order(category_id, request.order)
    return OrderResponse(category_id=category_id, order=order)
