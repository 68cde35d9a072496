# -*- coding: utf-8 -*-
"""Menu domain: Pydantic models."""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CategoryId(str, Enum):
    makanan_utama = "makanan-utama"
    camilan = "camilan"
    minuman = "minuman"


CATEGORY_LABELS: Dict[CategoryId, str] = {
    CategoryId.makanan_utama: "Makanan Utama",
    CategoryId.camilan: "Camilan",
    CategoryId.minuman: "Minuman",
}


class MenuItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    calories: int = Field(..., ge=0)
    image_path: str
    category_id: CategoryId
    hidden: bool = False


class MenuCategory(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: CategoryId
    label: str
    items: List[MenuItem] = Field(default_factory=list)


class MenuResponse(BaseModel):
    categories: List[MenuCategory]


class ItemUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, max_length=120)
    calories: Optional[int] = Field(default=None, ge=0)
    hidden: Optional[bool] = None
    image_path: Optional[str] = Field(default=None, description="data URL (uploaded) or existing URL")


class ItemCreateRequest(BaseModel):
    category_id: CategoryId
    name: str = Field(..., min_length=1, max_length=120)
    calories: int = Field(..., ge=0)
    image_path: str = Field(..., min_length=1)
    hidden: bool = False


class OrderUpdateRequest(BaseModel):
    order: List[str] = Field(default_factory=list)


class OrderResponse(BaseModel):
    category_id: CategoryId
    order: List[str]


class TallyRequest(BaseModel):
    quantities: Dict[str, int] = Field(default_factory=dict)


class TallyLine(BaseModel):
    item_id: str
    name: str
    calories: int
    quantity: int
    subtotal: int


class TallyResponse(BaseModel):
    total_calories: int
    lines: List[TallyLine]


class HiddenCount(BaseModel):
    id: CategoryId
    label: str
    count: int


class MenuStats(BaseModel):
    total_items: int
    total_categories: int
    low: int = Field(..., description="<= 150 kcal")
    medium: int = Field(..., description="151-500 kcal")
    high: int = Field(..., description=">= 501 kcal")
    hidden_total: int
    hidden_low: int
    hidden_medium: int
    hidden_high: int
    hidden_by_category: List[HiddenCount]
