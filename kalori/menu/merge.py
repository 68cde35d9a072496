# -*- coding: utf-8 -*-
"""Effective menu = canonical items + overrides, arranged by stored order."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence, TypeVar

from .models import MenuCategory, MenuItem


class _HasId(Protocol):
    id: str


T = TypeVar("T", bound=_HasId)


@dataclass
class MenuOverride:
    name: Optional[str] = None
    calories: Optional[int] = None
    image_data_url: Optional[str] = None
    hidden: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MenuOverride":
        calories = data.get("calories")
        return cls(
            name=data["name"] if isinstance(data.get("name"), str) else None,
            calories=calories if isinstance(calories, int) and not isinstance(calories, bool) and calories >= 0 else None,
            image_data_url=data["image_data_url"] if isinstance(data.get("image_data_url"), str) else None,
            hidden=data["hidden"] if isinstance(data.get("hidden"), bool) else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in self.__dict__.items() if v is not None}

    def merged(self, patch: "MenuOverride") -> "MenuOverride":
        return MenuOverride.from_dict({**self.to_dict(), **patch.to_dict()})


@dataclass
class OverrideState:
    overrides: Dict[str, MenuOverride] = field(default_factory=dict)
    order: Dict[str, List[str]] = field(default_factory=dict)


def apply_order(items: Sequence[T], order: Optional[Sequence[str]]) -> List[T]:
    """Items listed in ``order`` first, then the rest in their original order.

    Ids in ``order`` that match no item are ignored.
    """
    if not order:
        return list(items)
    by_id = {item.id: item for item in items}
    ordered: List[T] = []
    seen = set()
    for item_id in order:
        if item_id in by_id and item_id not in seen:
            ordered.append(by_id[item_id])
            seen.add(item_id)
    remaining = [item for item in items if item.id not in seen]
    return ordered + remaining


def apply_override(item: MenuItem, override: Optional[MenuOverride]) -> MenuItem:
    if override is None:
        return item
    patch = override.to_dict()
    image = patch.pop("image_data_url", None)
    if image is not None:
        patch["image_path"] = image
    return item.model_copy(update=patch) if patch else item


def apply_state(base: Sequence[MenuCategory], state: OverrideState) -> List[MenuCategory]:
    merged: List[MenuCategory] = []
    for category in base:
        items = [apply_override(item, state.overrides.get(item.id)) for item in category.items]
        items = apply_order(items, state.order.get(category.id.value))
        merged.append(category.model_copy(update={"items": items}))
    return merged


def visible_only(categories: Sequence[MenuCategory]) -> List[MenuCategory]:
    return [c.model_copy(update={"items": [i for i in c.items if not i.hidden]}) for c in categories]


def is_order_dirty(draft: Optional[Sequence[str]], saved: Sequence[str]) -> bool:
    if draft is None:
        return False
    if len(draft) != len(saved):
        return True
    return any(a != b for a, b in zip(draft, saved))


def move_item(ids: Sequence[str], source_id: str, target_id: str) -> Optional[List[str]]:
    """Remove ``source_id`` and reinsert it at ``target_id``'s position."""
    if source_id == target_id:
        return None
    try:
        from_index = ids.index(source_id)
        to_index = ids.index(target_id)
    except ValueError:
        return None
    moved = list(ids)
    moved.pop(from_index)
    moved.insert(to_index, source_id)
    return moved


def insert_after(ids: Sequence[str], new_id: str, selected_id: Optional[str]) -> List[str]:
    """Place ``new_id`` right after the selected item, or first when nothing is selected."""
    current = [i for i in ids if i != new_id]
    index = current.index(selected_id) + 1 if selected_id in current else 0
    current.insert(index, new_id)
    return current
