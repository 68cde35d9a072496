# -*- coding: utf-8 -*-
"""Admin overview counts by calorie band."""

from __future__ import annotations

from typing import Iterable, List

from .models import HiddenCount, MenuCategory, MenuItem, MenuStats

LOW_MAX = 150
MEDIUM_MAX = 500


def _band_counts(items: List[MenuItem]) -> tuple:
    low = sum(1 for i in items if i.calories <= LOW_MAX)
    medium = sum(1 for i in items if LOW_MAX < i.calories <= MEDIUM_MAX)
    high = sum(1 for i in items if i.calories > MEDIUM_MAX)
    return low, medium, high


def compute_menu_stats(categories: Iterable[MenuCategory]) -> MenuStats:
    categories = list(categories)
    all_items = [item for c in categories for item in c.items]
    hidden = [item for item in all_items if item.hidden]
    low, medium, high = _band_counts(all_items)
    hidden_low, hidden_medium, hidden_high = _band_counts(hidden)
    return MenuStats(
        total_items=len(all_items),
        total_categories=len(categories),
        low=low,
        medium=medium,
        high=high,
        hidden_total=len(hidden),
        hidden_low=hidden_low,
        hidden_medium=hidden_medium,
        hidden_high=hidden_high,
        hidden_by_category=[
            HiddenCount(id=c.id, label=c.label, count=sum(1 for i in c.items if i.hidden)) for c in categories
        ],
    )
