# -*- coding: utf-8 -*-
"""Calorie tally for the customer-facing calculator."""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping

from .models import MenuCategory, MenuItem, TallyLine


class CalorieTally:
    """Per-item quantities over the visible menu.

    Items that are not on the menu count as 0 kcal; quantities never go
    below zero and a zero quantity removes the entry.
    """

    def __init__(self, items: Iterable[MenuItem]) -> None:
        self._items: Dict[str, MenuItem] = {item.id: item for item in items}
        self._quantities: Dict[str, int] = {}

    @classmethod
    def for_menu(cls, categories: Iterable[MenuCategory]) -> "CalorieTally":
        return cls(item for category in categories for item in category.items if not item.hidden)

    @property
    def quantities(self) -> Mapping[str, int]:
        return dict(self._quantities)

    def quantity(self, item_id: str) -> int:
        return self._quantities.get(item_id, 0)

    def increment(self, item_id: str) -> int:
        self._quantities[item_id] = self.quantity(item_id) + 1
        return self._quantities[item_id]

    def decrement(self, item_id: str) -> int:
        current = self.quantity(item_id)
        if current <= 0:
            return 0
        return self.set_quantity(item_id, current - 1)

    def set_quantity(self, item_id: str, quantity: int) -> int:
        if quantity <= 0:
            self._quantities.pop(item_id, None)
            return 0
        self._quantities[item_id] = int(quantity)
        return self._quantities[item_id]

    def clear(self) -> None:
        self._quantities.clear()

    @property
    def total_calories(self) -> int:
        return sum(self._calories(item_id) * qty for item_id, qty in self._quantities.items())

    def lines(self) -> List[TallyLine]:
        lines: List[TallyLine] = []
        for item_id, qty in self._quantities.items():
            item = self._items.get(item_id)
            if item is None:
                continue
            lines.append(
                TallyLine(
                    item_id=item_id,
                    name=item.name,
                    calories=item.calories,
                    quantity=qty,
                    subtotal=item.calories * qty,
                )
            )
        return lines

    def _calories(self, item_id: str) -> int:
        item = self._items.get(item_id)
        return item.calories if item else 0
