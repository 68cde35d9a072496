# -*- coding: utf-8 -*-
"""Local override store: JSON cache of item patches and per-category order.

Used only as an offline fallback view; the remote API stays authoritative.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

from .merge import MenuOverride, OverrideState
from .models import MenuItem

logger = logging.getLogger(__name__)


def _parse_state(raw: Any) -> OverrideState:
    if not isinstance(raw, dict):
        return OverrideState()
    overrides: Dict[str, MenuOverride] = {}
    raw_overrides = raw.get("overrides")
    if isinstance(raw_overrides, dict):
        for item_id, patch in raw_overrides.items():
            if isinstance(patch, dict):
                overrides[str(item_id)] = MenuOverride.from_dict(patch)
    order: Dict[str, List[str]] = {}
    raw_order = raw.get("order")
    if isinstance(raw_order, dict):
        for category_id, ids in raw_order.items():
            if isinstance(ids, list):
                order[str(category_id)] = [str(i) for i in ids if isinstance(i, str)]
    return OverrideState(overrides=overrides, order=order)


class LocalOverrideStore:
    def __init__(self, path: Path) -> None:
        self.path = path
        self._state = self.load()

    @property
    def state(self) -> OverrideState:
        return self._state

    def load(self) -> OverrideState:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return OverrideState()
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable override cache %s: %s", self.path, exc)
            return OverrideState()
        return _parse_state(raw)

    def save(self) -> None:
        document = {
            "overrides": {k: v.to_dict() for k, v in self._state.overrides.items()},
            "order": self._state.order,
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(document, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not write override cache %s: %s", self.path, exc)

    def update_item(self, item_id: str, patch: MenuOverride) -> None:
        current = self._state.overrides.get(item_id, MenuOverride())
        self._state.overrides[item_id] = current.merged(patch)
        self.save()

    def set_order(self, category_id: str, order: Iterable[str]) -> None:
        self._state.order[category_id] = list(order)
        self.save()

    def remove_item(self, item_id: str) -> None:
        self._state.overrides.pop(item_id, None)
        for category_id, ids in self._state.order.items():
            self._state.order[category_id] = [i for i in ids if i != item_id]
        self.save()

    def remember_item(self, item: MenuItem) -> None:
        """Cache the server's view of an item for offline display."""
        self.update_item(
            item.id,
            MenuOverride(name=item.name, calories=item.calories, image_data_url=item.image_path, hidden=item.hidden),
        )

    def replace(self, state: OverrideState) -> None:
        self._state = state
        self.save()

    def clear(self) -> None:
        self.replace(OverrideState())
