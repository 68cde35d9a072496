# -*- coding: utf-8 -*-
"""
Admin dashboard state

Holds the admin's view of the menu and routes every mutation through the
remote API. Operations return an ``OperationResult`` and publish a ``Notice``;
they do not raise for API failures.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import re
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Tuple, Union

from ..config import settings
from ..errors import (
    Action,
    MenuError,
    NetworkError,
    OperationResult,
    ValidationCode,
    ValidationError,
    user_message,
)
from ..events import Notice, Observable
from ..images.validation import decode_data_url, is_data_url
from ..menu.merge import (
    MenuOverride,
    OverrideState,
    apply_order,
    apply_state,
    insert_after,
    is_order_dirty,
    visible_only,
)
from ..menu.models import CategoryId, MenuCategory, MenuItem, MenuStats
from ..menu.overrides import LocalOverrideStore
from ..menu.stats import compute_menu_stats
from .client import MenuApiClient
from .dragdrop import DragGesture

logger = logging.getLogger(__name__)

TIMEOUT_NOTICE = "The server is taking too long to respond. Please wait or try again."

_CALORIES_RE = re.compile(r"^\d+$")

Confirm = Callable[[str], Union[bool, Awaitable[bool]]]


def parse_calories(value: Union[str, int, None]) -> int:
    """Form text (or an int) to a non-negative calorie count."""
    if isinstance(value, bool):
        raise ValidationError(ValidationCode.INVALID_CALORIES)
    if isinstance(value, int):
        if value < 0:
            raise ValidationError(ValidationCode.INVALID_CALORIES)
        return value
    text = (value or "").strip()
    if not _CALORIES_RE.match(text):
        raise ValidationError(ValidationCode.INVALID_CALORIES)
    return int(text)


class AdminDashboard:
    def __init__(
        self,
        client: MenuApiClient,
        *,
        canonical: Sequence[MenuCategory] = (),
        cache: Optional[LocalOverrideStore] = None,
        timeout_notice_sec: Optional[float] = None,
    ) -> None:
        self.client = client
        self.canonical = list(canonical)
        self.cache = cache
        self.timeout_notice_sec = settings.timeout_notice_sec if timeout_notice_sec is None else timeout_notice_sec
        self.notices: Observable[Notice] = Observable()
        self.drag = DragGesture()

        self.busy_label: Optional[str] = None
        self.offline = False
        self.active_category = CategoryId.makanan_utama
        self.selected_item_id: Optional[str] = None

        self._saved: List[MenuCategory] = list(self.canonical)
        self._drafts: Dict[str, List[str]] = {}
        self._revision = 0
        self._views: Dict[bool, Tuple[int, List[MenuCategory]]] = {}

    # ----------------------------
    # Views
    # ----------------------------

    @property
    def is_busy(self) -> bool:
        return self.busy_label is not None

    def _changed(self) -> None:
        self._revision += 1

    def categories(self, include_hidden: bool = True) -> List[MenuCategory]:
        """Effective menu; the same list object until the state changes."""
        cached = self._views.get(include_hidden)
        if cached is not None and cached[0] == self._revision:
            return cached[1]
        view = list(self._saved) if include_hidden else visible_only(self._saved)
        self._views[include_hidden] = (self._revision, view)
        return view

    def category(self, category_id: CategoryId) -> Optional[MenuCategory]:
        for category in self._saved:
            if category.id == category_id:
                return category
        return None

    def find_item(self, item_id: str) -> Optional[MenuItem]:
        for category in self._saved:
            for item in category.items:
                if item.id == item_id:
                    return item
        return None

    def saved_items(self, category_id: CategoryId) -> List[MenuItem]:
        category = self.category(category_id)
        return list(category.items) if category else []

    def active_items(self, category_id: CategoryId) -> List[MenuItem]:
        """Saved items arranged by the unsaved draft order, if any."""
        return apply_order(self.saved_items(category_id), self._drafts.get(category_id.value))

    def is_order_dirty(self, category_id: CategoryId) -> bool:
        saved = [i.id for i in self.saved_items(category_id)]
        return is_order_dirty(self._drafts.get(category_id.value), saved)

    def stats(self) -> MenuStats:
        return compute_menu_stats(self._saved)

    # ----------------------------
    # Selection / drag
    # ----------------------------

    def select_category(self, category_id: CategoryId) -> None:
        self.active_category = category_id
        self.selected_item_id = None
        self.drag.end()

    def select_item(self, item_id: Optional[str]) -> None:
        self.selected_item_id = item_id

    def drag_start(self, item_id: str) -> None:
        self.drag.start(item_id)

    def drag_over(self, item_id: str) -> None:
        self.drag.over(item_id)

    def drag_end(self) -> None:
        self.drag.end()

    def drop(self, target_id: str) -> bool:
        """Move the dragged item onto ``target_id`` in the draft order."""
        ids = [i.id for i in self.active_items(self.active_category)]
        moved = self.drag.drop(target_id, ids)
        if moved is None:
            return False
        self._drafts[self.active_category.value] = moved
        self._changed()
        return True

    def discard_draft(self, category_id: CategoryId) -> None:
        if self._drafts.pop(category_id.value, None) is not None:
            self._changed()

    # ----------------------------
    # Internals
    # ----------------------------

    def _notify(self, level: str, message: str) -> None:
        self.notices.publish(Notice(level, message))

    def _replace_category(self, category_id: CategoryId, items: List[MenuItem]) -> None:
        self._saved = [c.model_copy(update={"items": items}) if c.id == category_id else c for c in self._saved]
        self._changed()

    def _replace_item(self, item: MenuItem) -> None:
        self._saved = [
            c.model_copy(update={"items": [item if i.id == item.id else i for i in c.items]}) for c in self._saved
        ]
        self._changed()

    def _remove_item(self, item_id: str) -> None:
        self._saved = [
            c.model_copy(update={"items": [i for i in c.items if i.id != item_id]}) for c in self._saved
        ]
        for category_id, ids in list(self._drafts.items()):
            self._drafts[category_id] = [i for i in ids if i != item_id]
        if self.selected_item_id == item_id:
            self.selected_item_id = None
        self._changed()

    def _cache_remote(self, categories: Sequence[MenuCategory]) -> None:
        if self.cache is None:
            return
        overrides = {
            item.id: MenuOverride(
                name=item.name,
                calories=item.calories,
                image_data_url=item.image_path,
                hidden=item.hidden,
            )
            for category in categories
            for item in category.items
        }
        order = {category.id.value: [i.id for i in category.items] for category in categories}
        self.cache.replace(OverrideState(overrides=overrides, order=order))

    def _reject(self, error: ValidationError, action: Action) -> OperationResult:
        self._notify("error", user_message(error, action))
        return OperationResult.failure(error)

    @staticmethod
    def _check_image(image: Optional[str]) -> None:
        """Inline images must be PNG/JPEG within the size limit before upload."""
        if is_data_url(image):
            decode_data_url(image)

    async def _run(
        self,
        label: str,
        action: Action,
        operation: Callable[[], Awaitable[Any]],
        success_message: Optional[str] = None,
        *,
        on_error: Optional[Callable[[MenuError], str]] = None,
    ) -> OperationResult:
        """Run one remote operation under the busy guard.

        ``on_error`` may react to a failure and returns the notice level.
        """
        if self.busy_label is not None:
            logger.debug("Skipping %s while %s is in progress", label, self.busy_label)
            return OperationResult.skipped()
        self.busy_label = label
        loop = asyncio.get_running_loop()
        handle = loop.call_later(self.timeout_notice_sec, self._notify, "warning", TIMEOUT_NOTICE)
        try:
            value = await operation()
        except MenuError as exc:
            logger.warning("%s failed: %r", label, exc)
            level = on_error(exc) if on_error is not None else "error"
            self._notify(level, user_message(exc, action))
            return OperationResult.failure(exc)
        finally:
            handle.cancel()
            self.busy_label = None
        if success_message:
            self._notify("success", success_message)
        return OperationResult.success(value)

    # ----------------------------
    # Operations
    # ----------------------------

    async def refresh(self) -> OperationResult:
        """Load the remote menu; fall back to canonical + cached overrides when unreachable."""

        async def _do() -> List[MenuCategory]:
            categories = await self.client.fetch_menu(include_hidden=True)
            self._saved = categories
            self.offline = False
            self._drafts.clear()
            self._changed()
            self._cache_remote(categories)
            return categories

        def _fallback(exc: MenuError) -> str:
            if not isinstance(exc, NetworkError):
                return "error"
            logger.warning("Menu API unreachable, using cached overrides")
            state = self.cache.state if self.cache is not None else OverrideState()
            self._saved = apply_state(self.canonical, state)
            self.offline = True
            self._changed()
            return "warning"

        return await self._run("refresh", Action.REFRESH, _do, on_error=_fallback)

    async def update_item(
        self,
        item_id: str,
        *,
        name: str = "",
        calories: Union[str, int, None] = None,
        hidden: bool = False,
        image: Optional[str] = None,
    ) -> OperationResult:
        if self.is_busy:
            return OperationResult.skipped()
        try:
            parsed_calories = parse_calories(calories)
            self._check_image(image)
        except ValidationError as exc:
            return self._reject(exc, Action.UPDATE)

        existing = self.find_item(item_id)
        patch: Dict[str, Any] = {"calories": parsed_calories, "hidden": bool(hidden)}
        trimmed = (name or "").strip()
        if trimmed:
            patch["name"] = trimmed
        elif existing is not None:
            patch["name"] = existing.name
        if image:
            patch["image_path"] = image

        async def _do() -> MenuItem:
            item = await self.client.update_item(item_id, patch)
            self._replace_item(item)
            if self.cache is not None:
                self.cache.remember_item(item)
            return item

        return await self._run("update", Action.UPDATE, _do, "Menu item saved.")

    async def delete_item(self, item_id: str, confirm: Optional[Confirm] = None) -> OperationResult:
        if self.is_busy:
            return OperationResult.skipped()
        if confirm is not None:
            item = self.find_item(item_id)
            answer = confirm(item.name if item else item_id)
            if inspect.isawaitable(answer):
                answer = await answer
            if not answer:
                return OperationResult.skipped()

        async def _do() -> str:
            await self.client.delete_item(item_id)
            self._remove_item(item_id)
            if self.cache is not None:
                self.cache.remove_item(item_id)
            return item_id

        return await self._run("delete", Action.DELETE, _do, "Menu item deleted.")

    async def add_item(
        self,
        category_id: CategoryId,
        *,
        name: str,
        calories: Union[str, int, None],
        image: Optional[str],
        hidden: bool = False,
    ) -> OperationResult:
        if self.is_busy:
            return OperationResult.skipped()
        trimmed = (name or "").strip()
        if not trimmed:
            return self._reject(ValidationError(ValidationCode.NAME_REQUIRED), Action.ADD)
        try:
            parsed_calories = parse_calories(calories)
        except ValidationError as exc:
            return self._reject(exc, Action.ADD)
        if not image:
            return self._reject(ValidationError(ValidationCode.IMAGE_REQUIRED), Action.ADD)
        try:
            self._check_image(image)
        except ValidationError as exc:
            return self._reject(exc, Action.ADD)

        async def _do() -> MenuItem:
            created = await self.client.add_item(
                category_id=category_id,
                name=trimmed,
                calories=parsed_calories,
                image_path=image,
                hidden=hidden,
            )
            ids = [i.id for i in self.active_items(category_id)]
            # The item exists remotely from here on, even if the order call fails.
            self._replace_category(category_id, [*self.saved_items(category_id), created])
            order = insert_after(ids, created.id, self.selected_item_id)
            saved_order = await self.client.set_order(category_id, order)
            self._replace_category(category_id, apply_order(self.saved_items(category_id), saved_order))
            self._drafts.pop(category_id.value, None)
            self.selected_item_id = created.id
            if self.cache is not None:
                self.cache.remember_item(created)
                self.cache.set_order(category_id.value, saved_order)
            return created

        return await self._run("add", Action.ADD, _do, "Menu item added.")

    async def save_order(self, category_id: Optional[CategoryId] = None) -> OperationResult:
        category_id = category_id or self.active_category
        if self.is_busy:
            return OperationResult.skipped()
        draft = self._drafts.get(category_id.value)
        if draft is None:
            return OperationResult.skipped()

        async def _do() -> List[str]:
            saved_order = await self.client.set_order(category_id, draft)
            self._replace_category(category_id, apply_order(self.saved_items(category_id), saved_order))
            self._drafts.pop(category_id.value, None)
            if self.cache is not None:
                self.cache.set_order(category_id.value, saved_order)
            return saved_order

        return await self._run("reorder", Action.REORDER, _do, "Menu order saved.")
