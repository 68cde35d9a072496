# -*- coding: utf-8 -*-
"""Menu storage helpers (SQLite)."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence
from uuid import uuid4

from fastapi import HTTPException

from ..app_db import db_conn
from ..config import settings
from .merge import apply_order
from .models import CategoryId, MenuCategory, MenuItem

logger = logging.getLogger(__name__)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _row_to_item(row: Dict[str, Any]) -> MenuItem:
    return MenuItem(
        id=row["id"],
        name=row["name"],
        calories=int(row["calories"]),
        image_path=row["image_path"],
        category_id=CategoryId(row["category_id"]),
        hidden=bool(row["hidden"]),
    )


def _category_exists(conn: sqlite3.Connection, category_id: str) -> bool:
    return conn.execute("SELECT 1 FROM categories WHERE id = ?", (category_id,)).fetchone() is not None


def _stored_order(conn: sqlite3.Connection, category_id: str) -> List[str]:
    rows = conn.execute(
        "SELECT item_id FROM menu_order WHERE category_id = ? ORDER BY position ASC", (category_id,)
    ).fetchall()
    return [r["item_id"] for r in rows]


def _write_order(conn: sqlite3.Connection, category_id: str, ids: Sequence[str]) -> None:
    conn.execute("DELETE FROM menu_order WHERE category_id = ?", (category_id,))
    conn.executemany(
        "INSERT INTO menu_order (category_id, item_id, position) VALUES (?, ?, ?)",
        [(category_id, item_id, pos) for pos, item_id in enumerate(ids)],
    )


def seed_menu(categories: Sequence[MenuCategory], *, replace: bool = False) -> int:
    """Write categories, items and their initial order. Returns items written."""
    now = _utc_now()
    written = 0
    with db_conn(settings.app_db_path) as conn:
        if replace:
            conn.execute("DELETE FROM menu_order")
            conn.execute("DELETE FROM menu_items")
            conn.execute("DELETE FROM categories")
        for position, category in enumerate(categories):
            conn.execute(
                "INSERT OR REPLACE INTO categories (id, label, position) VALUES (?, ?, ?)",
                (category.id.value, category.label, position),
            )
            for item in category.items:
                cur = conn.execute(
                    """
                    INSERT OR IGNORE INTO menu_items
                        (id, category_id, name, calories, image_path, image_public_id, hidden, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, NULL, ?, ?, ?)
                    """,
                    (item.id, category.id.value, item.name, item.calories, item.image_path, int(item.hidden), now, now),
                )
                written += cur.rowcount
            _write_order(conn, category.id.value, [i.id for i in category.items])
    logger.info("Seeded %d menu items across %d categories", written, len(categories))
    return written


def seed_menu_if_empty(categories: Sequence[MenuCategory]) -> int:
    with db_conn(settings.app_db_path) as conn:
        has_any = conn.execute("SELECT 1 FROM categories LIMIT 1").fetchone() is not None
    if has_any:
        return 0
    return seed_menu(categories)


def list_categories(*, include_hidden: bool = True) -> List[MenuCategory]:
    with db_conn(settings.app_db_path) as conn:
        categories = conn.execute("SELECT * FROM categories ORDER BY position ASC").fetchall()
        result: List[MenuCategory] = []
        for cat in categories:
            rows = conn.execute(
                "SELECT * FROM menu_items WHERE category_id = ? ORDER BY name COLLATE NOCASE ASC",
                (cat["id"],),
            ).fetchall()
            items = apply_order([_row_to_item(dict(r)) for r in rows], _stored_order(conn, cat["id"]))
            if not include_hidden:
                items = [i for i in items if not i.hidden]
            result.append(MenuCategory(id=CategoryId(cat["id"]), label=cat["label"], items=items))
        return result


def get_item_row(item_id: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM menu_items WHERE id = ?", (item_id,)).fetchone()
        return dict(row) if row else None


def get_item(item_id: str) -> Optional[MenuItem]:
    row = get_item_row(item_id)
    return _row_to_item(row) if row else None


def update_item(
    item_id: str,
    *,
    name: Optional[str] = None,
    calories: Optional[int] = None,
    hidden: Optional[bool] = None,
    image_path: Optional[str] = None,
    image_public_id: Optional[str] = None,
) -> MenuItem:
    fields: Dict[str, Any] = {}
    if name is not None:
        fields["name"] = name
    if calories is not None:
        fields["calories"] = int(calories)
    if hidden is not None:
        fields["hidden"] = int(hidden)
    if image_path is not None:
        fields["image_path"] = image_path
        fields["image_public_id"] = image_public_id
    fields["updated_at"] = _utc_now()

    assignments = ", ".join(f"{k} = ?" for k in fields)
    try:
        with db_conn(settings.app_db_path) as conn:
            cur = conn.execute(
                f"UPDATE menu_items SET {assignments} WHERE id = ?",
                (*fields.values(), item_id),
            )
            if cur.rowcount == 0:
                raise HTTPException(status_code=404, detail="Menu item not found")
            row = conn.execute("SELECT * FROM menu_items WHERE id = ?", (item_id,)).fetchone()
    except sqlite3.IntegrityError as exc:
        raise HTTPException(status_code=409, detail="Menu item with that name already exists") from exc
    return _row_to_item(dict(row))


def create_item(
    *,
    category_id: CategoryId,
    name: str,
    calories: int,
    image_path: str,
    image_public_id: Optional[str] = None,
    hidden: bool = False,
) -> MenuItem:
    item_id = uuid4().hex
    now = _utc_now()
    try:
        with db_conn(settings.app_db_path) as conn:
            if not _category_exists(conn, category_id.value):
                raise HTTPException(status_code=404, detail="Category not found")
            conn.execute(
                """
                INSERT INTO menu_items
                    (id, category_id, name, calories, image_path, image_public_id, hidden, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (item_id, category_id.value, name, int(calories), image_path, image_public_id, int(hidden), now, now),
            )
            # Append to the stored order; clients usually replace it right after.
            next_pos = conn.execute(
                "SELECT COALESCE(MAX(position) + 1, 0) AS pos FROM menu_order WHERE category_id = ?",
                (category_id.value,),
            ).fetchone()["pos"]
            conn.execute(
                "INSERT INTO menu_order (category_id, item_id, position) VALUES (?, ?, ?)",
                (category_id.value, item_id, next_pos),
            )
    except sqlite3.IntegrityError as exc:
        raise HTTPException(status_code=409, detail="Menu item with that name already exists") from exc
    return MenuItem(
        id=item_id,
        name=name,
        calories=int(calories),
        image_path=image_path,
        category_id=category_id,
        hidden=hidden,
    )


def delete_item(item_id: str) -> Dict[str, Any]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM menu_items WHERE id = ?", (item_id,)).fetchone()
        if not row:
            raise HTTPException(status_code=404, detail="Menu item not found")
        conn.execute("DELETE FROM menu_order WHERE item_id = ?", (item_id,))
        conn.execute("DELETE FROM menu_items WHERE id = ?", (item_id,))
        return dict(row)


def set_order(category_id: CategoryId, order: Sequence[str]) -> List[str]:
    """Replace the stored order; unknown ids are dropped, missing ones appended."""
    with db_conn(settings.app_db_path) as conn:
        if not _category_exists(conn, category_id.value):
            raise HTTPException(status_code=404, detail="Category not found")
        rows = conn.execute(
            "SELECT * FROM menu_items WHERE category_id = ? ORDER BY name COLLATE NOCASE ASC",
            (category_id.value,),
        ).fetchall()
        items = apply_order([_row_to_item(dict(r)) for r in rows], order)
        ids = [i.id for i in items]
        _write_order(conn, category_id.value, ids)
    return ids


def list_item_images() -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute("SELECT id, image_path FROM menu_items ORDER BY id").fetchall()
        return [dict(r) for r in rows]


def set_item_image(item_id: str, *, image_path: str, image_public_id: Optional[str]) -> None:
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            "UPDATE menu_items SET image_path = ?, image_public_id = ?, updated_at = ? WHERE id = ?",
            (image_path, image_public_id, _utc_now(), item_id),
        )
