# -*- coding: utf-8 -*-
"""Profile: DB storage helpers."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..app_db import db_conn
from ..config import settings

_FIELDS = ("email", "username", "age", "weight", "height", "gender", "photo_url")


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def finite_or_none(value: Any) -> Optional[float]:
    """Numbers from the form; blanks and garbage become None (field left unchanged)."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def get_profile(uid: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM user_profiles WHERE uid = ?", (uid,)).fetchone()
        return dict(row) if row else None


def upsert_profile(uid: str, **values: Any) -> Dict[str, Any]:
    """Insert or update; ``None`` values keep whatever is stored."""
    changes = {k: v for k, v in values.items() if k in _FIELDS and v is not None}
    now = _utc_now()
    with db_conn(settings.app_db_path) as conn:
        exists = conn.execute("SELECT 1 FROM user_profiles WHERE uid = ?", (uid,)).fetchone()
        if exists:
            assignments = ", ".join(f"{k} = ?" for k in [*changes, "updated_at"])
            conn.execute(
                f"UPDATE user_profiles SET {assignments} WHERE uid = ?",
                (*changes.values(), now, uid),
            )
        else:
            columns = ["uid", *changes, "created_at", "updated_at"]
            placeholders = ", ".join("?" for _ in columns)
            conn.execute(
                f"INSERT INTO user_profiles ({', '.join(columns)}) VALUES ({placeholders})",
                (uid, *changes.values(), now, now),
            )
        row = conn.execute("SELECT * FROM user_profiles WHERE uid = ?", (uid,)).fetchone()
        return dict(row)
