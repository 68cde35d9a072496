# -*- coding: utf-8 -*-
"""Auth: admin allow-list storage helpers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, List, Optional

from ..app_db import db_conn
from ..config import settings


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def add_admin_emails(emails: Iterable[str]) -> int:
    normalized = sorted({e.lower().strip() for e in emails if e and e.strip()})
    if not normalized:
        return 0
    now = _utc_now()
    with db_conn(settings.app_db_path) as conn:
        conn.executemany(
            "INSERT OR IGNORE INTO admin_users (email, is_active, created_at) VALUES (?, 1, ?)",
            [(email, now) for email in normalized],
        )
    return len(normalized)


def list_admin_emails() -> List[str]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute("SELECT email FROM admin_users WHERE is_active = 1 ORDER BY email").fetchall()
        return [r["email"] for r in rows]


def is_admin_user(uid: str, email: Optional[str]) -> bool:
    if not uid or not email:
        return False
    email_norm = email.lower().strip()
    if email_norm in settings.admin_emails:
        return True
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute(
            "SELECT 1 FROM admin_users WHERE email = ? AND is_active = 1", (email_norm,)
        ).fetchone()
        return row is not None
