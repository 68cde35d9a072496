# -*- coding: utf-8 -*-

from __future__ import annotations

import base64
import tempfile
import unittest
from pathlib import Path
from typing import Any, List, Optional, Tuple
from unittest import mock

from kalori.config import settings
from kalori.images.hosting import UploadedImage

ADMIN_EMAIL = "admin@example.com"

PNG_DATA_URL = "data:image/png;base64," + base64.b64encode(b"\x89PNG\r\n\x1a\nfake-image").decode("ascii")


def use_temp_data_root(case: unittest.TestCase) -> Path:
    """Point settings at a fresh temp dir for the duration of the test."""
    tmp = tempfile.TemporaryDirectory()
    case.addCleanup(tmp.cleanup)
    root = Path(tmp.name)
    menu_dir = root / "menu"
    menu_dir.mkdir()
    for name, value in {
        "data_root": root,
        "app_db_path": root / "kalori.db",
        "menu_dir": menu_dir,
        "admin_emails": {ADMIN_EMAIL},
        "jwt_secret": "test-secret",
    }.items():
        patcher = mock.patch.object(settings, name, value)
        patcher.start()
        case.addCleanup(patcher.stop)
    return root


def auth_headers(user_id: str, email: Optional[str]) -> dict:
    from kalori.auth.security import create_access_token

    return {"Authorization": f"Bearer {create_access_token(user_id=user_id, email=email)}"}


class FakeImageHost:
    """Records uploads and deletes instead of talking to a hosting service."""

    def __init__(self, *, fail_delete: bool = False) -> None:
        self.uploads: List[Tuple[str, Optional[str], bool]] = []
        self.deleted: List[str] = []
        self.fail_delete = fail_delete

    def upload(self, payload: Any, *, folder: str, public_id: Optional[str] = None, overwrite: bool = False) -> UploadedImage:
        name = public_id or f"img{len(self.uploads) + 1}"
        self.uploads.append((folder, public_id, overwrite))
        return UploadedImage(url=f"https://img.test/{folder}/{name}.png", public_id=f"{folder}/{name}")

    def delete(self, public_id: str) -> None:
        self.deleted.append(public_id)
        if self.fail_delete:
            raise RuntimeError("delete failed")
