from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional, Set


def _split_csv(raw: str) -> List[str]:
    return [part.strip() for part in (raw or "").split(",") if part.strip()]


class Settings:
    """Centralized configuration for the calorie menu backend and admin client."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent

        self.data_root: Path = Path(
            os.environ.get("KALORI_DATA_ROOT") or (repo_root / "data")
        ).expanduser()
        self.app_db_path: Path = Path(
            os.environ.get("KALORI_DB_PATH") or (self.data_root / "kalori.db")
        ).expanduser()
        # Folder tree with one sub-folder per category, files named like `nasi_goreng-350.png`.
        self.menu_dir: Path = Path(
            os.environ.get("KALORI_MENU_DIR") or (repo_root / "public" / "menu")
        ).expanduser()

        # In production you MUST set KALORI_JWT_SECRET. The dev secret keeps local demos easy.
        self.jwt_secret: str = os.environ.get("KALORI_JWT_SECRET") or "dev-secret-change-me"
        self.token_ttl_days: int = int(os.environ.get("KALORI_TOKEN_TTL_DAYS") or "7")
        self.admin_emails: Set[str] = {
            email.lower() for email in _split_csv(os.environ.get("KALORI_ADMIN_EMAILS", ""))
        }

        self.cloudinary_cloud_name: Optional[str] = os.environ.get("CLOUDINARY_CLOUD_NAME")
        self.cloudinary_api_key: Optional[str] = os.environ.get("CLOUDINARY_API_KEY")
        self.cloudinary_api_secret: Optional[str] = os.environ.get("CLOUDINARY_API_SECRET")
        self.image_timeout: float = float(os.environ.get("KALORI_IMAGE_TIMEOUT") or "30")
        self.max_image_bytes: int = int(os.environ.get("KALORI_MAX_IMAGE_BYTES") or str(1024 * 1024))

        # Admin client.
        self.api_base_url: str = os.environ.get("KALORI_API_BASE_URL", "http://127.0.0.1:8000")
        self.api_timeout: float = float(os.environ.get("KALORI_API_TIMEOUT") or "60")
        self.timeout_notice_sec: float = float(os.environ.get("KALORI_TIMEOUT_NOTICE_SEC") or "15")

        self.log_level: str = os.environ.get("KALORI_LOG_LEVEL", "INFO")

        cors = os.environ.get("KALORI_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = _split_csv(cors)

    @property
    def cloudinary_configured(self) -> bool:
        return bool(self.cloudinary_cloud_name and self.cloudinary_api_key and self.cloudinary_api_secret)

    @property
    def uploads_dir(self) -> Path:
        return self.data_root / "uploads"

    @property
    def overrides_path(self) -> Path:
        return self.data_root / "admin-menu-overrides-v1.json"

    @property
    def client_settings_path(self) -> Path:
        return self.data_root / "client-settings.json"


settings = Settings()
