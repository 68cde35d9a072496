# -*- coding: utf-8 -*-
"""Image hosting: Cloudinary, or the local data root."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Union
from uuid import uuid4

import cloudinary
import cloudinary.exceptions
import cloudinary.uploader

from ..config import settings
from .validation import decode_data_url, is_data_url

logger = logging.getLogger(__name__)

ImagePayload = Union[str, Path]


class ImageHostError(RuntimeError):
    pass


@dataclass
class UploadedImage:
    url: str
    public_id: str


class ImageHost(Protocol):
    def upload(
        self,
        payload: ImagePayload,
        *,
        folder: str,
        public_id: Optional[str] = None,
        overwrite: bool = False,
    ) -> UploadedImage: ...

    def delete(self, public_id: str) -> None: ...


class CloudinaryImageHost:
    """Uploads and destroys images through the Cloudinary SDK."""

    def __init__(self, *, cloud_name: str, api_key: str, api_secret: str, timeout: float = 30) -> None:
        self.timeout = timeout
        cloudinary.config(cloud_name=cloud_name, api_key=api_key, api_secret=api_secret, secure=True)

    def upload(
        self,
        payload: ImagePayload,
        *,
        folder: str,
        public_id: Optional[str] = None,
        overwrite: bool = False,
    ) -> UploadedImage:
        options: Dict[str, Any] = {
            "folder": folder,
            "overwrite": overwrite,
            "resource_type": "image",
            "timeout": self.timeout,
        }
        if public_id:
            options["public_id"] = public_id
        try:
            result = cloudinary.uploader.upload(str(payload) if isinstance(payload, Path) else payload, **options)
        except cloudinary.exceptions.Error as exc:
            raise ImageHostError(f"Cloudinary upload failed: {exc}") from exc
        url = result.get("secure_url") or result.get("url")
        if not url:
            raise ImageHostError("Cloudinary upload returned no URL")
        uploaded_id = str(result.get("public_id") or (f"{folder}/{public_id}" if public_id else ""))
        logger.info("Uploaded image %s", uploaded_id)
        return UploadedImage(url=str(url), public_id=uploaded_id)

    def delete(self, public_id: str) -> None:
        try:
            result = cloudinary.uploader.destroy(public_id, resource_type="image", invalidate=True)
        except cloudinary.exceptions.Error as exc:
            raise ImageHostError(f"Cloudinary destroy failed for {public_id}: {exc}") from exc
        if result.get("result") not in ("ok", "not found"):
            raise ImageHostError(f"Cloudinary destroy failed for {public_id}: {result.get('result')}")
        logger.info("Deleted image %s", public_id)


class LocalImageHost:
    """Stores images under the data root and serves them from ``/uploads``."""

    def __init__(self, root: Path, *, url_prefix: str = "/uploads") -> None:
        self.root = root
        self.url_prefix = url_prefix.rstrip("/")

    def upload(
        self,
        payload: ImagePayload,
        *,
        folder: str,
        public_id: Optional[str] = None,
        overwrite: bool = False,
    ) -> UploadedImage:
        if isinstance(payload, Path):
            data = payload.read_bytes()
            suffix = payload.suffix.lower()
        elif is_data_url(payload):
            decoded = decode_data_url(payload)
            data = decoded.data
            suffix = decoded.suffix
        else:
            raise ImageHostError("Local image host only accepts data URLs or local files")

        name = public_id or uuid4().hex
        target_dir = self.root / folder
        target_dir.mkdir(parents=True, exist_ok=True)
        existing = list(target_dir.glob(f"{name}.*"))
        if existing and not overwrite:
            target = existing[0]
        else:
            for old in existing:
                old.unlink()
            target = target_dir / f"{name}{suffix}"
            target.write_bytes(data)
        logger.info("Stored image %s/%s", folder, target.name)
        return UploadedImage(url=f"{self.url_prefix}/{folder}/{target.name}", public_id=f"{folder}/{name}")

    def delete(self, public_id: str) -> None:
        folder, _, name = public_id.rpartition("/")
        for path in (self.root / folder).glob(f"{name}.*"):
            path.unlink()
            logger.info("Deleted image %s", path)


def upload_if_needed(
    host: ImageHost,
    payload: Optional[str],
    *,
    folder: str,
    public_id: Optional[str] = None,
    overwrite: bool = False,
) -> Optional[UploadedImage]:
    """Upload inline data URLs; anything else passes through (returns None)."""
    if not is_data_url(payload):
        return None
    # Reject bad payloads before anything reaches the host.
    decode_data_url(payload)
    return host.upload(payload, folder=folder, public_id=public_id, overwrite=overwrite)


_host: Optional[ImageHost] = None


def build_image_host() -> ImageHost:
    if settings.cloudinary_configured:
        return CloudinaryImageHost(
            cloud_name=str(settings.cloudinary_cloud_name),
            api_key=str(settings.cloudinary_api_key),
            api_secret=str(settings.cloudinary_api_secret),
            timeout=settings.image_timeout,
        )
    return LocalImageHost(settings.uploads_dir)


def get_image_host() -> ImageHost:
    """FastAPI dependency; tests override it with a recording fake."""
    global _host
    if _host is None:
        _host = build_image_host()
    return _host
