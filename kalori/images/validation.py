# -*- coding: utf-8 -*-
"""Image constraints (PNG/JPEG, at most 1 MiB) and data-URL helpers."""

from __future__ import annotations

import base64
import binascii
import mimetypes
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..config import settings
from ..errors import ValidationCode, ValidationError

ALLOWED_IMAGE_TYPES = {"image/png", "image/jpeg", "image/jpg"}

_DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?P<params>(;[^,;]+)*),(?P<data>.*)$", re.DOTALL)

_SUFFIXES = {"image/png": ".png", "image/jpeg": ".jpg", "image/jpg": ".jpg"}


@dataclass
class DecodedImage:
    content_type: str
    data: bytes

    @property
    def suffix(self) -> str:
        return _SUFFIXES.get(self.content_type, "")


def is_data_url(value: Optional[str]) -> bool:
    return isinstance(value, str) and value.startswith("data:")


def check_image(content_type: Optional[str], size: int, *, max_bytes: Optional[int] = None) -> None:
    limit = settings.max_image_bytes if max_bytes is None else max_bytes
    if (content_type or "").lower() not in ALLOWED_IMAGE_TYPES:
        raise ValidationError(ValidationCode.INVALID_IMAGE_TYPE)
    if size > limit:
        raise ValidationError(ValidationCode.IMAGE_TOO_LARGE)


def decode_data_url(value: str, *, max_bytes: Optional[int] = None) -> DecodedImage:
    """Parse and validate a base64 ``data:image/...`` URL."""
    match = _DATA_URL_RE.match(value or "")
    if not match or ";base64" not in (match.group("params") or ""):
        raise ValidationError(ValidationCode.INVALID_IMAGE_DATA)
    content_type = (match.group("mime") or "").lower()
    if content_type not in ALLOWED_IMAGE_TYPES:
        raise ValidationError(ValidationCode.INVALID_IMAGE_TYPE)
    try:
        data = base64.b64decode(match.group("data"), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValidationError(ValidationCode.INVALID_IMAGE_DATA) from exc
    check_image(content_type, len(data), max_bytes=max_bytes)
    return DecodedImage(content_type=content_type, data=data)


def encode_data_url(content_type: str, data: bytes) -> str:
    return f"data:{content_type};base64,{base64.b64encode(data).decode('ascii')}"


def read_image_file(path: Path, *, max_bytes: Optional[int] = None) -> str:
    """Validate a local image file and return it as a data URL."""
    content_type, _ = mimetypes.guess_type(str(path))
    check_image(content_type, path.stat().st_size, max_bytes=max_bytes)
    return encode_data_url(content_type or "", path.read_bytes())
