# -*- coding: utf-8 -*-
"""Upload-then-commit with best-effort rollback of the upload."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from .hosting import ImageHost, UploadedImage, upload_if_needed

logger = logging.getLogger(__name__)


def delete_quietly(host: ImageHost, public_id: str) -> None:
    try:
        host.delete(public_id)
    except Exception:
        logger.warning("Could not remove orphaned upload %s", public_id, exc_info=True)


@contextmanager
def uploaded_image(
    host: ImageHost,
    payload: Optional[str],
    *,
    folder: str,
    public_id: Optional[str] = None,
    overwrite: bool = False,
) -> Iterator[Optional[UploadedImage]]:
    """Upload ``payload`` (if it is a data URL) and yield the result.

    When the body of the ``with`` block raises, the upload is deleted once and
    the original exception propagates unchanged.
    """
    uploaded = upload_if_needed(host, payload, folder=folder, public_id=public_id, overwrite=overwrite)
    try:
        yield uploaded
    except BaseException:
        if uploaded is not None:
            logger.info("Rolling back upload %s after failed write", uploaded.public_id)
            delete_quietly(host, uploaded.public_id)
        raise
