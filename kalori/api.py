# -*- coding: utf-8 -*-
"""
Kalori API

Menu calorie calculator, admin menu management and personal health metrics.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .app_db import init_app_db
from .auth.security import get_current_user_from_request
from .auth.storage import add_admin_emails
from .config import settings
from .errors import ValidationError
from .images.hosting import ImageHostError
from .menu.api import router as menu_router
from .menu.catalog import get_canonical_menu
from .menu.storage import seed_menu_if_empty
from .metrics.api import router as metrics_router
from .profile.api import router as profile_router

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Kalori",
    description="Menu calorie calculator, admin panel and health metrics",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def init_backend() -> None:
    """Create tables, seed the canonical menu once, register configured admins."""
    init_app_db(settings.app_db_path)
    seeded = seed_menu_if_empty(get_canonical_menu(settings.menu_dir))
    if seeded:
        logger.info("Seeded canonical menu (%d items)", seeded)
    add_admin_emails(settings.admin_emails)
    settings.uploads_dir.mkdir(parents=True, exist_ok=True)


@app.on_event("startup")
def _startup_init_db() -> None:
    init_backend()


_PUBLIC_PREFIXES = (
    "/api/health",
    "/api/metrics/summary",
    "/api/metrics/activities",
    "/api/docs",
    "/api/redoc",
    "/api/openapi.json",
)


def _is_public(request: Request) -> bool:
    path = request.url.path
    if request.method == "OPTIONS" or any(path.startswith(p) for p in _PUBLIC_PREFIXES):
        return True
    if path == "/api/menu" and request.method == "GET":
        return True
    return path == "/api/menu/tally" and request.method == "POST"


@app.middleware("http")
async def _auth_gate(request: Request, call_next):
    if request.url.path.startswith("/api") and not _is_public(request):
        try:
            request.state.user = get_current_user_from_request(request)
        except HTTPException as exc:
            return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
    return await call_next(request)


@app.exception_handler(RequestValidationError)
async def _validation_as_bad_request(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": "Invalid data", "errors": jsonable_encoder(exc.errors())})


@app.exception_handler(ValidationError)
async def _image_validation(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"detail": exc.message, "code": exc.code.value})


@app.exception_handler(ImageHostError)
async def _image_host_failure(request: Request, exc: ImageHostError):
    logger.error("Image host failure: %s", exc)
    return JSONResponse(status_code=502, content={"detail": "Image upload failed"})


app.include_router(menu_router)
app.include_router(profile_router)
app.include_router(metrics_router)


@app.get("/api/health")
def health() -> dict:
    return {"ok": True}


# Locally hosted images (used when Cloudinary is not configured).
app.mount("/uploads", StaticFiles(directory=settings.uploads_dir, check_dir=False), name="uploads")
