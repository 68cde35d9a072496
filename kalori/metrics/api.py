# -*- coding: utf-8 -*-
"""Health metrics: API endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.security import get_current_user
from ..profile.storage import get_profile
from .calculator import MET_ACTIVITIES, ActivityEntry, ActivityLevel, build_health_summary
from .models import MetActivity, MetricsRequest, MetricsResponse

router = APIRouter(prefix="/api/metrics", tags=["Metrics"])

_MULTIPLIERS = {level.value for level in ActivityLevel}


def _check_multiplier(value: float) -> float:
    if value not in _MULTIPLIERS:
        raise HTTPException(
            status_code=400,
            detail=f"activity_multiplier must be one of {sorted(_MULTIPLIERS)}",
        )
    return value


def _to_response(summary: Dict[str, Any]) -> MetricsResponse:
    summary["heart_rate_zones"] = [asdict(z) for z in summary["heart_rate_zones"]]
    return MetricsResponse.model_validate(summary)


@router.get("/activities", response_model=List[MetActivity], summary="MET values per activity")
def list_activities():
    return [MetActivity(key=key, met=met) for key, met in MET_ACTIVITIES.items()]


@router.post("/summary", response_model=MetricsResponse, summary="BMI, body fat, TDEE, burn and HR zones")
def metrics_summary(request: MetricsRequest):
    try:
        entries = [ActivityEntry.from_key(a.key, a.minutes) for a in request.activities]
    except KeyError as exc:
        raise HTTPException(status_code=400, detail=str(exc.args[0])) from exc
    summary = build_health_summary(
        age=request.age,
        weight_kg=request.weight_kg,
        height_cm=request.height_cm,
        gender=request.gender,
        activity_multiplier=_check_multiplier(request.activity_multiplier),
        activities=entries,
    )
    return _to_response(summary)


@router.get("/me", response_model=MetricsResponse, summary="Metrics from my stored profile")
def my_metrics(
    activity_multiplier: float = Query(default=ActivityLevel.LIGHT.value),
    user: dict = Depends(get_current_user),
):
    profile = get_profile(user["id"])
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    summary = build_health_summary(
        age=profile.get("age"),
        weight_kg=profile.get("weight"),
        height_cm=profile.get("height"),
        gender=profile.get("gender"),
        activity_multiplier=_check_multiplier(activity_multiplier),
    )
    return _to_response(summary)
