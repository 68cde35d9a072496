# -*- coding: utf-8 -*-
"""Health metrics: Pydantic models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from .calculator import BmiCategory, BodyFatCategory


class ActivityInput(BaseModel):
    key: str = Field(..., description="MET activity key, e.g. jogging")
    minutes: float = Field(0.0, ge=0)


class MetricsRequest(BaseModel):
    age: float = Field(0.0, ge=0)
    weight_kg: float = Field(0.0, ge=0)
    height_cm: float = Field(0.0, ge=0)
    gender: str = Field("male", pattern="^(male|female)$")
    activity_multiplier: float = Field(1.375, description="one of 1.2, 1.375, 1.55, 1.725, 1.9")
    activities: List[ActivityInput] = Field(default_factory=list)


class WeightRange(BaseModel):
    min: float
    max: float


class CalorieTargets(BaseModel):
    maintain: float
    mild_loss: float
    loss: float
    gain: float


class ActivityBurn(BaseModel):
    key: Optional[str] = None
    met: float
    minutes: float
    kcal: float


class HeartRateZoneOut(BaseModel):
    key: str
    low_factor: float
    high_factor: float
    min_bpm: int
    max_bpm: int


class MetricsResponse(BaseModel):
    bmi: float
    bmi_category: BmiCategory
    healthy_weight: WeightRange
    body_fat_pct: float
    body_fat_category: BodyFatCategory
    bmr: float
    tdee: float
    calorie_targets: CalorieTargets
    activities: List[ActivityBurn]
    calories_burned_total: float
    max_heart_rate: int
    heart_rate_zones: List[HeartRateZoneOut]


class MetActivity(BaseModel):
    key: str
    met: float
