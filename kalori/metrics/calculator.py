# -*- coding: utf-8 -*-
"""
Personal health metrics calculator.

BMI, body fat estimate, BMR/TDEE, calories burned by activity and heart-rate
training zones. Every function degrades to 0 (or an empty sentinel) when a
required input is missing, so callers never see NaN or Infinity.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class ActivityLevel(Enum):
    """Activity level multipliers for TDEE"""
    SEDENTARY = 1.2       # Little or no exercise
    LIGHT = 1.375         # Light exercise 1-3 days/week
    MODERATE = 1.55       # Moderate exercise 3-5 days/week
    ACTIVE = 1.725        # Heavy exercise 6-7 days/week
    EXTRA_ACTIVE = 1.9    # Very heavy exercise, physical job


class BmiCategory(str, Enum):
    EMPTY = "empty"
    UNDERWEIGHT = "underweight"
    NORMAL = "normal"
    OVERWEIGHT = "overweight"
    OBESE = "obese"


class BodyFatCategory(str, Enum):
    EMPTY = "empty"
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"


# MET values per activity key.
MET_ACTIVITIES: Dict[str, float] = {
    "walkingSlow": 2.5,
    "walkingBrisk": 3.8,
    "jogging": 7.0,
    "cyclingModerate": 6.8,
    "swimming": 6.0,
    "strengthTraining": 5.0,
    "yoga": 3.0,
    "basketball": 8.0,
}

# (key, low factor, high factor) of the max heart rate.
HEART_RATE_ZONES = (
    ("recovery", 0.5, 0.6),
    ("fatBurn", 0.6, 0.7),
    ("aerobic", 0.7, 0.8),
    ("threshold", 0.8, 0.9),
    ("maximum", 0.9, 1.0),
)


@dataclass
class HeartRateZone:
    key: str
    low_factor: float
    high_factor: float
    min_bpm: int
    max_bpm: int


@dataclass
class ActivityEntry:
    """One logged activity for the calories-burned list."""
    met: float
    minutes: float
    key: Optional[str] = None

    @classmethod
    def from_key(cls, key: str, minutes: float) -> "ActivityEntry":
        if key not in MET_ACTIVITIES:
            raise KeyError(f"Unknown activity: {key}")
        return cls(met=MET_ACTIVITIES[key], minutes=number_or_zero(minutes), key=key)


def number_or_zero(value: Any) -> float:
    """Coerce to a finite float, 0.0 for None/blank/NaN/inf/garbage."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _is_male(gender: Any) -> bool:
    raw = gender.value if isinstance(gender, Gender) else str(gender or "")
    return raw.strip().lower() == Gender.MALE.value


# ===== BMI =====

def calculate_bmi(weight_kg: Any, height_cm: Any) -> float:
    """
    Calculate Body Mass Index.

    Args:
        weight_kg: Weight in kilograms
        height_cm: Height in centimeters

    Returns:
        weight / (height in meters)^2, or 0.0 when either input is missing
    """
    weight = number_or_zero(weight_kg)
    height = number_or_zero(height_cm)
    if weight <= 0 or height <= 0:
        return 0.0
    height_m = height / 100
    return weight / (height_m * height_m)


def bmi_category(bmi: Any) -> BmiCategory:
    value = number_or_zero(bmi)
    if value == 0:
        return BmiCategory.EMPTY
    if value < 18.5:
        return BmiCategory.UNDERWEIGHT
    if value < 25:
        return BmiCategory.NORMAL
    if value < 30:
        return BmiCategory.OVERWEIGHT
    return BmiCategory.OBESE


def healthy_weight_range(height_cm: Any) -> Dict[str, float]:
    """Weight band (kg) matching BMI 18.5-24.9 for the given height."""
    height = number_or_zero(height_cm)
    if height <= 0:
        return {"min": 0.0, "max": 0.0}
    height_m = height / 100
    return {"min": 18.5 * height_m * height_m, "max": 24.9 * height_m * height_m}


# ===== Body fat =====

def body_fat_percentage(bmi: Any, age: Any, gender: Any) -> float:
    """
    Adult body fat estimate from BMI (Deurenberg).

    Args:
        bmi: Body Mass Index
        age: Age in years
        gender: "male" or "female"; anything but male uses the female factor

    Returns:
        Estimated body fat %, or 0.0 when age or BMI is missing
    """
    value = number_or_zero(bmi)
    years = number_or_zero(age)
    if not value or not years:
        return 0.0
    gender_factor = 1 if _is_male(gender) else 0
    return 1.2 * value + 0.23 * years - 10.8 * gender_factor - 5.4


def body_fat_category(body_fat: Any) -> BodyFatCategory:
    value = number_or_zero(body_fat)
    if value == 0:
        return BodyFatCategory.EMPTY
    if value < 18:
        return BodyFatCategory.LOW
    if value < 25:
        return BodyFatCategory.NORMAL
    return BodyFatCategory.HIGH


# ===== Energy =====

def calculate_bmr(weight_kg: Any, height_cm: Any, age: Any, gender: Any) -> float:
    """
    Basal Metabolic Rate, Mifflin-St Jeor.

    Men:   10 × weight(kg) + 6.25 × height(cm) − 5 × age + 5
    Women: 10 × weight(kg) + 6.25 × height(cm) − 5 × age − 161
    """
    weight = number_or_zero(weight_kg)
    height = number_or_zero(height_cm)
    years = number_or_zero(age)
    if not weight or not height or not years:
        return 0.0
    base = 10 * weight + 6.25 * height - 5 * years
    if _is_male(gender):
        return base + 5
    return base - 161


def calculate_tdee(bmr: Any, multiplier: Any) -> float:
    if isinstance(multiplier, ActivityLevel):
        multiplier = multiplier.value
    return number_or_zero(bmr) * number_or_zero(multiplier)


def calorie_targets(tdee: Any) -> Dict[str, float]:
    maintain = number_or_zero(tdee)
    if not maintain:
        return {"maintain": 0.0, "mild_loss": 0.0, "loss": 0.0, "gain": 0.0}
    return {
        "maintain": maintain,
        "mild_loss": maintain - 250,
        "loss": maintain - 500,
        "gain": maintain + 250,
    }


def calories_burned(met: Any, weight_kg: Any, minutes: Any) -> float:
    """MET × 3.5 × weight / 200 × minutes."""
    return number_or_zero(met) * 3.5 * number_or_zero(weight_kg) / 200 * number_or_zero(minutes)


def total_calories_burned(entries: Iterable[ActivityEntry], weight_kg: Any) -> float:
    return sum(calories_burned(entry.met, weight_kg, entry.minutes) for entry in entries)


# ===== Heart rate =====

def max_heart_rate(age: Any) -> int:
    years = number_or_zero(age)
    if not years:
        return 0
    return _round_half_up(220 - years)


def heart_rate_zones(age: Any) -> List[HeartRateZone]:
    hr_max = max_heart_rate(age)
    if not hr_max:
        return []
    return [
        HeartRateZone(
            key=key,
            low_factor=low,
            high_factor=high,
            min_bpm=_round_half_up(hr_max * low),
            max_bpm=_round_half_up(hr_max * high),
        )
        for key, low, high in HEART_RATE_ZONES
    ]


def build_health_summary(
    *,
    age: Any,
    weight_kg: Any,
    height_cm: Any,
    gender: Any,
    activity_multiplier: Any = ActivityLevel.LIGHT.value,
    activities: Iterable[ActivityEntry] = (),
) -> Dict[str, Any]:
    """Every metric for one profile in a single dict."""
    bmi = calculate_bmi(weight_kg, height_cm)
    body_fat = body_fat_percentage(bmi, age, gender)
    bmr = calculate_bmr(weight_kg, height_cm, age, gender)
    tdee = calculate_tdee(bmr, activity_multiplier)
    entries = list(activities)
    return {
        "bmi": bmi,
        "bmi_category": bmi_category(bmi),
        "healthy_weight": healthy_weight_range(height_cm),
        "body_fat_pct": body_fat,
        "body_fat_category": body_fat_category(body_fat),
        "bmr": bmr,
        "tdee": tdee,
        "calorie_targets": calorie_targets(tdee),
        "activities": [
            {"key": e.key, "met": e.met, "minutes": e.minutes, "kcal": calories_burned(e.met, weight_kg, e.minutes)}
            for e in entries
        ],
        "calories_burned_total": total_calories_burned(entries, weight_kg),
        "max_heart_rate": max_heart_rate(age),
        "heart_rate_zones": heart_rate_zones(age),
    }
