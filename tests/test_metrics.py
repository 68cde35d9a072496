# -*- coding: utf-8 -*-

from __future__ import annotations

import math
import unittest

from fastapi.testclient import TestClient

from kalori.api import app
from kalori.metrics.calculator import (
    ActivityEntry,
    ActivityLevel,
    BmiCategory,
    BodyFatCategory,
    body_fat_category,
    body_fat_percentage,
    bmi_category,
    build_health_summary,
    calculate_bmi,
    calculate_bmr,
    calculate_tdee,
    calorie_targets,
    calories_burned,
    healthy_weight_range,
    heart_rate_zones,
    max_heart_rate,
    total_calories_burned,
)


class TestFormulas(unittest.TestCase):
    def test_bmi(self) -> None:
        self.assertAlmostEqual(calculate_bmi(70, 175), 70 / (1.75 * 1.75))
        self.assertEqual(bmi_category(calculate_bmi(70, 175)), BmiCategory.NORMAL)
        self.assertEqual(bmi_category(18.4), BmiCategory.UNDERWEIGHT)
        self.assertEqual(bmi_category(25), BmiCategory.OVERWEIGHT)
        self.assertEqual(bmi_category(30), BmiCategory.OBESE)

    def test_missing_inputs_give_zero(self) -> None:
        self.assertEqual(calculate_bmi(None, 175), 0.0)
        self.assertEqual(calculate_bmi(70, ""), 0.0)
        self.assertEqual(calculate_bmi(float("nan"), 175), 0.0)
        self.assertEqual(calculate_bmi(70, float("inf")), 0.0)
        self.assertEqual(bmi_category(0), BmiCategory.EMPTY)
        self.assertEqual(calculate_bmr(70, 175, None, "male"), 0.0)
        self.assertEqual(body_fat_percentage(22, 0, "male"), 0.0)
        self.assertEqual(body_fat_category(0), BodyFatCategory.EMPTY)
        self.assertEqual(healthy_weight_range(None), {"min": 0.0, "max": 0.0})
        self.assertEqual(calorie_targets(0)["loss"], 0.0)

    def test_bmr_by_gender(self) -> None:
        self.assertAlmostEqual(calculate_bmr(70, 175, 30, "male"), 1648.75)
        self.assertAlmostEqual(calculate_bmr(70, 175, 30, "female"), 1482.75)
        # Anything but male falls back to the female formula.
        self.assertAlmostEqual(calculate_bmr(70, 175, 30, "other"), 1482.75)

    def test_body_fat(self) -> None:
        bmi = calculate_bmi(70, 175)
        expected = 1.2 * bmi + 0.23 * 30 - 10.8 - 5.4
        self.assertAlmostEqual(body_fat_percentage(bmi, 30, "male"), expected)
        self.assertAlmostEqual(body_fat_percentage(bmi, 30, "female"), expected + 10.8)
        self.assertEqual(body_fat_category(17.9), BodyFatCategory.LOW)
        self.assertEqual(body_fat_category(24.9), BodyFatCategory.NORMAL)
        self.assertEqual(body_fat_category(25), BodyFatCategory.HIGH)

    def test_tdee_and_targets(self) -> None:
        tdee = calculate_tdee(1648.75, ActivityLevel.MODERATE)
        self.assertAlmostEqual(tdee, 1648.75 * 1.55)
        targets = calorie_targets(tdee)
        self.assertAlmostEqual(targets["loss"], tdee - 500)
        self.assertAlmostEqual(targets["mild_loss"], tdee - 250)
        self.assertAlmostEqual(targets["gain"], tdee + 250)

    def test_calories_burned(self) -> None:
        self.assertAlmostEqual(calories_burned(7.0, 70, 30), 257.25)
        entries = [ActivityEntry.from_key("jogging", 30), ActivityEntry.from_key("yoga", 60)]
        self.assertAlmostEqual(total_calories_burned(entries, 70), 257.25 + 3.0 * 3.5 * 70 / 200 * 60)
        with self.assertRaises(KeyError):
            ActivityEntry.from_key("skydiving", 10)

    def test_heart_rate_zones(self) -> None:
        self.assertEqual(max_heart_rate(20), 200)
        zones = {z.key: z for z in heart_rate_zones(20)}
        self.assertEqual((zones["fatBurn"].min_bpm, zones["fatBurn"].max_bpm), (120, 140))
        self.assertEqual((zones["maximum"].min_bpm, zones["maximum"].max_bpm), (180, 200))
        self.assertEqual(heart_rate_zones(0), [])
        self.assertEqual(max_heart_rate(None), 0)

    def test_summary_never_contains_nan(self) -> None:
        summary = build_health_summary(age="", weight_kg="abc", height_cm=None, gender=None)
        for key in ("bmi", "body_fat_pct", "bmr", "tdee", "calories_burned_total"):
            self.assertTrue(math.isfinite(summary[key]), key)
            self.assertEqual(summary[key], 0.0)
        self.assertEqual(summary["bmi_category"], BmiCategory.EMPTY)


class TestMetricsApi(unittest.TestCase):
    def setUp(self) -> None:
        self.client = TestClient(app)

    def test_summary(self) -> None:
        resp = self.client.post(
            "/api/metrics/summary",
            json={
                "age": 20,
                "weight_kg": 70,
                "height_cm": 175,
                "gender": "male",
                "activity_multiplier": 1.2,
                "activities": [{"key": "jogging", "minutes": 30}],
            },
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        body = resp.json()
        self.assertEqual(body["bmi_category"], "normal")
        self.assertEqual(body["max_heart_rate"], 200)
        self.assertAlmostEqual(body["calories_burned_total"], 257.25)
        self.assertEqual(len(body["heart_rate_zones"]), 5)

    def test_unknown_activity_rejected(self) -> None:
        resp = self.client.post("/api/metrics/summary", json={"activities": [{"key": "skydiving", "minutes": 5}]})
        self.assertEqual(resp.status_code, 400)

    def test_invalid_multiplier_rejected(self) -> None:
        resp = self.client.post("/api/metrics/summary", json={"activity_multiplier": 3})
        self.assertEqual(resp.status_code, 400)

    def test_activities_listed(self) -> None:
        resp = self.client.get("/api/metrics/activities")
        self.assertEqual(resp.status_code, 200)
        self.assertIn({"key": "jogging", "met": 7.0}, resp.json())


if __name__ == "__main__":
    unittest.main()
