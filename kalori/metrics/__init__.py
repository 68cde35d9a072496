# -*- coding: utf-8 -*-
"""Health metrics: BMI, body fat, BMR/TDEE, MET burn and heart-rate zones."""
