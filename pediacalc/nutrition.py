"""
PediaCalc: Nutritional Assessment Engine
========================================
Anthropometry (BMI, BSA) and growth z-scores for weight-for-age,
height-for-age and BMI-for-age, with WHO-style classifications and a
combined nutritional diagnosis.

ACCURACY: z-scores come from the small approximate reference table in
NUTRITION_CONSTANTS (see its docstring), not the full WHO LMS tables.
"""

import logging
import math
from typing import Dict, Tuple, Union

from pediacalc.constants import NUTRITION_CONSTANTS, Sex
from pediacalc.fluids import FluidTherapyCalculator
from pediacalc.models import NutritionalAssessment, ZScoreResult

logger = logging.getLogger(__name__)

ReferenceTable = Dict[Tuple[Sex, int], Tuple[float, float]]


class NutritionalAssessmentEngine:

    @staticmethod
    def calculate_bmi(weight_kg: float, height_cm: float) -> float:
        if not weight_kg or not height_cm or weight_kg <= 0 or height_cm <= 0:
            return 0.0
        height_m = height_cm / 100.0
        return weight_kg / (height_m * height_m)

    @staticmethod
    def reference_anchor(age_months: float) -> int:
        """Nearest table anchor (24/36/48/60 months)."""
        for upper_bound, anchor in NUTRITION_CONSTANTS.AGE_ANCHORS:
            if age_months < upper_bound:
                return anchor
        return NUTRITION_CONSTANTS.LAST_ANCHOR

    @staticmethod
    def z_score(value: float, age_months: float, sex: Sex, table: ReferenceTable) -> float:
        anchor = NutritionalAssessmentEngine.reference_anchor(age_months)
        mean, sd = table[(sex, anchor)]
        return (value - mean) / sd

    @staticmethod
    def z_to_percentile(z: float) -> float:
        """
        Normal CDF via the Zelen & Severo polynomial (abs error < 7.5e-8).
        """
        c = NUTRITION_CONSTANTS
        t = 1.0 / (1.0 + c.ZS_P * abs(z))
        d = c.ZS_D * math.exp(-z * z / 2.0)
        b1, b2, b3, b4, b5 = c.ZS_B
        p = d * t * (b1 + t * (b2 + t * (b3 + t * (b4 + t * b5))))
        return (1.0 - p) * 100.0 if z >= 0 else p * 100.0

    # --- Classifications (WHO cut-offs) ---

    @staticmethod
    def classify_weight_for_age(z: float) -> str:
        if z < -3: return "severe underweight"
        if z < -2: return "underweight"
        if z <= 1: return "normal weight"
        if z <= 2: return "overweight risk"
        return "overweight"

    @staticmethod
    def classify_height_for_age(z: float) -> str:
        if z < -3: return "severe stunting"
        if z < -2: return "stunting"
        if z <= 2: return "normal height"
        return "tall stature"

    @staticmethod
    def classify_bmi_for_age(z: float) -> str:
        if z < -3: return "severe malnutrition"
        if z < -2: return "malnutrition"
        if z < -1: return "malnutrition risk"
        if z <= 1: return "eutrophic"
        if z <= 2: return "overweight"
        if z <= 3: return "obesity"
        return "severe obesity"

    @staticmethod
    def nutritional_diagnosis(bmi_z: float, height_z: float) -> str:
        """
        BMI-for-age drives the diagnosis; stunting is appended when
        present alongside malnutrition or a eutrophic BMI.
        """
        bmi_class = NutritionalAssessmentEngine.classify_bmi_for_age(bmi_z)
        height_class = NutritionalAssessmentEngine.classify_height_for_age(height_z)

        if bmi_z < -2:
            if height_z < -2:
                return f"{bmi_class} with stunting (chronic)"
            return bmi_class

        if bmi_z >= 2:
            return bmi_class

        if height_z < -2:
            return f"eutrophic with {height_class}"

        return "eutrophic"

    @staticmethod
    def _z_result(z: float, classification: str) -> ZScoreResult:
        return ZScoreResult(
            z_score=round(z, 1),
            percentile=round(NutritionalAssessmentEngine.z_to_percentile(z), 1),
            classification=classification,
        )

    @staticmethod
    def assess(weight_kg: float, height_cm: float, age_months: int,
               sex: Union[Sex, str]) -> NutritionalAssessment:
        """`sex` is a Sex or "M"/"F" in either case."""
        engine = NutritionalAssessmentEngine
        c = NUTRITION_CONSTANTS
        sex = Sex(sex.strip().upper()) if isinstance(sex, str) else Sex(sex)

        if not weight_kg or not height_cm or weight_kg <= 0 or height_cm <= 0:
            logger.debug("Nutritional assessment skipped: weight and height required")
            missing = ZScoreResult(0.0, 0.0, c.INSUFFICIENT_DATA)
            return NutritionalAssessment(
                weight_kg=weight_kg, height_cm=height_cm, age_months=age_months, sex=sex,
                bmi=0.0, body_surface_area_m2=0.0,
                weight_for_age=missing, height_for_age=missing, bmi_for_age=missing,
                nutritional_diagnosis=c.INSUFFICIENT_DATA,
                reference_version=c.REFERENCE_VERSION,
            )

        bmi = engine.calculate_bmi(weight_kg, height_cm)
        bsa = FluidTherapyCalculator.calculate_bsa(weight_kg, height_cm)

        weight_z = engine.z_score(weight_kg, age_months, sex, c.WEIGHT_FOR_AGE)
        height_z = engine.z_score(height_cm, age_months, sex, c.HEIGHT_FOR_AGE)
        bmi_z = engine.z_score(bmi, age_months, sex, c.BMI_FOR_AGE)

        return NutritionalAssessment(
            weight_kg=weight_kg,
            height_cm=height_cm,
            age_months=age_months,
            sex=sex,
            bmi=round(bmi, 1),
            body_surface_area_m2=round(bsa, 2),
            weight_for_age=engine._z_result(weight_z, engine.classify_weight_for_age(weight_z)),
            height_for_age=engine._z_result(height_z, engine.classify_height_for_age(height_z)),
            bmi_for_age=engine._z_result(bmi_z, engine.classify_bmi_for_age(bmi_z)),
            nutritional_diagnosis=engine.nutritional_diagnosis(bmi_z, height_z),
            reference_version=c.REFERENCE_VERSION,
        )


assess = NutritionalAssessmentEngine.assess
