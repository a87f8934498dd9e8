"""
PediaCalc: Fluid Therapy Calculator
===================================
Maintenance fluids (Holliday-Segar and body-surface-area methods),
dehydration replacement plans (WHO A/B/C) and burn resuscitation
(Parkland). All volumes in ml.

Inputs are assumed validated upstream; non-positive weight or missing
height degrade to zero results with an explanatory text.
"""

import logging
import math
from typing import Optional, Union

from pediacalc.constants import FLUID_CONSTANTS, DehydrationPlanType
from pediacalc.models import (
    BodySurfaceAreaResult,
    DehydrationPlan,
    FluidTherapyCalculation,
    HollidaySegarResult,
    IVFluidComposition,
)

logger = logging.getLogger(__name__)


def _round_ml(value: float) -> int:
    """Round half up, like the bedside charts do (33.5 -> 34)."""
    return int(math.floor(value + 0.5))


def _round_1dp(value: float) -> float:
    return math.floor(value * 10.0 + 0.5) / 10.0


class FluidTherapyCalculator:
    """
    Stateless. Every method is a pure function of its arguments.
    """

    @staticmethod
    def _maintenance_ml_day(weight_kg: float) -> float:
        c = FLUID_CONSTANTS
        if weight_kg <= c.FIRST_TIER_LIMIT_KG:
            return c.FIRST_TIER_ML_KG * weight_kg
        if weight_kg <= c.SECOND_TIER_LIMIT_KG:
            return (c.FIRST_TIER_ML_KG * c.FIRST_TIER_LIMIT_KG
                    + c.SECOND_TIER_ML_KG * (weight_kg - c.FIRST_TIER_LIMIT_KG))
        return (c.FIRST_TIER_ML_KG * c.FIRST_TIER_LIMIT_KG
                + c.SECOND_TIER_ML_KG * (c.SECOND_TIER_LIMIT_KG - c.FIRST_TIER_LIMIT_KG)
                + c.THIRD_TIER_ML_KG * (weight_kg - c.SECOND_TIER_LIMIT_KG))

    @staticmethod
    def holliday_segar(weight_kg: float) -> HollidaySegarResult:
        """
        100 ml/kg for the first 10 kg, 50 ml/kg for the next 10 kg,
        20 ml/kg above 20 kg.
        """
        c = FLUID_CONSTANTS
        if not weight_kg or weight_kg <= 0:
            return HollidaySegarResult(0.0, 0, "Weight required for Holliday-Segar")

        daily = FluidTherapyCalculator._maintenance_ml_day(weight_kg)

        if weight_kg <= c.FIRST_TIER_LIMIT_KG:
            breakdown = f"{c.FIRST_TIER_ML_KG:g} ml/kg x {weight_kg:g} kg = {daily:g} ml"
        elif weight_kg <= c.SECOND_TIER_LIMIT_KG:
            breakdown = (
                f"{c.FIRST_TIER_ML_KG * c.FIRST_TIER_LIMIT_KG:g} ml (first {c.FIRST_TIER_LIMIT_KG:g} kg) + "
                f"{c.SECOND_TIER_ML_KG:g} ml/kg x {weight_kg - c.FIRST_TIER_LIMIT_KG:g} kg = {daily:g} ml"
            )
        else:
            base = daily - c.THIRD_TIER_ML_KG * (weight_kg - c.SECOND_TIER_LIMIT_KG)
            breakdown = (
                f"{base:g} ml (first {c.SECOND_TIER_LIMIT_KG:g} kg) + "
                f"{c.THIRD_TIER_ML_KG:g} ml/kg x {weight_kg - c.SECOND_TIER_LIMIT_KG:g} kg = {daily:g} ml"
            )

        return HollidaySegarResult(
            maintenance_per_day=daily,
            maintenance_per_hour=_round_ml(daily / c.HOURS_PER_DAY),
            formula_breakdown=breakdown,
        )

    @staticmethod
    def calculate_bsa(weight_kg: float, height_cm: Optional[float]) -> float:
        """
        Body Surface Area (m2), Mosteller formula.
        Returns 0.0 when height or weight is missing.
        """
        if not weight_kg or weight_kg <= 0:
            return 0.0
        if height_cm is None or not isinstance(height_cm, (int, float)) or height_cm <= 0:
            return 0.0
        return math.sqrt((weight_kg * height_cm) / FLUID_CONSTANTS.MOSTELLER_DIVISOR)

    @staticmethod
    def bsa_maintenance(weight_kg: float, height_cm: Optional[float]) -> BodySurfaceAreaResult:
        c = FLUID_CONSTANTS
        bsa = FluidTherapyCalculator.calculate_bsa(weight_kg, height_cm)
        if bsa <= 0:
            return BodySurfaceAreaResult(
                bsa_m2=0.0,
                maintenance_per_day=0,
                formula="Unavailable: height and weight required for Mosteller BSA",
            )

        daily = _round_ml(bsa * c.BSA_ML_M2)
        return BodySurfaceAreaResult(
            bsa_m2=bsa,
            maintenance_per_day=daily,
            formula=f"sqrt({weight_kg:g} x {height_cm:g} / 3600) = {bsa:.2f} m2; "
                    f"{bsa:.2f} m2 x {c.BSA_ML_M2:g} ml/m2 = {daily} ml/day",
            maintenance_range=(_round_ml(bsa * c.BSA_ML_M2_MIN), _round_ml(bsa * c.BSA_ML_M2_MAX)),
        )

    @staticmethod
    def dehydration_plan(weight_kg: float, dehydration_percent: Optional[float]) -> Optional[DehydrationPlan]:
        """
        Deficit + maintenance for the first 24 h. None when no
        dehydration percentage was given.
        """
        c = FLUID_CONSTANTS
        if not dehydration_percent or dehydration_percent <= 0:
            return None
        if not weight_kg or weight_kg <= 0:
            return None

        deficit = weight_kg * 1000.0 * (dehydration_percent / 100.0)
        maintenance = FluidTherapyCalculator._maintenance_ml_day(weight_kg)

        bolus = 0.0
        if dehydration_percent < c.PLAN_B_THRESHOLD_PCT:
            plan = DehydrationPlanType.A
        elif dehydration_percent < c.PLAN_C_THRESHOLD_PCT:
            plan = DehydrationPlanType.B
        else:
            plan = DehydrationPlanType.C
            bolus = weight_kg * c.PLAN_C_BOLUS_ML_KG

        return DehydrationPlan(
            deficit_ml=deficit,
            maintenance_ml=maintenance,
            total_ml=deficit + maintenance,
            plan=plan,
            bolus_ml=bolus,
        )

    @staticmethod
    def calculate_burn_fluid(weight_kg: float, percent_bsa_burned: float) -> float:
        """Parkland: 4 ml x kg x %TBSA over the first 24 h."""
        return FLUID_CONSTANTS.PARKLAND_ML_KG_PCT * weight_kg * percent_bsa_burned

    @staticmethod
    def calculate_fluid_therapy(weight_kg: float,
                                height_cm: Optional[float] = None,
                                dehydration_percent: Optional[float] = None) -> FluidTherapyCalculation:
        result = FluidTherapyCalculation(
            weight_kg=weight_kg,
            holliday_segar=FluidTherapyCalculator.holliday_segar(weight_kg),
            body_surface_area=FluidTherapyCalculator.bsa_maintenance(weight_kg, height_cm),
            dehydration=FluidTherapyCalculator.dehydration_plan(weight_kg, dehydration_percent),
        )
        logger.debug(f"Fluids for {weight_kg} kg: HS={result.holliday_segar.maintenance_per_day} ml/day, "
                     f"BSA={result.body_surface_area.maintenance_per_day} ml/day, "
                     f"plan={result.dehydration.plan.value if result.dehydration else '-'}")
        return result

    @staticmethod
    def iv_fluid_composition(base_volume_ml: float, glucose_percent: Union[float, str],
                             nacl_volume_ml: float, kcl_volume_ml: float,
                             rate_ml_h: float) -> IVFluidComposition:
        """
        Content of a glucose drip with NaCl 10% and KCl 10% added, e.g.
        D5% 500 ml + NaCl 10% 10 ml + KCl 10% 5 ml at 40 ml/h.
        Glucose is counted on the base volume only.
        """
        c = FLUID_CONSTANTS
        glucose_g = base_volume_ml * float(glucose_percent) / 100.0

        return IVFluidComposition(
            total_volume_ml=base_volume_ml + nacl_volume_ml + kcl_volume_ml,
            glucose_g=_round_1dp(glucose_g),
            calories_kcal=_round_ml(glucose_g * c.GLUCOSE_KCAL_PER_G),
            sodium_meq=_round_1dp(nacl_volume_ml * c.NACL_10PCT_MEQ_ML),
            potassium_meq=_round_1dp(kcl_volume_ml * c.KCL_10PCT_MEQ_ML),
            rate_ml_h=rate_ml_h,
            volume_per_day_ml=rate_ml_h * c.HOURS_PER_DAY,
        )

    @staticmethod
    def format_fluid_order(calculation: FluidTherapyCalculation) -> str:
        """
        Human-readable IV order, e.g. for pasting into the daily orders.
        """
        hs = calculation.holliday_segar
        plan = calculation.dehydration
        total = plan.total_ml if plan else hs.maintenance_per_day

        lines = [
            f"IV fluids: {_round_ml(total)} ml/24h ({_round_ml(total / FLUID_CONSTANTS.HOURS_PER_DAY)} ml/h)",
            f"Holliday-Segar: {hs.formula_breakdown}",
        ]
        if calculation.body_surface_area.available:
            lines.append(f"BSA method: {calculation.body_surface_area.maintenance_per_day} ml/day")
        if plan:
            lines.append(f"Dehydration plan {plan.plan.value}")
            lines.append(f"Deficit: {_round_ml(plan.deficit_ml)} ml")
            if plan.bolus_ml > 0:
                lines.append(f"Initial bolus: {_round_ml(plan.bolus_ml)} ml")
        return "\n".join(lines)


calculate_fluid_therapy = FluidTherapyCalculator.calculate_fluid_therapy
calculate_burn_fluid = FluidTherapyCalculator.calculate_burn_fluid
format_fluid_order = FluidTherapyCalculator.format_fluid_order
iv_fluid_composition = FluidTherapyCalculator.iv_fluid_composition
