# dosing.py
import logging
from typing import Optional, Union

from pediacalc.models import DoseResult, Medication
from pediacalc.reference_data import MEDICATION_LIBRARY, MedicationId

logger = logging.getLogger(__name__)

class DoseCalculator:
    @staticmethod
    def calculate_dose(medication: Medication, weight_kg: Optional[float]) -> DoseResult:
        """
        Weight-based single dose (mg), capped by the absolute and per-kg maxima.
        A dose of 0 means "insufficient data", not a computed zero.
        """
        max_dose = medication.max_dose_absolute

        if not weight_kg or weight_kg <= 0:
            return DoseResult(dose=0.0, max_dose=max_dose)

        if medication.min_dose_per_kg is not None:
            dose = medication.min_dose_per_kg * weight_kg
        elif max_dose is not None:
            # No per-kg dosing: fall back to the fixed dose
            dose = max_dose
        else:
            dose = 0.0

        # Absolute ceiling wins first
        if max_dose is not None and dose > max_dose:
            dose = max_dose

        if medication.max_dose_per_kg is not None:
            dose = min(dose, medication.max_dose_per_kg * weight_kg)

        dose = round(float(dose), 2)
        logger.debug(f"{medication.name}: {dose} mg for {weight_kg} kg (cap {max_dose})")
        return DoseResult(dose=dose, max_dose=max_dose)

    @staticmethod
    def calculate_dose_by_id(medication_id: Union[MedicationId, str],
                             weight_kg: Optional[float]) -> DoseResult:
        """Raises MedicationNotFoundError for an unknown identifier."""
        medication = MEDICATION_LIBRARY.get(medication_id)
        return DoseCalculator.calculate_dose(medication, weight_kg)

calculate_dose = DoseCalculator.calculate_dose
calculate_dose_by_id = DoseCalculator.calculate_dose_by_id
