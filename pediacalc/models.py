"""
PediaCalc: Data Dictionary
==========================
Value objects passed into and returned by the calculation engines:
reference entries (medications, templates), the prescription session
state, and every derived result (fluids, nutrition, tracking, vitals).

NO LOGIC beyond trivial derived properties lives here.
"""

from dataclasses import dataclass
from datetime import date
from typing import Mapping, Optional, Tuple, TYPE_CHECKING

from pediacalc.constants import (
    AgeCategory,
    AlertSeverity,
    DehydrationPlanType,
    InteractionSeverity,
    ScoreSeverity,
    Sex,
    Trend,
    VitalRange,
    VitalsStatus,
)

if TYPE_CHECKING:
    from pediacalc.reference_data import MedicationId


class PediaCalcError(Exception):
    """Base class for engine errors."""
    pass

class NotFoundError(PediaCalcError, LookupError):
    """Raised when a medication or template identifier is unknown."""
    kind = "identifier"

    def __init__(self, identifier):
        self.identifier = identifier
        super().__init__(f"Unknown {self.kind}: {identifier!r}")

class MedicationNotFoundError(NotFoundError):
    kind = "medication"

class TemplateNotFoundError(NotFoundError):
    kind = "diagnosis template"

class ReferenceDataError(PediaCalcError):
    """Raised at load time when the reference tables are inconsistent."""
    pass

# --- 1. REFERENCE DATA ---

@dataclass(frozen=True)
class Interaction:
    with_medication_name: str
    severity: InteractionSeverity
    description: str

@dataclass(frozen=True)
class Medication:
    id: "MedicationId"
    name: str
    route: str
    frequency: str
    min_dose_per_kg: Optional[float] = None   # mg/kg
    max_dose_per_kg: Optional[float] = None   # mg/kg
    max_dose_absolute: Optional[float] = None  # mg, wins over per-kg caps
    common_dosage: str = ""
    interactions: Tuple[Interaction, ...] = ()

@dataclass(frozen=True)
class DiagnosisTemplate:
    id: str
    name: str
    diagnosis_code: str
    medication_ids: Tuple["MedicationId", ...]  # Ordered
    duration_days: int
    description: Optional[str] = None

# --- 2. PRESCRIBING ---

@dataclass(frozen=True)
class DoseResult:
    dose: float                 # mg, 0 = insufficient data
    max_dose: Optional[float]   # mg

@dataclass(frozen=True)
class PrescriptionMedication:
    medication: Medication
    calculated_dose: float
    max_dose: Optional[float]
    route: str
    frequency: str
    duration: int   # days
    instructions: str = ""

    @property
    def medication_id(self) -> "MedicationId":
        return self.medication.id

@dataclass(frozen=True)
class MedicationInteraction:
    medication1: str
    medication2: str
    severity: InteractionSeverity
    description: str

# --- 3. FLUID THERAPY ---

@dataclass(frozen=True)
class HollidaySegarResult:
    maintenance_per_day: float   # ml/day
    maintenance_per_hour: int    # ml/h
    formula_breakdown: str

@dataclass(frozen=True)
class BodySurfaceAreaResult:
    bsa_m2: float                # 0 = height unavailable
    maintenance_per_day: int     # ml/day
    formula: str
    maintenance_range: Tuple[int, int] = (0, 0)

    @property
    def available(self) -> bool:
        return self.bsa_m2 > 0

@dataclass(frozen=True)
class DehydrationPlan:
    deficit_ml: float
    maintenance_ml: float
    total_ml: float
    plan: DehydrationPlanType
    bolus_ml: float = 0.0

@dataclass(frozen=True)
class FluidTherapyCalculation:
    weight_kg: float
    holliday_segar: HollidaySegarResult
    body_surface_area: BodySurfaceAreaResult
    dehydration: Optional[DehydrationPlan] = None

@dataclass(frozen=True)
class IVFluidComposition:
    total_volume_ml: float      # base + NaCl 10% + KCl 10%
    glucose_g: float
    calories_kcal: int
    sodium_meq: float
    potassium_meq: float
    rate_ml_h: float
    volume_per_day_ml: float

# --- 4. NUTRITION ---

@dataclass(frozen=True)
class ZScoreResult:
    z_score: float
    percentile: float
    classification: str

@dataclass(frozen=True)
class NutritionalAssessment:
    weight_kg: float
    height_cm: float
    age_months: int
    sex: Sex
    bmi: float
    body_surface_area_m2: float
    weight_for_age: ZScoreResult
    height_for_age: ZScoreResult
    bmi_for_age: ZScoreResult
    nutritional_diagnosis: str
    reference_version: str = ""

# --- 5. TRACKING ---

@dataclass(frozen=True)
class AntibioticTracking:
    name: str
    start_date: date
    planned_days: int
    current_day: int
    end_date: date

@dataclass(frozen=True)
class RespiratoryScore:
    at_admission: float
    current: float
    date_measured: Optional[date] = None

@dataclass(frozen=True)
class ScoreDelta:
    delta: float
    trend: Trend
    color: str   # green = improving, red = worsening, gray = unchanged

@dataclass(frozen=True)
class ScoreResult:
    score: int
    interpretation: str
    severity: ScoreSeverity
    recommendations: str = ""

# --- 6. VITALS ---

@dataclass(frozen=True)
class VitalsReading:
    heart_rate: Optional[float] = None          # bpm
    respiratory_rate: Optional[float] = None    # breaths/min
    oxygen_saturation: Optional[float] = None   # %
    temperature: Optional[float] = None         # Celsius
    blood_pressure: Optional[str] = None        # "110/70"

@dataclass(frozen=True)
class VitalsAlert:
    metric: str          # e.g. "heart_rate"
    kind: str            # e.g. "tachycardia"
    severity: AlertSeverity
    message: str
    value: object
    normal_range: str
    recommendation: Optional[str] = None

@dataclass(frozen=True)
class VitalsAnalysis:
    status: VitalsStatus
    age_category: AgeCategory
    normal_ranges: Mapping[str, VitalRange]   # read-only view
    alerts: Tuple[VitalsAlert, ...] = ()
