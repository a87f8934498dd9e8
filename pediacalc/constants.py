from enum import Enum
from dataclasses import dataclass
VERSION = "1.0.0"

class InteractionSeverity(Enum):
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"

    @property
    def rank(self) -> int:
        """Triage order: severe > moderate > mild."""
        return _SEVERITY_RANK[self]

_SEVERITY_RANK = {
    InteractionSeverity.MILD: 1,
    InteractionSeverity.MODERATE: 2,
    InteractionSeverity.SEVERE: 3,
}

class Sex(Enum):
    MALE = "M"
    FEMALE = "F"

class DehydrationPlanType(Enum):
    A = "A"   # Mild (<5%): oral rehydration
    B = "B"   # Moderate (5-9%)
    C = "C"   # Severe (>=10%): IV bolus first

class Trend(Enum):
    UP = "up"       # Score rising = worsening
    DOWN = "down"   # Score falling = improvement
    FLAT = "flat"

class ProgressBand(Enum):
    EARLY = "early"
    MID = "mid"
    LATE = "late"

class AgeCategory(Enum):
    NEONATE = "neonate"
    INFANT = "infant"
    TODDLER = "toddler"
    PRESCHOOL = "preschool"
    SCHOOL_AGE = "school_age"
    ADOLESCENT = "adolescent"

class VitalsStatus(Enum):
    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"

class AlertSeverity(Enum):
    WARNING = "warning"
    CRITICAL = "critical"

class ScoreSeverity(Enum):
    NORMAL = "normal"
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"
    CRITICAL = "critical"

class FLUID_CONSTANTS:
    # Holliday-Segar tiers (ml/kg/day)
    FIRST_TIER_LIMIT_KG = 10.0
    SECOND_TIER_LIMIT_KG = 20.0
    FIRST_TIER_ML_KG = 100.0
    SECOND_TIER_ML_KG = 50.0
    THIRD_TIER_ML_KG = 20.0

    # BSA maintenance (ml/m2/day). 1650 is the midpoint of 1500-1800.
    BSA_ML_M2_MIN = 1500.0
    BSA_ML_M2 = 1650.0
    BSA_ML_M2_MAX = 1800.0
    MOSTELLER_DIVISOR = 3600.0

    # Dehydration plans (% body weight)
    PLAN_B_THRESHOLD_PCT = 5.0
    PLAN_C_THRESHOLD_PCT = 10.0
    PLAN_C_BOLUS_ML_KG = 20.0

    PARKLAND_ML_KG_PCT = 4.0
    HOURS_PER_DAY = 24.0

    # IV solution additives
    GLUCOSE_KCAL_PER_G = 4.0
    NACL_10PCT_MEQ_ML = 1.7   # Na+ mEq per ml of NaCl 10%
    KCL_10PCT_MEQ_ML = 1.3    # K+ mEq per ml of KCl 10%

class NUTRITION_CONSTANTS:
    """
    Approximate WHO Child Growth Standards (2006) reference values.
    Means are the published medians; SDs are half the -1SD..+1SD span.

    NOT a substitute for the full WHO LMS tables. Do not change these
    values without clinical sign-off; replacing them with the full
    tables is a separate piece of work.
    """
    REFERENCE_VERSION = "who-2006-approx-v1"
    ACCURACY_DISCLAIMER = (
        "Z-scores use a 4-anchor (24/36/48/60 months) approximation of the "
        "WHO growth standards. Outside 2-5 years the nearest anchor is used."
    )

    # Anchor selection: age < upper bound -> anchor
    AGE_ANCHORS = ((30, 24), (42, 36), (54, 48))
    LAST_ANCHOR = 60

    # (sex, anchor months): (mean, sd)
    WEIGHT_FOR_AGE = {
        (Sex.MALE, 24): (12.2, 1.4),
        (Sex.MALE, 36): (14.0, 1.6),
        (Sex.MALE, 48): (15.7, 1.9),
        (Sex.MALE, 60): (17.4, 2.3),
        (Sex.FEMALE, 24): (11.2, 1.5),
        (Sex.FEMALE, 36): (13.1, 1.8),
        (Sex.FEMALE, 48): (15.0, 2.0),
        (Sex.FEMALE, 60): (16.8, 2.4),
    }
    HEIGHT_FOR_AGE = {
        (Sex.MALE, 24): (87.1, 3.1),
        (Sex.MALE, 36): (95.5, 3.4),
        (Sex.MALE, 48): (103.3, 4.2),
        (Sex.MALE, 60): (110.7, 4.0),
        (Sex.FEMALE, 24): (86.2, 3.2),
        (Sex.FEMALE, 36): (94.8, 3.6),
        (Sex.FEMALE, 48): (102.7, 4.3),
        (Sex.FEMALE, 60): (109.7, 4.1),
    }
    BMI_FOR_AGE = {
        (Sex.MALE, 24): (16.5, 1.3),
        (Sex.MALE, 36): (16.0, 1.2),
        (Sex.MALE, 48): (15.8, 1.3),
        (Sex.MALE, 60): (15.6, 1.4),
        (Sex.FEMALE, 24): (16.3, 1.4),
        (Sex.FEMALE, 36): (15.8, 1.3),
        (Sex.FEMALE, 48): (15.5, 1.3),
        (Sex.FEMALE, 60): (15.4, 1.4),
    }

    # Zelen & Severo (1964) polynomial for the normal CDF
    ZS_P = 0.2316419
    ZS_D = 0.3989423
    ZS_B = (0.3193815, -0.3565638, 1.781478, -1.821256, 1.330274)

    INSUFFICIENT_DATA = "insufficient data"

class TRACKING_CONSTANTS:
    DEFAULT_COURSE_DAYS = 7   # Duration for ad-hoc medications
    ENDING_SOON_DAYS = 2
    EARLY_PROGRESS_PCT = 50.0
    MID_PROGRESS_PCT = 80.0

    # Hospital stay (days): upper bound -> display color
    STAY_COLORS = ((7, "green"), (14, "yellow"), (21, "orange"))
    LONG_STAY_COLOR = "red"

    NEONATAL_DAYS = 28
    INFANT_MONTHS = 24

@dataclass(frozen=True)
class VitalRange:
    min: float
    max: float

    def __str__(self) -> str:
        return f"{self.min:g}-{self.max:g}"

class VITALS_CONSTANTS:
    # Age (months): upper bound -> category
    AGE_BUCKETS = (
        (1, AgeCategory.NEONATE),
        (12, AgeCategory.INFANT),
        (36, AgeCategory.TODDLER),
        (72, AgeCategory.PRESCHOOL),
        (144, AgeCategory.SCHOOL_AGE),
    )
    OLDEST = AgeCategory.ADOLESCENT

    RANGES = {
        AgeCategory.NEONATE: {
            "heart_rate": VitalRange(100, 160),
            "respiratory_rate": VitalRange(30, 60),
            "systolic_bp": VitalRange(60, 90),
            "temperature": VitalRange(36.5, 37.5),
            "oxygen_saturation": VitalRange(95, 100),
        },
        AgeCategory.INFANT: {
            "heart_rate": VitalRange(100, 160),
            "respiratory_rate": VitalRange(25, 50),
            "systolic_bp": VitalRange(70, 100),
            "temperature": VitalRange(36.5, 37.5),
            "oxygen_saturation": VitalRange(95, 100),
        },
        AgeCategory.TODDLER: {
            "heart_rate": VitalRange(90, 150),
            "respiratory_rate": VitalRange(20, 40),
            "systolic_bp": VitalRange(80, 110),
            "temperature": VitalRange(36.5, 37.5),
            "oxygen_saturation": VitalRange(95, 100),
        },
        AgeCategory.PRESCHOOL: {
            "heart_rate": VitalRange(80, 140),
            "respiratory_rate": VitalRange(20, 30),
            "systolic_bp": VitalRange(90, 110),
            "temperature": VitalRange(36.5, 37.5),
            "oxygen_saturation": VitalRange(95, 100),
        },
        AgeCategory.SCHOOL_AGE: {
            "heart_rate": VitalRange(70, 120),
            "respiratory_rate": VitalRange(18, 25),
            "systolic_bp": VitalRange(95, 120),
            "temperature": VitalRange(36.5, 37.5),
            "oxygen_saturation": VitalRange(95, 100),
        },
        AgeCategory.ADOLESCENT: {
            "heart_rate": VitalRange(60, 100),
            "respiratory_rate": VitalRange(12, 20),
            "systolic_bp": VitalRange(110, 135),
            "temperature": VitalRange(36.5, 37.5),
            "oxygen_saturation": VitalRange(95, 100),
        },
    }

@dataclass(frozen=True)
class VitalsThresholds:
    """
    Multiples of the age-range bounds beyond which a reading is critical,
    plus the fixed saturation/temperature cut-offs.
    """
    hr_low_critical_factor: float = 0.8
    hr_high_critical_factor: float = 1.2
    rr_high_critical_factor: float = 1.3
    sbp_low_critical_factor: float = 0.8
    sbp_high_warning_factor: float = 1.2
    spo2_critical_below: float = 92.0
    spo2_warning_below: float = 95.0
    hypothermia_below: float = 36.0
    fever_at: float = 38.0
    high_fever_at: float = 39.5

DEFAULT_VITALS_THRESHOLDS = VitalsThresholds()
