# scores.py
"""
Bedside clinical scores: respiratory (TAL, Wood-Downes, Silverman-Anderson),
neurological (pediatric Glasgow, AVPU), sepsis (pediatric qSOFA) and pain
(FLACC, Wong-Baker, VAS).

Respiratory totals are what the ward records as
RespiratoryScore.at_admission / .current.
"""

from typing import Optional

from pediacalc.constants import ScoreSeverity
from pediacalc.models import ScoreResult


def _rr_points(respiratory_rate: float, normal_rr: float, steps) -> int:
    """Points for RR above `normal_rr`; `steps` are (excess, points), highest first."""
    for excess, points in steps:
        if respiratory_rate > normal_rr + excess:
            return points
    return 0


def _band(total: int, bands) -> ScoreResult:
    """`bands` are (upper bound inclusive or None, severity, interpretation, recommendations)."""
    for upper, severity, interpretation, recommendations in bands:
        if upper is None or total <= upper:
            return ScoreResult(total, interpretation, severity, recommendations)


# --- 1. RESPIRATORY ---

TAL_BANDS = (
    (3, ScoreSeverity.MILD, "Mild bronchial obstruction",
     "Outpatient bronchodilators, review in 24-48h"),
    (6, ScoreSeverity.MODERATE, "Moderate bronchial obstruction",
     "Consider admission, oxygen if needed, frequent bronchodilators"),
    (9, ScoreSeverity.SEVERE, "Severe bronchial obstruction",
     "Admit, oxygen therapy, frequent bronchodilators, consider corticosteroids"),
    (None, ScoreSeverity.CRITICAL, "Critical bronchial obstruction",
     "PICU admission, ventilatory support if needed"),
)

WOOD_DOWNES_BANDS = (
    (3, ScoreSeverity.MILD, "Mild bronchiolitis",
     "Outpatient care, hydration, nasal suction"),
    (6, ScoreSeverity.MODERATE, "Moderate bronchiolitis",
     "Admit, O2 if SpO2 <92%, IV hydration"),
    (9, ScoreSeverity.SEVERE, "Severe bronchiolitis",
     "PICU, respiratory support, continuous monitoring"),
    (None, ScoreSeverity.CRITICAL, "Very severe bronchiolitis",
     "PICU, consider mechanical ventilation"),
)

SILVERMAN_ANDERSON_BANDS = (
    (0, ScoreSeverity.NORMAL, "No respiratory distress", ""),
    (3, ScoreSeverity.MILD, "Mild respiratory distress", ""),
    (6, ScoreSeverity.MODERATE, "Moderate respiratory distress", ""),
    (None, ScoreSeverity.SEVERE, "Severe respiratory distress", ""),
)


def calculate_tal(wheezing: int, respiratory_rate: float, accessory_muscle_use: int,
                  oxygen_use: bool, age_months: int) -> ScoreResult:
    """
    TAL score (0-12) for children under 3 years.

    wheezing, accessory_muscle_use: 0-3. Wheezing counts its graded 0-3
    value (SOCHIPE table), not 3-or-0. Oxygen use scores 3 (it replaces
    the cyanosis item of the published scale).
    """
    if age_months >= 36:
        raise ValueError("TAL score only applies to children under 36 months")

    normal_rr = 50 if age_months < 6 else 40
    rr = _rr_points(respiratory_rate, normal_rr, ((10, 3), (5, 2), (0, 1)))

    total = wheezing + rr + accessory_muscle_use + (3 if oxygen_use else 0)
    return _band(total, TAL_BANDS)


def calculate_wood_downes(wheezing: int, retractions: int, cyanosis: int, air_entry: int,
                          respiratory_rate: float, age_months: int) -> ScoreResult:
    """Wood-Downes (bronchiolitis). Each clinical item 0-3."""
    normal_rr = 30 if age_months < 12 else 24
    rr = _rr_points(respiratory_rate, normal_rr, ((20, 3), (10, 2), (0, 1)))

    total = wheezing + retractions + cyanosis + air_entry + rr
    return _band(total, WOOD_DOWNES_BANDS)


def calculate_silverman_anderson(upper_chest_movement: int, lower_chest_retractions: int,
                                 xiphoid_retractions: int, nasal_flaring: int,
                                 expiratory_grunt: int) -> ScoreResult:
    """Neonatal respiratory distress. Each item 0-2, total 0-10."""
    total = (upper_chest_movement + lower_chest_retractions + xiphoid_retractions
             + nasal_flaring + expiratory_grunt)
    return _band(total, SILVERMAN_ANDERSON_BANDS)


# --- 2. NEUROLOGICAL ---

GLASGOW_BANDS = (
    (8, ScoreSeverity.SEVERE, "Severe head injury", ""),
    (12, ScoreSeverity.MODERATE, "Moderate head injury", ""),
    (None, ScoreSeverity.MILD, "Mild head injury", ""),
)

# level: (GCS equivalent, severity, interpretation)
AVPU_LEVELS = {
    "A": (15, ScoreSeverity.NORMAL, "Alert"),
    "V": (12, ScoreSeverity.MILD, "Responds to voice"),
    "P": (8, ScoreSeverity.MODERATE, "Responds to pain"),
    "U": (3, ScoreSeverity.CRITICAL, "Unresponsive"),
}


def calculate_glasgow_pediatric(eye_opening: int, verbal_response: int, motor_response: int,
                                age_months: Optional[int] = None) -> ScoreResult:
    """
    Pediatric Glasgow: eyes 1-4, verbal 1-5, motor 1-6. `age_months` only
    selects which verbal descriptors the bedside form shows.
    """
    total = eye_opening + verbal_response + motor_response
    return _band(total, GLASGOW_BANDS)


def calculate_avpu(level: str) -> ScoreResult:
    """AVPU mapped to its usual GCS equivalent. Raises ValueError for other levels."""
    try:
        score, severity, interpretation = AVPU_LEVELS[str(level).upper()]
    except KeyError:
        raise ValueError(f"AVPU level must be one of A, V, P, U (got {level!r})") from None
    return ScoreResult(score, interpretation, severity)


# --- 3. SEPSIS ---

QSOFA_BANDS = (
    (0, ScoreSeverity.MILD, "Low sepsis risk", "Clinical surveillance"),
    (1, ScoreSeverity.MODERATE, "Moderate sepsis risk",
     "Close monitoring, frequent reassessment"),
    (None, ScoreSeverity.CRITICAL, "Probable sepsis - HIGH RISK",
     "Activate sepsis pathway, PICU transfer, cultures + immediate empirical antibiotics"),
)


def calculate_qsofa_pediatric(respiratory_rate: float, systolic_bp: float,
                              altered_consciousness: bool, age_months: int) -> ScoreResult:
    """
    One point each: tachypnea, hypotension (both age-adjusted) and altered
    consciousness.
    """
    if age_months < 12:
        rr_threshold, sbp_threshold = 50, 70
    else:
        rr_threshold = 40 if age_months < 60 else 30
        sbp_threshold = 70 + (age_months // 12) * 2

    score = 0
    if respiratory_rate >= rr_threshold:
        score += 1
    if systolic_bp < sbp_threshold:
        score += 1
    if altered_consciousness:
        score += 1
    return _band(score, QSOFA_BANDS)


# --- 4. PAIN ---

def _pain_bands(mild_upper: int, moderate_upper: int):
    return (
        (0, ScoreSeverity.NORMAL, "No pain", ""),
        (mild_upper, ScoreSeverity.MILD, "Mild pain", ""),
        (moderate_upper, ScoreSeverity.MODERATE, "Moderate pain", ""),
        (None, ScoreSeverity.SEVERE, "Severe pain", ""),
    )

FLACC_BANDS = _pain_bands(3, 6)
WONG_BAKER_BANDS = _pain_bands(2, 6)
VAS_BANDS = _pain_bands(3, 7)

WONG_BAKER_FACES = (0, 2, 4, 6, 8, 10)


def calculate_flacc(face: int, legs: int, activity: int, cry: int, consolability: int) -> ScoreResult:
    """FLACC (0-3 years). Each item 0-2."""
    return _band(face + legs + activity + cry + consolability, FLACC_BANDS)


def calculate_wong_baker(face: int) -> ScoreResult:
    """Wong-Baker FACES (3-12 years): the face picked, 0-10 in steps of 2."""
    if face not in WONG_BAKER_FACES:
        raise ValueError(f"Wong-Baker face must be one of {WONG_BAKER_FACES} (got {face!r})")
    return _band(face, WONG_BAKER_BANDS)


def calculate_vas(score: float) -> ScoreResult:
    """Visual analogue scale (>12 years), 0-10."""
    if not 0 <= score <= 10:
        raise ValueError(f"VAS must be between 0 and 10 (got {score!r})")
    return _band(score, VAS_BANDS)
