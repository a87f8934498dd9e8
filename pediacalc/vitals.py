# vitals.py
import logging
import re
from types import MappingProxyType
from typing import List, Optional

from pediacalc.constants import (
    DEFAULT_VITALS_THRESHOLDS,
    VITALS_CONSTANTS,
    AgeCategory,
    AlertSeverity,
    VitalRange,
    VitalsStatus,
    VitalsThresholds,
)
from pediacalc.models import VitalsAlert, VitalsAnalysis, VitalsReading

logger = logging.getLogger(__name__)

_BP_PATTERN = re.compile(r"(\d+)\s*/\s*(\d+)")

class VitalsClassifier:
    """
    Classifies a vital-sign set against age-bucketed normal ranges.
    Returns graded alerts (warning / critical); absent readings are skipped.
    """

    @staticmethod
    def age_category(age_months: float) -> AgeCategory:
        for upper_bound, category in VITALS_CONSTANTS.AGE_BUCKETS:
            if age_months < upper_bound:
                return category
        return VITALS_CONSTANTS.OLDEST

    @staticmethod
    def _grade(is_critical: bool) -> AlertSeverity:
        return AlertSeverity.CRITICAL if is_critical else AlertSeverity.WARNING

    @staticmethod
    def check_heart_rate(hr: float, normal: VitalRange, t: VitalsThresholds) -> Optional[VitalsAlert]:
        if hr < normal.min:
            return VitalsAlert(
                metric="heart_rate", kind="bradycardia",
                severity=VitalsClassifier._grade(hr < normal.min * t.hr_low_critical_factor),
                message=f"Bradycardia: {hr:g} bpm (normal: {normal})",
                value=hr, normal_range=str(normal),
            )
        if hr > normal.max:
            return VitalsAlert(
                metric="heart_rate", kind="tachycardia",
                severity=VitalsClassifier._grade(hr > normal.max * t.hr_high_critical_factor),
                message=f"Tachycardia: {hr:g} bpm (normal: {normal})",
                value=hr, normal_range=str(normal),
            )
        return None

    @staticmethod
    def check_respiratory_rate(rr: float, normal: VitalRange, t: VitalsThresholds) -> Optional[VitalsAlert]:
        if rr < normal.min:
            return VitalsAlert(
                metric="respiratory_rate", kind="bradypnea",
                severity=AlertSeverity.WARNING,
                message=f"Bradypnea: {rr:g} breaths/min (normal: {normal})",
                value=rr, normal_range=str(normal),
            )
        if rr > normal.max:
            return VitalsAlert(
                metric="respiratory_rate", kind="tachypnea",
                severity=VitalsClassifier._grade(rr > normal.max * t.rr_high_critical_factor),
                message=f"Tachypnea: {rr:g} breaths/min (normal: {normal})",
                value=rr, normal_range=str(normal),
            )
        return None

    @staticmethod
    def check_saturation(spo2: float, normal: VitalRange, t: VitalsThresholds) -> Optional[VitalsAlert]:
        if spo2 < t.spo2_critical_below:
            return VitalsAlert(
                metric="oxygen_saturation", kind="hypoxemia",
                severity=AlertSeverity.CRITICAL,
                message=f"Critical hypoxemia: {spo2:g}% (normal: >{normal.min:g}%)",
                value=spo2, normal_range=str(normal),
                recommendation="Assess need for supplemental oxygen URGENTLY",
            )
        if spo2 < t.spo2_warning_below:
            return VitalsAlert(
                metric="oxygen_saturation", kind="mild_hypoxemia",
                severity=AlertSeverity.WARNING,
                message=f"Low saturation: {spo2:g}% (normal: >{normal.min:g}%)",
                value=spo2, normal_range=str(normal),
                recommendation="Close monitoring, consider oxygen",
            )
        return None

    @staticmethod
    def check_temperature(temp: float, normal: VitalRange, t: VitalsThresholds) -> Optional[VitalsAlert]:
        if temp < t.hypothermia_below:
            return VitalsAlert(
                metric="temperature", kind="hypothermia",
                severity=AlertSeverity.WARNING,
                message=f"Hypothermia: {temp:g}°C (normal: {normal}°C)",
                value=temp, normal_range=str(normal),
                recommendation="Check environment, start active warming",
            )
        if temp >= t.fever_at:
            high = temp >= t.high_fever_at
            return VitalsAlert(
                metric="temperature", kind="fever",
                severity=VitalsClassifier._grade(high),
                message=f"{'High fever' if high else 'Fever'}: {temp:g}°C",
                value=temp, normal_range=str(normal),
                recommendation=("Antipyretic STAT, look for infectious focus" if high
                                else "Antipyretic as prescribed, monitor"),
            )
        return None

    @staticmethod
    def check_blood_pressure(bp: str, normal: VitalRange, t: VitalsThresholds) -> Optional[VitalsAlert]:
        match = _BP_PATTERN.search(bp)
        if not match:
            logger.debug(f"Unparseable blood pressure skipped: {bp!r}")
            return None

        systolic = int(match.group(1))
        range_text = f"{normal}/60-80"
        if systolic < normal.min:
            critical = systolic < normal.min * t.sbp_low_critical_factor
            return VitalsAlert(
                metric="blood_pressure", kind="hypotension",
                severity=VitalsClassifier._grade(critical),
                message=f"Hypotension: {bp} mmHg (normal systolic: {normal})",
                value=bp, normal_range=range_text,
                recommendation=("Assess for shock, consider fluid boluses" if critical
                                else "Monitor, assess perfusion"),
            )
        if systolic > normal.max * t.sbp_high_warning_factor:
            return VitalsAlert(
                metric="blood_pressure", kind="hypertension",
                severity=AlertSeverity.WARNING,
                message=f"Hypertension: {bp} mmHg",
                value=bp, normal_range=range_text,
                recommendation="Repeat measurement, consider antihypertensives if persistent",
            )
        return None

    @staticmethod
    def classify(age_months: float, reading: VitalsReading,
                 thresholds: VitalsThresholds = DEFAULT_VITALS_THRESHOLDS) -> VitalsAnalysis:
        category = VitalsClassifier.age_category(age_months)
        ranges = VITALS_CONSTANTS.RANGES[category]
        alerts: List[VitalsAlert] = []

        checks = (
            (reading.heart_rate, VitalsClassifier.check_heart_rate, "heart_rate"),
            (reading.respiratory_rate, VitalsClassifier.check_respiratory_rate, "respiratory_rate"),
            (reading.oxygen_saturation, VitalsClassifier.check_saturation, "oxygen_saturation"),
            (reading.temperature, VitalsClassifier.check_temperature, "temperature"),
            (reading.blood_pressure, VitalsClassifier.check_blood_pressure, "systolic_bp"),
        )
        for value, check, range_key in checks:
            if value is None:
                continue
            alert = check(value, ranges[range_key], thresholds)
            if alert is not None:
                alerts.append(alert)

        if any(a.severity == AlertSeverity.CRITICAL for a in alerts):
            status = VitalsStatus.CRITICAL
        elif alerts:
            status = VitalsStatus.WARNING
        else:
            status = VitalsStatus.NORMAL

        if status != VitalsStatus.NORMAL:
            logger.info(f"Vitals {status.value} ({category.value}, {age_months} months): "
                        f"{', '.join(a.kind for a in alerts)}")

        return VitalsAnalysis(
            status=status,
            age_category=category,
            normal_ranges=MappingProxyType(dict(ranges)),
            alerts=tuple(alerts),
        )

classify = VitalsClassifier.classify
