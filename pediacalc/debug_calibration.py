# debug_calibration.py
import logging
from datetime import date, timedelta

from pediacalc import fluids, nutrition, scores, tracking, vitals
from pediacalc.models import RespiratoryScore
from pediacalc.prescription import (
    AddMedication,
    ApplyTemplate,
    PrescriptionEngine,
    PrescriptionState,
    SetWeight,
)
from pediacalc.reference_data import MedicationId, TemplateId
from pediacalc.schemas import VitalsRequest

def run_debug():
    print("\n========================================")
    print("   PEDIACALC BEDSIDE WALKTHROUGH")
    print("========================================")

    # 1. DEFINE THE CASE ("Wheezy toddler, dry, 3 days on antibiotics")
    today = date(2024, 3, 10)
    data = {
        "age_months": 24, "weight_kg": 12.0, "height_cm": 86.0, "sex": "M",
        "birth_date": date(2022, 3, 1), "admission_date": today - timedelta(days=3),
        "dehydration_percent": 7.0,
    }
    print(f"\n[CASE] {tracking.format_pediatric_age(data['birth_date'], today)}, "
          f"{data['weight_kg']} kg, {data['height_cm']} cm, "
          f"day {tracking.days_hospitalized(data['admission_date'], today=today)} of stay")

    # 2. PRESCRIPTION
    print("\n--- PHASE 1: PRESCRIPTION ---")
    state = PrescriptionEngine.apply_all(PrescriptionState(), [
        SetWeight(data["weight_kg"]),
        ApplyTemplate(TemplateId.ASTHMA_EXACERBATION),
        AddMedication(MedicationId.IBUPROFEN),
    ])
    for item in state.medications:
        print(f" > {item.medication.name:<28} {item.calculated_dose:>8.2f} mg "
              f"(max {item.max_dose}) {item.frequency}, {item.duration} days")
    for i in state.interactions:
        print(f" ! {i.severity.value.upper():<8} {i.medication1} + {i.medication2}: {i.description}")
    print(f" > Severe interaction:   {state.has_severe_interaction}")

    # 3. FLUIDS
    print("\n--- PHASE 2: FLUIDS ---")
    calc = fluids.calculate_fluid_therapy(data["weight_kg"], data["height_cm"],
                                          data["dehydration_percent"])
    print(fluids.format_fluid_order(calc))
    drip = fluids.iv_fluid_composition(500, 5, 10, 5, calc.holliday_segar.maintenance_per_hour)
    print(f" > D5% 500 + NaCl 10 + KCl 5: {drip.glucose_g} g glucose, {drip.calories_kcal} kcal, "
          f"Na {drip.sodium_meq} / K {drip.potassium_meq} mEq, {drip.volume_per_day_ml:g} ml/day")

    # 4. NUTRITION
    print("\n--- PHASE 3: NUTRITION ---")
    assessment = nutrition.assess(data["weight_kg"], data["height_cm"],
                                  data["age_months"], data["sex"])
    print(f" > BMI:                  {assessment.bmi} (z {assessment.bmi_for_age.z_score})")
    print(f" > Height-for-age z:     {assessment.height_for_age.z_score} "
          f"(P{assessment.height_for_age.percentile})")
    print(f" > Diagnosis:            {assessment.nutritional_diagnosis}")

    # 5. SCORES + TRACKING
    print("\n--- PHASE 4: RESPIRATORY SCORE ---")
    admission = scores.calculate_tal(wheezing=2, respiratory_rate=52, accessory_muscle_use=2,
                                     oxygen_use=True, age_months=data["age_months"])
    current = scores.calculate_tal(wheezing=1, respiratory_rate=42, accessory_muscle_use=1,
                                   oxygen_use=False, age_months=data["age_months"])
    delta = tracking.score_delta(RespiratoryScore(admission.score, current.score))
    print(f" > TAL admission:        {admission.score} ({admission.interpretation})")
    print(f" > TAL current:          {current.score} ({current.interpretation})")
    print(f" > Trend:                {delta.trend.value} {delta.delta:+g} [{delta.color}]")

    course = tracking.track_antibiotic("Amoxicillin", data["admission_date"], 7, today)
    print(f" > Antibiotic:           {tracking.format_antibiotic_display(course)} "
          f"(ending soon: {tracking.is_ending_soon(course.current_day, course.planned_days)})")

    # 6. VITALS
    print("\n--- PHASE 5: VITALS ---")
    request = VitalsRequest(age_months=data["age_months"], heart_rate=150, respiratory_rate=48,
                            oxygen_saturation=93, temperature=38.4, blood_pressure="88/55")
    analysis = vitals.classify(request.age_months, request.to_reading())
    print(f" > Status:               {analysis.status.value} ({analysis.age_category.value})")
    for alert in analysis.alerts:
        print(f"   [{alert.severity.value}] {alert.message}")

    qsofa = scores.calculate_qsofa_pediatric(request.respiratory_rate, 88, False, data["age_months"])
    pain = scores.calculate_flacc(face=1, legs=0, activity=1, cry=1, consolability=0)
    print(f" > AVPU:                 {scores.calculate_avpu('A').interpretation}")
    print(f" > qSOFA:                {qsofa.score} ({qsofa.interpretation})")
    print(f" > FLACC:                {pain.score} ({pain.interpretation})")

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run_debug()
