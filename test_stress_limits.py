import unittest
from dataclasses import replace

from pydantic import ValidationError

from pediacalc.constants import Sex
from pediacalc.fluids import FluidTherapyCalculator
from pediacalc.models import (
    DiagnosisTemplate,
    MedicationNotFoundError,
    NotFoundError,
    PediaCalcError,
    ReferenceDataError,
)
from pediacalc.prescription import (
    AddMedication,
    ApplyTemplate,
    PrescriptionEngine,
    PrescriptionState,
    UpdateMedication,
)
from pediacalc.reference_data import (
    MEDICATION_LIBRARY,
    TEMPLATE_LIBRARY,
    MedicationId,
    TemplateId,
    validate_reference_data,
)
from pediacalc.schemas import (
    FluidTherapyRequest,
    PatientMeasurements,
    PrescriptionCommandRequest,
    VitalsRequest,
    to_commands,
)

class TestReferenceData(unittest.TestCase):

    def setUp(self):
        self.meds = dict(MEDICATION_LIBRARY.SPECS)
        self.templates = dict(TEMPLATE_LIBRARY.SPECS)

    def test_01_shipped_tables_are_consistent(self):
        print("\nSTRESS TEST 1: Shipped reference data")
        validate_reference_data(self.meds, self.templates)
        for template in TEMPLATE_LIBRARY.all():
            self.assertTrue(template.medication_ids)
            self.assertGreater(template.duration_days, 0)

    def test_02_dangling_template_reference(self):
        """A template must never point at a medication the formulary lacks."""
        print("\nSTRESS TEST 2: Template referencing a missing medication")
        del self.meds[MedicationId.PARACETAMOL]
        with self.assertRaises(ReferenceDataError) as ctx:
            validate_reference_data(self.meds, self.templates)
        print(f"  > {ctx.exception}")
        self.assertIn("faringo", str(ctx.exception))
        self.assertIn("sinusitis", str(ctx.exception))

    def test_03_inverted_dose_range(self):
        amox = self.meds[MedicationId.AMOXICILLIN]
        self.meds[MedicationId.AMOXICILLIN] = replace(amox, min_dose_per_kg=90)
        with self.assertRaises(ReferenceDataError):
            validate_reference_data(self.meds, self.templates)

    def test_04_bad_template_duration(self):
        self.templates[TemplateId.ACUTE_OTITIS_MEDIA] = DiagnosisTemplate(
            id="oma", name="Acute Otitis Media", diagnosis_code="H66.9",
            medication_ids=(MedicationId.AMOXICILLIN,), duration_days=0,
        )
        with self.assertRaises(ReferenceDataError):
            validate_reference_data(self.meds, self.templates)

    def test_05_error_hierarchy(self):
        with self.assertRaises(NotFoundError):
            MEDICATION_LIBRARY.get("aspirin")
        with self.assertRaises(LookupError):
            TEMPLATE_LIBRARY.get("bronquiolitis")
        self.assertTrue(issubclass(ReferenceDataError, PediaCalcError))
        self.assertEqual(MEDICATION_LIBRARY.get("amox").id, MedicationId.AMOXICILLIN)

class TestInputGuardrails(unittest.TestCase):

    def test_01_patient_limits(self):
        print("\nSTRESS TEST 1: Physiological limits")
        ok = PatientMeasurements(age_months=36, weight_kg=14.0, height_cm=95.0, sex="F")
        self.assertEqual(ok.to_sex(), Sex.FEMALE)

        for bad in ({"sex": "X"}, {"weight_kg": 0}, {"age_months": 300}, {"height_cm": 5}):
            data = {"age_months": 36, "weight_kg": 14.0, "height_cm": 95.0, "sex": "M"}
            data.update(bad)
            with self.assertRaises(ValidationError, msg=f"accepted {bad}"):
                PatientMeasurements(**data)

    def test_02_fluid_request(self):
        req = FluidTherapyRequest(weight_kg=20.0, dehydration_percent=12.0)
        calc = FluidTherapyCalculator.calculate_fluid_therapy(req.weight_kg, req.height_cm,
                                                              req.dehydration_percent)
        self.assertEqual(calc.dehydration.bolus_ml, 400.0)
        self.assertFalse(calc.body_surface_area.available)

        with self.assertRaises(ValidationError):
            FluidTherapyRequest(weight_kg=20.0, dehydration_percent=35.0)

    def test_03_vitals_request(self):
        req = VitalsRequest(age_months=8, heart_rate=175, blood_pressure="85/50")
        reading = req.to_reading()
        self.assertEqual(reading.heart_rate, 175)
        self.assertIsNone(reading.temperature)

        with self.assertRaises(ValidationError):
            VitalsRequest(age_months=8, blood_pressure="85-50")

    def test_04_prescription_commands(self):
        print("\nSTRESS TEST 4: Commands from form input")
        commands = to_commands([
            {"action": "set_weight", "weight_kg": 10.0},
            {"action": "apply_template", "template_id": "oma"},
            {"action": "add", "medication_id": "metotrexato"},
            {"action": "update", "medication_id": "amox", "changes": {"duration": 14}},
            {"action": "remove", "medication_id": "ibuprofeno"},
        ])
        state = PrescriptionEngine.apply_all(PrescriptionState(), commands)
        self.assertEqual(state.medication_ids, [MedicationId.AMOXICILLIN, MedicationId.METHOTREXATE])
        self.assertEqual(state.find("amox").duration, 14)
        self.assertTrue(state.has_severe_interaction)

    def test_05_rejected_commands(self):
        # Unknown identifier never reaches the engine
        with self.assertRaises(ValidationError):
            PrescriptionCommandRequest(action="add", medication_id="aspirin")
        with self.assertRaises(ValidationError):
            PrescriptionCommandRequest(action="discharge")
        with self.assertRaises(ValueError):
            PrescriptionCommandRequest(action="add").to_command()

class TestExtremeInputs(unittest.TestCase):

    def test_01_negative_and_huge_weights(self):
        print("\nSTRESS TEST 1: Out-of-range weights do not raise")
        self.assertEqual(FluidTherapyCalculator.holliday_segar(-3.0).maintenance_per_day, 0.0)
        self.assertIsNone(FluidTherapyCalculator.dehydration_plan(-3.0, 10.0))
        self.assertEqual(FluidTherapyCalculator.calculate_bsa(-3.0, 100.0), 0.0)

        state = PrescriptionEngine.apply_all(PrescriptionState(weight_kg=-3.0), [
            ApplyTemplate(TemplateId.ACUTE_OTITIS_MEDIA),
        ])
        self.assertTrue(all(m.calculated_dose == 0.0 for m in state.medications))

        heavy = PrescriptionEngine.apply(PrescriptionState(weight_kg=150.0),
                                         ApplyTemplate(TemplateId.COMMUNITY_PNEUMONIA))
        for item in heavy.medications:
            self.assertLessEqual(item.calculated_dose, item.max_dose)

    def test_02_failed_command_leaves_state(self):
        state = PrescriptionEngine.apply(PrescriptionState(weight_kg=10.0), AddMedication("amox"))
        with self.assertRaises(MedicationNotFoundError):
            PrescriptionEngine.apply(state, AddMedication("aspirin"))
        with self.assertRaises(ValueError):
            PrescriptionEngine.apply(state, UpdateMedication("amox", {"route": "IV", "dose": 5}))
        self.assertEqual(state.medication_ids, [MedicationId.AMOXICILLIN])
        self.assertEqual(state.find("amox").route, "Oral")

if __name__ == '__main__':
    unittest.main()
