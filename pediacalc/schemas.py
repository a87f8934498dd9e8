# schemas.py
"""
Input guardrails for raw form data. A form layer validates with these
models before calling the engines; failures raise pydantic.ValidationError.
"""

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from pediacalc.constants import Sex
from pediacalc.models import VitalsReading
from pediacalc.prescription import (
    AddMedication,
    ApplyTemplate,
    Clear,
    Command,
    RemoveMedication,
    SetDiagnosis,
    SetWeight,
    UpdateMedication,
)
from pediacalc.reference_data import MedicationId, TemplateId

# --- 1. PATIENT ---

class PatientMeasurements(BaseModel):
    # Hard physiological limits, 0-18 years
    age_months: int = Field(..., ge=0, le=216, description="Age in months (0-18y)")
    weight_kg: float = Field(..., gt=0.3, le=150.0, description="Weight in kg")
    height_cm: Optional[float] = Field(None, gt=20.0, le=220.0, description="Height for BMI/BSA")
    sex: str = Field(..., pattern="^(M|F)$", description="'M' or 'F'")

    model_config = ConfigDict(json_schema_extra={
        "example": {"age_months": 36, "weight_kg": 14.0, "height_cm": 95.0, "sex": "M"}
    })

    def to_sex(self) -> Sex:
        return Sex(self.sex)

class FluidTherapyRequest(BaseModel):
    weight_kg: float = Field(..., gt=0.3, le=150.0)
    height_cm: Optional[float] = Field(None, gt=20.0, le=220.0)
    dehydration_percent: Optional[float] = Field(None, ge=0.0, le=20.0,
                                                 description="Estimated % body weight lost")

    model_config = ConfigDict(json_schema_extra={
        "example": {"weight_kg": 20.0, "height_cm": 115.0, "dehydration_percent": 12.0}
    })

class VitalsRequest(BaseModel):
    age_months: int = Field(..., ge=0, le=216)
    heart_rate: Optional[int] = Field(None, gt=0, le=300, description="bpm")
    respiratory_rate: Optional[int] = Field(None, gt=0, le=150, description="breaths/min")
    oxygen_saturation: Optional[float] = Field(None, ge=0.0, le=100.0, description="SpO2 %")
    temperature: Optional[float] = Field(None, gt=25.0, le=45.0, description="Celsius")
    blood_pressure: Optional[str] = Field(None, pattern=r"^\d{2,3}/\d{2,3}$", description="'110/70'")

    model_config = ConfigDict(json_schema_extra={
        "example": {"age_months": 8, "heart_rate": 175, "respiratory_rate": 58,
                    "oxygen_saturation": 93, "temperature": 38.6, "blood_pressure": "85/50"}
    })

    def to_reading(self) -> VitalsReading:
        return VitalsReading(
            heart_rate=self.heart_rate,
            respiratory_rate=self.respiratory_rate,
            oxygen_saturation=self.oxygen_saturation,
            temperature=self.temperature,
            blood_pressure=self.blood_pressure,
        )

# --- 2. PRESCRIPTION COMMANDS ---

class PrescriptionCommandRequest(BaseModel):
    """
    One edit from the prescribing screen. Identifiers are checked against
    the closed MedicationId / TemplateId sets here, before the engine.
    """
    action: Literal["apply_template", "add", "remove", "update",
                    "set_weight", "set_diagnosis", "clear"]
    template_id: Optional[TemplateId] = None
    medication_id: Optional[MedicationId] = None
    changes: Dict[str, Any] = Field(default_factory=dict)
    weight_kg: Optional[float] = Field(None, gt=0.3, le=150.0)
    diagnosis_code: Optional[str] = Field(None, max_length=16)
    diagnosis_description: str = ""

    model_config = ConfigDict(json_schema_extra={
        "example": {"action": "apply_template", "template_id": "oma"}
    })

    def _require(self, name: str):
        value = getattr(self, name)
        if value is None:
            raise ValueError(f"'{name}' is required for action '{self.action}'")
        return value

    def to_command(self) -> Command:
        if self.action == "apply_template":
            return ApplyTemplate(self._require("template_id"))
        if self.action == "add":
            return AddMedication(self._require("medication_id"))
        if self.action == "remove":
            return RemoveMedication(self._require("medication_id"))
        if self.action == "update":
            return UpdateMedication(self._require("medication_id"), dict(self.changes))
        if self.action == "set_weight":
            return SetWeight(self.weight_kg)
        if self.action == "set_diagnosis":
            return SetDiagnosis(self._require("diagnosis_code"), self.diagnosis_description)
        return Clear()

def to_commands(requests: List[Union[PrescriptionCommandRequest, Dict[str, Any]]]) -> List[Command]:
    return [
        (r if isinstance(r, PrescriptionCommandRequest)
         else PrescriptionCommandRequest.model_validate(r)).to_command()
        for r in requests
    ]
