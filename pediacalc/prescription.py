"""
PediaCalc: Prescription Session
===============================
An editing session is a frozen PrescriptionState plus a set of commands.
PrescriptionEngine.apply(state, command) returns the next state; the
caller owns the state (one per open prescribing screen) and threads it
through successive edits.

Doses are computed when a medication enters the session (AddMedication /
ApplyTemplate). SetWeight does NOT recompute doses already in the
session; re-add or re-apply the template to refresh them.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pediacalc.constants import TRACKING_CONSTANTS
from pediacalc.dosing import DoseCalculator
from pediacalc.interactions import InteractionChecker
from pediacalc.models import (
    Medication,
    MedicationInteraction,
    PrescriptionMedication,
)
from pediacalc.reference_data import (
    MEDICATION_LIBRARY,
    TEMPLATE_LIBRARY,
    MedicationId,
    TemplateId,
)

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset({
    "calculated_dose", "max_dose", "route", "frequency", "duration", "instructions",
})

# --- 1. STATE ---

@dataclass(frozen=True)
class PrescriptionState:
    weight_kg: Optional[float] = None
    diagnosis_code: str = ""
    diagnosis_description: str = ""
    medications: Tuple[PrescriptionMedication, ...] = ()

    @property
    def interactions(self) -> List[MedicationInteraction]:
        # Derived on every read, never cached
        return InteractionChecker.check_interactions(
            [item.medication for item in self.medications]
        )

    @property
    def has_severe_interaction(self) -> bool:
        return InteractionChecker.has_severe_interaction(self.interactions)

    def find(self, medication_id: Union[MedicationId, str]) -> Optional[PrescriptionMedication]:
        for item in self.medications:
            if item.medication_id == medication_id:
                return item
        return None

    @property
    def medication_ids(self) -> List[MedicationId]:
        return [item.medication_id for item in self.medications]

# --- 2. COMMANDS ---

@dataclass(frozen=True)
class ApplyTemplate:
    template_id: Union[TemplateId, str]

@dataclass(frozen=True)
class AddMedication:
    medication_id: Union[MedicationId, str]

@dataclass(frozen=True)
class RemoveMedication:
    medication_id: Union[MedicationId, str]

@dataclass(frozen=True)
class UpdateMedication:
    medication_id: Union[MedicationId, str]
    changes: Tuple[Tuple[str, Any], ...] = ()

    def __post_init__(self):
        # Accepts a mapping; stored as sorted items so the command stays hashable
        items = self.changes.items() if isinstance(self.changes, Mapping) else self.changes
        object.__setattr__(self, "changes", tuple(sorted(items)))

@dataclass(frozen=True)
class SetWeight:
    weight_kg: Optional[float]

@dataclass(frozen=True)
class SetDiagnosis:
    code: str
    description: str = ""

@dataclass(frozen=True)
class Clear:
    pass

Command = Union[ApplyTemplate, AddMedication, RemoveMedication, UpdateMedication,
                SetWeight, SetDiagnosis, Clear]

# --- 3. TRANSITIONS ---

class PrescriptionEngine:

    @staticmethod
    def _build_item(medication: Medication, weight_kg: Optional[float],
                    duration: int, instructions: str) -> PrescriptionMedication:
        dose = DoseCalculator.calculate_dose(medication, weight_kg)
        return PrescriptionMedication(
            medication=medication,
            calculated_dose=dose.dose,
            max_dose=dose.max_dose,
            route=medication.route,
            frequency=medication.frequency,
            duration=duration,
            instructions=instructions,
        )

    @staticmethod
    def apply_template(state: PrescriptionState, command: ApplyTemplate) -> PrescriptionState:
        template = TEMPLATE_LIBRARY.get(command.template_id)
        description = template.description or ""

        items = tuple(
            PrescriptionEngine._build_item(
                MEDICATION_LIBRARY.get(med_id), state.weight_kg,
                template.duration_days, description,
            )
            for med_id in template.medication_ids
        )
        logger.info(f"Applied template {template.id} ({template.diagnosis_code}): "
                    f"{len(items)} medication(s), weight={state.weight_kg}")

        # Replaces the whole medication set
        return replace(state,
            diagnosis_code=template.diagnosis_code,
            diagnosis_description=description,
            medications=items,
        )

    @staticmethod
    def add_medication(state: PrescriptionState, command: AddMedication) -> PrescriptionState:
        medication = MEDICATION_LIBRARY.get(command.medication_id)
        if state.find(medication.id) is not None:
            return state

        item = PrescriptionEngine._build_item(
            medication, state.weight_kg, TRACKING_CONSTANTS.DEFAULT_COURSE_DAYS, ""
        )
        return replace(state, medications=state.medications + (item,))

    @staticmethod
    def remove_medication(state: PrescriptionState, command: RemoveMedication) -> PrescriptionState:
        remaining = tuple(m for m in state.medications if m.medication_id != command.medication_id)
        if len(remaining) == len(state.medications):
            return state
        return replace(state, medications=remaining)

    @staticmethod
    def update_medication(state: PrescriptionState, command: UpdateMedication) -> PrescriptionState:
        changes = dict(command.changes)
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields not editable: {sorted(unknown)}")

        if state.find(command.medication_id) is None:
            return state

        medications = tuple(
            replace(m, **changes) if m.medication_id == command.medication_id else m
            for m in state.medications
        )
        return replace(state, medications=medications)

    @staticmethod
    def set_weight(state: PrescriptionState, command: SetWeight) -> PrescriptionState:
        return replace(state, weight_kg=command.weight_kg)

    @staticmethod
    def set_diagnosis(state: PrescriptionState, command: SetDiagnosis) -> PrescriptionState:
        return replace(state, diagnosis_code=command.code,
                       diagnosis_description=command.description)

    @staticmethod
    def clear(state: PrescriptionState, command: Clear) -> PrescriptionState:
        # Weight belongs to the patient, not the prescription: keep it
        return PrescriptionState(weight_kg=state.weight_kg)

    @staticmethod
    def apply(state: PrescriptionState, command: Command) -> PrescriptionState:
        handler = _HANDLERS.get(type(command))
        if handler is None:
            raise TypeError(f"Unsupported prescription command: {type(command).__name__}")
        return handler(state, command)

    @staticmethod
    def apply_all(state: PrescriptionState, commands) -> PrescriptionState:
        for command in commands:
            state = PrescriptionEngine.apply(state, command)
        return state

_HANDLERS: Dict[type, Any] = {
    ApplyTemplate: PrescriptionEngine.apply_template,
    AddMedication: PrescriptionEngine.add_medication,
    RemoveMedication: PrescriptionEngine.remove_medication,
    UpdateMedication: PrescriptionEngine.update_medication,
    SetWeight: PrescriptionEngine.set_weight,
    SetDiagnosis: PrescriptionEngine.set_diagnosis,
    Clear: PrescriptionEngine.clear,
}
