"""
Reference Data Store: the pediatric formulary and diagnosis templates.

Static and read-only. Everything is keyed by the closed identifier enums
below; lookups by an unknown identifier raise NotFoundError subclasses
instead of falling through to None. The tables are cross-checked when
this module is imported.
"""

import logging
from enum import Enum
from typing import Dict, Iterable, Union

from pediacalc.constants import InteractionSeverity as Sev
from pediacalc.models import (
    DiagnosisTemplate,
    Interaction,
    Medication,
    MedicationNotFoundError,
    ReferenceDataError,
    TemplateNotFoundError,
)

logger = logging.getLogger(__name__)


class MedicationId(str, Enum):
    AMOXICILLIN = "amox"
    AMOXICILLIN_CLAVULANATE = "amox_clav"
    AZITHROMYCIN = "azitromicina"
    IBUPROFEN = "ibuprofeno"
    PARACETAMOL = "paracetamol"
    SALBUTAMOL = "salbutamol"
    PREDNISONE = "prednisona"
    METHOTREXATE = "metotrexato"
    CLARITHROMYCIN = "claritromicina"


class TemplateId(str, Enum):
    ACUTE_OTITIS_MEDIA = "oma"
    PHARYNGOTONSILLITIS = "faringo"
    ASTHMA_EXACERBATION = "crisis_asmatica"
    COMMUNITY_PNEUMONIA = "neumonia"
    ACUTE_SINUSITIS = "sinusitis"


def _med(id, name, route, frequency, interactions=(), **doses) -> Medication:
    return Medication(
        id=id, name=name, route=route, frequency=frequency,
        interactions=tuple(Interaction(w, s, d) for w, s, d in interactions),
        **doses
    )


class MEDICATION_LIBRARY:
    """
    The formulary. Doses in mg/kg (per-kg bounds) and mg (absolute cap).
    Interactions reference other medications by display name; class-level
    entries ("Antacids", "NSAIDs", "Macrolides") are informational and never
    match a formulary name.
    """
    SPECS: Dict[MedicationId, Medication] = {
        MedicationId.AMOXICILLIN: _med(
            MedicationId.AMOXICILLIN, "Amoxicillin", "Oral", "Every 8 hours",
            min_dose_per_kg=40, max_dose_per_kg=80, max_dose_absolute=3000,
            common_dosage="250mg/5ml",
            interactions=[
                ("Macrolides", Sev.MODERATE, "May reduce the efficacy of amoxicillin."),
                ("Methotrexate", Sev.SEVERE, "Increases methotrexate toxicity."),
            ],
        ),
        MedicationId.AMOXICILLIN_CLAVULANATE: _med(
            MedicationId.AMOXICILLIN_CLAVULANATE, "Amoxicillin/Clavulanic acid",
            "Oral", "Every 12 hours",
            min_dose_per_kg=40, max_dose_per_kg=80, max_dose_absolute=2000,
            common_dosage="400mg/57mg/5ml",
            interactions=[
                ("Anticoagulants", Sev.MODERATE, "May increase bleeding risk."),
                ("Methotrexate", Sev.SEVERE, "Increases methotrexate toxicity."),
            ],
        ),
        MedicationId.AZITHROMYCIN: _med(
            MedicationId.AZITHROMYCIN, "Azithromycin", "Oral", "Once daily",
            min_dose_per_kg=10, max_dose_absolute=500,
            common_dosage="200mg/5ml",
            interactions=[
                ("Antacids", Sev.MILD, "Reduces absorption. Give 1 hour before or 2 hours after."),
                ("Anticoagulants", Sev.MODERATE, "May increase the anticoagulant effect."),
            ],
        ),
        MedicationId.IBUPROFEN: _med(
            MedicationId.IBUPROFEN, "Ibuprofen", "Oral", "Every 6-8 hours",
            min_dose_per_kg=5, max_dose_per_kg=10, max_dose_absolute=40,
            common_dosage="100mg/5ml",
            interactions=[
                ("Corticosteroids", Sev.MODERATE, "Increases the risk of gastrointestinal bleeding."),
                ("Antihypertensives", Sev.MODERATE, "May reduce the antihypertensive effect."),
            ],
        ),
        MedicationId.PARACETAMOL: _med(
            MedicationId.PARACETAMOL, "Paracetamol", "Oral", "Every 6 hours",
            min_dose_per_kg=10, max_dose_per_kg=15, max_dose_absolute=60,
            common_dosage="120mg/5ml",
            interactions=[
                ("Alcohol", Sev.SEVERE, "Increases the risk of liver damage."),
                ("Warfarin", Sev.MODERATE, "May increase the anticoagulant effect."),
            ],
        ),
        MedicationId.SALBUTAMOL: _med(
            MedicationId.SALBUTAMOL, "Salbutamol", "Inhaled", "Every 4-6 hours",
            min_dose_per_kg=0.1, max_dose_per_kg=0.15, max_dose_absolute=8,
            common_dosage="100mcg/dose",
            interactions=[
                ("Beta blockers", Sev.MODERATE, "May reduce the bronchodilator effect."),
            ],
        ),
        MedicationId.PREDNISONE: _med(
            MedicationId.PREDNISONE, "Prednisone", "Oral", "Once daily in the morning",
            min_dose_per_kg=1, max_dose_per_kg=2, max_dose_absolute=60,
            common_dosage="5mg tablet",
            interactions=[
                ("NSAIDs", Sev.MODERATE, "Increases the risk of gastrointestinal ulcer."),
                ("Live virus vaccines", Sev.SEVERE, "May cause vaccine-strain infection."),
            ],
        ),
        MedicationId.METHOTREXATE: _med(
            MedicationId.METHOTREXATE, "Methotrexate", "Oral", "Once weekly",
            max_dose_absolute=25,
            common_dosage="2.5mg tablet",
            interactions=[
                ("Amoxicillin", Sev.SEVERE, "Penicillins reduce renal clearance of methotrexate."),
                ("Ibuprofen", Sev.SEVERE, "NSAIDs reduce renal clearance of methotrexate."),
            ],
        ),
        MedicationId.CLARITHROMYCIN: _med(
            MedicationId.CLARITHROMYCIN, "Clarithromycin", "Oral", "Every 12 hours",
            min_dose_per_kg=7.5, max_dose_per_kg=7.5, max_dose_absolute=500,
            common_dosage="250mg/5ml",
            interactions=[
                ("Salbutamol", Sev.MILD, "Additive QT prolongation; monitor if high-dose nebulised."),
            ],
        ),
    }

    @staticmethod
    def get(medication_id: Union[MedicationId, str]) -> Medication:
        try:
            return MEDICATION_LIBRARY.SPECS[MedicationId(medication_id)]
        except (ValueError, KeyError):
            logger.warning(f"Medication lookup failed: {medication_id!r}")
            raise MedicationNotFoundError(medication_id) from None

    @staticmethod
    def all() -> Iterable[Medication]:
        return MEDICATION_LIBRARY.SPECS.values()


class TEMPLATE_LIBRARY:
    SPECS: Dict[TemplateId, DiagnosisTemplate] = {
        TemplateId.ACUTE_OTITIS_MEDIA: DiagnosisTemplate(
            id=TemplateId.ACUTE_OTITIS_MEDIA.value,
            name="Acute Otitis Media",
            diagnosis_code="H66.9",
            description="Standard treatment for acute otitis media in children",
            medication_ids=(MedicationId.AMOXICILLIN, MedicationId.IBUPROFEN),
            duration_days=10,
        ),
        TemplateId.PHARYNGOTONSILLITIS: DiagnosisTemplate(
            id=TemplateId.PHARYNGOTONSILLITIS.value,
            name="Pharyngotonsillitis",
            diagnosis_code="J02.0",
            description="Treatment for streptococcal pharyngotonsillitis",
            medication_ids=(MedicationId.AMOXICILLIN, MedicationId.PARACETAMOL),
            duration_days=10,
        ),
        TemplateId.ASTHMA_EXACERBATION: DiagnosisTemplate(
            id=TemplateId.ASTHMA_EXACERBATION.value,
            name="Asthma Exacerbation",
            diagnosis_code="J45.901",
            description="Initial management of mild to moderate asthma exacerbation",
            medication_ids=(MedicationId.SALBUTAMOL, MedicationId.PREDNISONE),
            duration_days=5,
        ),
        TemplateId.COMMUNITY_PNEUMONIA: DiagnosisTemplate(
            id=TemplateId.COMMUNITY_PNEUMONIA.value,
            name="Community-Acquired Pneumonia",
            diagnosis_code="J18.9",
            description="Outpatient treatment for pneumonia in children",
            medication_ids=(MedicationId.AMOXICILLIN_CLAVULANATE, MedicationId.IBUPROFEN),
            duration_days=7,
        ),
        TemplateId.ACUTE_SINUSITIS: DiagnosisTemplate(
            id=TemplateId.ACUTE_SINUSITIS.value,
            name="Acute Sinusitis",
            diagnosis_code="J01.90",
            description="Treatment for acute bacterial sinusitis",
            medication_ids=(MedicationId.AMOXICILLIN_CLAVULANATE, MedicationId.PARACETAMOL),
            duration_days=10,
        ),
    }

    @staticmethod
    def get(template_id: Union[TemplateId, str]) -> DiagnosisTemplate:
        try:
            return TEMPLATE_LIBRARY.SPECS[TemplateId(template_id)]
        except (ValueError, KeyError):
            logger.warning(f"Diagnosis template lookup failed: {template_id!r}")
            raise TemplateNotFoundError(template_id) from None

    @staticmethod
    def all() -> Iterable[DiagnosisTemplate]:
        return TEMPLATE_LIBRARY.SPECS.values()


def validate_reference_data(medications: Dict[MedicationId, Medication],
                            templates: Dict[TemplateId, DiagnosisTemplate]) -> None:
    """
    Cross-checks the tables. Raises ReferenceDataError listing every
    problem found.
    """
    problems = []

    for key, med in medications.items():
        if med.id != key:
            problems.append(f"medication {key.value!r} stored under id {med.id!r}")
        if (med.min_dose_per_kg is not None and med.max_dose_per_kg is not None
                and med.min_dose_per_kg > med.max_dose_per_kg):
            problems.append(f"medication {key.value!r}: min dose/kg exceeds max dose/kg")

    for key, template in templates.items():
        if template.id != key.value:
            problems.append(f"template {key.value!r} stored under id {template.id!r}")
        if template.duration_days <= 0:
            problems.append(f"template {key.value!r}: non-positive duration")
        for med_id in template.medication_ids:
            if med_id not in medications:
                problems.append(f"template {key.value!r} references unknown medication {med_id!r}")

    if problems:
        raise ReferenceDataError("; ".join(problems))


validate_reference_data(MEDICATION_LIBRARY.SPECS, TEMPLATE_LIBRARY.SPECS)
