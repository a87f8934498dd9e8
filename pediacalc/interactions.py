# interactions.py
import logging
from typing import Iterable, List, Sequence

from pediacalc.constants import InteractionSeverity
from pediacalc.models import Medication, MedicationInteraction

logger = logging.getLogger(__name__)

class InteractionChecker:
    """
    Pairwise drug-drug interaction screen over a prescription.

    Interactions may be authored on either medication's reference entry.
    When both sides declare one, both records are returned: downstream
    triage only relies on "at least one record", so they are not merged.
    """

    @staticmethod
    def check_interactions(medications: Sequence[Medication]) -> List[MedicationInteraction]:
        found = []

        # O(n^2) is fine: prescriptions hold a handful of drugs
        for i in range(len(medications)):
            for j in range(i + 1, len(medications)):
                med1 = medications[i]
                med2 = medications[j]

                for entry in med1.interactions:
                    if entry.with_medication_name == med2.name:
                        found.append(MedicationInteraction(
                            medication1=med1.name,
                            medication2=med2.name,
                            severity=entry.severity,
                            description=entry.description,
                        ))

                # Declared the other way round
                for entry in med2.interactions:
                    if entry.with_medication_name == med1.name:
                        found.append(MedicationInteraction(
                            medication1=med2.name,
                            medication2=med1.name,
                            severity=entry.severity,
                            description=entry.description,
                        ))

        if found:
            logger.debug(f"{len(found)} interaction record(s) across {len(medications)} medications")
        return found

    @staticmethod
    def has_severe_interaction(interactions: Iterable[MedicationInteraction]) -> bool:
        return any(i.severity == InteractionSeverity.SEVERE for i in interactions)

    @staticmethod
    def sort_by_severity(interactions: Iterable[MedicationInteraction]) -> List[MedicationInteraction]:
        """Most severe first; ties keep their discovery order."""
        return sorted(interactions, key=lambda i: i.severity.rank, reverse=True)

check_interactions = InteractionChecker.check_interactions
has_severe_interaction = InteractionChecker.has_severe_interaction
sort_by_severity = InteractionChecker.sort_by_severity
