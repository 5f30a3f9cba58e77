"""Medication manager service."""

from typing import List

from medcrew.agents.drug_agent import check_drug_interactions
from medcrew.models.patient import Medication
from medcrew.services.base import BusyFlag, InvalidInputError, next_record_id


class MedicationService:
    """Sole writer of the medication list."""

    def __init__(self):
        self.medications: List[Medication] = []
        self.interaction_result = ""
        self.busy = BusyFlag("medication-manager")

    def add(self, name: str, dosage: str, frequency: str) -> Medication:
        if not (name.strip() and dosage.strip() and frequency.strip()):
            raise InvalidInputError("Please fill all medication fields.")
        medication = Medication(
            id=next_record_id(),
            name=name.strip(),
            dosage=dosage.strip(),
            frequency=frequency.strip(),
        )
        self.medications = [*self.medications, medication]
        return medication

    def remove(self, medication_id: int) -> bool:
        remaining = [med for med in self.medications if med.id != medication_id]
        removed = len(remaining) != len(self.medications)
        self.medications = remaining
        return removed

    async def check_interactions(self) -> str:
        if len(self.medications) < 2:
            raise InvalidInputError(
                "Please provide at least two medications to check for interactions."
            )
        with self.busy.hold():
            self.interaction_result = ""
            self.interaction_result = await check_drug_interactions(
                [med.name for med in self.medications]
            )
        return self.interaction_result
