"""Application-level state store.

One AppState lives for the lifetime of the process. Each slice has exactly
one writer service; views reach the store through the API dependency.
"""

from enum import Enum
from typing import Sequence

from medcrew.models.directory import Doctor
from medcrew.services.consultation_service import ConsultationService
from medcrew.services.insight_service import InsightService
from medcrew.services.medication_service import MedicationService
from medcrew.services.profile_service import ProfileService
from medcrew.services.scheduler_service import SchedulerService
from medcrew.services.symptom_service import SymptomCheckerService
from medcrew.tools.doctor_directory import DOCTOR_DIRECTORY
import logging

logger = logging.getLogger(__name__)


class View(str, Enum):
    SYMPTOM_CHECKER = "symptom-checker"
    SCHEDULER = "scheduler"
    PATIENT_PROFILE = "patient-profile"
    MEDICATION_MANAGER = "medication-manager"
    CONSULTATION_ANALYZER = "consultation-analyzer"
    HEALTH_INSIGHTS = "health-insights"


class AppState:
    """Lifted state shared by all views."""

    def __init__(self, directory: Sequence[Doctor] = DOCTOR_DIRECTORY):
        self.active_view = View.SYMPTOM_CHECKER
        self._pending_specialty = ""

        self.profile = ProfileService()
        self.scheduler = SchedulerService(self, directory)
        self.medications = MedicationService()
        self.consultations = ConsultationService()
        self.insights = InsightService()
        self.symptoms = SymptomCheckerService(self)

    def set_view(self, view: View) -> View:
        self.active_view = view
        if view == View.SCHEDULER:
            self.scheduler.open()
        return self.active_view

    def request_appointment(self, specialty: str) -> View:
        """Hand a specialty to the scheduler and switch to it."""
        logger.info(f"Appointment requested for specialty: {specialty}")
        self._pending_specialty = specialty
        return self.set_view(View.SCHEDULER)

    def take_pending_specialty(self) -> str:
        """Return the pending specialty once, then clear it."""
        specialty, self._pending_specialty = self._pending_specialty, ""
        return specialty
