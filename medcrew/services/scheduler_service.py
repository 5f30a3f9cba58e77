"""Appointment scheduling service."""

from typing import TYPE_CHECKING, List, Optional, Sequence

from medcrew.models.directory import Appointment, Doctor, DoctorSearchFilters
from medcrew.services.base import InvalidInputError, next_record_id
from medcrew.tools.doctor_directory import DOCTOR_DIRECTORY, get_doctor, search_doctors
import logging

if TYPE_CHECKING:
    from medcrew.services.app_state import AppState

logger = logging.getLogger(__name__)


class SchedulerService:
    """Sole writer of the appointment list and the scheduler's search filters."""

    def __init__(
        self, state: "AppState", directory: Sequence[Doctor] = DOCTOR_DIRECTORY
    ):
        self._state = state
        self.directory = list(directory)
        self.filters = DoctorSearchFilters()
        self.appointments: List[Appointment] = []

    @property
    def results(self) -> List[Doctor]:
        """Doctors matching the current filters; recomputed on every read."""
        return search_doctors(self.filters, self.directory)

    def open(self) -> List[Doctor]:
        """Enter the scheduler view, consuming any specialty handed over by another view."""
        specialty = self._state.take_pending_specialty()
        if specialty:
            logger.info(f"Seeding scheduler search with specialty: {specialty}")
            self.filters = self.filters.model_copy(update={"specialty": specialty})
        return self.results

    def search(self, filters: DoctorSearchFilters) -> List[Doctor]:
        self.filters = filters
        return self.results

    def book(self, doctor_id: int, time: str, day: str) -> Appointment:
        """
        Book a slot and keep the list ordered by id.

        Raises:
            InvalidInputError: Unknown doctor or a time outside the doctor's slots
        """
        doctor = get_doctor(doctor_id, self.directory)
        if doctor is None:
            raise InvalidInputError(f"Unknown doctor id {doctor_id}")
        if time not in doctor.availability:
            raise InvalidInputError(f"{doctor.name} has no slot at {time}")

        appointment = Appointment(
            id=next_record_id(),
            doctor=doctor,
            time=time,
            day=day,
            patient_name=self._state.profile.profile.name,
        )
        self.appointments = sorted(
            [*self.appointments, appointment], key=lambda app: app.id
        )
        logger.info(f"Appointment booked with {doctor.name} for {day} at {time}")
        return appointment

    def get(self, appointment_id: int) -> Optional[Appointment]:
        for appointment in self.appointments:
            if appointment.id == appointment_id:
                return appointment
        return None

    def cancel(self, appointment_id: int) -> bool:
        """Remove an appointment by id; unknown ids are a no-op."""
        remaining = [app for app in self.appointments if app.id != appointment_id]
        cancelled = len(remaining) != len(self.appointments)
        self.appointments = remaining
        if cancelled:
            logger.info(f"Cancelled appointment {appointment_id}")
        return cancelled

    def reschedule(self, appointment_id: int) -> Optional[DoctorSearchFilters]:
        """
        Cancel an appointment and re-seed the search with its doctor's
        specialty and location so a new slot can be picked.

        Returns:
            The new filters, or None if the appointment does not exist
        """
        appointment = self.get(appointment_id)
        if appointment is None:
            return None

        self.filters = self.filters.model_copy(
            update={
                "specialty": appointment.doctor.specialty,
                "location": appointment.doctor.location,
            }
        )
        self.cancel(appointment_id)
        return self.filters
