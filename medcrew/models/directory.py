"""Doctor directory and appointment models."""

from enum import Enum
from pydantic import BaseModel, Field
from typing import List


class AvailabilityDay(str, Enum):
    """Days the scheduler can search."""

    TODAY = "Today"
    TOMORROW = "Tomorrow"
    DAY_AFTER = "Day after tomorrow"


class Doctor(BaseModel):
    """Read-only directory entry."""

    id: int
    name: str
    specialty: str
    location: str
    availability: List[str] = Field(default_factory=list)  # time slots, e.g. "10:00 AM"
    is_available_today: bool = False
    is_available_tomorrow: bool = False
    is_available_day_after: bool = False
    is_accepting_new_patients: bool = False

    def is_available_on(self, day: str) -> bool:
        """Availability flag for a scheduler day; unknown days are never available."""
        if day == AvailabilityDay.TODAY.value:
            return self.is_available_today
        if day == AvailabilityDay.TOMORROW.value:
            return self.is_available_tomorrow
        if day == AvailabilityDay.DAY_AFTER.value:
            return self.is_available_day_after
        return False


class Appointment(BaseModel):
    """Booked slot."""

    id: int
    doctor: Doctor
    time: str
    day: str
    patient_name: str


class DoctorSearchFilters(BaseModel):
    """Scheduler filter inputs."""

    specialty: str = ""
    location: str = ""
    day: str = AvailabilityDay.TODAY.value
    accepting_new_patients: bool = False
