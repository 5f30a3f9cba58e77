"""Doctor directory and search tool.

The directory is static seed data for the demo; it is never mutated. In a
real deployment it would come from a provider registry.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from medcrew.models.directory import Doctor, DoctorSearchFilters


_MORNING = ["09:00 AM", "10:00 AM", "11:30 AM"]
_AFTERNOON = ["02:00 PM", "03:30 PM", "05:00 PM"]

DOCTOR_DIRECTORY: List[Doctor] = [
    Doctor(
        id=1,
        name="Dr. Anjali Naik",
        specialty="Cardiology",
        location="Panjim",
        availability=_MORNING,
        is_available_today=True,
        is_available_tomorrow=True,
        is_available_day_after=False,
        is_accepting_new_patients=True,
    ),
    Doctor(
        id=2,
        name="Dr. Rohan Kamat",
        specialty="Interventional Cardiology",
        location="Margao",
        availability=_AFTERNOON,
        is_available_today=True,
        is_available_tomorrow=False,
        is_available_day_after=True,
        is_accepting_new_patients=False,
    ),
    Doctor(
        id=3,
        name="Dr. Priya Sardesai",
        specialty="Dermatology",
        location="Panjim",
        availability=["10:30 AM", "12:00 PM", "04:00 PM"],
        is_available_today=True,
        is_available_tomorrow=True,
        is_available_day_after=True,
        is_accepting_new_patients=True,
    ),
    Doctor(
        id=4,
        name="Dr. Vikram Desai",
        specialty="General Physician",
        location="Mapusa",
        availability=_MORNING + _AFTERNOON,
        is_available_today=True,
        is_available_tomorrow=True,
        is_available_day_after=True,
        is_accepting_new_patients=True,
    ),
    Doctor(
        id=5,
        name="Dr. Sneha Fernandes",
        specialty="Pediatrics",
        location="Vasco da Gama",
        availability=["09:30 AM", "01:00 PM"],
        is_available_today=False,
        is_available_tomorrow=True,
        is_available_day_after=True,
        is_accepting_new_patients=True,
    ),
    Doctor(
        id=6,
        name="Dr. Arjun Prabhu",
        specialty="Neurology",
        location="Panjim",
        availability=["11:00 AM", "03:00 PM"],
        is_available_today=False,
        is_available_tomorrow=False,
        is_available_day_after=True,
        is_accepting_new_patients=False,
    ),
    Doctor(
        id=7,
        name="Dr. Meera Kulkarni",
        specialty="Pediatric Cardiology",
        location="Ponda",
        availability=["10:00 AM", "02:30 PM"],
        is_available_today=True,
        is_available_tomorrow=False,
        is_available_day_after=False,
        is_accepting_new_patients=True,
    ),
    Doctor(
        id=8,
        name="Dr. Carlos D'Souza",
        specialty="Orthopedics",
        location="Margao",
        availability=_AFTERNOON,
        is_available_today=True,
        is_available_tomorrow=True,
        is_available_day_after=False,
        is_accepting_new_patients=False,
    ),
    Doctor(
        id=9,
        name="Dr. Farah Shaikh",
        specialty="Gastroenterology",
        location="Panjim",
        availability=["09:00 AM", "12:30 PM"],
        is_available_today=False,
        is_available_tomorrow=True,
        is_available_day_after=True,
        is_accepting_new_patients=True,
    ),
    Doctor(
        id=10,
        name="Dr. Nikhil Gaonkar",
        specialty="ENT",
        location="Mapusa",
        availability=["11:00 AM", "04:30 PM"],
        is_available_today=True,
        is_available_tomorrow=False,
        is_available_day_after=True,
        is_accepting_new_patients=True,
    ),
]


def matches_filters(doctor: Doctor, filters: DoctorSearchFilters) -> bool:
    """Specialty AND location (case-insensitive substring) AND day AND acceptance."""
    specialty = filters.specialty.strip().lower()
    location = filters.location.strip().lower()
    return (
        (not specialty or specialty in doctor.specialty.lower())
        and (not location or location in doctor.location.lower())
        and doctor.is_available_on(filters.day)
        and (not filters.accepting_new_patients or doctor.is_accepting_new_patients)
    )


def search_doctors(
    filters: DoctorSearchFilters,
    directory: Sequence[Doctor] = DOCTOR_DIRECTORY,
) -> List[Doctor]:
    """Filter the directory, keeping directory order."""
    return [doctor for doctor in directory if matches_filters(doctor, filters)]


def get_doctor(
    doctor_id: int, directory: Sequence[Doctor] = DOCTOR_DIRECTORY
) -> Optional[Doctor]:
    for doctor in directory:
        if doctor.id == doctor_id:
            return doctor
    return None


def map_position(doctor_id: int) -> Tuple[int, int]:
    """Deterministic (top %, left %) pin position for a doctor on the directory map."""
    left = (doctor_id * 17) % 90 + 5
    top = (doctor_id * 31) % 90 + 5
    return top, left


def map_pins(doctors: Sequence[Doctor]) -> List[Dict]:
    """Map markers for a result set."""
    pins = []
    for doctor in doctors:
        top, left = map_position(doctor.id)
        pins.append(
            {
                "doctor_id": doctor.id,
                "title": f"{doctor.name} - {doctor.location}",
                "top": f"{top}%",
                "left": f"{left}%",
            }
        )
    return pins
