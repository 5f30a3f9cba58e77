from __future__ import annotations

from medcrew.models.directory import Doctor, DoctorSearchFilters
from medcrew.tools.doctor_directory import (
    DOCTOR_DIRECTORY,
    get_doctor,
    map_pins,
    map_position,
    search_doctors,
)


def _ids(doctors):
    return {doctor.id for doctor in doctors}


def test_specialty_search_ignores_location_and_acceptance_when_unset():
    filters = DoctorSearchFilters(
        specialty="cardio", location="", day="Today", accepting_new_patients=False
    )

    expected = [
        doctor
        for doctor in DOCTOR_DIRECTORY
        if doctor.is_available_today and "cardio" in doctor.specialty.lower()
    ]

    results = search_doctors(filters)
    assert results == expected
    assert _ids(results) == {1, 2, 7}
    assert any(not doctor.is_accepting_new_patients for doctor in results)


def test_accepting_new_patients_filter():
    filters = DoctorSearchFilters(specialty="Cardio", day="Today", accepting_new_patients=True)

    assert _ids(search_doctors(filters)) == {1, 7}


def test_location_filter_is_case_insensitive_substring():
    filters = DoctorSearchFilters(location="panj", day="Today")

    assert _ids(search_doctors(filters)) == {1, 3}


def test_day_filter_uses_matching_flag():
    tomorrow = search_doctors(DoctorSearchFilters(day="Tomorrow"))
    day_after = search_doctors(DoctorSearchFilters(day="Day after tomorrow"))

    assert all(doctor.is_available_tomorrow for doctor in tomorrow)
    assert all(doctor.is_available_day_after for doctor in day_after)
    assert 6 in _ids(day_after) and 6 not in _ids(tomorrow)


def test_unknown_day_matches_nobody():
    assert search_doctors(DoctorSearchFilters(day="Next week")) == []


def test_custom_directory():
    directory = [
        Doctor(id=42, name="Dr. Test", specialty="Oncology", location="Pune", is_available_today=True)
    ]

    assert _ids(search_doctors(DoctorSearchFilters(specialty="onco"), directory)) == {42}
    assert get_doctor(42, directory).name == "Dr. Test"
    assert get_doctor(1, directory) is None


def test_map_position_is_deterministic():
    assert map_position(1) == (36, 22)
    assert map_position(1) == map_position(1)

    pin = map_pins([get_doctor(3)])[0]
    top, left = map_position(3)
    assert pin == {
        "doctor_id": 3,
        "title": "Dr. Priya Sardesai - Panjim",
        "top": f"{top}%",
        "left": f"{left}%",
    }
