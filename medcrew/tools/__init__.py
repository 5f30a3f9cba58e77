"""Tools package for MedCrew AI services."""

from medcrew.tools.doctor_directory import (
    DOCTOR_DIRECTORY,
    get_doctor,
    map_position,
    search_doctors,
)

__all__ = [
    "DOCTOR_DIRECTORY",
    "get_doctor",
    "map_position",
    "search_doctors",
]
