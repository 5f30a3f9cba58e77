"""MedCrew AI healthcare assistant service."""
