"""Patient profile service."""

from medcrew.agents.document_agent import summarize_document
from medcrew.models.patient import ExtractedPatientProfile, PatientProfile
from medcrew.services.base import BusyFlag, require
import logging

logger = logging.getLogger(__name__)


class ProfileService:
    """Sole writer of the patient profile."""

    def __init__(self, profile: PatientProfile | None = None):
        self.profile = profile or PatientProfile()
        self.busy = BusyFlag("patient-profile")

    def update(self, **fields) -> PatientProfile:
        """
        Merge a partial update into the profile.

        Args:
            **fields: PatientProfile fields; None values are left untouched

        Returns:
            The updated profile (a new object; the previous one is replaced)
        """
        updates = {key: value for key, value in fields.items() if value is not None}
        unknown = set(updates) - set(PatientProfile.model_fields)
        if unknown:
            raise ValueError(f"Unknown profile fields: {sorted(unknown)}")
        self.profile = self.profile.model_copy(update=updates)
        return self.profile

    def apply_extracted(self, extracted: ExtractedPatientProfile | None) -> dict:
        """Merge the non-empty fields of an extracted profile; returns what changed."""
        if extracted is None:
            return {}
        updates = extracted.non_empty()
        if updates:
            logger.info(f"Updating profile from report: {sorted(updates)}")
            self.update(**updates)
        return updates

    async def summarize(self, text: str) -> PatientProfile:
        """Summarize pasted medical documents into medical_history_summary."""
        document = require(text, "Please paste medical history text to summarize.")
        with self.busy.hold():
            summary = await summarize_document(document)
        return self.update(medical_history_summary=summary)
