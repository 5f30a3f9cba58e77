"""Consultation analyzer service."""

from datetime import date
from typing import List, Optional

from medcrew.agents.document_agent import analyze_consultation_notes
from medcrew.models.patient import Consultation
from medcrew.services.base import (
    BusyFlag,
    InvalidInputError,
    next_record_id,
    require,
)
from medcrew.utils.parsing import is_image_mime, parse_data_url
import logging

logger = logging.getLogger(__name__)


class ConsultationService:
    """Sole writer of the consultation list (newest first)."""

    def __init__(self):
        self.consultations: List[Consultation] = []
        self.busy = BusyFlag("consultation-analyzer")

    async def analyze(
        self, doctor_name: str, data_url: str, filename: str
    ) -> Consultation:
        """
        Analyze an uploaded image of consultation notes.

        Raises:
            InvalidInputError: Missing doctor name, non-image file or bad data URL
        """
        doctor = require(
            doctor_name, "Please provide the doctor's name before uploading notes."
        )
        try:
            image = parse_data_url(data_url)
        except ValueError as e:
            raise InvalidInputError(str(e)) from e
        if not is_image_mime(image.mime_type):
            raise InvalidInputError("Please upload an image file (e.g., JPG, PNG).")

        with self.busy.hold():
            analysis = await analyze_consultation_notes(image)

        consultation = Consultation(
            id=next_record_id(),
            date=date.today().isoformat(),
            doctor_name=doctor,
            notes=f"Analyzed from uploaded image: {filename}",
            summary=analysis.summary,
            action_items=analysis.action_items,
        )
        self.consultations = [consultation, *self.consultations]
        logger.info(
            f"Added consultation with {doctor} ({len(analysis.action_items)} action items)"
        )
        return consultation

    def select(self, consultation_id: int) -> Optional[Consultation]:
        for consultation in self.consultations:
            if consultation.id == consultation_id:
                return consultation
        return None
