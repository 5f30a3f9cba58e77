"""Document Agent.

Single-call extractors for uploaded medical reports, consultation notes and
pasted medical history. Each returns a fixed fallback instead of raising.
"""

import logging

from medcrew.agents.prompts import (
    CONSULTATION_NOTES_PROMPT,
    DOCUMENT_SUMMARY_PROMPT,
    REPORT_EXTRACTION_PROMPT,
)
from medcrew.config.llm_config import get_assistant_model, get_vision_model
from medcrew.models.patient import (
    ConsultationAnalysis,
    ExtractedPatientProfile,
    ExtractedReportData,
    ImagePayload,
)
from medcrew.utils.llm_helpers import generate_structured, generate_text

logger = logging.getLogger(__name__)

REPORT_FALLBACK_SUMMARY = (
    "Sorry, I couldn't read the medical report. Please ensure it's a clear image."
)
NOTES_FALLBACK_SUMMARY = "Could not analyze the consultation notes from the image."
SUMMARY_FALLBACK = "Could not summarize document."


async def extract_info_from_report(image: ImagePayload) -> ExtractedReportData:
    """
    Extract a summary, follow-up specialty and profile fields from a report image.

    Args:
        image: Report image (mime type + base64 data)

    Returns:
        ExtractedReportData; the fallback object if the call or parse fails
    """
    logger.info(f"📄 Extracting report data ({image.mime_type})")
    fallback = ExtractedReportData(
        summary=REPORT_FALLBACK_SUMMARY,
        specialty="",
        book_appointment=False,
        patient_profile=ExtractedPatientProfile(),
    )
    return await generate_structured(
        get_vision_model(),
        REPORT_EXTRACTION_PROMPT,
        ExtractedReportData,
        fallback,
        image=image,
        caller="extract_info_from_report",
    )


async def analyze_consultation_notes(image: ImagePayload) -> ConsultationAnalysis:
    """Summarize consultation notes and pull out patient action items."""
    logger.info(f"📝 Analyzing consultation notes ({image.mime_type})")
    fallback = ConsultationAnalysis(summary=NOTES_FALLBACK_SUMMARY, action_items=[])
    return await generate_structured(
        get_vision_model(),
        CONSULTATION_NOTES_PROMPT,
        ConsultationAnalysis,
        fallback,
        image=image,
        caller="analyze_consultation_notes",
    )


async def summarize_document(text: str) -> str:
    """Bullet-point summary of pasted medical history."""
    return await generate_text(
        get_assistant_model(),
        DOCUMENT_SUMMARY_PROMPT.format(text=text),
        fallback_message=SUMMARY_FALLBACK,
        caller="summarize_document",
    )
