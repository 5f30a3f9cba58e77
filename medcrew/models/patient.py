"""Patient-side records and structured AI extraction schemas."""

from pydantic import BaseModel, Field
from typing import List, Optional


class PatientProfile(BaseModel):
    """Profile shown on the patient profile view."""

    name: str = "Alex Doe"
    dob: str = "1990-05-15"
    blood_type: str = "O+"
    allergies: str = "Peanuts"
    medical_history_summary: str = ""


class Medication(BaseModel):
    id: int
    name: str
    dosage: str
    frequency: str


class Consultation(BaseModel):
    """Analyzed consultation notes."""

    id: int
    date: str
    doctor_name: str
    notes: str
    summary: str
    action_items: List[str] = Field(default_factory=list)


class ImagePayload(BaseModel):
    """Inline image sent to the vision model."""

    mime_type: str
    data: str  # base64, no data-URL prefix

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


# ---------------------------------------------------------------------------
# Response schemas for structured generation. Field descriptions are
# generation hints only and are not validated beyond type.
# ---------------------------------------------------------------------------
class ExtractedPatientProfile(BaseModel):
    name: Optional[str] = Field(
        None,
        description="Patient's Full Name (if available). If not found, return an empty string.",
    )
    dob: Optional[str] = Field(
        None,
        description="Patient's Date of Birth in YYYY-MM-DD format (if available). If not found, return an empty string.",
    )
    blood_type: Optional[str] = Field(
        None,
        description="Patient's Blood Type (if available). If not found, return an empty string.",
    )
    allergies: Optional[str] = Field(
        None,
        description="A comma-separated list of patient's allergies (if available). If not found, return an empty string.",
    )

    def non_empty(self) -> dict:
        """Fields that carry a value, ready to merge into a PatientProfile."""
        return {key: value for key, value in self.model_dump().items() if value}


class ExtractedReportData(BaseModel):
    summary: str = Field(
        ...,
        description=(
            "A concise summary of the report including Doctor's Name, Key Symptoms/Diagnosis, "
            "Prescribed Medications, and Follow-up recommendations. Use bullet points with \\n for newlines."
        ),
    )
    specialty: str = Field(
        ...,
        description="The single most relevant medical specialty for a follow-up (e.g., Cardiology, Dermatology).",
    )
    book_appointment: bool = Field(
        ...,
        description="Set to true if a follow-up is recommended or makes sense based on the report.",
    )
    patient_profile: Optional[ExtractedPatientProfile] = Field(
        default_factory=ExtractedPatientProfile
    )


class ConsultationAnalysis(BaseModel):
    summary: str = Field(
        ..., description="A concise summary of the consultation from the notes."
    )
    action_items: List[str] = Field(
        default_factory=list,
        description="A list of patient action items extracted from the notes. Return an empty array if none are found.",
    )
