"""Conversation models and API request/response models."""

from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional, List

from medcrew.models.triage import GraphState, TriageDecision
from medcrew.models.directory import Appointment, Doctor, DoctorSearchFilters
from medcrew.models.patient import Consultation, Medication


class Sender(str, Enum):
    """Who authored a conversation turn."""

    PATIENT = "patient"
    ASSISTANT = "assistant"


class ActionKind(str, Enum):
    """Follow-up affordances offered under an assistant turn."""

    FIND_SPECIALIST = "find_specialist"
    OPEN_SCHEDULER = "open_scheduler"
    DISMISS = "dismiss"


class MessageAction(BaseModel):
    """Button attached to an assistant turn."""

    text: str
    style: str = "primary"  # primary | secondary
    kind: ActionKind
    specialty: Optional[str] = None


class ConversationTurn(BaseModel):
    """Individual turn in the symptom checker transcript."""

    sender: Sender
    text: str
    image: Optional[str] = Field(None, description="Data URL for image preview")
    actions: List[MessageAction] = Field(default_factory=list)


# ---------
# Requests
# ---------
class SymptomMessageRequest(BaseModel):
    """Patient message for the symptom checker."""

    message: str = Field(..., max_length=2000, description="Patient message")


class ImageUploadRequest(BaseModel):
    """Image file read client-side into a data URL."""

    data_url: str = Field(..., description="data:<mime>;base64,<payload>")
    filename: str = "upload"


class ConsultationUploadRequest(ImageUploadRequest):
    """Consultation notes image plus the treating doctor's name."""

    doctor_name: str = ""


class AppointmentRequest(BaseModel):
    """Book a slot with a directory doctor."""

    doctor_id: int
    time: str
    day: str


class SpecialtyRequest(BaseModel):
    specialty: str


class ProfileUpdateRequest(BaseModel):
    """Partial profile update; omitted fields are left untouched."""

    name: Optional[str] = None
    dob: Optional[str] = None
    blood_type: Optional[str] = None
    allergies: Optional[str] = None
    medical_history_summary: Optional[str] = None


class DocumentRequest(BaseModel):
    text: str = ""


class MedicationRequest(BaseModel):
    name: str = ""
    dosage: str = ""
    frequency: str = ""


class DiaryRequest(BaseModel):
    diary_entry: str = ""


# ---------
# Responses
# ---------
class SymptomCheckerResponse(BaseModel):
    """Transcript plus the state of the triage graph indicator."""

    messages: List[ConversationTurn]
    graph_state: GraphState
    last_graph_state: Optional[GraphState] = None
    is_busy: bool
    last_decision: Optional[TriageDecision] = None


class SchedulerResponse(BaseModel):
    """Scheduler view: filters, matching doctors, booked appointments."""

    filters: DoctorSearchFilters
    doctors: List[Doctor]
    appointments: List[Appointment]


class MedicationsResponse(BaseModel):
    medications: List[Medication]
    interaction_result: str = ""
    is_busy: bool = False


class ConsultationsResponse(BaseModel):
    consultations: List[Consultation]
    is_busy: bool = False


class InsightsResponse(BaseModel):
    insight: str = ""
    past_insights: List[str] = Field(default_factory=list)
    is_busy: bool = False


class TextResponse(BaseModel):
    text: str
