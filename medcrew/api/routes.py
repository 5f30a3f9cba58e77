"""MedCrew AI API endpoints.

One endpoint group per view:
- Symptom Checker: triage conversation and report upload
- Scheduler: doctor search, booking, cancel, reschedule
- Patient Profile: profile edits and AI summary of medical documents
- Medication Manager: medication list and interaction check
- Consultation Analyzer: AI scribe for consultation notes
- Health Insights: tips from diary entries

All state is in memory and is lost on restart.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from medcrew.api.dependencies import get_app_state
from medcrew.models.directory import Appointment, Doctor, DoctorSearchFilters
from medcrew.models.messages import (
    AppointmentRequest,
    ConsultationUploadRequest,
    ConsultationsResponse,
    DiaryRequest,
    DocumentRequest,
    ImageUploadRequest,
    InsightsResponse,
    MedicationRequest,
    MedicationsResponse,
    ProfileUpdateRequest,
    SchedulerResponse,
    SpecialtyRequest,
    SymptomCheckerResponse,
    SymptomMessageRequest,
)
from medcrew.models.patient import Consultation, Medication, PatientProfile
from medcrew.services.app_state import AppState, View
from medcrew.tools.doctor_directory import map_pins
from typing import Dict, List
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/medcrew", tags=["MedCrew"])


# ==============================================================================
# NAVIGATION
# ==============================================================================


@router.get("/view")
async def get_active_view(store: AppState = Depends(get_app_state)) -> Dict[str, str]:
    return {"active_view": store.active_view.value}


@router.post("/view/{view}")
async def set_active_view(
    view: View, store: AppState = Depends(get_app_state)
) -> Dict[str, str]:
    return {"active_view": store.set_view(view).value}


@router.post("/actions/request-appointment", response_model=SchedulerResponse)
async def request_appointment(
    request: SpecialtyRequest, store: AppState = Depends(get_app_state)
):
    """Follow a "Find a <specialty>" action: switch to the scheduler, pre-filtered."""
    store.request_appointment(request.specialty)
    return _scheduler_response(store)


# ==============================================================================
# SYMPTOM CHECKER
# ==============================================================================


def _symptoms_response(store: AppState) -> SymptomCheckerResponse:
    service = store.symptoms
    return SymptomCheckerResponse(
        messages=service.messages,
        graph_state=service.graph_state,
        last_graph_state=service.last_graph_state,
        is_busy=service.busy.is_busy,
        last_decision=service.last_decision,
    )


@router.get("/symptoms", response_model=SymptomCheckerResponse)
async def get_symptom_session(store: AppState = Depends(get_app_state)):
    return _symptoms_response(store)


@router.post("/symptoms/message", response_model=SymptomCheckerResponse)
async def send_symptom_message(
    request: SymptomMessageRequest, store: AppState = Depends(get_app_state)
):
    """
    Send a patient message. The triage graph runs one step: it either asks
    one clarifying question or returns a care recommendation.
    """
    await store.symptoms.send(request.message)
    return _symptoms_response(store)


@router.post("/symptoms/report", response_model=SymptomCheckerResponse)
async def upload_medical_report(
    request: ImageUploadRequest, store: AppState = Depends(get_app_state)
):
    await store.symptoms.upload_report(request.data_url, request.filename)
    return _symptoms_response(store)


@router.post("/symptoms/reset", response_model=SymptomCheckerResponse)
async def reset_symptom_session(store: AppState = Depends(get_app_state)):
    store.symptoms.reset()
    return _symptoms_response(store)


# ==============================================================================
# SCHEDULER
# ==============================================================================


def _scheduler_response(store: AppState) -> SchedulerResponse:
    return SchedulerResponse(
        filters=store.scheduler.filters,
        doctors=store.scheduler.results,
        appointments=store.scheduler.appointments,
    )


@router.get("/doctors", response_model=List[Doctor])
async def list_doctors(store: AppState = Depends(get_app_state)):
    return store.scheduler.directory


@router.get("/doctors/map")
async def doctor_map(store: AppState = Depends(get_app_state)) -> List[Dict]:
    return map_pins(store.scheduler.results)


@router.get("/scheduler", response_model=SchedulerResponse)
async def get_scheduler(store: AppState = Depends(get_app_state)):
    return _scheduler_response(store)


@router.post("/doctors/search", response_model=SchedulerResponse)
async def search_doctors(
    filters: DoctorSearchFilters, store: AppState = Depends(get_app_state)
):
    store.scheduler.search(filters)
    return _scheduler_response(store)


@router.post(
    "/appointments",
    response_model=Appointment,
    status_code=status.HTTP_201_CREATED,
)
async def book_appointment(
    request: AppointmentRequest, store: AppState = Depends(get_app_state)
):
    return store.scheduler.book(request.doctor_id, request.time, request.day)


@router.delete("/appointments/{appointment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_appointment(
    appointment_id: int, store: AppState = Depends(get_app_state)
):
    if not store.scheduler.cancel(appointment_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Appointment not found"
        )


@router.post("/appointments/{appointment_id}/reschedule", response_model=SchedulerResponse)
async def reschedule_appointment(
    appointment_id: int, store: AppState = Depends(get_app_state)
):
    if store.scheduler.reschedule(appointment_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Appointment not found"
        )
    return _scheduler_response(store)


# ==============================================================================
# PATIENT PROFILE
# ==============================================================================


@router.get("/profile", response_model=PatientProfile)
async def get_profile(store: AppState = Depends(get_app_state)):
    return store.profile.profile


@router.patch("/profile", response_model=PatientProfile)
async def update_profile(
    request: ProfileUpdateRequest, store: AppState = Depends(get_app_state)
):
    return store.profile.update(**request.model_dump(exclude_unset=True))


@router.post("/profile/summarize", response_model=PatientProfile)
async def summarize_medical_documents(
    request: DocumentRequest, store: AppState = Depends(get_app_state)
):
    return await store.profile.summarize(request.text)


# ==============================================================================
# MEDICATION MANAGER
# ==============================================================================


def _medications_response(store: AppState) -> MedicationsResponse:
    service = store.medications
    return MedicationsResponse(
        medications=service.medications,
        interaction_result=service.interaction_result,
        is_busy=service.busy.is_busy,
    )


@router.get("/medications", response_model=MedicationsResponse)
async def list_medications(store: AppState = Depends(get_app_state)):
    return _medications_response(store)


@router.post(
    "/medications", response_model=Medication, status_code=status.HTTP_201_CREATED
)
async def add_medication(
    request: MedicationRequest, store: AppState = Depends(get_app_state)
):
    return store.medications.add(request.name, request.dosage, request.frequency)


@router.delete("/medications/{medication_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_medication(
    medication_id: int, store: AppState = Depends(get_app_state)
):
    if not store.medications.remove(medication_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Medication not found"
        )


@router.post("/medications/interactions", response_model=MedicationsResponse)
async def check_medication_interactions(store: AppState = Depends(get_app_state)):
    await store.medications.check_interactions()
    return _medications_response(store)


# ==============================================================================
# CONSULTATION ANALYZER
# ==============================================================================


@router.get("/consultations", response_model=ConsultationsResponse)
async def list_consultations(store: AppState = Depends(get_app_state)):
    return ConsultationsResponse(
        consultations=store.consultations.consultations,
        is_busy=store.consultations.busy.is_busy,
    )


@router.post(
    "/consultations",
    response_model=Consultation,
    status_code=status.HTTP_201_CREATED,
)
async def analyze_consultation(
    request: ConsultationUploadRequest, store: AppState = Depends(get_app_state)
):
    return await store.consultations.analyze(
        request.doctor_name, request.data_url, request.filename
    )


@router.get("/consultations/{consultation_id}", response_model=Consultation)
async def get_consultation(
    consultation_id: int, store: AppState = Depends(get_app_state)
):
    consultation = store.consultations.select(consultation_id)
    if consultation is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Consultation not found"
        )
    return consultation


# ==============================================================================
# HEALTH INSIGHTS
# ==============================================================================


def _insights_response(store: AppState) -> InsightsResponse:
    service = store.insights
    return InsightsResponse(
        insight=service.insight,
        past_insights=service.past_insights,
        is_busy=service.busy.is_busy,
    )


@router.get("/insights", response_model=InsightsResponse)
async def get_insights(store: AppState = Depends(get_app_state)):
    return _insights_response(store)


@router.post("/insights", response_model=InsightsResponse)
async def generate_insight(
    request: DiaryRequest, store: AppState = Depends(get_app_state)
):
    await store.insights.generate(request.diary_entry)
    return _insights_response(store)
