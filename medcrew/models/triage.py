"""Triage routing enums and decision model."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TriageRoute(str, Enum):
    """Router outcomes."""

    TRIAGE = "TRIAGE"  # Enough information, recommend a care level
    CLARIFY = "CLARIFY"  # Ask one more question


class CareLevel(str, Enum):
    """Care levels the recommender is asked to choose from."""

    SELF_CARE = "Self-care"
    TELEHEALTH = "Telehealth Consultation"
    URGENT_CARE = "Urgent Care"


class GraphState(str, Enum):
    """Progress indicator for the symptom checker view."""

    IDLE = "IDLE"
    ANALYZING = "ANALYZING"
    CLARIFYING = "CLARIFYING"
    RECOMMENDING = "RECOMMENDING"


class TriageDecision(BaseModel):
    """Outcome of one orchestrator step: Clarify(text) or Recommend(text, specialty)."""

    decision: TriageRoute
    text: str
    specialty: Optional[str] = None
    care_level: Optional[CareLevel] = Field(
        None, description="Care level detected in the text; informational only"
    )

    @classmethod
    def clarify(cls, text: str) -> "TriageDecision":
        return cls(decision=TriageRoute.CLARIFY, text=text)

    @classmethod
    def recommend(
        cls, text: str, specialty: Optional[str] = None
    ) -> "TriageDecision":
        return cls(
            decision=TriageRoute.TRIAGE,
            text=text,
            specialty=specialty,
            care_level=detect_care_level(text),
        )

    @property
    def is_recommendation(self) -> bool:
        return self.decision == TriageRoute.TRIAGE


def detect_care_level(text: str) -> Optional[CareLevel]:
    """Return the first care level named in the text, by position."""
    lowered = text.lower()
    found = [
        (lowered.find(level.value.lower()), level)
        for level in CareLevel
        if level.value.lower() in lowered
    ]
    if not found:
        return None
    return min(found, key=lambda item: item[0])[1]
